"""Playback progress bar geometry."""

from dataclasses import dataclass

from lcd.layout import BAR_FILL, BAR_HEIGHT, BAR_RADIUS, BAR_TRACK, BAR_WIDTH, BAR_X, BAR_Y


@dataclass(frozen=True)
class ProgressBar:
    """Rounded background track plus an optional rounded fill."""

    x: int
    y: int
    width: int
    fill: int  # 0 means no fill shape at all
    height: int = BAR_HEIGHT
    radius: int = BAR_RADIUS
    track_color: tuple = BAR_TRACK
    fill_color: tuple = BAR_FILL

    @property
    def track_box(self) -> tuple[int, int, int, int]:
        return (self.x, self.y, self.x + self.width - 1, self.y + self.height - 1)

    @property
    def fill_box(self) -> tuple[int, int, int, int] | None:
        if self.fill <= 0:
            return None
        return (self.x, self.y, self.x + self.fill - 1, self.y + self.height - 1)


def fill_width(duration, position, bar_width: int) -> int:
    """Pixels of fill for position/duration, clamped to [0, bar_width]."""
    try:
        duration = float(duration or 0)
        position = float(position or 0)
    except (TypeError, ValueError):
        return 0
    if duration <= 0 or duration != duration:
        return 0
    ratio = position / duration
    if ratio != ratio:
        return 0
    ratio = max(0.0, min(1.0, ratio))
    return round(bar_width * ratio)


def build_progress_bar(
    duration, position, bar_width: int = BAR_WIDTH, x: int = BAR_X, y: int = BAR_Y
) -> ProgressBar:
    """Progress bar for the given track timing; no duration means no fill."""
    return ProgressBar(x=x, y=y, width=bar_width, fill=fill_width(duration, position, bar_width))
