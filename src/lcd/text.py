"""Title / artist text layout for the LCD strip."""

import html
import unicodedata
from dataclasses import dataclass

from lcd.layout import (
    ARTIST_FONT_SIZE,
    ARTIST_MAX_CHARS,
    ARTIST_Y,
    TEXT,
    TEXT_DIM,
    TEXT_X,
    TITLE_FONT_SIZE,
    TITLE_MAX_CHARS,
    TITLE_Y,
)

UNKNOWN_TRACK = "Unknown Track"
UNKNOWN_ARTIST = "Unknown Artist"
ELLIPSIS = "..."


@dataclass(frozen=True)
class TextPrimitive:
    """One line of text anchored at its left baseline."""

    text: str
    x: int
    y: int
    font_size: int
    color: tuple
    style: str

    @property
    def markup(self) -> str:
        """Text escaped for embedding in SVG/HTML."""
        return html.escape(self.text, quote=True)

    def to_svg(self) -> str:
        r, g, b = self.color
        return (
            f'<text x="{self.x}" y="{self.y}" class="{self.style}" '
            f'font-size="{self.font_size}" fill="#{r:02x}{g:02x}{b:02x}">'
            f"{self.markup}</text>"
        )


def single_line(value) -> str:
    """Collapse control characters and whitespace runs into single spaces."""
    text = "".join(" " if unicodedata.category(ch) == "Cc" else ch for ch in str(value))
    return " ".join(text.split())


def truncate(text: str, max_chars: int) -> str:
    """Cut text to max_chars, ending in an ellipsis when shortened."""
    if len(text) <= max_chars:
        return text
    if max_chars <= len(ELLIPSIS):
        return ELLIPSIS[:max_chars]
    return text[: max_chars - len(ELLIPSIS)] + ELLIPSIS


def format_artists(artists, default: str = UNKNOWN_ARTIST) -> str:
    if isinstance(artists, str):
        artists = [artists]
    names = [single_line(a) for a in (artists or ()) if a]
    names = [n for n in names if n]
    return ", ".join(names) if names else default


def layout_text(
    title,
    artists,
    max_title_chars: int = TITLE_MAX_CHARS,
    max_artist_chars: int = ARTIST_MAX_CHARS,
) -> tuple[TextPrimitive, TextPrimitive]:
    """Build the title and artist lines for the text column."""
    title_text = single_line(title) if title else ""
    title_text = title_text or UNKNOWN_TRACK
    artist_text = format_artists(artists)

    return (
        TextPrimitive(
            text=truncate(title_text, max_title_chars),
            x=TEXT_X,
            y=TITLE_Y,
            font_size=TITLE_FONT_SIZE,
            color=TEXT,
            style="title",
        ),
        TextPrimitive(
            text=truncate(artist_text, max_artist_chars),
            x=TEXT_X,
            y=ARTIST_Y,
            font_size=ARTIST_FONT_SIZE,
            color=TEXT_DIM,
            style="artist",
        ),
    )
