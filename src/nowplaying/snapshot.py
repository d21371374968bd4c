"""Immutable now-playing snapshot.

Media-session events are plain mappings whose shape depends on the
player; TrackSnapshot normalizes them once so the renderer works on a
stable copy.
"""

from collections.abc import Mapping
from dataclasses import dataclass


def _number(value) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if result != result:  # NaN
        return None
    return result


def _artists(value) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    return tuple(str(a) for a in value if a is not None and str(a).strip())


@dataclass(frozen=True)
class TrackSnapshot:
    title: str | None = None
    artists: tuple[str, ...] = ()
    album: str | None = None
    artwork: bytes | str | None = None
    duration: float | None = None
    position: float | None = None
    is_playing: bool = False

    @classmethod
    def from_event(cls, event: Mapping) -> "TrackSnapshot":
        """Build a snapshot from a media-session event mapping.

        Accepts the session's camelCase keys (trackName, isPlaying,
        thumbnail) as well as the field names used here.
        """
        def pick(*keys):
            for key in keys:
                if key in event and event[key] is not None:
                    return event[key]
            return None

        artwork = pick("artwork", "thumbnail")
        if isinstance(artwork, (bytearray, memoryview)):
            artwork = bytes(artwork)

        title = pick("title", "trackName", "track_name")
        album = pick("album")
        return cls(
            title=str(title) if title is not None else None,
            artists=_artists(pick("artists", "artist")),
            album=str(album) if album is not None else None,
            artwork=artwork,
            duration=_number(pick("duration", "durationSeconds")),
            position=_number(pick("position", "positionSeconds")),
            is_playing=bool(pick("is_playing", "isPlaying")),
        )

    @classmethod
    def coerce(cls, value) -> "TrackSnapshot":
        """Return value as a snapshot, copying mappings."""
        if isinstance(value, cls):
            return value
        if value is None:
            return cls()
        if isinstance(value, Mapping):
            return cls.from_event(dict(value))
        raise TypeError(f"cannot build a TrackSnapshot from {type(value).__name__}")

    @property
    def artist_line(self) -> str:
        return ", ".join(self.artists)
