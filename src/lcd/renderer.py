"""Now-playing renderer for Stream Deck + dial LCDs.

Three entry points, each returning a PNG data URL for one dial:

  render()           track metadata, artwork and progress
  render_idle()      "No track playing" screen
  render_fallback()  bare glyph, used when the pipeline itself fails

render_key_image() additionally scales artwork for keypad keys.

None of them raise. The renderer keeps no per-call state, so the left
and right dial can be rendered concurrently from the same snapshot.
"""

import logging

from lcd.artwork import decode_and_square, idle_artwork, missing_artwork
from lcd.compositor import CanvasBackend, PillowBackend, to_data_url
from lcd.layout import (
    ARTIST_FONT_SIZE,
    ARTIST_Y,
    KEY_IMAGE_SIZE,
    TEXT,
    TEXT_DIM,
    TEXT_X,
    TITLE_FONT_SIZE,
    TITLE_Y,
    Position,
)
from lcd.progress import build_progress_bar
from lcd.text import TextPrimitive, layout_text
from nowplaying.snapshot import TrackSnapshot

log = logging.getLogger("nowplaying.lcd.renderer")

IDLE_TITLE = "No track playing"
IDLE_SUBTITLE = "Start playing music"


class NowPlayingRenderer:
    """Stateless facade over decode, layout, composition and encoding."""

    def __init__(self, backend: CanvasBackend | None = None, font_path: str | None = None):
        self._backend = backend or PillowBackend(font_path)

    def render(self, snapshot, position=Position.LEFT) -> str:
        """Render the now-playing composition for one dial."""
        position = Position.parse(position)
        try:
            snap = TrackSnapshot.coerce(snapshot)
            art = decode_and_square(snap.artwork)
            if art is None:
                art = missing_artwork()
            texts = layout_text(snap.title, snap.artists)
            bar = build_progress_bar(snap.duration, snap.position)
            return self._finish(art, texts, bar, position)
        except Exception:
            log.exception("Error rendering LCD image (%s)", position.value)
            return self.render_fallback(position)

    def render_idle(self, position=Position.LEFT) -> str:
        """Render the idle composition; uses no track data at all."""
        position = Position.parse(position)
        try:
            texts = (
                TextPrimitive(IDLE_TITLE, TEXT_X, TITLE_Y, TITLE_FONT_SIZE, TEXT, "title"),
                TextPrimitive(IDLE_SUBTITLE, TEXT_X, ARTIST_Y, ARTIST_FONT_SIZE, TEXT_DIM, "artist"),
            )
            bar = build_progress_bar(None, None)
            return self._finish(idle_artwork(), texts, bar, position)
        except Exception:
            log.exception("Error rendering idle LCD image (%s)", position.value)
            return self.render_fallback(position)

    def render_fallback(self, position=Position.LEFT) -> str:
        """Minimal single-dial image; never touches artwork or snapshots."""
        position = Position.parse(position)
        return to_data_url(self._backend.encode(self._backend.fallback(position)))

    def render_key_image(self, snapshot) -> str | None:
        """Artwork scaled for a keypad key, or None when there is none."""
        try:
            snap = TrackSnapshot.coerce(snapshot)
            art = decode_and_square(snap.artwork, KEY_IMAGE_SIZE)
            if art is None:
                return None
            return to_data_url(self._backend.encode(art))
        except Exception:
            log.exception("Error rendering key image")
            return None

    def _finish(self, art, texts, bar, position: Position) -> str:
        canvas = self._backend.compose(art, texts, bar)
        piece = self._backend.extract(canvas, position)
        return to_data_url(self._backend.encode(piece))
