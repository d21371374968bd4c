"""LCD canvas composition.

Builds the full 400x100 two-dial canvas once and slices out the half a
dial asked for, so both dials stay pixel-aligned even though they are
updated by separate calls.
"""

import base64
import io
import logging

from PIL import Image, ImageDraw, ImageFont

from lcd.layout import (
    ARTIST_FONT_SIZE,
    ARTWORK_SIZE,
    BG,
    DEFAULT_FONT_PATH,
    DIAL_WIDTH,
    FALLBACK_GLYPH,
    FULL_WIDTH,
    HEIGHT,
    TITLE_FONT_SIZE,
    Position,
)
from lcd.progress import ProgressBar
from lcd.text import TextPrimitive

log = logging.getLogger("nowplaying.lcd.compositor")

FALLBACK_GLYPH_SIZE = 40
FALLBACK_LABEL_SIZE = 14


def to_data_url(png: bytes) -> str:
    """Wrap PNG bytes as an inline data URL accepted by setFeedback."""
    return "data:image/png;base64," + base64.b64encode(png).decode("ascii")


class CanvasBackend:
    """Raster operations the renderer needs from an imaging library."""

    def compose(
        self,
        art: Image.Image,
        texts: tuple[TextPrimitive, ...],
        bar: ProgressBar,
    ) -> Image.Image:
        """Return the full-width canvas with art, text and bar placed."""
        raise NotImplementedError

    def extract(self, canvas: Image.Image, position: Position) -> Image.Image:
        """Return the dial-sized slice of canvas for position."""
        raise NotImplementedError

    def encode(self, image: Image.Image) -> bytes:
        """Losslessly encode an image (PNG)."""
        raise NotImplementedError

    def fallback(self, position: Position) -> Image.Image:
        """Minimal dial image drawn without any track data."""
        raise NotImplementedError


class PillowBackend(CanvasBackend):
    """CanvasBackend implemented with Pillow."""

    def __init__(self, font_path: str | None = None):
        self._font_path = font_path or DEFAULT_FONT_PATH
        self._fonts: dict[int, ImageFont.ImageFont | ImageFont.FreeTypeFont] = {}
        self._load_fonts()

    def _load_fonts(self) -> None:
        """Load every font size the layout uses."""
        sizes = (TITLE_FONT_SIZE, ARTIST_FONT_SIZE, FALLBACK_GLYPH_SIZE, FALLBACK_LABEL_SIZE)
        try:
            for size in sizes:
                self._fonts[size] = ImageFont.truetype(self._font_path, size)
        except OSError:
            log.warning("Font %s not found, using default font", self._font_path)
            for size in sizes:
                self._fonts[size] = ImageFont.load_default(size)

    def font(self, size: int):
        return self._fonts.get(size) or self._fonts[TITLE_FONT_SIZE]

    def compose(self, art, texts, bar):
        img = Image.new("RGB", (FULL_WIDTH, HEIGHT), BG)
        if art is not None:
            if art.size != (ARTWORK_SIZE, ARTWORK_SIZE):
                raise ValueError(f"artwork must be {ARTWORK_SIZE}px square, got {art.size}")
            img.paste(art.convert("RGB"), (0, 0))

        draw = ImageDraw.Draw(img)
        for text in texts:
            self._draw_text(draw, text)
        self._draw_bar(draw, bar)
        return img

    def extract(self, canvas, position):
        left = Position.parse(position).offset
        return canvas.crop((left, 0, left + DIAL_WIDTH, HEIGHT))

    def encode(self, image):
        buf = io.BytesIO()
        image.save(buf, format="PNG")
        return buf.getvalue()

    def fallback(self, position):
        img = Image.new("RGB", (DIAL_WIDTH, HEIGHT), BG)
        try:
            draw = ImageDraw.Draw(img)
            if Position.parse(position) is Position.LEFT:
                message, size = "♪", FALLBACK_GLYPH_SIZE
            else:
                message, size = "No Track", FALLBACK_LABEL_SIZE
            font = self.font(size)
            if isinstance(font, ImageFont.FreeTypeFont):
                draw.text((DIAL_WIDTH // 2, HEIGHT // 2), message,
                          fill=FALLBACK_GLYPH, font=font, anchor="mm")
            else:
                draw.text((DIAL_WIDTH // 2 - 20, HEIGHT // 2 - 6), message,
                          fill=FALLBACK_GLYPH, font=font)
        except Exception:
            log.exception("Fallback glyph failed, sending blank dial")
            img = Image.new("RGB", (DIAL_WIDTH, HEIGHT), BG)
        return img

    def _draw_text(self, draw: ImageDraw.ImageDraw, text: TextPrimitive) -> None:
        font = self.font(text.font_size)
        if isinstance(font, ImageFont.FreeTypeFont):
            draw.text((text.x, text.y), text.text, fill=text.color, font=font, anchor="ls")
        else:
            # Bitmap fonts only support top-left anchoring
            draw.text((text.x, text.y - text.font_size), text.text, fill=text.color, font=font)

    @staticmethod
    def _draw_bar(draw: ImageDraw.ImageDraw, bar: ProgressBar) -> None:
        _rounded(draw, bar.track_box, bar.radius, bar.track_color)
        fill_box = bar.fill_box
        if fill_box is not None:
            _rounded(draw, fill_box, bar.radius, bar.fill_color)


def _rounded(draw: ImageDraw.ImageDraw, box, radius: int, color) -> None:
    x0, _, x1, _ = box
    if x1 - x0 + 1 <= 2 * radius:
        draw.rectangle(box, fill=color)
    else:
        draw.rounded_rectangle(box, radius=radius, fill=color)
