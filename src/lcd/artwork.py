"""Album art decoding and placeholder artwork.

Artwork arrives from the media session as raw image bytes, a data URL, or
a bare base64 string. Whatever the encoding, the result is either an RGB
square of ARTWORK_SIZE pixels or None.
"""

import base64
import binascii
import io
import logging

from PIL import Image, ImageDraw, ImageOps

from lcd.layout import ARTWORK_SIZE, ART_PLACEHOLDER_BG, BG

log = logging.getLogger("nowplaying.lcd.artwork")


def strip_data_url(data) -> bytes | None:
    """Return the binary payload of raw bytes, a data URL or base64 text."""
    if not data:
        return None
    if isinstance(data, (bytes, bytearray, memoryview)):
        raw = bytes(data)
        # Some players hand over the data URL as bytes
        if not raw.startswith(b"data:"):
            return raw
        data = raw.decode("ascii", errors="replace")

    text = str(data).strip()
    if text.startswith("data:"):
        _, sep, text = text.partition(",")
        if not sep:
            return None
    try:
        payload = base64.b64decode(text, validate=False)
    except (binascii.Error, ValueError):
        log.warning("Artwork is neither a data URL nor valid base64")
        return None
    return payload or None


def decode_and_square(data, size: int = ARTWORK_SIZE) -> Image.Image | None:
    """Decode artwork and center-crop it to a size x size RGB square.

    Returns None for missing or undecodable input; never raises.
    """
    try:
        payload = strip_data_url(data)
        if payload is None:
            return None
        with Image.open(io.BytesIO(payload)) as src:
            src.load()
            img = _flatten(src)
        return ImageOps.fit(
            img, (size, size), method=Image.Resampling.LANCZOS, centering=(0.5, 0.5)
        )
    except Exception as exc:
        # Pillow plugins also raise SyntaxError and struct.error on damaged input
        log.warning("Could not decode album art: %s", exc)
        return None


def _flatten(img: Image.Image) -> Image.Image:
    """Convert to RGB, compositing any transparency onto the background."""
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        base = Image.new("RGB", rgba.size, BG)
        base.paste(rgba, mask=rgba.getchannel("A"))
        return base
    return img.convert("RGB")


def idle_artwork(size: int = ARTWORK_SIZE) -> Image.Image:
    """Dark square with a translucent pause glyph (nothing playing)."""
    img = Image.new("RGBA", (size, size), ART_PLACEHOLDER_BG + (255,))
    overlay = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)

    bar_w = size // 10
    top = size * 35 // 100
    bottom = size * 65 // 100
    for left in (size * 35 // 100, size * 55 // 100):
        draw.rectangle([left, top, left + bar_w - 1, bottom - 1], fill=(255, 255, 255, 153))

    return Image.alpha_composite(img, overlay).convert("RGB")


def missing_artwork(size: int = ARTWORK_SIZE) -> Image.Image:
    """Dark square with a muted eighth note, used when art is absent."""
    img = Image.new("RGB", (size, size), ART_PLACEHOLDER_BG)
    draw = ImageDraw.Draw(img)
    color = (90, 90, 90)

    head_r = size // 10
    head_cx = size * 42 // 100
    head_cy = size * 66 // 100
    stem_x = head_cx + head_r - 1
    stem_top = size * 28 // 100

    draw.ellipse(
        [head_cx - head_r, head_cy - head_r, head_cx + head_r, head_cy + head_r],
        fill=color,
    )
    draw.rectangle([stem_x - 2, stem_top, stem_x, head_cy], fill=color)
    # Flag
    draw.polygon(
        [
            (stem_x, stem_top),
            (stem_x + size // 6, stem_top + size // 8),
            (stem_x + size // 6, stem_top + size // 5),
            (stem_x, stem_top + size // 10),
        ],
        fill=color,
    )
    return img
