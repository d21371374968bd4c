"""Test configuration."""

from __future__ import annotations

import base64
import io
import struct
import sys
import zlib
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def _png_bytes(size=(300, 150), colors=((255, 0, 0), (0, 0, 255)), fmt="PNG", mode="RGB"):
    """Image split vertically into two colored halves."""
    w, h = size
    img = Image.new(mode, size, colors[0])
    img.paste(Image.new(mode, (w - w // 2, h), colors[1]), (w // 2, 0))
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


def _chunk(cid: bytes, data: bytes) -> bytes:
    return struct.pack(">I", len(data)) + cid + data + struct.pack(">I", zlib.crc32(cid + data))


def _broken_png(size=64):
    """PNG whose second image-data chunk carries an invalid chunk type.

    The header parses, so Image.open succeeds and the damage only shows
    once pixel data is read.
    """
    rows = b"".join(
        b"\x00" + bytes((x * 37 + y * 101) % 251 for x in range(size * 3))
        for y in range(size)
    )
    data = zlib.compress(rows)
    half = len(data) // 2
    return (
        b"\x89PNG\r\n\x1a\n"
        + _chunk(b"IHDR", struct.pack(">IIBBBBB", size, size, 8, 2, 0, 0, 0))
        + _chunk(b"IDAT", data[:half])
        + _chunk(b"\x1a\xd0\x1a\xd0", data[half:])
        + _chunk(b"IEND", b"")
    )


def _decode(data_url: str) -> np.ndarray:
    """Pixels of a PNG data URL as an (h, w, 3) array."""
    header, _, payload = data_url.partition(",")
    assert header == "data:image/png;base64"
    with Image.open(io.BytesIO(base64.b64decode(payload))) as img:
        assert img.format == "PNG"
        return np.asarray(img.convert("RGB"))


@pytest.fixture
def png_bytes():
    return _png_bytes


@pytest.fixture
def broken_png() -> bytes:
    return _broken_png()


@pytest.fixture
def decode_data_url():
    return _decode


@pytest.fixture
def midnight_city() -> dict:
    return {
        "trackName": "Midnight City",
        "artist": ["M83"],
        "album": "Hurry Up, We're Dreaming",
        "thumbnail": None,
        "duration": 244,
        "position": 122,
        "isPlaying": True,
    }
