"""LCD strip geometry and colour palette.

The Stream Deck + touch strip is addressed per dial: two adjacent dials
share one 400x100 composition, each receiving a 200x100 slice.
"""

from enum import Enum

FULL_WIDTH = 400
DIAL_WIDTH = 200
HEIGHT = 100
ARTWORK_SIZE = 100
PADDING = 8

# Text column starts right of the artwork
TEXT_X = ARTWORK_SIZE + PADDING
TEXT_AREA_WIDTH = FULL_WIDTH - TEXT_X - PADDING

TITLE_Y = 27
ARTIST_Y = 55
TITLE_FONT_SIZE = 20
ARTIST_FONT_SIZE = 16
TITLE_MAX_CHARS = 28
ARTIST_MAX_CHARS = 32

# Progress bar sits under the text column
BAR_X = TEXT_X
BAR_Y = 75
BAR_WIDTH = TEXT_AREA_WIDTH - PADDING
BAR_HEIGHT = 5
BAR_RADIUS = 1

# Colors
BG = (0, 0, 0)
TEXT = (255, 255, 255)
TEXT_DIM = (179, 179, 179)  # #B3B3B3
BAR_TRACK = (64, 64, 64)    # #404040
BAR_FILL = (29, 185, 84)    # #1DB954
ART_PLACEHOLDER_BG = (26, 26, 26)  # #1a1a1a
FALLBACK_GLYPH = (102, 102, 102)  # #666666

# Keypad image (Stream Deck + keys are 120px, 144 covers @2x)
KEY_IMAGE_SIZE = 144

DEFAULT_FONT_PATH = "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"


class Position(str, Enum):
    """Which half of the 400px composition a dial shows."""

    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def parse(cls, value) -> "Position":
        """Map a settings value to a Position, defaulting to LEFT."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.LEFT

    @property
    def offset(self) -> int:
        """X offset of this slice within the full canvas."""
        return 0 if self is Position.LEFT else DIAL_WIDTH
