"""Tests for title/artist layout, truncation and escaping."""

import re
import xml.etree.ElementTree as ET

from lcd.layout import ARTIST_Y, TEXT_X, TITLE_MAX_CHARS, TITLE_Y
from lcd.text import (
    UNKNOWN_ARTIST,
    UNKNOWN_TRACK,
    format_artists,
    layout_text,
    single_line,
    truncate,
)


def test_short_text_is_untouched() -> None:
    assert truncate("Midnight City", 28) == "Midnight City"
    exact = "x" * 28
    assert truncate(exact, 28) == exact


def test_long_title_is_cut_with_ellipsis() -> None:
    title = "A Very Long Song Title That Goes On And On Forever"
    for budget in (4, 10, 28, 32):
        out = truncate(title, budget)
        assert len(out) <= budget
        assert out.endswith("...")
        assert out[:-3] == title[: budget - 3]


def test_layout_uses_budgets_per_field() -> None:
    title, artist = layout_text("t" * 60, ["a" * 60])
    assert title.text == "t" * (TITLE_MAX_CHARS - 3) + "..."
    assert len(artist.text) == 32
    assert artist.text.endswith("...")


def test_missing_metadata_uses_defaults() -> None:
    for missing in (None, "", "   "):
        title, artist = layout_text(missing, None)
        assert title.text == UNKNOWN_TRACK
        assert artist.text == UNKNOWN_ARTIST
    _, artist = layout_text("Song", [])
    assert artist.text == UNKNOWN_ARTIST


def test_artists_are_joined() -> None:
    assert format_artists(["Daft Punk", "Pharrell Williams"]) == "Daft Punk, Pharrell Williams"
    assert format_artists("Solo") == "Solo"
    assert format_artists(["", None, "Kept"]) == "Kept"


def test_title_and_artist_baselines_do_not_overlap() -> None:
    title, artist = layout_text("Song", ["Artist"])
    assert (title.x, title.y) == (TEXT_X, TITLE_Y)
    assert (artist.x, artist.y) == (TEXT_X, ARTIST_Y)
    assert artist.y - title.y > title.font_size
    assert title.font_size > artist.font_size


def test_line_breaks_and_control_characters_collapse() -> None:
    assert single_line("  Line one\nLine two\r\n\tLine three ") == "Line one Line two Line three"
    assert single_line("Bell\x07and\x00null") == "Bell and null"

    title, artist = layout_text("Line one\nLine two", ["M83\n", "\t", "Daft\r\nPunk"])
    assert title.text == "Line one Line two"
    assert artist.text == "M83, Daft Punk"
    assert "\n" not in title.text + artist.text


def test_whitespace_only_title_uses_default() -> None:
    title, _ = layout_text("\n\t \r", [])
    assert title.text == UNKNOWN_TRACK


def test_collapsing_happens_before_truncation() -> None:
    title, _ = layout_text("a\n\n\n\n\n\n" * 10, [])
    assert title.text == truncate(" ".join(["a"] * 10), TITLE_MAX_CHARS)


def test_markup_has_no_raw_special_characters() -> None:
    raw = '<b>"Tom" & Jerry\'s</b>'
    title, _ = layout_text(raw, ["A & B"])

    markup = title.markup
    assert "<" not in markup
    assert ">" not in markup
    assert '"' not in markup
    assert re.findall(r"&(?!amp;|lt;|gt;|quot;|#x27;)", markup) == []
    # The text element parses as XML and carries the original string
    element = ET.fromstring(title.to_svg())
    assert element.tag == "text"
    assert element.text == raw
    assert element.get("class") == "title"
