"""Tests for TrackSnapshot parsing and the playback state holder."""

import dataclasses

import pytest

from nowplaying.snapshot import TrackSnapshot
from nowplaying.state import PlaybackState


def test_from_camel_case_event(midnight_city) -> None:
    snap = TrackSnapshot.from_event(midnight_city)
    assert snap.title == "Midnight City"
    assert snap.artists == ("M83",)
    assert snap.album == "Hurry Up, We're Dreaming"
    assert snap.artwork is None
    assert snap.duration == 244.0
    assert snap.position == 122.0
    assert snap.is_playing is True


def test_single_artist_string_and_snake_case() -> None:
    snap = TrackSnapshot.from_event(
        {"title": "Song", "artist": "Solo", "is_playing": False, "artwork": bytearray(b"abc")}
    )
    assert snap.artists == ("Solo",)
    assert snap.artist_line == "Solo"
    assert snap.artwork == b"abc"
    assert snap.is_playing is False


def test_bad_numbers_become_none() -> None:
    snap = TrackSnapshot.from_event(
        {"duration": "abc", "position": float("nan"), "artist": [None, " ", "X"]}
    )
    assert snap.duration is None
    assert snap.position is None
    assert snap.artists == ("X",)


def test_coerce_copies_mappings(midnight_city) -> None:
    event = dict(midnight_city)
    snap = TrackSnapshot.coerce(event)
    event["trackName"] = "Changed"
    event["artist"].append("Someone Else")
    assert snap.title == "Midnight City"
    assert snap.artists == ("M83",)
    assert TrackSnapshot.coerce(snap) is snap
    assert TrackSnapshot.coerce(None) == TrackSnapshot()


def test_coerce_rejects_other_types() -> None:
    with pytest.raises(TypeError):
        TrackSnapshot.coerce(42)


def test_snapshot_is_immutable(midnight_city) -> None:
    snap = TrackSnapshot.from_event(midnight_city)
    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.title = "Other"


def test_state_dirty_flag() -> None:
    state = PlaybackState()
    assert state.consume_dirty() is True
    assert state.consume_dirty() is False
    assert state.snapshot is None
    assert state.is_playing is False

    state.update(TrackSnapshot(title="Song", is_playing=True))
    assert state.is_playing is True
    assert state.consume_dirty() is True

    state.clear()
    assert state.snapshot is None
    assert state.consume_dirty() is True
