"""Tests for the scripted media session."""

import pytest

from nowplaying.fake_session import DEMO_PLAYLIST, FakeMediaSession


def _subscribed(**kwargs):
    events = []
    session = FakeMediaSession(**kwargs)
    session.subscribe(events.append)
    return session, events


def test_subscribe_emits_current_track() -> None:
    session, events = _subscribed()
    assert session.is_subscribed
    assert events[-1]["trackName"] == DEMO_PLAYLIST[0]["trackName"]
    assert events[-1]["isPlaying"] is True
    assert events[-1]["position"] == 0.0


def test_play_pause_and_seek_are_recorded() -> None:
    session, events = _subscribed()
    session.play_pause()
    assert events[-1]["isPlaying"] is False
    session.seek(5)
    session.seek(-20)
    assert events[-1]["position"] == 0.0
    assert session.commands == [("play_pause",), ("seek", 5), ("seek", -20)]


def test_tick_advances_only_while_playing() -> None:
    session, events = _subscribed()
    session.tick(10)
    assert events[-1]["position"] == 10.0
    session.play_pause()
    session.tick(10)
    assert session.current_event()["position"] == 10.0


def test_tick_rolls_over_to_next_track() -> None:
    playlist = [{"trackName": "A", "duration": 3}, {"trackName": "B", "duration": 3}]
    session, events = _subscribed(playlist=playlist)
    session.tick(3)
    assert events[-1]["trackName"] == "B"
    assert events[-1]["position"] == 0.0
    session.next_track()
    assert events[-1]["trackName"] == "A"


def test_unsubscribe_stops_events() -> None:
    session, events = _subscribed()
    session.unsubscribe()
    count = len(events)
    session.tick(1)
    assert len(events) == count
    assert not session.is_subscribed


def test_callback_errors_do_not_propagate() -> None:
    session = FakeMediaSession()

    def boom(event):
        raise RuntimeError("handler failed")

    session.subscribe(boom)
    session.tick(1)


def test_empty_playlist_rejected() -> None:
    with pytest.raises(ValueError):
        FakeMediaSession(playlist=[])
