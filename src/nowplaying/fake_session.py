"""In-process media session with a scripted playlist.

Used by the preview runner and by tests; emits events in the same
camelCase shape as the desktop now-playing bridge.
"""

import logging
import threading

from nowplaying.session import EventCallback, MediaSession

log = logging.getLogger("nowplaying.nowplaying.fake_session")

DEMO_PLAYLIST = [
    {"trackName": "Midnight City", "artist": ["M83"],
     "album": "Hurry Up, We're Dreaming", "duration": 244},
    {"trackName": "Everything In Its Right Place", "artist": ["Radiohead"],
     "album": "Kid A", "duration": 251},
    {"trackName": "Dance Yrself Clean", "artist": ["LCD Soundsystem"],
     "album": "This Is Happening", "duration": 536},
]


class FakeMediaSession(MediaSession):
    """Simulates a player: play/pause, relative seek and time passing."""

    name = "fake"

    def __init__(self, playlist: list[dict] | None = None, autoplay: bool = True):
        self._playlist = [dict(t) for t in (DEMO_PLAYLIST if playlist is None else playlist)]
        if not self._playlist:
            raise ValueError("playlist must contain at least one track")
        self._lock = threading.Lock()
        self._callback: EventCallback | None = None
        self._index = 0
        self._position = 0.0
        self._playing = autoplay
        self.commands: list[tuple] = []

    # --- MediaSession ---

    def subscribe(self, callback: EventCallback) -> None:
        with self._lock:
            self._callback = callback
        log.info("Fake session subscribed")
        self._emit()

    def unsubscribe(self) -> None:
        with self._lock:
            self._callback = None
        log.info("Fake session unsubscribed")

    def play_pause(self) -> None:
        with self._lock:
            self._playing = not self._playing
            self.commands.append(("play_pause",))
        self._emit()

    def seek(self, seconds: float) -> None:
        with self._lock:
            duration = float(self._current().get("duration") or 0)
            self._position = max(0.0, min(duration, self._position + seconds))
            self.commands.append(("seek", seconds))
        self._emit()

    @property
    def is_subscribed(self) -> bool:
        return self._callback is not None

    # --- Simulation ---

    def tick(self, seconds: float) -> None:
        """Advance playback; rolls over to the next track at the end."""
        with self._lock:
            if not self._playing:
                return
            self._position += seconds
            duration = float(self._current().get("duration") or 0)
            if duration and self._position >= duration:
                self._index = (self._index + 1) % len(self._playlist)
                self._position = 0.0
        self._emit()

    def next_track(self) -> None:
        with self._lock:
            self._index = (self._index + 1) % len(self._playlist)
            self._position = 0.0
        self._emit()

    def current_event(self) -> dict:
        with self._lock:
            return self._event()

    def _current(self) -> dict:
        return self._playlist[self._index]

    def _event(self) -> dict:
        event = dict(self._current())
        event["position"] = self._position
        event["isPlaying"] = self._playing
        return event

    def _emit(self) -> None:
        with self._lock:
            callback = self._callback
            event = self._event()
        if callback is None:
            return
        try:
            callback(event)
        except Exception:
            log.exception("Error in now-playing callback")
