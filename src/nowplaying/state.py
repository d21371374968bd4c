"""Latest playback state shared between the media session and the plugin.

Session callbacks may arrive on a foreign thread; the update loop reads
the snapshot and the dirty flag under the same lock.
"""

import logging
import threading

from nowplaying.snapshot import TrackSnapshot

log = logging.getLogger("nowplaying.nowplaying.state")


class PlaybackState:
    """Thread-safe holder for the most recent TrackSnapshot."""

    def __init__(self):
        self._lock = threading.Lock()
        self._snapshot: TrackSnapshot | None = None
        self._dirty = True

    @property
    def snapshot(self) -> TrackSnapshot | None:
        with self._lock:
            return self._snapshot

    @property
    def is_playing(self) -> bool:
        snap = self.snapshot
        return snap is not None and snap.is_playing

    def update(self, snapshot: TrackSnapshot) -> None:
        """Replace the current snapshot and mark the displays stale."""
        with self._lock:
            self._snapshot = snapshot
            self._dirty = True

        log.debug("Track: %r by %r (playing=%s)",
                  snapshot.title, snapshot.artist_line, snapshot.is_playing)

    def clear(self) -> None:
        with self._lock:
            self._snapshot = None
            self._dirty = True

    def mark_dirty(self) -> None:
        with self._lock:
            self._dirty = True

    def consume_dirty(self) -> bool:
        """Check and clear dirty flag. Returns True if state changed."""
        with self._lock:
            was_dirty = self._dirty
            self._dirty = False
            return was_dirty
