"""Media-session boundary.

The OS "now playing" subscription lives outside this package. Anything
that implements MediaSession can feed the plugin: it delivers raw event
mappings to the subscribed callback and accepts playback commands.
"""

import logging
from typing import Callable

log = logging.getLogger("nowplaying.nowplaying.session")

EventCallback = Callable[[dict], None]


class MediaSession:
    """Base class for now-playing sources."""

    name: str = "base"

    def subscribe(self, callback: EventCallback) -> None:
        """Start delivering now-playing events to callback."""
        raise NotImplementedError

    def unsubscribe(self) -> None:
        """Stop delivering events."""
        raise NotImplementedError

    def play_pause(self) -> None:
        """Toggle playback."""
        raise NotImplementedError

    def seek(self, seconds: float) -> None:
        """Seek relative to the current position (negative = backwards)."""
        raise NotImplementedError

    @property
    def is_subscribed(self) -> bool:
        return False
