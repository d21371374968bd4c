import logging
import threading
from typing import Any, Callable

from streamdeck.actions import DIAL, KEYPAD

log = logging.getLogger("nowplaying.core.event_bus")

# Topics the plugin controller listens on
KEYPAD_APPEARED = "keypad_appeared"
KEYPAD_DISAPPEARED = "keypad_disappeared"
KEY_DOWN = "key_down"
DIAL_APPEARED = "dial_appeared"
DIAL_DISAPPEARED = "dial_disappeared"
DIAL_SETTINGS_CHANGED = "dial_settings_changed"
DIAL_ROTATED = "dial_rotated"
TRACK_CHANGED = "track_changed"

# Stream Deck host event name per action kind -> topic
HOST_TOPICS = {
    (KEYPAD, "willAppear"): KEYPAD_APPEARED,
    (KEYPAD, "willDisappear"): KEYPAD_DISAPPEARED,
    (KEYPAD, "keyDown"): KEY_DOWN,
    (DIAL, "willAppear"): DIAL_APPEARED,
    (DIAL, "willDisappear"): DIAL_DISAPPEARED,
    (DIAL, "didReceiveSettings"): DIAL_SETTINGS_CHANGED,
    (DIAL, "dialRotate"): DIAL_ROTATED,
}


def _name(callback: Callable) -> str:
    return getattr(callback, "__name__", repr(callback))


class EventBus:
    """Thread-safe publish/subscribe event system.

    Decouples Stream Deck host events (actions appearing, key presses,
    dial rotation) and media-session callbacks from the plugin controller.
    Host events arrive under their SDK names and are routed to a topic by
    the kind of action they came from.
    """

    def __init__(self):
        self._subscribers: dict[str, list[Callable]] = {}
        self._lock = threading.Lock()

    def subscribe(self, event_type: str, callback: Callable) -> None:
        with self._lock:
            self._subscribers.setdefault(event_type, []).append(callback)
        log.debug("Subscribed to '%s': %s", event_type, _name(callback))

    def unsubscribe(self, event_type: str, callback: Callable) -> None:
        with self._lock:
            if event_type in self._subscribers:
                self._subscribers[event_type] = [
                    cb for cb in self._subscribers[event_type] if cb != callback
                ]

    def publish(self, event_type: str, data: Any = None) -> int:
        """Deliver data to every subscriber; returns how many were called."""
        with self._lock:
            callbacks = list(self._subscribers.get(event_type, []))

        if not callbacks:
            log.debug("No subscribers for '%s'", event_type)
        for callback in callbacks:
            try:
                callback(data)
            except Exception:
                log.exception("Error in event handler for '%s': %s",
                              event_type, _name(callback))
        return len(callbacks)

    def publish_host_event(self, event: str, action, payload: dict | None = None) -> int:
        """Route a host event for one action to its topic.

        payload is the host's event payload; only "settings" and "ticks"
        are read. Events an action kind does not handle (a keyDown from a
        dial, say) are dropped.
        """
        topic = HOST_TOPICS.get((action.kind, event))
        if topic is None:
            log.debug("Ignoring host event '%s' for %s action %s",
                      event, action.kind, action.action_id)
            return 0

        payload = payload or {}
        return self.publish(topic, {
            "action": action,
            "settings": payload.get("settings") or {},
            "ticks": payload.get("ticks", 0),
        })
