"""Stream Deck action handles.

The host SDK hands the plugin one handle per visible action instance.
Keypad actions show a title and a key image; dial actions show an LCD
feedback image. Handles carry no plugin state: dial positions are kept
by the controller, keyed by action_id.
"""

KEYPAD = "keypad"
DIAL = "dial"


class ActionHandle:
    """Base class for a visible action instance on the device."""

    def __init__(self, action_id: str, kind: str = KEYPAD):
        self.action_id = action_id
        self.kind = kind

    def set_title(self, title: str) -> None:
        """Set the key title text."""
        raise NotImplementedError

    def set_image(self, image: str) -> None:
        """Set the key image (asset path or data URL)."""
        raise NotImplementedError

    def set_feedback(self, payload: dict) -> None:
        """Update the dial LCD layout, e.g. {"image": <data URL>}."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.kind} {self.action_id}>"
