"""Preview device: writes what the hardware would show to a directory.

Lets the renderer and controller be exercised without a Stream Deck.
Each dial's latest feedback image is written as <action_id>.png and
index.html lays the dials out side by side with the track caption.
"""

import base64
import html
import logging
from pathlib import Path

from lcd.text import layout_text
from streamdeck.actions import DIAL, KEYPAD, ActionHandle

log = logging.getLogger("nowplaying.streamdeck.preview")


def decode_data_url(data_url: str) -> bytes:
    """Return the binary payload of a base64 data URL."""
    header, sep, payload = data_url.partition(",")
    if not sep or not header.startswith("data:") or ";base64" not in header:
        raise ValueError("not a base64 data URL")
    return base64.b64decode(payload)


class PreviewAction(ActionHandle):
    """Action handle that records updates and mirrors images to disk."""

    def __init__(self, action_id: str, kind: str, output_dir: Path):
        super().__init__(action_id, kind)
        self._output_dir = output_dir
        self.title: str | None = None
        self.image: str | None = None
        self.feedback: dict | None = None

    @property
    def image_path(self) -> Path:
        return self._output_dir / f"{self.action_id}.png"

    def set_title(self, title: str) -> None:
        self.title = title

    def set_image(self, image: str) -> None:
        self.image = image
        if image.startswith("data:"):
            self.image_path.write_bytes(decode_data_url(image))

    def set_feedback(self, payload: dict) -> None:
        self.feedback = dict(payload)
        image = payload.get("image")
        if image:
            self.image_path.write_bytes(decode_data_url(image))


class PreviewDevice:
    """Creates preview actions and renders an HTML overview of them."""

    def __init__(self, output_dir):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.actions: list[PreviewAction] = []

    def keypad(self, action_id: str) -> PreviewAction:
        return self._add(PreviewAction(action_id, KEYPAD, self.output_dir))

    def dial(self, action_id: str) -> PreviewAction:
        return self._add(PreviewAction(action_id, DIAL, self.output_dir))

    def _add(self, action: PreviewAction) -> PreviewAction:
        self.actions.append(action)
        log.info("Preview %s action: %s", action.kind, action.action_id)
        return action

    def write_index(self, snapshot=None) -> Path:
        """Write index.html showing every dial image and the caption."""
        if snapshot is not None and snapshot.is_playing:
            title, artist = layout_text(snapshot.title, snapshot.artists)
            caption = f"<h1>{title.markup}</h1><p>{artist.markup}</p>"
        else:
            caption = "<h1>No track playing</h1>"

        dials = "".join(
            f'<img src="{html.escape(a.image_path.name)}" width="200" height="100" '
            f'alt="{html.escape(a.action_id)}">'
            for a in self.actions
            if a.kind == DIAL and a.image_path.exists()
        )
        keys = "".join(
            f"<li>{html.escape(a.action_id)}: {html.escape(a.title or '')}</li>"
            for a in self.actions
            if a.kind == KEYPAD
        )
        page = (
            "<!DOCTYPE html>\n<html><head><meta charset=\"utf-8\">"
            "<title>Now Playing preview</title></head>"
            f'<body style="background:#222;color:#eee">{caption}'
            f'<div style="display:flex">{dials}</div><ul>{keys}</ul></body></html>\n'
        )
        path = self.output_dir / "index.html"
        path.write_text(page, encoding="utf-8")
        return path

