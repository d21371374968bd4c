"""Now Playing plugin controller.

Keeps track of which keypad and dial actions are visible, subscribes to
the media session while any of them is, routes key presses and dial
rotation to playback commands, and pushes fresh titles and LCD images
whenever the playback state changes.
"""

from __future__ import annotations

import asyncio
import logging
import threading

from core.event_bus import (
    DIAL_APPEARED,
    DIAL_DISAPPEARED,
    DIAL_ROTATED,
    DIAL_SETTINGS_CHANGED,
    KEY_DOWN,
    KEYPAD_APPEARED,
    KEYPAD_DISAPPEARED,
    TRACK_CHANGED,
    EventBus,
)
from lcd.layout import Position
from lcd.renderer import NowPlayingRenderer
from lcd.text import format_artists, single_line
from nowplaying.session import MediaSession
from nowplaying.snapshot import TrackSnapshot
from nowplaying.state import PlaybackState
from streamdeck.actions import ActionHandle

log = logging.getLogger("nowplaying.plugin.controller")

IDLE_KEY_TITLE = "♪"


class NowPlayingController:
    """Glue between the media session, the renderer and device actions."""

    def __init__(self, session: MediaSession, renderer: NowPlayingRenderer | None = None,
                 state: PlaybackState | None = None, config: dict = None,
                 event_bus: EventBus | None = None):
        self.session = session
        self.renderer = renderer or NowPlayingRenderer()
        self.state = state or PlaybackState()

        plugin_cfg = (config or {}).get("plugin", {})
        self.seek_seconds = float(plugin_cfg.get("seek_seconds", 5))
        self.update_interval = float(plugin_cfg.get("update_interval", 0.5))
        self.render_timeout = float(plugin_cfg.get("render_timeout", 2.0))
        self.default_icon = plugin_cfg.get("default_icon", "assets/action")

        self._lock = threading.Lock()
        self._keypads: dict[str, ActionHandle] = {}
        self._dials: dict[str, ActionHandle] = {}
        # Dial position per action id ("left"/"right" half of the strip)
        self.positions: dict[str, Position] = {}
        self._subscribed = False
        self._running = False

        if event_bus is not None:
            self._setup_event_handlers(event_bus)

    def _setup_event_handlers(self, bus: EventBus) -> None:
        """Wire host and media-session events to controller methods."""
        bus.subscribe(KEYPAD_APPEARED, lambda d: self.keypad_appeared(d["action"]))
        bus.subscribe(KEYPAD_DISAPPEARED, lambda d: self.keypad_disappeared(d["action"]))
        bus.subscribe(DIAL_APPEARED,
                      lambda d: self.dial_appeared(d["action"], d.get("settings")))
        bus.subscribe(DIAL_DISAPPEARED, lambda d: self.dial_disappeared(d["action"]))
        bus.subscribe(DIAL_SETTINGS_CHANGED,
                      lambda d: self.dial_settings_changed(d["action"], d.get("settings")))
        bus.subscribe(KEY_DOWN, lambda d: self.key_down(d["action"]))
        bus.subscribe(DIAL_ROTATED,
                      lambda d: self.dial_rotated(d["action"], d.get("ticks", 0)))
        bus.subscribe(TRACK_CHANGED, self.on_track_event)

    # --- Action lifecycle ---

    def keypad_appeared(self, action: ActionHandle) -> None:
        log.info("Keypad action appeared: %s", action.action_id)
        with self._lock:
            self._keypads[action.action_id] = action
        self._ensure_subscribed()
        self.state.mark_dirty()

    def keypad_disappeared(self, action: ActionHandle) -> None:
        log.info("Keypad action disappeared: %s", action.action_id)
        with self._lock:
            self._keypads.pop(action.action_id, None)
        self._maybe_unsubscribe()

    def dial_appeared(self, action: ActionHandle, settings: dict | None = None) -> None:
        position = Position.parse((settings or {}).get("position"))
        log.info("Dial action appeared: %s (position %s)", action.action_id, position.value)
        with self._lock:
            self._dials[action.action_id] = action
            self.positions[action.action_id] = position
        self._ensure_subscribed()
        self.state.mark_dirty()

    def dial_disappeared(self, action: ActionHandle) -> None:
        log.info("Dial action disappeared: %s", action.action_id)
        with self._lock:
            self._dials.pop(action.action_id, None)
            self.positions.pop(action.action_id, None)
        self._maybe_unsubscribe()

    def dial_settings_changed(self, action: ActionHandle, settings: dict | None = None) -> None:
        position = Position.parse((settings or {}).get("position"))
        log.info("Dial %s settings changed, position %s", action.action_id, position.value)
        with self._lock:
            if action.action_id in self._dials:
                self.positions[action.action_id] = position
        self.state.mark_dirty()

    @property
    def visible_count(self) -> int:
        with self._lock:
            return len(self._keypads) + len(self._dials)

    def _ensure_subscribed(self) -> None:
        if self._subscribed:
            return
        try:
            self.session.subscribe(self.on_track_event)
            self._subscribed = True
            log.info("Subscribed to now playing events (%s)", self.session.name)
        except Exception:
            log.exception("Error subscribing to media session")

    def _maybe_unsubscribe(self) -> None:
        if self.visible_count or not self._subscribed:
            return
        try:
            self.session.unsubscribe()
            log.info("Unsubscribed from now playing events")
        except Exception:
            log.exception("Error unsubscribing from media session")
        finally:
            self._subscribed = False
            self.state.clear()

    # --- Media session ---

    def on_track_event(self, event) -> None:
        """Store the latest now-playing event as an immutable snapshot."""
        try:
            snapshot = TrackSnapshot.coerce(event)
        except TypeError:
            log.warning("Ignoring malformed now-playing event: %r", type(event).__name__)
            return
        self.state.update(snapshot)

    # --- Input ---

    def key_down(self, action: ActionHandle) -> None:
        if not self._subscribed:
            return
        try:
            self.session.play_pause()
            log.info("→ Play/pause")
        except Exception:
            log.exception("Error toggling playback")

    def dial_rotated(self, action: ActionHandle, ticks: int) -> None:
        if not self._subscribed or not ticks:
            return
        seconds = self.seek_seconds if ticks > 0 else -self.seek_seconds
        try:
            self.session.seek(seconds)
            log.info("→ Seek %+.0fs", seconds)
        except Exception:
            log.exception("Error seeking")

    # --- Display updates ---

    async def update_all(self) -> None:
        """Push the current state to every visible action."""
        snapshot = self.state.snapshot
        with self._lock:
            keypads = list(self._keypads.values())
            dials = [(a, self.positions.get(a.action_id, Position.LEFT))
                     for a in self._dials.values()]

        await asyncio.gather(
            *(self.update_keypad(a, snapshot) for a in keypads),
            *(self.update_dial(a, pos, snapshot) for a, pos in dials),
        )

    async def update_keypad(self, action: ActionHandle, snapshot: TrackSnapshot | None) -> None:
        try:
            if snapshot is None or not snapshot.is_playing:
                action.set_title(IDLE_KEY_TITLE)
                action.set_image(self.default_icon)
                return

            title = single_line(snapshot.title or "") or "Unknown"
            artists = format_artists(snapshot.artists, default="Unknown")
            action.set_title(f"{title}\n{artists}")
        except Exception:
            log.exception("Error updating keypad %s", action.action_id)
            return

        try:
            image = await asyncio.wait_for(
                asyncio.to_thread(self.renderer.render_key_image, snapshot),
                timeout=self.render_timeout)
        except asyncio.TimeoutError:
            log.warning("Key image for %s timed out after %.1fs",
                        action.action_id, self.render_timeout)
            image = None

        try:
            action.set_image(image or self.default_icon)
        except Exception:
            log.exception("Error setting key image for %s", action.action_id)

    async def update_dial(self, action: ActionHandle, position: Position,
                          snapshot: TrackSnapshot | None) -> None:
        if snapshot is None or not snapshot.is_playing:
            render, args = self.renderer.render_idle, (position,)
        else:
            render, args = self.renderer.render, (snapshot, position)

        try:
            image = await asyncio.wait_for(asyncio.to_thread(render, *args),
                                           timeout=self.render_timeout)
        except asyncio.TimeoutError:
            log.warning("Render for %s timed out after %.1fs",
                        action.action_id, self.render_timeout)
            image = self.renderer.render_fallback(position)

        try:
            action.set_feedback({"image": image})
        except Exception:
            log.exception("Error setting LCD feedback for %s", action.action_id)

    # --- Main loop ---

    async def run(self) -> None:
        """Refresh displays whenever the playback state changes."""
        self._running = True
        try:
            while self._running:
                if self.state.consume_dirty():
                    await self.update_all()
                await asyncio.sleep(self.update_interval)
        except asyncio.CancelledError:
            log.info("Update loop cancelled")

    def stop(self) -> None:
        self._running = False
