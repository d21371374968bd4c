#!/usr/bin/env python3
"""Stream Deck Now Playing: preview runner.

Runs the plugin controller against the in-process fake media session
and a preview device, so the LCD output can be inspected without the
Stream Deck host:
  1. Registers one keypad and two dial actions (left/right halves)
  2. Subscribes to the fake media session
  3. Advances simulated playback every tick
  4. Writes dial PNGs and index.html to the preview directory
"""

import asyncio
import signal
import sys
import os
import logging

# Add src/ to path so imports work when running directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config import load_config
from core.logging_config import setup_logging
from core.event_bus import EventBus
from lcd.renderer import NowPlayingRenderer
from nowplaying.fake_session import FakeMediaSession
from plugin.controller import NowPlayingController
from streamdeck.preview import PreviewDevice

log = logging.getLogger("nowplaying.main")


class NowPlayingPreview:
    """Drives the controller with simulated host and session events."""

    def __init__(self, config: dict):
        self.config = config
        self.event_bus = EventBus()
        self._running = False

        preview_cfg = config.get("preview", {})
        self._tick = float(preview_cfg.get("tick_seconds", 1.0))

        self.session = FakeMediaSession()
        self.device = PreviewDevice(preview_cfg.get("output_dir", "preview"))
        self.controller = NowPlayingController(
            self.session,
            renderer=NowPlayingRenderer(font_path=config.get("lcd", {}).get("font_path")),
            config=config,
            event_bus=self.event_bus,
        )

    def _register_actions(self) -> None:
        """Announce preview actions the way the host does on startup."""
        self.event_bus.publish_host_event("willAppear", self.device.keypad("key-1"))
        for position in ("left", "right"):
            self.event_bus.publish_host_event(
                "willAppear",
                self.device.dial(f"dial-{position}"),
                {"settings": {"position": position}},
            )

    async def _simulate(self) -> None:
        while self._running:
            await asyncio.sleep(self._tick)
            self.session.tick(self._tick)
            self.device.write_index(self.controller.state.snapshot)

    async def run(self) -> None:
        """Main event loop."""
        self._running = True
        self._register_actions()
        log.info("Writing preview to %s", self.device.output_dir.resolve())

        updater = asyncio.create_task(self.controller.run())
        try:
            await self._simulate()
        except asyncio.CancelledError:
            log.info("Preview cancelled")
        finally:
            self.controller.stop()
            await updater
            self.shutdown()

    def shutdown(self) -> None:
        """Clean shutdown."""
        self._running = False
        log.info("Shutting down...")
        for action in list(self.device.actions):
            self.event_bus.publish_host_event("willDisappear", action)
        log.info("Shutdown complete")


def main() -> None:
    setup_logging()
    log.info("=== Stream Deck Now Playing ===")

    config = load_config()
    preview = NowPlayingPreview(config)

    loop = asyncio.new_event_loop()

    def signal_handler():
        log.info("Signal received, stopping...")
        preview._running = False

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, signal_handler)

    try:
        loop.run_until_complete(preview.run())
    finally:
        loop.close()


if __name__ == "__main__":
    main()
