#!/usr/bin/env python3
"""
Globes application entry point and pygame host.

What this module does
- Opens a resizable pygame window and acts as the host for a mounted Globes view:
  it provides the drawing surface, reports resizes and schedules one frame callback
  per display refresh.
- Optionally opens a read-only Dear PyGui inspector, rendered from the same loop.

Threading model
- Everything runs on the main thread. PygameWindow.run() pumps events, runs the pending
  frame callback, flips the display and ticks a 60 FPS clock. Resize events are handled
  between frames, so a frame never sees a half-applied resize.

Running
1) Install dependencies: `pip install pygame dearpygui`
2) Run this module: `python globes_app.py` (add `--inspector`, `--template saturn_system.json`)

Closing the window (or the inspector) tears the view down and exits.
"""

import argparse
import itertools
import logging
import sys
from typing import Callable, Dict, List, Optional, Tuple

import pygame

from globes.constants import TARGET_FPS, VIEW_HEIGHT, VIEW_WIDTH, WINDOW_CAPTION
from globes.camera import Viewport
from globes.catalog import CatalogError, solar_system
from globes.mount import globes
from globes.presets_loader import list_templates, load_template
from globes.surface import PygameSurface

log = logging.getLogger("globes")

# ============================================================
# Pygame Host
# ============================================================

class PygameWindow:
    """
    Pygame window acting as container, resize source and frame scheduler.

    Frame callbacks are queued by handle and each runs once, on the next loop iteration.
    """
    def __init__(self, width: int = VIEW_WIDTH, height: int = VIEW_HEIGHT,
                 caption: str = WINDOW_CAPTION, fps: int = TARGET_FPS):
        self.initial_size = (width, height)
        self.caption = caption
        self.fps = fps
        self.display = None
        self.clock = None
        self.running = False
        self._surface: Optional[PygameSurface] = None
        self._listeners: List[Callable[[float, float, float], None]] = []
        self._pending: Dict[int, Callable[[], None]] = {}
        self._handles = itertools.count(1)
        self.on_close: Optional[Callable[[], None]] = None

    # Host interface

    def create_surface(self) -> PygameSurface:
        pygame.init()
        pygame.display.set_caption(self.caption)
        self.display = pygame.display.set_mode(self.initial_size, pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.running = True
        w, h, ratio = self.size()
        self._surface = PygameSurface(self.display, Viewport(w, h, ratio), follow_display=True)
        return self._surface

    def remove_surface(self, surface: PygameSurface) -> None:
        if surface is not self._surface:
            return
        self._surface = None
        self.running = False
        pygame.display.quit()
        pygame.quit()

    def size(self) -> Tuple[float, float, float]:
        if self.display is None:
            w, h = self.initial_size
            return (w, h, 1.0)
        window_w, window_h = pygame.display.get_window_size()
        device_w, _ = self.display.get_size()
        ratio = device_w / window_w if window_w else 1.0
        return (window_w, window_h, ratio)

    def add_resize_listener(self, listener: Callable[[float, float, float], None]) -> None:
        self._listeners.append(listener)

    def remove_resize_listener(self, listener: Callable[[float, float, float], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def request_frame(self, callback: Callable[[], None]) -> int:
        handle = next(self._handles)
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    # Event loop

    def handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                log.info("Window closed")
                self._close()
                return
            elif event.type == pygame.VIDEORESIZE:
                self.display = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                w, h, ratio = self.size()
                for listener in list(self._listeners):
                    listener(w, h, ratio)

    def _close(self) -> None:
        if self.on_close is not None:
            self.on_close()
        self.running = False

    def run(self) -> None:
        """Run frames until the window closes or nothing is scheduled."""
        while self.running and self._pending:
            self.handle_events()
            if not self.running:
                break
            pending, self._pending = self._pending, {}
            for callback in pending.values():
                callback()
            if self.running and self._surface is not None:
                pygame.display.flip()
                self.clock.tick(self.fps)

# ============================================================
# Application Entry
# ============================================================

def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Animated schematic solar system view.")
    parser.add_argument("--template", help="Template JSON from templates/ (or a path); defaults to the built-in solar system")
    parser.add_argument("--list-templates", action="store_true", help="List available templates and exit")
    parser.add_argument("--fill", default=None, help="Disc fill colour, e.g. '#fff'")
    parser.add_argument("--stroke", default=None, help="Disc outline colour, e.g. '#000'")
    parser.add_argument("--ring", default=None, help="Ring colour, e.g. 'rgba(220,220,220,0.8)'")
    parser.add_argument("--angle", type=float, default=None, help="Viewing angle in radians")
    parser.add_argument("--time-step", type=float, default=None, help="Simulated seconds per frame")
    parser.add_argument("--size", type=int, nargs=2, metavar=("W", "H"), default=(VIEW_WIDTH, VIEW_HEIGHT))
    parser.add_argument("--inspector", action="store_true", help="Open the read-only inspector panel")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def build_options(args: argparse.Namespace) -> dict:
    """Mount keyword options from the command line and the chosen template."""
    options = {}
    if args.template:
        preset = load_template(args.template)
        options["catalog"] = preset.catalog
        if preset.viewing_angle is not None:
            options["viewing_angle"] = preset.viewing_angle
        if preset.time_step is not None:
            options["time_step"] = preset.time_step
    for key in ("fill", "stroke", "ring"):
        value = getattr(args, key)
        if value is not None:
            options[key] = value
    if args.angle is not None:
        options["viewing_angle"] = args.angle
    if args.time_step is not None:
        options["time_step"] = args.time_step
    return options


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.list_templates:
        for fn, display in list_templates():
            print(f"{fn}\t{display}")
        return 0

    try:
        options = build_options(args)
    except (CatalogError, OSError, ValueError) as e:
        log.error("Invalid configuration: %s", e)
        return 2

    window = PygameWindow(*args.size)
    inspector = None
    if args.inspector:
        from globes.inspector import Inspector
        options.setdefault("catalog", solar_system())
        inspector = Inspector(options["catalog"])
        options["on_frame"] = inspector

    teardown = globes(window, **options)
    window.on_close = teardown
    if inspector is not None:
        inspector.on_close = teardown

    try:
        window.run()
    finally:
        teardown()
        if inspector is not None:
            inspector.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
