#!/usr/bin/env python3
"""
Mounting a Globes view into a host.

What this module does
- Creates the drawing surface through the host, fits the scale to the host size, listens
  for resizes and starts the frame loop.
- Returns a teardown callable that stops the loop, detaches the resize listener and
  removes the surface. Calling it more than once is harmless.

Host interface
- create_surface() -> Surface (with resize(width, height, pixel_ratio)) or None
- remove_surface(surface)
- size() -> (width, height, pixel_ratio)
- add_resize_listener(fn) / remove_resize_listener(fn); fn(width, height, pixel_ratio)
- request_frame(callback) -> handle / cancel_frame(handle)
"""
import logging
from typing import Any, Callable, Optional, Protocol, Tuple

from .camera import Viewport
from .catalog import Catalog, solar_system
from .constants import DEFAULT_FILL, DEFAULT_RING, DEFAULT_STROKE, DEFAULT_TIME_STEP, DEFAULT_VIEWING_ANGLE
from .data_models import BodyState
from .orbital_model import compute_state
from .renderer import DepthSortedRenderer, RenderStyle
from .simulation import FrameLoop, FrameScheduler, SimulationState

log = logging.getLogger(__name__)

ResizeListener = Callable[[float, float, float], None]
FrameObserver = Callable[[SimulationState, Tuple[BodyState, ...], Tuple[BodyState, ...]], None]


class SurfaceError(RuntimeError):
    """Raised when the host cannot provide a drawable surface."""


class Host(FrameScheduler, Protocol):
    def create_surface(self) -> Any: ...

    def remove_surface(self, surface: Any) -> None: ...

    def size(self) -> Tuple[float, float, float]: ...

    def add_resize_listener(self, listener: ResizeListener) -> None: ...

    def remove_resize_listener(self, listener: ResizeListener) -> None: ...


def globes(host: Host,
           fill=DEFAULT_FILL,
           stroke=DEFAULT_STROKE,
           ring=DEFAULT_RING,
           catalog: Optional[Catalog] = None,
           viewing_angle: float = DEFAULT_VIEWING_ANGLE,
           time_step: float = DEFAULT_TIME_STEP,
           on_frame: Optional[FrameObserver] = None) -> Callable[[], None]:
    """
    Mount an animated solar system view into host and return its teardown function.

    Args:
        host: container, resize source and frame scheduler.
        fill, stroke, ring: colours for discs, outlines and rings.
        catalog: bodies to show; defaults to the built-in solar system.
        viewing_angle: fixed tilt of the orbital plane in radians.
        time_step: simulated seconds added per frame.
        on_frame: optional observer called after each frame is drawn.

    Raises:
        SurfaceError: the host returned no surface.
        ValueError: invalid colours or time step.
    """
    if catalog is None:
        catalog = solar_system()
    elif not isinstance(catalog, Catalog):
        catalog = Catalog(catalog)

    style = RenderStyle.from_options({"fill": fill, "stroke": stroke, "ring": ring})
    sim = SimulationState(viewing_angle=viewing_angle, time_step=time_step)
    renderer = DepthSortedRenderer(style, viewing_angle)
    extent = catalog.max_orbit_extent()
    viewport = Viewport()

    surface = host.create_surface()
    if surface is None:
        raise SurfaceError("Host did not provide a drawing surface")

    def resize(width: float, height: float, pixel_ratio: float = 1.0) -> None:
        surface.resize(width, height, pixel_ratio)
        viewport.set_viewport_size(width, height, pixel_ratio)
        sim.set_scale(viewport.fit_scale(extent))
        log.debug("Resized to %sx%s @%s, scale=%.6g", width, height, pixel_ratio, sim.scale)

    def frame() -> None:
        states = compute_state(catalog, sim.time, sim.viewing_angle, sim.scale)
        order = renderer.render_frame(catalog, states, surface)
        if on_frame is not None:
            on_frame(sim, states, order)
        sim.advance_clock()

    resize(*host.size())
    host.add_resize_listener(resize)
    loop = FrameLoop(host, frame)
    loop.start()
    log.info("Mounted %d bodies (extent %.1f, angle %.3f)", len(catalog), extent, viewing_angle)

    def teardown() -> None:
        if loop.cancelled:
            return
        loop.cancel()
        host.remove_resize_listener(resize)
        host.remove_surface(surface)
        log.info("Torn down after %d frames", sim.frames)

    return teardown
