#!/usr/bin/env python3
"""
Depth-sorted renderer for Globes.

Bodies are painted back to front: the state with the largest synthetic depth (z) is the
farthest from the viewer and is drawn first. Each body draws its disc, then its ring.

Rings are stroked elliptical arcs. The part of the ring that passes behind the planet is
left out of the arc instead of being masked, which gives the usual "behind on the near
side, in front on the far side" look with plain 2D drawing calls.
"""
import math
from dataclasses import dataclass
from operator import attrgetter
from typing import Mapping, Optional, Protocol, Sequence, Tuple

from .catalog import Catalog
from .constants import (
    DEFAULT_FILL,
    DEFAULT_RING,
    DEFAULT_STROKE,
    DEFAULT_VIEWING_ANGLE,
    MIN_RING_WIDTH,
    OUTLINE_WIDTH,
    SATELLITE_RADIUS_FLOOR,
)
from .data_models import BodyState, CelestialBody, RingGeometry
from .utils import Color, parse_color
from .vector_utils import clamp

Point = Tuple[float, float]


class Surface(Protocol):
    """Drawing primitives the renderer needs, in logical pixels."""

    @property
    def logical_size(self) -> Tuple[float, float]: ...

    def clear(self) -> None: ...

    def circle(self, center: Point, radius: float, fill: Color, stroke: Color,
               width: float = OUTLINE_WIDTH) -> None: ...

    def ellipse_arc(self, center: Point, rx: float, ry: float, start: float, end: float,
                    color: Color, width: float) -> None: ...


@dataclass(frozen=True)
class RenderStyle:
    """Colours for discs, outlines and rings as RGBA tuples."""
    fill: Color = parse_color(DEFAULT_FILL)
    stroke: Color = parse_color(DEFAULT_STROKE)
    ring: Color = parse_color(DEFAULT_RING)

    @classmethod
    def from_options(cls, options: Optional[Mapping] = None) -> "RenderStyle":
        """Build a style from 'fill', 'stroke' and 'ring' options; missing keys use defaults."""
        options = dict(options or {})
        unknown = set(options) - {"fill", "stroke", "ring"}
        if unknown:
            raise ValueError(f"Unknown style options: {sorted(unknown)}")
        return cls(
            fill=parse_color(options.get("fill", DEFAULT_FILL)),
            stroke=parse_color(options.get("stroke", DEFAULT_STROKE)),
            ring=parse_color(options.get("ring", DEFAULT_RING)),
        )


def depth_order(states: Sequence[BodyState]) -> Tuple[BodyState, ...]:
    """Back-to-front order: descending z, ties keep their catalog order."""
    return tuple(sorted(states, key=attrgetter("z"), reverse=True))


def is_drawable(body: CelestialBody, state: BodyState) -> bool:
    """Satellites clamped down to the floor are skipped; the central body is always drawn."""
    return state.screen_radius > SATELLITE_RADIUS_FLOOR or body.is_central


def ring_geometry(body: CelestialBody, state: BodyState, viewing_angle: float) -> RingGeometry:
    """
    Ellipse and visible arc of a body's ring.

    The ring scales with the body's drawn radius (after the floor clamp), not with the raw
    scale factor. The hidden arc is centred on the top of the ellipse (the far side of the
    ring, behind the disc); it grows towards edge-on and vanishes once the disc no longer
    reaches the ring's inner edge.
    """
    inner, outer = body.ring_span
    ring_scale = state.screen_radius / body.base_radius
    radius = ring_scale * (inner + outer) / 2
    tilt = abs(math.sin(viewing_angle))
    flat = abs(math.cos(viewing_angle))

    if tilt * ring_scale * inner >= state.screen_radius * flat or radius <= 0:
        hidden = 0.0
    else:
        hidden = flat * math.asin(min(1.0, state.screen_radius / radius))
    hidden = clamp(hidden, 0.0, math.pi)

    return RingGeometry(
        radius=radius,
        vertical_radius=radius * tilt,
        line_width=max(MIN_RING_WIDTH, math.sin(viewing_angle) * radius + 1),
        hidden_half_angle=hidden,
        start_angle=-math.pi / 2 + hidden,
        end_angle=3 * math.pi / 2 - hidden,
    )


class DepthSortedRenderer:
    """
    Draws one frame of body states onto a Surface.

    Holds only configuration (style and viewing angle); every frame's data comes in
    through render_frame.
    """

    def __init__(self, style: Optional[RenderStyle] = None,
                 viewing_angle: float = DEFAULT_VIEWING_ANGLE):
        self.style = style or RenderStyle()
        self.viewing_angle = viewing_angle

    def render_frame(self, catalog: Catalog, states: Sequence[BodyState],
                     surface: Surface) -> Tuple[BodyState, ...]:
        """Clear the surface and paint every body back to front. Returns the draw order."""
        w, h = surface.logical_size
        cx, cy = w / 2, h / 2
        surface.clear()

        order = depth_order(states)
        for state in order:
            body = catalog[state.index]
            center = (cx + state.x, cy + state.y)

            if is_drawable(body, state):
                surface.circle(center, state.screen_radius, self.style.fill, self.style.stroke,
                               OUTLINE_WIDTH)

            if body.has_ring:
                ring = ring_geometry(body, state, self.viewing_angle)
                surface.ellipse_arc(center, ring.radius, ring.vertical_radius,
                                    ring.start_angle, ring.end_angle,
                                    self.style.ring, ring.line_width)
        return order
