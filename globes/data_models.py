#!/usr/bin/env python3
"""
Data models for Globes.

This module defines the immutable records shared between the orbital model,
the renderer and the catalog loaders.

Units and usage
- CelestialBody fields are unscaled catalog units; period is in seconds of simulated time.
- BodyState fields are scaled screen-space units (logical pixels), relative to the view centre.
- A BodyState tuple is a per-frame snapshot; a new one is produced every frame.
"""
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class CelestialBody:
    """
    Static catalog entry.

    Fields:
    - name: Identifier for the body
    - base_radius: Visual size (unscaled)
    - orbit_distance: Distance from the parent's centre (unscaled)
    - period: Orbital period in simulated seconds; larger is slower
    - parent_index: Catalog index of the body it orbits, None for the central body
    - ring_span: Optional (inner, outer) unscaled ring radii
    """
    name: str
    base_radius: float
    orbit_distance: float
    period: float
    parent_index: Optional[int] = None
    ring_span: Optional[Tuple[float, float]] = None

    @property
    def is_central(self) -> bool:
        return self.parent_index is None

    @property
    def has_ring(self) -> bool:
        return self.ring_span is not None


@dataclass(frozen=True)
class BodyState:
    """Position and apparent size of one body at one simulated instant."""
    index: int
    x: float
    y: float
    z: float
    screen_radius: float
    orbit_radius_scaled: float

    @property
    def position(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class RingGeometry:
    """
    Elliptical arc describing a ring for one frame.

    Angles are in radians, measured clockwise in screen space (y down), with
    -pi/2 at the top of the ellipse.
    """
    radius: float
    vertical_radius: float
    line_width: float
    hidden_half_angle: float
    start_angle: float
    end_angle: float

    @property
    def span(self) -> float:
        return self.end_angle - self.start_angle
