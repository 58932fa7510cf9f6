#!/usr/bin/env python3
"""
Orbital model for Globes.

Responsibilities
- Compute every body's screen-space position and apparent radius for a simulated instant.
- Compose satellite positions on top of their parent's current position.

Model
- Orbits are circles at a constant angular rate: phase = 2*pi*t / period.
- The orbit plane is tilted by a fixed viewing angle. The in-plane axis that is not
  horizontal is split into a vertical screen component (sin(angle)) and a synthetic
  depth component (cos(angle)). This is an orthographic tilt, not a perspective projection.
- Distances are scaled before composition, so satellite chains compound correctly.

The model is a pure function of (catalog, time, viewing angle, scale). It keeps no state
between calls and can be evaluated at any timestamp directly.
"""
import math
from typing import Dict, Tuple

from .catalog import Catalog
from .constants import CENTRAL_RADIUS_FLOOR, QUARTER_TURN, SATELLITE_RADIUS_FLOOR
from .data_models import BodyState, CelestialBody
from .vector_utils import vec_add

ORIGIN = (0.0, 0.0, 0.0)


def orbit(t: float, period: float, offset: float = 0.0) -> float:
    """Cosine of the orbital phase at time t, optionally shifted by offset radians."""
    return math.cos(t / period * 2 * math.pi + offset)


def radius_floor(body: CelestialBody) -> float:
    return CENTRAL_RADIUS_FLOOR if body.is_central else SATELLITE_RADIUS_FLOOR


def orbital_offset(body: CelestialBody, t: float, viewing_angle: float,
                   scale: float) -> Tuple[float, float, float]:
    """Position of a body relative to its parent, in scaled units."""
    dist = body.orbit_distance * scale
    along = orbit(t, body.period)
    across = orbit(t, body.period, QUARTER_TURN)
    return (
        dist * along,
        math.sin(viewing_angle) * dist * across,
        math.cos(viewing_angle) * dist * across,
    )


def compute_state(catalog: Catalog, simulated_time: float, viewing_angle: float,
                  scale: float) -> Tuple[BodyState, ...]:
    """
    Evaluate all bodies at simulated_time.

    Args:
        catalog: validated Catalog; bodies are evaluated in catalog.order.
        simulated_time: seconds of simulated time.
        viewing_angle: tilt of the orbital plane in radians.
        scale: logical pixels per catalog unit.

    Returns:
        Tuple of BodyState, indexed identically to the catalog.
    """
    states: Dict[int, BodyState] = {}
    for i in catalog.order:
        body = catalog[i]
        parent = ORIGIN if body.parent_index is None else states[body.parent_index].position
        x, y, z = vec_add(parent, orbital_offset(body, simulated_time, viewing_angle, scale))
        states[i] = BodyState(
            index=i,
            x=x,
            y=y,
            z=z,
            screen_radius=max(radius_floor(body), body.base_radius * scale),
            orbit_radius_scaled=body.orbit_distance * scale,
        )
    return tuple(states[i] for i in range(len(catalog)))
