#!/usr/bin/env python3
"""
Body catalogs for Globes.

A Catalog is an immutable, validated sequence of CelestialBody entries. Parent
references are resolved into an explicit evaluation order (central body first,
then every body after its parent) so the list order itself carries no meaning.

Validation happens once, at construction. A malformed catalog is a
configuration error and raises CatalogError instead of misrendering later.
"""
import logging
from typing import Dict, Iterator, List, Sequence, Tuple

from .constants import (
    DAY,
    EARTH_RADIUS,
    HOUR,
    JUPITER_RADIUS,
    MOON_RADIUS,
    NEPTUNE_RADIUS,
    SATURN_RADIUS,
    SUN_RADIUS,
    URANUS_RADIUS,
)
from .data_models import CelestialBody

log = logging.getLogger(__name__)


class CatalogError(ValueError):
    """Raised when a body catalog cannot be evaluated."""


class Catalog:
    """
    Validated body catalog.

    Attributes:
        bodies: tuple of CelestialBody, in catalog (index) order.
        order: tuple of indices in which parents precede their satellites.
        root: index of the central body.
    """

    def __init__(self, bodies: Sequence[CelestialBody]):
        self.bodies: Tuple[CelestialBody, ...] = tuple(bodies)
        _validate_bodies(self.bodies)
        self.root, self.order = _evaluation_order(self.bodies)

    def __len__(self) -> int:
        return len(self.bodies)

    def __getitem__(self, index: int) -> CelestialBody:
        return self.bodies[index]

    def __iter__(self) -> Iterator[CelestialBody]:
        return iter(self.bodies)

    def __repr__(self) -> str:
        return f"Catalog({[b.name for b in self.bodies]!r})"

    def index_of(self, name: str) -> int:
        for i, b in enumerate(self.bodies):
            if b.name == name:
                return i
        raise KeyError(name)

    def max_orbit_extent(self) -> float:
        """
        Largest distance from the central body reachable along a parent chain.

        Satellites add their own orbit distance to their parent's, so a moon can
        extend past its planet's orbit.
        """
        extent: Dict[int, float] = {}
        for i in self.order:
            b = self.bodies[i]
            base = 0.0 if b.parent_index is None else extent[b.parent_index]
            extent[i] = base + abs(b.orbit_distance)
        return max(extent.values())


def _validate_bodies(bodies: Tuple[CelestialBody, ...]) -> None:
    if not bodies:
        raise CatalogError("Catalog must contain at least the central body")

    roots = [i for i, b in enumerate(bodies) if b.parent_index is None]
    if len(roots) != 1:
        raise CatalogError(f"Catalog needs exactly one central body, found {len(roots)}")

    n = len(bodies)
    for i, b in enumerate(bodies):
        if not b.period > 0:
            raise CatalogError(f"{b.name}: period must be positive, got {b.period!r}")
        if b.parent_index is not None:
            if not 0 <= b.parent_index < n:
                raise CatalogError(f"{b.name}: parent index {b.parent_index} is out of range")
            if b.parent_index == i:
                raise CatalogError(f"{b.name}: a body cannot orbit itself")
        if b.ring_span is not None:
            if len(b.ring_span) != 2:
                raise CatalogError(f"{b.name}: ring span must be an (inner, outer) pair")
            inner, outer = b.ring_span
            if inner < 0 or outer < inner:
                raise CatalogError(f"{b.name}: invalid ring span {b.ring_span!r}")
            if not b.base_radius > 0:
                raise CatalogError(f"{b.name}: a ringed body needs a positive radius")


def _evaluation_order(bodies: Tuple[CelestialBody, ...]) -> Tuple[int, Tuple[int, ...]]:
    """Breadth-first walk from the central body; anything not reached is part of a cycle."""
    children: Dict[int, List[int]] = {i: [] for i in range(len(bodies))}
    root = -1
    for i, b in enumerate(bodies):
        if b.parent_index is None:
            root = i
        else:
            children[b.parent_index].append(i)

    order = [root]
    for i in order:
        order.extend(children[i])

    if len(order) != len(bodies):
        stranded = sorted(set(range(len(bodies))) - set(order))
        names = ", ".join(bodies[i].name for i in stranded)
        raise CatalogError(f"Parent references form a cycle: {names}")
    return root, tuple(order)


def solar_system() -> Catalog:
    """
    Sun, the eight planets, the Moon and the Galilean moons.

    Sizes are exaggerated and compressed for legibility; planets orbit at the
    Sun's radius plus an offset, moons at their planet's radius plus an offset.
    Saturn and Uranus carry rings.
    """
    S, E, J = SUN_RADIUS, EARTH_RADIUS, JUPITER_RADIUS
    SA, U = SATURN_RADIUS, URANUS_RADIUS
    bodies = [
        CelestialBody("Sun", S, 0.0, 1.0),
        CelestialBody("Mercury", 7.0, S + 20, 58.6 * DAY, 0),
        CelestialBody("Venus", 17.0, S + 50, 243 * DAY, 0),
        CelestialBody("Earth", E, S + 150, 365.256 * DAY, 0),
        CelestialBody("Moon", MOON_RADIUS, E + 50, 29.5 * DAY, 3),
        CelestialBody("Mars", 9.76, S + 250, 687 * DAY, 0),
        CelestialBody("Jupiter", J, S + 700, 4333 * DAY, 0),
        CelestialBody("Io", 5.25, J + 20, 42.5 * HOUR, 6),
        CelestialBody("Europa", 4.49, J + 40, 3.5 * DAY, 6),
        CelestialBody("Ganymede", 7.57, J + 70, 7.155 * DAY, 6),
        CelestialBody("Callisto", 7.4, J + 200, 16.689 * DAY, 6),
        CelestialBody("Saturn", SA, S + 1500, 10756 * DAY, 0, ring_span=(SA + 100, SA + 200)),
        CelestialBody("Uranus", U, S + 2500, 30688 * DAY, 0, ring_span=(U + 100, U + 200)),
        CelestialBody("Neptune", NEPTUNE_RADIUS, S + 4500, 60182 * DAY, 0),
    ]
    catalog = Catalog(bodies)
    log.debug("Built-in solar system catalog: %d bodies", len(catalog))
    return catalog
