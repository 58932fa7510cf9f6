"""
Tests for depth sorting, ring geometry and frame rendering.
"""

import math
import pytest

from globes.catalog import Catalog, solar_system
from globes.constants import SATELLITE_RADIUS_FLOOR
from globes.data_models import BodyState, CelestialBody
from globes.orbital_model import compute_state
from globes.renderer import (
    DepthSortedRenderer,
    RenderStyle,
    depth_order,
    is_drawable,
    ring_geometry,
)

ANGLE = -0.3


def state(index, z, radius=5.0, x=0.0, y=0.0):
    return BodyState(index=index, x=x, y=y, z=z, screen_radius=radius, orbit_radius_scaled=0.0)


class TestDepthOrder:

    def test_descending_z(self):
        order = depth_order([state(0, 1.0), state(1, 5.0), state(2, -3.0)])
        assert [s.index for s in order] == [1, 0, 2]

    def test_ties_keep_catalog_order(self):
        order = depth_order([state(0, 2.0), state(1, 2.0), state(2, 7.0), state(3, 2.0)])
        assert [s.index for s in order] == [2, 0, 1, 3]

    def test_repeatable(self):
        states = compute_state(solar_system(), 8.8e7, ANGLE, 0.08)
        assert depth_order(states) == depth_order(states)

    def test_does_not_mutate_input(self):
        states = [state(0, 1.0), state(1, 5.0)]
        depth_order(states)
        assert [s.index for s in states] == [0, 1]


class TestIsDrawable:

    def test_floored_satellite_skipped(self):
        moon = CelestialBody("Moon", 1.0, 10.0, 1.0, 0)
        assert not is_drawable(moon, state(1, 0.0, radius=SATELLITE_RADIUS_FLOOR))
        assert is_drawable(moon, state(1, 0.0, radius=0.6))

    def test_central_always_drawn(self):
        sun = CelestialBody("Sun", 1.0, 0.0, 1.0)
        assert is_drawable(sun, state(0, 0.0, radius=0.51))


class TestRingGeometry:

    def test_radius_from_clamped_screen_radius(self, ringed_body):
        ring = ring_geometry(ringed_body, state(1, 0.0, radius=0.5), ANGLE)
        assert ring.radius == pytest.approx(0.5 / 167.0 * 317.0)

    def test_vertical_radius_and_width(self, ringed_body):
        ring = ring_geometry(ringed_body, state(1, 0.0, radius=16.7), ANGLE)
        assert ring.radius == pytest.approx(31.7)
        assert ring.vertical_radius == pytest.approx(31.7 * math.sin(0.3))
        assert ring.line_width == 1.0

    def test_width_follows_signed_tilt(self, ringed_body):
        s = state(1, 0.0, radius=12.85)
        assert ring_geometry(ringed_body, s, -0.3).line_width == 1.0
        ring = ring_geometry(ringed_body, s, 0.3)
        assert ring.line_width == pytest.approx(math.sin(0.3) * ring.radius + 1)
        assert ring.line_width > 1.0

    def test_face_on_ring_is_a_line(self, ringed_body):
        ring = ring_geometry(ringed_body, state(1, 0.0, radius=16.7), 0.0)
        assert ring.vertical_radius == 0.0
        assert ring.line_width == 1.0

    def test_width_floor(self, ringed_body):
        ring = ring_geometry(ringed_body, state(1, 0.0, radius=0.5), -0.01)
        assert ring.line_width >= 1.0

    def test_hidden_arc_when_disc_covers_inner_edge(self, ringed_body):
        ring = ring_geometry(ringed_body, state(1, 0.0, radius=16.7), ANGLE)
        expected = math.cos(0.3) * math.asin(167.0 / 317.0)
        assert ring.hidden_half_angle == pytest.approx(expected)
        assert ring.start_angle == pytest.approx(-math.pi / 2 + expected)
        assert ring.end_angle == pytest.approx(3 * math.pi / 2 - expected)

    def test_no_hidden_arc_when_tilted_steeply(self, ringed_body):
        ring = ring_geometry(ringed_body, state(1, 0.0, radius=16.7), -1.0)
        assert ring.hidden_half_angle == 0.0
        assert ring.span == pytest.approx(2 * math.pi)

    def test_hidden_arc_grows_towards_edge_on(self, ringed_body):
        s = state(1, 0.0, radius=16.7)
        hidden = [ring_geometry(ringed_body, s, a).hidden_half_angle for a in [-0.5, -0.3, -0.1, 0.0]]
        assert hidden == sorted(hidden)
        assert hidden[0] > 0.0

    @pytest.mark.parametrize("angle", [a / 10.0 for a in range(-32, 33)])
    @pytest.mark.parametrize("radius", [0.5, 3.0, 16.7, 400.0])
    def test_hidden_half_angle_bounded(self, ringed_body, angle, radius):
        ring = ring_geometry(ringed_body, state(1, 0.0, radius=radius), angle)
        assert 0.0 <= ring.hidden_half_angle <= math.pi
        assert 0.0 <= ring.span <= 2 * math.pi

    def test_ring_touching_planet(self):
        """A ring whose mean radius is inside the disc hides the widest arc."""
        tight = CelestialBody("Tight", 10.0, 100.0, 1.0, 0, ring_span=(0.0, 4.0))
        ring = ring_geometry(tight, state(1, 0.0, radius=10.0), ANGLE)
        assert ring.hidden_half_angle == pytest.approx(math.cos(0.3) * math.pi / 2)


class TestRenderStyle:

    def test_defaults(self):
        style = RenderStyle.from_options()
        assert style.fill == (255, 255, 255, 255)
        assert style.stroke == (0, 0, 0, 255)
        assert style.ring == (220, 220, 220, 204)

    def test_custom(self):
        style = RenderStyle.from_options({"fill": "#336699", "ring": (1, 2, 3)})
        assert style.fill == (0x33, 0x66, 0x99, 255)
        assert style.ring == (1, 2, 3, 255)
        assert style.stroke == (0, 0, 0, 255)

    def test_invalid_colour(self):
        with pytest.raises(ValueError):
            RenderStyle.from_options({"fill": "not-a-colour"})

    def test_unknown_option(self):
        with pytest.raises(ValueError, match="Unknown"):
            RenderStyle.from_options({"glow": "#fff"})


class TestRenderFrame:

    def test_clears_then_draws_back_to_front(self, fake_surface):
        catalog = solar_system()
        states = compute_state(catalog, 3.3e7, ANGLE, 1000 / 13000)
        order = DepthSortedRenderer().render_frame(catalog, states, fake_surface)

        assert fake_surface.ops[0] == ("clear",)
        assert [s.z for s in order] == sorted((s.z for s in states), reverse=True)
        drawn = [op[1] for op in fake_surface.calls("circle")]
        expected = [(500 + s.x, 500 + s.y) for s in order if is_drawable(catalog[s.index], s)]
        assert drawn == expected

    def test_ring_drawn_after_its_disc(self, fake_surface):
        catalog = solar_system()
        states = compute_state(catalog, 0.0, ANGLE, 1000 / 13000)
        DepthSortedRenderer().render_frame(catalog, states, fake_surface)
        saturn = states[catalog.index_of("Saturn")]
        center = (500 + saturn.x, 500 + saturn.y)
        kinds = [(op[0], op[1]) for op in fake_surface.ops[1:]]
        disc = kinds.index(("circle", center))
        assert kinds[disc + 1] == ("arc", center)
        assert len(fake_surface.calls("arc")) == 2

    def test_arc_uses_ring_geometry_and_colour(self, fake_surface):
        catalog = Catalog([
            CelestialBody("Star", 10.0, 0.0, 1.0),
            CelestialBody("Ringed", 167.0, 3500.0, 1000.0, 0, ring_span=(267.0, 367.0)),
        ])
        style = RenderStyle.from_options({"ring": "#123456"})
        states = compute_state(catalog, 0.0, ANGLE, 0.1)
        DepthSortedRenderer(style, ANGLE).render_frame(catalog, states, fake_surface)
        (_, _, rx, ry, start, end, color, width), = fake_surface.calls("arc")
        ring = ring_geometry(catalog[1], states[1], ANGLE)
        assert (rx, ry, start, end, width) == (ring.radius, ring.vertical_radius,
                                               ring.start_angle, ring.end_angle, ring.line_width)
        assert color == (0x12, 0x34, 0x56, 255)

    def test_floored_satellites_not_drawn(self, fake_surface, simple_catalog):
        states = compute_state(simple_catalog, 0.0, ANGLE, 1e-9)
        DepthSortedRenderer().render_frame(simple_catalog, states, fake_surface)
        circles = fake_surface.calls("circle")
        assert len(circles) == 1
        assert circles[0][2] == 0.51

    def test_disc_colours(self, fake_surface, simple_catalog):
        style = RenderStyle.from_options({"fill": "#ff0000", "stroke": "#00ff00"})
        states = compute_state(simple_catalog, 0.0, ANGLE, 1.0)
        DepthSortedRenderer(style).render_frame(simple_catalog, states, fake_surface)
        for op in fake_surface.calls("circle"):
            assert op[3] == (255, 0, 0, 255)
            assert op[4] == (0, 255, 0, 255)
