"""
Pytest fixtures for the Globes test suite.

FakeSurface records drawing calls instead of drawing; FakeHost plays container, resize
source and frame scheduler so the frame loop can be stepped one frame at a time.
"""
import itertools

import pytest

from globes.catalog import Catalog
from globes.data_models import CelestialBody


class FakeSurface:
    def __init__(self, width=1000, height=1000):
        self.logical_size = (width, height)
        self.pixel_ratio = 1.0
        self.ops = []

    def resize(self, width, height, pixel_ratio=1.0):
        self.logical_size = (width, height)
        self.pixel_ratio = pixel_ratio
        self.ops.append(("resize", width, height, pixel_ratio))

    def clear(self):
        self.ops.append(("clear",))

    def circle(self, center, radius, fill, stroke, width=1):
        self.ops.append(("circle", center, radius, fill, stroke, width))

    def ellipse_arc(self, center, rx, ry, start, end, color, width):
        self.ops.append(("arc", center, rx, ry, start, end, color, width))

    def calls(self, kind):
        return [op for op in self.ops if op[0] == kind]


class FakeHost:
    def __init__(self, width=1000, height=1000, pixel_ratio=1.0, provide_surface=True):
        self._size = (width, height, pixel_ratio)
        self.provide_surface = provide_surface
        self.surface = None
        self.removed = []
        self.listeners = []
        self.pending = {}
        self.cancelled = []
        self._handles = itertools.count(1)

    def create_surface(self):
        if not self.provide_surface:
            return None
        self.surface = FakeSurface(*self._size[:2])
        return self.surface

    def remove_surface(self, surface):
        self.removed.append(surface)

    def size(self):
        return self._size

    def add_resize_listener(self, listener):
        self.listeners.append(listener)

    def remove_resize_listener(self, listener):
        self.listeners.remove(listener)

    def request_frame(self, callback):
        handle = next(self._handles)
        self.pending[handle] = callback
        return handle

    def cancel_frame(self, handle):
        self.cancelled.append(handle)
        self.pending.pop(handle, None)

    def resize(self, width, height, pixel_ratio=1.0):
        self._size = (width, height, pixel_ratio)
        for listener in list(self.listeners):
            listener(width, height, pixel_ratio)

    def run_frames(self, n=1):
        for _ in range(n):
            pending, self.pending = self.pending, {}
            for callback in pending.values():
                callback()


@pytest.fixture
def fake_surface():
    return FakeSurface()


@pytest.fixture
def fake_host():
    return FakeHost()


@pytest.fixture
def simple_catalog():
    """Central body plus one planet: period 100, distance 10."""
    return Catalog([
        CelestialBody("Star", 10.0, 0.0, 1.0),
        CelestialBody("Planet", 1.0, 10.0, 100.0, 0),
    ])


@pytest.fixture
def moon_catalog():
    """Star, planet and a moon around the planet; the moon is listed first."""
    return Catalog([
        CelestialBody("Moon", 0.5, 3.0, 7.0, 2),
        CelestialBody("Star", 10.0, 0.0, 1.0),
        CelestialBody("Planet", 2.0, 40.0, 100.0, 1),
    ])


@pytest.fixture
def ringed_body():
    return CelestialBody("Ringed", 167.0, 3500.0, 1000.0, 0, ring_span=(267.0, 367.0))


@pytest.fixture
def host_factory():
    return FakeHost
