#!/usr/bin/env python3
"""
Viewport utilities for logical-to-device transforms and fit-to-window scaling.
"""
from typing import Tuple

from .constants import VIEW_HEIGHT, VIEW_WIDTH


class Viewport:
    """
    Maps logical pixels to device pixels and fits the scene scale to the window.

    Attributes:
        viewport_size: (width, height) in logical pixels.
        pixel_ratio: device pixels per logical pixel.
    """

    def __init__(self, width: float = VIEW_WIDTH, height: float = VIEW_HEIGHT,
                 pixel_ratio: float = 1.0):
        self.viewport_size = (width, height)
        self.pixel_ratio = pixel_ratio

    def set_viewport_size(self, w: float, h: float, pixel_ratio: float = 1.0) -> None:
        # Replaces the transform; repeated resizes never compound.
        if w < 0 or h < 0 or pixel_ratio <= 0:
            raise ValueError(f"Invalid viewport {w}x{h} @ {pixel_ratio}")
        self.viewport_size = (w, h)
        self.pixel_ratio = pixel_ratio

    def fit_scale(self, max_extent: float) -> float:
        """Scale at which an orbit of radius max_extent just fits the shorter side."""
        if max_extent <= 0:
            raise ValueError(f"Orbit extent must be positive, got {max_extent!r}")
        return min(self.viewport_size) / (max_extent * 2)

    def to_device(self, pos: Tuple[float, float]) -> Tuple[float, float]:
        return (pos[0] * self.pixel_ratio, pos[1] * self.pixel_ratio)