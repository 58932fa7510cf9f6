#!/usr/bin/env python3
"""
Pygame drawing surface for Globes.

Implements the renderer's Surface primitives on top of a pygame Surface. All inputs are in
logical pixels; the Viewport converts them to device pixels so high-density displays get
crisp output without the renderer knowing about it.
"""
import math
from typing import List, Optional, Sequence, Tuple

import pygame
from pygame import gfxdraw

from .camera import Viewport
from .constants import ARC_SEGMENTS, BACKGROUND_COLOR, OUTLINE_WIDTH, SAFE_COORD_LIMIT
from .utils import Color

Point = Tuple[float, float]


def _safe_point(pt) -> Optional[Tuple[int, int]]:
    try:
        x, y = int(round(pt[0])), int(round(pt[1]))
    except (TypeError, ValueError, OverflowError):
        return None
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None


def arc_points(center: Point, rx: float, ry: float, start: float, end: float,
               segments: int = ARC_SEGMENTS) -> List[Point]:
    """
    Sample an elliptical arc, clockwise in screen space (y down), from start to end radians.

    A flat ellipse (ry == 0) samples to points on a straight line.
    """
    span = end - start
    if span <= 0:
        return []
    steps = max(2, int(math.ceil(segments * span / (2 * math.pi))))
    cx, cy = center
    return [
        (cx + rx * math.cos(start + span * k / steps), cy + ry * math.sin(start + span * k / steps))
        for k in range(steps + 1)
    ]


class PygameSurface:
    """
    Surface adapter over a pygame Surface.

    If follow_display is set, the target is re-read from pygame.display after each resize,
    since the host recreates the display surface when the window changes size.
    """

    def __init__(self, target: pygame.Surface, viewport: Optional[Viewport] = None,
                 background: Color = BACKGROUND_COLOR, follow_display: bool = False):
        self.target = target
        if viewport is None:
            w, h = target.get_size()
            viewport = Viewport(w, h)
        self.viewport = viewport
        self.background = background
        self.follow_display = follow_display

    @property
    def logical_size(self) -> Tuple[float, float]:
        return self.viewport.viewport_size

    def resize(self, width: float, height: float, pixel_ratio: float = 1.0) -> None:
        self.viewport.set_viewport_size(width, height, pixel_ratio)
        if self.follow_display:
            current = pygame.display.get_surface()
            if current is not None:
                self.target = current

    def clear(self) -> None:
        self.target.fill(self.background)

    def circle(self, center: Point, radius: float, fill: Color, stroke: Color,
               width: float = OUTLINE_WIDTH) -> None:
        pos = _safe_point(self.viewport.to_device(center))
        if pos is None:
            return
        r = max(1, int(round(radius * self.viewport.pixel_ratio)))
        if r > SAFE_COORD_LIMIT:
            return
        gfxdraw.filled_circle(self.target, pos[0], pos[1], r, fill)
        for k in range(max(1, int(round(width * self.viewport.pixel_ratio)))):
            if r - k < 1:
                break
            gfxdraw.aacircle(self.target, pos[0], pos[1], r - k, stroke)

    def ellipse_arc(self, center: Point, rx: float, ry: float, start: float, end: float,
                    color: Color, width: float) -> None:
        points = [self.viewport.to_device(p) for p in arc_points(center, rx, ry, start, end)]
        pts = [p for p in (_safe_point(q) for q in points) if p is not None]
        if len(pts) < 2:
            return
        line_width = max(1, int(round(width * self.viewport.pixel_ratio)))
        if len(color) == 4 and color[3] < 255:
            self._blend_lines(pts, color, line_width)
        else:
            pygame.draw.lines(self.target, color, False, pts, line_width)

    def _blend_lines(self, pts: Sequence[Tuple[int, int]], color: Color, line_width: int) -> None:
        # pygame.draw writes alpha straight through, so translucent strokes go via a layer.
        pad = line_width + 1
        x0 = min(p[0] for p in pts) - pad
        y0 = min(p[1] for p in pts) - pad
        x1 = max(p[0] for p in pts) + pad
        y1 = max(p[1] for p in pts) + pad
        layer = pygame.Surface((x1 - x0 + 1, y1 - y0 + 1), pygame.SRCALPHA)
        local = [(p[0] - x0, p[1] - y0) for p in pts]
        pygame.draw.lines(layer, color, False, local, line_width)
        self.target.blit(layer, (x0, y0))
