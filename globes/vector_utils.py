#!/usr/bin/env python3
"""
Vector helper functions for small tuple-based vectors.

These are small, fast functions used by the orbital model; they work
on tuples of any matching length.
"""
from typing import Tuple

Vec = Tuple[float, ...]


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


def vec_add(a: Vec, b: Vec) -> Vec:
    return tuple(p + q for p, q in zip(a, b))
