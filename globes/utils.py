#!/usr/bin/env python3
"""
General utilities for Globes.
"""
import re
from typing import Optional, Sequence, Tuple, Union

from .vector_utils import clamp

Color = Tuple[int, int, int, int]

_HEX_RE = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_FUNC_RE = re.compile(r"^rgba?\(([^)]*)\)$")


def try_float(val) -> Optional[float]:
    try:
        return float(val)
    except (TypeError, ValueError):
        return None


def _channel(v: float) -> int:
    return int(clamp(round(v), 0, 255))


def parse_color(value: Union[str, Sequence[float]]) -> Color:
    """
    Convert a colour option to an RGBA tuple.

    Accepts '#rgb', '#rgba', '#rrggbb', '#rrggbbaa', 'rgb(r,g,b)', 'rgba(r,g,b,a)'
    (alpha as a 0..1 fraction) and 3- or 4-item sequences of 0..255 channels.
    Raises ValueError for anything else.
    """
    if isinstance(value, str):
        text = value.strip().replace(" ", "")
        m = _HEX_RE.match(text)
        if m:
            digits = m.group(1)
            if len(digits) in (3, 4):
                digits = "".join(ch * 2 for ch in digits)
            channels = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
            if len(channels) == 3:
                channels.append(255)
            return tuple(channels)
        m = _FUNC_RE.match(text.lower())
        if m:
            parts = [try_float(p) for p in m.group(1).split(",")]
            if len(parts) in (3, 4) and None not in parts:
                alpha = parts[3] if len(parts) == 4 else 1.0
                return (_channel(parts[0]), _channel(parts[1]), _channel(parts[2]),
                        _channel(clamp(alpha, 0.0, 1.0) * 255))
        raise ValueError(f"Unrecognised colour: {value!r}")

    try:
        channels = [try_float(c) for c in value]
    except TypeError:
        raise ValueError(f"Unrecognised colour: {value!r}") from None
    if len(channels) not in (3, 4) or None in channels:
        raise ValueError(f"Unrecognised colour: {value!r}")
    if len(channels) == 3:
        channels.append(255)
    return tuple(_channel(c) for c in channels)
