"""Number formatting shared by URL segments and srcset descriptors."""

from __future__ import annotations

import math


def format_number(value: float | int) -> str:
    """Render ``value`` without a trailing ``.0`` for integral floats."""

    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""

    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)
