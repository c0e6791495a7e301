"""Aspect ratio parsing."""

from __future__ import annotations

import re
from typing import NamedTuple

from imgproxy_transform.errors import ValidationError

_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


class Ratio(NamedTuple):
    width: float
    height: float


def is_number(value: str) -> bool:
    """Return ``True`` for plain decimal numbers (no ``inf``/``nan`` spellings)."""

    return _NUMBER.fullmatch(value.strip()) is not None


def parse_ratio(value: str | float | int) -> Ratio:
    """Parse ``16:9``, ``3/2`` or a plain number like ``1.778`` into a :class:`Ratio`.

    Zero and negative components are rejected since they cannot describe a box.
    """

    error = ValidationError(f"Invalid ratio `{value}`. Expected `16:9`, `3/2`, or a float like `1.778`.")

    if isinstance(value, bool):
        raise error
    if isinstance(value, (int, float)):
        ratio = Ratio(float(value), 1.0)
    elif isinstance(value, str) and is_number(value):
        ratio = Ratio(float(value), 1.0)
    elif isinstance(value, str):
        separator = "/" if "/" in value else ":"
        parts = value.split(separator)
        if len(parts) != 2 or not all(is_number(part) for part in parts):
            raise error
        ratio = Ratio(float(parts[0]), float(parts[1]))
    else:
        raise error

    if not (ratio.width > 0 and ratio.height > 0):
        raise error
    return ratio
