"""Ordered imgproxy processing options.

Each option is stored under its imgproxy short code (``w``, ``rt``, ``g``...)
together with its argument tuple. The rendered segment is the code followed
by the arguments, all joined with ``:``. Insertion order is preserved so the
same calls always produce the same URL and therefore the same signature.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterator
from urllib.parse import quote

from imgproxy_transform.formatting import format_number


class Gravity(str, Enum):
    """imgproxy gravity types."""

    NORTH = "no"
    SOUTH = "so"
    EAST = "ea"
    WEST = "we"
    NORTH_EAST = "noea"
    NORTH_WEST = "nowe"
    SOUTH_EAST = "soea"
    SOUTH_WEST = "sowe"
    CENTER = "ce"
    SMART = "sm"
    FOCUS_POINT = "fp"


def format_argument(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (bool, int, float)):
        return format_number(value)
    return str(value)


class OptionSet:
    """Insertion-ordered mapping of option code to arguments."""

    def __init__(self) -> None:
        self._options: dict[str, tuple[Any, ...]] = {}

    def set(self, name: str, *args: Any) -> OptionSet:
        self._options[name] = args
        return self

    def get(self, name: str) -> tuple[Any, ...] | None:
        return self._options.get(name)

    def remove(self, name: str) -> OptionSet:
        self._options.pop(name, None)
        return self

    def update(self, other: OptionSet) -> OptionSet:
        """Attach every option of ``other`` key by key."""

        for name, args in other.items():
            self.set(name, *args)
        return self

    def items(self) -> Iterator[tuple[str, tuple[Any, ...]]]:
        return iter(list(self._options.items()))

    def __contains__(self, name: object) -> bool:
        return name in self._options

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._options))

    def __len__(self) -> int:
        return len(self._options)

    def __repr__(self) -> str:
        return f"OptionSet({'/'.join(self.to_segments())})"

    def to_segments(self) -> list[str]:
        """Return ``code:arg:arg`` strings in insertion order."""

        return [":".join([name, *map(format_argument, args)]) for name, args in self._options.items()]

    # Geometry

    def with_width(self, width: int) -> OptionSet:
        return self.set("w", int(width))

    def with_height(self, height: int) -> OptionSet:
        return self.set("h", int(height))

    def with_resizing_type(self, resizing_type: str) -> OptionSet:
        return self.set("rt", resizing_type)

    def with_resizing_algorithm(self, algorithm: str) -> OptionSet:
        return self.set("ra", algorithm)

    def with_dpr(self, dpr: float) -> OptionSet:
        return self.set("dpr", dpr)

    def with_enlarge(self, enlarge: bool = True) -> OptionSet:
        return self.set("el", enlarge)

    def with_extend(self, extend: bool = True, gravity: Gravity | None = None) -> OptionSet:
        if gravity is None:
            return self.set("ex", extend)
        return self.set("ex", extend, gravity)

    def with_gravity(self, gravity: Gravity, x: float | None = None, y: float | None = None) -> OptionSet:
        if x is None or y is None:
            return self.set("g", gravity)
        return self.set("g", gravity, x, y)

    def with_padding(self, top: int, right: int, bottom: int, left: int) -> OptionSet:
        return self.set("pd", top, right, bottom, left)

    def with_auto_rotate(self, auto_rotate: bool = True) -> OptionSet:
        return self.set("ar", auto_rotate)

    def with_rotate(self, angle: int) -> OptionSet:
        return self.set("rot", angle)

    # Appearance

    def with_background_hex(self, hex_color: str) -> OptionSet:
        return self.set("bg", hex_color)

    def with_blur(self, sigma: float) -> OptionSet:
        return self.set("bl", sigma)

    def with_sharpen(self, sigma: float) -> OptionSet:
        return self.set("sh", sigma)

    def with_pixelate(self, size: int) -> OptionSet:
        return self.set("pix", size)

    def with_brightness(self, brightness: int) -> OptionSet:
        return self.set("br", brightness)

    def with_contrast(self, contrast: float) -> OptionSet:
        return self.set("co", contrast)

    def with_saturation(self, saturation: float) -> OptionSet:
        return self.set("sa", saturation)

    # Output

    def with_quality(self, quality: int) -> OptionSet:
        return self.set("q", int(quality))

    def with_format(self, extension: str) -> OptionSet:
        return self.set("f", extension)

    def with_png_options(self, interlaced: bool = True) -> OptionSet:
        return self.set("pngo", interlaced)

    def with_page(self, page: int) -> OptionSet:
        return self.set("pg", page)

    def with_cache_buster(self, value: str) -> OptionSet:
        return self.set("cb", quote(str(value), safe=""))

    def with_filename(self, filename: str) -> OptionSet:
        return self.set("fn", quote(str(filename), safe=""))
