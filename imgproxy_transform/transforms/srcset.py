"""Responsive ``srcset`` variant planning.

Sizes come either as descriptor strings (``"2x"``, ``"800w"``) or as
mappings like ``{"width": 800, "ratio": "1/1"}``. Each one resolves to a
:class:`Variant` holding the target size and the descriptor to print after
its URL. The variant matching the transform's own size has no descriptor
and reuses the base URL.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from pydantic import BaseModel, ConfigDict, PositiveInt
from pydantic import ValidationError as PydanticValidationError

from imgproxy_transform.errors import ValidationError
from imgproxy_transform.formatting import format_number, round_half_up
from imgproxy_transform.sources.assets import Dimensions
from imgproxy_transform.transforms.ratio import Ratio, is_number, parse_ratio

UNITS = ("x", "w")


class SizeEntry(BaseModel):
    """Structured size with an optional per-entry ratio override."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    width: PositiveInt
    ratio: str | float | None = None


@dataclass(frozen=True, slots=True)
class SizeDescriptor:
    """A parsed ``<number><unit>`` descriptor."""

    value: float
    unit: str

    def __str__(self) -> str:
        return f"{format_number(self.value)}{self.unit}"


@dataclass(frozen=True, slots=True)
class Variant:
    """One srcset candidate. ``descriptor`` is ``None`` for the base URL."""

    width: int
    height: int
    descriptor: str | None = None

    @property
    def is_base(self) -> bool:
        return self.descriptor is None


def parse_size_descriptor(size: str) -> SizeDescriptor:
    """Parse ``"2x"``, ``"1.5x"`` or ``"800w"``."""

    text = size.strip()
    unit = text[-1:]
    if unit not in UNITS:
        raise ValidationError(f"Size descriptor `{size}` must end with `x` or `w`.")
    number = text[:-1]
    if not is_number(number) or float(number) <= 0:
        raise ValidationError(f"Size value `{number}` in `{size}` must be a positive number.")
    return SizeDescriptor(float(number), unit)


def _parse_entry(size: Mapping[str, Any] | SizeEntry) -> SizeEntry:
    if isinstance(size, SizeEntry):
        return size
    if not isinstance(size, Mapping):
        raise ValidationError(f"Invalid size entry `{size!r}`: expected a descriptor string or a mapping.")
    try:
        return SizeEntry.model_validate(dict(size))
    except PydanticValidationError as exc:
        raise ValidationError(f"Invalid size entry `{dict(size)}`: {exc.errors()[0]['msg']}.") from exc


def _height_for(width: float, base: Dimensions, ratio: Ratio | None) -> int:
    if ratio is not None:
        return round_half_up(width * ratio.height / ratio.width)
    if base.width == 0:
        raise ValidationError("Cannot derive srcset heights from a zero base width without a ratio.")
    return round_half_up(base.height * width / base.width)


def plan_variant(size: str | Mapping[str, Any] | SizeEntry, base: Dimensions, ratio: Ratio | None) -> Variant:
    """Resolve a single size against the base dimensions and transform ratio."""

    if not isinstance(size, str):
        entry = _parse_entry(size)
        entry_ratio = parse_ratio(entry.ratio) if entry.ratio is not None else ratio
        return Variant(entry.width, _height_for(entry.width, base, entry_ratio), f"{entry.width}w")

    descriptor = parse_size_descriptor(size)

    if descriptor.unit == "x":
        if descriptor.value == 1:
            return Variant(base.width, base.height)
        return Variant(
            round_half_up(base.width * descriptor.value),
            round_half_up(base.height * descriptor.value),
            str(descriptor),
        )

    if descriptor.value == base.width:
        return Variant(base.width, base.height)
    return Variant(
        round_half_up(descriptor.value),
        _height_for(descriptor.value, base, ratio),
        str(descriptor),
    )


def plan_variants(
    sizes: Iterable[str | Mapping[str, Any] | SizeEntry],
    base: Dimensions,
    ratio: Ratio | None = None,
) -> list[Variant]:
    """Resolve every size in input order."""

    return [plan_variant(size, base, ratio) for size in sizes]
