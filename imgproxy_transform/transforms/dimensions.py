"""Target dimension resolution."""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from imgproxy_transform.errors import DimensionError, ValidationError
from imgproxy_transform.formatting import round_half_up
from imgproxy_transform.sources.assets import Dimensions
from imgproxy_transform.transforms.ratio import is_number, parse_ratio

logger = logging.getLogger(__name__)


def coerce_dimension(value: Any, name: str) -> int | None:
    """Return ``value`` as a non-negative ``int``, or ``None`` when unset."""

    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {name} `{value}`.")
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str) and is_number(value):
        number = float(value)
    else:
        raise ValidationError(f"Invalid {name} `{value}`.")
    if number < 0:
        raise ValidationError(f"Invalid {name} `{value}`.")
    return round_half_up(number)


def resolve_dimensions(
    params: Mapping[str, Any],
    detect: Callable[[], Dimensions | None],
) -> Dimensions:
    """Work out the target size from ``params``.

    Explicit width and height win, then a ratio combined with one explicit
    dimension. Anything else needs the source size, which ``detect`` is asked
    for exactly once. Derived values are rounded half-up.
    """

    width = coerce_dimension(params.get("width"), "width")
    height = coerce_dimension(params.get("height"), "height")
    ratio = parse_ratio(params["ratio"]) if params.get("ratio") is not None else None

    if width is not None and height is not None:
        return Dimensions(width, height)
    if ratio is not None and width is not None:
        return Dimensions(width, round_half_up(width * ratio.height / ratio.width))
    if ratio is not None and height is not None:
        return Dimensions(round_half_up(height * ratio.width / ratio.height), height)

    source = detect()
    if source is None:
        raise DimensionError("Image dimensions are missing and could not be auto-detected.")
    logger.debug("Resolving dimensions from detected source size %sx%s", source.width, source.height)

    if width is not None:
        return Dimensions(width, round_half_up(source.height * width / source.width))
    if height is not None:
        return Dimensions(round_half_up(source.width * height / source.height), height)
    if ratio is not None:
        return Dimensions(source.width, round_half_up(source.width * ratio.height / ratio.width))
    return Dimensions(source.width, source.height)
