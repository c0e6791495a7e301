"""Translation of CMS transform params into imgproxy options.

The vocabulary follows Craft CMS image transforms (``mode``, ``quality``,
``format``, ``fill``, ``upscale``, ``interlace``, ``position``) plus options
that only imgproxy offers (``blur``, ``sharpen``, ``pixelate``, ``padding``
and friends).

Reference: https://docs.imgproxy.net/usage/processing
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from imgproxy_transform.errors import ValidationError
from imgproxy_transform.sources.assets import FocalPoint
from imgproxy_transform.urlbuilder.options import Gravity, OptionSet

# Canonical key -> accepted spellings, in priority order.
ALIASES: dict[str, tuple[str, ...]] = {
    "autoRotate": ("autoRotate", "auto-rotate", "auto_rotate", "autorotate"),
    "cacheBuster": ("cacheBuster", "cachebuster"),
    "resizingAlgorithm": ("resizingAlgorithm", "resizing_algorithm"),
}

RESIZE_MODES = {
    "crop": "fill",
    "fit": "fit",
    "stretch": "force",
    "letterbox": "fit",
}

POSITION_GRAVITY = {
    "top-left": Gravity.NORTH_WEST,
    "top-center": Gravity.NORTH,
    "top-right": Gravity.NORTH_EAST,
    "center-left": Gravity.WEST,
    "center-center": Gravity.CENTER,
    "center-right": Gravity.EAST,
    "bottom-left": Gravity.SOUTH_WEST,
    "bottom-center": Gravity.SOUTH,
    "bottom-right": Gravity.SOUTH_EAST,
}

# Param name -> OptionSet method, for plain numeric pass-through.
FILTERS = (
    ("dpr", "with_dpr"),
    ("blur", "with_blur"),
    ("sharpen", "with_sharpen"),
    ("pixelate", "with_pixelate"),
)

ADJUSTMENTS = (
    ("brightness", "with_brightness"),
    ("contrast", "with_contrast"),
    ("saturation", "with_saturation"),
    ("page", "with_page"),
)

_HEX_COLOR = re.compile(r"[0-9a-fA-F]{3}|[0-9a-fA-F]{6}")


@dataclass(slots=True)
class Translation:
    """Options for one URL plus the file extension to append."""

    options: OptionSet
    extension: str | None = None


def normalize_params(params: Mapping[str, Any] | None) -> dict[str, Any]:
    """Fold alias spellings into their canonical key.

    The first truthy spelling wins; if none is truthy the first present one
    is kept so that falsy overrides still override.
    """

    normalized = dict(params or {})
    for canonical, spellings in ALIASES.items():
        present = [normalized.pop(key) for key in spellings if key in normalized]
        if not present:
            continue
        normalized[canonical] = next((value for value in present if value), present[0])
    return normalized


def merge_params(base: Mapping[str, Any] | None, override: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge call-time ``override`` over construction-time ``base``, key for key."""

    merged = normalize_params(base)
    merged.update(normalize_params(override))
    return merged


def _gravity(params: Mapping[str, Any], focal_point: FocalPoint | None, options: OptionSet) -> None:
    if focal_point is not None:
        options.with_gravity(Gravity.FOCUS_POINT, focal_point.x, focal_point.y)
        return
    position = params.get("position")
    if position in POSITION_GRAVITY:
        options.with_gravity(POSITION_GRAVITY[position])


def _pass_through(params: Mapping[str, Any], table: Sequence[tuple[str, str]], options: OptionSet) -> None:
    for key, method in table:
        if params.get(key) is not None:
            getattr(options, method)(params[key])


def _fill(value: Any) -> str:
    hex_color = str(value).strip().lstrip("#")
    if not _HEX_COLOR.fullmatch(hex_color):
        raise ValidationError(f"Invalid fill `{value}`. Expected a hex color like `#ff0000` or `#fff`.")
    return hex_color


def _padding(value: Any) -> Sequence[Any]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence) or len(value) != 4:
        raise ValidationError(f"Invalid padding `{value}`. Expected `[top, right, bottom, left]`.")
    return value


def translate_params(
    params: Mapping[str, Any],
    *,
    focal_point: FocalPoint | None = None,
    default_quality: int | None = None,
) -> Translation:
    """Build the imgproxy option set for already merged ``params``.

    Width and height are not part of the result; the URL builder receives them
    directly. Unknown keys are ignored.
    """

    params = normalize_params(params)
    options = OptionSet()
    translation = Translation(options)

    if params.get("quality") is not None:
        options.with_quality(params["quality"])
    elif default_quality is not None:
        options.with_quality(default_quality)

    if params.get("format"):
        options.with_format(params["format"])
        translation.extension = params.get("extension") or params["format"]

    mode = params.get("mode") or "crop"
    if mode == "letterbox":
        options.with_extend()
    # Anything unmapped is an imgproxy resizing type already, e.g. `fill-down` or `auto`
    options.with_resizing_type(RESIZE_MODES.get(mode, mode))

    _gravity(params, focal_point, options)

    if params.get("fill") is not None:
        options.with_background_hex(_fill(params["fill"]))

    upscale = params.get("upscale")
    if upscale is None or upscale:
        options.with_enlarge()

    interlace = params.get("interlace")
    if interlace not in (None, False, "none"):
        # Only PNG output is affected
        options.with_png_options(interlaced=True)

    _pass_through(params, FILTERS, options)

    if params.get("autoRotate"):
        options.with_auto_rotate()

    if params.get("rotate") is not None:
        options.with_rotate(params["rotate"])

    if params.get("cacheBuster"):
        options.with_cache_buster(params["cacheBuster"])

    if params.get("filename"):
        options.with_filename(params["filename"])

    if params.get("padding") is not None:
        top, right, bottom, left = _padding(params["padding"])
        options.with_padding(top, right, bottom, left)

    _pass_through(params, ADJUSTMENTS, options)

    if params.get("resizingAlgorithm"):
        options.with_resizing_algorithm(params["resizingAlgorithm"])

    return translation
