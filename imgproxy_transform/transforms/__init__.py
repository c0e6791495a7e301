"""Dimension resolution, option translation and srcset planning."""

from .dimensions import resolve_dimensions
from .params import Translation, merge_params, normalize_params, translate_params
from .ratio import Ratio, parse_ratio
from .srcset import SizeDescriptor, SizeEntry, Variant, parse_size_descriptor, plan_variants
from .transform import Transform

__all__ = [
    "Ratio",
    "SizeDescriptor",
    "SizeEntry",
    "Transform",
    "Translation",
    "Variant",
    "merge_params",
    "normalize_params",
    "parse_ratio",
    "parse_size_descriptor",
    "plan_variants",
    "resolve_dimensions",
    "translate_params",
]
