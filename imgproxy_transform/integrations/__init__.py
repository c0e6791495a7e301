"""Templating layer entry points."""

from .variable import ImgproxyVariable, get_builder, get_transform

__all__ = [
    "ImgproxyVariable",
    "get_builder",
    "get_transform",
]
