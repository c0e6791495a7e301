"""Resolve image transforms into signed imgproxy URLs and responsive srcsets."""

from .config.settings import ImgproxySettings, get_settings
from .errors import (
    ConfigurationError,
    DimensionError,
    ImgproxyError,
    ImgproxyRequestError,
    ValidationError,
)
from .integrations import ImgproxyVariable, get_builder, get_transform
from .monitoring.logging import configure_logging
from .sources import AssetHandle, Dimensions, FocalPoint, ImageSource, RawUrl
from .transforms import Transform
from .urlbuilder import Gravity, OptionSet, Url, UrlBuilder

__all__ = [
    "AssetHandle",
    "ConfigurationError",
    "DimensionError",
    "Dimensions",
    "FocalPoint",
    "Gravity",
    "ImageSource",
    "ImgproxyError",
    "ImgproxyRequestError",
    "ImgproxySettings",
    "ImgproxyVariable",
    "OptionSet",
    "RawUrl",
    "Transform",
    "Url",
    "UrlBuilder",
    "ValidationError",
    "configure_logging",
    "get_builder",
    "get_settings",
    "get_transform",
]
