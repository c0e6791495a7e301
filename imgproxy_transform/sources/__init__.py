"""Image sources and dimension detection."""

from .assets import AssetHandle, Dimensions, FocalPoint, ImageSource, RawUrl, as_source
from .probes import DimensionProbe, UrlHeaderProbe, UrlImageProbe, default_probes, detect_dimensions

__all__ = [
    "AssetHandle",
    "DimensionProbe",
    "Dimensions",
    "FocalPoint",
    "ImageSource",
    "RawUrl",
    "UrlHeaderProbe",
    "UrlImageProbe",
    "as_source",
    "default_probes",
    "detect_dimensions",
]
