"""imgproxy URL building and signing."""

from .builder import INSECURE_SIGNATURE, Url, UrlBuilder
from .options import Gravity, OptionSet

__all__ = ["INSECURE_SIGNATURE", "Gravity", "OptionSet", "Url", "UrlBuilder"]
