"""Exceptions raised by the transform engine."""

from __future__ import annotations


class ImgproxyError(RuntimeError):
    """Base class for every error raised by this package."""


class ConfigurationError(ImgproxyError):
    """Raised when the imgproxy instance is not configured correctly."""


class DimensionError(ImgproxyError):
    """Raised when target dimensions cannot be established."""


class ValidationError(ImgproxyError, ValueError):
    """Raised for malformed transform parameters or size descriptors."""


class ImgproxyRequestError(ImgproxyError):
    """Raised when imgproxy responds with an error or does not respond at all."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)
