"""Image sources a transform can be built from.

A source is either a plain absolute URL (:class:`RawUrl`) or a managed
asset handed over by the CMS layer (:class:`AssetHandle`). Dimension probes
ask the source for what it can offer and get ``None`` back for capabilities
it does not have.
"""

from __future__ import annotations

import shutil
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Callable


@dataclass(frozen=True, slots=True)
class Dimensions:
    """Pixel width and height."""

    width: int
    height: int


@dataclass(frozen=True, slots=True)
class FocalPoint:
    """Crop anchor relative to the image size, both axes in ``0.0..1.0``."""

    x: float
    y: float


class ImageSource(ABC):
    """Common interface of every source variant."""

    @property
    @abstractmethod
    def url(self) -> str:
        """Absolute URL imgproxy fetches the image from."""

    def cached_dimensions(self) -> Dimensions | None:
        return None

    def focal_point(self) -> FocalPoint | None:
        return None

    def open_stream(self) -> BinaryIO | None:
        return None

    def download(self) -> Path | None:
        """Copy the source to a temporary file and return its path."""

        return None


class RawUrl(ImageSource):
    """An absolute image URL with no metadata attached."""

    def __init__(self, url: str) -> None:
        self._url = url

    @property
    def url(self) -> str:
        return self._url

    def __eq__(self, other: object) -> bool:
        return isinstance(other, RawUrl) and other.url == self.url

    def __hash__(self) -> int:
        return hash(self._url)

    def __repr__(self) -> str:
        return f"RawUrl({self._url!r})"


class AssetHandle(ImageSource):
    """A CMS-managed asset.

    ``opener`` returns a fresh readable binary stream of the stored file on
    every call; the caller closes it. Cached ``width``/``height`` are the
    dimensions the CMS already knows about, if any.
    """

    def __init__(
        self,
        url: str,
        *,
        filename: str = "",
        width: int | None = None,
        height: int | None = None,
        focal_point: FocalPoint | None = None,
        opener: Callable[[], BinaryIO] | None = None,
    ) -> None:
        self._url = url
        self.filename = filename or Path(url.split("?", 1)[0]).name
        self.width = width
        self.height = height
        self._focal_point = focal_point
        self._opener = opener

    @property
    def url(self) -> str:
        return self._url

    def cached_dimensions(self) -> Dimensions | None:
        if self.width and self.height:
            return Dimensions(int(self.width), int(self.height))
        return None

    def focal_point(self) -> FocalPoint | None:
        return self._focal_point

    def open_stream(self) -> BinaryIO | None:
        if self._opener is None:
            return None
        return self._opener()

    def download(self) -> Path | None:
        stream = self.open_stream()
        if stream is None:
            return None
        suffix = Path(self.filename).suffix
        with stream, tempfile.NamedTemporaryFile("wb", suffix=suffix, delete=False) as output:
            shutil.copyfileobj(stream, output)
        return Path(output.name)

    def __repr__(self) -> str:
        return f"AssetHandle({self._url!r})"


def as_source(value: ImageSource | str) -> ImageSource:
    """Wrap plain URL strings as :class:`RawUrl`; pass sources through."""

    if isinstance(value, ImageSource):
        return value
    if isinstance(value, str):
        return RawUrl(value)
    raise TypeError(f"Expected an image source or URL string, got {type(value).__name__}.")
