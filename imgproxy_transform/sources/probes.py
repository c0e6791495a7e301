"""Source dimension detection.

Detection runs an ordered list of probes, each a callable taking an
:class:`ImageSource` and returning :class:`Dimensions` or ``None``. Probes
are tried one after another and the first usable answer wins, so the
expensive ones (network downloads, temp files) only run when the cheap ones
had nothing to say. A probe that fails with an I/O, HTTP or decoding error
counts as "no answer".
"""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Callable, Iterable, Sequence

import httpx
from PIL import Image, ImageFile

from imgproxy_transform.sources.assets import Dimensions, ImageSource

logger = logging.getLogger(__name__)

DimensionProbe = Callable[[ImageSource], "Dimensions | None"]

PROBE_ERRORS = (
    OSError,
    ValueError,
    httpx.HTTPError,
    httpx.InvalidURL,
    Image.DecompressionBombError,
)

DEFAULT_CHUNK_SIZE = 4096
DEFAULT_MAX_HEADER_BYTES = 256 * 1024


def parse_header(chunks: Iterable[bytes], max_bytes: int = DEFAULT_MAX_HEADER_BYTES) -> Dimensions | None:
    """Feed ``chunks`` to Pillow until the image header yields a size.

    Stops reading as soon as the size is known or ``max_bytes`` were consumed.
    """

    parser = ImageFile.Parser()
    consumed = 0
    for chunk in chunks:
        parser.feed(chunk)
        if parser.image is not None:
            width, height = parser.image.size
            return Dimensions(width, height)
        consumed += len(chunk)
        if consumed >= max_bytes:
            break
    return None


def probe_cached_metadata(source: ImageSource) -> Dimensions | None:
    """Dimensions the CMS already stored for the asset."""

    return source.cached_dimensions()


def probe_asset_stream(source: ImageSource) -> Dimensions | None:
    """Read the header of the asset's own byte stream."""

    stream = source.open_stream()
    if stream is None:
        return None
    with stream:
        return parse_header(iter(lambda: stream.read(DEFAULT_CHUNK_SIZE), b""))


class UrlHeaderProbe:
    """Stream the source URL and stop once the header has been parsed."""

    def __init__(
        self,
        client: httpx.Client,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        max_bytes: int = DEFAULT_MAX_HEADER_BYTES,
    ) -> None:
        self._client = client
        self._chunk_size = chunk_size
        self._max_bytes = max_bytes

    def __call__(self, source: ImageSource) -> Dimensions | None:
        with self._client.stream("GET", source.url) as response:
            response.raise_for_status()
            return parse_header(response.iter_bytes(self._chunk_size), self._max_bytes)


class UrlImageProbe:
    """Download the whole source URL and let Pillow identify it."""

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    def __call__(self, source: ImageSource) -> Dimensions | None:
        response = self._client.get(source.url)
        response.raise_for_status()
        with Image.open(BytesIO(response.content)) as image:
            width, height = image.size
        return Dimensions(width, height)


def probe_downloaded_asset(source: ImageSource) -> Dimensions | None:
    """Last resort: copy the asset to a temporary file and inspect it locally."""

    path = source.download()
    if path is None:
        return None
    try:
        with Image.open(path) as image:
            width, height = image.size
        return Dimensions(width, height)
    finally:
        path.unlink(missing_ok=True)


def default_probes(client: httpx.Client) -> list[DimensionProbe]:
    """Return the standard detection chain, cheapest first."""

    return [
        probe_cached_metadata,
        probe_asset_stream,
        UrlHeaderProbe(client),
        UrlImageProbe(client),
        probe_downloaded_asset,
    ]


def _probe_name(probe: DimensionProbe) -> str:
    return getattr(probe, "__name__", type(probe).__name__)


def detect_dimensions(source: ImageSource, probes: Sequence[DimensionProbe]) -> Dimensions | None:
    """Run ``probes`` in order and return the first positive result."""

    for probe in probes:
        try:
            dimensions = probe(source)
        except PROBE_ERRORS as exc:
            logger.debug("Probe %s failed for %s: %s", _probe_name(probe), source.url, exc)
            continue
        if dimensions is not None and dimensions.width > 0 and dimensions.height > 0:
            logger.debug(
                "Probe %s detected %sx%s for %s",
                _probe_name(probe),
                dimensions.width,
                dimensions.height,
                source.url,
            )
            return dimensions
    logger.debug("No probe could detect dimensions for %s", source.url)
    return None
