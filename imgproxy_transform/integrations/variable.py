"""Entry points exposed to the templating layer.

This is the only place that reads the process-wide settings; everything
below it receives an explicit :class:`ImgproxySettings`.
"""

from __future__ import annotations

from typing import Any, Mapping

import httpx

from imgproxy_transform.config.settings import ImgproxySettings, get_settings
from imgproxy_transform.sources.assets import ImageSource
from imgproxy_transform.transforms.transform import Transform
from imgproxy_transform.urlbuilder.builder import UrlBuilder


def get_transform(
    source: ImageSource | str,
    params: Mapping[str, Any] | None = None,
    *,
    settings: ImgproxySettings | None = None,
    client: httpx.Client | None = None,
) -> Transform:
    """Return a :class:`Transform` for an asset or an absolute URL."""

    return Transform(source, params, settings=settings or get_settings(), client=client)


def get_builder(settings: ImgproxySettings | None = None) -> UrlBuilder:
    """Return a :class:`UrlBuilder` for direct interaction."""

    return UrlBuilder.from_settings(settings or get_settings())


class ImgproxyVariable:
    """Object registered with template globals, e.g. as ``imgproxy``.

    Templates call ``imgproxy.transform(asset, {"width": 800, "ratio": "16:9"})``
    and then ``get_url()`` / ``get_srcset([...])`` on the result.
    """

    def __init__(self, settings: ImgproxySettings | None = None, client: httpx.Client | None = None) -> None:
        self._settings = settings
        self._client = client

    def transform(self, source: ImageSource | str, params: Mapping[str, Any] | None = None) -> Transform:
        return get_transform(source, params, settings=self._settings, client=self._client)

    def get_builder(self) -> UrlBuilder:
        return get_builder(self._settings)
