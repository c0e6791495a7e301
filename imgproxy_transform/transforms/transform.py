"""The transform object handed to templates."""

from __future__ import annotations

import base64
import logging
from contextlib import contextmanager
from typing import Any, Iterable, Iterator, Mapping, Sequence

import httpx

from imgproxy_transform.config.settings import ImgproxySettings
from imgproxy_transform.errors import ImgproxyRequestError, ValidationError
from imgproxy_transform.sources.assets import Dimensions, ImageSource, as_source
from imgproxy_transform.sources.probes import DimensionProbe, default_probes, detect_dimensions
from imgproxy_transform.transforms.dimensions import coerce_dimension, resolve_dimensions
from imgproxy_transform.transforms.params import merge_params, translate_params
from imgproxy_transform.transforms.ratio import parse_ratio
from imgproxy_transform.transforms.srcset import SizeEntry, plan_variants
from imgproxy_transform.urlbuilder.builder import Url, UrlBuilder

logger = logging.getLogger(__name__)


class Transform:
    """A resolved image transform for one source.

    Width and height are settled once, in the constructor, from the params or
    from the source itself. Every URL generated afterwards starts from the
    construction params; call-time params override them for that call only.
    """

    def __init__(
        self,
        source: ImageSource | str,
        params: Mapping[str, Any] | None = None,
        *,
        settings: ImgproxySettings,
        client: httpx.Client | None = None,
        probes: Sequence[DimensionProbe] | None = None,
    ) -> None:
        # Fails before any dimension work when no imgproxy URL is configured
        self._builder = UrlBuilder.from_settings(settings)
        self._settings = settings
        self._client = client
        self._probes = probes
        self._source = as_source(source)
        self._params = dict(params or {})

        dimensions = resolve_dimensions(self._params, self._detect_dimensions)
        self._width = dimensions.width
        self._height = dimensions.height

    @property
    def source(self) -> ImageSource:
        return self._source

    @property
    def params(self) -> dict[str, Any]:
        return dict(self._params)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def builder(self) -> UrlBuilder:
        return self._builder

    def get_width(self) -> int:
        return self._width

    def get_height(self) -> int:
        return self._height

    @contextmanager
    def _http_client(self) -> Iterator[httpx.Client]:
        if self._client is not None:
            yield self._client
            return
        with httpx.Client(timeout=self._settings.request_timeout, follow_redirects=True) as client:
            yield client

    def _detect_dimensions(self) -> Dimensions | None:
        if self._probes is not None:
            return detect_dimensions(self._source, self._probes)
        with self._http_client() as client:
            return detect_dimensions(self._source, default_probes(client))

    def transform(self, params: Mapping[str, Any] | None = None) -> Url:
        """Build the imgproxy :class:`Url` for the construction params merged with ``params``."""

        params = merge_params(self._params, params)

        width = coerce_dimension(params.get("width"), "width")
        height = coerce_dimension(params.get("height"), "height")

        url = self._builder.build(
            self._source.url,
            self._width if width is None else width,
            self._height if height is None else height,
        )
        url.use_advanced_mode()

        translation = translate_params(
            params,
            focal_point=self._source.focal_point(),
            default_quality=self._settings.default_quality,
        )
        url.options.update(translation.options)
        if translation.extension:
            url.set_extension(translation.extension)
        return url

    def get_url(self, params: Mapping[str, Any] | None = None) -> str:
        """Return the URL string of the transform rather than the :class:`Url` object."""

        return self.transform(params).to_string()

    def get_srcset(self, sizes: Iterable[str | Mapping[str, Any] | SizeEntry]) -> str:
        """Return a comma-separated list of variants ready for a ``srcset`` attribute.

        ``sizes`` items are descriptors like ``"2x"`` and ``"800w"``, or mappings
        such as ``{"width": 800, "ratio": "1/1"}`` where ``ratio`` overrides the
        transform ratio for that entry.
        """

        if self._params.get("width") is None and self._params.get("ratio") is None:
            raise ValidationError("Width or ratio must be specified before using srcset")

        ratio = parse_ratio(self._params["ratio"]) if self._params.get("ratio") is not None else None
        base = Dimensions(self._width, self._height)

        urls: list[str] = []
        for variant in plan_variants(sizes, base, ratio):
            if variant.is_base:
                urls.append(self.get_url())
                continue
            sized_url = self.get_url({"width": variant.width, "height": variant.height})
            urls.append(f"{sized_url} {variant.descriptor}")
        return ", ".join(urls)

    def get_data_uri(self, params: Mapping[str, Any] | None = None) -> str:
        """Fetch the transformed image and return it as a base64 ``data:`` URI."""

        url = self.get_url(params)
        with self._http_client() as client:
            try:
                response = client.get(url)
                response.raise_for_status()
            except httpx.TimeoutException as exc:
                raise ImgproxyRequestError("Timed out waiting for imgproxy.") from exc
            except httpx.HTTPStatusError as exc:
                raise ImgproxyRequestError(
                    f"imgproxy returned {exc.response.status_code} for {url}",
                    status_code=exc.response.status_code,
                ) from exc
            except httpx.HTTPError as exc:
                raise ImgproxyRequestError(f"Could not reach imgproxy: {exc}") from exc

        image_format = merge_params(self._params, params).get("format") or "jpg"
        encoded = base64.b64encode(response.content).decode("ascii")
        return f"data:image/{image_format};base64,{encoded}"

    def __repr__(self) -> str:
        return f"Transform({self._source!r}, {self._width}x{self._height})"
