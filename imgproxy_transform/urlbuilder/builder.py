"""Signed imgproxy URL construction."""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import logging

from imgproxy_transform.config.settings import ImgproxySettings
from imgproxy_transform.errors import ConfigurationError
from imgproxy_transform.urlbuilder.options import Gravity, OptionSet, format_argument

logger = logging.getLogger(__name__)

INSECURE_SIGNATURE = "insecure"


def _urlsafe_b64(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _decode_hex(name: str, value: str) -> bytes:
    try:
        return binascii.unhexlify(value)
    except (binascii.Error, ValueError) as exc:
        raise ConfigurationError(f"imgproxy {name} must be a hex-encoded string.") from exc


class UrlBuilder:
    """Creates :class:`Url` objects bound to one imgproxy instance."""

    def __init__(
        self,
        base_url: str | None,
        key: str | None = None,
        salt: str | None = None,
        *,
        signature_size: int = 32,
    ) -> None:
        if not base_url:
            # Without a base URL there is nothing sensible left to do
            raise ConfigurationError("An imgproxy instance URL is required.")
        if not 1 <= signature_size <= 32:
            raise ConfigurationError("imgproxy signature size must be between 1 and 32 bytes.")

        self.base_url = base_url.rstrip("/")
        self.signature_size = signature_size
        self._key: bytes | None = None
        self._salt: bytes | None = None

        if key and salt:
            self._key = _decode_hex("key", key)
            self._salt = _decode_hex("salt", salt)
        elif key or salt:
            logger.warning("imgproxy key and salt must both be set to sign URLs; building insecure URLs.")

    @classmethod
    def from_settings(cls, settings: ImgproxySettings) -> UrlBuilder:
        return cls(
            settings.url,
            settings.key,
            settings.salt,
            signature_size=settings.signature_size,
        )

    @property
    def is_secure(self) -> bool:
        return self._key is not None

    def build(self, source_url: str, width: int = 0, height: int = 0) -> Url:
        """Return a new :class:`Url` for ``source_url`` sized to ``width`` x ``height``."""

        return Url(self, source_url, width, height)

    def sign(self, path: str) -> str:
        """Return the signature segment for ``path`` (which starts with ``/``)."""

        if self._key is None or self._salt is None:
            return INSECURE_SIGNATURE
        digest = hmac.new(self._key, self._salt + path.encode("utf-8"), hashlib.sha256).digest()
        return _urlsafe_b64(digest[: self.signature_size])


class Url:
    """A single imgproxy URL under construction."""

    def __init__(self, builder: UrlBuilder, source_url: str, width: int = 0, height: int = 0) -> None:
        self._builder = builder
        self.source_url = source_url
        self.options = OptionSet().with_width(width).with_height(height)
        self.extension: str | None = None
        self.advanced = False

    def use_advanced_mode(self) -> Url:
        self.advanced = True
        return self

    def use_basic_mode(self) -> Url:
        self.advanced = False
        return self

    def set_extension(self, extension: str | None) -> Url:
        self.extension = extension.lstrip(".") if extension else None
        return self

    def encoded_source(self) -> str:
        encoded = _urlsafe_b64(self.source_url.encode("utf-8"))
        if self.extension:
            return f"{encoded}.{self.extension}"
        return encoded

    def path(self) -> str:
        """Return the unsigned path, starting with ``/``."""

        if self.advanced:
            segments = self.options.to_segments()
        else:
            segments = self._basic_segments()
        return "/" + "/".join([*segments, self.encoded_source()])

    def _basic_segments(self) -> list[str]:
        resizing_type = self.options.get("rt") or ("fill",)
        gravity = self.options.get("g") or (Gravity.CENTER,)
        enlarge = self.options.get("el") or (False,)
        return [
            format_argument(resizing_type[0]),
            format_argument((self.options.get("w") or (0,))[0]),
            format_argument((self.options.get("h") or (0,))[0]),
            ":".join(map(format_argument, gravity)),
            format_argument(enlarge[0]),
        ]

    def to_string(self) -> str:
        path = self.path()
        return f"{self._builder.base_url}/{self._builder.sign(path)}{path}"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Url({self.to_string()!r})"
