"""imgproxy configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from imgproxy_transform.errors import ConfigurationError


def _load_env_file(path: str = ".env") -> None:
    """Populate os.environ from the provided .env file if it exists."""

    env_path = Path(path)
    if not env_path.exists():
        return

    for line in env_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


@dataclass(frozen=True, slots=True)
class ImgproxySettings:
    """Connection and signing settings for a single imgproxy instance."""

    url: str = ""
    key: str = ""
    salt: str = ""
    signature_size: int = 32
    default_quality: int | None = None
    request_timeout: float = 10.0
    log_level: str = "INFO"


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got `{raw}`.") from exc


def _build_settings() -> ImgproxySettings:
    _load_env_file()

    signature_size = _optional_int("IMGPROXY_SIGNATURE_SIZE")
    timeout = os.getenv("IMGPROXY_REQUEST_TIMEOUT", "").strip()
    try:
        request_timeout = float(timeout) if timeout else 10.0
    except ValueError as exc:
        raise ConfigurationError(f"IMGPROXY_REQUEST_TIMEOUT must be a number, got `{timeout}`.") from exc

    return ImgproxySettings(
        url=os.getenv("IMGPROXY_URL", ""),
        key=os.getenv("IMGPROXY_KEY", ""),
        salt=os.getenv("IMGPROXY_SALT", ""),
        signature_size=signature_size if signature_size is not None else 32,
        default_quality=_optional_int("IMGPROXY_DEFAULT_QUALITY"),
        request_timeout=request_timeout,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )


@lru_cache
def get_settings() -> ImgproxySettings:
    """Return cached settings instance to avoid re-reading configuration."""

    return _build_settings()
