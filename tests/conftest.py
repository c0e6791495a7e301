"""Shared fixtures for the transform engine tests."""

from __future__ import annotations

import base64
from io import BytesIO
from typing import Callable

import pytest
from PIL import Image

from imgproxy_transform.config.settings import ImgproxySettings


@pytest.fixture
def settings() -> ImgproxySettings:
    return ImgproxySettings(url="https://imgproxy.test")


@pytest.fixture
def encode_source() -> Callable[[str], str]:
    def _encode(url: str) -> str:
        return base64.urlsafe_b64encode(url.encode("utf-8")).rstrip(b"=").decode("ascii")

    return _encode


@pytest.fixture
def make_image() -> Callable[..., bytes]:
    def _make(width: int, height: int, image_format: str = "PNG") -> bytes:
        buffer = BytesIO()
        Image.new("RGB", (width, height), color=(200, 30, 30)).save(buffer, format=image_format)
        return buffer.getvalue()

    return _make
