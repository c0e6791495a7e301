"""Tests for target dimension resolution."""

from __future__ import annotations

import pytest
import pytest_mock

from imgproxy_transform.errors import DimensionError, ValidationError
from imgproxy_transform.sources.assets import Dimensions
from imgproxy_transform.transforms.dimensions import coerce_dimension, resolve_dimensions


def test_explicit_dimensions_skip_detection(mocker: pytest_mock.MockerFixture) -> None:
    detect = mocker.Mock(return_value=Dimensions(10, 10))

    assert resolve_dimensions({"width": 800, "height": 600}, detect) == Dimensions(800, 600)
    detect.assert_not_called()


@pytest.mark.parametrize(
    ("params", "expected"),
    [
        ({"width": 800, "ratio": "16:9"}, Dimensions(800, 450)),
        ({"height": 450, "ratio": "16:9"}, Dimensions(800, 450)),
        ({"width": 800, "ratio": "3/2"}, Dimensions(800, 533)),
        ({"width": "800", "ratio": 2}, Dimensions(800, 400)),
    ],
)
def test_ratio_with_one_dimension(mocker: pytest_mock.MockerFixture, params, expected) -> None:
    detect = mocker.Mock()

    assert resolve_dimensions(params, detect) == expected
    detect.assert_not_called()


@pytest.mark.parametrize(
    ("params", "expected"),
    [
        ({"width": 800}, Dimensions(800, 450)),
        ({"height": 450}, Dimensions(800, 450)),
        ({"ratio": "1:1"}, Dimensions(1600, 1600)),
        ({}, Dimensions(1600, 900)),
    ],
)
def test_detected_source_fills_missing_dimensions(mocker: pytest_mock.MockerFixture, params, expected) -> None:
    detect = mocker.Mock(return_value=Dimensions(1600, 900))

    assert resolve_dimensions(params, detect) == expected
    detect.assert_called_once_with()


def test_detected_dimensions_are_rounded_half_up() -> None:
    assert resolve_dimensions({"width": 500}, lambda: Dimensions(1000, 333)) == Dimensions(500, 167)


def test_undetectable_source_raises() -> None:
    with pytest.raises(DimensionError) as exc_info:
        resolve_dimensions({"width": 800}, lambda: None)

    assert str(exc_info.value) == "Image dimensions are missing and could not be auto-detected."


def test_invalid_ratio_is_not_ignored() -> None:
    with pytest.raises(ValidationError, match="Invalid ratio"):
        resolve_dimensions({"width": 800, "ratio": "bad"}, lambda: Dimensions(1600, 900))


@pytest.mark.parametrize("value", ["abc", True, -5, "12px"])
def test_coerce_dimension_rejects_garbage(value) -> None:
    with pytest.raises(ValidationError, match="Invalid width"):
        coerce_dimension(value, "width")


def test_coerce_dimension_accepts_numbers() -> None:
    assert coerce_dimension(None, "width") is None
    assert coerce_dimension("640", "width") == 640
    assert coerce_dimension(640.5, "width") == 641
