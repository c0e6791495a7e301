"""Tests for CMS param translation into imgproxy options."""

from __future__ import annotations

import pytest

from imgproxy_transform.errors import ValidationError
from imgproxy_transform.sources.assets import FocalPoint
from imgproxy_transform.transforms.params import merge_params, normalize_params, translate_params


def segments(params, **kwargs) -> list[str]:
    return translate_params(params, **kwargs).options.to_segments()


def test_defaults_crop_and_enlarge() -> None:
    assert segments({}) == ["rt:fill", "el:1"]


def test_unknown_keys_are_ignored() -> None:
    assert segments({"foo": "bar", "colour": "red"}) == ["rt:fill", "el:1"]


def test_explicit_quality_beats_default() -> None:
    assert "q:80" in segments({"quality": 80}, default_quality=60)
    assert "q:60" in segments({}, default_quality=60)
    assert not any(segment.startswith("q:") for segment in segments({}))


def test_format_sets_extension() -> None:
    translation = translate_params({"format": "webp"})

    assert "f:webp" in translation.options.to_segments()
    assert translation.extension == "webp"
    assert translate_params({"format": "jpeg", "extension": "jpg"}).extension == "jpg"
    assert translate_params({}).extension is None


@pytest.mark.parametrize(
    ("mode", "resizing_type"),
    [
        ("crop", "fill"),
        ("fit", "fit"),
        ("stretch", "force"),
        ("fill-down", "fill-down"),
        ("auto", "auto"),
    ],
)
def test_mode_maps_to_resizing_type(mode: str, resizing_type: str) -> None:
    assert f"rt:{resizing_type}" in segments({"mode": mode})


def test_letterbox_fits_and_extends() -> None:
    assert segments({"mode": "letterbox"})[:2] == ["ex:1", "rt:fit"]


def test_focal_point_sets_gravity() -> None:
    assert "g:fp:0.5:0.25" in segments({}, focal_point=FocalPoint(0.5, 0.25))


def test_position_maps_to_compass_gravity() -> None:
    assert "g:nowe" in segments({"position": "top-left"})
    assert "g:ce" in segments({"position": "center-center"})
    assert "g:fp:0.1:0.9" in segments({"position": "top-left"}, focal_point=FocalPoint(0.1, 0.9))
    assert not any(segment.startswith("g:") for segment in segments({"position": "somewhere"}))


def test_fill_strips_hash() -> None:
    assert "bg:ff0000" in segments({"fill": "#ff0000"})
    assert "bg:fff" in segments({"fill": "#fff"})
    assert "bg:A0b" in segments({"fill": " A0b "})


def test_fill_rejects_non_hex() -> None:
    with pytest.raises(ValidationError, match="Invalid fill"):
        segments({"fill": "red"})


@pytest.mark.parametrize("fill", ["#ffff", "#fffffff", "#ff00"])
def test_fill_rejects_other_lengths(fill: str) -> None:
    with pytest.raises(ValidationError, match="Invalid fill"):
        segments({"fill": fill})


@pytest.mark.parametrize(("upscale", "enlarged"), [(None, True), (True, True), (False, False), (0, False)])
def test_upscale_defaults_to_enabled(upscale, enlarged: bool) -> None:
    params = {} if upscale is None else {"upscale": upscale}

    assert ("el:1" in segments(params)) is enlarged


def test_interlace_requests_png_interlacing() -> None:
    assert "pngo:1" in segments({"interlace": "line"})
    assert "pngo:1" in segments({"interlace": True})
    assert "pngo:1" not in segments({"interlace": "none"})


def test_numeric_pass_through() -> None:
    result = segments(
        {
            "dpr": 2,
            "blur": 2,
            "sharpen": 0.5,
            "pixelate": 5,
            "rotate": 90,
            "page": 2,
            "brightness": 10,
            "contrast": 1.2,
            "saturation": 0.8,
        }
    )

    for expected in ("dpr:2", "bl:2", "sh:0.5", "pix:5", "rot:90", "pg:2", "br:10", "co:1.2", "sa:0.8"):
        assert expected in result


@pytest.mark.parametrize("key", ["autoRotate", "auto-rotate", "auto_rotate", "autorotate"])
def test_auto_rotate_accepts_every_spelling(key: str) -> None:
    assert "ar:1" in segments({key: True})
    assert "ar:1" not in segments({key: False})


def test_auto_rotate_first_truthy_spelling_wins() -> None:
    assert "ar:1" in segments({"autoRotate": False, "autorotate": True})


@pytest.mark.parametrize("key", ["cacheBuster", "cachebuster"])
def test_cache_buster_needs_only_one_spelling(key: str) -> None:
    # Historically both spellings had to be present at once for this to apply.
    assert "cb:v2" in segments({key: "v2"})


def test_empty_cache_buster_is_skipped() -> None:
    assert not any(segment.startswith("cb:") for segment in segments({"cacheBuster": ""}))


def test_filename_is_url_quoted() -> None:
    assert "fn:my%20photo.jpg" in segments({"filename": "my photo.jpg"})


def test_padding_is_top_right_bottom_left() -> None:
    assert "pd:10:20:30:40" in segments({"padding": [10, 20, 30, 40]})


@pytest.mark.parametrize("padding", [[1, 2], "10", 10])
def test_padding_requires_four_values(padding) -> None:
    with pytest.raises(ValidationError, match="Invalid padding"):
        segments({"padding": padding})


@pytest.mark.parametrize("key", ["resizingAlgorithm", "resizing_algorithm"])
def test_resizing_algorithm_spellings(key: str) -> None:
    assert "ra:lanczos3" in segments({key: "lanczos3"})


def test_normalize_keeps_falsy_override() -> None:
    assert normalize_params({"auto_rotate": False}) == {"autoRotate": False}


def test_merge_prefers_call_time_values() -> None:
    merged = merge_params({"quality": 60, "cachebuster": "a"}, {"quality": 90, "cacheBuster": "b"})

    assert merged == {"quality": 90, "cacheBuster": "b"}


def test_translate_does_not_mutate_input() -> None:
    params = {"auto-rotate": True, "mode": "fit"}

    translate_params(params)

    assert params == {"auto-rotate": True, "mode": "fit"}
