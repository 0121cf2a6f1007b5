import math

import numpy as np
import pytest
from skimage.color import rgb2lab

from symbol_map.scales import LabColorScale, LinearScale, SqrtScale, extent, hex_to_rgb


def _lightness(rgb):
    return float(rgb2lab(np.array([[rgb]], dtype=float) / 255.0)[0, 0, 0])


# --- extent ---

def test_extent_returns_min_and_max():
    records = [{"v": 3}, {"v": -1}, {"v": 7.5}]
    assert extent(records, lambda d: d["v"]) == (-1.0, 7.5)


def test_extent_ignores_missing_and_nan():
    records = [{"v": None}, {"v": float("nan")}, {"v": 2}, {"v": 4}]
    assert extent(records, lambda d: d["v"]) == (2.0, 4.0)


def test_extent_without_numeric_values_is_undefined():
    assert extent([], lambda d: d["v"]) == (None, None)
    assert extent([{"v": None}], lambda d: d["v"]) == (None, None)


# --- LinearScale ---

def test_linear_scale_maps_and_extrapolates():
    scale = LinearScale((-960, 960), (-180, 180))
    assert scale(0) == pytest.approx(0.0)
    assert scale(480) == pytest.approx(90.0)
    assert scale(1920) == pytest.approx(360.0)


def test_linear_scale_setters_chain():
    scale = LinearScale().set_domain((0, 10)).set_range((0, 100))
    assert scale.domain() == (0.0, 10.0)
    assert scale.range() == (0.0, 100.0)
    assert scale(5) == pytest.approx(50.0)


# --- SqrtScale ---

def test_sqrt_scale_endpoints_and_midpoint():
    scale = SqrtScale((0, 100), (5, 15))
    assert scale(0) == pytest.approx(5.0)
    assert scale(100) == pytest.approx(15.0)
    assert scale(25) == pytest.approx(10.0)


def test_sqrt_scale_area_grows_linearly():
    scale = SqrtScale((0, 100), (0, 10))
    # A quarter of the value gives a quarter of the area.
    assert (scale(25) / scale(100)) ** 2 == pytest.approx(0.25)


def test_sqrt_scale_degenerate_domain_maps_to_range_start():
    scale = SqrtScale((4.5, 4.5), (5, 15))
    assert scale(4.5) == pytest.approx(5.0)
    assert scale(100) == pytest.approx(5.0)


def test_sqrt_scale_returns_plain_float_for_scalars():
    assert isinstance(SqrtScale((0, 1))(0.5), float)


# --- LabColorScale ---

def test_color_scale_hits_endpoint_colors():
    scale = LabColorScale((0, 200), ("#fde0dd", "#c51b8a"))
    for got, expected in zip(scale(0), hex_to_rgb("#fde0dd")):
        assert abs(got - expected) <= 1
    for got, expected in zip(scale(200), hex_to_rgb("#c51b8a")):
        assert abs(got - expected) <= 1


def test_color_scale_interpolates_lightness_linearly():
    scale = LabColorScale((0, 200), ("#fde0dd", "#c51b8a"))
    start, middle, end = (_lightness(scale(v)) for v in (0, 100, 200))
    assert start > middle > end
    assert middle == pytest.approx((start + end) / 2, abs=1.0)


def test_color_scale_undefined_input_is_black():
    scale = LabColorScale()
    assert scale(None) == (0, 0, 0)
    assert scale(math.nan) == (0, 0, 0)


def test_color_scale_clips_extrapolated_values():
    rgb = LabColorScale((0, 200))(10000)
    assert all(0 <= c <= 255 for c in rgb)


def test_hex_to_rgb_accepts_shorthand():
    assert hex_to_rgb("#c51b8a") == (197, 27, 138)
    assert hex_to_rgb("#fff") == (255, 255, 255)
    assert hex_to_rgb("f80") == (255, 136, 0)


def test_hex_to_rgb_rejects_other_lengths():
    with pytest.raises(ValueError):
        hex_to_rgb("#ffff")


def test_color_scale_accepts_shorthand_colors():
    scale = LabColorScale((0, 1), ("#fff", "#000"))
    assert all(c >= 254 for c in scale(0))
    assert all(c <= 1 for c in scale(1))
