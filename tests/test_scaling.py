"""Tests for target dimension planning."""

import pytest

from imgpress.core.formats import ImageFormat
from imgpress.core.scaling import (
    FixedHeight,
    FixedWidth,
    Percent,
    ScalingSpec,
    plan_dimensions,
    round_half_up,
)
from imgpress.errors import InvalidDimensionError


@pytest.mark.parametrize(
    "width, height, percent, expected",
    [
        (1000, 500, 50, (500, 250)),
        (1000, 500, 100, (1000, 500)),
        (1000, 500, 0, (0, 0)),
        (333, 777, 33, (110, 256)),
        (5, 3, 50, (3, 2)),
    ],
)
def test_percent(width, height, percent, expected):
    assert plan_dimensions(width, height, Percent(percent)) == expected


def test_default_is_identity():
    assert plan_dimensions(640, 480) == (640, 480)
    assert plan_dimensions(640, 480, None, ImageFormat.JPEG) == (640, 480)


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2


@pytest.mark.parametrize("percent, clamped", [(150, 100), (-20, 0), (42.5, 42.5)])
def test_percent_clamps(percent, clamped):
    assert Percent(percent).percent == clamped


def test_fixed_width_keeps_aspect_ratio():
    assert plan_dimensions(1000, 500, FixedWidth(200)) == (200, 100)
    width, height = plan_dimensions(640, 480, FixedWidth(301))
    assert width == 301
    assert abs(height / width - 480 / 640) < 1 / width


def test_fixed_height_keeps_aspect_ratio():
    assert plan_dimensions(1000, 500, FixedHeight(100)) == (200, 100)
    assert plan_dimensions(640, 480, FixedHeight(240)) == (320, 240)


@pytest.mark.parametrize("spec", [FixedWidth(0), FixedWidth(-5), FixedWidth(None)])
def test_fixed_width_fallback(spec):
    assert plan_dimensions(640, 480, spec) == (640, 480)


@pytest.mark.parametrize("spec", [FixedHeight(0), FixedHeight(-1), FixedHeight(None)])
def test_fixed_height_fallback(spec):
    assert plan_dimensions(640, 480, spec) == (640, 480)


def test_zero_width_divisor():
    with pytest.raises(InvalidDimensionError):
        plan_dimensions(0, 100, FixedWidth(50))


def test_zero_height_divisor():
    with pytest.raises(InvalidDimensionError):
        plan_dimensions(100, 0, FixedHeight(50))


@pytest.mark.parametrize("width, height", [(-1, 10), (10, -1), (10.5, 10), ("10", 10)])
def test_invalid_natural_dimensions(width, height):
    with pytest.raises(InvalidDimensionError):
        plan_dimensions(width, height, Percent(50))


@pytest.mark.parametrize(
    "spec", [Percent(10), FixedWidth(200), FixedHeight(20), Percent(100)]
)
def test_svg_never_rescaled(spec):
    assert plan_dimensions(400, 200, spec, ImageFormat.SVG) == (400, 200)
    assert plan_dimensions(400, 200, spec, "image/svg+xml") == (400, 200)


@pytest.mark.parametrize(
    "option, expected",
    [
        (None, Percent(100)),
        ({"type": "percent", "percent": 30}, Percent(30)),
        ({"type": "percent"}, Percent(100)),
        ({"percent": 250}, Percent(100)),
        ({"type": "width", "width": 200}, FixedWidth(200)),
        ({"type": "height", "height": 90}, FixedHeight(90)),
        (FixedWidth(10), FixedWidth(10)),
    ],
)
def test_from_option(option, expected):
    assert ScalingSpec.from_option(option) == expected


def test_from_option_rejects_unknown_type():
    with pytest.raises(ValueError):
        ScalingSpec.from_option({"type": "diagonal"})


def test_percent_rejects_non_numbers():
    with pytest.raises(TypeError):
        Percent("50")


@pytest.mark.parametrize("cls", [FixedWidth, FixedHeight])
def test_fixed_side_rejects_non_numbers(cls):
    with pytest.raises(TypeError):
        cls("200")
    with pytest.raises(TypeError):
        cls(True)


def test_fixed_side_from_string_option():
    with pytest.raises(TypeError):
        ScalingSpec.from_option({"type": "width", "width": "200"})


@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
@pytest.mark.parametrize("cls", [FixedWidth, FixedHeight])
def test_fixed_side_rejects_non_finite(cls, value):
    with pytest.raises(InvalidDimensionError):
        cls(value)
