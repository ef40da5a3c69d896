"""Scaling options and target dimension planning."""

import math
from dataclasses import dataclass

from imgpress.config import DEFAULT_PERCENT
from imgpress.core.formats import ImageFormat
from imgpress.errors import InvalidDimensionError
from imgpress.utils.validation import round_half_up, validate_natural_dimensions


class ScalingSpec:
    """Base class for the three ways to scale an image.

    Use Percent, FixedWidth or FixedHeight; exactly one applies per job.
    """

    kind = None

    @classmethod
    def from_option(cls, option):
        """Build a scaling spec from a user option.

        Accepts a ScalingSpec, None (the default), or a mapping such as
        {"type": "width", "width": 200}.

        Args:
            option: Scaling option

        Returns:
            ScalingSpec: Parsed spec

        Raises:
            ValueError: If the mapping has an unknown type
        """
        if option is None:
            return Percent(DEFAULT_PERCENT)
        if isinstance(option, ScalingSpec):
            return option
        if not isinstance(option, dict):
            raise TypeError(f"Scale option must be a ScalingSpec or dict, got {option!r}")

        kind = option.get("type", "percent")
        if kind == "percent":
            percent = option.get("percent")
            # A missing percentage means no scaling
            return Percent(DEFAULT_PERCENT if percent is None else percent)
        if kind == "width":
            return FixedWidth(option.get("width"))
        if kind == "height":
            return FixedHeight(option.get("height"))

        raise ValueError(f"Unknown scale type: {kind}")


@dataclass(frozen=True)
class Percent(ScalingSpec):
    """Scale both axes by the same percentage (0-100)."""

    percent: float = DEFAULT_PERCENT
    kind = "percent"

    def __post_init__(self):
        percent = self.percent
        if isinstance(percent, bool) or not isinstance(percent, (int, float)):
            raise TypeError(f"Percent must be a number, got {percent!r}")
        object.__setattr__(self, "percent", max(0, min(100, percent)))


def _check_side(name, value):
    # None means the side was not given and planning keeps the natural size
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidDimensionError(f"{name} must be finite, got {value!r}")


@dataclass(frozen=True)
class FixedWidth(ScalingSpec):
    """Scale to a fixed width, deriving height from the aspect ratio."""

    width: float = None
    kind = "width"

    def __post_init__(self):
        _check_side("Width", self.width)


@dataclass(frozen=True)
class FixedHeight(ScalingSpec):
    """Scale to a fixed height, deriving width from the aspect ratio."""

    height: float = None
    kind = "height"

    def __post_init__(self):
        _check_side("Height", self.height)


def _positive(value):
    return value is not None and value > 0


@validate_natural_dimensions
def plan_dimensions(width, height, scale=None, image_format=None):
    """Compute target dimensions from natural dimensions and a scaling spec.

    Args:
        width: Natural width in pixels
        height: Natural height in pixels
        scale: ScalingSpec (default: Percent(100))
        image_format: Source format; SVG sources are never rescaled

    Returns:
        tuple: (target_width, target_height)

    Raises:
        InvalidDimensionError: If a fixed-side derivation would divide by zero
    """
    # Markup is resolution independent, keep its natural size
    if image_format is not None and ImageFormat.from_mime(image_format).is_vector:
        return width, height

    scale = ScalingSpec.from_option(scale)

    if isinstance(scale, Percent):
        return (
            round_half_up(width * scale.percent / 100),
            round_half_up(height * scale.percent / 100),
        )

    if isinstance(scale, FixedWidth):
        if not _positive(scale.width):
            return width, height
        if width == 0:
            raise InvalidDimensionError("Cannot scale to a width: natural width is 0")
        return round_half_up(scale.width), round_half_up(scale.width * height / width)

    if isinstance(scale, FixedHeight):
        if not _positive(scale.height):
            return width, height
        if height == 0:
            raise InvalidDimensionError("Cannot scale to a height: natural height is 0")
        return round_half_up(scale.height * width / height), round_half_up(scale.height)

    raise InvalidDimensionError(f"Unknown scaling spec: {scale!r}")
