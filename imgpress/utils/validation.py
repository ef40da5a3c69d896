"""Utilities for input validation."""

import os
import math
import functools

from imgpress.config import MAX_QUALITY, MIN_QUALITY
from imgpress.errors import CompressionError, EncodeError, InvalidDimensionError


def round_half_up(value):
    """Round to the nearest integer, with .5 rounding up."""
    return int(math.floor(value + 0.5))


def validate_natural_dimensions(func):
    """Decorator to validate width and height are non-negative integers."""

    @functools.wraps(func)
    def wrapper(width, height, *args, **kwargs):
        for name, value in (("width", width), ("height", height)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidDimensionError(
                    f"Natural {name} must be an integer, got {value!r}"
                )
            if value < 0:
                raise InvalidDimensionError(
                    f"Natural {name} must not be negative, got {value}"
                )
        return func(width, height, *args, **kwargs)

    return wrapper


def ensure_output_dir(func):
    """Decorator to ensure the output directory exists."""

    @functools.wraps(func)
    def wrapper(result, name=None, directory=".", *args, **kwargs):
        if directory:
            os.makedirs(directory, exist_ok=True)
        return func(result, name, directory, *args, **kwargs)

    return wrapper


def codec_errors(func):
    """Decorator to report codec failures as EncodeError.

    Errors already raised by imgpress pass through unchanged.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            data = func(*args, **kwargs)
        except CompressionError:
            raise
        except Exception as e:
            raise EncodeError(f"Failed to execute {func.__name__}: {e}") from e

        if not data:
            raise EncodeError(f"{func.__name__} produced no output")
        return data

    return wrapper


def clamp_quality(quality, default):
    """Clamp a quality value into the 0-100 range.

    Args:
        quality: Requested quality, or None for the default
        default: Value used when quality is None

    Returns:
        int | float: Quality within range
    """
    if quality is None:
        return default
    if isinstance(quality, bool) or not isinstance(quality, (int, float)):
        raise TypeError(f"Quality must be a number, got {quality!r}")
    return max(MIN_QUALITY, min(MAX_QUALITY, quality))
