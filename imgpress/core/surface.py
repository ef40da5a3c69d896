"""Raster surface: resampling and lossy encoding over immutable pixel buffers."""

from dataclasses import dataclass

import numpy as np

from imgpress.config import DEFAULT_RESAMPLE, MAX_QUALITY
from imgpress.errors import InvalidDimensionError
from imgpress.utils.image import encode_lossy_image, resample_pixels
from imgpress.utils.validation import codec_errors


@dataclass(frozen=True)
class PixelBuffer:
    """Read-only RGBA pixels, shaped (height, width, 4)."""

    pixels: np.ndarray

    def __post_init__(self):
        pixels = self.pixels
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(f"Expected an RGBA array, got shape {pixels.shape}")
        if pixels.flags.writeable:
            pixels = pixels.copy()
            pixels.setflags(write=False)
            object.__setattr__(self, "pixels", pixels)

    @classmethod
    def empty(cls, width=0, height=0):
        return cls(np.zeros((height, width, 4), dtype=np.uint8))

    @property
    def width(self):
        return self.pixels.shape[1]

    @property
    def height(self):
        return self.pixels.shape[0]

    @property
    def is_empty(self):
        return self.pixels.size == 0

    def tobytes(self):
        return self.pixels.tobytes()


def resample(source, target_width, target_height, resample_filter=None):
    """Draw the full source extent onto a target_width x target_height surface.

    A zero-area target is legal and yields an empty buffer.

    Args:
        source: PixelBuffer at natural size
        target_width: Output width
        target_height: Output height
        resample_filter: Pillow resampling filter (default: bilinear)

    Returns:
        PixelBuffer: Resampled pixels

    Raises:
        InvalidDimensionError: If a target dimension is negative, or the
            source is empty but the target is not
    """
    if target_width < 0 or target_height < 0:
        raise InvalidDimensionError(
            f"Target size must not be negative, got {target_width}x{target_height}"
        )
    if source.is_empty and target_width and target_height:
        raise InvalidDimensionError("Cannot draw an empty source onto a non-empty surface")

    if resample_filter is None:
        resample_filter = DEFAULT_RESAMPLE

    pixels = resample_pixels(source.pixels, target_width, target_height, resample_filter)
    return PixelBuffer(pixels)


@codec_errors
def encode_lossy(pixels, image_format, quality):
    """Encode pixels with the lossy encoder for image_format.

    Args:
        pixels: PixelBuffer to encode
        image_format: ImageFormat (JPEG or WEBP)
        quality: Quality 0-100, normalized to [0, 1] for the encoder

    Returns:
        bytes: Encoded image
    """
    return encode_lossy_image(pixels.pixels, image_format.value, quality / MAX_QUALITY)
