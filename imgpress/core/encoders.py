"""Codec strategies for each image format."""

import enum
from dataclasses import dataclass
from typing import Optional

from imgpress.config import MAX_PALETTE_SIZE, MAX_QUALITY, MIN_PALETTE_SIZE, SVG_PLUGIN_OVERRIDES
from imgpress.core.formats import ImageFormat
from imgpress.core.scaling import round_half_up
from imgpress.core.surface import encode_lossy, resample
from imgpress.utils.image import encode_indexed
from imgpress.utils.svg import optimize
from imgpress.utils.validation import codec_errors


class CodecStrategy(enum.Enum):
    """How a format is re-encoded."""

    RASTER_LOSSY = "raster-lossy"
    RASTER_INDEXED = "raster-indexed"
    VECTOR = "vector"


# One strategy per format; a new format needs an entry here
FORMAT_STRATEGIES = {
    ImageFormat.JPEG: CodecStrategy.RASTER_LOSSY,
    ImageFormat.WEBP: CodecStrategy.RASTER_LOSSY,
    ImageFormat.PNG: CodecStrategy.RASTER_INDEXED,
    ImageFormat.SVG: CodecStrategy.VECTOR,
}


@dataclass(frozen=True)
class EncodedImage:
    """Bytes produced by a strategy, with what was actually applied."""

    data: bytes
    quality_applied: bool = True
    scaling_applied: bool = True
    palette_size: Optional[int] = None


def strategy_for(image_format):
    """Get the codec strategy for a format.

    Args:
        image_format: ImageFormat or MIME string

    Returns:
        CodecStrategy: Strategy used to encode the format
    """
    return FORMAT_STRATEGIES[ImageFormat.from_mime(image_format)]


def palette_size_for(quality):
    """Palette budget for an indexed PNG at the given quality (0-100).

    The budget is clamped to MIN_PALETTE_SIZE so the quantizer always has
    colors to work with.
    """
    budget = round_half_up(MAX_PALETTE_SIZE * quality / MAX_QUALITY)
    return max(MIN_PALETTE_SIZE, min(MAX_PALETTE_SIZE, budget))


def encode_raster_lossy(source, width, height, quality, resample_filter=None):
    """Resample a raster source and re-encode it in its own lossy format.

    Args:
        source: Decoded SourceImage (JPEG or WEBP)
        width: Target width
        height: Target height
        quality: Quality 0-100
        resample_filter: Optional Pillow resampling filter

    Returns:
        EncodedImage: Encoded bytes
    """
    pixels = resample(source.content, width, height, resample_filter)
    return EncodedImage(encode_lossy(pixels, source.format, quality))


def encode_raster_indexed(source, width, height, quality, resample_filter=None):
    """Resample a PNG source and re-encode it with a reduced palette.

    Args:
        source: Decoded SourceImage (PNG)
        width: Target width
        height: Target height
        quality: Quality 0-100, mapped to a palette budget
        resample_filter: Optional Pillow resampling filter

    Returns:
        EncodedImage: Encoded bytes and the palette budget used
    """
    pixels = resample(source.content, width, height, resample_filter)
    palette_size = palette_size_for(quality)
    data = codec_errors(encode_indexed)([pixels.tobytes()], width, height, palette_size)
    return EncodedImage(data, palette_size=palette_size)


def encode_vector(source, width, height, quality, resample_filter=None):
    """Optimize SVG markup. Quality and scale do not apply to vectors.

    Args:
        source: Decoded SourceImage (SVG), content is the markup text
        width: Ignored
        height: Ignored
        quality: Ignored
        resample_filter: Ignored

    Returns:
        EncodedImage: Optimized markup as UTF-8 bytes
    """
    result = codec_errors(optimize)(source.content, SVG_PLUGIN_OVERRIDES)
    data = result["data"].encode("utf-8")
    return EncodedImage(data, quality_applied=False, scaling_applied=False)


def get_encoder(strategy):
    """Get an encoder function by strategy.

    Args:
        strategy: CodecStrategy

    Returns:
        Function: The encoder function

    Raises:
        ValueError: If the strategy has no encoder
    """
    encoders = {
        CodecStrategy.RASTER_LOSSY: encode_raster_lossy,
        CodecStrategy.RASTER_INDEXED: encode_raster_indexed,
        CodecStrategy.VECTOR: encode_vector,
    }

    if strategy not in encoders:
        raise ValueError(f"Unsupported strategy: {strategy}")

    return encoders[strategy]
