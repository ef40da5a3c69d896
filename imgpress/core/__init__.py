"""Core functionality for imgpress."""

from imgpress.core.formats import (
    ImageFormat,
    FormatRegistry,
    default_registry,
    is_supported,
    extension_for,
)

from imgpress.core.scaling import (
    ScalingSpec,
    Percent,
    FixedWidth,
    FixedHeight,
    plan_dimensions,
)

from imgpress.core.surface import PixelBuffer, resample, encode_lossy

from imgpress.core.models import SourceImage, ResultImage

from imgpress.core.encoders import (
    CodecStrategy,
    strategy_for,
    get_encoder,
    palette_size_for,
)

from imgpress.core.compression import CompressionJob, JobState, compress

from imgpress.core.output import output_filename, save_result, compress_and_save

# Define what's available when doing "from imgpress.core import *"
__all__ = [
    # Formats
    "ImageFormat",
    "FormatRegistry",
    "default_registry",
    "is_supported",
    "extension_for",
    # Scaling
    "ScalingSpec",
    "Percent",
    "FixedWidth",
    "FixedHeight",
    "plan_dimensions",
    # Raster surface
    "PixelBuffer",
    "resample",
    "encode_lossy",
    # Models
    "SourceImage",
    "ResultImage",
    # Codec strategies
    "CodecStrategy",
    "strategy_for",
    "get_encoder",
    "palette_size_for",
    # Compression workflows
    "CompressionJob",
    "JobState",
    "compress",
    "output_filename",
    "save_result",
    "compress_and_save",
]
