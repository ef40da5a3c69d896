"""imgpress: re-encode images smaller, picking a codec by format."""

__version__ = "0.1.0"

from imgpress.core import (
    CodecStrategy,
    CompressionJob,
    FixedHeight,
    FixedWidth,
    FormatRegistry,
    ImageFormat,
    JobState,
    Percent,
    ResultImage,
    ScalingSpec,
    SourceImage,
    compress,
    compress_and_save,
    extension_for,
    is_supported,
    plan_dimensions,
    save_result,
)
from imgpress.errors import (
    CompressionError,
    DecodeError,
    EncodeError,
    InvalidDimensionError,
    JobCancelledError,
    JobStateError,
    SourceError,
    UnknownFormatError,
    UnsupportedFormatError,
)
from imgpress.utils.source import RawSource

# Define what's available when doing "from imgpress import *"
__all__ = [
    "__version__",
    # Jobs
    "CompressionJob",
    "JobState",
    "compress",
    "compress_and_save",
    "save_result",
    # Formats
    "ImageFormat",
    "FormatRegistry",
    "is_supported",
    "extension_for",
    "CodecStrategy",
    # Scaling
    "ScalingSpec",
    "Percent",
    "FixedWidth",
    "FixedHeight",
    "plan_dimensions",
    # Models
    "RawSource",
    "SourceImage",
    "ResultImage",
    # Errors
    "CompressionError",
    "UnsupportedFormatError",
    "UnknownFormatError",
    "DecodeError",
    "InvalidDimensionError",
    "EncodeError",
    "SourceError",
    "JobStateError",
    "JobCancelledError",
]
