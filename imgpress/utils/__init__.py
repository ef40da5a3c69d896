"""Utility functions for imgpress."""

# Import key functions to make them available at the utils package level
from imgpress.utils.image import (
    decode_raster,
    resample_pixels,
    encode_lossy_image,
    encode_indexed,
    create_gradient_image,
)

from imgpress.utils.svg import load_svg, optimize, read_svg_dimensions, resolve_plugins

from imgpress.utils.source import RawSource, load_source, sniff_mime

from imgpress.utils.validation import (
    validate_natural_dimensions,
    ensure_output_dir,
    codec_errors,
    clamp_quality,
    round_half_up,
)

# Define what's available when doing "from imgpress.utils import *"
__all__ = [
    # Raster codecs
    "decode_raster",
    "resample_pixels",
    "encode_lossy_image",
    "encode_indexed",
    "create_gradient_image",
    # Vector optimizer
    "optimize",
    "load_svg",
    "read_svg_dimensions",
    "resolve_plugins",
    # Sources
    "RawSource",
    "load_source",
    "sniff_mime",
    # Validation utilities
    "validate_natural_dimensions",
    "ensure_output_dir",
    "codec_errors",
    "clamp_quality",
    "round_half_up",
]
