"""Pillow-backed raster codec helpers."""

import io

import numpy as np
from PIL import Image, ImageOps

from imgpress.config import MAX_PALETTE_SIZE
from imgpress.errors import DecodeError
from imgpress.utils.validation import round_half_up

# Pillow format names for the lossy raster formats
PILLOW_FORMATS = {
    "image/jpeg": "JPEG",
    "image/webp": "WEBP",
}


def decode_raster(data):
    """Decode raster bytes into an RGBA pixel array.

    Args:
        data: Encoded image bytes

    Returns:
        numpy.ndarray: Read-only uint8 array of shape (height, width, 4)

    Raises:
        DecodeError: If Pillow cannot read the bytes
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            # Honour EXIF orientation like an <img> element does
            img = ImageOps.exif_transpose(img)
            pixels = np.array(img.convert("RGBA"), dtype=np.uint8)
    except Exception as e:
        raise DecodeError(f"Failed to decode image: {e}") from e

    pixels.setflags(write=False)
    return pixels


def resample_pixels(pixels, width, height, resample):
    """Resize an RGBA pixel array so its full extent fills width x height.

    Args:
        pixels: uint8 array of shape (h, w, 4)
        width: Target width
        height: Target height
        resample: Pillow resampling filter

    Returns:
        numpy.ndarray: Read-only resized array
    """
    if width == 0 or height == 0:
        resized = np.zeros((height, width, 4), dtype=np.uint8)
    elif pixels.shape[:2] == (height, width):
        resized = np.array(pixels, dtype=np.uint8)
    else:
        img = Image.fromarray(np.ascontiguousarray(pixels))
        resized = np.array(img.resize((width, height), resample=resample), dtype=np.uint8)

    resized.setflags(write=False)
    return resized


def encode_lossy_image(pixels, mime, quality_ratio):
    """Encode pixels with a lossy Pillow encoder.

    Args:
        pixels: uint8 RGBA array
        mime: Target MIME type (image/jpeg or image/webp)
        quality_ratio: Quality in [0, 1]

    Returns:
        bytes: Encoded image
    """
    if mime not in PILLOW_FORMATS:
        raise ValueError(f"No lossy encoder for {mime}")
    if pixels.size == 0:
        raise ValueError("Cannot encode an empty image")

    quality = round_half_up(quality_ratio * 100)
    img = Image.fromarray(np.ascontiguousarray(pixels))

    if mime == "image/jpeg":
        # JPEG has no alpha channel, and libjpeg treats quality 0 as 1
        img = img.convert("RGB")
        quality = max(1, quality)

    buffer = io.BytesIO()
    img.save(buffer, PILLOW_FORMATS[mime], quality=quality)
    return buffer.getvalue()


def encode_indexed(buffers, width, height, palette_size):
    """Encode RGBA frames as a palette-quantized PNG.

    Args:
        buffers: List holding exactly one RGBA byte buffer
        width: Frame width
        height: Frame height
        palette_size: Maximum number of colors in the palette

    Returns:
        bytes: PNG data
    """
    if len(buffers) != 1:
        raise ValueError(f"Only single-frame encoding is supported, got {len(buffers)} frames")
    if width == 0 or height == 0:
        raise ValueError("Cannot encode an empty image")
    if not 1 <= palette_size <= MAX_PALETTE_SIZE:
        raise ValueError(f"Palette size must be 1-{MAX_PALETTE_SIZE}, got {palette_size}")

    img = Image.frombytes("RGBA", (width, height), bytes(buffers[0]))
    quantized = img.quantize(colors=palette_size, method=Image.Quantize.FASTOCTREE)

    buffer = io.BytesIO()
    quantized.save(buffer, "PNG", optimize=True)
    return buffer.getvalue()


def create_gradient_image(width, height, format_name="PNG", quality=95, alpha=False):
    """Create a gradient test image and return its encoded bytes.

    Args:
        width: Image width in pixels
        height: Image height in pixels
        format_name: Pillow format name (default: PNG)
        quality: Encoder quality for lossy formats
        alpha: Whether to add a horizontal alpha ramp

    Returns:
        bytes: Encoded image
    """
    x = np.linspace(0, 255, width, dtype=np.float64)[np.newaxis, :]
    y = np.linspace(0, 255, height, dtype=np.float64)[:, np.newaxis]

    # Fill with a gradient plus a little texture so lossy encoders have work to do
    rng = np.random.default_rng(0)
    noise = rng.normal(0, 12, (height, width))
    r = np.broadcast_to(x, (height, width))
    g = np.broadcast_to(y, (height, width))
    b = (r + g) / 2 + noise
    channels = [r, g, b]
    mode = "RGB"
    if alpha:
        channels.append(np.broadcast_to(x, (height, width)))
        mode = "RGBA"

    pixels = np.clip(np.stack(channels, axis=-1), 0, 255).astype(np.uint8)
    img = Image.fromarray(pixels)
    if img.mode != mode:
        img = img.convert(mode)

    buffer = io.BytesIO()
    if format_name.upper() in ("JPEG", "WEBP"):
        img.save(buffer, format_name.upper(), quality=quality)
    else:
        img.save(buffer, format_name.upper())
    return buffer.getvalue()
