"""Shared fixtures for imgpress tests."""

import io

import pytest
from PIL import Image

from imgpress.core.formats import FormatRegistry
from imgpress.utils.image import create_gradient_image

SVG_MARKUP = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    "<!-- Generator: hand written -->\n"
    '<svg xmlns="http://www.w3.org/2000/svg" width="400" height="200" viewBox="0 0 400 200">\n'
    "  <metadata>made for tests</metadata>\n"
    '  <rect x="10" y="10" width="380" height="180" fill="#3366cc"/>\n'
    "</svg>\n"
)


@pytest.fixture
def jpeg_bytes():
    """A 1000x500 photographic-ish JPEG saved at high quality."""
    return create_gradient_image(1000, 500, "JPEG", quality=95)


@pytest.fixture
def png_bytes():
    return create_gradient_image(120, 80, "PNG", alpha=True)


@pytest.fixture
def webp_bytes():
    return create_gradient_image(200, 100, "WEBP", quality=90)


@pytest.fixture
def bmp_bytes():
    buffer = io.BytesIO()
    Image.new("RGB", (10, 10), "red").save(buffer, "BMP")
    return buffer.getvalue()


@pytest.fixture
def svg_markup():
    return SVG_MARKUP


@pytest.fixture
def svg_bytes():
    return SVG_MARKUP.encode("utf-8")


@pytest.fixture
def webp_registry():
    """Registry that always reports WebP as supported."""
    return FormatRegistry(capability_probe=lambda fmt: True)


@pytest.fixture
def no_webp_registry():
    """Registry whose capability probe rejects everything it is asked about."""
    return FormatRegistry(capability_probe=lambda fmt: False)
