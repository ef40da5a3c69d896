"""Tests for the format registry."""

import pytest

from imgpress.core.formats import FormatRegistry, ImageFormat, extension_for, is_supported
from imgpress.errors import UnknownFormatError, UnsupportedFormatError


@pytest.mark.parametrize(
    "mime, expected",
    [
        ("image/jpeg", ImageFormat.JPEG),
        ("IMAGE/PNG", ImageFormat.PNG),
        ("image/jpg", ImageFormat.JPEG),
        (" image/svg+xml; charset=utf-8 ", ImageFormat.SVG),
        ("image/webp", ImageFormat.WEBP),
        (ImageFormat.PNG, ImageFormat.PNG),
    ],
)
def test_from_mime(mime, expected):
    assert ImageFormat.from_mime(mime) is expected


@pytest.mark.parametrize("mime", ["image/bmp", "image/gif", "text/plain", "", None])
def test_from_mime_rejects_unknown(mime):
    with pytest.raises(UnsupportedFormatError):
        ImageFormat.from_mime(mime)


def test_core_formats_always_supported(no_webp_registry):
    for image_format in (ImageFormat.JPEG, ImageFormat.PNG, ImageFormat.SVG):
        assert no_webp_registry.is_supported(image_format)


def test_webp_follows_capability_probe(webp_registry, no_webp_registry):
    assert webp_registry.is_supported("image/webp")
    assert not no_webp_registry.is_supported("image/webp")


def test_unknown_format_not_supported():
    assert not is_supported("image/bmp")
    assert not is_supported("application/octet-stream")


def test_probe_evaluated_once():
    calls = []

    def probe(image_format):
        calls.append(image_format)
        return True

    registry = FormatRegistry(capability_probe=probe)
    for _ in range(3):
        registry.is_supported(ImageFormat.WEBP)

    assert calls == [ImageFormat.WEBP]


def test_validate_returns_format(webp_registry):
    assert webp_registry.validate("image/webp") is ImageFormat.WEBP


def test_validate_rejects_unsupported(no_webp_registry):
    with pytest.raises(UnsupportedFormatError):
        no_webp_registry.validate("image/webp")
    with pytest.raises(UnsupportedFormatError):
        no_webp_registry.validate("image/bmp")


@pytest.mark.parametrize(
    "image_format, extension",
    [
        (ImageFormat.JPEG, "jpeg"),
        (ImageFormat.PNG, "png"),
        (ImageFormat.SVG, "svg"),
        ("image/jpg", "jpeg"),
    ],
)
def test_extension_for(image_format, extension):
    assert extension_for(image_format) == extension


def test_extension_for_webp(webp_registry, no_webp_registry):
    assert webp_registry.extension_for(ImageFormat.WEBP) == "webp"
    with pytest.raises(UnknownFormatError):
        no_webp_registry.extension_for(ImageFormat.WEBP)


def test_extension_for_unknown():
    with pytest.raises(UnknownFormatError):
        extension_for("image/bmp")


def test_supported_formats(no_webp_registry):
    assert no_webp_registry.supported_formats() == [
        ImageFormat.JPEG,
        ImageFormat.PNG,
        ImageFormat.SVG,
    ]
