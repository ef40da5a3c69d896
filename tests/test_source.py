"""Tests for loading image sources."""

import io
from unittest import mock

import pytest
import requests

from imgpress.errors import SourceError
from imgpress.utils.source import RawSource, load_source, sniff_mime


def test_sniff_mime(jpeg_bytes, png_bytes, bmp_bytes, svg_bytes):
    assert sniff_mime(jpeg_bytes) == "image/jpeg"
    assert sniff_mime(png_bytes) == "image/png"
    assert sniff_mime(bmp_bytes) == "image/bmp"
    assert sniff_mime(svg_bytes) == "image/svg+xml"
    assert sniff_mime(b"RIFF\x00\x00\x00\x00WEBPVP8 ") == "image/webp"
    assert sniff_mime(b"\x00\x01\x02") is None


def test_load_bytes(png_bytes):
    raw = load_source(bytearray(png_bytes))
    assert raw.data == png_bytes
    assert raw.mime == "image/png"
    assert raw.size == len(png_bytes)


def test_load_raw_source_keeps_declared_type(png_bytes):
    raw = load_source(RawSource(png_bytes, "IMAGE/PNG", "a.png"))
    assert raw.mime == "image/png"
    assert raw.name == "a.png"


def test_load_path(tmp_path, svg_bytes):
    path = tmp_path / "logo.svg"
    path.write_bytes(svg_bytes)

    for source in (path, str(path)):
        raw = load_source(source)
        assert raw.mime == "image/svg+xml"
        assert raw.name == "logo.svg"


def test_load_path_falls_back_to_extension(tmp_path):
    path = tmp_path / "unknown.webp"
    path.write_bytes(b"not really an image")
    assert load_source(path).mime == "image/webp"


def test_load_missing_path(tmp_path):
    with pytest.raises(SourceError):
        load_source(tmp_path / "missing.png")


def test_load_file_object(jpeg_bytes):
    raw = load_source(io.BytesIO(jpeg_bytes))
    assert raw.mime == "image/jpeg"


def test_load_text_file_object():
    with pytest.raises(SourceError):
        load_source(io.StringIO("<svg/>"))


def test_load_unsupported_type():
    with pytest.raises(TypeError):
        load_source(12345)


def _response(content, content_type=None, status_error=None):
    response = mock.Mock()
    response.content = content
    response.headers = {"Content-Type": content_type} if content_type else {}
    response.raise_for_status.side_effect = status_error
    return response


def test_load_url(png_bytes):
    with mock.patch("imgpress.utils.source.requests.get") as get:
        get.return_value = _response(png_bytes, "IMAGE/PNG")
        raw = load_source("https://example.com/images/photo.png", timeout=3)

    get.assert_called_once_with("https://example.com/images/photo.png", timeout=3)
    assert raw.mime == "image/png"
    assert raw.name == "photo.png"


def test_load_url_sniffs_generic_content_type(jpeg_bytes):
    with mock.patch("imgpress.utils.source.requests.get") as get:
        get.return_value = _response(jpeg_bytes, "application/octet-stream")
        raw = load_source("http://example.com/download")

    assert raw.mime == "image/jpeg"


def test_load_url_http_error():
    with mock.patch("imgpress.utils.source.requests.get") as get:
        get.return_value = _response(b"", status_error=requests.HTTPError("404"))
        with pytest.raises(SourceError):
            load_source("https://example.com/missing.png")


def test_load_url_unreachable():
    with mock.patch(
        "imgpress.utils.source.requests.get",
        side_effect=requests.ConnectionError("refused"),
    ):
        with pytest.raises(SourceError):
            load_source("https://unreachable.invalid/a.png")


def test_sniff_svg_past_long_prolog():
    data = (
        b'<?xml version="1.0"?>\n<!-- ' + b"x" * 6000 + b" -->\n"
        b'<svg xmlns="http://www.w3.org/2000/svg" width="10" height="10"/>'
    )
    assert sniff_mime(data) == "image/svg+xml"
    assert load_source(io.BytesIO(data)).mime == "image/svg+xml"


def test_sniff_other_markup_is_not_svg():
    assert sniff_mime(b"<html><body><svg/></body></html>") is None
