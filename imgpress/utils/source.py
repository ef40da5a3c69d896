"""Loading raw image bytes from paths, URLs, file objects and buffers."""

import io
import mimetypes
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import requests
from lxml import etree

from imgpress.config import FETCH_TIMEOUT
from imgpress.errors import SourceError

# Leading bytes identifying common image formats
MAGIC_NUMBERS = [
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"BM", "image/bmp"),
    (b"II*\x00", "image/tiff"),
    (b"MM\x00*", "image/tiff"),
]

# Extensions mimetypes does not know on every platform
EXTRA_TYPES = {
    ".webp": "image/webp",
    ".svg": "image/svg+xml",
    ".jpg": "image/jpeg",
}


@dataclass(frozen=True)
class RawSource:
    """Undecoded image bytes and the MIME type their provider reported."""

    data: bytes
    mime: str
    name: Optional[str] = None

    @property
    def size(self):
        return len(self.data)


def sniff_mime(data):
    """Guess a MIME type from the leading bytes of an image.

    Args:
        data: Image bytes

    Returns:
        str: MIME type, or None if unrecognized
    """
    for magic, mime in MAGIC_NUMBERS:
        if data.startswith(magic):
            return mime

    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"

    if _is_svg(data):
        return "image/svg+xml"

    return None


def _is_svg(data):
    head = data.lstrip()
    if head.startswith(b"\xef\xbb\xbf"):
        head = head[3:].lstrip()
    if not head.startswith(b"<"):
        return False

    # The root tag decides, however long the prolog before it
    events = etree.iterparse(
        io.BytesIO(data), events=("start",), resolve_entities=False, no_network=True
    )
    try:
        for _, element in events:
            return etree.QName(element).localname == "svg"
    except etree.LxmlError:
        pass

    # Malformed markup still counts when it opens with <svg, so decoding reports it
    return b"<svg" in data[:4096].lower()


def guess_mime_from_name(name):
    """Guess a MIME type from a file name or URL path."""
    if not name:
        return None
    extension = os.path.splitext(name)[1].lower()
    if extension in EXTRA_TYPES:
        return EXTRA_TYPES[extension]
    mime, _ = mimetypes.guess_type(name)
    return mime


def _resolve_mime(data, declared=None, name=None):
    mime = declared or sniff_mime(data) or guess_mime_from_name(name)
    if not mime:
        return "application/octet-stream"
    return mime.split(";", 1)[0].strip().lower()


def is_url(value):
    return isinstance(value, str) and value.lower().startswith(("http://", "https://"))


def fetch_url(url, timeout=FETCH_TIMEOUT):
    """Download image bytes from a URL.

    Args:
        url: http(s) URL
        timeout: Download timeout in seconds

    Returns:
        RawSource: Downloaded bytes and MIME type

    Raises:
        SourceError: If the URL cannot be fetched
    """
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise SourceError(f"Failed to fetch {url}: {e}") from e

    data = response.content
    declared = response.headers.get("Content-Type")
    # Generic types say nothing about the image
    if declared and not declared.lower().startswith("image/"):
        declared = None

    name = os.path.basename(urlparse(url).path) or None
    return RawSource(data, _resolve_mime(data, declared, name), name)


def read_file(path):
    """Read image bytes from a local file.

    Args:
        path: Path to the image

    Returns:
        RawSource: File bytes and MIME type

    Raises:
        SourceError: If the file cannot be read
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise SourceError(f"Failed to read {path}: {e}") from e

    return RawSource(data, _resolve_mime(data, name=path.name), path.name)


def load_source(source, timeout=FETCH_TIMEOUT):
    """Turn any supported image source into raw bytes and a MIME type.

    Args:
        source: RawSource, bytes, binary file object, path or http(s) URL
        timeout: Download timeout for URLs

    Returns:
        RawSource: Bytes with a lowercase MIME type

    Raises:
        SourceError: If the source cannot be read
        TypeError: If the source type is not supported
    """
    if isinstance(source, RawSource):
        return RawSource(source.data, _resolve_mime(source.data, source.mime), source.name)

    if isinstance(source, (bytes, bytearray, memoryview)):
        data = bytes(source)
        return RawSource(data, _resolve_mime(data))

    if is_url(source):
        return fetch_url(source, timeout=timeout)

    if isinstance(source, (str, os.PathLike)):
        return read_file(source)

    if hasattr(source, "read"):
        try:
            data = source.read()
        except OSError as e:
            raise SourceError(f"Failed to read image source: {e}") from e
        if not isinstance(data, bytes):
            raise SourceError("Image file objects must be opened in binary mode")
        name = getattr(source, "name", None)
        name = os.path.basename(name) if isinstance(name, str) else None
        return RawSource(data, _resolve_mime(data, name=name), name)

    raise TypeError(
        "The image source must be RawSource, bytes, a binary file object, "
        f"a path or a URL, got {type(source).__name__}"
    )
