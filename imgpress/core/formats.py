"""Image formats and the registry of supported ones."""

import enum
import functools

from PIL import features

from imgpress.errors import UnknownFormatError, UnsupportedFormatError


class ImageFormat(enum.Enum):
    """Formats imgpress can compress, keyed by MIME type."""

    JPEG = "image/jpeg"
    PNG = "image/png"
    SVG = "image/svg+xml"
    WEBP = "image/webp"

    @classmethod
    def from_mime(cls, mime):
        """Parse a MIME-like string into an ImageFormat.

        Args:
            mime: MIME type such as "image/png" (case-insensitive, parameters allowed)

        Returns:
            ImageFormat: The matching format

        Raises:
            UnsupportedFormatError: If the MIME type is not a known format
        """
        if isinstance(mime, cls):
            return mime
        if not isinstance(mime, str):
            raise UnsupportedFormatError(f"Unsupported format: {mime!r}")

        # Drop parameters such as "; charset=utf-8"
        normalized = mime.split(";", 1)[0].strip().lower()
        normalized = MIME_ALIASES.get(normalized, normalized)

        for image_format in cls:
            if image_format.value == normalized:
                return image_format

        raise UnsupportedFormatError(f"Unsupported format: {mime}")

    @property
    def is_vector(self):
        return self is ImageFormat.SVG


# Non-canonical MIME types seen in the wild
MIME_ALIASES = {
    "image/jpg": ImageFormat.JPEG.value,
    "image/pjpeg": ImageFormat.JPEG.value,
    "image/svg": ImageFormat.SVG.value,
}

# File extensions for each format
FORMAT_EXTENSIONS = {
    ImageFormat.JPEG: "jpeg",
    ImageFormat.PNG: "png",
    ImageFormat.SVG: "svg",
    ImageFormat.WEBP: "webp",
}

# Formats that need a runtime capability check before use
PROBED_FORMATS = {ImageFormat.WEBP}


@functools.lru_cache(maxsize=None)
def probe_webp_support():
    """Check once per process whether Pillow was built with WebP support."""
    return bool(features.check("webp"))


def default_capability_probe(image_format):
    """Default capability probe backed by Pillow's feature flags.

    Args:
        image_format: ImageFormat to check

    Returns:
        bool: True if the environment can encode the format
    """
    if image_format is ImageFormat.WEBP:
        return probe_webp_support()
    return True


class FormatRegistry:
    """Maps image formats to support status and file extensions.

    The capability probe is injected so callers and tests can decide what
    the environment supports instead of relying on global state.
    """

    def __init__(self, capability_probe=None):
        self._probe = capability_probe or default_capability_probe
        self._probe_results = {}

    def _probe_passes(self, image_format):
        if image_format not in self._probe_results:
            self._probe_results[image_format] = bool(self._probe(image_format))
        return self._probe_results[image_format]

    def is_supported(self, image_format):
        """Return True if the format can be compressed in this environment.

        Args:
            image_format: ImageFormat or MIME string

        Returns:
            bool: Whether the format is supported
        """
        try:
            image_format = ImageFormat.from_mime(image_format)
        except UnsupportedFormatError:
            return False

        if image_format in PROBED_FORMATS:
            return self._probe_passes(image_format)
        return image_format in FORMAT_EXTENSIONS

    def validate(self, image_format):
        """Parse a format and ensure it is supported.

        Args:
            image_format: ImageFormat or MIME string

        Returns:
            ImageFormat: The validated format

        Raises:
            UnsupportedFormatError: If the format is unknown or unsupported
        """
        parsed = ImageFormat.from_mime(image_format)
        if not self.is_supported(parsed):
            raise UnsupportedFormatError(
                f"Current image format is not supported: {parsed.value}"
            )
        return parsed

    def extension_for(self, image_format):
        """Get the file extension for a supported format.

        Args:
            image_format: ImageFormat or MIME string

        Returns:
            str: File extension (without dot)

        Raises:
            UnknownFormatError: If the format is not in the supported set
        """
        if not self.is_supported(image_format):
            raise UnknownFormatError(f"No extension known for format: {image_format}")
        return FORMAT_EXTENSIONS[ImageFormat.from_mime(image_format)]

    def supported_formats(self):
        """List the formats supported in this environment."""
        return [fmt for fmt in ImageFormat if self.is_supported(fmt)]


default_registry = FormatRegistry()


def is_supported(image_format):
    """Check a format against the default registry."""
    return default_registry.is_supported(image_format)


def extension_for(image_format):
    """Get a file extension from the default registry."""
    return default_registry.extension_for(image_format)
