"""Data models for compression sources and results."""

from dataclasses import dataclass
from typing import Optional, Union

from imgpress.core.formats import ImageFormat
from imgpress.core.surface import PixelBuffer


@dataclass(frozen=True)
class SourceImage:
    """A decoded source image at its natural size."""

    width: int
    height: int
    data: bytes
    format: ImageFormat
    # RGBA pixels for raster formats, markup text for SVG
    content: Union[PixelBuffer, str]

    @property
    def size(self):
        return len(self.data)


@dataclass(frozen=True)
class ResultImage:
    """Output of a finished compression job."""

    width: int
    height: int
    data: bytes
    format: ImageFormat
    strategy: str
    quality_applied: bool = True
    scaling_applied: bool = True
    palette_size: Optional[int] = None
    original_size: Optional[int] = None

    @property
    def size(self):
        return len(self.data)

    @property
    def ratio(self):
        """Output size as a fraction of the input size."""
        if not self.original_size:
            return None
        return self.size / self.original_size

    @property
    def saved_bytes(self):
        if self.original_size is None:
            return None
        return self.original_size - self.size
