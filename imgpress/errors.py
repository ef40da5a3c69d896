"""Exceptions raised by imgpress."""


class CompressionError(Exception):
    """Base class for every failure raised by a compression job."""


class UnsupportedFormatError(CompressionError, ValueError):
    """Source format is not in the registry or its capability probe failed."""


class UnknownFormatError(CompressionError, ValueError):
    """No file extension is known for the requested format."""


class DecodeError(CompressionError):
    """Source bytes could not be turned into pixel or markup data."""


class InvalidDimensionError(CompressionError, ValueError):
    """Natural or target dimensions cannot be used for scaling."""


class EncodeError(CompressionError, RuntimeError):
    """A codec failed or returned no data."""


class SourceError(CompressionError, IOError):
    """The image source could not be read or fetched."""


class JobStateError(CompressionError, RuntimeError):
    """A job step was called out of order or on a finished job."""


class JobCancelledError(CompressionError):
    """The job was cancelled between two steps."""
