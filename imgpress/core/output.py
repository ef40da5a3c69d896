"""Saving compressed results to disk."""

from pathlib import Path

from imgpress.config import DEFAULT_DOWNLOAD_NAME
from imgpress.core.compression import compress
from imgpress.core.formats import default_registry
from imgpress.errors import JobStateError
from imgpress.utils.validation import ensure_output_dir


def output_filename(image_format, name=None, registry=None):
    """Build the file name for a result.

    Args:
        image_format: ImageFormat of the result
        name: Base name (default: "download")
        registry: FormatRegistry used for the extension

    Returns:
        str: File name such as "photo.jpeg"
    """
    registry = registry or default_registry
    base_name = name if name and isinstance(name, str) else DEFAULT_DOWNLOAD_NAME
    return f"{base_name}.{registry.extension_for(image_format)}"


@ensure_output_dir
def save_result(result, name=None, directory=".", registry=None):
    """Write a compressed result to disk.

    Args:
        result: ResultImage, or a CompressionJob holding one
        name: Base file name (default: "download")
        directory: Output directory, created if missing
        registry: FormatRegistry used for the extension

    Returns:
        Path: Path of the written file

    Raises:
        JobStateError: If there is no result to save yet
    """
    # Accept a job as well as its result
    result = getattr(result, "result", result)
    if result is None:
        raise JobStateError("Nothing to save: run the job first")

    output_path = Path(directory or ".") / output_filename(result.format, name, registry)
    output_path.write_bytes(result.data)
    return output_path


def compress_and_save(source, name=None, directory=".", quality=None, scale=None, **kwargs):
    """Compress an image and write the result to disk.

    Args:
        source: Image source
        name: Base file name (default: "download")
        directory: Output directory
        quality: Compression quality 0-100
        scale: ScalingSpec or option mapping
        **kwargs: Extra CompressionJob options

    Returns:
        tuple: (CompressionJob, Path of the written file)
    """
    job = compress(source, quality=quality, scale=scale, **kwargs)
    path = save_result(job, name, directory, registry=kwargs.get("registry"))
    return job, path
