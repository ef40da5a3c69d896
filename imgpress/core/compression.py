"""Main compression functionality for imgpress."""

import enum
import functools

from imgpress.config import DEFAULT_QUALITY, FETCH_TIMEOUT
from imgpress.core.encoders import get_encoder, strategy_for
from imgpress.core.formats import default_registry
from imgpress.core.models import ResultImage, SourceImage
from imgpress.core.scaling import ScalingSpec, plan_dimensions
from imgpress.core.surface import PixelBuffer
from imgpress.errors import EncodeError, JobCancelledError, JobStateError
from imgpress.utils.image import decode_raster
from imgpress.utils.source import load_source
from imgpress.utils.svg import load_svg
from imgpress.utils.validation import clamp_quality


class JobState(enum.Enum):
    """Lifecycle of a compression job."""

    CREATED = "created"
    DECODED = "decoded"
    PLANNED = "planned"
    ENCODED = "encoded"
    FAILED = "failed"


TERMINAL_STATES = {JobState.ENCODED, JobState.FAILED}


def job_step(expected_state):
    """Decorator for job steps: check the state and mark the job failed on error."""

    def decorator(method):
        @functools.wraps(method)
        def wrapper(self, *args, **kwargs):
            if self.state is not expected_state:
                raise JobStateError(
                    f"Cannot {method.__name__} a job in state '{self.state.value}'"
                )
            try:
                return method(self, *args, **kwargs)
            except Exception:
                self.state = JobState.FAILED
                raise

        return wrapper

    return decorator


def decode_source(raw, image_format):
    """Decode raw bytes into a SourceImage at natural size.

    Args:
        raw: RawSource with the image bytes
        image_format: Validated ImageFormat

    Returns:
        SourceImage: Decoded source

    Raises:
        DecodeError: If the bytes cannot be decoded
    """
    if image_format.is_vector:
        markup, width, height = load_svg(raw.data)
        return SourceImage(width, height, raw.data, image_format, markup)

    pixels = PixelBuffer(decode_raster(raw.data))
    return SourceImage(pixels.width, pixels.height, raw.data, image_format, pixels)


class CompressionJob:
    """One image, compressed once.

    A job moves through decode -> plan -> encode and then stays finished;
    create a new job to compress again.
    """

    def __init__(
        self,
        source,
        quality=None,
        scale=None,
        registry=None,
        resample_filter=None,
        timeout=FETCH_TIMEOUT,
        verbose=False,
    ):
        """Initialize a compression job.

        Args:
            source: Image source (bytes, path, URL, file object or RawSource)
            quality: Compression quality 0-100, clamped (default: 75)
            scale: ScalingSpec or option mapping (default: 100 percent)
            registry: FormatRegistry to validate against (default: process-wide)
            resample_filter: Pillow resampling filter for raster resizing
            timeout: Download timeout for URL sources
            verbose: Whether to print progress for each step
        """
        self.source = source
        self.quality = clamp_quality(quality, DEFAULT_QUALITY)
        self.scale = ScalingSpec.from_option(scale)
        self.registry = registry or default_registry
        self.resample_filter = resample_filter
        self.timeout = timeout
        self.verbose = verbose

        self.state = JobState.CREATED
        self.image = None
        self.target_size = None
        self.strategy = None
        self.result = None

    def _log(self, message):
        if self.verbose:
            print(message)

    @property
    def is_finished(self):
        return self.state in TERMINAL_STATES

    @job_step(JobState.CREATED)
    def decode(self):
        """Load the source, check its format is supported, and decode it.

        Returns:
            SourceImage: The decoded source

        Raises:
            SourceError: If the source cannot be read
            UnsupportedFormatError: If the format is not supported
            DecodeError: If the bytes cannot be decoded
        """
        raw = load_source(self.source, timeout=self.timeout)
        image_format = self.registry.validate(raw.mime)

        self.image = decode_source(raw, image_format)
        self.state = JobState.DECODED
        self._log(
            f"Decoded: {image_format.value} {self.image.width}x{self.image.height} "
            f"({self.image.size} bytes)"
        )
        return self.image

    @job_step(JobState.DECODED)
    def plan(self):
        """Compute the target dimensions.

        Returns:
            tuple: (width, height)

        Raises:
            InvalidDimensionError: If the scaling cannot be applied
        """
        self.target_size = plan_dimensions(
            self.image.width, self.image.height, self.scale, self.image.format
        )
        self.strategy = strategy_for(self.image.format)
        self.state = JobState.PLANNED
        self._log(f"Target size: {self.target_size[0]}x{self.target_size[1]}")
        return self.target_size

    @job_step(JobState.PLANNED)
    def encode(self):
        """Re-encode the image with the strategy for its format.

        Returns:
            ResultImage: The compressed image

        Raises:
            EncodeError: If the codec fails or produces no output
        """
        width, height = self.target_size
        encoder = get_encoder(self.strategy)
        encoded = encoder(self.image, width, height, self.quality, self.resample_filter)
        if not encoded.data:
            raise EncodeError(f"{self.strategy.value} encoder produced no output")

        self.result = ResultImage(
            width=width,
            height=height,
            data=encoded.data,
            format=self.image.format,
            strategy=self.strategy.value,
            quality_applied=encoded.quality_applied,
            scaling_applied=encoded.scaling_applied,
            palette_size=encoded.palette_size,
            original_size=self.image.size,
        )
        self.state = JobState.ENCODED
        self._log(
            f"Encoded: {self.strategy.value} {self.image.size} -> {self.result.size} bytes"
        )
        return self.result

    def _check_cancelled(self, cancel):
        if cancel is not None and cancel.is_set():
            self.state = JobState.FAILED
            raise JobCancelledError("Compression job was cancelled")

    def run(self, cancel=None):
        """Run every remaining step of the job.

        Args:
            cancel: Optional threading.Event, checked between steps

        Returns:
            ResultImage: The compressed image
        """
        if self.is_finished:
            raise JobStateError(f"Job already finished in state '{self.state.value}'")

        steps = {
            JobState.CREATED: self.decode,
            JobState.DECODED: self.plan,
            JobState.PLANNED: self.encode,
        }
        while self.state in steps:
            self._check_cancelled(cancel)
            steps[self.state]()

        return self.result


def compress(source, quality=None, scale=None, **kwargs):
    """Compress an image in one call.

    Args:
        source: Image source (bytes, path, URL, file object or RawSource)
        quality: Compression quality 0-100 (default: 75)
        scale: ScalingSpec or option mapping (default: 100 percent)
        **kwargs: Extra CompressionJob options

    Returns:
        CompressionJob: The finished job; its result holds the output
    """
    job = CompressionJob(source, quality=quality, scale=scale, **kwargs)
    job.run()
    return job
