"""CLI interface for imgpress compression."""

import argparse
import sys

from imgpress.cli.main import create_parent_parser
from imgpress.config import DEFAULT_DOWNLOAD_NAME, DEFAULT_QUALITY, RESAMPLE_FILTERS
from imgpress.core.output import compress_and_save
from imgpress.core.scaling import FixedHeight, FixedWidth, Percent
from imgpress.errors import CompressionError


def add_compression_arguments(parser):
    """Add the compression arguments to a parser.

    Args:
        parser: argparse parser to extend
    """
    parser.add_argument("input_image", help="Path or http(s) URL of the source image")

    parser.add_argument(
        "--quality",
        "-q",
        type=float,
        default=DEFAULT_QUALITY,
        help="Compression quality (0-100); sets the palette size for PNG",
    )

    # Exactly one way to scale
    scale_group = parser.add_mutually_exclusive_group()
    scale_group.add_argument(
        "--percent", "-p", type=float, help="Scale both sides by this percentage (0-100)"
    )
    scale_group.add_argument(
        "--width", type=int, help="Scale to this width, keeping the aspect ratio"
    )
    scale_group.add_argument(
        "--height", type=int, help="Scale to this height, keeping the aspect ratio"
    )

    parser.add_argument(
        "--name",
        "-n",
        type=str,
        default=DEFAULT_DOWNLOAD_NAME,
        help="Output file name without extension",
    )

    parser.add_argument(
        "--output-dir",
        "-o",
        type=str,
        default=".",
        help="Directory for the compressed file",
    )

    parser.add_argument(
        "--resample",
        choices=sorted(RESAMPLE_FILTERS),
        default="bilinear",
        help="Resampling filter used when resizing raster images",
    )

    return parser


def parse_compression_args(argv=None):
    """Parse command-line arguments for compression.

    Returns:
        Namespace: Parsed arguments
    """
    parent_parser = create_parent_parser()

    parser = argparse.ArgumentParser(
        description="Compress an image, keeping its format",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=[parent_parser],
        epilog=parent_parser.epilog,
    )
    add_compression_arguments(parser)

    return parser.parse_args(argv)


def scale_from_args(args):
    """Build a scaling spec from parsed arguments."""
    if args.width is not None:
        return FixedWidth(args.width)
    if args.height is not None:
        return FixedHeight(args.height)
    if args.percent is not None:
        return Percent(args.percent)
    return None


def run_compression(args):
    """Run the compression with provided arguments.

    Args:
        args: Parsed command-line arguments

    Returns:
        int: Exit code (0 for success, non-zero for error)
    """
    scale = scale_from_args(args)

    try:
        if args.verbose:
            print(f"Processing: {args.input_image}")

        job, output_path = compress_and_save(
            args.input_image,
            name=args.name,
            directory=args.output_dir,
            quality=args.quality,
            scale=scale,
            resample_filter=RESAMPLE_FILTERS[args.resample],
            verbose=args.verbose,
        )

    except CompressionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    result = job.result
    print("\nCompression complete!")
    print(f"  Format: {result.format.value} ({result.strategy})")
    print(f"  Size: {result.width}x{result.height}")
    print(f"  Bytes: {result.original_size} -> {result.size}")
    if result.palette_size is not None:
        print(f"  Palette: {result.palette_size} colors")
    if not result.quality_applied or not result.scaling_applied:
        print("  Note: quality and scale do not apply to vector images")
    print(f"  Output file: {output_path}")

    return 0


def main(argv=None):
    """Main entry point for the compression CLI."""
    return run_compression(parse_compression_args(argv))


if __name__ == "__main__":
    sys.exit(main())
