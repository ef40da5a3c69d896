#!/usr/bin/env python
"""Main entry point for imgpress when run as a script."""

import sys
import argparse
from imgpress import __version__


def create_parent_parser():
    """Create a parent parser with common arguments."""
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show detailed progress information",
    )

    # Add version information for parent parser epilog
    parser.epilog = f"imgpress {__version__}"

    return parser


def main(argv=None):
    """Main entry point for the script."""
    from imgpress.cli.compression_cli import add_compression_arguments, run_compression

    parser = argparse.ArgumentParser(
        description="imgpress image compression tool",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # Set up subparsers for commands
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Compression command
    compress_parser = subparsers.add_parser(
        "compress",
        help="Compress an image, keeping its format",
        parents=[create_parent_parser()],
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    add_compression_arguments(compress_parser)

    # Version command
    subparsers.add_parser("version", help="Show version information")

    # Parse arguments
    args = parser.parse_args(argv)

    # Handle commands
    if args.command == "compress":
        return run_compression(args)

    elif args.command == "version":
        print(f"imgpress version {__version__}")
        return 0

    else:
        # No command specified, show help
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
