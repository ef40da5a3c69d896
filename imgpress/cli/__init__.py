"""Command-line interfaces for imgpress."""

from imgpress.cli.main import main
from imgpress.cli.compression_cli import main as compression_main

# Define what's available when doing "from imgpress.cli import *"
__all__ = ["main", "compression_main"]
