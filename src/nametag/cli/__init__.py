"""Command-line interface for nametag.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- All tag, gear and logging parameters as options
- Verbose/quiet output modes
- Glyph listing for the built-in font
- Detailed error reporting
"""

from nametag.cli.app import cli, main

__all__ = ["cli", "main"]
