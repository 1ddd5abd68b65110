"""Utility functions for nametag.

This module provides utility functions including:

- Logging setup and configuration
- Build statistics tracking
- Colour conversion
"""

from nametag.utils.color import hex_to_rgb, rgb_to_hex
from nametag.utils.logging import (
    BuildLogger,
    BuildStats,
    configure_logging,
)

__all__ = [
    "BuildLogger",
    "BuildStats",
    "configure_logging",
    "hex_to_rgb",
    "rgb_to_hex",
]
