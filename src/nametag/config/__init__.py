"""Configuration management for nametag.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- TagConfig: Text, body and colour parameters of the tag
- GearConfig: Decorative gear parameters
- GeometryConfig: Boolean engine tolerances
- ProcessingConfig: Part building settings
- LoggingConfig: Logging settings
- NameTagSettings: Main application settings
"""

from nametag.config.settings import (
    GearConfig,
    GeometryConfig,
    LoggingConfig,
    NameTagSettings,
    ProcessingConfig,
    TagConfig,
    UnknownGlyphPolicy,
    get_default_settings,
)

__all__ = [
    "GearConfig",
    "GeometryConfig",
    "LoggingConfig",
    "NameTagSettings",
    "ProcessingConfig",
    "TagConfig",
    "UnknownGlyphPolicy",
    "get_default_settings",
]
