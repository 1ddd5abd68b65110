"""Configuration settings for Nametag."""

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from nametag.domain import RGB, GearSpec
from nametag.utils.color import hex_to_rgb


class UnknownGlyphPolicy(str, Enum):
    """What to do with characters the stroke font has no glyph for."""

    FAIL = "fail"
    SKIP = "skip"


def _parse_color(value: Any) -> Any:
    if isinstance(value, str):
        return hex_to_rgb(value)
    return value


class GeometryConfig(BaseModel):
    """Tolerances of the boolean engine and topology checks."""

    epsilon: float = Field(
        default=1e-5,
        gt=0.0,
        le=1e-2,
        description="Distance under which a vertex counts as lying on a plane",
    )
    weld_tolerance: float = Field(
        default=1e-5,
        gt=0.0,
        le=1e-2,
        description="Distance under which two vertices are merged when checking topology",
    )
    validate_manifold: bool = Field(
        default=True,
        description="Check that the final solid is watertight",
    )


class GearConfig(BaseModel):
    """Decorative gear settings.

    Values are range-checked by GearSpec when the gear is built, so invalid
    combinations surface as InvalidGearSpecError.
    """

    num_teeth: int = Field(default=10, description="Number of teeth")
    circular_pitch: float = Field(
        default=10.0,
        description="Distance between adjacent teeth along the pitch circle",
    )
    pressure_angle: float = Field(default=20.0, description="Pressure angle in degrees")
    clearance: float = Field(default=0.0, description="Extra depth of the tooth gaps")
    center_hole_radius: float = Field(default=0.0, description="Centre bore radius, 0 for none")

    def to_spec(self, thickness: float) -> GearSpec:
        """Build a validated GearSpec for a gear of the given thickness."""
        return GearSpec(
            num_teeth=self.num_teeth,
            circular_pitch=self.circular_pitch,
            pressure_angle=self.pressure_angle,
            clearance=self.clearance,
            thickness=thickness,
            center_hole_radius=self.center_hole_radius,
        )


class TagConfig(BaseModel):
    """Name tag parameters."""

    name_text: str = Field(default="JSCAD", description="Text on the front face")
    text_color: RGB = Field(default=(0.0, 0.0, 0.0), description="Colour of the raised text")
    body_color: RGB = Field(default=(0.89, 1.0, 0.0), description="Colour of the tag body")
    text_thickness: float = Field(default=2.0, gt=0.0, description="Extrusion height of text strokes")
    font_weight: float = Field(default=5.0, gt=0.0, description="Stroke width in font units")
    font_width: float = Field(
        default=100.0,
        gt=0.0,
        le=200.0,
        description="Horizontal text scale in percent",
    )
    thickness: float = Field(default=2.0, gt=0.0, description="Body thickness")
    width: float = Field(default=9.0, gt=0.0, description="Half height of the body outline")
    corner_radius: float = Field(default=4.0, gt=0.0, description="Radius of the body corners")
    resolution: int = Field(default=24, ge=3, description="Segments per circle")
    back_text: str = Field(
        default="hannover.js",
        description="Label engraved mirrored into the back face (empty for none)",
    )
    back_font_weight: float = Field(default=2.0, gt=0.0, description="Stroke width of the back label")
    back_font_width: float = Field(
        default=65.0,
        gt=0.0,
        le=200.0,
        description="Horizontal scale of the back label in percent",
    )
    unknown_glyphs: UnknownGlyphPolicy = Field(
        default=UnknownGlyphPolicy.FAIL,
        description="Fail on or skip characters missing from the font",
    )

    @field_validator("text_color", "body_color", mode="before")
    @classmethod
    def parse_hex_color(cls, value: Any) -> Any:
        """Accept '#rrggbb' strings as well as RGB triples."""
        return _parse_color(value)

    @field_validator("text_color", "body_color")
    @classmethod
    def check_color_range(cls, value: RGB) -> RGB:
        if not all(0.0 <= c <= 1.0 for c in value):
            raise ValueError(f"colour components must be in [0, 1], got {value}")
        return value


class ProcessingConfig(BaseModel):
    """Configuration for part building."""

    max_workers: int = Field(
        default=1,
        ge=1,
        description="Worker processes for building independent parts (1 = serial)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class NameTagSettings(BaseModel):
    """Main application settings."""

    tag: TagConfig = Field(default_factory=TagConfig)
    gear: GearConfig = Field(default_factory=GearConfig)
    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> NameTagSettings:
    """Get default application settings."""
    return NameTagSettings()
