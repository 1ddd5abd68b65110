"""Domain models for nametag.

This module contains the value types shared by the geometry pipeline. All
models are designed to be:

- Immutable (frozen dataclasses)
- Serializable for inter-process communication (parallel part building)
- Independent of the boolean engine's internals

Key classes:
- Vector2D / Vector3D: Points and directions
- Plane / Face: Oriented planar polygons on a solid's boundary
- GearSpec: Validated involute gear parameters with derived radii
- ColoredSolid: A solid region tagged with a print colour
"""

from nametag.domain.colored import RGB, ColoredSolid
from nametag.domain.face import Face, Plane
from nametag.domain.gear import GearSpec
from nametag.domain.vector import Vector2D, Vector3D

__all__: list[str] = [
    # Aliases
    "RGB",
    # Core types
    "Vector2D",
    "Vector3D",
    "Plane",
    "Face",
    "GearSpec",
    "ColoredSolid",
]
