"""Core construction algorithms for nametag.

This module contains the algorithms for:

- Planar outlines (validation, unions, convex hulls, extrusion)
- Polyhedral solids (transforms, BSP booleans, trimesh topology checks)
- Stroke-font text layout and ribbon thickening
- Involute gear generation
- Tag assembly

All functions are designed to be:
- Pure (inputs are never modified)
- Deterministic (same parameters, same faces)
- Safe for use in worker processes

Key functions:
- hull / union_all: Convex hull and union of planar outlines
- circle / cuboid / cylinder: Primitive shapes
- text_to_polylines / measure_text: Text layout
- involute_gear: Gear solid from a GearSpec

Key classes:
- Polygon2D / Shape2D: Planar outlines and regions
- Solid: Closed polyhedral solid
- NameTagBuilder: Main orchestrator building the tag
"""

from nametag.core.assembly import NameTag, NameTagBuilder, build_part
from nametag.core.font import lookup_glyph, supported_characters, text_to_polylines
from nametag.core.gear import gear_profile, gear_teeth, involute_gear, tooth_outline
from nametag.core.planar import Polygon2D, Region, Shape2D, hull, union_all
from nametag.core.primitives import circle, cuboid, cylinder
from nametag.core.solid import Solid
from nametag.core.text import MeasuredText, measure_text, rectangular_extrude, stroke_to_ribbon

__all__ = [
    # Assembly
    "NameTag",
    "NameTagBuilder",
    "build_part",
    # Planar
    "Polygon2D",
    "Region",
    "Shape2D",
    "hull",
    "union_all",
    # Solids
    "Solid",
    "circle",
    "cuboid",
    "cylinder",
    # Text
    "MeasuredText",
    "lookup_glyph",
    "measure_text",
    "rectangular_extrude",
    "stroke_to_ribbon",
    "supported_characters",
    "text_to_polylines",
    # Gear
    "gear_profile",
    "gear_teeth",
    "involute_gear",
    "tooth_outline",
]
