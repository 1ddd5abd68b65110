"""Colour tagging for solids.

A name tag is printed in two colours. Rather than decorating arbitrary shapes
with a colour attribute, each coloured region is an explicit pair of geometry
and colour.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nametag.core.solid import Solid

RGB = tuple[float, float, float]


@dataclass(frozen=True)
class ColoredSolid:
    """A solid region printed in a single colour.

    Attributes:
        geometry: The region's solid
        color: Normalized (r, g, b) triple, each component in [0, 1]
    """

    geometry: "Solid"
    color: RGB

    def tagged(self) -> "Solid":
        """Return the geometry with every face tagged with this colour."""
        return self.geometry.colored(self.color)
