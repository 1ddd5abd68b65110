"""Text solids from stroke polylines.

Each polyline of the stroke font is thickened into a ribbon (flat ends,
mitred joints that fall back to a bevel when the mitre would grow past
MITRE_LIMIT half widths). All ribbons of a text are unioned in the plane and
extruded once, so overlapping strokes never meet in a 3D boolean.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from shapely.geometry import LineString

from nametag.config import UnknownGlyphPolicy
from nametag.core.font import text_to_polylines
from nametag.core.planar import Shape2D, union_all
from nametag.core.solid import Solid
from nametag.domain import Vector2D
from nametag.exceptions import DegeneratePolygonError

logger = logging.getLogger(__name__)

MITRE_LIMIT = 2.0

# Layout constants tuned for the stroke font metrics
TEXT_SCALE = 0.33
TEXT_DEPTH_SCALE = 0.5
TEXT_PADDING = 17.0
TEXT_X_OFFSET = 11.0
TEXT_Y_OFFSET = -3.0


@dataclass(frozen=True)
class MeasuredText:
    """A laid-out text solid and the half length of the body it needs.

    Attributes:
        solid: Text solid, positioned for the tag body
        length: Half length of a body that fits the text
    """

    solid: Solid
    length: float


def stroke_to_ribbon(polyline: Sequence[Vector2D], width: float) -> Shape2D:
    """Thicken an open polyline into a closed outline.

    Args:
        polyline: Stroke path, at least two distinct points
        width: Ribbon width

    Returns:
        Ribbon region (a single outline unless the stroke overlaps itself)

    Raises:
        DegeneratePolygonError: If the polyline has no length or width is not positive
    """
    if width <= 0:
        raise DegeneratePolygonError(f"ribbon width must be positive, got {width}")
    coords = [p.to_tuple() for p in polyline]
    if len(set(coords)) < 2:
        raise DegeneratePolygonError("stroke needs two distinct points")

    ribbon = LineString(coords).buffer(
        width / 2,
        cap_style="flat",
        join_style="mitre",
        mitre_limit=MITRE_LIMIT,
    )
    return Shape2D.from_shapely(ribbon)


def rectangular_extrude(polyline: Sequence[Vector2D], width: float, height: float) -> Solid:
    """Ribbon of the polyline extruded along +Z."""
    return stroke_to_ribbon(polyline, width).extrude(height)


def measure_text(
    text: str,
    font_weight: float,
    font_width: float,
    text_thickness: float,
    unknown_glyphs: UnknownGlyphPolicy = UnknownGlyphPolicy.FAIL,
) -> MeasuredText:
    """Build the text solid and the body half length it requires.

    The unioned ribbons are extruded to text_thickness and scaled by
    (font_width / 100 * TEXT_SCALE, TEXT_SCALE, TEXT_DEPTH_SCALE). The half
    length is half the scaled text width plus TEXT_PADDING; the text is then
    moved so it starts TEXT_X_OFFSET from the left end of such a body.

    Args:
        text: Text to render
        font_weight: Stroke width in font units
        font_width: Horizontal scale in percent
        text_thickness: Extrusion height before scaling
        unknown_glyphs: Policy for characters missing from the font

    Returns:
        MeasuredText; text without any glyph gives an empty solid and the
        minimal half length TEXT_PADDING / 2
    """
    polylines = text_to_polylines(text, unknown_glyphs)
    if not polylines:
        logger.debug("no glyphs to render in %r", text)
        return MeasuredText(Solid(), TEXT_PADDING / 2)

    outline = union_all(stroke_to_ribbon(polyline, font_weight) for polyline in polylines)
    solid = outline.extrude(text_thickness).scale(
        (font_width / 100 * TEXT_SCALE, TEXT_SCALE, TEXT_DEPTH_SCALE)
    )

    lo, hi = solid.bounds()
    length = (hi.x - lo.x + TEXT_PADDING) / 2
    logger.debug(
        "measured %r: %d strokes, %d faces, half length %.3f",
        text,
        len(polylines),
        len(solid.faces),
        length,
    )
    return MeasuredText(solid.translate((-length + TEXT_X_OFFSET, TEXT_Y_OFFSET, 0.0)), length)
