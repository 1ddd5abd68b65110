"""Involute spur gear generation.

Algorithm based on:
    http://www.cartertools.com/involute.html

One tooth is built as a wedge from the gear centre whose two flanks are
involutes of the base circle, sampled at FLANK_RESOLUTION steps between the
base circle and the outer circle. The teeth are replicated around the centre
and unioned with a polygon through the root circle that fills the gaps
between tooth wedges.
"""

import logging

from nametag.core.bsp import EPSILON
from nametag.core.planar import Polygon2D, Shape2D, union_all
from nametag.core.primitives import cylinder
from nametag.core.solid import Solid
from nametag.domain import GearSpec, Vector2D

logger = logging.getLogger(__name__)

FLANK_RESOLUTION = 5
CENTER_HOLE_RESOLUTION = 16


def _tooth_points(spec: GearSpec, rotation: float = 0.0) -> list[Vector2D]:
    """Apex plus both flanks of one tooth, counter-clockwise."""
    base_radius = spec.base_radius
    width = spec.tooth_width_at_base

    first: list[Vector2D] = []
    second: list[Vector2D] = []
    for i in range(FLANK_RESOLUTION + 1):
        angle = spec.max_angle * i / FLANK_RESOLUTION
        tan_length = angle * base_radius

        radial = Vector2D.from_angle(angle)
        first.append(radial.times(base_radius).plus(radial.normal().times(tan_length)))

        radial = Vector2D.from_angle(width - angle)
        tangent = radial.normal().negated()
        second.append(radial.times(base_radius).plus(tangent.times(tan_length)))

    points = [Vector2D(0.0, 0.0), *first, *reversed(second)]
    if rotation:
        points = [p.rotated(rotation) for p in points]
    return points


def _root_points(spec: GearSpec) -> list[Vector2D]:
    center = 0.5 * spec.tooth_width_at_base
    return [
        Vector2D.from_angle(center + k * spec.tooth_angle).times(spec.root_radius)
        for k in range(spec.num_teeth)
    ]


def tooth_outline(spec: GearSpec) -> Polygon2D:
    """Outline of the unrotated tooth wedge.

    The apex sits at the origin; the tooth spans polar angles from 0 to
    spec.tooth_width_at_base.
    """
    return Polygon2D.from_points(_tooth_points(spec))


def gear_teeth(spec: GearSpec) -> list[Solid]:
    """Tooth solids, one per tooth, each rotated into place.

    Tooth j is the unit tooth rotated by j * 360 / num_teeth degrees. The
    solids span z in [0, thickness].
    """
    tooth = tooth_outline(spec).extrude((0.0, 0.0, spec.thickness))
    return [tooth.rotate_z(j * 360 / spec.num_teeth) for j in range(spec.num_teeth)]


def gear_profile(spec: GearSpec) -> Shape2D:
    """Planar outline of the gear: all teeth unioned with the root polygon."""
    step = spec.tooth_angle
    outlines = [
        Polygon2D.from_points(_tooth_points(spec, j * step)) for j in range(spec.num_teeth)
    ]
    outlines.append(Polygon2D.from_points(_root_points(spec)))
    return union_all(outlines)


def involute_gear(spec: GearSpec, epsilon: float = EPSILON) -> Solid:
    """Build the gear solid, centred on z = 0.

    Args:
        spec: Validated gear parameters
        epsilon: Tolerance of the boolean operations

    Returns:
        Closed gear solid spanning z in [-thickness / 2, thickness / 2]
    """
    teeth = Solid()
    for tooth in gear_teeth(spec):
        # Wedges only share the apex edge on the axis
        teeth = teeth.union_for_non_intersecting(tooth)

    root = Polygon2D.from_points(_root_points(spec)).extrude((0.0, 0.0, spec.thickness))
    gear = root.union(teeth, epsilon)

    if spec.center_hole_radius > 0:
        bore = cylinder(
            spec.center_hole_radius,
            -spec.thickness,
            spec.thickness,
            CENTER_HOLE_RESOLUTION,
        )
        gear = gear.difference(bore, epsilon)

    logger.debug(
        "gear with %d teeth: pitch radius %.3f, %d faces",
        spec.num_teeth,
        spec.pitch_radius,
        len(gear.faces),
    )
    return gear.translate((0.0, 0.0, -spec.thickness / 2))
