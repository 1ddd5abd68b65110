"""Primitive outlines and solids."""

import math

from nametag.core.planar import Polygon2D
from nametag.core.solid import Solid, VectorLike, as_vector3
from nametag.domain import Vector2D, Vector3D
from nametag.exceptions import GeometryError


def circle(
    radius: float,
    resolution: int = 32,
    center: Vector2D | tuple[float, float] = (0.0, 0.0),
) -> Polygon2D:
    """Regular polygon approximating a circle.

    Args:
        radius: Circumradius
        resolution: Number of vertices (at least 3)
        center: Centre point

    Returns:
        Outline with its first vertex at angle 0
    """
    if resolution < 3:
        raise GeometryError(f"circle needs at least 3 segments, got {resolution}")
    cx, cy = center.to_tuple() if isinstance(center, Vector2D) else center
    return Polygon2D.from_points(
        Vector2D(cx, cy).plus(Vector2D.from_angle(2 * math.pi * i / resolution).times(radius))
        for i in range(resolution)
    )


def cuboid(size: VectorLike, center: VectorLike = (0.0, 0.0, 0.0)) -> Solid:
    """Axis-aligned box of the given edge lengths centred on a point."""
    s = as_vector3(size)
    c = as_vector3(center)
    base = Polygon2D.from_points(
        [(-s.x / 2, -s.y / 2), (s.x / 2, -s.y / 2), (s.x / 2, s.y / 2), (-s.x / 2, s.y / 2)]
    )
    return base.extrude(Vector3D(0.0, 0.0, s.z)).translate(
        Vector3D(c.x, c.y, c.z - s.z / 2)
    )


def cylinder(radius: float, start_z: float, end_z: float, resolution: int = 16) -> Solid:
    """Cylinder along the Z axis between two heights."""
    return circle(radius, resolution).extrude((0.0, 0.0, end_z - start_z)).translate(
        (0.0, 0.0, start_z)
    )
