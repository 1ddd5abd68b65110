"""Triangulation of planar outlines with holes.

Extruded caps of concave outlines must be split into convex pieces before
they can take part in BSP clipping. mapbox_earcut triangulates an outer ring
plus hole rings in one call; the resulting triangles reuse the ring vertices
exactly, so cap edges line up with the side walls of the extrusion.
"""

from collections.abc import Sequence

import mapbox_earcut as earcut
import numpy as np

from nametag.domain import Vector2D
from nametag.exceptions import DegeneratePolygonError

# Twice the area under which an ear is a sliver and is dropped
SLIVER_AREA = 1e-12


def _signed_area(a: Vector2D, b: Vector2D, c: Vector2D) -> float:
    return (b.x - a.x) * (c.y - a.y) - (b.y - a.y) * (c.x - a.x)


def triangulate_rings(
    rings: Sequence[Sequence[Vector2D]],
) -> tuple[list[Vector2D], list[tuple[int, int, int]]]:
    """Triangulate an outline given as outer ring followed by hole rings.

    Args:
        rings: Outer ring first, then holes; rings are not closed (the first
            point is not repeated at the end)

    Returns:
        Tuple of (points, triangles) where triangles index into points and
        are all counter-clockwise

    Raises:
        DegeneratePolygonError: If no triangles are produced
    """
    points: list[Vector2D] = []
    ring_ends: list[int] = []
    for ring in rings:
        points.extend(ring)
        ring_ends.append(len(points))

    coords = np.asarray([p.to_tuple() for p in points], dtype=np.float64).reshape(-1, 2)
    ends = np.asarray(ring_ends, dtype=np.uint32)
    indices = np.asarray(earcut.triangulate_float64(coords, ends), dtype=np.int64).reshape(-1, 3)
    if len(indices) == 0:
        raise DegeneratePolygonError("outline could not be triangulated")

    triangles: list[tuple[int, int, int]] = []
    for ia, ib, ic in indices.tolist():
        area = _signed_area(points[ia], points[ib], points[ic])
        if area > SLIVER_AREA:
            triangles.append((ia, ib, ic))
        elif area < -SLIVER_AREA:
            triangles.append((ia, ic, ib))
    return points, triangles


def is_convex(points: Sequence[Vector2D]) -> bool:
    """Whether a counter-clockwise ring turns left (or straight) at every vertex."""
    n = len(points)
    for i in range(n):
        if _signed_area(points[i], points[(i + 1) % n], points[(i + 2) % n]) < 0:
            return False
    return True
