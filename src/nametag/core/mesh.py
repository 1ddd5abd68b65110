"""Mesh topology checks for polyhedral solids.

BSP clipping leaves T-junctions: a vertex of one face lying in the middle of a
neighbouring face's edge. The boundary is still closed, but its edges no longer
pair up one-to-one. This module provides:

- index_faces: Weld face vertices (trimesh row grouping) into index loops
- repair_t_junctions: Insert T-junction vertices into the edges they split
- unmatched_edges: Directed edges without exactly one reverse partner
- loops_to_trimesh: Triangulate index loops into a trimesh.Trimesh
- faces_to_trimesh: Unwelded triangle mesh of raw faces

Watertightness, volume and point containment are answered by trimesh on the
meshes built here.
"""

import logging
import math
from collections import Counter
from collections.abc import Sequence

import numpy as np
import trimesh

from nametag.domain import RGB, Face, Vector3D

logger = logging.getLogger(__name__)

# Default distance under which two vertices are considered the same point
WELD_TOLERANCE = 1e-5

# Upper bound on repair passes; each pass splits every edge it can
MAX_REPAIR_PASSES = 8

IndexLoop = tuple[int, ...]


def _weld_digits(tolerance: float) -> int:
    """Decimal places kept when welding at the given tolerance."""
    return max(0, round(-math.log10(tolerance)))


def index_faces(
    faces: Sequence[Face], tolerance: float = WELD_TOLERANCE
) -> tuple[list[Vector3D], list[IndexLoop], list[int]]:
    """Weld face vertices and express each face as an index loop.

    Vertices are merged the way trimesh merges them: coordinates rounded to
    the decimal places of the tolerance are grouped with
    trimesh.grouping.unique_rows. Consecutive duplicate indices are
    collapsed; loops left with fewer than three distinct indices are dropped
    (slivers thinner than the tolerance).

    Returns:
        Tuple of (vertices, loops, owners) where owners[i] is the position in
        faces of the face that produced loops[i]
    """
    coords = np.asarray(
        [v.to_tuple() for face in faces for v in face.vertices], dtype=np.float64
    ).reshape(-1, 3)
    if len(coords) == 0:
        return [], [], []

    unique, inverse = trimesh.grouping.unique_rows(coords, digits=_weld_digits(tolerance))
    inverse = np.asarray(inverse).reshape(-1)
    vertices = [Vector3D(*(float(c) for c in coords[i])) for i in unique]

    loops: list[IndexLoop] = []
    owners: list[int] = []
    start = 0
    for position, face in enumerate(faces):
        loop: list[int] = []
        for idx in inverse[start : start + len(face.vertices)].tolist():
            if not loop or loop[-1] != idx:
                loop.append(idx)
        start += len(face.vertices)
        while len(loop) > 1 and loop[0] == loop[-1]:
            loop.pop()
        if len(set(loop)) >= 3:
            loops.append(tuple(loop))
            owners.append(position)
    return vertices, loops, owners


def _edges(loops: Sequence[IndexLoop]) -> Counter[tuple[int, int]]:
    counts: Counter[tuple[int, int]] = Counter()
    for loop in loops:
        n = len(loop)
        for i in range(n):
            counts[(loop[i], loop[(i + 1) % n])] += 1
    return counts


def unmatched_edges(loops: Sequence[IndexLoop]) -> list[tuple[int, int]]:
    """List directed edges that do not pair with exactly one reverse edge.

    A closed 2-manifold boundary uses every directed edge once, and its
    reverse exactly once, in the neighbouring face.
    """
    counts = _edges(loops)
    return sorted(
        edge for edge, count in counts.items()
        if count != 1 or counts.get((edge[1], edge[0]), 0) != 1
    )


def _interior_parameter(
    a: Vector3D, b: Vector3D, p: Vector3D, tolerance: float
) -> float | None:
    """Return t in (0, 1) if p lies on segment ab strictly between its ends."""
    dx = b.x - a.x
    dy = b.y - a.y
    dz = b.z - a.z
    length_sq = dx * dx + dy * dy + dz * dz
    if length_sq == 0.0:
        return None
    t = ((p.x - a.x) * dx + (p.y - a.y) * dy + (p.z - a.z) * dz) / length_sq
    length = math.sqrt(length_sq)
    margin = tolerance / length
    if t <= margin or t >= 1.0 - margin:
        return None
    ox = a.x + dx * t - p.x
    oy = a.y + dy * t - p.y
    oz = a.z + dz * t - p.z
    if ox * ox + oy * oy + oz * oz > tolerance * tolerance:
        return None
    return t


def repair_t_junctions(
    vertices: Sequence[Vector3D], loops: Sequence[IndexLoop], tolerance: float = WELD_TOLERANCE
) -> list[IndexLoop]:
    """Split edges at vertices that lie on them.

    Only endpoints of unmatched edges can be T-junction vertices, and only
    unmatched edges can need splitting, so each pass searches that subset.

    Returns:
        Index loops with T-junction vertices inserted
    """
    current = list(loops)
    for _ in range(MAX_REPAIR_PASSES):
        open_edges = unmatched_edges(current)
        if not open_edges:
            break
        candidates = sorted({i for edge in open_edges for i in edge})
        splits: dict[tuple[int, int], list[int]] = {}
        for a_idx, b_idx in open_edges:
            a = vertices[a_idx]
            b = vertices[b_idx]
            lo_x, hi_x = min(a.x, b.x) - tolerance, max(a.x, b.x) + tolerance
            lo_y, hi_y = min(a.y, b.y) - tolerance, max(a.y, b.y) + tolerance
            lo_z, hi_z = min(a.z, b.z) - tolerance, max(a.z, b.z) + tolerance
            on_edge = []
            for c_idx in candidates:
                if c_idx == a_idx or c_idx == b_idx:
                    continue
                p = vertices[c_idx]
                if not (lo_x <= p.x <= hi_x and lo_y <= p.y <= hi_y and lo_z <= p.z <= hi_z):
                    continue
                t = _interior_parameter(a, b, p, tolerance)
                if t is not None:
                    on_edge.append((t, c_idx))
            if on_edge:
                splits[(a_idx, b_idx)] = [idx for _, idx in sorted(on_edge)]
        if not splits:
            break

        repaired = []
        for loop in current:
            n = len(loop)
            new_loop: list[int] = []
            for i in range(n):
                edge = (loop[i], loop[(i + 1) % n])
                new_loop.append(loop[i])
                new_loop.extend(splits.get(edge, ()))
            repaired.append(tuple(new_loop))
        logger.debug("t-junction pass: split %d edges", len(splits))
        current = repaired
    return current


def _has_straight_corner(corners: np.ndarray, tolerance: float) -> bool:
    """Whether any loop vertex lies on the line through its neighbours."""
    prev = np.roll(corners, 1, axis=0)
    nxt = np.roll(corners, -1, axis=0)
    chord = nxt - prev
    lengths = np.linalg.norm(chord, axis=1)
    offsets = np.linalg.norm(np.cross(corners - prev, chord), axis=1)
    return bool(np.any(offsets <= tolerance * np.maximum(lengths, tolerance)))


def loops_to_trimesh(
    vertices: Sequence[Vector3D],
    loops: Sequence[IndexLoop],
    colors: Sequence[RGB | None] | None = None,
    tolerance: float = WELD_TOLERANCE,
) -> trimesh.Trimesh:
    """Triangulate convex index loops into a trimesh.Trimesh.

    Loops are fanned from their first vertex unless one of their vertices is
    straight (a split edge); those are fanned around an added centroid vertex
    so no zero-area triangle doubles a boundary edge. Triangle edges pair up
    exactly when loop edges do.

    Args:
        vertices: Welded vertex positions
        loops: Counter-clockwise (seen from outside) index loops
        colors: Colour tag per loop; face colours are set when every loop has one
        tolerance: Distance under which a vertex counts as straight

    Returns:
        Unprocessed mesh (no merging or cleanup by trimesh)
    """
    points = [v.to_tuple() for v in vertices]
    triangles: list[tuple[int, int, int]] = []
    owners: list[int] = []
    for position, loop in enumerate(loops):
        n = len(loop)
        corners = np.asarray([points[i] for i in loop], dtype=np.float64)
        if n == 3 or not _has_straight_corner(corners, tolerance):
            triangles.extend((loop[0], loop[i], loop[i + 1]) for i in range(1, n - 1))
            owners.extend([position] * (n - 2))
            continue
        center = len(points)
        points.append(tuple(corners.mean(axis=0).tolist()))
        triangles.extend((center, loop[i], loop[(i + 1) % n]) for i in range(n))
        owners.extend([position] * n)

    face_colors = None
    if colors is not None and owners and all(c is not None for c in colors):
        face_colors = np.asarray(
            [[*(round(c * 255) for c in colors[o]), 255] for o in owners],  # type: ignore[union-attr]
            dtype=np.uint8,
        )
    return trimesh.Trimesh(
        vertices=np.asarray(points, dtype=np.float64).reshape(-1, 3),
        faces=np.asarray(triangles, dtype=np.int64).reshape(-1, 3),
        face_colors=face_colors,
        process=False,
    )


def faces_to_trimesh(faces: Sequence[Face]) -> trimesh.Trimesh:
    """Triangle mesh of the raw faces, without welding.

    Enough for volume and ray containment, which do not depend on
    connectivity.
    """
    vertices = [v for face in faces for v in face.vertices]
    loops = []
    start = 0
    for face in faces:
        loops.append(tuple(range(start, start + len(face.vertices))))
        start += len(face.vertices)
    return loops_to_trimesh(vertices, loops)
