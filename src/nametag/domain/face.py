"""Planar faces of a polyhedral solid.

This module defines:
- Plane: An oriented plane (unit normal and offset from the origin)
- Face: A planar convex polygon with an outward-facing plane and a colour tag

A solid's boundary is a collection of faces. Faces are immutable; splitting,
flipping and transforming them produces new faces.
"""

from dataclasses import dataclass
from typing import Any

from nametag.domain.colored import RGB
from nametag.domain.vector import Vector3D
from nametag.exceptions import DegeneratePolygonError


@dataclass(frozen=True, slots=True)
class Plane:
    """An oriented plane: points p with normal . p == w.

    Attributes:
        normal: Unit normal pointing to the front side
        w: Signed distance of the plane from the origin along the normal
    """

    normal: Vector3D
    w: float

    @classmethod
    def from_vertices(cls, vertices: tuple[Vector3D, ...]) -> "Plane":
        """Fit a plane through a polygon using Newell's method.

        Newell's method sums over all edges, so collinear leading vertices do
        not produce a degenerate normal.

        Args:
            vertices: Polygon vertices in counter-clockwise order seen from
                the front side

        Returns:
            Plane through the vertex centroid

        Raises:
            DegeneratePolygonError: If the polygon has no area
        """
        nx = ny = nz = 0.0
        cx = cy = cz = 0.0
        n = len(vertices)
        for i in range(n):
            a = vertices[i]
            b = vertices[(i + 1) % n]
            nx += (a.y - b.y) * (a.z + b.z)
            ny += (a.z - b.z) * (a.x + b.x)
            nz += (a.x - b.x) * (a.y + b.y)
            cx += a.x
            cy += a.y
            cz += a.z

        length = (nx * nx + ny * ny + nz * nz) ** 0.5
        if length == 0.0:
            raise DegeneratePolygonError("face has zero area")

        normal = Vector3D(nx / length, ny / length, nz / length)
        centroid = Vector3D(cx / n, cy / n, cz / n)
        return cls(normal, normal.dot(centroid))

    def flipped(self) -> "Plane":
        """Return the same plane facing the opposite way."""
        return Plane(self.normal.negated(), -self.w)

    def distance(self, point: Vector3D) -> float:
        """Signed distance of a point; positive on the front side."""
        return self.normal.dot(point) - self.w


@dataclass(frozen=True, slots=True)
class Face:
    """A planar convex polygon on the boundary of a solid.

    Attributes:
        vertices: Vertices in counter-clockwise order seen from outside
        plane: Supporting plane, normal pointing out of the solid
        color: Optional colour tag carried through boolean operations
    """

    vertices: tuple[Vector3D, ...]
    plane: Plane
    color: RGB | None = None

    @classmethod
    def from_vertices(
        cls, vertices: tuple[Vector3D, ...] | list[Vector3D], color: RGB | None = None
    ) -> "Face":
        """Create a face, computing its plane from the vertices.

        Raises:
            DegeneratePolygonError: If fewer than 3 vertices are given or
                the vertices span no area
        """
        verts = tuple(vertices)
        if len(verts) < 3:
            raise DegeneratePolygonError(f"face needs 3 vertices, got {len(verts)}")
        return cls(verts, Plane.from_vertices(verts), color)

    def flipped(self) -> "Face":
        """Reverse the orientation (vertex order and plane)."""
        return Face(tuple(reversed(self.vertices)), self.plane.flipped(), self.color)

    def with_color(self, color: RGB | None) -> "Face":
        return Face(self.vertices, self.plane, color)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary with vertex coordinates, plane and colour
        """
        normal = self.plane.normal
        return {
            "vertices": [v.to_tuple() for v in self.vertices],
            "plane": [normal.x, normal.y, normal.z, self.plane.w],
            "color": list(self.color) if self.color is not None else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Face":
        """Deserialize from dictionary.

        The stored plane is reused as is; without one it is recomputed
        from the vertices.

        Args:
            data: Dictionary with vertices, optional plane and color fields

        Returns:
            Face instance
        """
        color = tuple(data["color"]) if data["color"] is not None else None
        vertices = [Vector3D(*v) for v in data["vertices"]]
        if data.get("plane") is None:
            return cls.from_vertices(vertices, color=color)  # type: ignore[arg-type]
        nx, ny, nz, w = data["plane"]
        return cls(tuple(vertices), Plane(Vector3D(nx, ny, nz), w), color)  # type: ignore[arg-type]
