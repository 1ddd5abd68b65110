"""Polyhedral solids with rigid transforms and boolean operations.

A Solid is an immutable collection of planar convex faces forming a closed
boundary. Every operation returns a new Solid; inputs are never modified, so
the same Solid can appear in several places of a construction pipeline.

Boolean operations use BSP-tree clipping (see nametag.core.bsp). Welding,
T-junction repair and the trimesh handoff live in nametag.core.mesh.
"""

import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from functools import cached_property
from typing import Any

import trimesh

from nametag.core.bsp import EPSILON, intersect_faces, subtract_faces, union_faces
from nametag.core.mesh import (
    WELD_TOLERANCE,
    faces_to_trimesh,
    index_faces,
    loops_to_trimesh,
    repair_t_junctions,
    unmatched_edges,
)
from nametag.domain import RGB, Face, Plane, Vector3D
from nametag.exceptions import GeometryError, NonManifoldResultError

VectorLike = Vector3D | tuple[float, float, float] | tuple[float, float]


def as_vector3(value: VectorLike) -> Vector3D:
    """Accept a Vector3D or a 2/3-tuple (z defaults to 0)."""
    if isinstance(value, Vector3D):
        return value
    if len(value) == 2:
        return Vector3D(float(value[0]), float(value[1]), 0.0)
    return Vector3D(float(value[0]), float(value[1]), float(value[2]))  # type: ignore[misc]


@dataclass(frozen=True)
class Solid:
    """A closed polyhedral solid.

    Attributes:
        faces: Boundary faces, each oriented with its normal pointing out
    """

    faces: tuple[Face, ...] = ()

    @classmethod
    def from_faces(cls, faces: Iterable[Face]) -> "Solid":
        return cls(tuple(faces))

    @property
    def is_empty(self) -> bool:
        return len(self.faces) == 0

    # Transforms

    def _map_faces(
        self,
        fn: Callable[[Vector3D], Vector3D],
        plane_fn: Callable[[Plane], Plane],
        flips_orientation: bool,
    ) -> "Solid":
        faces = []
        for face in self.faces:
            vertices = tuple(fn(v) for v in face.vertices)
            if flips_orientation:
                vertices = tuple(reversed(vertices))
            faces.append(Face(vertices, plane_fn(face.plane), face.color))
        return Solid(tuple(faces))

    def translate(self, offset: VectorLike) -> "Solid":
        """Move the solid by an offset vector."""
        t = as_vector3(offset)
        faces = tuple(
            Face(
                tuple(v.plus(t) for v in face.vertices),
                Plane(face.plane.normal, face.plane.w + face.plane.normal.dot(t)),
                face.color,
            )
            for face in self.faces
        )
        return Solid(faces)

    def rotate_z(self, degrees: float) -> "Solid":
        """Rotate counter-clockwise about the Z axis."""
        radians = math.radians(degrees)
        c = math.cos(radians)
        s = math.sin(radians)

        def rotate(v: Vector3D) -> Vector3D:
            return Vector3D(v.x * c - v.y * s, v.x * s + v.y * c, v.z)

        faces = tuple(
            Face(
                tuple(rotate(v) for v in face.vertices),
                Plane(rotate(face.plane.normal), face.plane.w),
                face.color,
            )
            for face in self.faces
        )
        return Solid(faces)

    def scale(self, factors: VectorLike | float) -> "Solid":
        """Scale about the origin, per axis or uniformly.

        Planes are carried through the transform (normals scale by the
        inverse factors), so faces are never refitted.

        Raises:
            GeometryError: If any factor is zero
        """
        if isinstance(factors, (int, float)):
            f = Vector3D(float(factors), float(factors), float(factors))
        else:
            f = as_vector3(factors)
        if f.x == 0 or f.y == 0 or f.z == 0:
            raise GeometryError(f"scale factors must be non-zero, got {f.to_tuple()}")

        def scale_plane(plane: Plane) -> Plane:
            n = Vector3D(plane.normal.x / f.x, plane.normal.y / f.y, plane.normal.z / f.z)
            length = n.length()
            return Plane(n.times(1 / length), plane.w / length)

        flips = f.x * f.y * f.z < 0
        return self._map_faces(
            lambda v: Vector3D(v.x * f.x, v.y * f.y, v.z * f.z), scale_plane, flips
        )

    def mirror(self, normal: VectorLike) -> "Solid":
        """Reflect across the plane through the origin with the given normal.

        Reflection reverses handedness, so every face's vertex order is
        reversed to keep normals pointing out.
        """
        n = as_vector3(normal).unit()

        def reflect(v: Vector3D) -> Vector3D:
            return v.minus(n.times(2 * n.dot(v)))

        return self._map_faces(
            reflect, lambda plane: Plane(reflect(plane.normal), plane.w), flips_orientation=True
        )

    def colored(self, color: RGB | None) -> "Solid":
        """Tag every face with a colour."""
        return Solid(tuple(face.with_color(color) for face in self.faces))

    # Booleans

    def union(self, other: "Solid", epsilon: float = EPSILON) -> "Solid":
        """Volume covered by either solid."""
        if not self.may_overlap(other):
            return self.union_for_non_intersecting(other)
        return Solid(tuple(union_faces(list(self.faces), list(other.faces), epsilon)))

    def difference(self, other: "Solid", epsilon: float = EPSILON) -> "Solid":
        """Volume of this solid not covered by the other."""
        if not self.may_overlap(other):
            return self
        return Solid(tuple(subtract_faces(list(self.faces), list(other.faces), epsilon)))

    def intersection(self, other: "Solid", epsilon: float = EPSILON) -> "Solid":
        """Volume covered by both solids."""
        if not self.may_overlap(other):
            return Solid()
        return Solid(tuple(intersect_faces(list(self.faces), list(other.faces), epsilon)))

    def union_for_non_intersecting(self, other: "Solid") -> "Solid":
        """Combine two solids without clipping.

        Precondition (not checked): the solids do not overlap. Faces are
        simply concatenated; overlapping inputs yield an invalid boundary.
        """
        return Solid(self.faces + other.faces)

    # Measurements

    def bounds(self) -> tuple[Vector3D, Vector3D]:
        """Axis-aligned bounding box.

        Returns:
            Tuple of (min corner, max corner)

        Raises:
            GeometryError: If the solid is empty
        """
        if self.is_empty:
            raise GeometryError("empty solid has no bounds")
        xs = [v.x for face in self.faces for v in face.vertices]
        ys = [v.y for face in self.faces for v in face.vertices]
        zs = [v.z for face in self.faces for v in face.vertices]
        return Vector3D(min(xs), min(ys), min(zs)), Vector3D(max(xs), max(ys), max(zs))

    def may_overlap(self, other: "Solid") -> bool:
        """Whether the bounding boxes of two non-empty solids intersect."""
        if self.is_empty or other.is_empty:
            return False
        lo_a, hi_a = self.bounds()
        lo_b, hi_b = other.bounds()
        return (
            lo_a.x <= hi_b.x and lo_b.x <= hi_a.x
            and lo_a.y <= hi_b.y and lo_b.y <= hi_a.y
            and lo_a.z <= hi_b.z and lo_b.z <= hi_a.z
        )

    @cached_property
    def _surface(self) -> trimesh.Trimesh:
        return faces_to_trimesh(self.faces)

    def volume(self) -> float:
        """Enclosed volume (trimesh mass properties of the raw faces)."""
        if self.is_empty:
            return 0.0
        return float(self._surface.volume)

    def vertices(self) -> list[Vector3D]:
        return [v for face in self.faces for v in face.vertices]

    def contains_point(self, point: VectorLike) -> bool:
        """Ray-parity containment test (trimesh ray queries).

        Points on the boundary can go either way; sample away from faces.
        """
        if self.is_empty:
            return False
        return bool(self._surface.contains([as_vector3(point).to_tuple()])[0])

    # Topology

    def validate(self, tolerance: float = WELD_TOLERANCE) -> "Solid":
        """Check that the solid is watertight.

        Vertices closer than the tolerance are welded and T-junctions are
        repaired; the repaired loops must form a watertight, winding-consistent
        trimesh. The returned solid carries the repaired faces.

        Returns:
            Solid whose faces pair up edge for edge

        Raises:
            NonManifoldResultError: If the solid is empty or edges stay unmatched
        """
        vertices, loops, owners = index_faces(self.faces, tolerance)
        if not loops:
            raise NonManifoldResultError(0, "solid is empty")
        loops = repair_t_junctions(vertices, loops, tolerance)
        mesh = loops_to_trimesh(vertices, loops, tolerance=tolerance)
        if not (mesh.is_watertight and mesh.is_winding_consistent):
            raise NonManifoldResultError(len(unmatched_edges(loops)))
        faces = tuple(
            Face(tuple(vertices[i] for i in loop), self.faces[owner].plane, self.faces[owner].color)
            for loop, owner in zip(loops, owners)
        )
        return Solid(faces)

    def is_manifold(self, tolerance: float = WELD_TOLERANCE) -> bool:
        try:
            self.validate(tolerance)
        except NonManifoldResultError:
            return False
        return True

    def to_mesh(self, tolerance: float = WELD_TOLERANCE) -> trimesh.Trimesh:
        """Welded, T-junction-free triangle mesh for external exporters.

        Face colours come from the colour tags when every face has one.
        """
        vertices, loops, owners = index_faces(self.faces, tolerance)
        loops = repair_t_junctions(vertices, loops, tolerance)
        colors = [self.faces[owner].color for owner in owners]
        return loops_to_trimesh(vertices, loops, colors, tolerance)

    # Serialization

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"faces": [face.to_dict() for face in self.faces]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Solid":
        """Deserialize from dictionary."""
        return cls(tuple(Face.from_dict(f) for f in data["faces"]))
