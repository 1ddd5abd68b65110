"""Planar outlines and regions.

This module provides the 2D half of the construction pipeline:
- Polygon2D: A single closed, simple outline with counter-clockwise vertices
- Shape2D: A region made of outlines with holes (result of 2D unions)
- hull: Convex hull of any mix of outlines and points
- extrusion of outlines and regions into solids

Planar booleans and hulls are delegated to shapely. Extrusion produces
closed solids: caps (triangulated when concave) plus one wall per edge.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from shapely import unary_union
from shapely.geometry import MultiPoint, MultiPolygon
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.geometry.base import BaseGeometry
from shapely.geometry.polygon import orient
from shapely.validation import explain_validity

from nametag.core.solid import Solid, VectorLike, as_vector3
from nametag.core.triangulate import is_convex, triangulate_rings
from nametag.domain import Face, Plane, Vector2D, Vector3D
from nametag.exceptions import DegeneratePolygonError, GeometryError

# Regions smaller than this (in square units) are dropped from shapely output
MIN_REGION_AREA = 1e-9

# Twice the triangle area under which a vertex is collinear with its neighbours
COLLINEAR_TOLERANCE = 1e-9


def _ring_signed_area(points: Sequence[Vector2D]) -> float:
    n = len(points)
    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y
    return area / 2.0


def _drop_collinear(points: list[Vector2D]) -> list[Vector2D]:
    """Remove vertices lying on the line through their neighbours.

    shapely unions keep such vertices where strokes meet; left in a ring
    they turn into zero-area cap triangles.
    """
    pts = list(points)
    i = 0
    while len(pts) > 3 and i < len(pts):
        a = pts[i - 1]
        b = pts[i]
        c = pts[(i + 1) % len(pts)]
        turn = (b.x - a.x) * (c.y - b.y) - (b.y - a.y) * (c.x - b.x)
        if abs(turn) <= COLLINEAR_TOLERANCE:
            del pts[i]
            i = max(i - 1, 0)
        else:
            i += 1
    return pts


def _as_point(value: Vector2D | tuple[float, float]) -> Vector2D:
    if isinstance(value, Vector2D):
        return value
    return Vector2D(float(value[0]), float(value[1]))


@dataclass(frozen=True)
class Polygon2D:
    """A closed, non-self-intersecting outline.

    Vertices are stored counter-clockwise without repeating the first vertex.
    Build instances with from_points, which validates and orients them.

    Attributes:
        points: Outline vertices, counter-clockwise
    """

    points: tuple[Vector2D, ...]

    @classmethod
    def from_points(cls, points: Iterable[Vector2D | tuple[float, float]]) -> "Polygon2D":
        """Create an outline from an ordered point sequence.

        Consecutive duplicates (including a repeated closing point) and
        vertices collinear with their neighbours are removed, and clockwise
        input is reversed.

        Raises:
            DegeneratePolygonError: If fewer than 3 distinct points remain,
                the points are collinear, or the boundary crosses itself
        """
        pts: list[Vector2D] = []
        for p in points:
            q = _as_point(p)
            if not pts or pts[-1] != q:
                pts.append(q)
        while len(pts) > 1 and pts[0] == pts[-1]:
            pts.pop()

        if len(set(pts)) < 3:
            raise DegeneratePolygonError(f"need 3 distinct points, got {len(set(pts))}")

        area = _ring_signed_area(pts)
        if area == 0.0:
            raise DegeneratePolygonError("points are collinear")

        pts = _drop_collinear(pts)
        shape = ShapelyPolygon([p.to_tuple() for p in pts])
        if not shape.is_valid:
            raise DegeneratePolygonError(explain_validity(shape))

        if area < 0:
            pts.reverse()
        return cls(tuple(pts))

    def signed_area(self) -> float:
        """Shoelace area; positive because vertices are counter-clockwise."""
        return _ring_signed_area(self.points)

    def area(self) -> float:
        return abs(self.signed_area())

    def bounds(self) -> tuple[Vector2D, Vector2D]:
        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]
        return Vector2D(min(xs), min(ys)), Vector2D(max(xs), max(ys))

    def is_convex(self) -> bool:
        return is_convex(self.points)

    def translate(self, offset: Vector2D | tuple[float, float]) -> "Polygon2D":
        t = _as_point(offset)
        return Polygon2D(tuple(p.plus(t) for p in self.points))

    def scale(self, factors: Vector2D | tuple[float, float] | float) -> "Polygon2D":
        """Scale about the origin; mirroring factors are re-oriented.

        Raises:
            DegeneratePolygonError: If a factor is zero
        """
        if isinstance(factors, (int, float)):
            f = Vector2D(float(factors), float(factors))
        else:
            f = _as_point(factors)
        return Polygon2D.from_points(Vector2D(p.x * f.x, p.y * f.y) for p in self.points)

    def to_shapely(self) -> ShapelyPolygon:
        return ShapelyPolygon([p.to_tuple() for p in self.points])

    def to_shape(self) -> "Shape2D":
        return Shape2D((Region(self, ()),))

    def union(self, other: "Polygon2D | Shape2D") -> "Shape2D":
        """Coplanar boolean union; the result may hold several outlines."""
        return union_all([self, other])

    def extrude(self, offset: VectorLike) -> Solid:
        """Sweep the outline along a straight offset into a closed solid.

        Args:
            offset: Translation of the top cap relative to the bottom cap
                (which lies in the z=0 plane); must have a non-zero z part

        Returns:
            Prism with caps and one side wall per edge
        """
        return _extrude_region(Region(self, ()), as_vector3(offset))


@dataclass(frozen=True)
class Region:
    """One connected part of a Shape2D: an outer outline and its holes.

    Attributes:
        outer: Outer boundary
        holes: Outlines of holes inside the outer boundary
    """

    outer: Polygon2D
    holes: tuple[Polygon2D, ...] = ()


@dataclass(frozen=True)
class Shape2D:
    """A planar region made of disjoint outlines with holes.

    Attributes:
        regions: Connected parts of the region
    """

    regions: tuple[Region, ...] = ()

    @classmethod
    def from_shapely(cls, geometry: BaseGeometry) -> "Shape2D":
        """Convert shapely (multi)polygons, dropping negligible slivers."""
        if geometry.is_empty:
            return cls()
        if not geometry.is_valid:
            geometry = geometry.buffer(0)

        if isinstance(geometry, ShapelyPolygon):
            polygons = [geometry]
        else:
            polygons = [g for g in getattr(geometry, "geoms", []) if isinstance(g, ShapelyPolygon)]

        regions = []
        for polygon in polygons:
            if polygon.area <= MIN_REGION_AREA:
                continue
            polygon = orient(polygon, sign=1.0)
            outer = Polygon2D.from_points(list(polygon.exterior.coords))
            holes = tuple(
                Polygon2D.from_points(list(ring.coords))
                for ring in polygon.interiors
                if ShapelyPolygon(ring).area > MIN_REGION_AREA
            )
            regions.append(Region(outer, holes))
        return cls(tuple(regions))

    def to_shapely(self) -> MultiPolygon:
        return MultiPolygon(
            [
                (
                    [p.to_tuple() for p in region.outer.points],
                    [[p.to_tuple() for p in hole.points] for hole in region.holes],
                )
                for region in self.regions
            ]
        )

    @property
    def is_empty(self) -> bool:
        return len(self.regions) == 0

    def area(self) -> float:
        return sum(
            region.outer.area() - sum(hole.area() for hole in region.holes)
            for region in self.regions
        )

    def bounds(self) -> tuple[Vector2D, Vector2D]:
        """Bounding box of all outer outlines.

        Raises:
            GeometryError: If the shape is empty
        """
        if self.is_empty:
            raise GeometryError("empty shape has no bounds")
        corners = [region.outer.bounds() for region in self.regions]
        return (
            Vector2D(min(lo.x for lo, _ in corners), min(lo.y for lo, _ in corners)),
            Vector2D(max(hi.x for _, hi in corners), max(hi.y for _, hi in corners)),
        )

    def union(self, other: "Polygon2D | Shape2D") -> "Shape2D":
        return union_all([self, other])

    def as_polygon(self) -> Polygon2D:
        """Return the single outline this shape consists of.

        Raises:
            DegeneratePolygonError: If the shape is empty, has several parts
                or has holes
        """
        if len(self.regions) != 1 or self.regions[0].holes:
            raise DegeneratePolygonError(
                f"shape is not a single outline ({len(self.regions)} parts)"
            )
        return self.regions[0].outer

    def extrude(self, height: float) -> Solid:
        """Extrude every region along +Z (or -Z for negative height)."""
        offset = Vector3D(0.0, 0.0, height)
        solid = Solid()
        for region in self.regions:
            solid = solid.union_for_non_intersecting(_extrude_region(region, offset))
        return solid


def union_all(shapes: Iterable[Polygon2D | Shape2D]) -> Shape2D:
    """Union any number of outlines and regions in one pass."""
    geometries = [shape.to_shapely() for shape in shapes]
    if not geometries:
        return Shape2D()
    return Shape2D.from_shapely(unary_union(geometries))


def hull(*items: Polygon2D | Shape2D | Vector2D | tuple[float, float]) -> Polygon2D:
    """Convex hull of all vertices of the given outlines, regions and points.

    Raises:
        DegeneratePolygonError: If the inputs span no area
    """
    coords: list[tuple[float, float]] = []
    for item in items:
        if isinstance(item, Polygon2D):
            coords.extend(p.to_tuple() for p in item.points)
        elif isinstance(item, Shape2D):
            for region in item.regions:
                coords.extend(p.to_tuple() for p in region.outer.points)
        else:
            coords.append(_as_point(item).to_tuple())

    result = MultiPoint(coords).convex_hull
    if not isinstance(result, ShapelyPolygon):
        raise DegeneratePolygonError("hull of the inputs has no area")
    return Polygon2D.from_points(list(orient(result, sign=1.0).exterior.coords))


def _lift(p: Vector2D, offset: Vector3D | None = None) -> Vector3D:
    if offset is None:
        return Vector3D(p.x, p.y, 0.0)
    return Vector3D(p.x + offset.x, p.y + offset.y, offset.z)


def _extrude_region(region: Region, offset: Vector3D) -> Solid:
    """Build the closed prism of one region.

    Faces are built for a positive z offset and flipped as a whole when the
    offset points down.
    """
    if offset.z == 0:
        raise GeometryError("extrusion offset must leave the XY plane")

    outer = list(region.outer.points)
    holes = [list(reversed(hole.points)) for hole in region.holes]

    bottom = Plane(Vector3D(0.0, 0.0, -1.0), 0.0)
    top = Plane(Vector3D(0.0, 0.0, 1.0), offset.z)

    faces: list[Face] = []
    if not holes and region.outer.is_convex():
        faces.append(Face(tuple(_lift(p) for p in reversed(outer)), bottom))
        faces.append(Face(tuple(_lift(p, offset) for p in outer), top))
    else:
        points, triangles = triangulate_rings([outer, *holes])
        for ia, ib, ic in triangles:
            a, b, c = points[ia], points[ib], points[ic]
            faces.append(Face((_lift(a), _lift(c), _lift(b)), bottom))
            faces.append(Face((_lift(a, offset), _lift(b, offset), _lift(c, offset)), top))

    for ring in [outer, *holes]:
        n = len(ring)
        for i in range(n):
            a = ring[i]
            b = ring[(i + 1) % n]
            faces.append(
                Face.from_vertices([_lift(a), _lift(b), _lift(b, offset), _lift(a, offset)])
            )

    if offset.z < 0:
        faces = [face.flipped() for face in faces]
    return Solid(tuple(faces))
