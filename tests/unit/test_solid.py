"""Tests for solids: transforms, booleans, measurements and serialization."""

import math

import pytest

from nametag.core import Solid, cuboid, cylinder
from nametag.core.mesh import index_faces, unmatched_edges
from nametag.domain import Face, Vector3D
from nametag.exceptions import GeometryError, NonManifoldResultError


@pytest.fixture
def cube() -> Solid:
    """2x2x2 cube centred on the origin."""
    return cuboid((2.0, 2.0, 2.0))


@pytest.fixture
def shifted_cube() -> Solid:
    """2x2x2 cube overlapping the origin cube in a 1x1x1 corner."""
    return cuboid((2.0, 2.0, 2.0), center=(1.0, 1.0, 1.0))


class TestTransforms:
    """Tests for rigid and scaling transforms."""

    def test_translate(self, cube: Solid) -> None:
        """Test translation moves bounds and keeps planes consistent."""
        moved = cube.translate((1.0, 2.0, 3.0))
        lo, hi = moved.bounds()
        assert lo.to_tuple() == pytest.approx((0.0, 1.0, 2.0))
        assert hi.to_tuple() == pytest.approx((2.0, 3.0, 4.0))
        for face in moved.faces:
            for v in face.vertices:
                assert face.plane.distance(v) == pytest.approx(0.0, abs=1e-12)

    def test_rotate_z(self, cube: Solid) -> None:
        """Test rotation by 45 degrees widens the box."""
        rotated = cube.rotate_z(45.0)
        lo, hi = rotated.bounds()
        assert hi.x == pytest.approx(2**0.5)
        assert rotated.volume() == pytest.approx(8.0)

    def test_scale(self, cube: Solid) -> None:
        """Test per-axis scaling."""
        scaled = cube.scale((2.0, 1.0, 0.5))
        assert scaled.volume() == pytest.approx(8.0)
        lo, hi = scaled.bounds()
        assert hi.x == pytest.approx(2.0)
        assert hi.z == pytest.approx(0.5)

    def test_negative_scale_keeps_orientation(self, cube: Solid) -> None:
        """Test orientation-reversing scales flip faces to stay outward."""
        mirrored = cube.translate((5.0, 0.0, 0.0)).scale((-1.0, 1.0, 1.0))
        assert mirrored.volume() == pytest.approx(8.0)
        assert mirrored.is_manifold()

    @pytest.mark.parametrize("factors", [(2.0, 1.0, 0.5), (-0.33, 0.33, 0.5)])
    def test_scale_carries_planes(self, cube: Solid, factors: tuple) -> None:
        """Test scaled planes pass through the scaled vertices and point out."""
        scaled = cube.translate((0.3, -0.2, 0.1)).scale(factors)
        for face in scaled.faces:
            assert face.plane.normal.length() == pytest.approx(1.0)
            for v in face.vertices:
                assert face.plane.distance(v) == pytest.approx(0.0, abs=1e-12)
            fitted = Face.from_vertices(face.vertices).plane
            assert fitted.normal.dot(face.plane.normal) == pytest.approx(1.0)

    def test_mirror_carries_planes(self, cube: Solid) -> None:
        """Test mirrored planes match planes fitted to the mirrored vertices."""
        mirrored = cube.translate((3.0, 0.5, 0.0)).mirror((1.0, 1.0, 0.0))
        for face in mirrored.faces:
            fitted = Face.from_vertices(face.vertices).plane
            assert fitted.normal.dot(face.plane.normal) == pytest.approx(1.0)
            assert fitted.w == pytest.approx(face.plane.w)

    def test_zero_scale_rejected(self, cube: Solid) -> None:
        """Test flattening scales are rejected."""
        with pytest.raises(GeometryError):
            cube.scale((1.0, 0.0, 1.0))

    def test_mirror(self, cube: Solid) -> None:
        """Test mirroring across the YZ plane."""
        mirrored = cube.translate((3.0, 0.0, 0.0)).mirror((1.0, 0.0, 0.0))
        lo, hi = mirrored.bounds()
        assert lo.x == pytest.approx(-4.0)
        assert hi.x == pytest.approx(-2.0)
        assert mirrored.volume() == pytest.approx(8.0)
        assert mirrored.contains_point((-3.0123, 0.0234, 0.0345))

    def test_transforms_do_not_modify_input(self, cube: Solid) -> None:
        """Test value semantics."""
        before = cube.to_dict()
        cube.translate((1.0, 1.0, 1.0)).rotate_z(30.0).scale(2.0)
        assert cube.to_dict() == before


class TestBooleans:
    """Tests for union, difference and intersection."""

    def test_union_volume(self, cube: Solid, shifted_cube: Solid) -> None:
        """Test |A u B| = |A| + |B| - |A n B|."""
        result = cube.union(shifted_cube)
        assert result.volume() == pytest.approx(15.0)
        assert result.is_manifold()

    def test_difference_volume(self, cube: Solid, shifted_cube: Solid) -> None:
        """Test the overlap is removed."""
        result = cube.difference(shifted_cube)
        assert result.volume() == pytest.approx(7.0)
        assert result.is_manifold()
        assert not result.contains_point((0.5123, 0.5234, 0.5345))
        assert result.contains_point((-0.5123, -0.5234, 0.5345))

    def test_intersection_volume(self, cube: Solid, shifted_cube: Solid) -> None:
        """Test only the shared corner remains."""
        result = cube.intersection(shifted_cube)
        assert result.volume() == pytest.approx(1.0)
        lo, hi = result.bounds()
        assert lo.to_tuple() == pytest.approx((0.0, 0.0, 0.0))
        assert hi.to_tuple() == pytest.approx((1.0, 1.0, 1.0))

    def test_union_idempotent(self, cube: Solid) -> None:
        """Test A u A = A."""
        result = cube.union(cube)
        assert result.volume() == pytest.approx(8.0)
        assert result.is_manifold()

    def test_self_difference_empty(self, cube: Solid) -> None:
        """Test A - A is empty."""
        result = cube.difference(cube)
        assert result.volume() == pytest.approx(0.0, abs=1e-9)

    def test_difference_then_subset(self, cube: Solid, shifted_cube: Solid) -> None:
        """Test (A u B) - B lies within A."""
        result = cube.union(shifted_cube).difference(shifted_cube)
        assert result.volume() == pytest.approx(7.0)
        lo, hi = result.bounds()
        assert lo.to_tuple() == pytest.approx((-1.0, -1.0, -1.0))
        assert hi.to_tuple() == pytest.approx((1.0, 1.0, 1.0))

    def test_disjoint_short_circuit(self, cube: Solid) -> None:
        """Test operands with separate bounding boxes skip clipping."""
        far = cube.translate((10.0, 0.0, 0.0))
        assert cube.difference(far) is cube
        assert cube.intersection(far).is_empty
        union = cube.union(far)
        assert len(union.faces) == 12
        assert union.volume() == pytest.approx(16.0)

    def test_empty_operands(self, cube: Solid) -> None:
        """Test booleans with an empty solid."""
        empty = Solid()
        assert cube.union(empty).volume() == pytest.approx(8.0)
        assert empty.union(cube).volume() == pytest.approx(8.0)
        assert cube.difference(empty) is cube
        assert empty.difference(cube).is_empty

    def test_bore_through_cylinder(self) -> None:
        """Test drilling a hole through a block."""
        block = cuboid((4.0, 4.0, 2.0))
        bore = cylinder(1.0, -2.0, 2.0, resolution=16)
        result = block.difference(bore)
        polygon_area = 0.5 * 16 * math.sin(2 * math.pi / 16)
        assert result.volume() == pytest.approx((16.0 - polygon_area) * 2.0)
        assert result.is_manifold()
        assert not result.contains_point((0.0123, 0.0234, 0.0345))

    def test_colours_survive_booleans(self, cube: Solid, shifted_cube: Solid) -> None:
        """Test faces keep the colour of the solid they came from."""
        red = cube.colored((1.0, 0.0, 0.0))
        blue = shifted_cube.colored((0.0, 0.0, 1.0))
        colors = {face.color for face in red.union(blue).faces}
        assert colors == {(1.0, 0.0, 0.0), (0.0, 0.0, 1.0)}


class TestMeasurements:
    """Tests for bounds, volume and containment."""

    def test_empty_bounds(self) -> None:
        """Test an empty solid has no bounds."""
        with pytest.raises(GeometryError):
            Solid().bounds()

    def test_volume(self, cube: Solid) -> None:
        """Test the divergence-theorem volume."""
        assert cube.volume() == pytest.approx(8.0)

    def test_contains_point(self, cube: Solid) -> None:
        """Test ray-parity containment."""
        assert cube.contains_point((0.1, 0.2, 0.3))
        assert not cube.contains_point((1.5, 0.2, 0.3))
        assert not cube.contains_point((0.1, 0.2, 1.5))
        assert not cube.contains_point((0.1, 0.2, -1.5))

    def test_may_overlap(self, cube: Solid, shifted_cube: Solid) -> None:
        """Test bounding box overlap."""
        assert cube.may_overlap(shifted_cube)
        assert not cube.may_overlap(cube.translate((0.0, 0.0, 5.0)))
        assert not cube.may_overlap(Solid())


class TestTopology:
    """Tests for watertightness checks and the mesh handoff."""

    def test_open_solid(self, cube: Solid) -> None:
        """Test a missing face is reported."""
        open_box = Solid(cube.faces[1:])
        assert not open_box.is_manifold()
        with pytest.raises(NonManifoldResultError) as exc_info:
            open_box.validate()
        assert exc_info.value.open_edges == 4

    def test_empty_solid(self) -> None:
        """Test an empty solid is not a valid result."""
        with pytest.raises(NonManifoldResultError, match="empty"):
            Solid().validate()

    def test_validate_repairs_t_junctions(self) -> None:
        """Test a small block on a large one validates after repair."""
        base = cuboid((4.0, 4.0, 1.0), center=(0.0, 0.0, 0.5))
        knob = cuboid((1.0, 1.0, 1.0), center=(0.0, 0.0, 1.25))
        result = base.union(knob)
        repaired = result.validate()
        assert repaired.volume() == pytest.approx(16.75)
        vertices, loops, owners = index_faces(repaired.faces)
        assert unmatched_edges(loops) == []
        mesh = repaired.to_mesh()
        assert mesh.is_watertight
        assert mesh.volume == pytest.approx(16.75)

    def test_mesh_of_cube(self, cube: Solid) -> None:
        """Test the welded mesh of a cube."""
        mesh = cube.colored((0.5, 0.5, 0.5)).to_mesh()
        assert len(mesh.vertices) == 8
        assert len(mesh.faces) == 12
        assert mesh.is_watertight
        assert mesh.is_winding_consistent
        assert mesh.visual.face_colors.tolist() == [[128, 128, 128, 255]] * 12


class TestSerialization:
    """Tests for dictionary round trips used between processes."""

    def test_round_trip(self, cube: Solid, shifted_cube: Solid) -> None:
        """Test faces, planes and colours survive serialization."""
        solid = cube.union(shifted_cube).colored((0.89, 1.0, 0.0))
        restored = Solid.from_dict(solid.to_dict())
        assert restored == solid

    def test_vertices(self, cube: Solid) -> None:
        """Test vertex listing."""
        assert Vector3D(1.0, 1.0, 1.0) in cube.vertices()
