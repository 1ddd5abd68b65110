"""Tests for domain models to verify they work correctly."""

import math

import pytest

from nametag.core import cuboid
from nametag.domain import ColoredSolid, Face, GearSpec, Plane, Vector2D, Vector3D
from nametag.exceptions import DegeneratePolygonError, InvalidGearSpecError


class TestVector2D:
    """Tests for Vector2D class."""

    def test_from_angle(self) -> None:
        """Test unit vector from an angle."""
        v = Vector2D.from_angle(math.pi / 2)
        assert v.x == pytest.approx(0.0, abs=1e-12)
        assert v.y == pytest.approx(1.0)

    def test_normal_rotates_clockwise(self) -> None:
        """Test normal is the vector rotated by -90 degrees."""
        assert Vector2D(1.0, 0.0).normal() == Vector2D(0.0, -1.0)
        assert Vector2D(3.0, 4.0).normal() == Vector2D(4.0, -3.0)

    def test_arithmetic(self) -> None:
        """Test plus, minus, times and negated."""
        a = Vector2D(1.0, 2.0)
        b = Vector2D(3.0, 5.0)
        assert a.plus(b) == Vector2D(4.0, 7.0)
        assert b.minus(a) == Vector2D(2.0, 3.0)
        assert a.times(2.0) == Vector2D(2.0, 4.0)
        assert a.negated() == Vector2D(-1.0, -2.0)
        assert a.dot(b) == 13.0

    def test_rotated(self) -> None:
        """Test counter-clockwise rotation about the origin."""
        v = Vector2D(2.0, 0.0).rotated(math.pi / 2)
        assert v.x == pytest.approx(0.0, abs=1e-12)
        assert v.y == pytest.approx(2.0)
        assert v.length() == pytest.approx(2.0)

    def test_vector_immutable(self) -> None:
        """Test that vector is immutable."""
        v = Vector2D(1.0, 2.0)
        with pytest.raises(AttributeError):
            v.x = 3.0  # type: ignore


class TestVector3D:
    """Tests for Vector3D class."""

    def test_cross_product(self) -> None:
        """Test right-handed cross product."""
        x = Vector3D(1.0, 0.0, 0.0)
        y = Vector3D(0.0, 1.0, 0.0)
        assert x.cross(y) == Vector3D(0.0, 0.0, 1.0)

    def test_unit_and_length(self) -> None:
        """Test normalization."""
        v = Vector3D(3.0, 0.0, 4.0)
        assert v.length() == 5.0
        assert v.unit().length() == pytest.approx(1.0)

    def test_lerp(self) -> None:
        """Test linear interpolation."""
        a = Vector3D(0.0, 0.0, 0.0)
        b = Vector3D(2.0, 4.0, 6.0)
        assert a.lerp(b, 0.5) == Vector3D(1.0, 2.0, 3.0)


class TestPlaneAndFace:
    """Tests for Plane and Face classes."""

    @pytest.fixture
    def square(self) -> list[Vector3D]:
        """Unit square in the z=1 plane, counter-clockwise seen from above."""
        return [
            Vector3D(0.0, 0.0, 1.0),
            Vector3D(1.0, 0.0, 1.0),
            Vector3D(1.0, 1.0, 1.0),
            Vector3D(0.0, 1.0, 1.0),
        ]

    def test_plane_from_vertices(self, square: list[Vector3D]) -> None:
        """Test plane normal follows the vertex order."""
        plane = Plane.from_vertices(tuple(square))
        assert plane.normal.z == pytest.approx(1.0)
        assert plane.w == pytest.approx(1.0)
        assert plane.distance(Vector3D(5.0, 5.0, 3.0)) == pytest.approx(2.0)

    def test_plane_rejects_collinear_points(self) -> None:
        """Test zero-area polygon has no plane."""
        with pytest.raises(DegeneratePolygonError):
            Plane.from_vertices(
                (Vector3D(0, 0, 0), Vector3D(1, 0, 0), Vector3D(2, 0, 0))
            )

    def test_face_needs_three_vertices(self) -> None:
        """Test face with two vertices is rejected."""
        with pytest.raises(DegeneratePolygonError):
            Face.from_vertices([Vector3D(0, 0, 0), Vector3D(1, 0, 0)])

    def test_face_flipped(self, square: list[Vector3D]) -> None:
        """Test flipping reverses vertices and plane."""
        face = Face.from_vertices(square, color=(1.0, 0.0, 0.0))
        flipped = face.flipped()
        assert flipped.vertices == tuple(reversed(face.vertices))
        assert flipped.plane.normal.z == pytest.approx(-1.0)
        assert flipped.color == (1.0, 0.0, 0.0)

    def test_face_serialization(self, square: list[Vector3D]) -> None:
        """Test face serialization keeps vertices, plane and colour."""
        face = Face.from_vertices(square, color=(0.5, 0.25, 0.0))
        restored = Face.from_dict(face.to_dict())
        assert restored == face

    def test_face_from_dict_without_plane(self, square: list[Vector3D]) -> None:
        """Test plane is recomputed when the dictionary has none."""
        data = {"vertices": [v.to_tuple() for v in square], "color": None}
        face = Face.from_dict(data)
        assert face.plane.normal.z == pytest.approx(1.0)
        assert face.color is None


class TestGearSpec:
    """Tests for GearSpec class."""

    @pytest.fixture
    def spec(self) -> GearSpec:
        """The decorative gear of the default tag."""
        return GearSpec(num_teeth=10, circular_pitch=10.0, thickness=2.0)

    def test_derived_radii(self, spec: GearSpec) -> None:
        """Test the radii follow the standard formulas."""
        assert spec.addendum == pytest.approx(10.0 / math.pi)
        assert spec.dedendum == pytest.approx(spec.addendum)
        assert spec.pitch_radius == pytest.approx(100.0 / (2 * math.pi))
        assert spec.base_radius == pytest.approx(spec.pitch_radius * math.cos(math.radians(20)))
        assert spec.outer_radius == pytest.approx(spec.pitch_radius + spec.addendum)
        assert spec.root_radius == pytest.approx(spec.pitch_radius - spec.dedendum)

    @pytest.mark.parametrize("num_teeth", range(3, 51))
    def test_radius_ordering(self, num_teeth: int) -> None:
        """Test every accepted gear has root < base <= pitch < outer."""
        if num_teeth >= 34:
            # 20 degree flanks start below the root circle from 34 teeth on
            with pytest.raises(InvalidGearSpecError, match="base circle"):
                GearSpec(num_teeth=num_teeth, circular_pitch=10.0)
            return
        spec = GearSpec(num_teeth=num_teeth, circular_pitch=10.0)
        assert spec.root_radius < spec.base_radius <= spec.pitch_radius < spec.outer_radius

    def test_smaller_pressure_angle_allows_more_teeth(self) -> None:
        """Test a shallower pressure angle keeps the base circle above the root."""
        spec = GearSpec(num_teeth=40, circular_pitch=10.0, pressure_angle=14.5)
        assert spec.root_radius < spec.base_radius

    def test_clearance_deepens_root(self) -> None:
        """Test clearance lowers the root circle only."""
        plain = GearSpec(num_teeth=12, circular_pitch=5.0)
        deep = GearSpec(num_teeth=12, circular_pitch=5.0, clearance=0.5)
        assert deep.root_radius == pytest.approx(plain.root_radius - 0.5)
        assert deep.outer_radius == plain.outer_radius

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"num_teeth": 2},
            {"circular_pitch": 0.0},
            {"circular_pitch": -3.0},
            {"pressure_angle": 0.0},
            {"pressure_angle": 90.0},
            {"clearance": -0.1},
            {"thickness": 0.0},
            {"center_hole_radius": -1.0},
        ],
    )
    def test_invalid_parameters(self, kwargs: dict) -> None:
        """Test out-of-range parameters are rejected."""
        with pytest.raises(InvalidGearSpecError):
            GearSpec(**kwargs)

    def test_non_positive_root_radius(self) -> None:
        """Test clearance deeper than the pitch radius is rejected."""
        with pytest.raises(InvalidGearSpecError, match="root radius"):
            GearSpec(num_teeth=10, circular_pitch=10.0, clearance=20.0)

    def test_pointed_teeth(self) -> None:
        """Test flanks that cross before the outer circle are rejected."""
        with pytest.raises(InvalidGearSpecError, match="cross"):
            GearSpec(num_teeth=3, circular_pitch=10.0, pressure_angle=30.0)

    def test_error_carries_reason(self) -> None:
        """Test the error exposes a reason attribute."""
        with pytest.raises(InvalidGearSpecError) as exc_info:
            GearSpec(num_teeth=2)
        assert "3 teeth" in exc_info.value.reason

    def test_serialization(self, spec: GearSpec) -> None:
        """Test spec serialization and deserialization."""
        assert GearSpec.from_dict(spec.to_dict()) == spec


class TestColoredSolid:
    """Tests for ColoredSolid class."""

    def test_tagged_colours_every_face(self) -> None:
        """Test tagged geometry carries the region colour."""
        region = ColoredSolid(cuboid((1.0, 1.0, 1.0)), (0.89, 1.0, 0.0))
        tagged = region.tagged()
        assert len(tagged.faces) == 6
        assert all(face.color == (0.89, 1.0, 0.0) for face in tagged.faces)
