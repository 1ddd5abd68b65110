"""Vector types for planar and spatial geometry.

This module defines the two value types every other geometry module builds on:
- Vector2D: A point or direction in the plane
- Vector3D: A point or direction in space

Both are immutable; every operation returns a new vector.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Vector2D:
    """A 2D point or direction.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    @classmethod
    def from_angle(cls, radians: float) -> "Vector2D":
        """Create the unit vector pointing at the given angle.

        Args:
            radians: Angle measured counter-clockwise from the +X axis

        Returns:
            Unit vector (cos, sin)
        """
        return cls(math.cos(radians), math.sin(radians))

    def normal(self) -> "Vector2D":
        """Return the vector rotated by -90 degrees.

        Returns:
            Vector (y, -x), same length as this vector
        """
        return Vector2D(self.y, -self.x)

    def times(self, k: float) -> "Vector2D":
        """Scale by a scalar."""
        return Vector2D(self.x * k, self.y * k)

    def plus(self, other: "Vector2D") -> "Vector2D":
        """Component-wise sum."""
        return Vector2D(self.x + other.x, self.y + other.y)

    def minus(self, other: "Vector2D") -> "Vector2D":
        """Component-wise difference."""
        return Vector2D(self.x - other.x, self.y - other.y)

    def negated(self) -> "Vector2D":
        return Vector2D(-self.x, -self.y)

    def rotated(self, radians: float) -> "Vector2D":
        """Rotate counter-clockwise about the origin."""
        c = math.cos(radians)
        s = math.sin(radians)
        return Vector2D(self.x * c - self.y * s, self.x * s + self.y * c)

    def dot(self, other: "Vector2D") -> float:
        return self.x * other.x + self.y * other.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)


@dataclass(frozen=True, slots=True)
class Vector3D:
    """A 3D point or direction.

    Attributes:
        x: X coordinate
        y: Y coordinate
        z: Z coordinate (extrusion axis)
    """

    x: float
    y: float
    z: float

    def plus(self, other: "Vector3D") -> "Vector3D":
        return Vector3D(self.x + other.x, self.y + other.y, self.z + other.z)

    def minus(self, other: "Vector3D") -> "Vector3D":
        return Vector3D(self.x - other.x, self.y - other.y, self.z - other.z)

    def times(self, k: float) -> "Vector3D":
        return Vector3D(self.x * k, self.y * k, self.z * k)

    def negated(self) -> "Vector3D":
        return Vector3D(-self.x, -self.y, -self.z)

    def dot(self, other: "Vector3D") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3D") -> "Vector3D":
        return Vector3D(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def unit(self) -> "Vector3D":
        """Return the vector scaled to length 1.

        Raises:
            ZeroDivisionError: If the vector has zero length
        """
        return self.times(1.0 / self.length())

    def lerp(self, other: "Vector3D", t: float) -> "Vector3D":
        """Linear interpolation: t=0 gives self, t=1 gives other."""
        return Vector3D(
            self.x + (other.x - self.x) * t,
            self.y + (other.y - self.y) * t,
            self.z + (other.z - self.z) * t,
        )

    def to_tuple(self) -> tuple[float, float, float]:
        """Convert to simple (x, y, z) tuple."""
        return (self.x, self.y, self.z)
