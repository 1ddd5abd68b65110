"""Involute spur gear parameters.

For gear terminology see:
    http://www.astronomiainumbria.org/advanced_internet_files/meccanica/easyweb.easynet.co.uk/_chrish/geardata.htm

Key radii, from the inside out:
- root circle: bottom of the tooth gaps
- base circle: where the involute flank starts
- pitch circle: where meshing gears roll on each other
- outer circle: tooth tips
"""

import math
from dataclasses import dataclass
from typing import Any

from nametag.exceptions import InvalidGearSpecError


@dataclass(frozen=True)
class GearSpec:
    """Validated parameters of an involute spur gear.

    Derived radii are read-only properties of the validated fields.

    Attributes:
        num_teeth: Number of teeth (at least 3)
        circular_pitch: Distance between adjacent teeth on the pitch circle
        pressure_angle: Pressure angle in degrees, strictly between 0 and 90
        clearance: Extra depth of the tooth gaps below the dedendum
        thickness: Extrusion height of the gear
        center_hole_radius: Radius of the centre bore, 0 for none
    """

    num_teeth: int = 10
    circular_pitch: float = 5.0
    pressure_angle: float = 20.0
    clearance: float = 0.0
    thickness: float = 5.0
    center_hole_radius: float = 0.0

    def __post_init__(self) -> None:
        if self.num_teeth < 3:
            raise InvalidGearSpecError(f"need at least 3 teeth, got {self.num_teeth}")
        if not self.circular_pitch > 0:
            raise InvalidGearSpecError(
                f"circular pitch must be positive, got {self.circular_pitch}"
            )
        if not 0 < self.pressure_angle < 90:
            raise InvalidGearSpecError(
                f"pressure angle must be in (0, 90) degrees, got {self.pressure_angle}"
            )
        if self.clearance < 0:
            raise InvalidGearSpecError(f"clearance must be >= 0, got {self.clearance}")
        if not self.thickness > 0:
            raise InvalidGearSpecError(f"thickness must be positive, got {self.thickness}")
        if self.center_hole_radius < 0:
            raise InvalidGearSpecError(
                f"center hole radius must be >= 0, got {self.center_hole_radius}"
            )
        if self.root_radius <= 0:
            raise InvalidGearSpecError(
                f"root radius {self.root_radius:.4f} is not positive; "
                "use more teeth or less clearance"
            )
        if self.root_radius >= self.base_radius:
            raise InvalidGearSpecError(
                f"root radius {self.root_radius:.4f} reaches the base circle "
                f"{self.base_radius:.4f}; use fewer teeth or a smaller pressure angle"
            )
        if self.tip_half_angle >= self.tooth_width_at_base / 2:
            raise InvalidGearSpecError("tooth flanks cross before the outer circle")

    @property
    def addendum(self) -> float:
        return self.circular_pitch / math.pi

    @property
    def dedendum(self) -> float:
        return self.addendum + self.clearance

    @property
    def pitch_radius(self) -> float:
        return self.num_teeth * self.circular_pitch / (2 * math.pi)

    @property
    def base_radius(self) -> float:
        return self.pitch_radius * math.cos(math.radians(self.pressure_angle))

    @property
    def outer_radius(self) -> float:
        return self.pitch_radius + self.addendum

    @property
    def root_radius(self) -> float:
        return self.pitch_radius - self.dedendum

    @property
    def max_tan_length(self) -> float:
        """Unrolled tangent length where the involute reaches the outer circle."""
        return math.sqrt(self.outer_radius**2 - self.base_radius**2)

    @property
    def max_angle(self) -> float:
        """Unroll angle (radians) at the outer circle."""
        return self.max_tan_length / self.base_radius

    @property
    def tooth_width_at_base(self) -> float:
        """Angular width of one tooth measured on the base circle.

        Half a tooth pitch at the pitch circle, widened by the angular lag of
        the involute between base and pitch circle on both flanks.
        """
        tan_length_at_pitch = math.sqrt(self.pitch_radius**2 - self.base_radius**2)
        angle_at_pitch = tan_length_at_pitch / self.base_radius
        diff_angle = angle_at_pitch - math.atan(angle_at_pitch)
        return math.pi / self.num_teeth + 2 * diff_angle

    @property
    def tip_half_angle(self) -> float:
        """Polar angle of a flank's outermost point, measured from its start."""
        return self.max_angle - math.atan(self.max_angle)

    @property
    def tooth_angle(self) -> float:
        """Angular pitch between adjacent teeth (radians)."""
        return 2 * math.pi / self.num_teeth

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "num_teeth": self.num_teeth,
            "circular_pitch": self.circular_pitch,
            "pressure_angle": self.pressure_angle,
            "clearance": self.clearance,
            "thickness": self.thickness,
            "center_hole_radius": self.center_hole_radius,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GearSpec":
        """Deserialize from dictionary."""
        return cls(**data)
