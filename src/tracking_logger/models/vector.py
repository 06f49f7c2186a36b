import math
from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class Vector3:
    """An immutable 3-component float vector for positions and rotations."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __mul__(self, factor: float) -> "Vector3":
        return Vector3(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @classmethod
    def from_iterable(cls, values) -> "Vector3":
        x, y, z = values
        return cls(float(x), float(y), float(z))


def forward_from_euler(euler_deg: Vector3) -> Vector3:
    """
    Unit forward vector for Euler angles given in degrees.

    Uses the host engine convention (Y up, left-handed): yaw about Y, pitch
    about X, roll about Z. Roll does not change the forward direction and
    (0, 0, 0) faces +Z.
    """
    pitch = math.radians(euler_deg.x)
    yaw = math.radians(euler_deg.y)
    cos_pitch = math.cos(pitch)
    return Vector3(
        cos_pitch * math.sin(yaw),
        -math.sin(pitch),
        cos_pitch * math.cos(yaw),
    )
