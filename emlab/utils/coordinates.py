"""
3-D vectors and coordinate-system conversions.

Conventions:
  - spherical (r, θ, φ): θ polar angle from +z in [0, π], φ azimuth in (−π, π]
  - cylindrical (ρ, φ, z): φ azimuth in (−π, π]
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..errors import InvalidInputError, clamp_unit


@dataclass(frozen=True)
class Vector3:
    """Cartesian 3-vector."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, k: float) -> "Vector3":
        return Vector3(self.x * k, self.y * k, self.z * k)

    __rmul__ = __mul__

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def dot(self, other: "Vector3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3") -> "Vector3":
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    @property
    def magnitude(self) -> float:
        return math.sqrt(self.dot(self))

    def normalized(self) -> "Vector3":
        mag = self.magnitude
        if mag == 0:
            raise InvalidInputError("vector", self, "zero vector has no direction")
        return self * (1.0 / mag)

    def angle_to(self, other: "Vector3") -> float:
        """Angle between two vectors [rad]; 0 if either is the zero vector."""
        denom = self.magnitude * other.magnitude
        if denom == 0:
            return 0.0
        return math.acos(clamp_unit(self.dot(other) / denom))

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @classmethod
    def of(cls, value) -> "Vector3":
        """Coerce a Vector3 or an (x, y, z) sequence."""
        if isinstance(value, Vector3):
            return value
        if len(value) != 3:
            raise InvalidInputError("vector", value, "expected three components")
        return cls(float(value[0]), float(value[1]), float(value[2]))


# ─── Point conversions ──────────────────────────────────────────────────────

def cartesian_to_spherical(x: float, y: float, z: float) -> tuple[float, float, float]:
    """(x, y, z) → (r, θ, φ). The origin maps to (0, 0, 0)."""
    r = math.sqrt(x * x + y * y + z * z)
    if r == 0:
        return (0.0, 0.0, 0.0)
    theta = math.acos(clamp_unit(z / r))
    phi = math.atan2(y, x)
    return (r, theta, phi)


def spherical_to_cartesian(r: float, theta: float, phi: float) -> tuple[float, float, float]:
    """(r, θ, φ) → (x, y, z)."""
    if r < 0:
        raise InvalidInputError("r", r, "radius must be >= 0")
    st = math.sin(theta)
    return (r * st * math.cos(phi), r * st * math.sin(phi), r * math.cos(theta))


def cartesian_to_cylindrical(x: float, y: float, z: float) -> tuple[float, float, float]:
    """(x, y, z) → (ρ, φ, z)."""
    return (math.hypot(x, y), math.atan2(y, x), z)


def cylindrical_to_cartesian(rho: float, phi: float, z: float) -> tuple[float, float, float]:
    """(ρ, φ, z) → (x, y, z)."""
    if rho < 0:
        raise InvalidInputError("rho", rho, "radius must be >= 0")
    return (rho * math.cos(phi), rho * math.sin(phi), z)


def spherical_to_cylindrical(r: float, theta: float, phi: float) -> tuple[float, float, float]:
    """(r, θ, φ) → (ρ, φ, z)."""
    return cartesian_to_cylindrical(*spherical_to_cartesian(r, theta, phi))


def cylindrical_to_spherical(rho: float, phi: float, z: float) -> tuple[float, float, float]:
    """(ρ, φ, z) → (r, θ, φ)."""
    return cartesian_to_spherical(*cylindrical_to_cartesian(rho, phi, z))
