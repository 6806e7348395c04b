"""
Capacitance of canonical conductor geometries and stored energy.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from ..errors import InvalidInputError, require_ordered, require_positive
from ..utils.constants import EPS_0


def parallel_plate(area: float, separation: float, er: float = 1.0) -> float:
    """C = εA/d."""
    require_positive("area", area)
    require_positive("separation", separation)
    return EPS_0 * er * area / separation


def coaxial(inner_radius: float, outer_radius: float, er: float = 1.0, length: float = 1.0) -> float:
    """C = 2πεℓ/ln(b/a)."""
    require_positive("inner_radius", inner_radius)
    require_ordered("inner_radius", inner_radius, "outer_radius", outer_radius)
    require_positive("length", length)
    return 2.0 * math.pi * EPS_0 * er * length / math.log(outer_radius / inner_radius)


def spherical(inner_radius: float, outer_radius: float, er: float = 1.0) -> float:
    """Concentric spheres: C = 4πε·ab/(b − a)."""
    require_positive("inner_radius", inner_radius)
    require_ordered("inner_radius", inner_radius, "outer_radius", outer_radius)
    return 4.0 * math.pi * EPS_0 * er * inner_radius * outer_radius / (outer_radius - inner_radius)


def isolated_sphere(radius: float, er: float = 1.0) -> float:
    """C = 4πεa."""
    require_positive("radius", radius)
    return 4.0 * math.pi * EPS_0 * er * radius


def series(capacitances: Sequence[float]) -> float:
    if not capacitances:
        raise InvalidInputError("capacitances", capacitances, "need at least one capacitor")
    for c in capacitances:
        require_positive("capacitance", c)
    return 1.0 / sum(1.0 / c for c in capacitances)


def parallel(capacitances: Sequence[float]) -> float:
    for c in capacitances:
        require_positive("capacitance", c)
    return float(sum(capacitances))


def energy(capacitance: float, voltage: float) -> float:
    """W = ½CV²."""
    return 0.5 * capacitance * voltage * voltage


def energy_density(e_field: float, er: float = 1.0) -> float:
    """w = ½εE² [J/m³]."""
    return 0.5 * EPS_0 * er * e_field * e_field


@dataclass
class CapacitorResult:
    geometry: str
    capacitance: float
    voltage: float
    charge: float
    energy: float
    field: float | None           # uniform field, parallel plate only
    energy_density: float | None


def capacitor(geometry: str = "parallel_plate", voltage: float = 1.0, er: float = 1.0,
              area: float = 1e-2, separation: float = 1e-3, inner_radius: float = 1e-3,
              outer_radius: float = 3.5e-3, length: float = 1.0, radius: float = 0.1) -> CapacitorResult:
    """Capacitance, charge and stored energy for one geometry."""
    if geometry == "parallel_plate":
        c = parallel_plate(area, separation, er)
        e = voltage / separation
        return CapacitorResult(geometry, c, voltage, c * voltage, energy(c, voltage), e, energy_density(e, er))
    if geometry == "coaxial":
        c = coaxial(inner_radius, outer_radius, er, length)
    elif geometry == "spherical":
        c = spherical(inner_radius, outer_radius, er)
    elif geometry == "isolated_sphere":
        c = isolated_sphere(radius, er)
    else:
        raise InvalidInputError("geometry", geometry,
                                "expected parallel_plate, coaxial, spherical or isolated_sphere")
    return CapacitorResult(geometry, c, voltage, c * voltage, energy(c, voltage), None, None)
