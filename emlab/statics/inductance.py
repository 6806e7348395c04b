"""
Closed-form self and mutual inductances.

All inductances in henries, lengths in metres.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from ..errors import InvalidInputError, require_non_negative, require_ordered, require_positive
from ..utils.constants import MU_0


def solenoid(turns: int, radius: float, length: float, mu_r: float = 1.0) -> float:
    """L = μ₀μᵣN²πr²/ℓ."""
    require_positive("radius", radius)
    require_positive("length", length)
    return MU_0 * mu_r * turns**2 * math.pi * radius**2 / length


def toroid(turns: int, inner_radius: float, outer_radius: float, height: float, mu_r: float = 1.0) -> float:
    """Rectangular cross-section: L = μ₀μᵣN²h·ln(b/a)/2π."""
    require_positive("inner_radius", inner_radius)
    require_ordered("inner_radius", inner_radius, "outer_radius", outer_radius)
    require_positive("height", height)
    return MU_0 * mu_r * turns**2 * height * math.log(outer_radius / inner_radius) / (2.0 * math.pi)


def coaxial(inner_radius: float, outer_radius: float, length: float = 1.0, mu_r: float = 1.0) -> float:
    """External inductance of a coax: μ₀μᵣ·ln(b/a)/2π per metre."""
    require_positive("inner_radius", inner_radius)
    require_ordered("inner_radius", inner_radius, "outer_radius", outer_radius)
    require_positive("length", length)
    return MU_0 * mu_r * math.log(outer_radius / inner_radius) / (2.0 * math.pi) * length


def parallel_wires(wire_radius: float, separation: float, length: float = 1.0, mu_r: float = 1.0) -> float:
    """Two-wire line: (μ₀μᵣ/π)·ln(D/a) per metre."""
    require_positive("wire_radius", wire_radius)
    require_ordered("wire_radius", wire_radius, "separation", separation)
    require_positive("length", length)
    return MU_0 * mu_r / math.pi * math.log(separation / wire_radius) * length


def mutual_coaxial_loops(radius1: float, radius2: float, distance: float) -> float:
    """
    Mutual inductance of two coaxial loops, one small against the other.

    M ≈ μ₀πa²b²/(2(a² + d²)^{3/2}) with a the larger radius.
    """
    require_positive("radius1", radius1)
    require_positive("radius2", radius2)
    require_non_negative("distance", distance)
    a, b = max(radius1, radius2), min(radius1, radius2)
    return MU_0 * math.pi * a**2 * b**2 / (2.0 * (a**2 + distance**2) ** 1.5)


def coupling_coefficient(mutual: float, l1: float, l2: float) -> float:
    """k = M/√(L₁L₂)."""
    require_positive("l1", l1)
    require_positive("l2", l2)
    return mutual / math.sqrt(l1 * l2)


def series(inductances: Sequence[float]) -> float:
    if not inductances:
        raise InvalidInputError("inductances", inductances, "need at least one value")
    return sum(inductances)


def parallel(inductances: Sequence[float]) -> float:
    if not inductances:
        raise InvalidInputError("inductances", inductances, "need at least one value")
    for val in inductances:
        require_positive("inductance", val)
    return 1.0 / sum(1.0 / val for val in inductances)


def energy(inductance: float, current: float) -> float:
    """W = ½LI²."""
    return 0.5 * inductance * current**2


@dataclass
class InductorResult:
    geometry: str
    inductance: float
    current: float
    energy: float
    flux_linkage: float


def inductor(geometry: str = "solenoid", current: float = 1.0, turns: int = 100, mu_r: float = 1.0,
             radius: float = 0.01, length: float = 0.1, inner_radius: float = 0.01,
             outer_radius: float = 0.02, height: float = 0.01, wire_radius: float = 1e-3,
             separation: float = 0.01) -> InductorResult:
    """Inductance, energy and flux linkage for one named geometry."""
    if geometry == "solenoid":
        val = solenoid(turns, radius, length, mu_r)
    elif geometry == "toroid":
        val = toroid(turns, inner_radius, outer_radius, height, mu_r)
    elif geometry == "coaxial":
        val = coaxial(inner_radius, outer_radius, length, mu_r)
    elif geometry == "parallel_wires":
        val = parallel_wires(wire_radius, separation, length, mu_r)
    else:
        raise InvalidInputError("geometry", geometry,
                                "expected 'solenoid', 'toroid', 'coaxial' or 'parallel_wires'")
    return InductorResult(
        geometry=geometry,
        inductance=val,
        current=current,
        energy=energy(val, current),
        flux_linkage=val * current,
    )
