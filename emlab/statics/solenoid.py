"""
Solenoid and toroid fields.

Provides:
  - Ideal interior field B = μ₀μᵣnI, inductance and stored energy
  - Finite-length on-axis profile from the end-angle formula
  - Toroid field across the core and its inductance
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from ..errors import require_count, require_positive
from ..results import Curve
from ..utils.constants import MU_0
from ..utils.sampling import linspace
from . import inductance as _inductance


# ─── Solenoid ───────────────────────────────────────────────────────────────

def solenoid_field(turns: int, length: float, current: float, mu_r: float = 1.0) -> float:
    """Interior field of a long solenoid, B = μ₀μᵣ(N/ℓ)I."""
    require_positive("length", length)
    require_positive("mu_r", mu_r)
    return MU_0 * mu_r * turns / length * current


def solenoid_axis_field(turns: int, length: float, radius: float, current: float, z: float,
                        mu_r: float = 1.0) -> float:
    """
    On-axis field of a finite solenoid centred on z = 0.

    B = μ₀μᵣnI(cos α₁ − cos α₂)/2 with the angles subtended by the two ends.
    """
    require_positive("radius", radius)
    n = turns / length
    z1 = z + length / 2.0
    z2 = z - length / 2.0
    cos1 = z1 / math.hypot(z1, radius)
    cos2 = z2 / math.hypot(z2, radius)
    return MU_0 * mu_r * n * current * (cos1 - cos2) / 2.0


@dataclass
class SolenoidResult:
    turns: int
    length: float
    radius: float
    current: float
    mu_r: float
    turns_per_m: float
    b_interior: float
    h_interior: float
    flux: float
    inductance: float
    energy: float
    energy_density: float
    axis_profile: Curve


def analyze_solenoid(turns: int = 500, length: float = 0.2, radius: float = 0.02, current: float = 1.0,
                     mu_r: float = 1.0, z_max: float | None = None, samples: int = 200) -> SolenoidResult:
    """Long-solenoid quantities plus the finite-length on-axis profile."""
    turns = require_count("turns", turns)
    require_positive("length", length)
    require_positive("radius", radius)
    require_positive("mu_r", mu_r)
    if z_max is None:
        z_max = length
    b = solenoid_field(turns, length, current, mu_r)
    area = math.pi * radius**2
    inductance = MU_0 * mu_r * turns**2 * area / length

    z = linspace(-z_max, z_max, samples)
    n = turns / length
    z1, z2 = z + length / 2.0, z - length / 2.0
    profile = MU_0 * mu_r * n * current * (z1 / np.hypot(z1, radius) - z2 / np.hypot(z2, radius)) / 2.0

    return SolenoidResult(
        turns=turns,
        length=length,
        radius=radius,
        current=current,
        mu_r=mu_r,
        turns_per_m=n,
        b_interior=b,
        h_interior=n * current,
        flux=b * area,
        inductance=inductance,
        energy=0.5 * inductance * current**2,
        energy_density=b**2 / (2.0 * MU_0 * mu_r),
        axis_profile=Curve("z_m", z, {"bz": profile}),
    )


# ─── Toroid ─────────────────────────────────────────────────────────────────

def toroid_field(turns: int, current: float, r: float, inner_radius: float, outer_radius: float,
                 mu_r: float = 1.0) -> float:
    """B = μ₀μᵣNI/(2πr) inside the core, zero elsewhere."""
    if r < inner_radius or r > outer_radius or r <= 0:
        return 0.0
    return MU_0 * mu_r * turns * current / (2.0 * math.pi * r)


@dataclass
class ToroidResult:
    turns: int
    current: float
    inner_radius: float
    outer_radius: float
    height: float
    b_inner: float
    b_outer: float
    b_mean: float
    inductance: float
    energy: float
    profile: Curve


def toroid(turns: int = 200, current: float = 1.0, inner_radius: float = 0.04, outer_radius: float = 0.06,
           height: float = 0.01, mu_r: float = 1.0, samples: int = 200) -> ToroidResult:
    """Rectangular-section toroid; the profile runs from 0 to 1.5× the outer radius."""
    turns = require_count("turns", turns)
    require_positive("mu_r", mu_r)
    inductance = _inductance.toroid(turns, inner_radius, outer_radius, height, mu_r)

    r = linspace(0.0, 1.5 * outer_radius, samples)
    b = np.array([toroid_field(turns, current, float(ri), inner_radius, outer_radius, mu_r) for ri in r])

    return ToroidResult(
        turns=turns,
        current=current,
        inner_radius=inner_radius,
        outer_radius=outer_radius,
        height=height,
        b_inner=toroid_field(turns, current, inner_radius, inner_radius, outer_radius, mu_r),
        b_outer=toroid_field(turns, current, outer_radius, inner_radius, outer_radius, mu_r),
        b_mean=toroid_field(turns, current, (inner_radius + outer_radius) / 2.0, inner_radius, outer_radius, mu_r),
        inductance=inductance,
        energy=0.5 * inductance * current**2,
        profile=Curve("r_m", r, {"b": b}),
    )
