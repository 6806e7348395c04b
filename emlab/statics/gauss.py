"""
Fields of symmetric charge distributions from Gauss's law.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from ..errors import require_non_negative, require_ordered, require_positive
from ..results import Curve
from ..utils.constants import EPS_0
from ..utils.sampling import linspace


def line_charge_field(rho_l: float, r: float, er: float = 1.0) -> float:
    """E = ρ_l/(2πεr) [V/m]."""
    require_positive("r", r)
    return rho_l / (2.0 * math.pi * EPS_0 * er * r)


def sheet_charge_field(rho_s: float, er: float = 1.0) -> float:
    """E = ρ_s/2ε, independent of distance."""
    return rho_s / (2.0 * EPS_0 * er)


def sphere_field(q: float, radius: float, r: float, er: float = 1.0) -> float:
    """Uniformly charged solid sphere: Qr/(4πεa³) inside, Q/(4πεr²) outside."""
    require_positive("radius", radius)
    require_non_negative("r", r)
    eps = EPS_0 * er
    if r < radius:
        return q * r / (4.0 * math.pi * eps * radius**3)
    return q / (4.0 * math.pi * eps * r * r)


def sphere_potential(q: float, radius: float, r: float, er: float = 1.0) -> float:
    """V = Q(3a² − r²)/(8πεa³) inside, Q/(4πεr) outside."""
    require_positive("radius", radius)
    require_non_negative("r", r)
    eps = EPS_0 * er
    if r < radius:
        return q * (3.0 * radius**2 - r * r) / (8.0 * math.pi * eps * radius**3)
    return q / (4.0 * math.pi * eps * r)


def coaxial_field(rho_l: float, inner_radius: float, outer_radius: float, r: float, er: float = 1.0) -> float:
    """Field between coaxial conductors; zero outside a ≤ r ≤ b."""
    require_positive("inner_radius", inner_radius)
    require_ordered("inner_radius", inner_radius, "outer_radius", outer_radius)
    if r < inner_radius or r > outer_radius:
        return 0.0
    return rho_l / (2.0 * math.pi * EPS_0 * er * r)


@dataclass
class SphereProfile:
    charge: float
    radius: float
    surface_field: float
    surface_potential: float
    profile: Curve


def sphere_profile(q: float, radius: float, r_max: float | None = None, er: float = 1.0,
                   samples: int = 200) -> SphereProfile:
    """E(r) and V(r) of a charged sphere from the centre to ``r_max`` (default 3a)."""
    require_positive("radius", radius)
    if r_max is None:
        r_max = 3.0 * radius
    require_positive("r_max", r_max)
    r = linspace(0.0, r_max, samples)
    e = np.array([sphere_field(q, radius, float(ri), er) for ri in r])
    v = np.array([sphere_potential(q, radius, float(ri), er) for ri in r])
    return SphereProfile(
        charge=q,
        radius=radius,
        surface_field=sphere_field(q, radius, radius, er),
        surface_potential=sphere_potential(q, radius, radius, er),
        profile=Curve("r_m", r, {"e": e, "v": v}),
    )
