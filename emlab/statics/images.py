"""
Method of images for a point charge near grounded conductors.

  - Infinite grounded plane z = 0, charge Q at height d: image −Q at −d.
  - Grounded sphere of radius a, charge Q at distance d > a from the
    centre: image Q' = −Qa/d at a²/d.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from ..errors import require_ordered, require_positive
from ..results import Curve, FieldGrid
from ..utils.constants import EPS_0
from ..utils.coordinates import Vector3
from ..utils.sampling import grid, linspace
from .point_charges import PointCharge, electric_field, electric_potential


@dataclass
class PlaneImageResult:
    charge: float
    height: float
    image_charge: float
    image_height: float
    force: float                  # z-component [N]; negative = toward the plane
    total_induced_charge: float
    peak_surface_density: float   # σ directly below the charge [C/m²]
    surface_density: Curve        # σ(ρ) along the plane
    potential: FieldGrid | None = None


def charge_above_plane(q: float, height: float, er: float = 1.0, rho_max: float | None = None,
                       samples: int = 200, grid_samples: int = 0) -> PlaneImageResult:
    """
    Image solution above a grounded plane.

    σ(ρ) = −Qd/(2π(ρ² + d²)^{3/2}); the force Q²/(4πε(2d)²) always pulls
    the charge toward the plane. ``grid_samples`` > 0 adds the potential in
    the xz half-plane (zero below the conductor).
    """
    require_positive("height", height)
    require_positive("epsilon_r", er)
    eps = EPS_0 * er
    if rho_max is None:
        rho_max = 5.0 * height
    rho = linspace(0.0, rho_max, samples)
    sigma = -q * height / (2.0 * math.pi * (rho**2 + height**2) ** 1.5)

    potential = None
    if grid_samples:
        system = [PointCharge(0.0, 0.0, height, q), PointCharge(0.0, 0.0, -height, -q)]
        x, z, X, Z = grid((-2.0 * height, 2.0 * height), (0.0, 2.0 * height), grid_samples)
        v = np.empty(X.shape)
        for idx in np.ndindex(X.shape):
            v[idx] = electric_potential(system, Vector3(float(X[idx]), 0.0, float(Z[idx])), er)
        potential = FieldGrid(x, z, {"potential": v})

    return PlaneImageResult(
        charge=q,
        height=height,
        image_charge=-q,
        image_height=-height,
        force=-q * q / (4.0 * math.pi * eps * (2.0 * height) ** 2),
        total_induced_charge=-q,
        peak_surface_density=-q / (2.0 * math.pi * height**2),
        surface_density=Curve("rho_m", rho, {"sigma": sigma}),
        potential=potential,
    )


def plane_image_field(q: float, height: float, point: Vector3, er: float = 1.0) -> Vector3:
    """E above the plane (z ≥ 0) from the charge and its image; zero inside the conductor."""
    if point.z < 0:
        return Vector3()
    return electric_field([PointCharge(0.0, 0.0, height, q), PointCharge(0.0, 0.0, -height, -q)], point, er)


@dataclass
class SphereImageResult:
    charge: float
    radius: float
    distance: float
    image_charge: float
    image_distance: float
    force: float           # along the line of centres; negative = toward the sphere


def charge_near_sphere(q: float, radius: float, distance: float, er: float = 1.0) -> SphereImageResult:
    """Image of Q outside a grounded sphere; rejects d ≤ a."""
    require_positive("radius", radius)
    require_ordered("radius", radius, "distance", distance)
    require_positive("epsilon_r", er)
    q_img = -q * radius / distance
    d_img = radius * radius / distance
    sep = distance - d_img
    return SphereImageResult(
        charge=q,
        radius=radius,
        distance=distance,
        image_charge=q_img,
        image_distance=d_img,
        force=q * q_img / (4.0 * math.pi * EPS_0 * er * sep * sep),
    )
