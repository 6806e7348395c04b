"""
Magnetic forces and charged-particle motion.

Provides:
  - Force between parallel current-carrying wires
  - Force on a straight wire and torque on a loop in a uniform field
  - Lorentz force, cyclotron radius and frequency
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from ..errors import require_non_negative, require_positive
from ..utils.constants import ELECTRON_MASS, ELEMENTARY_CHARGE, MU_0
from ..utils.coordinates import Vector3


# ─── Wires ──────────────────────────────────────────────────────────────────

@dataclass
class ParallelWiresResult:
    current1: float
    current2: float
    separation: float
    length: float
    force_per_length: float
    total_force: float
    attractive: bool


def parallel_wires(current1: float = 10.0, current2: float = 10.0, separation: float = 0.1,
                   length: float = 1.0) -> ParallelWiresResult:
    """F/ℓ = μ₀I₁I₂/(2πd); like-directed currents attract."""
    require_positive("separation", separation)
    require_non_negative("length", length)
    fpl = MU_0 * abs(current1 * current2) / (2.0 * math.pi * separation)
    return ParallelWiresResult(
        current1=current1,
        current2=current2,
        separation=separation,
        length=length,
        force_per_length=fpl,
        total_force=fpl * length,
        attractive=current1 * current2 > 0,
    )


def force_on_wire(current: float, length_vector: Vector3, b_field: Vector3) -> Vector3:
    """F = I L × B."""
    return length_vector.cross(b_field) * current


@dataclass
class LoopTorqueResult:
    moment: Vector3
    torque: Vector3
    torque_magnitude: float
    potential_energy: float


def torque_on_loop(current: float = 1.0, area: float = 0.01, normal=(0.0, 0.0, 1.0),
                   b_field=(0.1, 0.0, 0.0), turns: int = 1) -> LoopTorqueResult:
    """τ = m × B with m = NIA n̂; U = −m·B."""
    require_positive("area", area)
    normal, b_field = Vector3.of(normal), Vector3.of(b_field)
    m = normal.normalized() * (turns * current * area)
    tau = m.cross(b_field)
    return LoopTorqueResult(moment=m, torque=tau, torque_magnitude=tau.magnitude,
                            potential_energy=-m.dot(b_field))


# ─── Charged particles ──────────────────────────────────────────────────────

def lorentz_force(charge: float, velocity: Vector3, e_field: Vector3, b_field: Vector3) -> Vector3:
    """F = q(E + v × B)."""
    return (e_field + velocity.cross(b_field)) * charge


@dataclass
class ParticleResult:
    charge: float
    mass: float
    force: Vector3
    force_magnitude: float
    speed: float
    cyclotron_radius: Optional[float]      # None when B = 0 or the particle is neutral
    cyclotron_frequency: Optional[float]
    cyclotron_period: Optional[float]


def charged_particle(charge: float = -ELEMENTARY_CHARGE, mass: float = ELECTRON_MASS,
                     velocity=(1e6, 0.0, 0.0), e_field=(0.0, 0.0, 0.0),
                     b_field=(0.0, 0.0, 1e-3)) -> ParticleResult:
    """Lorentz force plus gyration radius m·v⊥/(|q|B) and frequency |q|B/(2πm)."""
    require_positive("mass", mass)
    velocity, e_field, b_field = Vector3.of(velocity), Vector3.of(e_field), Vector3.of(b_field)
    force = lorentz_force(charge, velocity, e_field, b_field)
    b_mag = b_field.magnitude

    radius = freq = period = None
    if b_mag > 0 and charge != 0:
        v_par = velocity.dot(b_field) / b_mag
        v_perp = math.sqrt(max(velocity.magnitude**2 - v_par**2, 0.0))
        radius = mass * v_perp / (abs(charge) * b_mag)
        freq = abs(charge) * b_mag / (2.0 * math.pi * mass)
        period = 1.0 / freq

    return ParticleResult(
        charge=charge,
        mass=mass,
        force=force,
        force_magnitude=force.magnitude,
        speed=velocity.magnitude,
        cyclotron_radius=radius,
        cyclotron_frequency=freq,
        cyclotron_period=period,
    )
