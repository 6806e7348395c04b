"""
Electromagnetic induction.

Provides:
  - Magnetic flux through a tilted area
  - Sinusoidal flux / EMF waveforms (Faraday's law)
  - AC generator from turns, field, area and RPM
  - Ideal transformer voltage, current and impedance ratios
  - Motional EMF of a sliding bar
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..errors import require_count, require_non_negative, require_positive
from ..results import Curve
from ..utils.constants import angular_frequency
from ..utils.sampling import linspace
from ..utils.units import rpm_to_rad_per_s


def magnetic_flux(b: float, area: float, angle: float = 0.0) -> float:
    """Φ = BA·cos θ, θ between B and the surface normal [rad]."""
    require_non_negative("area", area)
    return b * area * math.cos(angle)


# ─── Sinusoidal flux ────────────────────────────────────────────────────────

@dataclass
class InductionResult:
    turns: int
    b_peak: float
    area: float
    frequency: float
    omega: float
    flux_peak: float
    emf_peak: float
    emf_rms: float
    waveform: Curve        # flux and emf over time


def sinusoidal_induction(turns: int = 100, b_peak: float = 0.1, area: float = 0.01, freq_hz: float = 60.0,
                         phase: float = 0.0, cycles: float = 2.0, samples: int = 200) -> InductionResult:
    """
    Coil of N turns in Φ(t) = B·A·cos(ωt + φ).

    EMF(t) = −N dΦ/dt = NBAω·sin(ωt + φ).
    """
    turns = require_count("turns", turns)
    require_positive("area", area)
    require_positive("frequency", freq_hz)
    require_positive("cycles", cycles)
    omega = angular_frequency(freq_hz)
    t = linspace(0.0, cycles / freq_hz, samples)
    flux = b_peak * area * np.cos(omega * t + phase)
    emf = turns * b_peak * area * omega * np.sin(omega * t + phase)
    peak = turns * abs(b_peak) * area * omega
    return InductionResult(
        turns=turns,
        b_peak=b_peak,
        area=area,
        frequency=freq_hz,
        omega=omega,
        flux_peak=abs(b_peak) * area,
        emf_peak=peak,
        emf_rms=peak / math.sqrt(2.0),
        waveform=Curve("t_s", t, {"flux": flux, "emf": emf}),
    )


# ─── AC generator ───────────────────────────────────────────────────────────

@dataclass
class GeneratorResult:
    turns: int
    b_field: float
    area: float
    rpm: float
    omega: float
    frequency: float
    period: float
    emf_peak: float
    emf_rms: float
    waveform: Curve


def ac_generator(turns: int = 100, b_field: float = 0.5, area: float = 0.01, rpm: float = 3600.0,
                 cycles: float = 2.0, samples: int = 200) -> GeneratorResult:
    """Rotating coil: peak NBAω, RMS peak/√2, f = ω/2π."""
    turns = require_count("turns", turns)
    require_positive("area", area)
    require_positive("rpm", rpm)
    omega = rpm_to_rad_per_s(rpm)
    freq = omega / (2.0 * math.pi)
    peak = turns * abs(b_field) * area * omega
    t = linspace(0.0, cycles / freq, samples)
    return GeneratorResult(
        turns=turns,
        b_field=b_field,
        area=area,
        rpm=rpm,
        omega=omega,
        frequency=freq,
        period=1.0 / freq,
        emf_peak=peak,
        emf_rms=peak / math.sqrt(2.0),
        waveform=Curve("t_s", t, {"emf": peak * np.sin(omega * t)}),
    )


# ─── Transformer ────────────────────────────────────────────────────────────

@dataclass
class TransformerResult:
    n_primary: int
    n_secondary: int
    turns_ratio: float          # N₂/N₁
    v_primary: float
    v_secondary: float
    i_primary: float
    i_secondary: float
    z_load: Optional[float]
    z_reflected: Optional[float]
    is_step_up: bool


def transformer(n_primary: int = 100, n_secondary: int = 500, v_primary: float = 120.0,
                i_primary: float = 1.0, z_load: float | None = None) -> TransformerResult:
    """Ideal transformer; the load impedance seen from the primary is Z_L/(N₂/N₁)²."""
    require_positive("n_primary", n_primary)
    require_positive("n_secondary", n_secondary)
    ratio = n_secondary / n_primary
    z_reflected = None
    if z_load is not None:
        require_non_negative("z_load", z_load)
        z_reflected = z_load / ratio**2
    return TransformerResult(
        n_primary=n_primary,
        n_secondary=n_secondary,
        turns_ratio=ratio,
        v_primary=v_primary,
        v_secondary=v_primary * ratio,
        i_primary=i_primary,
        i_secondary=i_primary / ratio,
        z_load=z_load,
        z_reflected=z_reflected,
        is_step_up=n_secondary > n_primary,
    )


# ─── Motional EMF ───────────────────────────────────────────────────────────

def motional_emf(velocity: float, b_field: float, length: float) -> float:
    """EMF = vBL for a bar moving perpendicular to B."""
    require_non_negative("length", length)
    return velocity * b_field * length


@dataclass
class SlidingBarResult:
    velocity: float
    b_field: float
    length: float
    emf: float
    current: Optional[float]         # None without a closing resistance
    retarding_force: Optional[float]
    power: Optional[float]


def sliding_bar(velocity: float = 5.0, b_field: float = 0.5, length: float = 0.2,
                resistance: float | None = 1.0) -> SlidingBarResult:
    """Bar on rails closed through ``resistance``; F = BIL opposes the motion."""
    emf = motional_emf(velocity, b_field, length)
    current = force = power = None
    if resistance is not None:
        require_positive("resistance", resistance)
        current = emf / resistance
        force = b_field * current * length
        power = emf * current
    return SlidingBarResult(
        velocity=velocity,
        b_field=b_field,
        length=length,
        emf=emf,
        current=current,
        retarding_force=force,
        power=power,
    )
