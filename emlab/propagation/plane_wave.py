"""
Uniform plane-wave kinematics and sinusoidal waveform helpers.

E(z, t) = E₀e^{∓αz}cos(ωt ∓ βz + φ), with the medium supplying α, β, η.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

import numpy as np

from ..config import EngineConfig
from ..errors import require_non_negative, require_positive
from ..results import Curve
from ..utils.sampling import linspace
from ..utils.units import normalize_angle
from .medium import analyze_medium


@dataclass
class PlaneWaveResult:
    frequency: float
    omega: float
    period: float
    wavenumber: float        # β [rad/m]
    alpha: float             # [Np/m]
    wavelength: float
    phase_velocity: float
    eta: complex
    poynting_average: float  # W/m² at z = 0
    snapshot: Curve


def analyze_plane_wave(freq_hz: float, e0: float = 1.0, er: float = 1.0, mur: float = 1.0,
                       sigma: float = 0.0, t: float = 0.0, phase: float = 0.0, forward: bool = True,
                       n_wavelengths: float = 2.0, samples: int = 200,
                       config: EngineConfig | None = None) -> PlaneWaveResult:
    """Kinematic quantities and a snapshot E(z) at time ``t``."""
    require_non_negative("e0", e0)
    med = analyze_medium(freq_hz, er, mur, sigma, config)
    omega = 2.0 * math.pi * freq_hz
    z = linspace(0.0, n_wavelengths * med.wavelength, samples)
    sign = 1.0 if forward else -1.0
    e = e0 * np.exp(-sign * med.alpha * z) * np.cos(omega * t - sign * med.beta * z + phase)
    eta = med.eta
    return PlaneWaveResult(
        frequency=freq_hz,
        omega=omega,
        period=1.0 / freq_hz,
        wavenumber=med.beta,
        alpha=med.alpha,
        wavelength=med.wavelength,
        phase_velocity=med.phase_velocity,
        eta=eta,
        poynting_average=e0**2 * eta.real / (2.0 * abs(eta) ** 2),
        snapshot=Curve("z_m", z, {"e": e}),
    )


# ─── Sinusoids ──────────────────────────────────────────────────────────────

class PhaseRelation(str, Enum):
    IN_PHASE = "in phase"
    ANTI_PHASE = "anti-phase"
    LEADING = "leading"
    LAGGING = "lagging"


@dataclass
class PhaseComparison:
    phase_difference: float     # radians in (−π, π], wave 1 relative to wave 2
    relation: PhaseRelation
    time_delay: float


def compare_phase(freq_hz: float, phase1: float, phase2: float) -> PhaseComparison:
    """Relative phase of two equal-frequency sinusoids."""
    require_positive("frequency", freq_hz)
    diff = normalize_angle(phase1 - phase2)
    if abs(diff) < 1e-12:
        relation = PhaseRelation.IN_PHASE
    elif abs(abs(diff) - math.pi) < 1e-12:
        relation = PhaseRelation.ANTI_PHASE
    elif diff > 0:
        relation = PhaseRelation.LEADING
    else:
        relation = PhaseRelation.LAGGING
    return PhaseComparison(diff, relation, diff / (2.0 * math.pi * freq_hz))


def superpose(waves: list[tuple[float, float, float]], t_end: float, samples: int = 200) -> Curve:
    """Sum of A·cos(2πft + φ) over (A, f, φ) triples, sampled on [0, t_end]."""
    require_positive("t_end", t_end)
    t = linspace(0.0, t_end, samples)
    series = {}
    total = np.zeros_like(t)
    for i, (amp, freq, phi) in enumerate(waves):
        y = amp * np.cos(2.0 * math.pi * freq * t + phi)
        series[f"wave_{i + 1}"] = y
        total = total + y
    series["sum"] = total
    return Curve("t", t, series)
