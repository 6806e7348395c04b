"""
Displacement current and charge relaxation.

Provides:
  - Parallel-plate capacitor under sinusoidal drive: I_d = ε A dV/dt / d,
    equal to the conduction current in the leads
  - Relaxation of a free charge distribution in a conductor, τ = ε/σ,
    with the continuity equation checked as current out = −dQ/dt
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..errors import InvalidInputError, require_non_negative, require_positive
from ..results import Curve
from ..utils.constants import EPS_0, angular_frequency
from ..utils.sampling import linspace


# ─── Displacement current ───────────────────────────────────────────────────

def displacement_current_ramp(area: float, separation: float, dv_dt: float, er: float = 1.0) -> float:
    """I_d = εA/d · dV/dt for a linearly ramped plate voltage."""
    require_positive("area", area)
    require_positive("separation", separation)
    return EPS_0 * er * area / separation * dv_dt


@dataclass
class DisplacementCurrentResult:
    area: float
    separation: float
    er: float
    frequency: float
    capacitance: float
    e_peak: float
    displacement_current_peak: float
    displacement_current_density_peak: float
    stored_energy_peak: float
    waveform: Curve       # t_s → voltage, displacement and conduction currents


def displacement_current(area: float = 0.01, separation: float = 1e-3, v_peak: float = 10.0,
                         freq_hz: float = 1e6, er: float = 1.0, cycles: float = 2.0,
                         samples: int = 200) -> DisplacementCurrentResult:
    """
    V(t) = V₀ sin ωt across the plates; peak I_d = ωεAV₀/d.

    The displacement current comes from ε ∂E/∂t over the plate area; the
    conduction current is the numerical dQ/dt of the sampled plate charge.
    """
    require_positive("area", area)
    require_positive("separation", separation)
    require_positive("frequency", freq_hz)
    require_positive("er", er)
    omega = angular_frequency(freq_hz)
    cap = EPS_0 * er * area / separation
    i_peak = omega * cap * v_peak

    t = linspace(0.0, cycles / freq_hz, samples)
    if t.size < 3:
        raise InvalidInputError("samples", samples, "need at least 3 to differentiate the plate charge")
    v = v_peak * np.sin(omega * t)
    de_dt = v_peak * omega * np.cos(omega * t) / separation
    i_d = EPS_0 * er * de_dt * area
    i_c = np.gradient(cap * v, t, edge_order=2)

    return DisplacementCurrentResult(
        area=area,
        separation=separation,
        er=er,
        frequency=freq_hz,
        capacitance=cap,
        e_peak=v_peak / separation,
        displacement_current_peak=i_peak,
        displacement_current_density_peak=i_peak / area,
        stored_energy_peak=0.5 * cap * v_peak**2,
        waveform=Curve("t_s", t, {"voltage": v, "displacement_current": i_d, "conduction_current": i_c}),
    )


# ─── Charge relaxation ──────────────────────────────────────────────────────

def relaxation_time(er: float, sigma: float) -> Optional[float]:
    """τ = ε/σ; None for a perfect insulator."""
    require_positive("er", er)
    require_non_negative("sigma", sigma)
    if sigma == 0:
        return None
    return EPS_0 * er / sigma


@dataclass
class RelaxationResult:
    er: float
    sigma: float
    rho_0: float
    radius: float
    tau: Optional[float]
    initial_charge: float
    decay: Curve          # t_s → rho, charge, current_out, minus_dq_dt


def charge_relaxation(er: float = 1.0, sigma: float = 1e-6, rho_0: float = 1e-6, radius: float = 0.01,
                      span: float = 5.0, t_end: float | None = None, samples: int = 200) -> RelaxationResult:
    """
    Uniform charge density ρ₀ in a sphere of ``radius`` decaying as ρ₀e^{−t/τ}.

    The curve runs to ``span``·τ, or to ``t_end`` when σ = 0 (then the
    charge does not decay and τ is None).
    """
    require_positive("radius", radius)
    tau = relaxation_time(er, sigma)
    volume = 4.0 / 3.0 * math.pi * radius**3

    if t_end is None:
        t_end = span * tau if tau is not None else 1.0
    require_positive("t_end", t_end)
    t = linspace(0.0, t_end, samples)
    if tau is None:
        rho = np.full_like(t, rho_0)
        current = np.zeros_like(t)
    else:
        rho = rho_0 * np.exp(-t / tau)
        # J = σE = ρr/(3τ) at the surface
        current = rho * radius / (3.0 * tau) * 4.0 * math.pi * radius**2
    minus_dq_dt = rho * volume / tau if tau is not None else np.zeros_like(t)

    return RelaxationResult(
        er=er,
        sigma=sigma,
        rho_0=rho_0,
        radius=radius,
        tau=tau,
        initial_charge=rho_0 * volume,
        decay=Curve("t_s", t, {
            "rho": rho,
            "charge": rho * volume,
            "current_out": current,
            "minus_dq_dt": minus_dq_dt,
        }),
    )
