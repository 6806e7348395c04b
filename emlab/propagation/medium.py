"""
Plane-wave propagation in a homogeneous (possibly lossy) medium.

Given εr, μr, σ and f:
  - complex permittivity ε_c = ε − jσ/ω
  - γ = α + jβ = √(jωμ(σ + jωε)), α, β ≥ 0
  - η = √(jωμ/(σ + jωε))
  - loss tangent σ/(ωε) and the medium class it implies
"""

from __future__ import annotations

import cmath
import math
from dataclasses import dataclass
from enum import Enum

import numpy as np

from ..config import EngineConfig, resolve
from ..errors import require_non_negative, require_positive
from ..results import Curve
from ..utils.constants import EPS_0, MU_0
from ..utils.materials import get_material
from ..utils.sampling import linspace, logspace


class MediumClass(str, Enum):
    LOW_LOSS = "low-loss dielectric"
    LOSSY = "lossy"
    GOOD_CONDUCTOR = "good conductor"


@dataclass
class MediumResult:
    """Propagation constants of a medium at one frequency."""
    frequency: float
    epsilon_r: float
    mu_r: float
    sigma: float
    complex_permittivity: complex
    loss_tangent: float
    medium_class: MediumClass
    gamma: complex
    alpha: float               # Np/m
    beta: float                # rad/m
    eta: complex
    phase_velocity: float
    wavelength: float
    skin_depth: float | None   # absent for a lossless medium
    attenuation_db_per_m: float


def classify(loss_tangent: float, config: EngineConfig | None = None) -> MediumClass:
    """Low-loss below the lower threshold, good conductor above the upper one."""
    cfg = resolve(config)
    if loss_tangent < cfg.low_loss_tangent:
        return MediumClass.LOW_LOSS
    if loss_tangent > cfg.good_conductor_tangent:
        return MediumClass.GOOD_CONDUCTOR
    return MediumClass.LOSSY


def analyze_medium(freq_hz: float, er: float = 1.0, mur: float = 1.0, sigma: float = 0.0,
                   config: EngineConfig | None = None) -> MediumResult:
    """Evaluate γ, η and derived quantities for (εr, μr, σ) at ``freq_hz``."""
    cfg = resolve(config)
    require_positive("frequency", freq_hz)
    require_positive("epsilon_r", er)
    require_positive("mu_r", mur)
    require_non_negative("sigma", sigma)

    omega = 2.0 * math.pi * freq_hz
    eps = er * EPS_0
    mu = mur * MU_0
    shunt = complex(sigma, omega * eps)
    gamma = cmath.sqrt(1j * omega * mu * shunt)
    eta = cmath.sqrt(1j * omega * mu / shunt)
    alpha, beta = gamma.real, gamma.imag
    loss_tangent = sigma / (omega * eps)

    skin_depth = None
    if alpha > cfg.alpha_zero_tolerance:
        skin_depth = 1.0 / alpha

    return MediumResult(
        frequency=freq_hz,
        epsilon_r=er,
        mu_r=mur,
        sigma=sigma,
        complex_permittivity=complex(eps, -sigma / omega),
        loss_tangent=loss_tangent,
        medium_class=classify(loss_tangent, cfg),
        gamma=gamma,
        alpha=alpha,
        beta=beta,
        eta=eta,
        phase_velocity=omega / beta,
        wavelength=2.0 * math.pi / beta,
        skin_depth=skin_depth,
        attenuation_db_per_m=8.685889638 * alpha,
    )


def analyze_material(name: str, freq_hz: float, config: EngineConfig | None = None) -> MediumResult:
    """:func:`analyze_medium` for a library material."""
    m = get_material(name)
    return analyze_medium(freq_hz, m.eps_r, m.mu_r, m.effective_conductivity(freq_hz), config)


# ─── Profiles ───────────────────────────────────────────────────────────────

def attenuation_profile(freq_hz: float, er: float = 1.0, mur: float = 1.0, sigma: float = 0.0,
                        e0: float = 1.0, depth: float | None = None, samples: int = 200,
                        config: EngineConfig | None = None) -> Curve:
    """
    |E|(z) = E₀e^{−αz} and the time-average power density along z.

    ``depth`` defaults to five skin depths (or five wavelengths when lossless).
    """
    med = analyze_medium(freq_hz, er, mur, sigma, config)
    if depth is None:
        depth = 5.0 * (med.skin_depth if med.skin_depth is not None else med.wavelength)
    require_positive("depth", depth)
    z = linspace(0.0, depth, samples)
    e_mag = e0 * np.exp(-med.alpha * z)
    eta = med.eta
    power = e_mag**2 * eta.real / (2.0 * abs(eta) ** 2)
    return Curve("z_m", z, {"e_mag": e_mag, "power_density": power})


def skin_depth_vs_frequency(f_min: float, f_max: float, er: float = 1.0, mur: float = 1.0,
                            sigma: float = 5.8e7, samples: int = 200,
                            config: EngineConfig | None = None) -> Curve:
    """Skin depth over a log-spaced frequency sweep (NaN where lossless)."""
    freqs = logspace(f_min, f_max, samples)
    depth = np.full(len(freqs), np.nan)
    for i, f in enumerate(freqs):
        d = analyze_medium(f, er, mur, sigma, config).skin_depth
        if d is not None:
            depth[i] = d
    return Curve("frequency_hz", freqs, {"skin_depth_m": depth})
