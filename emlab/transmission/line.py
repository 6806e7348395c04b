"""
Terminated transmission-line analysis.

Provides:
  - Load reflection analysis (Γ, VSWR, return loss, mismatch loss)
  - Standing-wave voltage/current envelopes and extremum positions
  - Input impedance vs electrical length (lossless and lossy)
"""

from __future__ import annotations

import cmath
import math
from dataclasses import dataclass

import numpy as np

from ..config import EngineConfig, resolve
from ..errors import InvalidInputError, require_positive
from ..results import Curve
from ..utils.constants import wavelength
from ..utils.phasor import (
    input_impedance_lossy,
    mismatch_loss_db,
    reflection_coefficient,
    return_loss_db,
    vswr,
)
from ..utils.sampling import linspace


# ─── Load analysis ──────────────────────────────────────────────────────────

@dataclass
class LoadAnalysis:
    """Reflection quantities for a load on a line of characteristic impedance z0."""
    z0: float
    z_load: complex
    gamma: complex
    gamma_mag: float
    gamma_phase_deg: float
    vswr: float
    return_loss_db: float | None
    mismatch_loss_db: float | None
    z_norm: complex
    y_norm: complex | None

    @property
    def is_matched(self) -> bool:
        return self.gamma_mag < 1e-12


def analyze_load(z0: float, z_load: complex, config: EngineConfig | None = None) -> LoadAnalysis:
    """Reflection coefficient, VSWR and losses for Z_L on a Z₀ line."""
    cfg = resolve(config)
    z_load = complex(z_load)
    gamma = reflection_coefficient(z_load, z0)
    z_norm = z_load / z0
    return LoadAnalysis(
        z0=z0,
        z_load=z_load,
        gamma=gamma,
        gamma_mag=abs(gamma),
        gamma_phase_deg=math.degrees(cmath.phase(gamma)),
        vswr=vswr(gamma, cfg.gamma_clamp_epsilon),
        return_loss_db=return_loss_db(gamma),
        mismatch_loss_db=mismatch_loss_db(gamma, cfg.gamma_clamp_epsilon),
        z_norm=z_norm,
        y_norm=None if z_norm == 0 else 1.0 / z_norm,
    )


# ─── Standing waves ─────────────────────────────────────────────────────────

@dataclass
class StandingWave:
    """Normalized |V| and |I| envelopes along the line, d measured from the load."""
    gamma: complex
    vswr: float
    v_max: float
    v_min: float
    first_vmin_m: float
    first_vmax_m: float
    curve: Curve


def standing_wave(z0: float, z_load: complex, freq_hz: float, er: float = 1.0,
                  n_wavelengths: float = 1.0, samples: int = 200,
                  config: EngineConfig | None = None) -> StandingWave:
    """
    |V(d)| = |1 + Γe^{−j2βd}|, |I(d)| = |1 − Γe^{−j2βd}| over ``n_wavelengths``.

    Positions of the first minimum and maximum are folded into [0, λ/2).
    """
    cfg = resolve(config)
    require_positive("frequency", freq_hz)
    require_positive("epsilon_r", er)
    lam = wavelength(freq_hz, er)
    beta = 2.0 * math.pi / lam
    gamma = reflection_coefficient(z_load, z0)
    mag = abs(gamma)
    theta = cmath.phase(gamma)

    d = linspace(0.0, n_wavelengths * lam, samples)
    rotated = gamma * np.exp(-2j * beta * d)
    curve = Curve("d_m", d, {
        "d_over_lambda": d / lam,
        "v_norm": np.abs(1 + rotated),
        "i_norm": np.abs(1 - rotated),
    })

    half = lam / 2.0
    first_vmin = ((theta + math.pi) / (2.0 * beta)) % half
    first_vmax = (theta / (2.0 * beta)) % half
    return StandingWave(
        gamma=gamma,
        vswr=vswr(gamma, cfg.gamma_clamp_epsilon),
        v_max=1.0 + mag,
        v_min=1.0 - mag,
        first_vmin_m=first_vmin,
        first_vmax_m=first_vmax,
        curve=curve,
    )


# ─── Input impedance ────────────────────────────────────────────────────────

def input_impedance_curve(z0: float, z_load: complex, max_length_wl: float = 1.0,
                          samples: int = 200) -> Curve:
    """
    Z_in vs electrical length l/λ for a lossless line.

    Points where Z_in is infinite (open-circuit transformation) are
    reported as NaN so plots break instead of spiking.
    """
    gamma = reflection_coefficient(z_load, z0)
    length_wl = linspace(0.0, max_length_wl, samples)
    gamma_in = gamma * np.exp(-4j * np.pi * length_wl)
    with np.errstate(divide="ignore", invalid="ignore"):
        z_in = z0 * (1 + gamma_in) / (1 - gamma_in)
    z_in = np.where(np.abs(1 - gamma_in) < 1e-12, np.nan + 0j, z_in)
    return Curve("length_wl", length_wl, {
        "r_in": np.real(z_in),
        "x_in": np.imag(z_in),
        "z_in_mag": np.abs(z_in),
    })


@dataclass
class LossyLineResult:
    """Input impedance of a line with complex propagation constant."""
    z_in: complex | None
    gamma_load: complex
    gamma_in: complex
    attenuation_db: float


def lossy_line_input(z0: complex, z_load: complex, alpha: float, beta: float,
                     length: float) -> LossyLineResult:
    """Z_in through a line with γ = α + jβ [Np/m, rad/m] of ``length`` metres."""
    require_positive("beta", beta)
    if alpha < 0:
        raise InvalidInputError("alpha", alpha, "attenuation must be >= 0")
    gamma = complex(alpha, beta)
    z_in = input_impedance_lossy(z_load, z0, gamma, length)
    gamma_load = (complex(z_load) - z0) / (complex(z_load) + z0)
    gamma_in = gamma_load * cmath.exp(-2 * gamma * length)
    return LossyLineResult(
        z_in=z_in,
        gamma_load=gamma_load,
        gamma_in=gamma_in,
        attenuation_db=8.685889638 * alpha * length,
    )
