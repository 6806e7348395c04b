"""
Distributed-parameter (RLGC) models for common line geometries.

Provides:
  - RLGC → characteristic impedance and propagation constant
  - Coaxial and two-wire lines (with optional conductor/dielectric loss)
  - Microstrip (Hammerstad quasi-static formulas)
"""

from __future__ import annotations

import cmath
import math
from dataclasses import dataclass

from ..errors import InvalidInputError, require_non_negative, require_ordered, require_positive
from ..utils.constants import C_0, EPS_0, MU_0, conductor_skin_depth


@dataclass(frozen=True)
class LineParameters:
    """Per-unit-length R [Ω/m], L [H/m], G [S/m], C [F/m]."""
    r_per_m: float
    l_per_m: float
    g_per_m: float
    c_per_m: float

    def __post_init__(self):
        for name in ("r_per_m", "g_per_m"):
            require_non_negative(name, getattr(self, name))
        for name in ("l_per_m", "c_per_m"):
            require_positive(name, getattr(self, name))

    def _series_shunt(self, freq_hz: float) -> tuple[complex, complex]:
        require_positive("frequency", freq_hz)
        omega = 2.0 * math.pi * freq_hz
        return complex(self.r_per_m, omega * self.l_per_m), complex(self.g_per_m, omega * self.c_per_m)

    def characteristic_impedance(self, freq_hz: float) -> complex:
        """Z₀ = √((R + jωL)/(G + jωC))."""
        z, y = self._series_shunt(freq_hz)
        return cmath.sqrt(z / y)

    def propagation_constant(self, freq_hz: float) -> complex:
        """γ = α + jβ = √((R + jωL)(G + jωC)), with α ≥ 0."""
        z, y = self._series_shunt(freq_hz)
        gamma = cmath.sqrt(z * y)
        return -gamma if gamma.real < 0 else gamma

    @property
    def z0_lossless(self) -> float:
        return math.sqrt(self.l_per_m / self.c_per_m)

    @property
    def phase_velocity_lossless(self) -> float:
        return 1.0 / math.sqrt(self.l_per_m * self.c_per_m)


@dataclass
class LineSummary:
    """RLGC plus derived quantities at one frequency."""
    params: LineParameters
    z0: complex
    gamma: complex
    alpha_np_per_m: float
    beta_rad_per_m: float
    attenuation_db_per_m: float
    phase_velocity: float | None


def summarize(params: LineParameters, freq_hz: float) -> LineSummary:
    """Evaluate Z₀ and γ for ``params`` at ``freq_hz``."""
    gamma = params.propagation_constant(freq_hz)
    beta = gamma.imag
    return LineSummary(
        params=params,
        z0=params.characteristic_impedance(freq_hz),
        gamma=gamma,
        alpha_np_per_m=gamma.real,
        beta_rad_per_m=beta,
        attenuation_db_per_m=8.685889638 * gamma.real,
        phase_velocity=2.0 * math.pi * freq_hz / beta if beta > 0 else None,
    )


# ─── Geometries ─────────────────────────────────────────────────────────────

def coaxial_line(inner_radius: float, outer_radius: float, er: float = 1.0, mur: float = 1.0,
                 freq_hz: float = 0.0, sigma_conductor: float = 0.0,
                 sigma_dielectric: float = 0.0) -> LineParameters:
    """L = μ ln(b/a)/2π, C = 2πε/ln(b/a); R from skin depth when σ_c > 0."""
    require_positive("inner_radius", inner_radius)
    require_ordered("inner_radius", inner_radius, "outer_radius", outer_radius)
    require_positive("epsilon_r", er)
    mu = mur * MU_0
    ln_ratio = math.log(outer_radius / inner_radius)
    r = 0.0
    if sigma_conductor > 0 and freq_hz > 0:
        delta = conductor_skin_depth(freq_hz, sigma_conductor, mur)
        r = (1.0 / inner_radius + 1.0 / outer_radius) / (2.0 * math.pi * delta * sigma_conductor)
    return LineParameters(
        r_per_m=r,
        l_per_m=mu * ln_ratio / (2.0 * math.pi),
        g_per_m=2.0 * math.pi * sigma_dielectric / ln_ratio,
        c_per_m=2.0 * math.pi * er * EPS_0 / ln_ratio,
    )


def two_wire_line(wire_radius: float, separation: float, er: float = 1.0, mur: float = 1.0,
                  freq_hz: float = 0.0, sigma_conductor: float = 0.0,
                  sigma_dielectric: float = 0.0) -> LineParameters:
    """L = (μ/π) acosh(D/2a), C = πε/acosh(D/2a)."""
    require_positive("wire_radius", wire_radius)
    require_ordered("2 * wire_radius", 2.0 * wire_radius, "separation", separation)
    require_positive("epsilon_r", er)
    mu = mur * MU_0
    acosh_val = math.acosh(separation / (2.0 * wire_radius))
    r = 0.0
    if sigma_conductor > 0 and freq_hz > 0:
        delta = conductor_skin_depth(freq_hz, sigma_conductor, mur)
        r = 2.0 / (2.0 * math.pi * wire_radius * delta * sigma_conductor)
    return LineParameters(
        r_per_m=r,
        l_per_m=mu * acosh_val / math.pi,
        g_per_m=math.pi * sigma_dielectric / acosh_val,
        c_per_m=math.pi * er * EPS_0 / acosh_val,
    )


@dataclass
class MicrostripResult:
    """Quasi-static microstrip design values."""
    width: float
    height: float
    epsilon_r: float
    epsilon_eff: float
    z0: float
    phase_velocity: float
    params: LineParameters


def microstrip(width: float, height: float, er: float) -> MicrostripResult:
    """
    Hammerstad formulas for a zero-thickness strip.

    ε_eff = (εr+1)/2 + (εr−1)/2 · F(u), u = w/h; Z₀ uses the narrow-strip
    form for u ≤ 1 and the wide-strip form otherwise.
    """
    require_positive("width", width)
    require_positive("height", height)
    if er < 1:
        raise InvalidInputError("epsilon_r", er, "must be >= 1")
    u = width / height
    fill = (1.0 + 12.0 / u) ** -0.5
    if u <= 1.0:
        fill += 0.04 * (1.0 - u) ** 2
    eps_eff = (er + 1.0) / 2.0 + (er - 1.0) / 2.0 * fill
    if u <= 1.0:
        z0 = 60.0 / math.sqrt(eps_eff) * math.log(8.0 / u + u / 4.0)
    else:
        z0 = 120.0 * math.pi / (math.sqrt(eps_eff) * (u + 1.393 + 0.667 * math.log(u + 1.444)))
    v_p = C_0 / math.sqrt(eps_eff)
    return MicrostripResult(
        width=width,
        height=height,
        epsilon_r=er,
        epsilon_eff=eps_eff,
        z0=z0,
        phase_velocity=v_p,
        params=LineParameters(0.0, z0 / v_p, 0.0, 1.0 / (z0 * v_p)),
    )


def analyze_line(geometry: str = "coaxial", freq_hz: float = 1e9, inner_radius: float = 0.45e-3,
                 outer_radius: float = 1.47e-3, wire_radius: float = 0.5e-3, separation: float = 5e-3,
                 er: float = 2.1, mur: float = 1.0, sigma_conductor: float = 5.8e7,
                 sigma_dielectric: float = 0.0) -> LineSummary:
    """RLGC and derived Z₀, γ for a named line geometry at ``freq_hz``."""
    require_positive("frequency", freq_hz)
    if geometry == "coaxial":
        params = coaxial_line(inner_radius, outer_radius, er, mur, freq_hz, sigma_conductor, sigma_dielectric)
    elif geometry == "two_wire":
        params = two_wire_line(wire_radius, separation, er, mur, freq_hz, sigma_conductor, sigma_dielectric)
    else:
        raise InvalidInputError("geometry", geometry, "expected 'coaxial' or 'two_wire'")
    return summarize(params, freq_hz)
