"""
Impedance matching network design.

Provides:
  - Quarter-wave transformer (single section, bandwidth, binomial multi-section)
  - Single-stub tuning with open or shorted stubs
  - L-section lumped matching networks
"""

from __future__ import annotations

import cmath
import logging
import math
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from ..config import EngineConfig, resolve
from ..errors import InvalidInputError, clamp_unit, require_count, require_positive
from ..results import Curve
from ..utils.constants import C_0
from ..utils.phasor import input_impedance_lossless, reflection_coefficient, vswr
from ..utils.sampling import linspace

logger = logging.getLogger(__name__)


# ─── Quarter-wave transformer ───────────────────────────────────────────────

@dataclass
class QuarterWaveResult:
    """Single-section quarter-wave transformer."""
    z_transformer: float
    length_m: float
    wavelength_m: float
    vswr_before: float
    vswr_after: float
    fractional_bandwidth: float
    max_vswr: float


def quarter_wave(z0: float, r_load: float, freq_hz: float, phase_velocity: float = C_0,
                 max_vswr: float = 1.5, config: EngineConfig | None = None) -> QuarterWaveResult:
    """
    Z_t = √(Z₀·R_L), length λ/4 at the design frequency.

    ``fractional_bandwidth`` is Δf/f₀ over which the input VSWR stays
    below ``max_vswr``; it saturates at 2 when the load is already within
    that VSWR of Z₀.
    """
    cfg = resolve(config)
    require_positive("z0", z0)
    require_positive("r_load", r_load)
    require_positive("frequency", freq_hz)
    require_positive("phase_velocity", phase_velocity)
    if max_vswr < 1:
        raise InvalidInputError("max_vswr", max_vswr, "must be >= 1")

    z_t = math.sqrt(z0 * r_load)
    lam = phase_velocity / freq_hz
    z_in = input_impedance_lossless(r_load, z_t, math.pi / 2.0)

    gamma_m = (max_vswr - 1.0) / (max_vswr + 1.0)
    if r_load == z0:
        bandwidth = 2.0
    else:
        cos_arg = gamma_m * 2.0 * math.sqrt(z0 * r_load) / abs(r_load - z0)
        bandwidth = 2.0 if abs(cos_arg) > 1.0 else 2.0 - (4.0 / math.pi) * math.acos(cos_arg)

    return QuarterWaveResult(
        z_transformer=z_t,
        length_m=lam / 4.0,
        wavelength_m=lam,
        vswr_before=vswr(reflection_coefficient(r_load, z0), cfg.gamma_clamp_epsilon),
        vswr_after=vswr(reflection_coefficient(z_in, z0), cfg.gamma_clamp_epsilon),
        fractional_bandwidth=bandwidth,
        max_vswr=max_vswr,
    )


@dataclass
class MultiSectionResult:
    """Binomial (maximally flat) multi-section transformer."""
    section_impedances: list[float]
    section_length_m: float


def binomial_transformer(z0: float, r_load: float, freq_hz: float, sections: int = 3,
                         phase_velocity: float = C_0) -> MultiSectionResult:
    """Section impedances from ln(Z_{i+1}/Z_i) = 2^{-N} C(N, i) ln(R_L/Z₀)."""
    require_positive("z0", z0)
    require_positive("r_load", r_load)
    require_positive("frequency", freq_hz)
    sections = require_count("sections", sections)
    if sections == 0:
        raise InvalidInputError("sections", sections, "need at least one section")

    ln_ratio = math.log(r_load / z0)
    impedances = []
    z_prev = z0
    for i in range(sections):
        z_prev = z_prev * math.exp(2.0 ** -sections * math.comb(sections, i) * ln_ratio)
        impedances.append(z_prev)
    return MultiSectionResult(
        section_impedances=impedances,
        section_length_m=phase_velocity / (4.0 * freq_hz),
    )


def transformer_response(z0: float, r_load: float, section_impedances: list[float],
                         f_min_ratio: float = 0.0, f_max_ratio: float = 2.0,
                         samples: int = 200) -> Curve:
    """
    |Γ_in| vs f/f₀ for a cascade of quarter-wave sections.

    The sections are listed from the source side, each λ/4 long at f₀,
    so the electrical length of each is θ = (π/2)·f/f₀.
    """
    require_positive("z0", z0)
    require_positive("r_load", r_load)
    ratio = linspace(f_min_ratio, f_max_ratio, samples)
    gamma_mag = np.empty_like(ratio)
    for k, fr in enumerate(ratio):
        theta = 0.5 * math.pi * fr
        z = complex(r_load)
        for z_sec in reversed(section_impedances):
            z = input_impedance_lossless(z, z_sec, theta)
            if z is None:
                break
        gamma_mag[k] = 1.0 if z is None else abs(reflection_coefficient(z, z0))
    return Curve("f_ratio", ratio, {"gamma_mag": gamma_mag})


# ─── Single-stub tuning ─────────────────────────────────────────────────────

class StubType(str, Enum):
    OPEN = "open"
    SHORT = "short"


@dataclass
class StubSolution:
    """One (distance, length) pair; both measured in metres."""
    distance_m: float
    length_m: float
    distance_wl: float
    length_wl: float
    stub_type: StubType
    line_susceptance: float   # normalized b at the stub position


@dataclass
class SingleStubResult:
    """Both shunt-stub solutions for a load."""
    z0: float
    z_load: complex
    wavelength_m: float
    solutions: list[StubSolution] = field(default_factory=list)


def single_stub(z0: float, z_load: complex, freq_hz: float, stub_type: StubType | str = StubType.SHORT,
                phase_velocity: float = C_0, config: EngineConfig | None = None) -> SingleStubResult:
    """
    Shunt single-stub match.

    The two stub positions are where the line admittance has unit real part,
    found from Γ_L: d = (θ_Γ − φ)/(2β) with φ = ±acos(−|Γ|). Distances and
    lengths are folded into [0, λ/2).

    A purely reactive load (|Γ| = 1) never reaches g = 1 anywhere on the
    line, so the result carries no solutions.
    """
    cfg = resolve(config)
    require_positive("z0", z0)
    require_positive("frequency", freq_hz)
    require_positive("phase_velocity", phase_velocity)
    try:
        stub_type = StubType(stub_type)
    except ValueError:
        raise InvalidInputError("stub_type", stub_type, "expected 'open' or 'short'") from None
    z_load = complex(z_load)
    if z_load.real < 0:
        raise InvalidInputError("z_load", z_load, "resistance must be >= 0")

    lam = phase_velocity / freq_hz
    beta = 2.0 * math.pi / lam
    half = lam / 2.0
    gamma_l = reflection_coefficient(z_load, z0)
    mag = abs(gamma_l)
    theta = cmath.phase(gamma_l)
    if mag >= 1.0 - cfg.gamma_clamp_epsilon:
        logger.debug("lossless load |Γ|=%.6g cannot be matched by a shunt stub", mag)
        return SingleStubResult(z0=z0, z_load=z_load, wavelength_m=lam, solutions=[])

    phi_1 = math.acos(clamp_unit(-mag))
    solutions = []
    for phi in (phi_1, -phi_1):
        d = ((theta - phi) / (2.0 * beta)) % half
        gamma_d = gamma_l * cmath.exp(-2j * beta * d)
        b = ((1 - gamma_d) / (1 + gamma_d)).imag
        target_b = -b
        if stub_type is StubType.SHORT:
            beta_l = math.atan2(-1.0, target_b)
        else:
            beta_l = math.atan(target_b)
        length = (beta_l / beta) % half
        solutions.append(StubSolution(
            distance_m=d,
            length_m=length,
            distance_wl=d / lam,
            length_wl=length / lam,
            stub_type=stub_type,
            line_susceptance=b,
        ))
    return SingleStubResult(z0=z0, z_load=z_load, wavelength_m=lam, solutions=solutions)


def verify_stub(z0: float, z_load: complex, solution: StubSolution, freq_hz: float,
                phase_velocity: float = C_0) -> float:
    """|Γ| seen looking into the stub junction; ≈ 0 for a correct solution."""
    beta = 2.0 * math.pi * freq_hz / phase_velocity
    z_line = input_impedance_lossless(z_load, z0, beta * solution.distance_m)
    y_line = 0j if z_line is None else 1.0 / z_line
    bl = beta * solution.length_m
    if solution.stub_type is StubType.SHORT:
        t = math.tan(bl)
        if t == 0:
            return 1.0
        y_stub = -1j / (z0 * t)
    else:
        y_stub = 1j * math.tan(bl) / z0
    y_total = y_line + y_stub
    if y_total == 0:
        return 1.0
    return abs(reflection_coefficient(1.0 / y_total, z0))


# ─── L-section networks ─────────────────────────────────────────────────────

@dataclass
class LNetworkMatch:
    """A synthesized L-section: series reactance X and shunt susceptance B."""
    topology: str           # "shunt_series" (shunt across the load) or "series_shunt"
    x_series: float
    b_shunt: float
    components: list[dict]  # [{"type": "L"|"C", "value": float, "position": "series"|"shunt"}]
    freq_hz: float

    def describe(self) -> str:
        """Human-readable description."""
        parts = []
        for c in self.components:
            if c["type"] == "L":
                parts.append(f"{c['position']} L = {c['value'] * 1e9:.2f} nH")
            else:
                parts.append(f"{c['position']} C = {c['value'] * 1e12:.2f} pF")
        return f"{self.topology}: " + " → ".join(parts)

    def input_impedance(self, z_load: complex) -> complex:
        """Impedance seen from the source side of the network."""
        if self.topology == "shunt_series":
            return 1j * self.x_series + 1.0 / (1j * self.b_shunt + 1.0 / z_load)
        return 1.0 / (1j * self.b_shunt + 1.0 / (z_load + 1j * self.x_series))


def _series_component(x: float, omega: float) -> dict:
    if x >= 0:
        return {"type": "L", "value": x / omega, "position": "series"}
    return {"type": "C", "value": -1.0 / (omega * x), "position": "series"}


def _shunt_component(b: float, omega: float) -> dict:
    if b >= 0:
        return {"type": "C", "value": b / omega, "position": "shunt"}
    return {"type": "L", "value": -1.0 / (omega * b), "position": "shunt"}


def l_network(z0: float, z_load: complex, freq_hz: float) -> list[LNetworkMatch]:
    """
    Synthesize the two L-section solutions matching Z_L to Z₀.

    R_L > Z₀ puts the shunt element across the load; R_L < Z₀ puts the
    series element next to the load. R_L = Z₀ only needs the load reactance
    cancelled, so a single series element is returned.
    """
    require_positive("z0", z0)
    require_positive("frequency", freq_hz)
    z_load = complex(z_load)
    r_l, x_l = z_load.real, z_load.imag
    if r_l <= 0:
        raise InvalidInputError("z_load", z_load, "L-network needs a load resistance > 0")
    omega = 2.0 * math.pi * freq_hz

    solutions = []
    if math.isclose(r_l, z0):
        x = -x_l
        solutions.append(LNetworkMatch("series_shunt", x, 0.0, [_series_component(x, omega)], freq_hz))
        return solutions

    if r_l > z0:
        mag_sq = r_l**2 + x_l**2
        root = math.sqrt(r_l / z0) * math.sqrt(mag_sq - z0 * r_l)
        for sign in (1.0, -1.0):
            b = (x_l + sign * root) / mag_sq
            if b == 0:
                continue
            x = 1.0 / b + x_l * z0 / r_l - z0 / (b * r_l)
            solutions.append(LNetworkMatch(
                "shunt_series", x, b,
                [_shunt_component(b, omega), _series_component(x, omega)], freq_hz,
            ))
    else:
        for sign in (1.0, -1.0):
            x = sign * math.sqrt(r_l * (z0 - r_l)) - x_l
            b = sign * math.sqrt((z0 - r_l) / r_l) / z0
            solutions.append(LNetworkMatch(
                "series_shunt", x, b,
                [_series_component(x, omega), _shunt_component(b, omega)], freq_hz,
            ))
    return solutions
