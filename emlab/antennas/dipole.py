"""
Wire dipole antennas.

Provides:
  - Hertzian (short) dipole: |sin θ| pattern, R_rad = 80π²(l/λ)², D = 1.5
  - Half-wave dipole: |cos(π/2·cos θ)/sin θ| pattern, R_rad ≈ 73.1 Ω,
    Z_in ≈ 73.1 + j42.5 Ω, D ≈ 1.643

θ is the polar angle from the dipole axis.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

from ..errors import InvalidInputError, require_positive
from ..results import Curve
from ..utils.constants import wavelength as wavelength_of
from ..utils.sampling import linspace
from ..utils.units import linear_to_db

HALF_WAVE_RESISTANCE = 73.1
HALF_WAVE_REACTANCE = 42.5
HALF_WAVE_DIRECTIVITY = 1.643
HERTZIAN_DIRECTIVITY = 1.5


class DipoleKind(str, Enum):
    HERTZIAN = "hertzian"
    HALF_WAVE = "half_wave"


def hertzian_pattern(theta):
    """Normalized E-field pattern |sin θ|."""
    return np.abs(np.sin(theta))


def half_wave_pattern(theta):
    """Normalized E-field pattern |cos(π/2·cos θ)/sin θ|; zero on the axis."""
    theta = np.asarray(theta, dtype=float)
    s = np.sin(theta)
    with np.errstate(divide="ignore", invalid="ignore"):
        f = np.abs(np.cos(math.pi / 2.0 * np.cos(theta)) / s)
    return np.where(np.abs(s) < 1e-15, 0.0, f)


def effective_area(wavelength: float, directivity: float) -> float:
    """A_e = λ²D/(4π)."""
    return wavelength**2 * directivity / (4.0 * math.pi)


@dataclass
class DipoleResult:
    kind: DipoleKind
    frequency: float
    wavelength: float
    length: float
    current: float
    radiation_resistance: float
    input_impedance: Optional[complex]   # only tabulated for the half-wave dipole
    directivity: float
    directivity_dbi: float
    effective_area: float
    radiated_power: float
    pattern: Curve                        # theta_deg → field, power, power_db


def analyze_dipole(kind: DipoleKind | str = DipoleKind.HALF_WAVE, freq_hz: float = 300e6, current: float = 1.0,
                   length: float | None = None, samples: int = 181) -> DipoleResult:
    """
    Far-field parameters of a z-directed dipole.

    ``length`` applies to the Hertzian dipole only (default λ/50); the
    half-wave dipole is λ/2 long by construction.
    """
    try:
        kind = DipoleKind(kind)
    except ValueError:
        raise InvalidInputError("kind", kind, "expected 'hertzian' or 'half_wave'") from None
    lam = wavelength_of(freq_hz)

    if kind is DipoleKind.HERTZIAN:
        if length is None:
            length = lam / 50.0
        require_positive("length", length)
        r_rad = 80.0 * math.pi**2 * (length / lam) ** 2
        z_in = None
        d = HERTZIAN_DIRECTIVITY
        pattern_fn = hertzian_pattern
    else:
        length = lam / 2.0
        r_rad = HALF_WAVE_RESISTANCE
        z_in = complex(HALF_WAVE_RESISTANCE, HALF_WAVE_REACTANCE)
        d = HALF_WAVE_DIRECTIVITY
        pattern_fn = half_wave_pattern

    theta = linspace(0.0, math.pi, samples)
    field = pattern_fn(theta)
    power = field**2
    with np.errstate(divide="ignore"):
        power_db = 10.0 * np.log10(power)

    return DipoleResult(
        kind=kind,
        frequency=freq_hz,
        wavelength=lam,
        length=length,
        current=current,
        radiation_resistance=r_rad,
        input_impedance=z_in,
        directivity=d,
        directivity_dbi=linear_to_db(d),
        effective_area=effective_area(lam, d),
        radiated_power=0.5 * current**2 * r_rad,
        pattern=Curve("theta_deg", np.degrees(theta), {"field": field, "power": power, "power_db": power_db}),
    )
