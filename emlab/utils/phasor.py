"""
Complex phasor helpers and the impedance algebra built on them.

Python's ``complex`` is the working type everywhere in the engine;
:class:`Phasor` is a read-only view with the magnitude/phase accessors
the topics report, and the free functions cover the reflection-coefficient
algebra shared by the transmission-line modules.
"""

from __future__ import annotations

import cmath
import logging
import math
from dataclasses import dataclass

from ..errors import InvalidInputError, require_positive, require_non_negative
from .units import gamma_mag_to_vswr, gamma_mag_to_return_loss, gamma_mag_to_mismatch_loss

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Phasor:
    """Complex amplitude with polar accessors."""
    re: float
    im: float = 0.0

    @classmethod
    def from_complex(cls, z: complex) -> "Phasor":
        return cls(float(z.real), float(z.imag))

    @classmethod
    def from_polar(cls, magnitude: float, phase_rad: float) -> "Phasor":
        """Build from magnitude and phase [rad]. Negative magnitudes are rejected."""
        require_non_negative("magnitude", magnitude)
        return cls.from_complex(cmath.rect(magnitude, phase_rad))

    def __complex__(self) -> complex:
        return complex(self.re, self.im)

    @property
    def magnitude(self) -> float:
        return math.hypot(self.re, self.im)

    @property
    def phase(self) -> float:
        """Phase in (-π, π]."""
        angle = math.atan2(self.im, self.re)
        # atan2 returns -π for (negative, -0.0)
        return math.pi if angle == -math.pi else angle

    @property
    def phase_deg(self) -> float:
        return math.degrees(self.phase)

    def conjugate(self) -> "Phasor":
        return Phasor(self.re, -self.im)

    def __add__(self, other) -> "Phasor":
        return Phasor.from_complex(complex(self) + complex(other))

    __radd__ = __add__

    def __sub__(self, other) -> "Phasor":
        return Phasor.from_complex(complex(self) - complex(other))

    def __rsub__(self, other) -> "Phasor":
        return Phasor.from_complex(complex(other) - complex(self))

    def __mul__(self, other) -> "Phasor":
        return Phasor.from_complex(complex(self) * complex(other))

    __rmul__ = __mul__

    def __truediv__(self, other) -> "Phasor":
        return Phasor.from_complex(complex(self) / complex(other))

    def __rtruediv__(self, other) -> "Phasor":
        return Phasor.from_complex(complex(other) / complex(self))

    def __abs__(self) -> float:
        return self.magnitude

    def __str__(self) -> str:
        sign = "+" if self.im >= 0 else "-"
        return f"{self.re:.4g} {sign} j{abs(self.im):.4g}"


# ─── Reflection algebra ─────────────────────────────────────────────────────

def reflection_coefficient(z_load: complex, z0: float) -> complex:
    """Γ = (Z_L − Z₀)/(Z_L + Z₀) for a passive load (Re Z_L ≥ 0)."""
    require_positive("z0", z0)
    z_load = complex(z_load)
    if z_load.real < 0:
        raise InvalidInputError("z_load", z_load, "resistance must be >= 0")
    denom = z_load + z0
    if denom == 0:
        raise InvalidInputError("z_load", z_load, "equals -Z0, not a passive load")
    return (z_load - z0) / denom


def vswr(gamma: complex, epsilon: float = 1e-9) -> float:
    """VSWR from Γ with |Γ| clamped below 1."""
    mag = abs(gamma)
    if mag >= 1.0 - epsilon:
        logger.debug("clamping |Γ|=%.6g to 1-%g for VSWR", mag, epsilon)
    return gamma_mag_to_vswr(mag, epsilon)


def return_loss_db(gamma: complex) -> float | None:
    """−20·log₁₀|Γ|; None for a perfect match."""
    return gamma_mag_to_return_loss(abs(gamma))


def mismatch_loss_db(gamma: complex, epsilon: float = 1e-9) -> float | None:
    """−10·log₁₀(1 − |Γ|²); None when |Γ| rounds to 1."""
    return gamma_mag_to_mismatch_loss(abs(gamma), epsilon)


def input_impedance_lossless(z_load: complex, z0: float, beta_l: float) -> complex | None:
    """
    Z_in = Z₀ (Z_L + jZ₀ tan βl)/(Z₀ + jZ_L tan βl).

    Evaluated through Γ so that βl = π/2 (tan → ∞) stays finite.
    Returns None at an open-circuit point (Γ_in = 1).
    """
    gamma_l = reflection_coefficient(z_load, z0)
    gamma_in = gamma_l * cmath.exp(-2j * beta_l)
    if abs(1 - gamma_in) < 1e-12:
        return None
    return z0 * (1 + gamma_in) / (1 - gamma_in)


def input_impedance_lossy(z_load: complex, z0: complex, gamma: complex,
                          length: float) -> complex | None:
    """Z_in = Z₀ (Z_L + Z₀ tanh γl)/(Z₀ + Z_L tanh γl); None when the denominator vanishes."""
    require_non_negative("length", length)
    t = cmath.tanh(gamma * length)
    denom = z0 + complex(z_load) * t
    if denom == 0:
        return None
    return z0 * (complex(z_load) + z0 * t) / denom
