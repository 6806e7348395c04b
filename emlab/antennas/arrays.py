"""
Uniform linear arrays.

N isotropic elements spaced d (in wavelengths) with progressive phase β.
Angles θ are measured from broadside, θ ∈ [−π/2, π/2], so that

    ψ(θ) = kd·sin θ + β
    AF(θ) = sin(Nψ/2) / (N·sin(ψ/2))

Provides:
  - Broadside, endfire and scanned constructors
  - Array-factor and total (element × array) pattern curves
  - Half-power beamwidth (scan + Brent refinement), first-null beamwidth,
    approximate directivity
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np
from scipy.optimize import brentq

from ..errors import InvalidInputError, require_positive
from ..results import Curve
from ..utils.sampling import linspace
from ..utils.units import linear_to_db

HALF_POWER = 1.0 / math.sqrt(2.0)
_SCAN_POINTS = 3601


class ElementPattern(str, Enum):
    ISOTROPIC = "isotropic"
    HERTZIAN = "hertzian"
    HALF_WAVE = "half_wave"


@dataclass(frozen=True)
class UniformLinearArray:
    num_elements: int
    spacing: float        # d/λ
    beta: float = 0.0     # progressive phase [rad]

    def __post_init__(self):
        if int(self.num_elements) != self.num_elements or self.num_elements < 1:
            raise InvalidInputError("num_elements", self.num_elements, "must be a positive integer")
        require_positive("spacing", self.spacing)

    @classmethod
    def broadside(cls, num_elements: int, spacing: float) -> "UniformLinearArray":
        return cls(num_elements, spacing, 0.0)

    @classmethod
    def endfire(cls, num_elements: int, spacing: float) -> "UniformLinearArray":
        """Main beam along the array axis at θ = +90°."""
        return cls(num_elements, spacing, -2.0 * math.pi * spacing)

    @classmethod
    def scanned(cls, num_elements: int, spacing: float, theta_0: float) -> "UniformLinearArray":
        """Main beam steered to θ₀ [rad] from broadside."""
        return cls(num_elements, spacing, -2.0 * math.pi * spacing * math.sin(theta_0))

    @property
    def scan_angle(self) -> Optional[float]:
        """Direction where ψ = 0, or None when no real angle satisfies it."""
        s = -self.beta / (2.0 * math.pi * self.spacing)
        if abs(s) > 1.0:
            return None
        return math.asin(s)

    def psi(self, theta):
        return 2.0 * math.pi * self.spacing * np.sin(theta) + self.beta

    def array_factor(self, theta):
        """Normalized |AF|; 1 where sin(ψ/2) vanishes (grating or main lobe)."""
        n = self.num_elements
        half = np.asarray(self.psi(theta), dtype=float) / 2.0
        s = np.sin(half)
        small = np.abs(s) < 1e-12
        with np.errstate(divide="ignore", invalid="ignore"):
            af = np.abs(np.sin(n * half) / (n * s))
        af = np.where(small, 1.0, af)
        return float(af) if af.ndim == 0 else af

    def first_null_beamwidth(self) -> float:
        """2·asin(1/(Nd)) for a broadside beam; π when Nd ≤ 1."""
        nd = self.num_elements * self.spacing
        if nd <= 1.0:
            return math.pi
        return 2.0 * math.asin(1.0 / nd)

    def directivity(self) -> float:
        """D ≈ 2Nd."""
        return 2.0 * self.num_elements * self.spacing

    def half_power_beamwidth(self) -> Optional[float]:
        """
        Width of the main lobe between its −3 dB points [rad].

        The pattern is scanned outward from the main-beam peak for the
        first 1/√2 crossing on each side and each crossing is refined with
        Brent's method. When one side runs into ±90° first (endfire), the
        beam is mirror-symmetric about the array axis and the other half
        width is doubled. None if no crossing exists (single element).
        """
        theta = np.linspace(-math.pi / 2.0, math.pi / 2.0, _SCAN_POINTS)
        af = self.array_factor(theta)
        peak = int(np.argmax(af))

        def g(t):
            return self.array_factor(t) - HALF_POWER

        def crossing(step: int) -> Optional[float]:
            i = peak
            while 0 <= i + step < len(theta):
                if af[i + step] < HALF_POWER:
                    a, b = sorted((theta[i], theta[i + step]))
                    return brentq(g, a, b)
                i += step
            return None

        left, right = crossing(-1), crossing(+1)
        peak_theta = theta[peak]
        if left is None and right is None:
            return None
        if left is None:
            return 2.0 * (right - peak_theta)
        if right is None:
            return 2.0 * (peak_theta - left)
        return right - left


def element_factor(kind: ElementPattern | str, theta):
    """Element pattern for dipoles lying along the array axis (θ from broadside)."""
    try:
        kind = ElementPattern(kind)
    except ValueError:
        raise InvalidInputError("element", kind, "expected 'isotropic', 'hertzian' or 'half_wave'") from None
    theta = np.asarray(theta, dtype=float)
    if kind is ElementPattern.ISOTROPIC:
        return np.ones_like(theta)
    c = np.cos(theta)
    if kind is ElementPattern.HERTZIAN:
        return np.abs(c)
    with np.errstate(divide="ignore", invalid="ignore"):
        f = np.abs(np.cos(math.pi / 2.0 * np.sin(theta)) / c)
    return np.where(np.abs(c) < 1e-15, 0.0, f)


@dataclass
class ArrayResult:
    num_elements: int
    spacing: float
    beta: float
    scan_angle: Optional[float]
    hpbw: Optional[float]
    fnbw: float
    directivity: float
    directivity_dbi: float
    pattern: Curve           # theta_deg → array_factor, total, af_db

    @property
    def hpbw_deg(self) -> Optional[float]:
        return None if self.hpbw is None else math.degrees(self.hpbw)

    @property
    def fnbw_deg(self) -> float:
        return math.degrees(self.fnbw)


def analyze_array(num_elements: int = 8, spacing: float = 0.5, beta: float = 0.0,
                  element: ElementPattern | str = ElementPattern.ISOTROPIC, samples: int = 361) -> ArrayResult:
    """Pattern and beam metrics for an N-element ULA."""
    arr = UniformLinearArray(num_elements, spacing, beta)
    theta = linspace(-math.pi / 2.0, math.pi / 2.0, samples)
    af = np.asarray(arr.array_factor(theta), dtype=float).reshape(theta.shape)
    total = af * element_factor(element, theta)
    with np.errstate(divide="ignore"):
        af_db = 20.0 * np.log10(af)
    d = arr.directivity()
    return ArrayResult(
        num_elements=arr.num_elements,
        spacing=spacing,
        beta=beta,
        scan_angle=arr.scan_angle,
        hpbw=arr.half_power_beamwidth(),
        fnbw=arr.first_null_beamwidth(),
        directivity=d,
        directivity_dbi=linear_to_db(d),
        pattern=Curve("theta_deg", np.degrees(theta), {"array_factor": af, "total": total, "af_db": af_db}),
    )


def scanned_array(num_elements: int = 8, spacing: float = 0.5, scan_deg: float = 30.0,
                  element: ElementPattern | str = ElementPattern.ISOTROPIC, samples: int = 361) -> ArrayResult:
    """Array steered to ``scan_deg`` from broadside."""
    arr = UniformLinearArray.scanned(num_elements, spacing, math.radians(scan_deg))
    return analyze_array(num_elements, spacing, arr.beta, element, samples)


def endfire_array(num_elements: int = 8, spacing: float = 0.25,
                  element: ElementPattern | str = ElementPattern.ISOTROPIC, samples: int = 361) -> ArrayResult:
    arr = UniformLinearArray.endfire(num_elements, spacing)
    return analyze_array(num_elements, spacing, arr.beta, element, samples)
