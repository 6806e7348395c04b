"""
Smith chart mapping and geometry.

Provides:
  - z ↔ Γ bilinear mapping (normalized and absolute)
  - Constant-r / constant-x circle geometry
  - SWR circle and traces toward generator / load
"""

from __future__ import annotations

import cmath
import math
from dataclasses import dataclass

import numpy as np

from ..errors import InvalidInputError, require_positive
from ..results import Curve
from ..utils.sampling import linspace


@dataclass
class SmithPoint:
    """One load located on the chart."""
    z_norm: complex
    gamma: complex
    y_norm: complex | None

    @property
    def gamma_mag(self) -> float:
        return abs(self.gamma)

    @property
    def gamma_angle_deg(self) -> float:
        return math.degrees(cmath.phase(self.gamma))

    @property
    def admittance_gamma(self) -> complex:
        """Admittance point: Γ rotated by 180°."""
        return -self.gamma


@dataclass
class Circle:
    """Chart circle in the Γ plane. ``radius`` is None for a degenerate circle."""
    center: complex
    radius: float | None


# ─── Mapping ────────────────────────────────────────────────────────────────

def z_to_gamma(z_norm: complex) -> complex:
    """Γ = (z − 1)/(z + 1)."""
    z_norm = complex(z_norm)
    if z_norm == -1:
        raise InvalidInputError("z_norm", z_norm, "z = -1 maps to infinity")
    return (z_norm - 1) / (z_norm + 1)


def gamma_to_z(gamma: complex) -> complex | None:
    """z = (1 + Γ)/(1 − Γ); None at Γ = 1 (open circuit)."""
    gamma = complex(gamma)
    if abs(1 - gamma) < 1e-12:
        return None
    return (1 + gamma) / (1 - gamma)


def smith_point(z_load: complex, z0: float) -> SmithPoint:
    """Normalize Z_L by Z₀ and locate it on the chart."""
    require_positive("z0", z0)
    z_norm = complex(z_load) / z0
    return SmithPoint(
        z_norm=z_norm,
        gamma=z_to_gamma(z_norm),
        y_norm=None if z_norm == 0 else 1 / z_norm,
    )


# ─── Chart geometry ─────────────────────────────────────────────────────────

def constant_r_circle(r: float) -> Circle:
    """Circle of constant normalized resistance: centre r/(1+r), radius 1/(1+r)."""
    if r < 0:
        raise InvalidInputError("r", r, "normalized resistance must be >= 0")
    return Circle(center=complex(r / (1 + r), 0.0), radius=1.0 / (1 + r))


def constant_x_circle(x: float) -> Circle:
    """
    Circle of constant normalized reactance: centre (1, 1/x), radius 1/|x|.

    x = 0 is the real axis (a circle of infinite radius); it is reported
    with ``radius=None``.
    """
    if x == 0:
        return Circle(center=complex(1.0, 0.0), radius=None)
    return Circle(center=complex(1.0, 1.0 / x), radius=abs(1.0 / x))


def circle_points(circle: Circle, samples: int = 200, clip_to_unit: bool = True) -> Curve:
    """Sample a chart circle; points outside |Γ| ≤ 1 become NaN when clipping."""
    t = linspace(0.0, 2.0 * math.pi, samples)
    if circle.radius is None:
        x = linspace(-1.0, 1.0, samples)
        return Curve("t", t, {"re": x, "im": np.zeros_like(x)})
    re = circle.center.real + circle.radius * np.cos(t)
    im = circle.center.imag + circle.radius * np.sin(t)
    if clip_to_unit:
        outside = re**2 + im**2 > 1.0 + 1e-9
        re = np.where(outside, np.nan, re)
        im = np.where(outside, np.nan, im)
    return Curve("t", t, {"re": re, "im": im})


def swr_circle(gamma_mag: float, samples: int = 200) -> Curve:
    """Locus |Γ| = const over one full turn."""
    if not 0 <= gamma_mag <= 1:
        raise InvalidInputError("gamma_mag", gamma_mag, "must be in [0, 1]")
    t = linspace(0.0, 2.0 * math.pi, samples)
    return Curve("t", t, {"re": gamma_mag * np.cos(t), "im": gamma_mag * np.sin(t)})


def trace_toward_generator(z_load: complex, z0: float, max_length_wl: float = 0.5,
                           samples: int = 200, toward_load: bool = False) -> Curve:
    """
    Rotate Γ by e^{∓j2βl} for l from 0 to ``max_length_wl`` wavelengths.

    Moving toward the generator is clockwise (e^{−j2βl}); ``toward_load``
    reverses the direction. The series include Γ and the normalized
    impedance seen at each point; the trace is periodic with l/λ = 0.5.
    """
    point = smith_point(z_load, z0)
    length_wl = linspace(0.0, max_length_wl, samples)
    sign = 1.0 if toward_load else -1.0
    gamma = point.gamma * np.exp(sign * 4j * np.pi * length_wl)
    with np.errstate(divide="ignore", invalid="ignore"):
        z = (1 + gamma) / (1 - gamma)
    z = np.where(np.abs(1 - gamma) < 1e-12, np.nan + 0j, z)
    return Curve("length_wl", length_wl, {
        "gamma_re": np.real(gamma),
        "gamma_im": np.imag(gamma),
        "r": np.real(z),
        "x": np.imag(z),
    })


def impedance_at(z_load: complex, z0: float, length_wl: float,
                 toward_load: bool = False) -> complex | None:
    """Normalized impedance after moving ``length_wl`` along the line."""
    point = smith_point(z_load, z0)
    sign = 1.0 if toward_load else -1.0
    return gamma_to_z(point.gamma * cmath.exp(sign * 4j * math.pi * length_wl))
