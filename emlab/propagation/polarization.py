"""
Polarization state of a plane wave E = x̂ Aₓcos(ωt) + ŷ Aᵧcos(ωt + δ).

Provides:
  - Stokes parameters and the Poincaré-sphere point
  - Linear / circular / elliptical classification and rotation sense
  - Polarization-ellipse semi-axes, axial ratio, tilt angle and trace
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

import numpy as np

from ..errors import InvalidInputError, require_non_negative
from ..results import Curve
from ..utils.sampling import linspace
from ..utils.units import normalize_angle

_EPS = 1e-10


class PolarizationType(str, Enum):
    LINEAR = "linear"
    CIRCULAR = "circular"
    ELLIPTICAL = "elliptical"


class RotationSense(str, Enum):
    LEFT = "left-hand"
    RIGHT = "right-hand"
    NONE = "none"


@dataclass
class PolarizationResult:
    ax: float
    ay: float
    delta: float
    stokes: tuple[float, float, float, float]
    poincare: tuple[float, float, float]
    polarization_type: PolarizationType
    rotation_sense: RotationSense
    semi_major: float
    semi_minor: float
    axial_ratio: float | None   # absent for linear polarization (b = 0)
    tilt_angle: float           # radians; 0 for circular polarization
    ellipse: Curve

    @property
    def tilt_angle_deg(self) -> float:
        return math.degrees(self.tilt_angle)


# ─── Presets ────────────────────────────────────────────────────────────────

PRESETS: dict[str, tuple[float, float, float]] = {
    "linear_x": (1.0, 0.0, 0.0),
    "linear_y": (0.0, 1.0, 0.0),
    "linear_45": (math.sqrt(0.5), math.sqrt(0.5), 0.0),
    "rhcp": (1.0, 1.0, -math.pi / 2.0),
    "lhcp": (1.0, 1.0, math.pi / 2.0),
    "elliptical": (1.0, 0.5, math.pi / 4.0),
}


def linear_at_angle(amplitude: float, angle: float) -> tuple[float, float, float]:
    """(Aₓ, Aᵧ, δ) for a linear wave at ``angle`` from x. Aₓ, Aᵧ are kept ≥ 0."""
    ax, ay = amplitude * math.cos(angle), amplitude * math.sin(angle)
    delta = 0.0 if ax * ay >= 0 else math.pi
    return (abs(ax), abs(ay), delta)


# ─── Analysis ───────────────────────────────────────────────────────────────

def stokes_parameters(ax: float, ay: float, delta: float) -> tuple[float, float, float, float]:
    """S₀ = Aₓ² + Aᵧ², S₁ = Aₓ² − Aᵧ², S₂ = 2AₓAᵧcosδ, S₃ = 2AₓAᵧsinδ."""
    return (
        ax * ax + ay * ay,
        ax * ax - ay * ay,
        2.0 * ax * ay * math.cos(delta),
        2.0 * ax * ay * math.sin(delta),
    )


def classify(ax: float, ay: float, delta: float) -> PolarizationType:
    if abs(ax) < _EPS or abs(ay) < _EPS:
        return PolarizationType.LINEAR
    d = normalize_angle(delta)
    if abs(d) < _EPS or abs(abs(d) - math.pi) < _EPS:
        return PolarizationType.LINEAR
    if abs(ax - ay) < _EPS * max(ax, ay) and abs(abs(d) - math.pi / 2.0) < _EPS:
        return PolarizationType.CIRCULAR
    return PolarizationType.ELLIPTICAL


def semi_axes(ax: float, ay: float, delta: float) -> tuple[float, float]:
    """Ellipse semi-major and semi-minor axes."""
    ax2, ay2 = ax * ax, ay * ay
    total = ax2 + ay2
    disc = math.sqrt((ax2 - ay2) ** 2 + 4.0 * ax2 * ay2 * math.cos(delta) ** 2)
    return (math.sqrt((total + disc) / 2.0), math.sqrt(max(0.0, (total - disc) / 2.0)))


def tilt_angle(ax: float, ay: float, delta: float) -> float:
    """τ = ½·atan2(2AₓAᵧcosδ, Aₓ² − Aᵧ²); 0 when the ellipse is a circle."""
    num = 2.0 * ax * ay * math.cos(delta)
    den = ax * ax - ay * ay
    if abs(num) < _EPS and abs(den) < _EPS:
        return 0.0
    return 0.5 * math.atan2(num, den)


def analyze_polarization(ax: float, ay: float, delta: float, samples: int = 200) -> PolarizationResult:
    """Full description of the state (Aₓ, Aᵧ, δ); δ in radians."""
    require_non_negative("ax", ax)
    require_non_negative("ay", ay)
    ptype = classify(ax, ay, delta)
    if ptype is PolarizationType.LINEAR:
        sense = RotationSense.NONE
    else:
        sense = RotationSense.LEFT if math.sin(delta) > 0 else RotationSense.RIGHT

    s = stokes_parameters(ax, ay, delta)
    poincare = (0.0, 0.0, 0.0) if s[0] < 1e-15 else (s[1] / s[0], s[2] / s[0], s[3] / s[0])
    a, b = semi_axes(ax, ay, delta)
    ratio = None if b < _EPS * max(a, 1.0) else a / b

    t = linspace(0.0, 2.0 * math.pi, samples)
    return PolarizationResult(
        ax=ax,
        ay=ay,
        delta=delta,
        stokes=s,
        poincare=poincare,
        polarization_type=ptype,
        rotation_sense=sense,
        semi_major=a,
        semi_minor=b,
        axial_ratio=ratio,
        tilt_angle=0.0 if ptype is PolarizationType.CIRCULAR else tilt_angle(ax, ay, delta),
        ellipse=Curve("t", t, {"ex": ax * np.cos(t), "ey": ay * np.cos(t + delta)}),
    )


def analyze_preset(name: str, samples: int = 200) -> PolarizationResult:
    if name not in PRESETS:
        raise InvalidInputError("preset", name, f"available: {sorted(PRESETS)}")
    return analyze_polarization(*PRESETS[name], samples=samples)
