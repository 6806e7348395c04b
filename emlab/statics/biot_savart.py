"""
Magnetostatic fields of current distributions.

Provides:
  - Biot–Savart superposition over straight current segments
  - Infinite wire, circular loop (on-axis closed form, off-axis via
    complete elliptic integrals), Helmholtz pair
  - Coaxial cable B(r) across its four Ampère's-law regions
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np
from scipy import special

from ..config import EngineConfig, resolve
from ..errors import InvalidInputError, require_count, require_non_negative, require_ordered, require_positive
from ..results import Curve, FieldGrid
from ..utils.constants import MU_0
from ..utils.coordinates import Vector3
from ..utils.sampling import grid, linspace


# ─── Segments ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class CurrentSegment:
    start: Vector3
    end: Vector3
    current: float

    @property
    def dl(self) -> Vector3:
        return self.end - self.start

    @property
    def midpoint(self) -> Vector3:
        return (self.start + self.end) * 0.5


def segment_field(segment: CurrentSegment, point: Vector3) -> Vector3:
    """dB = μ₀I dl × r /(4π|r|³), with r measured from the segment midpoint."""
    r = point - segment.midpoint
    r_mag = r.magnitude
    if r_mag < 1e-15:
        return Vector3()
    return segment.dl.cross(r) * (MU_0 * segment.current / (4.0 * math.pi * r_mag**3))


def total_field(segments: Sequence[CurrentSegment], point: Vector3) -> Vector3:
    total = Vector3()
    for seg in segments:
        total = total + segment_field(seg, point)
    return total


def straight_wire_segments(current: float, half_length: float, num_segments: int) -> list[CurrentSegment]:
    """A wire along z from −half_length to +half_length."""
    require_positive("half_length", half_length)
    num_segments = require_count("num_segments", num_segments)
    if num_segments == 0:
        return []
    dz = 2.0 * half_length / num_segments
    return [
        CurrentSegment(Vector3(0, 0, -half_length + i * dz), Vector3(0, 0, -half_length + (i + 1) * dz), current)
        for i in range(num_segments)
    ]


def loop_segments(radius: float, current: float, num_segments: int = 64, center_z: float = 0.0) -> list[CurrentSegment]:
    """Polygonal approximation of a loop in the z = center_z plane."""
    require_positive("radius", radius)
    if num_segments < 3:
        raise InvalidInputError("num_segments", num_segments, "a loop needs at least 3 segments")
    dphi = 2.0 * math.pi / num_segments
    return [
        CurrentSegment(
            Vector3(radius * math.cos(i * dphi), radius * math.sin(i * dphi), center_z),
            Vector3(radius * math.cos((i + 1) * dphi), radius * math.sin((i + 1) * dphi), center_z),
            current,
        )
        for i in range(num_segments)
    ]


def sample_segments_field(segments: Sequence[CurrentSegment], x_range: tuple[float, float],
                          y_range: tuple[float, float], samples: int = 25, z: float = 0.0) -> FieldGrid:
    """Bx, By, Bz and |B| in a z = const plane."""
    x, y, X, Y = grid(x_range, y_range, samples)
    bx, by, bz = np.empty(X.shape), np.empty(X.shape), np.empty(X.shape)
    for idx in np.ndindex(X.shape):
        b = total_field(segments, Vector3(float(X[idx]), float(Y[idx]), z))
        bx[idx], by[idx], bz[idx] = b.x, b.y, b.z
    return FieldGrid(x, y, {"bx": bx, "by": by, "bz": bz, "b_mag": np.sqrt(bx**2 + by**2 + bz**2)})


# ─── Infinite wire ──────────────────────────────────────────────────────────

def infinite_wire_field(current: float, r: float) -> float:
    """B = μ₀I/(2πr)."""
    require_positive("r", r)
    return MU_0 * current / (2.0 * math.pi * r)


@dataclass
class WireResult:
    current: float
    distance: float
    b: float
    h: float
    profile: Curve
    field: FieldGrid | None = None


def infinite_wire(current: float = 10.0, distance: float = 0.1, r_max: float | None = None,
                  samples: int = 200, grid_samples: int = 0) -> WireResult:
    """B at ``distance`` plus B(r) from r_max/samples out to r_max, and optionally the xy-plane field."""
    require_positive("distance", distance)
    if r_max is None:
        r_max = 5.0 * distance
    require_positive("r_max", r_max)
    r = linspace(r_max / max(samples, 1), r_max, samples)
    b = infinite_wire_field(current, distance)

    field = None
    if grid_samples:
        x, y, X, Y = grid((-r_max, r_max), (-r_max, r_max), grid_samples)
        r2 = X**2 + Y**2
        with np.errstate(divide="ignore", invalid="ignore"):
            k = np.where(r2 > 0, MU_0 * current / (2.0 * math.pi * r2), 0.0)
        field = FieldGrid(x, y, {"bx": -k * Y, "by": k * X, "b_mag": np.hypot(k * X, k * Y)})

    return WireResult(
        current=current,
        distance=distance,
        b=b,
        h=b / MU_0,
        profile=Curve("r_m", r, {"b": MU_0 * current / (2.0 * math.pi * r)}),
        field=field,
    )


# ─── Circular loop ──────────────────────────────────────────────────────────

def loop_axis_field(radius: float, current: float, z: float, center_z: float = 0.0) -> float:
    """B_z = μ₀Ia²/(2(a² + z²)^{3/2}) on the loop axis."""
    require_positive("radius", radius)
    dz = z - center_z
    return MU_0 * current * radius**2 / (2.0 * (radius**2 + dz**2) ** 1.5)


def loop_field(radius: float, current: float, rho: float, z: float) -> tuple[float, float]:
    """
    (B_ρ, B_z) anywhere around a loop centred on the origin in the xy-plane.

    Uses K(m) and E(m) with parameter m = 4aρ/((a + ρ)² + z²).
    """
    require_positive("radius", radius)
    require_non_negative("rho", rho)
    a = radius
    near = (a - rho) ** 2 + z * z
    if near < 1e-24:
        raise InvalidInputError("(rho, z)", (rho, z), "point lies on the loop conductor")
    far = (a + rho) ** 2 + z * z
    m = 4.0 * a * rho / far
    K, E = special.ellipk(m), special.ellipe(m)
    c = MU_0 * current / (2.0 * math.pi * math.sqrt(far))
    bz = c * (K + (a * a - rho * rho - z * z) / near * E)
    if rho == 0:
        return (0.0, float(bz))
    b_rho = c * z / rho * (-K + (a * a + rho * rho + z * z) / near * E)
    return (float(b_rho), float(bz))


@dataclass
class LoopResult:
    radius: float
    current: float
    turns: int
    b_center: float
    magnetic_moment: float
    axis_profile: Curve


def current_loop(radius: float = 0.05, current: float = 1.0, turns: int = 1, z_max: float | None = None,
                 samples: int = 200) -> LoopResult:
    """Centre field, dipole moment NIπa² and the on-axis profile."""
    require_positive("radius", radius)
    turns = require_count("turns", turns)
    if z_max is None:
        z_max = 3.0 * radius
    z = linspace(-z_max, z_max, samples)
    ni = turns * current
    return LoopResult(
        radius=radius,
        current=current,
        turns=turns,
        b_center=loop_axis_field(radius, ni, 0.0),
        magnetic_moment=ni * math.pi * radius**2,
        axis_profile=Curve("z_m", z, {"bz": MU_0 * ni * radius**2 / (2.0 * (radius**2 + z**2) ** 1.5)}),
    )


# ─── Helmholtz pair ─────────────────────────────────────────────────────────

@dataclass
class HelmholtzResult:
    radius: float
    separation: float
    turns: int
    current: float
    b_center: float
    uniformity: float      # max |B − B_c|/B_c inside the central window
    axis_profile: Curve


def helmholtz(radius: float = 0.1, current: float = 1.0, turns: int = 1, separation_ratio: float = 1.0,
              z_span: float | None = None, samples: int = 201,
              config: EngineConfig | None = None) -> HelmholtzResult:
    """
    Two coaxial N-turn loops at z = ±d/2 with d = separation_ratio·R.

    Uniformity is measured over the samples within ± window_fraction·N
    indices of the centre sample of the on-axis profile.
    """
    cfg = resolve(config)
    require_positive("radius", radius)
    require_positive("separation_ratio", separation_ratio)
    turns = require_count("turns", turns)
    sep = separation_ratio * radius
    if z_span is None:
        z_span = 2.0 * radius
    require_positive("z_span", z_span)
    ni = turns * current

    def axis(zv):
        return (MU_0 * ni * radius**2 / (2.0 * (radius**2 + (zv - sep / 2.0) ** 2) ** 1.5)
                + MU_0 * ni * radius**2 / (2.0 * (radius**2 + (zv + sep / 2.0) ** 2) ** 1.5))

    z = linspace(-z_span / 2.0, z_span / 2.0, samples)
    b = axis(z)
    b_center = float(axis(0.0))

    uniformity = 0.0
    n = len(z)
    if n and b_center != 0:
        mid = n // 2
        half = max(1, int(round(cfg.helmholtz_window_fraction * n)))
        window = b[max(0, mid - half):min(n, mid + half + 1)]
        uniformity = float(np.max(np.abs(window - b_center)) / abs(b_center))

    return HelmholtzResult(
        radius=radius,
        separation=sep,
        turns=turns,
        current=current,
        b_center=b_center,
        uniformity=uniformity,
        axis_profile=Curve("z_m", z, {"bz": b}),
    )


# ─── Coaxial cable ──────────────────────────────────────────────────────────

def coax_field(current: float, a: float, b: float, c: float, r: float) -> float:
    """
    B(r) for inner conductor radius a and outer conductor b..c, both
    carrying ``current`` in opposite directions.
    """
    require_non_negative("r", r)
    if r <= a:
        return MU_0 * current * r / (2.0 * math.pi * a * a)
    if r <= b:
        return MU_0 * current / (2.0 * math.pi * r)
    if r <= c:
        enclosed = current * (1.0 - (r * r - b * b) / (c * c - b * b))
        return MU_0 * enclosed / (2.0 * math.pi * r)
    return 0.0


@dataclass
class CoaxFieldResult:
    inner_radius: float
    shield_inner_radius: float
    shield_outer_radius: float
    current: float
    b_max: float
    inductance_per_m: float
    profile: Curve


def coax_profile(current: float = 1.0, a: float = 1e-3, b: float = 3.5e-3, c: float = 4e-3,
                 r_max: float | None = None, samples: int = 200) -> CoaxFieldResult:
    """B(r) across all four regions from the axis to ``r_max`` (default 1.5c)."""
    require_positive("a", a)
    require_ordered("a", a, "b", b)
    require_ordered("b", b, "c", c)
    if r_max is None:
        r_max = 1.5 * c
    r = linspace(0.0, r_max, samples)
    bvals = np.array([coax_field(current, a, b, c, float(ri)) for ri in r])
    return CoaxFieldResult(
        inner_radius=a,
        shield_inner_radius=b,
        shield_outer_radius=c,
        current=current,
        b_max=MU_0 * abs(current) / (2.0 * math.pi * a),
        inductance_per_m=MU_0 * math.log(b / a) / (2.0 * math.pi),
        profile=Curve("r_m", r, {"b": bvals}),
    )
