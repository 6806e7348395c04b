"""
Preset planar vector fields with closed-form divergence and curl.

Every preset lies in the xy-plane, so ∇×F has only a z component. The
dipole and source/sink presets are 2-D line-source fields (∝ r̂/r), which
are divergence-free away from the sources in the plane. Singular points
return a zero vector.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np

from ..errors import InvalidInputError
from ..results import FieldGrid
from ..utils.coordinates import Vector3
from ..utils.sampling import grid


@dataclass(frozen=True)
class VectorPreset:
    name: str
    description: str
    field: Callable[[float, float, float], Vector3]
    divergence: Callable[[float, float, float], float]
    curl_z: Callable[[float, float, float], float]
    divergence_label: str
    curl_label: str


def _line_source(x: float, y: float, x0: float, strength: float) -> tuple[float, float]:
    dx, dy = x - x0, y
    r2 = dx * dx + dy * dy
    if r2 < 1e-30:
        return (0.0, 0.0)
    return (strength * dx / r2, strength * dy / r2)


def _vortex(x, y, z):
    r2 = x * x + y * y
    if r2 < 1e-30:
        return Vector3()
    return Vector3(-y / r2, x / r2, 0.0)


def _dipole(x, y, z):
    ux, uy = _line_source(x, y, 0.5, 1.0)
    vx, vy = _line_source(x, y, -0.5, -1.0)
    return Vector3(ux + vx, uy + vy, 0.0)


def _source_sink(x, y, z):
    # Rankine oval: uniform stream plus a source at x = −1 and a sink at x = +1
    ux, uy = _line_source(x, y, -1.0, 1.0)
    vx, vy = _line_source(x, y, 1.0, -1.0)
    return Vector3(1.0 + ux + vx, uy + vy, 0.0)


def _zero(x, y, z):
    return 0.0


VECTOR_PRESETS: dict[str, VectorPreset] = {p.name: p for p in [
    VectorPreset("radial", "F = x x̂ + y ŷ, outward flow",
                 lambda x, y, z: Vector3(x, y, 0.0),
                 lambda x, y, z: 2.0, _zero,
                 "> 0 (source)", "= 0 (irrotational)"),
    VectorPreset("vortex", "F = φ̂/r, circular flow", _vortex, _zero, _zero,
                 "= 0 (incompressible)", "≠ 0 at origin"),
    VectorPreset("dipole", "line source at (+0.5, 0), line sink at (−0.5, 0)", _dipole, _zero, _zero,
                 "> 0 near +, < 0 near -", "= 0 (electrostatic)"),
    VectorPreset("uniform_shear", "F = y x̂, layered flow",
                 lambda x, y, z: Vector3(y, 0.0, 0.0),
                 _zero, lambda x, y, z: -1.0,
                 "= 0", "= -1 (uniform)"),
    VectorPreset("source_sink", "uniform stream past a source/sink pair", _source_sink, _zero, _zero,
                 "> 0 at source, < 0 at sink", "= 0 (irrotational)"),
    VectorPreset("saddle", "F = x x̂ − y ŷ, stagnation-point flow",
                 lambda x, y, z: Vector3(x, -y, 0.0),
                 _zero, _zero,
                 "= 0", "= 0 (irrotational)"),
]}


def get_vector_preset(name: str) -> VectorPreset:
    try:
        return VECTOR_PRESETS[name]
    except KeyError:
        raise InvalidInputError("preset", name, f"available: {sorted(VECTOR_PRESETS)}") from None


def sample_vector_field(preset: str, x_range: tuple[float, float] = (-3.0, 3.0),
                        y_range: tuple[float, float] = (-3.0, 3.0), samples: int = 15) -> FieldGrid:
    """Components, magnitude, exact divergence and z-curl on a samples × samples grid."""
    p = get_vector_preset(preset)
    x, y, X, Y = grid(x_range, y_range, samples)
    shape = X.shape
    fx, fy = np.empty(shape), np.empty(shape)
    div, curl_z = np.empty(shape), np.empty(shape)
    for idx in np.ndindex(shape):
        xi, yi = float(X[idx]), float(Y[idx])
        v = p.field(xi, yi, 0.0)
        fx[idx], fy[idx] = v.x, v.y
        div[idx] = p.divergence(xi, yi, 0.0)
        curl_z[idx] = p.curl_z(xi, yi, 0.0)
    return FieldGrid(x, y, {
        "fx": fx,
        "fy": fy,
        "magnitude": np.hypot(fx, fy),
        "divergence": div,
        "curl_z": curl_z,
    })
