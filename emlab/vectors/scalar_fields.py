"""
Preset scalar fields on the xy-plane and their gradients.

Each preset carries its closed-form gradient so the numerical gradient
can be checked against it. Sampling returns the field, the numerical
gradient and the exact gradient on a regular grid.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

import numpy as np

from ..config import EngineConfig
from ..errors import InvalidInputError
from ..results import FieldGrid
from ..utils.coordinates import Vector3
from ..utils.sampling import grid
from .differential import gradient

# Dipole potential: +1 at (+D, 0), −1 at (−D, 0), softened by S to stay finite
_D = 0.5
_S = 0.1


@dataclass(frozen=True)
class ScalarPreset:
    name: str
    description: str
    value: Callable[[float, float, float], float]
    exact_gradient: Callable[[float, float, float], Vector3]


def _gaussian(x, y, z):
    return math.exp(-(x * x + y * y))


def _gaussian_grad(x, y, z):
    g = _gaussian(x, y, z)
    return Vector3(-2.0 * x * g, -2.0 * y * g, 0.0)


def _dipole(x, y, z):
    r1 = math.sqrt((x - _D) ** 2 + y * y + _S * _S)
    r2 = math.sqrt((x + _D) ** 2 + y * y + _S * _S)
    return 1.0 / r1 - 1.0 / r2


def _dipole_grad(x, y, z):
    r1 = math.sqrt((x - _D) ** 2 + y * y + _S * _S)
    r2 = math.sqrt((x + _D) ** 2 + y * y + _S * _S)
    return Vector3(
        -(x - _D) / r1**3 + (x + _D) / r2**3,
        -y / r1**3 + y / r2**3,
        0.0,
    )


def _ridge(x, y, z):
    return math.exp(-y * y)


def _ridge_grad(x, y, z):
    return Vector3(0.0, -2.0 * y * math.exp(-y * y), 0.0)


def _cone(x, y, z):
    return math.hypot(x, y)


def _cone_grad(x, y, z):
    r = math.hypot(x, y)
    # apex: gradient undefined, reported as zero
    if r == 0:
        return Vector3()
    return Vector3(x / r, y / r, 0.0)


SCALAR_PRESETS: dict[str, ScalarPreset] = {p.name: p for p in [
    ScalarPreset("gaussian", "f = exp(−(x² + y²))", _gaussian, _gaussian_grad),
    ScalarPreset("saddle", "f = x² − y²",
                 lambda x, y, z: x * x - y * y,
                 lambda x, y, z: Vector3(2.0 * x, -2.0 * y, 0.0)),
    ScalarPreset("dipole_potential", "f = 1/r₊ − 1/r₋ (softened)", _dipole, _dipole_grad),
    ScalarPreset("ridge", "f = exp(−y²)", _ridge, _ridge_grad),
    ScalarPreset("sine_product", "f = sin x · sin y",
                 lambda x, y, z: math.sin(x) * math.sin(y),
                 lambda x, y, z: Vector3(math.cos(x) * math.sin(y), math.sin(x) * math.cos(y), 0.0)),
    ScalarPreset("cone", "f = √(x² + y²)", _cone, _cone_grad),
]}


def get_scalar_preset(name: str) -> ScalarPreset:
    try:
        return SCALAR_PRESETS[name]
    except KeyError:
        raise InvalidInputError("preset", name, f"available: {sorted(SCALAR_PRESETS)}") from None


def sample_scalar_field(preset: str, x_range: tuple[float, float] = (-3.0, 3.0),
                        y_range: tuple[float, float] = (-3.0, 3.0), samples: int = 25,
                        config: EngineConfig | None = None) -> FieldGrid:
    """Field value plus numerical and exact gradient on a samples × samples grid."""
    p = get_scalar_preset(preset)
    x, y, X, Y = grid(x_range, y_range, samples)
    shape = X.shape
    f = np.empty(shape)
    gx, gy = np.empty(shape), np.empty(shape)
    ex, ey = np.empty(shape), np.empty(shape)
    for idx in np.ndindex(shape):
        xi, yi = float(X[idx]), float(Y[idx])
        f[idx] = p.value(xi, yi, 0.0)
        g = gradient(p.value, xi, yi, 0.0, config=config)
        gx[idx], gy[idx] = g.x, g.y
        e = p.exact_gradient(xi, yi, 0.0)
        ex[idx], ey[idx] = e.x, e.y
    return FieldGrid(x, y, {
        "f": f,
        "grad_x": gx,
        "grad_y": gy,
        "grad_x_exact": ex,
        "grad_y_exact": ey,
        "grad_mag": np.hypot(gx, gy),
    })
