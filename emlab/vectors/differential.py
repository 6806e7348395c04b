"""
Central-difference differential operators on point functions.

Scalar fields are callables f(x, y, z) -> float; vector fields are
callables F(x, y, z) -> Vector3. Step size h defaults to the engine's
``gradient_step``.
"""

from __future__ import annotations

from typing import Callable

from ..config import EngineConfig, resolve
from ..utils.coordinates import Vector3

ScalarFn = Callable[[float, float, float], float]
VectorFn = Callable[[float, float, float], Vector3]


def _step(h: float | None, config: EngineConfig | None) -> float:
    return resolve(config).gradient_step if h is None else h


def gradient(f: ScalarFn, x: float, y: float, z: float = 0.0, h: float | None = None,
             config: EngineConfig | None = None) -> Vector3:
    """∇f ≈ (f(x + h·eᵢ) − f(x − h·eᵢ))/2h."""
    h = _step(h, config)
    return Vector3(
        (f(x + h, y, z) - f(x - h, y, z)) / (2.0 * h),
        (f(x, y + h, z) - f(x, y - h, z)) / (2.0 * h),
        (f(x, y, z + h) - f(x, y, z - h)) / (2.0 * h),
    )


def divergence(F: VectorFn, x: float, y: float, z: float = 0.0, h: float | None = None,
               config: EngineConfig | None = None) -> float:
    """∇·F by central differences."""
    h = _step(h, config)
    return (
        (F(x + h, y, z).x - F(x - h, y, z).x)
        + (F(x, y + h, z).y - F(x, y - h, z).y)
        + (F(x, y, z + h).z - F(x, y, z - h).z)
    ) / (2.0 * h)


def curl(F: VectorFn, x: float, y: float, z: float = 0.0, h: float | None = None,
         config: EngineConfig | None = None) -> Vector3:
    """∇×F by central differences."""
    h = _step(h, config)
    px, mx = F(x + h, y, z), F(x - h, y, z)
    py, my = F(x, y + h, z), F(x, y - h, z)
    pz, mz = F(x, y, z + h), F(x, y, z - h)
    d = 2.0 * h
    return Vector3(
        (py.z - my.z) / d - (pz.y - mz.y) / d,
        (pz.x - mz.x) / d - (px.z - mx.z) / d,
        (px.y - mx.y) / d - (py.x - my.x) / d,
    )


def laplacian(f: ScalarFn, x: float, y: float, z: float = 0.0, h: float = 1e-4) -> float:
    """∇²f by the three-point stencil. A larger step than the gradient keeps h² away from round-off."""
    c = 2.0 * f(x, y, z)
    return (
        f(x + h, y, z) + f(x - h, y, z)
        + f(x, y + h, z) + f(x, y - h, z)
        + f(x, y, z + h) + f(x, y, z - h)
        - 3.0 * c
    ) / (h * h)
