"""
Electrostatic fields of discrete point charges.

Provides:
  - Coulomb superposition for E and V at a point
  - Grid sampling of |E|, Ex, Ey and V in a z = const plane
  - Field-line tracing from a chosen source charge
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, Sequence

import numpy as np

from ..config import EngineConfig, resolve
from ..errors import InvalidInputError, require_count, require_positive
from ..results import FieldGrid
from ..utils.constants import EPS_0
from ..utils.coordinates import Vector3
from ..utils.sampling import grid

logger = logging.getLogger(__name__)

_R2_MIN = 1e-30


@dataclass(frozen=True)
class PointCharge:
    x: float
    y: float
    z: float = 0.0
    q: float = 1e-9

    @property
    def position(self) -> Vector3:
        return Vector3(self.x, self.y, self.z)


def as_charges(charges: Iterable) -> list[PointCharge]:
    """Accept PointCharge objects, (x, y, q) or (x, y, z, q) tuples, or dicts."""
    out = []
    for c in charges:
        if isinstance(c, PointCharge):
            out.append(c)
        elif isinstance(c, dict):
            out.append(PointCharge(c.get("x", 0.0), c.get("y", 0.0), c.get("z", 0.0), c["q"]))
        elif len(c) == 3:
            out.append(PointCharge(c[0], c[1], 0.0, c[2]))
        elif len(c) == 4:
            out.append(PointCharge(*c))
        else:
            raise InvalidInputError("charge", c, "expected (x, y, q) or (x, y, z, q)")
    return out


def electric_field(charges: Sequence[PointCharge], point: Vector3, er: float = 1.0) -> Vector3:
    """E at ``point``; a charge sitting on the point is skipped."""
    k = 1.0 / (4.0 * math.pi * EPS_0 * er)
    ex = ey = ez = 0.0
    for c in charges:
        dx, dy, dz = point.x - c.x, point.y - c.y, point.z - c.z
        r2 = dx * dx + dy * dy + dz * dz
        if r2 < _R2_MIN:
            continue
        f = k * c.q / (r2 * math.sqrt(r2))
        ex += f * dx
        ey += f * dy
        ez += f * dz
    return Vector3(ex, ey, ez)


def electric_potential(charges: Sequence[PointCharge], point: Vector3, er: float = 1.0) -> float:
    """V at ``point`` relative to infinity."""
    k = 1.0 / (4.0 * math.pi * EPS_0 * er)
    v = 0.0
    for c in charges:
        r = (point - c.position).magnitude
        if r * r < _R2_MIN:
            continue
        v += k * c.q / r
    return v


def sample_field(charges: Iterable, x_range: tuple[float, float] = (-2.0, 2.0),
                 y_range: tuple[float, float] = (-2.0, 2.0), samples: int = 30,
                 z: float = 0.0, er: float = 1.0) -> FieldGrid:
    """Ex, Ey, |E| and V on a samples × samples grid."""
    require_positive("epsilon_r", er)
    charges = as_charges(charges)
    x, y, X, Y = grid(x_range, y_range, samples)
    shape = X.shape
    ex, ey, v = np.empty(shape), np.empty(shape), np.empty(shape)
    for idx in np.ndindex(shape):
        p = Vector3(float(X[idx]), float(Y[idx]), z)
        e = electric_field(charges, p, er)
        ex[idx], ey[idx] = e.x, e.y
        v[idx] = electric_potential(charges, p, er)
    return FieldGrid(x, y, {"ex": ex, "ey": ey, "e_mag": np.hypot(ex, ey), "potential": v})


# ─── Field lines ────────────────────────────────────────────────────────────

@dataclass
class FieldLine:
    points: list[tuple[float, float]] = field(default_factory=list)
    termination: str = "steps"


def trace_field_lines(charges: Iterable, source_index: int = 0, num_lines: int = 12,
                      bounds: tuple[float, float, float, float] | None = None,
                      step: float | None = None, max_steps: int | None = None,
                      er: float = 1.0, config: EngineConfig | None = None) -> list[FieldLine]:
    """
    Integrate the unit field direction from seeds around one charge.

    Seeds sit 0.01 m from the source at angles 2πi/N. Lines run along E for
    a positive source and against it for a negative one, and stop on a
    vanishing field, within half a step of another charge, outside
    ``bounds`` = (xmin, xmax, ymin, ymax), or after ``max_steps``.
    """
    cfg = resolve(config)
    charges = as_charges(charges)
    if not 0 <= source_index < len(charges):
        raise InvalidInputError("source_index", source_index, f"must index one of {len(charges)} charges")
    num_lines = require_count("num_lines", num_lines)
    step = cfg.field_line_step if step is None else require_positive("step", step)
    max_steps = cfg.field_line_steps if max_steps is None else require_count("max_steps", max_steps)

    src = charges[source_index]
    sign = 1.0 if src.q > 0 else -1.0
    others = [c for i, c in enumerate(charges) if i != source_index]
    lines = []
    for i in range(num_lines):
        angle = 2.0 * math.pi * i / num_lines
        pos = Vector3(src.x + 0.01 * math.cos(angle), src.y + 0.01 * math.sin(angle), src.z)
        line = FieldLine(points=[(pos.x, pos.y)])
        for _ in range(max_steps):
            e = electric_field(charges, pos, er)
            mag = e.magnitude
            if mag < 1e-20:
                line.termination = "weak field"
                break
            pos = pos + e * (sign * step / mag)
            line.points.append((pos.x, pos.y))
            if any((pos - c.position).magnitude < 0.5 * step for c in others):
                line.termination = "charge"
                break
            if bounds is not None and not (bounds[0] <= pos.x <= bounds[1] and bounds[2] <= pos.y <= bounds[3]):
                line.termination = "boundary"
                break
        logger.debug("field line %d from charge %d ended (%s) after %d points",
                     i, source_index, line.termination, len(line.points))
        lines.append(line)
    return lines
