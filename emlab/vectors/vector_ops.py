"""
Vector algebra results for the vector-operations topic.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..utils.coordinates import Vector3


@dataclass
class VectorAddResult:
    a: Vector3
    b: Vector3
    result: Vector3
    magnitude: float
    angle_between: float
    parallelogram: tuple[Vector3, Vector3, Vector3, Vector3]


def vector_add(a: Vector3, b: Vector3) -> VectorAddResult:
    a, b = Vector3.of(a), Vector3.of(b)
    result = a + b
    return VectorAddResult(
        a=a,
        b=b,
        result=result,
        magnitude=result.magnitude,
        angle_between=a.angle_to(b),
        parallelogram=(Vector3(), a, result, b),
    )


def vector_sub(a: Vector3, b: Vector3) -> VectorAddResult:
    """a − b, reported with the same record as addition."""
    a, b = Vector3.of(a), Vector3.of(b)
    result = a - b
    return VectorAddResult(
        a=a,
        b=b,
        result=result,
        magnitude=result.magnitude,
        angle_between=a.angle_to(b),
        parallelogram=(Vector3(), a, result, -b),
    )


@dataclass
class CrossProductResult:
    a: Vector3
    b: Vector3
    result: Vector3
    magnitude: float
    parallelogram_area: float
    dot: float


def cross_product(a: Vector3, b: Vector3) -> CrossProductResult:
    a, b = Vector3.of(a), Vector3.of(b)
    result = a.cross(b)
    mag = result.magnitude
    return CrossProductResult(a=a, b=b, result=result, magnitude=mag,
                              parallelogram_area=mag, dot=a.dot(b))


@dataclass
class ProjectionResult:
    parallel: Vector3
    perpendicular: Vector3
    scalar_projection: float
    angle: float


def project(v: Vector3, reference: Vector3) -> ProjectionResult:
    """Split ``v`` along and across ``reference``. A zero reference leaves ``v`` all perpendicular."""
    v, reference = Vector3.of(v), Vector3.of(reference)
    if reference.magnitude == 0:
        return ProjectionResult(Vector3(), v, 0.0, 0.0)
    unit = reference.normalized()
    scalar = v.dot(unit)
    parallel = unit * scalar
    return ProjectionResult(parallel, v - parallel, scalar, v.angle_to(reference))


def triple_product(a: Vector3, b: Vector3, c: Vector3) -> float:
    """a · (b × c), the signed parallelepiped volume."""
    a, b, c = Vector3.of(a), Vector3.of(b), Vector3.of(c)
    return a.dot(b.cross(c))


def angle_deg(a: Vector3, b: Vector3) -> float:
    a, b = Vector3.of(a), Vector3.of(b)
    return math.degrees(a.angle_to(b))
