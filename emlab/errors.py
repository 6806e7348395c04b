"""
Error taxonomy for the engine.

Three kinds of trouble can come out of a computation:
  - undefined-by-physics: the result has no value (critical angle when
    n₁ ≤ n₂). Reported as ``None`` in the result record, never raised.
  - singular input: division by zero or an acos argument pushed past ±1
    by round-off. Guarded in place (clamped), never raised.
  - invalid input: non-physical values (negative frequency, outer radius
    ≤ inner radius). Raised as :class:`InvalidInputError`.
"""

from __future__ import annotations

import math


class EngineError(Exception):
    """Base class for all engine errors."""


class InvalidInputError(EngineError, ValueError):
    """A parameter is outside its physical domain."""

    def __init__(self, name: str, value, reason: str):
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"invalid parameter '{name}' = {value!r}: {reason}")


class UnknownTopicError(EngineError, KeyError):
    """No topic is registered under the requested name."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "unknown topic"


# ─── Validation helpers ─────────────────────────────────────────────────────

def _check_finite(name: str, value: float) -> float:
    if not math.isfinite(value):
        raise InvalidInputError(name, value, "must be finite")
    return value


def require_positive(name: str, value: float) -> float:
    """Reject values ≤ 0 (and NaN/inf)."""
    _check_finite(name, value)
    if value <= 0:
        raise InvalidInputError(name, value, "must be > 0")
    return value


def require_non_negative(name: str, value: float) -> float:
    """Reject values < 0 (and NaN/inf)."""
    _check_finite(name, value)
    if value < 0:
        raise InvalidInputError(name, value, "must be >= 0")
    return value


def require_ordered(lower_name: str, lower: float, upper_name: str, upper: float) -> None:
    """Reject geometries where ``upper`` does not strictly exceed ``lower``."""
    if not upper > lower:
        raise InvalidInputError(upper_name, upper, f"must be > {lower_name} ({lower!r})")


def require_count(name: str, value: int) -> int:
    """Reject negative sample counts. Zero is allowed and yields empty output."""
    if int(value) != value or value < 0:
        raise InvalidInputError(name, value, "must be a non-negative integer")
    return int(value)


def clamp_unit(x: float) -> float:
    """Clamp an acos/asin argument into [-1, 1]."""
    return max(-1.0, min(1.0, x))
