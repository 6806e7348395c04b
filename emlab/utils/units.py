"""
Logarithmic, reflection and angle conversions.

Quantities are SI everywhere else; these helpers produce the dB figures
and wrapped angles that result records report next to linear values.
Logarithms of non-positive ratios map to −∞ rather than raising; the
reflection losses report None where they would be infinite.
"""

from __future__ import annotations

import math

from ..errors import InvalidInputError

_NEG_INF = -math.inf


def _log_db(ratio: float, scale: float) -> float:
    return scale * math.log10(ratio) if ratio > 0 else _NEG_INF


# ─── Decibels ───────────────────────────────────────────────────────────────

def db_to_linear(db: float) -> float:
    """Power ratio from dB."""
    return 10.0 ** (db / 10.0)


def linear_to_db(ratio: float) -> float:
    """10·log10 of a power ratio."""
    return _log_db(ratio, 10.0)


def mag_to_db(mag: float) -> float:
    """20·log10 of an amplitude ratio."""
    return _log_db(mag, 20.0)


def watts_to_dbm(watts: float) -> float:
    return _log_db(watts, 10.0) + 30.0


def dbm_to_watts(dbm: float) -> float:
    return db_to_linear(dbm - 30.0)


# ─── Reflection ─────────────────────────────────────────────────────────────

def gamma_mag_to_vswr(gamma_mag: float, epsilon: float = 1e-9) -> float:
    """
    (1 + |Γ|)/(1 − |Γ|) with |Γ| held at or below 1 − ε.

    A fully reflecting load therefore reports a large finite ratio.
    """
    g = min(abs(gamma_mag), 1.0 - epsilon)
    return (1.0 + g) / (1.0 - g)


def vswr_to_gamma_mag(vswr: float) -> float:
    if vswr < 1.0:
        raise InvalidInputError("vswr", vswr, "must be >= 1")
    return (vswr - 1.0) / (vswr + 1.0)


def gamma_mag_to_return_loss(gamma_mag: float) -> float | None:
    """RL = −20·log10|Γ|; None for a matched load."""
    if gamma_mag <= 0:
        return None
    return -mag_to_db(gamma_mag)


def gamma_mag_to_mismatch_loss(gamma_mag: float, epsilon: float = 1e-9) -> float | None:
    """ML = −10·log10(1 − |Γ|²); None once |Γ| is within ``epsilon`` of 1."""
    if gamma_mag >= 1.0 - epsilon:
        return None
    return -linear_to_db(1.0 - gamma_mag * gamma_mag)


# ─── Angles and rates ───────────────────────────────────────────────────────

def normalize_angle(angle: float) -> float:
    """Wrap radians into (−π, π]."""
    wrapped = math.fmod(angle, 2.0 * math.pi)
    if wrapped <= -math.pi:
        return wrapped + 2.0 * math.pi
    if wrapped > math.pi:
        return wrapped - 2.0 * math.pi
    return wrapped


def rpm_to_rad_per_s(rpm: float) -> float:
    return rpm * math.pi / 30.0
