"""
Link budget and radar range equations.

Provides:
  - Friis free-space link: received power (linear and dB), EIRP, power
    density, path loss, received power vs distance
  - Monostatic radar: noise floor k·T₀·B·F, received echo power, SNR,
    maximum detection range, echo power and SNR vs range
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from ..errors import require_ordered, require_positive
from ..results import Curve
from ..utils.constants import BOLTZMANN, T_0, wavelength as wavelength_of
from ..utils.sampling import linspace
from ..utils.units import db_to_linear, linear_to_db, watts_to_dbm


# ─── Friis ──────────────────────────────────────────────────────────────────

def free_space_path_loss(distance: float, freq_hz: float) -> float:
    """Linear FSPL (4πR/λ)²."""
    require_positive("distance", distance)
    return (4.0 * math.pi * distance / wavelength_of(freq_hz)) ** 2


def friis_received_power(p_tx: float, g_tx: float, g_rx: float, freq_hz: float, distance: float) -> float:
    """P_r = P_t·G_t·G_r·(λ/4πR)² with linear gains."""
    require_positive("p_tx", p_tx)
    return p_tx * g_tx * g_rx / free_space_path_loss(distance, freq_hz)


@dataclass
class FriisResult:
    p_tx: float
    g_tx: float               # linear
    g_rx: float
    frequency: float
    distance: float
    wavelength: float
    path_loss: float
    path_loss_db: float
    received_power: float
    received_power_dbw: float
    received_power_dbm: float
    eirp: float
    eirp_dbw: float
    power_density: float
    range_curve: Curve        # distance_m → received_power_dbm


def friis(p_tx: float = 1.0, g_tx_dbi: float = 10.0, g_rx_dbi: float = 10.0, freq_hz: float = 2.4e9,
          distance: float = 1000.0, r_min: float | None = None, r_max: float | None = None,
          samples: int = 200) -> FriisResult:
    """
    Free-space link budget with gains given in dBi.

    The range curve spans [distance/10, 10·distance] unless bounds are given.
    """
    require_positive("p_tx", p_tx)
    require_positive("distance", distance)
    g_tx, g_rx = db_to_linear(g_tx_dbi), db_to_linear(g_rx_dbi)
    lam = wavelength_of(freq_hz)
    loss = free_space_path_loss(distance, freq_hz)
    p_rx = p_tx * g_tx * g_rx / loss
    eirp = p_tx * g_tx

    r_min = distance / 10.0 if r_min is None else r_min
    r_max = distance * 10.0 if r_max is None else r_max
    require_positive("r_min", r_min)
    require_ordered("r_min", r_min, "r_max", r_max)
    r = linspace(r_min, r_max, samples)
    pr_curve = p_tx * g_tx * g_rx * (lam / (4.0 * math.pi * r)) ** 2

    return FriisResult(
        p_tx=p_tx,
        g_tx=g_tx,
        g_rx=g_rx,
        frequency=freq_hz,
        distance=distance,
        wavelength=lam,
        path_loss=loss,
        path_loss_db=linear_to_db(loss),
        received_power=p_rx,
        received_power_dbw=linear_to_db(p_rx),
        received_power_dbm=watts_to_dbm(p_rx),
        eirp=eirp,
        eirp_dbw=linear_to_db(eirp),
        power_density=eirp / (4.0 * math.pi * distance**2),
        range_curve=Curve("distance_m", r, {"received_power_dbm": 10.0 * np.log10(pr_curve) + 30.0}),
    )


# ─── Radar ──────────────────────────────────────────────────────────────────

def noise_floor(bandwidth: float, noise_figure_db: float = 0.0) -> float:
    """k·T₀·B·F [W]."""
    require_positive("bandwidth", bandwidth)
    return BOLTZMANN * T_0 * bandwidth * db_to_linear(noise_figure_db)


@dataclass
class RadarResult:
    p_tx: float
    g_tx: float
    g_rx: float
    frequency: float
    wavelength: float
    rcs: float
    noise_power: float
    noise_power_dbm: float
    snr_required_db: float
    max_range: float
    range_curve: Curve        # range_m → received_power_dbm, snr_db


def radar(p_tx: float = 1000.0, g_tx_dbi: float = 30.0, g_rx_dbi: float = 30.0, freq_hz: float = 10e9,
          rcs: float = 1.0, r_min: float = 1e3, r_max: float = 1e5, noise_figure_db: float = 3.0,
          bandwidth: float = 1e6, losses_db: float = 6.0, snr_required_db: float = 13.0,
          samples: int = 300) -> RadarResult:
    """
    Monostatic radar range equation.

    P_r = P_t·G_t·G_r·λ²·σ / ((4π)³·L·R⁴) and
    R_max = (P_t·G_t·G_r·λ²·σ / ((4π)³·L·SNR_min·N))^{1/4}.
    """
    require_positive("p_tx", p_tx)
    require_positive("rcs", rcs)
    require_positive("r_min", r_min)
    require_ordered("r_min", r_min, "r_max", r_max)
    lam = wavelength_of(freq_hz)
    g_tx, g_rx = db_to_linear(g_tx_dbi), db_to_linear(g_rx_dbi)
    noise = noise_floor(bandwidth, noise_figure_db)

    numerator = p_tx * g_tx * g_rx * lam**2 * rcs
    denominator = (4.0 * math.pi) ** 3 * db_to_linear(losses_db)
    max_range = (numerator / (denominator * db_to_linear(snr_required_db) * noise)) ** 0.25

    r = linspace(r_min, r_max, samples)
    pr = numerator / (denominator * r**4)

    return RadarResult(
        p_tx=p_tx,
        g_tx=g_tx,
        g_rx=g_rx,
        frequency=freq_hz,
        wavelength=lam,
        rcs=rcs,
        noise_power=noise,
        noise_power_dbm=watts_to_dbm(noise),
        snr_required_db=snr_required_db,
        max_range=max_range,
        range_curve=Curve("range_m", r, {
            "received_power_dbm": 10.0 * np.log10(pr) + 30.0,
            "snr_db": 10.0 * np.log10(pr / noise),
        }),
    )
