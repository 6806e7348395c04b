"""
Step response of a resistively terminated line (bounce diagram).

A step of ``v_source`` is applied at t = 0 through R_s. The launched wave
V₁ = V·Z₀/(Z₀ + R_s) reflects alternately at the load (Γ_L) and the
source (Γ_s), every transit time t_d = length/v_p.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from ..errors import require_count, require_non_negative, require_positive
from ..results import Curve
from ..utils.constants import C_0
from ..utils.sampling import linspace


@dataclass
class BounceEvent:
    """One reflection: ``voltage`` is the amplitude of the wave leaving that end."""
    bounce: int
    time: float
    voltage: float
    at_load: bool


@dataclass
class TransientResult:
    gamma_source: float
    gamma_load: float
    transit_time: float
    v_initial: float
    steady_state_voltage: float
    bounces: list[BounceEvent] = field(default_factory=list)
    load_voltage: Curve | None = None


def _gamma(r: float, z0: float) -> float:
    if r == float("inf"):
        return 1.0
    return (r - z0) / (r + z0)


def bounce_diagram(v_source: float, r_source: float, r_load: float, z0: float = 50.0,
                   length: float = 1.0, phase_velocity: float = C_0, num_bounces: int = 10,
                   t_end: float | None = None, samples: int = 200) -> TransientResult:
    """
    Bounce list plus the load voltage V_L(t) sampled up to ``t_end``.

    ``r_load`` may be ``inf`` for an open line. ``t_end`` defaults to
    ``num_bounces`` transit times.
    """
    require_non_negative("r_source", r_source)
    if r_load != float("inf"):
        require_non_negative("r_load", r_load)
    require_positive("z0", z0)
    require_positive("length", length)
    require_positive("phase_velocity", phase_velocity)
    num_bounces = require_count("num_bounces", num_bounces)

    td = length / phase_velocity
    gamma_s = _gamma(r_source, z0)
    gamma_l = _gamma(r_load, z0)
    v1 = v_source * z0 / (z0 + r_source)
    if r_load == float("inf"):
        steady = v_source
    elif r_source + r_load == 0:
        steady = 0.0
    else:
        steady = v_source * r_load / (r_source + r_load)

    bounces = [BounceEvent(0, 0.0, v1, at_load=False)]
    v = v1
    for i in range(1, num_bounces + 1):
        at_load = i % 2 == 1
        v *= gamma_l if at_load else gamma_s
        bounces.append(BounceEvent(i, i * td, v, at_load))

    if t_end is None:
        t_end = max(num_bounces, 1) * td
    times = linspace(0.0, t_end, samples)
    return TransientResult(
        gamma_source=gamma_s,
        gamma_load=gamma_l,
        transit_time=td,
        v_initial=v1,
        steady_state_voltage=steady,
        bounces=bounces,
        load_voltage=Curve("t", times, {"v_load": _load_voltage(times, v1, gamma_s, gamma_l, td)}),
    )


def _load_voltage(times: np.ndarray, v1: float, gamma_s: float, gamma_l: float, td: float) -> np.ndarray:
    """V_L(t): each arrival at the load adds V_fwd(1 + Γ_L); arrivals are 2t_d apart."""
    out = np.zeros_like(times)
    if len(times) == 0:
        return out
    n_arrivals = int(max(0.0, (times[-1] - td)) // (2.0 * td)) + 1
    v_fwd = v1
    for n in range(n_arrivals):
        arrival = td * (2 * n + 1)
        out += np.where(times >= arrival, v_fwd * (1.0 + gamma_l), 0.0)
        v_fwd *= gamma_l * gamma_s
        if abs(v_fwd) <= 1e-15 * abs(v1):
            break
    return out


def voltage_at(x: float, t: float, v_source: float, r_source: float, r_load: float,
               z0: float = 50.0, length: float = 1.0, phase_velocity: float = C_0,
               max_bounces: int = 50) -> float:
    """Line voltage at position ``x`` (from the source) and time ``t``."""
    require_non_negative("x", x)
    td = length / phase_velocity
    gamma_s = _gamma(r_source, z0)
    gamma_l = _gamma(r_load, z0)
    t_x = x / phase_velocity
    t_back = (length - x) / phase_velocity
    amp = v_source * z0 / (z0 + r_source)
    total = 0.0
    for n in range(max_bounces):
        # forward wave n leaves the source at 2n·t_d
        if t >= 2 * n * td + t_x:
            total += amp
        amp *= gamma_l
        if t >= (2 * n + 1) * td + t_back:
            total += amp
        amp *= gamma_s
        if amp == 0:
            break
    return total
