"""
Lumped-circuit transients and resonance.

Provides:
  - RC and RL step responses (charge and discharge)
  - Series / parallel RLC resonance: f₀, Q, bandwidth, damping class
  - RLC frequency-response curve (normalized magnitude and phase)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

import numpy as np

from ..errors import InvalidInputError, require_positive
from ..results import Curve
from ..utils.sampling import linspace, logspace


class StepMode(str, Enum):
    CHARGE = "charge"
    DISCHARGE = "discharge"


class Topology(str, Enum):
    SERIES = "series"
    PARALLEL = "parallel"


class Damping(str, Enum):
    UNDERDAMPED = "underdamped"
    CRITICAL = "critically damped"
    OVERDAMPED = "overdamped"


# ─── First-order step responses ─────────────────────────────────────────────

@dataclass
class StepResponse:
    tau: float
    final_value: float
    mode: StepMode
    response: Curve       # t_s → primary quantity and its complement


def _step_curve(tau: float, span: float, samples: int) -> tuple[np.ndarray, np.ndarray]:
    t = linspace(0.0, span * tau, samples)
    return t, np.exp(-t / tau)


def rc_circuit(resistance: float = 1e3, capacitance: float = 1e-6, v_source: float = 5.0,
               mode: StepMode | str = StepMode.CHARGE, span: float = 6.0, samples: int = 200) -> StepResponse:
    """
    Capacitor voltage and loop current after a step.

    Charging: v_C = V(1 − e^{−t/τ}), i = (V/R)e^{−t/τ}.
    Discharging from V: v_C = V e^{−t/τ}, i = −(V/R)e^{−t/τ}.
    """
    require_positive("resistance", resistance)
    require_positive("capacitance", capacitance)
    mode = StepMode(mode)
    tau = resistance * capacitance
    t, decay = _step_curve(tau, span, samples)
    if mode is StepMode.CHARGE:
        v_c = v_source * (1.0 - decay)
        i = v_source / resistance * decay
        final = v_source
    else:
        v_c = v_source * decay
        i = -v_source / resistance * decay
        final = 0.0
    return StepResponse(tau=tau, final_value=final, mode=mode,
                        response=Curve("t_s", t, {"v_c": v_c, "current": i, "v_r": i * resistance}))


def rl_circuit(resistance: float = 100.0, inductance: float = 10e-3, v_source: float = 5.0,
               mode: StepMode | str = StepMode.CHARGE, span: float = 6.0, samples: int = 200) -> StepResponse:
    """
    Inductor current after a step, τ = L/R.

    Energizing: i = (V/R)(1 − e^{−t/τ}), v_L = V e^{−t/τ}.
    De-energizing from V/R: i = (V/R)e^{−t/τ}, v_L = −V e^{−t/τ}.
    """
    require_positive("resistance", resistance)
    require_positive("inductance", inductance)
    mode = StepMode(mode)
    tau = inductance / resistance
    t, decay = _step_curve(tau, span, samples)
    i_final = v_source / resistance
    if mode is StepMode.CHARGE:
        i = i_final * (1.0 - decay)
        v_l = v_source * decay
        final = i_final
    else:
        i = i_final * decay
        v_l = -v_source * decay
        final = 0.0
    return StepResponse(tau=tau, final_value=final, mode=mode,
                        response=Curve("t_s", t, {"current": i, "v_l": v_l, "v_r": i * resistance}))


# ─── RLC resonance ──────────────────────────────────────────────────────────

def resonant_frequency(inductance: float, capacitance: float) -> float:
    """f₀ = 1/(2π√(LC))."""
    require_positive("inductance", inductance)
    require_positive("capacitance", capacitance)
    return 1.0 / (2.0 * math.pi * math.sqrt(inductance * capacitance))


def classify_damping(zeta: float) -> Damping:
    if math.isclose(zeta, 1.0, rel_tol=1e-9):
        return Damping.CRITICAL
    return Damping.UNDERDAMPED if zeta < 1.0 else Damping.OVERDAMPED


@dataclass
class RLCResult:
    topology: Topology
    resistance: float
    inductance: float
    capacitance: float
    f0: float
    omega0: float
    q_factor: float
    bandwidth: float
    damping_ratio: float
    damping: Damping
    impedance_at_f0: float
    response: Curve       # f_hz → magnitude (normalized), phase_deg


def rlc_circuit(resistance: float = 10.0, inductance: float = 1e-3, capacitance: float = 1e-9,
                topology: Topology | str = Topology.SERIES, f_min_ratio: float = 0.1,
                f_max_ratio: float = 10.0, samples: int = 400) -> RLCResult:
    """
    Series: Q = ω₀L/R and the response is |I|/I_max = R/|Z|, phase −∠Z.
    Parallel: Q = R/(ω₀L) and the response is |Z|/R, phase ∠Z.

    Frequencies are log-spaced from f_min_ratio·f₀ to f_max_ratio·f₀.
    """
    require_positive("resistance", resistance)
    try:
        topology = Topology(topology)
    except ValueError:
        raise InvalidInputError("topology", topology, "expected 'series' or 'parallel'") from None
    require_positive("f_min_ratio", f_min_ratio)
    if not f_max_ratio > f_min_ratio:
        raise InvalidInputError("f_max_ratio", f_max_ratio, "must exceed f_min_ratio")
    f0 = resonant_frequency(inductance, capacitance)
    w0 = 2.0 * math.pi * f0
    if topology is Topology.SERIES:
        q = w0 * inductance / resistance
        zeta = resistance / 2.0 * math.sqrt(capacitance / inductance)
    else:
        q = resistance / (w0 * inductance)
        zeta = 1.0 / (2.0 * resistance) * math.sqrt(inductance / capacitance)

    f = logspace(f_min_ratio * f0, f_max_ratio * f0, samples)
    w = 2.0 * math.pi * f
    if topology is Topology.SERIES:
        z = resistance + 1j * (w * inductance - 1.0 / (w * capacitance))
        mag = resistance / np.abs(z)
        phase = -np.degrees(np.angle(z))
    else:
        y = 1.0 / resistance + 1j * (w * capacitance - 1.0 / (w * inductance))
        z = 1.0 / y
        mag = np.abs(z) / resistance
        phase = np.degrees(np.angle(z))

    return RLCResult(
        topology=topology,
        resistance=resistance,
        inductance=inductance,
        capacitance=capacitance,
        f0=f0,
        omega0=w0,
        q_factor=q,
        bandwidth=f0 / q,
        damping_ratio=zeta,
        damping=classify_damping(zeta),
        impedance_at_f0=resistance,
        response=Curve("f_hz", f, {"magnitude": mag, "phase_deg": phase}),
    )
