"""Tests for the time-varying package.

Covers:
- Faraday induction, generators, transformers and motional EMF
- RC / RL step responses
- Series and parallel RLC resonance
- Displacement current and charge relaxation
"""

from __future__ import annotations

import math

import numpy as np
import pytest

from emlab.errors import InvalidInputError
from emlab.timevarying.circuits import (
    Damping,
    StepMode,
    Topology,
    classify_damping,
    rc_circuit,
    resonant_frequency,
    rl_circuit,
    rlc_circuit,
)
from emlab.timevarying.faraday import (
    ac_generator,
    magnetic_flux,
    motional_emf,
    sinusoidal_induction,
    sliding_bar,
    transformer,
)
from emlab.timevarying.maxwell import (
    charge_relaxation,
    displacement_current,
    displacement_current_ramp,
    relaxation_time,
)
from emlab.utils.constants import EPS_0


# -----------------------------------------------------------------------------
# Induction
# -----------------------------------------------------------------------------


class TestFaraday:
    """Flux, EMF and ideal transformers."""

    def test_flux_tilt(self) -> None:
        assert magnetic_flux(0.5, 0.02) == pytest.approx(0.01)
        assert magnetic_flux(0.5, 0.02, math.pi / 2) == pytest.approx(0.0, abs=1e-15)

    def test_emf_is_minus_n_dphi_dt(self) -> None:
        res = sinusoidal_induction(cycles=1.0, samples=2001)
        t = res.waveform.x
        numeric = -res.turns * np.gradient(res.waveform["flux"], t)
        assert np.allclose(numeric[1:-1], res.waveform["emf"][1:-1], atol=1e-4 * res.emf_peak)

    def test_induction_peaks(self) -> None:
        res = sinusoidal_induction(turns=50, b_peak=0.2, area=0.01, freq_hz=50.0)
        assert res.emf_peak == pytest.approx(50 * 0.2 * 0.01 * 2 * math.pi * 50)
        assert res.emf_rms == pytest.approx(res.emf_peak / math.sqrt(2))
        assert res.flux_peak == pytest.approx(0.002)

    def test_generator(self) -> None:
        res = ac_generator()
        assert res.frequency == pytest.approx(60.0)
        assert res.omega == pytest.approx(120 * math.pi)
        assert res.emf_peak == pytest.approx(100 * 0.5 * 0.01 * 120 * math.pi)
        assert np.max(np.abs(res.waveform["emf"])) <= res.emf_peak + 1e-9

    def test_generator_rejects_zero_rpm(self) -> None:
        with pytest.raises(InvalidInputError):
            ac_generator(rpm=0.0)

    def test_transformer(self) -> None:
        res = transformer(z_load=500.0)
        assert res.turns_ratio == pytest.approx(5.0)
        assert res.v_secondary == pytest.approx(600.0)
        assert res.i_secondary == pytest.approx(0.2)
        assert res.z_reflected == pytest.approx(20.0)
        assert res.is_step_up
        assert res.v_primary * res.i_primary == pytest.approx(res.v_secondary * res.i_secondary)

    def test_transformer_without_load(self) -> None:
        res = transformer(n_primary=200, n_secondary=100)
        assert res.z_reflected is None
        assert not res.is_step_up

    def test_sliding_bar_power_balance(self) -> None:
        res = sliding_bar()
        assert res.emf == pytest.approx(0.5)
        assert res.current == pytest.approx(0.5)
        assert res.retarding_force == pytest.approx(0.05)
        assert res.power == pytest.approx(res.retarding_force * res.velocity)

    def test_open_circuit_bar(self) -> None:
        res = sliding_bar(resistance=None)
        assert res.emf == pytest.approx(motional_emf(5.0, 0.5, 0.2))
        assert res.current is None
        assert res.power is None


# -----------------------------------------------------------------------------
# First-order circuits
# -----------------------------------------------------------------------------


class TestStepResponses:
    def test_rc_charge(self) -> None:
        res = rc_circuit(samples=7)
        assert res.tau == pytest.approx(1e-3)
        v_c = res.response["v_c"]
        assert v_c[0] == 0.0
        assert v_c[1] == pytest.approx(5.0 * (1 - math.exp(-1)))
        assert res.final_value == 5.0

    def test_rc_kvl(self) -> None:
        res = rc_circuit()
        assert np.allclose(res.response["v_c"] + res.response["v_r"], 5.0)

    def test_rc_discharge(self) -> None:
        res = rc_circuit(mode="discharge", samples=7)
        assert res.mode is StepMode.DISCHARGE
        assert res.response["v_c"][1] == pytest.approx(5.0 * math.exp(-1))
        assert np.all(res.response["current"] <= 0)
        assert res.final_value == 0.0

    def test_rl_charge(self) -> None:
        res = rl_circuit(samples=7)
        assert res.tau == pytest.approx(1e-4)
        assert res.final_value == pytest.approx(0.05)
        assert np.allclose(res.response["v_l"] + res.response["v_r"], 5.0)

    def test_rl_discharge(self) -> None:
        res = rl_circuit(mode=StepMode.DISCHARGE, samples=7)
        assert res.response["current"][0] == pytest.approx(0.05)
        assert res.response["v_l"][0] == pytest.approx(-5.0)

    def test_bad_mode(self) -> None:
        with pytest.raises(ValueError):
            rc_circuit(mode="hold")


# -----------------------------------------------------------------------------
# RLC
# -----------------------------------------------------------------------------


class TestRLC:
    def test_resonant_frequency(self) -> None:
        """1 mH with 1 nF resonates at ≈ 159.15 kHz."""
        assert resonant_frequency(1e-3, 1e-9) == pytest.approx(159_154.9, rel=1e-6)

    def test_series(self) -> None:
        res = rlc_circuit(samples=401)
        assert res.topology is Topology.SERIES
        assert res.q_factor == pytest.approx(100.0)
        assert res.bandwidth == pytest.approx(res.f0 / 100.0)
        assert res.damping is Damping.UNDERDAMPED
        assert res.response["magnitude"][200] == pytest.approx(1.0)
        assert res.response["phase_deg"][200] == pytest.approx(0.0, abs=1e-6)
        assert res.response["magnitude"].max() <= 1.0 + 1e-12

    def test_series_phase_signs(self) -> None:
        res = rlc_circuit(samples=3)
        below, above = res.response["phase_deg"][0], res.response["phase_deg"][2]
        assert below > 0 > above

    def test_critical_damping(self) -> None:
        assert rlc_circuit(resistance=2000.0).damping is Damping.CRITICAL

    def test_parallel(self) -> None:
        res = rlc_circuit(resistance=1e5, topology="parallel", samples=401)
        assert res.q_factor == pytest.approx(1e5 / (2 * math.pi * res.f0 * 1e-3))
        assert res.damping_ratio == pytest.approx(1.0 / (2 * res.q_factor))
        assert res.response["magnitude"][200] == pytest.approx(1.0)

    def test_classify(self) -> None:
        assert classify_damping(0.5) is Damping.UNDERDAMPED
        assert classify_damping(1.0 + 1e-12) is Damping.CRITICAL
        assert classify_damping(3.0) is Damping.OVERDAMPED

    def test_bad_sweep(self) -> None:
        with pytest.raises(InvalidInputError):
            rlc_circuit(f_min_ratio=2.0, f_max_ratio=1.0)


# -----------------------------------------------------------------------------
# Maxwell's correction
# -----------------------------------------------------------------------------


class TestDisplacementCurrent:
    def test_equals_conduction_current(self) -> None:
        """I_d from ε∂E/∂t agrees with dQ/dt of the plate charge."""
        res = displacement_current()
        i_d = res.waveform["displacement_current"]
        i_c = res.waveform["conduction_current"]
        assert np.allclose(i_c, i_d, atol=5e-3 * res.displacement_current_peak)
        assert res.displacement_current_peak == pytest.approx(2 * math.pi * 1e6 * res.capacitance * 10.0)

    @pytest.mark.parametrize("er, freq_hz", [(1.0, 1e3), (4.0, 1e6), (80.0, 2.45e9)])
    def test_continuity_across_materials(self, er: float, freq_hz: float) -> None:
        res = displacement_current(er=er, freq_hz=freq_hz, samples=400)
        assert np.allclose(res.waveform["conduction_current"], res.waveform["displacement_current"],
                           atol=1e-3 * res.displacement_current_peak)
        assert np.max(np.abs(res.waveform["conduction_current"])) == pytest.approx(
            res.displacement_current_peak, rel=1e-3)

    def test_too_few_samples_rejected(self) -> None:
        with pytest.raises(InvalidInputError, match="samples"):
            displacement_current(samples=2)

    def test_capacitor_values(self) -> None:
        res = displacement_current(er=4.0)
        assert res.capacitance == pytest.approx(4.0 * EPS_0 * 10.0)
        assert res.e_peak == pytest.approx(1e4)
        assert res.stored_energy_peak == pytest.approx(0.5 * res.capacitance * 100.0)

    def test_ramp(self) -> None:
        assert displacement_current_ramp(0.01, 1e-3, 1e6) == pytest.approx(EPS_0 * 10.0 * 1e6)


class TestChargeRelaxation:
    def test_copper_is_instantaneous(self) -> None:
        assert relaxation_time(1.0, 5.8e7) == pytest.approx(1.53e-19, rel=1e-2)

    def test_insulator_never_relaxes(self) -> None:
        assert relaxation_time(2.0, 0.0) is None
        res = charge_relaxation(sigma=0.0, samples=5)
        assert res.tau is None
        assert np.all(res.decay["charge"] == res.initial_charge)
        assert np.all(res.decay["current_out"] == 0.0)

    def test_decay_at_one_tau(self) -> None:
        res = charge_relaxation(span=5.0, samples=6)
        assert res.decay["rho"][1] == pytest.approx(1e-6 * math.exp(-1))

    def test_continuity(self) -> None:
        """Current leaving the surface equals −dQ/dt."""
        res = charge_relaxation(er=4.0, sigma=1e-3)
        assert np.allclose(res.decay["current_out"], res.decay["minus_dq_dt"], rtol=1e-12)
        t = res.decay.x
        numeric = -np.gradient(res.decay["charge"], t)
        assert np.allclose(numeric[1:-1], res.decay["minus_dq_dt"][1:-1], rtol=0.01)
