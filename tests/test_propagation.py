"""Tests for the propagation package.

Covers:
- Medium constants and loss classification
- Normal and oblique incidence (Snell, Brewster, TIR)
- Polarization state analysis
- Rectangular and circular waveguide modes
- Plane-wave kinematics and phase comparison
"""

from __future__ import annotations

import math

import numpy as np
import pytest

from emlab.config import EngineConfig
from emlab.errors import InvalidInputError
from emlab.propagation.fresnel import fresnel_curve, normal_incidence, oblique_incidence
from emlab.propagation.medium import (
    MediumClass,
    analyze_material,
    analyze_medium,
    attenuation_profile,
    classify,
    skin_depth_vs_frequency,
)
from emlab.propagation.plane_wave import PhaseRelation, analyze_plane_wave, compare_phase, superpose
from emlab.propagation.polarization import (
    PolarizationType,
    RotationSense,
    analyze_polarization,
    analyze_preset,
    linear_at_angle,
)
from emlab.propagation.waveguide import (
    circular_tm01_cutoff,
    circular_te11_cutoff,
    mode_at,
    rectangular_modes,
)
from emlab.utils.constants import C_0, ETA_0, MU_0, conductor_skin_depth


# -----------------------------------------------------------------------------
# Media
# -----------------------------------------------------------------------------


class TestMedium:
    """Propagation constants of homogeneous media."""

    def test_free_space_is_lossless(self) -> None:
        res = analyze_medium(1e9)
        assert res.alpha == pytest.approx(0.0, abs=1e-12)
        assert res.skin_depth is None
        assert res.medium_class is MediumClass.LOW_LOSS
        assert res.wavelength == pytest.approx(C_0 / 1e9)
        assert res.eta.real == pytest.approx(ETA_0)

    def test_good_conductor_skin_depth(self) -> None:
        res = analyze_medium(1e6, sigma=5.8e7)
        assert res.medium_class is MediumClass.GOOD_CONDUCTOR
        assert res.skin_depth == pytest.approx(conductor_skin_depth(1e6, 5.8e7), rel=1e-4)
        assert res.alpha == pytest.approx(res.beta, rel=1e-4)

    def test_seawater_low_frequency(self) -> None:
        res = analyze_material("seawater", 1e3)
        assert res.medium_class is MediumClass.GOOD_CONDUCTOR
        assert res.skin_depth == pytest.approx(math.sqrt(2 / (2 * math.pi * 1e3 * MU_0 * 4.0)), rel=1e-3)

    def test_complex_permittivity_sign(self) -> None:
        res = analyze_medium(1e6, er=10.0, sigma=0.01)
        assert res.complex_permittivity.imag < 0
        assert res.loss_tangent == pytest.approx(0.01 / (2 * math.pi * 1e6 * 10.0 * 8.8541878128e-12), rel=1e-6)

    def test_classification_thresholds(self) -> None:
        assert classify(0.005) is MediumClass.LOW_LOSS
        assert classify(1.0) is MediumClass.LOSSY
        assert classify(500.0) is MediumClass.GOOD_CONDUCTOR
        relaxed = EngineConfig(low_loss_tangent=0.1)
        assert classify(0.05) is MediumClass.LOSSY
        assert classify(0.05, relaxed) is MediumClass.LOW_LOSS

    def test_negative_sigma_rejected(self) -> None:
        with pytest.raises(InvalidInputError):
            analyze_medium(1e6, sigma=-1.0)

    def test_attenuation_profile_one_skin_depth(self) -> None:
        curve = attenuation_profile(1e6, sigma=5.8e7, samples=6)
        assert curve["e_mag"][1] == pytest.approx(math.exp(-1.0), rel=1e-6)
        assert np.all(np.diff(curve["power_density"]) < 0)

    def test_skin_depth_sweep_decreases(self) -> None:
        curve = skin_depth_vs_frequency(1e3, 1e9, samples=7)
        assert np.all(np.diff(curve["skin_depth_m"]) < 0)


# -----------------------------------------------------------------------------
# Interfaces
# -----------------------------------------------------------------------------


class TestNormalIncidence:
    def test_air_to_glass(self) -> None:
        res = normal_incidence(1.0, 4.0)
        assert res.gamma == pytest.approx(-1.0 / 3.0)
        assert res.tau == pytest.approx(2.0 / 3.0)
        assert res.reflectance + res.transmittance == pytest.approx(1.0)


class TestObliqueIncidence:
    def test_snell_and_brewster(self) -> None:
        """εr 1 → 4 at 30°: θt ≈ 14.48°, Brewster ≈ 63.43°."""
        res = oblique_incidence(1.0, 4.0, math.radians(30.0))
        assert res.theta_t_deg == pytest.approx(14.4775, abs=1e-3)
        assert res.brewster_angle_deg == pytest.approx(63.4349, abs=1e-3)
        assert res.critical_angle is None
        assert not res.is_tir

    def test_parallel_reflection_vanishes_at_brewster(self) -> None:
        theta_b = math.atan(2.0)
        res = oblique_incidence(1.0, 4.0, theta_b)
        assert res.gamma_par == pytest.approx(0.0, abs=1e-12)
        assert res.gamma_perp != pytest.approx(0.0)

    def test_total_internal_reflection(self) -> None:
        res = oblique_incidence(4.0, 1.0, math.radians(60.0))
        assert res.is_tir
        assert res.theta_t is None
        assert res.gamma_perp is None
        assert res.reflectance_perp == 1.0
        assert res.critical_angle_deg == pytest.approx(30.0)

    @pytest.mark.parametrize("theta_deg", [0.0, 5.0, 15.0, 29.0, 29.9, 30.1, 31.0, 45.0, 60.0, 75.0, 89.9])
    def test_tir_exactly_beyond_critical_angle(self, theta_deg: float) -> None:
        """Glass-like εr = 4 into air: θc = 30°; below it Snell holds, above it nothing transmits."""
        res = oblique_incidence(4.0, 1.0, math.radians(theta_deg))
        assert res.is_tir == (theta_deg > res.critical_angle_deg)
        if res.is_tir:
            assert res.theta_t is None
            assert res.reflectance_perp == 1.0
        else:
            assert res.n1 * math.sin(res.theta_i) == pytest.approx(res.n2 * math.sin(res.theta_t))

    @pytest.mark.parametrize("theta_deg", [0.0, 20.0, 45.0, 70.0, 89.9])
    def test_no_tir_into_denser_medium(self, theta_deg: float) -> None:
        res = oblique_incidence(1.0, 4.0, math.radians(theta_deg))
        assert not res.is_tir
        assert res.critical_angle is None
        assert res.n1 * math.sin(res.theta_i) == pytest.approx(res.n2 * math.sin(res.theta_t))

    def test_power_conserved_perpendicular(self) -> None:
        res = oblique_incidence(1.0, 2.5, math.radians(40.0))
        ci, ct = math.cos(res.theta_i), math.cos(res.theta_t)
        transmitted = res.tau_perp ** 2 * (res.n2 * ct) / (res.n1 * ci)
        assert res.reflectance_perp + transmitted == pytest.approx(1.0)

    def test_angle_out_of_range(self) -> None:
        with pytest.raises(InvalidInputError):
            oblique_incidence(1.0, 4.0, 2.0)

    def test_curve_saturates_in_tir_region(self) -> None:
        curve = fresnel_curve(4.0, 1.0, samples=91)
        assert curve.x[-1] == pytest.approx(90.0)
        beyond = curve.x > 30.5
        assert np.all(curve["gamma_perp_mag"][beyond] == 1.0)
        assert curve["gamma_perp_mag"][0] == pytest.approx(1.0 / 3.0)


# -----------------------------------------------------------------------------
# Polarization
# -----------------------------------------------------------------------------


class TestPolarization:
    def test_right_circular(self) -> None:
        res = analyze_preset("rhcp")
        assert res.polarization_type is PolarizationType.CIRCULAR
        assert res.rotation_sense is RotationSense.RIGHT
        assert res.axial_ratio == pytest.approx(1.0)
        assert res.tilt_angle == 0.0
        assert res.poincare[2] == pytest.approx(-1.0)

    def test_left_circular(self) -> None:
        assert analyze_preset("lhcp").rotation_sense is RotationSense.LEFT

    def test_linear_45(self) -> None:
        res = analyze_preset("linear_45")
        assert res.polarization_type is PolarizationType.LINEAR
        assert res.rotation_sense is RotationSense.NONE
        assert res.axial_ratio is None
        assert res.tilt_angle_deg == pytest.approx(45.0)

    def test_elliptical(self) -> None:
        res = analyze_preset("elliptical")
        assert res.polarization_type is PolarizationType.ELLIPTICAL
        assert res.semi_major > res.semi_minor > 0
        assert res.semi_major ** 2 + res.semi_minor ** 2 == pytest.approx(1.25)

    def test_fully_polarized_stokes(self) -> None:
        s0, s1, s2, s3 = analyze_polarization(0.8, 0.3, 1.1).stokes
        assert s0 ** 2 == pytest.approx(s1 ** 2 + s2 ** 2 + s3 ** 2)

    def test_anti_phase_is_linear(self) -> None:
        ax, ay, delta = linear_at_angle(1.0, -math.pi / 4)
        assert delta == math.pi
        res = analyze_polarization(ax, ay, delta)
        assert res.polarization_type is PolarizationType.LINEAR
        assert res.tilt_angle_deg == pytest.approx(-45.0)

    def test_unknown_preset(self) -> None:
        with pytest.raises(InvalidInputError):
            analyze_preset("diagonal")

    def test_negative_amplitude_rejected(self) -> None:
        with pytest.raises(InvalidInputError):
            analyze_polarization(-1.0, 1.0, 0.0)


# -----------------------------------------------------------------------------
# Waveguides
# -----------------------------------------------------------------------------


class TestWaveguide:
    """WR-90 (22.86 × 10.16 mm) at 10 GHz."""

    A, B = 22.86e-3, 10.16e-3

    def test_dominant_mode(self) -> None:
        res = rectangular_modes(self.A, self.B, 10e9)
        assert res.dominant.label == "TE10"
        assert res.dominant.cutoff_frequency == pytest.approx(C_0 / (2 * self.A))
        assert [m.label for m in res.propagating] == ["TE10"]

    def test_single_mode_bandwidth(self) -> None:
        res = rectangular_modes(self.A, self.B, 10e9)
        assert res.single_mode_bandwidth == pytest.approx(C_0 / (2 * self.A))

    def test_velocity_product(self) -> None:
        mode = mode_at(self.A, self.B, 1, 0, 10e9)
        assert mode.phase_velocity * mode.group_velocity == pytest.approx(C_0 ** 2)
        assert mode.phase_velocity > C_0 > mode.group_velocity
        assert mode.impedance > ETA_0

    @pytest.mark.parametrize("freq_hz", [7e9, 10e9, 16e9, 20e9, 30e9])
    def test_velocity_product_every_propagating_mode(self, freq_hz: float) -> None:
        """v_p·v_g = c² for each TE and TM mode above its cutoff."""
        res = rectangular_modes(self.A, self.B, freq_hz)
        assert res.propagating
        for mode in res.propagating:
            assert mode.phase_velocity * mode.group_velocity == pytest.approx(C_0 ** 2)
            assert mode.phase_velocity > C_0 > mode.group_velocity

    def test_evanescent_mode(self) -> None:
        mode = mode_at(self.A, self.B, 1, 1, 10e9, "TM")
        assert not mode.propagates
        assert mode.beta is None
        assert mode.attenuation > 0

    def test_tm_needs_both_indices(self) -> None:
        with pytest.raises(InvalidInputError):
            mode_at(self.A, self.B, 1, 0, 10e9, "TM")

    def test_square_guide_is_degenerate(self) -> None:
        res = rectangular_modes(0.02, 0.02, 10e9)
        assert res.single_mode_bandwidth == 0.0

    def test_no_modes_enumerated(self) -> None:
        res = rectangular_modes(self.A, self.B, 10e9, max_m=0, max_n=0)
        assert res.modes == []
        assert res.dominant is None
        assert res.single_mode_bandwidth is None

    def test_circular_cutoffs(self) -> None:
        assert circular_te11_cutoff(0.01) < circular_tm01_cutoff(0.01)
        assert circular_te11_cutoff(0.01) == pytest.approx(1.8412 * C_0 / (2 * math.pi * 0.01))


# -----------------------------------------------------------------------------
# Plane waves
# -----------------------------------------------------------------------------


class TestPlaneWave:
    def test_free_space_kinematics(self) -> None:
        res = analyze_plane_wave(1e9, e0=2.0, samples=50)
        assert res.wavelength == pytest.approx(C_0 / 1e9)
        assert res.period == pytest.approx(1e-9)
        assert res.poynting_average == pytest.approx(4.0 / (2 * ETA_0))
        assert res.snapshot["e"][0] == pytest.approx(2.0)
        assert len(res.snapshot) == 50

    def test_lossy_snapshot_decays(self) -> None:
        res = analyze_plane_wave(1e6, sigma=5.8e7, n_wavelengths=3.0, samples=301)
        envelope = np.abs(res.snapshot["e"])
        assert envelope[-1] < 1e-6

    def test_phase_comparison(self) -> None:
        lead = compare_phase(1e3, math.pi / 2, 0.0)
        assert lead.relation is PhaseRelation.LEADING
        assert lead.time_delay == pytest.approx(0.25e-3)
        assert compare_phase(1e3, math.pi, 0.0).relation is PhaseRelation.ANTI_PHASE
        assert compare_phase(1e3, 0.0, 3 * math.pi / 2).relation is PhaseRelation.LEADING
        assert compare_phase(1e3, 0.0, 0.1).relation is PhaseRelation.LAGGING

    def test_superpose(self) -> None:
        curve = superpose([(1.0, 1.0, 0.0), (1.0, 1.0, math.pi)], t_end=1.0, samples=11)
        assert np.allclose(curve["sum"], 0.0)
        assert set(curve.series) == {"wave_1", "wave_2", "sum"}
