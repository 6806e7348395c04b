"""Tests for the statics package.

Covers:
- Coulomb superposition, grids and field-line tracing
- Method of images and Gauss's-law profiles
- Capacitance and inductance formulas
- Biot–Savart, loops, Helmholtz pairs and coaxial B(r)
- Solenoid and toroid fields
- Magnetic forces and charged-particle motion
"""

from __future__ import annotations

import math

import numpy as np
import pytest
from scipy.integrate import quad

from emlab.errors import InvalidInputError
from emlab.statics import capacitance, inductance
from emlab.statics.biot_savart import (
    coax_field,
    coax_profile,
    current_loop,
    helmholtz,
    infinite_wire,
    loop_axis_field,
    loop_field,
    loop_segments,
    sample_segments_field,
    straight_wire_segments,
    total_field,
)
from emlab.statics.forces import charged_particle, force_on_wire, parallel_wires, torque_on_loop
from emlab.statics.gauss import coaxial_field, sphere_field, sphere_potential, sphere_profile
from emlab.statics.images import charge_above_plane, charge_near_sphere, plane_image_field
from emlab.statics.point_charges import (
    PointCharge,
    as_charges,
    electric_field,
    electric_potential,
    sample_field,
    trace_field_lines,
)
from emlab.statics.solenoid import analyze_solenoid, solenoid_axis_field, toroid, toroid_field
from emlab.utils.constants import EPS_0, MU_0
from emlab.utils.coordinates import Vector3

K_E = 1.0 / (4.0 * math.pi * EPS_0)


# -----------------------------------------------------------------------------
# Point charges
# -----------------------------------------------------------------------------


class TestPointCharges:
    """Coulomb superposition."""

    def test_single_charge(self) -> None:
        charges = [PointCharge(0.0, 0.0, 0.0, 1e-9)]
        e = electric_field(charges, Vector3(1.0, 0.0, 0.0))
        assert e.x == pytest.approx(K_E * 1e-9)
        assert e.y == 0.0
        assert electric_potential(charges, Vector3(2.0, 0.0, 0.0)) == pytest.approx(K_E * 1e-9 / 2)

    def test_dipole_midplane_potential(self) -> None:
        charges = as_charges([(-0.5, 0.0, 1e-9), (0.5, 0.0, -1e-9)])
        assert electric_potential(charges, Vector3(0.0, 1.3, 0.0)) == pytest.approx(0.0, abs=1e-12)

    def test_charge_on_sample_point_is_skipped(self) -> None:
        charges = [PointCharge(0.0, 0.0, 0.0, 1e-9)]
        assert electric_field(charges, Vector3()) == Vector3()

    def test_input_forms(self) -> None:
        charges = as_charges([(1, 2, 3e-9), (1, 2, 3, 4e-9), {"x": 1.0, "q": 5e-9}])
        assert [c.q for c in charges] == [3e-9, 4e-9, 5e-9]
        assert charges[1].z == 3
        with pytest.raises(InvalidInputError):
            as_charges([(1, 2)])

    def test_sample_field_grid(self) -> None:
        grid = sample_field([(0.0, 0.0, 1e-9)], samples=5)
        assert grid.shape == (5, 5)
        assert np.all(np.isfinite(grid["e_mag"]))
        assert grid["potential"][0, 0] == pytest.approx(K_E * 1e-9 / math.hypot(2.0, 2.0))


class TestFieldLines:
    def test_line_ends_on_opposite_charge(self) -> None:
        charges = [(-0.5, 0.0, 1e-9), (0.5, 0.0, -1e-9)]
        lines = trace_field_lines(charges, num_lines=8)
        assert len(lines) == 8
        assert lines[0].termination == "charge"
        assert lines[0].points[-1][0] == pytest.approx(0.5, abs=0.01)

    def test_line_leaves_bounds(self) -> None:
        lines = trace_field_lines([(0.0, 0.0, 1e-9)], num_lines=4, bounds=(-0.2, 0.2, -0.2, 0.2))
        assert all(line.termination == "boundary" for line in lines)

    def test_negative_source_runs_against_field(self) -> None:
        lines = trace_field_lines([(0.0, 0.0, -1e-9)], num_lines=1, max_steps=10)
        first, last = lines[0].points[0], lines[0].points[-1]
        assert math.hypot(*last) > math.hypot(*first)
        assert lines[0].termination == "steps"

    def test_bad_source_index(self) -> None:
        with pytest.raises(InvalidInputError):
            trace_field_lines([(0.0, 0.0, 1e-9)], source_index=3)


# -----------------------------------------------------------------------------
# Images and Gauss
# -----------------------------------------------------------------------------


class TestImages:
    def test_plane_force_and_density(self) -> None:
        res = charge_above_plane(1e-9, 0.1, samples=11)
        assert res.image_charge == -1e-9
        assert res.force == pytest.approx(-K_E * 1e-18 / 0.04)
        assert res.surface_density["sigma"][0] == pytest.approx(res.peak_surface_density)
        assert res.potential is None

    def test_plane_is_equipotential(self) -> None:
        res = charge_above_plane(1e-9, 0.1, grid_samples=9)
        assert np.allclose(res.potential["potential"][0], 0.0)

    def test_field_inside_conductor(self) -> None:
        assert plane_image_field(1e-9, 0.1, Vector3(0.0, 0.0, -0.05)) == Vector3()

    def test_field_normal_at_plane(self) -> None:
        e = plane_image_field(1e-9, 0.1, Vector3(0.05, 0.0, 0.0))
        assert e.x == pytest.approx(0.0, abs=1e-9)
        assert e.z < 0

    def test_sphere_image(self) -> None:
        res = charge_near_sphere(1.0, 1.0, 2.0)
        assert res.image_charge == pytest.approx(-0.5)
        assert res.image_distance == pytest.approx(0.5)
        assert res.force == pytest.approx(-0.5 * K_E / 2.25)

    def test_sphere_rejects_inside_charge(self) -> None:
        with pytest.raises(InvalidInputError):
            charge_near_sphere(1.0, 1.0, 0.5)


class TestGauss:
    def test_sphere_field_continuous(self) -> None:
        inside = sphere_field(1e-9, 0.1, 0.1 - 1e-12)
        outside = sphere_field(1e-9, 0.1, 0.1)
        assert inside == pytest.approx(outside)
        assert sphere_field(1e-9, 0.1, 0.0) == 0.0

    def test_sphere_potential_continuous(self) -> None:
        assert sphere_potential(1e-9, 0.1, 0.1 - 1e-12) == pytest.approx(sphere_potential(1e-9, 0.1, 0.1))
        assert sphere_potential(1e-9, 0.1, 0.0) == pytest.approx(1.5 * K_E * 1e-9 / 0.1)

    def test_coaxial_region(self) -> None:
        assert coaxial_field(1e-9, 1e-3, 4e-3, 5e-4) == 0.0
        assert coaxial_field(1e-9, 1e-3, 4e-3, 5e-3) == 0.0
        assert coaxial_field(1e-9, 1e-3, 4e-3, 2e-3) > 0

    def test_profile(self) -> None:
        prof = sphere_profile(1e-9, 0.1, samples=31)
        assert len(prof.profile) == 31
        assert prof.surface_field == pytest.approx(K_E * 1e-9 / 0.01)
        assert np.argmax(prof.profile["e"]) == 10


# -----------------------------------------------------------------------------
# Capacitance and inductance
# -----------------------------------------------------------------------------


class TestCapacitance:
    def test_parallel_plate(self) -> None:
        assert capacitance.parallel_plate(1e-2, 1e-3) == pytest.approx(88.54e-12, rel=1e-3)

    def test_isolated_sphere_limit(self) -> None:
        far = capacitance.spherical(0.1, 1e6)
        assert far == pytest.approx(capacitance.isolated_sphere(0.1), rel=1e-6)

    def test_series_parallel(self) -> None:
        assert capacitance.series([2e-6, 2e-6]) == pytest.approx(1e-6)
        assert capacitance.parallel([1e-6, 2e-6]) == pytest.approx(3e-6)
        with pytest.raises(InvalidInputError):
            capacitance.series([])

    def test_coax_lc_product(self) -> None:
        c = capacitance.coaxial(1e-3, 3.5e-3)
        l = inductance.coaxial(1e-3, 3.5e-3)
        assert l * c == pytest.approx(MU_0 * EPS_0)

    def test_capacitor_record(self) -> None:
        res = capacitance.capacitor("parallel_plate", voltage=10.0)
        assert res.field == pytest.approx(1e4)
        assert res.energy == pytest.approx(0.5 * res.capacitance * 100.0)
        assert res.charge == pytest.approx(res.capacitance * 10.0)
        assert res.energy_density * 1e-2 * 1e-3 == pytest.approx(res.energy)

    def test_capacitor_other_geometries(self) -> None:
        assert capacitance.capacitor("coaxial").field is None
        with pytest.raises(InvalidInputError):
            capacitance.capacitor("cylinder")


class TestInductance:
    def test_solenoid(self) -> None:
        assert inductance.solenoid(100, 0.01, 0.1) == pytest.approx(MU_0 * 1e4 * math.pi * 1e-4 / 0.1)

    def test_toroid_matches_field_module(self) -> None:
        assert inductance.toroid(200, 0.04, 0.06, 0.01) == pytest.approx(toroid().inductance)

    def test_mutual_symmetric_in_radii(self) -> None:
        m1 = inductance.mutual_coaxial_loops(0.1, 0.01, 0.05)
        m2 = inductance.mutual_coaxial_loops(0.01, 0.1, 0.05)
        assert m1 == m2 > 0

    def test_coupling(self) -> None:
        assert inductance.coupling_coefficient(1e-3, 4e-3, 1e-3) == pytest.approx(0.5)

    def test_series_parallel(self) -> None:
        assert inductance.series([1e-3, 2e-3]) == pytest.approx(3e-3)
        assert inductance.parallel([2e-3, 2e-3]) == pytest.approx(1e-3)
        with pytest.raises(InvalidInputError):
            inductance.parallel([])

    @pytest.mark.parametrize("geometry", ["solenoid", "toroid", "coaxial", "parallel_wires"])
    def test_inductor_record(self, geometry: str) -> None:
        res = inductance.inductor(geometry, current=2.0)
        assert res.inductance > 0
        assert res.flux_linkage == pytest.approx(2.0 * res.inductance)
        assert res.energy == pytest.approx(2.0 * res.inductance)

    def test_inductor_unknown_geometry(self) -> None:
        with pytest.raises(InvalidInputError):
            inductance.inductor("helix")


# -----------------------------------------------------------------------------
# Biot–Savart
# -----------------------------------------------------------------------------


class TestWire:
    def test_infinite_wire(self) -> None:
        """10 A at 10 cm: B = 20 µT."""
        res = infinite_wire(10.0, 0.1)
        assert res.b == pytest.approx(2e-5)
        assert res.h == pytest.approx(10.0 / (2 * math.pi * 0.1))
        assert res.profile.x[0] > 0
        assert res.field is None

    def test_field_grid_circulates(self) -> None:
        res = infinite_wire(1.0, 0.1, grid_samples=5)
        # point (r_max, 0): field along +y
        assert res.field["by"][2, 4] > 0
        assert res.field["bx"][2, 4] == pytest.approx(0.0)
        assert res.field["b_mag"][2, 2] == 0.0

    def test_segments_approach_infinite_wire(self) -> None:
        segments = straight_wire_segments(10.0, 10.0, 4000)
        b = total_field(segments, Vector3(0.1, 0.0, 0.0))
        assert b.y == pytest.approx(2e-5, rel=1e-3)
        assert b.x == pytest.approx(0.0, abs=1e-12)

    def test_sample_segments_field_shape(self) -> None:
        grid = sample_segments_field(loop_segments(0.05, 1.0, 16), (-0.1, 0.1), (-0.1, 0.1), samples=4)
        assert grid.shape == (4, 4)

    def test_loop_needs_three_segments(self) -> None:
        with pytest.raises(InvalidInputError):
            loop_segments(0.05, 1.0, 2)


class TestLoop:
    def test_centre_field(self) -> None:
        res = current_loop(0.05, 2.0, turns=3)
        assert res.b_center == pytest.approx(MU_0 * 6.0 / (2 * 0.05))
        assert res.magnetic_moment == pytest.approx(6.0 * math.pi * 0.05 ** 2)
        assert res.axis_profile["bz"].max() == pytest.approx(res.b_center, rel=1e-3)

    def test_polygon_matches_closed_form(self) -> None:
        b = total_field(loop_segments(0.05, 1.0, 256), Vector3())
        assert b.z == pytest.approx(loop_axis_field(0.05, 1.0, 0.0), rel=1e-3)

    @pytest.mark.parametrize("z", [0.0, 0.03, -0.1])
    def test_off_axis_reduces_to_axis(self, z: float) -> None:
        b_rho, b_z = loop_field(0.05, 1.0, 0.0, z)
        assert b_rho == 0.0
        assert b_z == pytest.approx(loop_axis_field(0.05, 1.0, z))

    def test_off_axis_matches_biot_savart(self) -> None:
        b_rho, b_z = loop_field(0.05, 1.0, 0.03, 0.02)
        numeric = total_field(loop_segments(0.05, 1.0, 512), Vector3(0.03, 0.0, 0.02))
        assert b_rho == pytest.approx(numeric.x, rel=1e-3)
        assert b_z == pytest.approx(numeric.z, rel=1e-3)

    def test_point_on_conductor(self) -> None:
        with pytest.raises(InvalidInputError):
            loop_field(0.05, 1.0, 0.05, 0.0)


class TestHelmholtz:
    def test_centre_field(self) -> None:
        res = helmholtz(0.1, 1.0)
        assert res.separation == pytest.approx(0.1)
        assert res.b_center == pytest.approx((4.0 / 5.0) ** 1.5 * MU_0 / 0.1)

    def test_uniform_at_helmholtz_spacing(self) -> None:
        assert helmholtz(0.1, 1.0).uniformity < 0.01

    def test_wider_spacing_less_uniform(self) -> None:
        assert helmholtz(0.1, 1.0, separation_ratio=2.0).uniformity > helmholtz(0.1, 1.0).uniformity

    def test_window_from_config(self, fine_window_config) -> None:
        wide = helmholtz(0.1, 1.0, separation_ratio=1.5)
        narrow = helmholtz(0.1, 1.0, separation_ratio=1.5, config=fine_window_config)
        assert narrow.uniformity < wide.uniformity

    def test_zero_samples(self) -> None:
        res = helmholtz(samples=0)
        assert res.uniformity == 0.0
        assert len(res.axis_profile) == 0


class TestCoax:
    def test_regions(self) -> None:
        a, b, c = 1e-3, 3.5e-3, 4e-3
        assert coax_field(1.0, a, b, c, 0.0) == 0.0
        assert coax_field(1.0, a, b, c, a) == pytest.approx(MU_0 / (2 * math.pi * a))
        assert coax_field(1.0, a, b, c, b) == pytest.approx(MU_0 / (2 * math.pi * b))
        assert coax_field(1.0, a, b, c, c) == pytest.approx(0.0, abs=1e-18)
        assert coax_field(1.0, a, b, c, 2 * c) == 0.0

    def test_profile_peak_at_inner_surface(self) -> None:
        res = coax_profile(samples=601)
        assert res.profile["b"].max() <= res.b_max * (1 + 1e-12)
        assert res.inductance_per_m == pytest.approx(inductance.coaxial(1e-3, 3.5e-3))

    def test_bad_geometry(self) -> None:
        with pytest.raises(InvalidInputError):
            coax_profile(a=1e-3, b=4e-3, c=3e-3)


# -----------------------------------------------------------------------------
# Solenoid and toroid
# -----------------------------------------------------------------------------


class TestSolenoid:
    def test_interior(self) -> None:
        res = analyze_solenoid()
        assert res.b_interior == pytest.approx(MU_0 * 2500.0)
        assert res.h_interior == pytest.approx(2500.0)
        assert res.energy == pytest.approx(0.5 * res.inductance)

    def test_energy_density_times_volume(self) -> None:
        res = analyze_solenoid(turns=300, length=0.5, radius=0.01, current=2.0)
        volume = math.pi * 0.01 ** 2 * 0.5
        assert res.energy_density * volume == pytest.approx(res.energy)

    def test_axis_profile_centre_and_ends(self) -> None:
        res = analyze_solenoid(samples=201)
        centre = res.axis_profile["bz"][100]
        expected = res.b_interior * 0.1 / math.hypot(0.1, 0.02)
        assert centre == pytest.approx(expected)
        end = solenoid_axis_field(500, 0.2, 0.02, 1.0, 0.1)
        assert end == pytest.approx(res.b_interior / 2, rel=0.02)

    def test_long_solenoid_limit(self) -> None:
        b = solenoid_axis_field(1000, 10.0, 0.01, 1.0, 0.0)
        assert b == pytest.approx(MU_0 * 100.0, rel=1e-5)


class TestToroid:
    def test_field_confined_to_core(self) -> None:
        assert toroid_field(200, 1.0, 0.03, 0.04, 0.06) == 0.0
        assert toroid_field(200, 1.0, 0.07, 0.04, 0.06) == 0.0
        assert toroid_field(200, 1.0, 0.05, 0.04, 0.06) == pytest.approx(MU_0 * 200 / (2 * math.pi * 0.05))

    def test_record(self) -> None:
        res = toroid()
        assert res.b_inner > res.b_mean > res.b_outer > 0
        assert res.profile["b"][0] == 0.0
        assert res.energy == pytest.approx(0.5 * res.inductance)

    @pytest.mark.parametrize("turns, inner, outer, height, mu_r", [
        (200, 0.04, 0.06, 0.01, 1.0),
        (50, 0.01, 0.05, 0.02, 400.0),
        (1000, 0.10, 0.11, 0.005, 2.5),
    ])
    def test_inductance_shared_with_inductance_module(self, turns, inner, outer, height, mu_r) -> None:
        res = toroid(turns, 2.0, inner, outer, height, mu_r)
        assert res.inductance == pytest.approx(inductance.toroid(turns, inner, outer, height, mu_r))

    def test_energy_matches_field_integral(self) -> None:
        """½LI² equals ∫B²/(2μ) dV over the core."""
        res = toroid(300, 1.5, 0.02, 0.05, 0.01, mu_r=10.0)
        mu = MU_0 * 10.0
        energy, _ = quad(
            lambda r: toroid_field(300, 1.5, r, 0.02, 0.05, 10.0) ** 2 / (2 * mu) * 2 * math.pi * r * 0.01,
            0.02, 0.05,
        )
        assert res.energy == pytest.approx(energy, rel=1e-9)

    def test_reversed_radii_rejected(self) -> None:
        with pytest.raises(InvalidInputError):
            toroid(inner_radius=0.06, outer_radius=0.04)


# -----------------------------------------------------------------------------
# Forces
# -----------------------------------------------------------------------------


class TestForces:
    def test_parallel_wires(self) -> None:
        res = parallel_wires()
        assert res.force_per_length == pytest.approx(2e-4)
        assert res.attractive
        assert not parallel_wires(10.0, -10.0).attractive

    def test_force_on_wire(self) -> None:
        f = force_on_wire(2.0, Vector3(1.0, 0.0, 0.0), Vector3(0.0, 0.5, 0.0))
        assert f == Vector3(0.0, 0.0, 1.0)

    def test_torque_on_loop(self) -> None:
        res = torque_on_loop()
        assert res.torque.y == pytest.approx(1e-3)
        assert res.torque_magnitude == pytest.approx(1e-3)
        assert res.potential_energy == pytest.approx(0.0)

    def test_aligned_loop_has_minimum_energy(self) -> None:
        res = torque_on_loop(b_field=(0.0, 0.0, 0.1))
        assert res.torque_magnitude == 0.0
        assert res.potential_energy == pytest.approx(-1e-3)

    def test_electron_gyration(self) -> None:
        res = charged_particle()
        assert res.cyclotron_radius == pytest.approx(5.686e-3, rel=1e-3)
        assert res.cyclotron_frequency == pytest.approx(27.99e6, rel=1e-3)
        assert res.cyclotron_period == pytest.approx(1.0 / res.cyclotron_frequency)
        assert res.force.y > 0

    def test_no_field_no_gyration(self) -> None:
        res = charged_particle(b_field=(0.0, 0.0, 0.0))
        assert res.cyclotron_radius is None
        assert res.cyclotron_frequency is None
        assert res.force_magnitude == 0.0

    def test_neutral_particle(self) -> None:
        assert charged_particle(charge=0.0).cyclotron_radius is None

    def test_parallel_velocity_has_zero_radius(self) -> None:
        res = charged_particle(velocity=(0.0, 0.0, 1e6))
        assert res.cyclotron_radius == pytest.approx(0.0)
