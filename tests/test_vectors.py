"""Tests for the vector-calculus package.

Covers:
- Central-difference gradient, divergence, curl and Laplacian
- Scalar and vector preset sampling against closed forms
- Vector addition, cross product and projection
"""

from __future__ import annotations

import math

import numpy as np
import pytest

from emlab.errors import InvalidInputError
from emlab.utils.coordinates import Vector3
from emlab.vectors.differential import curl, divergence, gradient, laplacian
from emlab.vectors.scalar_fields import SCALAR_PRESETS, sample_scalar_field
from emlab.vectors.vector_fields import VECTOR_PRESETS, get_vector_preset, sample_vector_field
from emlab.vectors.vector_ops import angle_deg, cross_product, project, triple_product, vector_add, vector_sub


# -----------------------------------------------------------------------------
# Differential operators
# -----------------------------------------------------------------------------


class TestDifferential:
    """Numerical operators against analytic results."""

    def test_gradient_of_quadratic(self) -> None:
        g = gradient(lambda x, y, z: x * x + 3 * y + z ** 3, 1.0, 2.0, 0.5)
        assert g.x == pytest.approx(2.0, abs=1e-6)
        assert g.y == pytest.approx(3.0, abs=1e-6)
        assert g.z == pytest.approx(0.75, abs=1e-6)

    def test_divergence_of_radial(self) -> None:
        radial = VECTOR_PRESETS["radial"].field
        assert divergence(radial, 0.7, -1.2) == pytest.approx(2.0, abs=1e-6)

    def test_curl_of_shear(self) -> None:
        shear = VECTOR_PRESETS["uniform_shear"].field
        c = curl(shear, 0.3, 0.4)
        assert c.z == pytest.approx(-1.0, abs=1e-6)
        assert c.x == pytest.approx(0.0, abs=1e-9)

    def test_vortex_irrotational_away_from_origin(self) -> None:
        vortex = VECTOR_PRESETS["vortex"].field
        assert curl(vortex, 1.0, 1.0).z == pytest.approx(0.0, abs=1e-5)
        assert divergence(vortex, 1.0, 1.0) == pytest.approx(0.0, abs=1e-5)

    def test_curl_of_gradient_vanishes(self) -> None:
        f = SCALAR_PRESETS["sine_product"].value
        def grad_field(x, y, z):
            return gradient(f, x, y, z, h=1e-4)

        c = curl(grad_field, 0.4, 0.9, h=1e-3)
        assert c.magnitude == pytest.approx(0.0, abs=1e-5)

    def test_laplacian(self) -> None:
        assert laplacian(SCALAR_PRESETS["saddle"].value, 0.2, 0.3) == pytest.approx(0.0, abs=1e-5)
        assert laplacian(SCALAR_PRESETS["gaussian"].value, 0.0, 0.0) == pytest.approx(-4.0, abs=1e-5)


# -----------------------------------------------------------------------------
# Presets
# -----------------------------------------------------------------------------


class TestScalarPresets:
    @pytest.mark.parametrize("name", sorted(SCALAR_PRESETS))
    def test_numerical_gradient_matches_exact(self, name: str) -> None:
        grid = sample_scalar_field(name, samples=10)
        assert np.allclose(grid["grad_x"], grid["grad_x_exact"], atol=1e-5)
        assert np.allclose(grid["grad_y"], grid["grad_y_exact"], atol=1e-5)

    def test_grid_shape(self) -> None:
        grid = sample_scalar_field("gaussian", samples=7)
        assert grid.shape == (7, 7)
        assert grid["f"].max() <= 1.0

    def test_unknown_preset(self) -> None:
        with pytest.raises(InvalidInputError):
            sample_scalar_field("paraboloid")


class TestVectorPresets:
    def test_radial_divergence_positive(self) -> None:
        grid = sample_vector_field("radial", samples=5)
        assert np.all(grid["divergence"] == 2.0)
        assert np.all(grid["curl_z"] == 0.0)

    @pytest.mark.parametrize("name", ["radial", "uniform_shear", "saddle"])
    def test_exact_curl_matches_numerical(self, name: str) -> None:
        p = get_vector_preset(name)
        for x, y in [(0.3, -0.2), (1.5, 2.0)]:
            assert curl(p.field, x, y).z == pytest.approx(p.curl_z(x, y, 0.0), abs=1e-5)
            assert divergence(p.field, x, y) == pytest.approx(p.divergence(x, y, 0.0), abs=1e-5)

    def test_unknown_preset(self) -> None:
        with pytest.raises(InvalidInputError):
            get_vector_preset("whirlpool")


# -----------------------------------------------------------------------------
# Vector algebra
# -----------------------------------------------------------------------------


class TestVectorOps:
    def test_add(self) -> None:
        res = vector_add((3, 0, 0), (0, 4, 0))
        assert res.result == Vector3(3.0, 4.0, 0.0)
        assert res.magnitude == pytest.approx(5.0)
        assert res.angle_between == pytest.approx(math.pi / 2)
        assert res.parallelogram[2] == res.result

    def test_sub(self) -> None:
        res = vector_sub(Vector3(1, 1, 0), Vector3(1, 0, 0))
        assert res.result == Vector3(0.0, 1.0, 0.0)

    def test_cross(self) -> None:
        res = cross_product((1, 0, 0), (0, 1, 0))
        assert res.result == Vector3(0.0, 0.0, 1.0)
        assert res.parallelogram_area == pytest.approx(1.0)
        assert res.dot == 0.0

    def test_cross_of_parallel_is_zero(self) -> None:
        assert cross_product((1, 2, 3), (2, 4, 6)).magnitude == pytest.approx(0.0)

    def test_project(self) -> None:
        res = project((2, 3, 0), (1, 0, 0))
        assert res.parallel == Vector3(2.0, 0.0, 0.0)
        assert res.perpendicular == Vector3(0.0, 3.0, 0.0)
        assert res.scalar_projection == pytest.approx(2.0)

    def test_project_on_zero_reference(self) -> None:
        res = project((2, 3, 0), (0, 0, 0))
        assert res.perpendicular == Vector3(2.0, 3.0, 0.0)
        assert res.scalar_projection == 0.0

    def test_triple_product_and_angle(self) -> None:
        assert triple_product((1, 0, 0), (0, 1, 0), (0, 0, 1)) == pytest.approx(1.0)
        assert angle_deg((1, 0, 0), (1, 1, 0)) == pytest.approx(45.0)
