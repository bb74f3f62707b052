"""Tests for kernels module."""

import sys
from pathlib import Path

import numpy as np
import pytest
from sklearn.metrics.pairwise import laplacian_kernel, linear_kernel, polynomial_kernel, rbf_kernel

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.kernels import (
    GaussianRBFKernel,
    LaplacianKernel,
    LinearKernel,
    PolynomialKernel,
    ScaledKernel,
    build_kernel,
    kernel_matrix,
    parse_kernel_spec,
)


@pytest.fixture
def points():
    return np.random.RandomState(0).randn(12, 3)


class TestKernelValues:
    def test_linear_matches_sklearn(self, points):
        np.testing.assert_allclose(kernel_matrix(LinearKernel(), points), linear_kernel(points))

    def test_rbf_matches_sklearn(self, points):
        K = kernel_matrix(GaussianRBFKernel(gamma=0.3), points)
        np.testing.assert_allclose(K, rbf_kernel(points, gamma=0.3), rtol=1e-10)

    def test_laplacian_matches_sklearn(self, points):
        K = kernel_matrix(LaplacianKernel(gamma=0.2), points)
        np.testing.assert_allclose(K, laplacian_kernel(points, gamma=0.2), rtol=1e-10)

    def test_polynomial_matches_sklearn(self, points):
        K = kernel_matrix(PolynomialKernel(degree=3, gamma=0.5, coef0=1.0), points)
        expected = polynomial_kernel(points, degree=3, gamma=0.5, coef0=1.0)
        np.testing.assert_allclose(K, expected, rtol=1e-10)

    def test_symmetric(self, points):
        K = kernel_matrix(GaussianRBFKernel(gamma=1.0), points)
        np.testing.assert_array_equal(K, K.T)

    def test_invalid_parameters(self):
        with pytest.raises(ValueError):
            GaussianRBFKernel(gamma=0.0)
        with pytest.raises(ValueError):
            LaplacianKernel(gamma=-1.0)
        with pytest.raises(ValueError):
            PolynomialKernel(degree=0)


class TestScaledKernel:
    def test_default_factor_is_identity(self, points):
        base = GaussianRBFKernel(gamma=0.5)
        scaled = ScaledKernel(base)
        assert scaled(points[0], points[1]) == base(points[0], points[1])

    def test_factor_multiplies(self, points):
        base = LinearKernel()
        scaled = ScaledKernel(base)
        scaled.set_factor(2.5)
        assert scaled(points[0], points[1]) == pytest.approx(2.5 * base(points[0], points[1]))
        assert scaled.base is base


class TestRegistry:
    def test_build_kernel(self):
        k = build_kernel("rbf", gamma=2.0)
        assert isinstance(k, GaussianRBFKernel)
        assert k.gamma == 2.0

    def test_unknown_kernel(self):
        with pytest.raises(ValueError, match="Unknown kernel"):
            build_kernel("sigmoid")

    def test_parse_plain_name(self):
        assert isinstance(parse_kernel_spec("linear"), LinearKernel)

    def test_parse_with_params(self):
        k = parse_kernel_spec("polynomial:degree=3,gamma=0.5")
        assert isinstance(k, PolynomialKernel)
        assert k.degree == 3
        assert k.gamma == 0.5
        assert k.coef0 == 1.0

    def test_parse_malformed(self):
        with pytest.raises(ValueError, match="Malformed"):
            parse_kernel_spec("rbf:gamma")

    def test_unknown_parameter(self):
        with pytest.raises(ValueError, match="Invalid parameters for kernel 'rbf'"):
            parse_kernel_spec("rbf:sigma=1")

    def test_unknown_parameter_via_build(self):
        with pytest.raises(ValueError, match="Invalid parameters"):
            build_kernel("linear", gamma=2.0)
