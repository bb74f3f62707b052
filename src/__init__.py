"""Variance normalization of kernels via streaming trace and mean."""

from .block_pairs import DEFAULT_BLOCK_SIZE, block_ranges, iter_block_pairs, visit_block_pairs
from .kernel_statistics import (
    DegenerateStatisticsError,
    KernelStatistics,
    NormalizeKernelUnitVariance,
    apply_unit_variance_scaling,
    compute_kernel_statistics,
)
from .kernels import (
    GaussianRBFKernel,
    LaplacianKernel,
    LinearKernel,
    PolynomialKernel,
    ScaledKernel,
    build_kernel,
    kernel_matrix,
    parse_kernel_spec,
)
from .metrics import NormalizationSummary, aggregate_results
from .preprocessing import random_subsample, standardize_features

__all__ = [
    "DEFAULT_BLOCK_SIZE",
    "block_ranges",
    "iter_block_pairs",
    "visit_block_pairs",
    "compute_kernel_statistics",
    "apply_unit_variance_scaling",
    "KernelStatistics",
    "NormalizeKernelUnitVariance",
    "DegenerateStatisticsError",
    "LinearKernel",
    "PolynomialKernel",
    "GaussianRBFKernel",
    "LaplacianKernel",
    "ScaledKernel",
    "build_kernel",
    "parse_kernel_spec",
    "kernel_matrix",
    "NormalizationSummary",
    "aggregate_results",
    "standardize_features",
    "random_subsample",
]
