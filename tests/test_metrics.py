"""Tests for metrics module."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.metrics import aggregate_results


class TestAggregateResults:
    def test_empty_results(self):
        """Empty results list should return zeroed statistics."""
        stats = aggregate_results([], dataset_name="empty", kernel_name="rbf")
        assert stats.dataset_name == "empty"
        assert stats.kernel_name == "rbf"
        assert stats.n_items == 0
        assert stats.scaling_factor_mean == 0.0

    def test_mock_results(self):
        """Aggregate with known mock data should produce correct values."""
        results = [
            {'trace': 10.0, 'mean': 3.5, 'n_samples': 2, 'variance': 4.125,
             'scaling_factor': 1 / 4.125},
            {'trace': 4.0, 'mean': 1.0, 'n_samples': 4, 'variance': 0.9375,
             'scaling_factor': 1 / 0.9375},
            {'trace': 0.0, 'mean': 0.0, 'n_samples': 3, 'variance': 0.0,
             'scaling_factor': None},
        ]
        stats = aggregate_results(results, dataset_name="test", kernel_name="linear")
        assert stats.n_items == 3
        assert stats.n_degenerate == 1
        assert stats.trace_mean == pytest.approx(14.0 / 3)
        assert stats.kernel_mean_mean == pytest.approx(1.5)
        assert stats.scaling_factor_mean == pytest.approx((1 / 4.125 + 1 / 0.9375) / 2)
        assert stats.scaling_factor_min == pytest.approx(1 / 4.125)
        assert stats.scaling_factor_max == pytest.approx(1 / 0.9375)

    def test_all_degenerate(self):
        results = [{'trace': 0.0, 'mean': 0.0, 'n_samples': 2, 'variance': 0.0,
                    'scaling_factor': None}]
        stats = aggregate_results(results)
        assert stats.n_degenerate == 1
        assert stats.scaling_factor_mean == 0.0
