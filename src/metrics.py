"""Aggregate statistics over many kernel normalization runs."""

from dataclasses import dataclass

import numpy as np


@dataclass
class NormalizationSummary:
    """Aggregate statistics for one (dataset, kernel) combination."""
    dataset_name: str
    kernel_name: str = "unknown"
    n_items: int = 0
    n_degenerate: int = 0
    trace_mean: float = 0.0
    kernel_mean_mean: float = 0.0
    variance_mean: float = 0.0
    scaling_factor_mean: float = 0.0
    scaling_factor_min: float = 0.0
    scaling_factor_max: float = 0.0


def aggregate_results(results_list, dataset_name="unknown", kernel_name="unknown"):
    """Compute aggregate statistics from per-item normalization results.

    Parameters
    ----------
    results_list : list of dict
        Each dict has keys: trace, mean, n_samples, variance, and
        scaling_factor (None when the statistics were degenerate).
    dataset_name : str
    kernel_name : str

    Returns
    -------
    NormalizationSummary
    """
    if not results_list:
        return NormalizationSummary(dataset_name=dataset_name, kernel_name=kernel_name)

    traces = [r['trace'] for r in results_list]
    means = [r['mean'] for r in results_list]
    variances = [r['variance'] for r in results_list]
    factors = [r['scaling_factor'] for r in results_list if r.get('scaling_factor') is not None]

    return NormalizationSummary(
        dataset_name=dataset_name,
        kernel_name=kernel_name,
        n_items=len(results_list),
        n_degenerate=len(results_list) - len(factors),
        trace_mean=float(np.mean(traces)),
        kernel_mean_mean=float(np.mean(means)),
        variance_mean=float(np.mean(variances)),
        scaling_factor_mean=float(np.mean(factors)) if factors else 0.0,
        scaling_factor_min=float(np.min(factors)) if factors else 0.0,
        scaling_factor_max=float(np.max(factors)) if factors else 0.0,
    )
