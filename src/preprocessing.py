"""Point array preprocessing applied before kernel normalization."""

import numpy as np


def standardize_features(X):
    """Shift each feature to zero mean and scale it to unit standard deviation.

    Constant features are centered but left unscaled.

    Parameters
    ----------
    X : ndarray of shape (N, D)

    Returns
    -------
    standardized : ndarray of shape (N, D)
    mean : ndarray of shape (D,)
    std : ndarray of shape (D,)
        Per-feature standard deviation before scaling (1.0 for constant features).
    """
    X = np.asarray(X, dtype=np.float64)
    mean = X.mean(axis=0)
    std = X.std(axis=0)
    std = np.where(std < 1e-12, 1.0, std)
    return (X - mean) / std, mean, std


def random_subsample(points, n_points, seed=None):
    """Randomly subsample rows to exactly n_points, preserving their order.

    Returns the input unchanged when it has at most n_points rows.
    """
    if n_points is None or len(points) <= n_points:
        return points
    rng = np.random.RandomState(seed)
    idx = np.sort(rng.choice(len(points), n_points, replace=False))
    return points[idx]
