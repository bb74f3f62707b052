"""Synthetic point sets from scikit-learn's sample generators."""

import numpy as np
from sklearn import datasets as skdatasets

from .base import ArrayDataset


def _blobs(n_samples, noise, rng):
    X, _ = skdatasets.make_blobs(
        n_samples=n_samples, n_features=2, centers=3, cluster_std=1.0 + noise, random_state=rng,
    )
    return X


def _moons(n_samples, noise, rng):
    X, _ = skdatasets.make_moons(n_samples=n_samples, noise=noise, random_state=rng)
    return X


def _circles(n_samples, noise, rng):
    X, _ = skdatasets.make_circles(n_samples=n_samples, noise=noise, factor=0.5, random_state=rng)
    return X


def _swiss_roll(n_samples, noise, rng):
    X, _ = skdatasets.make_swiss_roll(n_samples=n_samples, noise=noise, random_state=rng)
    return X


_GENERATORS = {
    'blobs': _blobs,
    'moons': _moons,
    'circles': _circles,
    'swiss_roll': _swiss_roll,
}


class SyntheticDataset(ArrayDataset):
    """Synthetic point sets.

    ``len(shapes)`` generators × n_instances × len(noise_levels) items.
    """

    def __init__(self, shapes=None, n_instances=3, n_samples=256, noise_levels=(0.0, 0.1), seed=42):
        shapes = tuple(_GENERATORS) if shapes is None else tuple(shapes)
        unknown = [s for s in shapes if s not in _GENERATORS]
        if unknown:
            raise ValueError(f"Unknown synthetic shapes: {unknown}. Choose from {tuple(_GENERATORS)}")
        self.shapes = shapes
        self.n_instances = n_instances
        self.n_samples = n_samples
        self.noise_levels = noise_levels
        self.seed = seed

    def __iter__(self):
        rng = np.random.RandomState(self.seed)
        for shape_name in self.shapes:
            gen_fn = _GENERATORS[shape_name]
            for inst in range(self.n_instances):
                for noise in self.noise_levels:
                    X = gen_fn(self.n_samples, noise, rng)
                    name = f"synthetic/{shape_name}/inst{inst:02d}_noise{noise:.3f}"
                    yield name, np.asarray(X, dtype=np.float64)

    def __repr__(self):
        n = len(self.shapes) * self.n_instances * len(self.noise_levels)
        return f"SyntheticDataset({n} sets)"
