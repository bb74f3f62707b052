"""Array dataset ABC and file parsers."""

from abc import ABC, abstractmethod
from pathlib import Path

import numpy as np


class ArrayDataset(ABC):
    """Abstract base for datasets yielding (name, X) tuples.

    ``X`` is an ndarray of shape (N, D); its rows are the points a kernel is
    evaluated on.
    """

    @abstractmethod
    def __iter__(self):
        """Yield (name: str, X: ndarray of shape (N, D)) tuples."""

    def __repr__(self):
        return f"{self.__class__.__name__}()"


class InMemoryDataset(ArrayDataset):
    """Wrap already loaded arrays, keyed by name."""

    def __init__(self, arrays):
        self.arrays = dict(arrays)

    def __iter__(self):
        for name, X in self.arrays.items():
            yield name, _as_points(X)

    def __repr__(self):
        return f"InMemoryDataset({len(self.arrays)} arrays)"


def _as_points(X):
    """Return X as a 2-D float64 array, treating 1-D input as N scalar points."""
    X = np.asarray(X, dtype=np.float64)
    if X.ndim == 1:
        X = X[:, np.newaxis]
    if X.ndim != 2:
        raise ValueError(f"Expected a 1-D or 2-D array, got shape {X.shape}")
    return X


# ---------------------------------------------------------------------------
# File parsers
# ---------------------------------------------------------------------------

def _parse_off(path):
    """Parse an OFF mesh file, return its vertices as an Nx3 array.

    Only the x, y, z coordinates of each vertex line are kept (extra columns
    such as colors are dropped), so OFF files always give 3-D point sets.
    Use .csv, .txt or .npy for inputs of other dimensions.
    """
    with open(path, 'r') as f:
        header = f.readline().strip()
        if header == 'OFF':
            counts = f.readline().strip().split()
        elif header.startswith('OFF'):
            counts = header[3:].strip().split()
        else:
            raise ValueError(f"Not a valid OFF file: {path}")
        n_verts = int(counts[0])
        verts = []
        while len(verts) < n_verts:
            line = f.readline()
            if not line:
                break
            parts = line.split()
            if parts:
                verts.append([float(x) for x in parts[:3]])
    return np.array(verts, dtype=np.float64).reshape(-1, 3)


def _parse_delimited(path, delimiter=None):
    """Parse a numeric text table (one point per row); '#' starts a comment."""
    X = np.loadtxt(path, delimiter=delimiter, ndmin=2, comments='#')
    return X.astype(np.float64)


def _parse_csv(path):
    return _parse_delimited(path, delimiter=',')


def _parse_npy(path):
    return _as_points(np.load(path))


_PARSERS = {
    '.off': _parse_off,
    '.csv': _parse_csv,
    '.txt': _parse_delimited,
    '.npy': _parse_npy,
}


def load_points(path):
    """Load a point array from any supported file type."""
    suffix = Path(path).suffix.lower()
    try:
        parser = _PARSERS[suffix]
    except KeyError:
        raise ValueError(
            f"Unsupported file type: {path}. Choose from {tuple(_PARSERS)}"
        ) from None
    return parser(path)
