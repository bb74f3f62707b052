"""Directory-based array dataset loader."""

from pathlib import Path

from ..preprocessing import random_subsample
from .base import _PARSERS, ArrayDataset


class DirectoryDataset(ArrayDataset):
    """Load point arrays from every supported file under a directory.

    Files with more than ``max_points`` rows are subsampled with a fixed
    seed so repeated runs see the same points.
    """

    SUPPORTED_EXTENSIONS = set(_PARSERS.keys())

    def __init__(self, root_dir, max_points=1024, seed=0):
        self.root_dir = Path(root_dir)
        self.max_points = max_points
        self.seed = seed
        if not self.root_dir.is_dir():
            raise FileNotFoundError(f"Directory not found: {root_dir}")

    def __iter__(self):
        files = sorted(
            p for p in self.root_dir.rglob('*')
            if p.suffix.lower() in self.SUPPORTED_EXTENSIONS
        )
        for fpath in files:
            try:
                points = _PARSERS[fpath.suffix.lower()](str(fpath))
            except (OSError, ValueError) as e:
                print(f"Warning: skipping {fpath}: {e}")
                continue
            if len(points) == 0:
                continue
            points = random_subsample(points, self.max_points, seed=self.seed)
            yield str(fpath.relative_to(self.root_dir)), points

    def __repr__(self):
        return f"DirectoryDataset({self.root_dir})"
