"""Dataset loaders for kernel normalization."""

from .base import _PARSERS, ArrayDataset, InMemoryDataset, _parse_csv, _parse_npy, _parse_off, load_points
from .directory import DirectoryDataset
from .synthetic import _GENERATORS as SYNTHETIC_SHAPES
from .synthetic import SyntheticDataset

__all__ = [
    "ArrayDataset",
    "InMemoryDataset",
    "DirectoryDataset",
    "SyntheticDataset",
    "SYNTHETIC_SHAPES",
    "load_points",
    "_parse_off",
    "_parse_csv",
    "_parse_npy",
    "_PARSERS",
]
