"""Tests for block_pairs module."""

import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.block_pairs import block_ranges, count_pairs, iter_block_pairs, visit_block_pairs


def _lower_triangle_cells(n, block_size):
    """Expand tiles into (i, j) cells with j <= i, as a consumer would visit them."""
    cells = []
    for rows, cols in iter_block_pairs(n, block_size):
        for i in rows:
            for j in cols:
                if rows is cols and j > i:
                    continue
                cells.append((i, j))
    return cells


class TestBlockRanges:
    def test_exact_multiple(self):
        blocks = block_ranges(8, 4)
        assert blocks == [range(0, 4), range(4, 8)]

    def test_remainder_block_is_short(self):
        blocks = block_ranges(10, 4)
        assert [len(b) for b in blocks] == [4, 4, 2]
        assert blocks[-1] == range(8, 10)

    def test_block_larger_than_n(self):
        assert block_ranges(5, 64) == [range(0, 5)]

    def test_empty(self):
        assert block_ranges(0, 3) == []

    def test_accepts_numpy_integer(self):
        assert block_ranges(10, np.int64(4)) == block_ranges(10, 4)

    @pytest.mark.parametrize("bad", [0, -2, 1.5, None, True])
    def test_rejects_invalid_block_size(self, bad):
        with pytest.raises(ValueError):
            block_ranges(10, bad)


class TestIterBlockPairs:
    @pytest.mark.parametrize("n,block_size", [(1, 1), (7, 1), (7, 3), (12, 4), (12, 64), (130, 64)])
    def test_covers_lower_triangle_once(self, n, block_size):
        """Every cell with j <= i appears exactly once."""
        cells = _lower_triangle_cells(n, block_size)
        assert len(cells) == count_pairs(n)
        assert set(cells) == {(i, j) for i in range(n) for j in range(i + 1)}

    def test_off_diagonal_columns_precede_rows(self):
        for rows, cols in iter_block_pairs(20, 6):
            if rows is not cols:
                assert cols.stop <= rows.start

    def test_diagonal_tile_first_per_row_block(self):
        tiles = list(iter_block_pairs(9, 3))
        # rows: [0,3) -> diag; [3,6) -> diag, (1,0); [6,9) -> diag, (2,0), (2,1)
        assert len(tiles) == 6
        assert tiles[0][0] is tiles[0][1]
        assert tiles[1][0] is tiles[1][1]
        assert tiles[2] == (range(3, 6), range(0, 3))
        assert tiles[3][0] is tiles[3][1]


class TestVisitBlockPairs:
    def test_dispatch(self):
        diagonal, off_diagonal = [], []
        n_tiles = visit_block_pairs(
            10,
            on_diagonal=diagonal.append,
            on_off_diagonal=lambda rows, cols: off_diagonal.append((rows, cols)),
            block_size=4,
        )
        assert diagonal == [range(0, 4), range(4, 8), range(8, 10)]
        assert off_diagonal == [
            (range(4, 8), range(0, 4)),
            (range(8, 10), range(0, 4)),
            (range(8, 10), range(4, 8)),
        ]
        assert n_tiles == 6
