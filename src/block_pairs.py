"""Tiled traversal of the lower triangle of a symmetric N x N relation.

The index range ``[0, N)`` is cut into contiguous blocks of ``block_size``
indices (the last block is short when N is not a multiple of the block
size). Every unordered pair ``(i, j)`` with ``j <= i`` lies in exactly one
tile: either a diagonal block (rows == cols) or an off-diagonal block pair
whose column block precedes its row block.
"""

import operator

DEFAULT_BLOCK_SIZE = 64


def _check_block_size(block_size):
    """Return block_size as an int; any integer type except bool is accepted."""
    try:
        size = operator.index(block_size)
    except TypeError:
        size = None
    if isinstance(block_size, bool) or size is None or size < 1:
        raise ValueError(f"block_size must be a positive integer, got {block_size!r}")
    return size


def block_ranges(n, block_size=DEFAULT_BLOCK_SIZE):
    """Split ``[0, n)`` into consecutive index ranges of at most ``block_size``."""
    block_size = _check_block_size(block_size)
    return [range(start, min(start + block_size, n)) for start in range(0, n, block_size)]


def iter_block_pairs(n, block_size=DEFAULT_BLOCK_SIZE):
    """Yield ``(rows, cols)`` tiles covering the lower triangle of ``[0, n)^2``.

    For each row block the diagonal tile comes first, followed by the
    off-diagonal tiles against every earlier column block. A diagonal tile
    has ``rows == cols``; the caller must restrict itself to ``j <= i``
    inside it. Off-diagonal tiles are visited in full.

    Parameters
    ----------
    n : int
        Number of indices.
    block_size : int
        Side length of a tile. Values ``>= n`` give a single diagonal tile.

    Yields
    ------
    rows, cols : range, range
    """
    blocks = block_ranges(n, block_size)
    for ci, rows in enumerate(blocks):
        yield rows, rows
        for cj in range(ci):
            yield rows, blocks[cj]


def visit_block_pairs(n, on_diagonal, on_off_diagonal, block_size=DEFAULT_BLOCK_SIZE):
    """Dispatch every tile of ``iter_block_pairs`` to one of two callbacks.

    ``on_diagonal(block)`` receives the index range of a diagonal block and
    ``on_off_diagonal(rows, cols)`` receives a block pair with ``cols``
    strictly before ``rows``. Returns the number of tiles visited.
    """
    n_tiles = 0
    for rows, cols in iter_block_pairs(n, block_size):
        if rows is cols:
            on_diagonal(rows)
        else:
            on_off_diagonal(rows, cols)
        n_tiles += 1
    return n_tiles


def count_pairs(n):
    """Number of unordered pairs including the diagonal: n(n+1)/2."""
    return n * (n + 1) // 2
