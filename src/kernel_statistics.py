"""Trace and mean of an implicit kernel matrix, and the derived scaling factor.

For a kernel k and data x_1..x_N the statistics are

    trace = sum_i k(x_i, x_i)
    mean  = sum_ij k(x_i, x_j) / N^2

and the scaling factor written into a ScaledKernel is 1 / variance with

    variance = trace / N - mean / N^2

``mean`` is already the N^2 average, so the second term divides by N^2 a
second time. This is not the feature-space variance
``trace(K)/N - sum(K)/N^2`` used for "multiplicative kernel scaling" in
multiple kernel learning (Kloft, Brefeld, Sonnenburg, Zien: l_p-Norm
Multiple Kernel Learning, JMLR 12, 2011), and the scaled kernel does not in
general have unit feature-space variance. K is never materialized: each
unordered pair is evaluated once while walking the lower triangle tile by
tile.
"""

from dataclasses import dataclass

from joblib import Parallel, delayed

from .block_pairs import DEFAULT_BLOCK_SIZE, block_ranges, count_pairs, visit_block_pairs


class DegenerateStatisticsError(ArithmeticError):
    """The kernel variance ``trace/N - mean/N^2`` is not strictly positive."""

    def __init__(self, statistics):
        self.statistics = statistics
        super().__init__(
            f"kernel variance must be positive, got {statistics.variance!r} "
            f"(trace={statistics.trace!r}, mean={statistics.mean!r}, n={statistics.n_samples})"
        )


@dataclass(frozen=True)
class KernelStatistics:
    """Trace and mean of a kernel matrix over ``n_samples`` points.

    ``mean`` averages all N^2 entries, diagonal included.
    """
    trace: float
    mean: float
    n_samples: int

    @property
    def variance(self):
        n = self.n_samples
        return self.trace / n - self.mean / n / n

    @property
    def scaling_factor(self):
        return 1.0 / self.variance

    def as_dict(self):
        return {
            "trace": self.trace,
            "mean": self.mean,
            "n_samples": self.n_samples,
            "variance": self.variance,
        }


def _diagonal_block_sums(kernel, data, block):
    """Partial (trace, raw) sums of a diagonal tile; diagonal counted half in raw."""
    trace = 0.0
    raw = 0.0
    for i in block:
        xi = data[i]
        for j in range(block.start, i):
            raw += kernel(xi, data[j])
        d = kernel(xi, xi)
        raw += 0.5 * d
        trace += d
    return trace, raw


def _off_diagonal_block_sum(kernel, data, rows, cols):
    raw = 0.0
    for i in rows:
        xi = data[i]
        for j in cols:
            raw += kernel(xi, data[j])
    return raw


def _off_diagonal_block_sums(kernel, data, rows, cols):
    return 0.0, _off_diagonal_block_sum(kernel, data, rows, cols)


def compute_kernel_statistics(kernel, data, block_size=DEFAULT_BLOCK_SIZE, n_jobs=1):
    """Compute trace and mean of the kernel matrix of ``data``.

    Each diagonal entry and each unordered off-diagonal pair is evaluated
    exactly once, N(N+1)/2 calls in total, with O(1) extra memory in the
    sequential case.

    Parameters
    ----------
    kernel : callable
        Symmetric function ``kernel(x, y) -> float``.
    data : sequence
        Indexable collection supporting ``len`` with at least two elements.
        Rows of a 2-D array are treated as the elements.
    block_size : int
        Tile side length of the traversal. Affects evaluation order only.
    n_jobs : int
        If not 1, tiles are evaluated concurrently with joblib threads and
        their partial sums reduced in tile order.

    Returns
    -------
    KernelStatistics

    Raises
    ------
    ValueError
        If ``data`` holds fewer than two elements or ``block_size`` is not a
        positive integer. Nothing is evaluated in that case.
    """
    n = len(data)
    if n < 2:
        raise ValueError(f"data needs to contain at least two points, got {n}")
    # validates block_size before any evaluation
    block_ranges(n, block_size)

    trace = 0.0
    raw = 0.0
    if n_jobs == 1:
        def accumulate(partial):
            nonlocal trace, raw
            trace += partial[0]
            raw += partial[1]

        visit_block_pairs(
            n,
            lambda block: accumulate(_diagonal_block_sums(kernel, data, block)),
            lambda rows, cols: accumulate(_off_diagonal_block_sums(kernel, data, rows, cols)),
            block_size=block_size,
        )
    else:
        tasks = []
        visit_block_pairs(
            n,
            lambda block: tasks.append(delayed(_diagonal_block_sums)(kernel, data, block)),
            lambda rows, cols: tasks.append(
                delayed(_off_diagonal_block_sums)(kernel, data, rows, cols)
            ),
            block_size=block_size,
        )
        for t, r in Parallel(n_jobs=n_jobs, backend="threading")(tasks):
            trace += t
            raw += r

    # only one half of the matrix was visited
    mean = 2.0 * raw / n / n
    return KernelStatistics(trace=trace, mean=mean, n_samples=n)


def apply_unit_variance_scaling(scaled_kernel, statistics):
    """Set ``scaled_kernel.factor`` to ``1 / statistics.variance``.

    Returns the factor written. Raises DegenerateStatisticsError, leaving
    the holder unchanged, if the variance is not strictly positive.
    """
    variance = statistics.variance
    # NaN fails this comparison too
    if not variance > 0:
        raise DegenerateStatisticsError(statistics)
    factor = 1.0 / variance
    scaled_kernel.set_factor(factor)
    return factor


class NormalizeKernelUnitVariance:
    """Determine the variance-normalizing factor of a ScaledKernel on a dataset.

    Statistics are computed on ``scaled_kernel.base`` and kept for later
    queries through ``trace``, ``mean`` and ``statistics``. Querying them
    before the first computation raises RuntimeError.
    """

    name = "NormalizeKernelUnitVariance"

    def __init__(self, block_size=DEFAULT_BLOCK_SIZE, n_jobs=1):
        self.block_size = block_size
        self.n_jobs = n_jobs
        self._statistics = None

    @property
    def statistics(self):
        if self._statistics is None:
            raise RuntimeError(f"{self.name} has not computed any statistics yet")
        return self._statistics

    @property
    def trace(self):
        return self.statistics.trace

    @property
    def mean(self):
        return self.statistics.mean

    def compute(self, kernel, data):
        self._statistics = compute_kernel_statistics(
            kernel, data, block_size=self.block_size, n_jobs=self.n_jobs
        )
        return self._statistics

    def train(self, scaled_kernel, data):
        """Normalize ``scaled_kernel`` on ``data`` and return the new factor."""
        statistics = self.compute(scaled_kernel.base, data)
        return apply_unit_variance_scaling(scaled_kernel, statistics)

    def __repr__(self):
        return f"{self.name}(block_size={self.block_size}, n_jobs={self.n_jobs})"


def expected_evaluations(n):
    """Kernel calls made by ``compute_kernel_statistics`` for ``n`` points."""
    return count_pairs(n)
