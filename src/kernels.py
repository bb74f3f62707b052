"""Symmetric kernel functions and the scaled-kernel wrapper."""

import numpy as np
from scipy.spatial import distance


class Kernel:
    """Base class for symmetric pairwise kernels ``k(x, y) -> float``."""

    name = "kernel"

    def __call__(self, x, y):
        return self.eval(x, y)

    def eval(self, x, y):
        raise NotImplementedError

    def params(self):
        return {}

    def __repr__(self):
        args = ", ".join(f"{k}={v!r}" for k, v in self.params().items())
        return f"{self.__class__.__name__}({args})"


class LinearKernel(Kernel):
    """Euclidean inner product ``<x, y>``."""

    name = "linear"

    def eval(self, x, y):
        return float(np.dot(np.ravel(x), np.ravel(y)))


class PolynomialKernel(Kernel):
    """``(gamma * <x, y> + coef0) ** degree``."""

    name = "polynomial"

    def __init__(self, degree=2, gamma=1.0, coef0=1.0):
        if degree < 1:
            raise ValueError(f"degree must be >= 1, got {degree}")
        self.degree = int(degree)
        self.gamma = float(gamma)
        self.coef0 = float(coef0)

    def eval(self, x, y):
        dot = float(np.dot(np.ravel(x), np.ravel(y)))
        return (self.gamma * dot + self.coef0) ** self.degree

    def params(self):
        return {"degree": self.degree, "gamma": self.gamma, "coef0": self.coef0}


class GaussianRBFKernel(Kernel):
    """Gaussian kernel ``exp(-gamma * ||x - y||^2)``."""

    name = "rbf"

    def __init__(self, gamma=1.0):
        if gamma <= 0:
            raise ValueError(f"gamma must be positive, got {gamma}")
        self.gamma = float(gamma)

    def eval(self, x, y):
        return float(np.exp(-self.gamma * distance.sqeuclidean(np.ravel(x), np.ravel(y))))

    def params(self):
        return {"gamma": self.gamma}


class LaplacianKernel(Kernel):
    """Laplacian kernel ``exp(-gamma * ||x - y||_1)``."""

    name = "laplacian"

    def __init__(self, gamma=1.0):
        if gamma <= 0:
            raise ValueError(f"gamma must be positive, got {gamma}")
        self.gamma = float(gamma)

    def eval(self, x, y):
        return float(np.exp(-self.gamma * distance.cityblock(np.ravel(x), np.ravel(y))))

    def params(self):
        return {"gamma": self.gamma}


class ScaledKernel(Kernel):
    """Wrap a base kernel and multiply its values by ``factor``.

    The base kernel is left untouched; normalizers compute their statistics
    on ``base`` and write the resulting multiplier into ``factor``.
    """

    name = "scaled"

    def __init__(self, base, factor=1.0):
        self.base = base
        self.factor = float(factor)

    def eval(self, x, y):
        return self.factor * self.base(x, y)

    def set_factor(self, factor):
        self.factor = float(factor)

    def params(self):
        return {"base": self.base, "factor": self.factor}


KERNELS = {
    LinearKernel.name: LinearKernel,
    PolynomialKernel.name: PolynomialKernel,
    GaussianRBFKernel.name: GaussianRBFKernel,
    LaplacianKernel.name: LaplacianKernel,
}


def build_kernel(name, **params):
    """Construct a kernel from its registry name and keyword parameters."""
    try:
        cls = KERNELS[name]
    except KeyError:
        raise ValueError(f"Unknown kernel: {name!r}. Choose from {tuple(KERNELS)}") from None
    try:
        return cls(**params)
    except TypeError as e:
        raise ValueError(f"Invalid parameters for kernel {name!r}: {e}") from None


def parse_kernel_spec(spec):
    """Parse ``"name"`` or ``"name:key=value,key=value"`` into a kernel.

    Numeric values are converted to int when they look integral, else float.

    >>> parse_kernel_spec("rbf:gamma=0.5")
    GaussianRBFKernel(gamma=0.5)
    """
    name, _, rest = spec.partition(":")
    params = {}
    if rest:
        for item in rest.split(","):
            key, sep, value = item.partition("=")
            if not sep or not key.strip():
                raise ValueError(f"Malformed kernel parameter {item!r} in {spec!r}")
            value = value.strip()
            try:
                params[key.strip()] = int(value)
            except ValueError:
                params[key.strip()] = float(value)
    return build_kernel(name.strip(), **params)


def kernel_matrix(kernel, data):
    """Dense N x N matrix of kernel values.

    Evaluates every ordered pair, so only intended for small datasets and as
    a reference when checking the streaming statistics.
    """
    n = len(data)
    K = np.empty((n, n), dtype=np.float64)
    for i in range(n):
        for j in range(n):
            K[i, j] = kernel(data[i], data[j])
    return K
