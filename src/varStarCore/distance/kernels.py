"""
Kernel functions for density estimation.

Univariate kernels are plain callables on a scalar; the multivariate Gaussian
kernel takes a vector and a symmetric positive-definite bandwidth matrix.
All kernels are stateless and may be shared between threads.
"""

import math
from typing import Optional
import numpy as np

from ..core.base import KernelType, MultivariateKernel, UnivariateKernel
from ..core.exceptions import NumericalError
from ..utils.helpers import as_matrix, as_vector, check_shape


# Bandwidth matrices with a larger condition number are treated as singular
MAX_CONDITION_NUMBER = 1.0 / np.finfo(float).eps


class GaussianKernel(UnivariateKernel):
    """Standard normal density."""

    def value(self, x: float) -> float:
        return math.exp(-0.5 * x * x) / math.sqrt(2.0 * math.pi)


class CauchyKernel(UnivariateKernel):
    """Standard Cauchy density."""

    def value(self, x: float) -> float:
        return (1.0 / math.pi) * (1.0 / (1.0 + x * x))


class EpanechnikovKernel(UnivariateKernel):

    def value(self, x: float) -> float:
        if abs(x) < 1:
            return 0.75 * (1 - x * x)
        return 0.0


class TriangleKernel(UnivariateKernel):

    def value(self, x: float) -> float:
        if x < -1 or x > 1:
            return 0.0
        return 1 - abs(x)


class UniformKernel(UnivariateKernel):
    """Uniform density on [-1, 1]."""

    def value(self, x: float) -> float:
        if abs(x) <= 1:
            return 0.5
        return 0.0


_UNIVARIATE_KERNELS = {
    KernelType.CAUCHY: CauchyKernel,
    KernelType.EPANECHNIKOV: EpanechnikovKernel,
    KernelType.GAUSSIAN: GaussianKernel,
    KernelType.TRIANGLE: TriangleKernel,
    KernelType.UNIFORM: UniformKernel,
}


def generate_univariate_kernel(kernel_type: KernelType) -> UnivariateKernel:
    """Create the univariate kernel named by ``kernel_type``."""
    if isinstance(kernel_type, str):
        kernel_type = KernelType(kernel_type.lower())
    try:
        return _UNIVARIATE_KERNELS[kernel_type]()
    except KeyError:
        raise ValueError(f"Unsupported kernel type: {kernel_type}") from None


class MultivariateGaussianKernel(MultivariateKernel):
    """
    Multivariate Gaussian kernel.

    density = exp(-0.5 * x' H^-1 x) / sqrt((2 pi)^d * |H|)

    ``H`` defaults to the identity. It must be symmetric positive-definite and
    well conditioned; otherwise NumericalError is raised instead of returning
    a non-finite density.
    """

    @staticmethod
    def _cholesky(x: np.ndarray, bandwidth: Optional[np.ndarray]) -> np.ndarray:
        """Validated lower Cholesky factor of the bandwidth matrix for ``x``."""
        d = x.shape[0]
        if bandwidth is None:
            H = np.eye(d)
        else:
            H = as_matrix(bandwidth, "bandwidth")
            check_shape(H, (d, d), "bandwidth")

        if not np.allclose(H, H.T):
            raise NumericalError("Bandwidth matrix is not symmetric")
        with np.errstate(divide="ignore", invalid="ignore"):
            condition = np.linalg.cond(H)
        if not np.isfinite(condition) or condition > MAX_CONDITION_NUMBER:
            raise NumericalError("Bandwidth matrix is singular or ill-conditioned")
        try:
            return np.linalg.cholesky(H)
        except np.linalg.LinAlgError as exc:
            raise NumericalError(f"Bandwidth matrix is not positive-definite: {exc}") from exc

    @staticmethod
    def _quadratic_form(chol: np.ndarray, x: np.ndarray) -> float:
        # x' H^-1 x = |L^-1 x|^2 with H = L L'
        z = np.linalg.solve(chol, x)
        return float(z @ z)

    def evaluate(self, x: np.ndarray, bandwidth: Optional[np.ndarray] = None) -> float:
        x = as_vector(x, "x")
        chol = self._cholesky(x, bandwidth)
        d = x.shape[0]
        log_det = 2.0 * float(np.sum(np.log(np.diag(chol))))
        log_density = -0.5 * (d * math.log(2.0 * math.pi) + log_det + self._quadratic_form(chol, x))
        return math.exp(log_density)

    def mahalanobis(self, x: np.ndarray, bandwidth: Optional[np.ndarray] = None) -> float:
        """The quadratic form x' H^-1 x the density decreases in."""
        x = as_vector(x, "x")
        return self._quadratic_form(self._cholesky(x, bandwidth), x)
