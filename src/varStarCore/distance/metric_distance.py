"""
Learned-metric distances and their multi-view combination.

A metric-learning collaborator produces per-view matrices; these classes turn
them into distances. Weights of multi-view terms are used as given: the
caller decides whether they sum to one.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Mapping, Tuple
import numpy as np

from ..core.exceptions import DimensionMismatchError, InputConsistencyError, NumericalError
from ..utils.helpers import as_matrix, as_vector, check_same_length, check_shape


# Relative slack on negative eigenvalues from rounding in learned metrics
PSD_TOLERANCE = 1e-10


def _check_positive_semidefinite(metric_matrix: np.ndarray, name: str) -> None:
    eigenvalues = np.linalg.eigvalsh(0.5 * (metric_matrix + metric_matrix.T))
    scale = max(1.0, float(np.max(np.abs(eigenvalues))))
    if eigenvalues.min() < -PSD_TOLERANCE * scale:
        raise NumericalError(
            f"{name} is not positive semi-definite (smallest eigenvalue {eigenvalues.min():.3g})"
        )


class MetricDistance:
    """
    Squared Mahalanobis-type distance for a metric matrix ``M``.

    distance(a, b) = (a - b)' M (a - b)

    ``M`` must be positive semi-definite; otherwise NumericalError is raised
    on construction.
    """

    def __init__(self, metric_matrix: np.ndarray):
        self.metric_matrix = as_matrix(metric_matrix, "metric_matrix")
        n_rows, n_cols = self.metric_matrix.shape
        if n_rows != n_cols:
            raise DimensionMismatchError(f"Metric matrix must be square, got {self.metric_matrix.shape}")
        _check_positive_semidefinite(self.metric_matrix, "metric_matrix")

    def _delta(self, a, b) -> np.ndarray:
        a = as_vector(a, "a")
        b = as_vector(b, "b")
        check_same_length(a, b)
        check_shape(self.metric_matrix, (a.shape[0], a.shape[0]), "metric_matrix")
        return a - b

    def distance(self, a, b) -> float:
        delta = self._delta(a, b)
        return max(float(delta @ self.metric_matrix @ delta), 0.0)

    def trace_distance(self, a, b) -> float:
        """trace(M (a - b)(a - b)'), equal to ``distance`` up to rounding."""
        delta = self._delta(a, b)
        return max(float(np.trace(self.metric_matrix @ np.outer(delta, delta))), 0.0)

    def distance_sqrt(self, a, b) -> float:
        return float(np.sqrt(self.distance(a, b)))

    def __call__(self, a, b) -> float:
        return self.distance(a, b)


class MatrixMetricDistance:
    """
    Bilinear distance between matrix patterns.

    distance(X_i, X_j) = trace(U D' V D) with D = X_i - X_j, where ``U`` acts on
    the columns and ``V`` on the rows of the pattern.
    """

    def __init__(self, u: np.ndarray, v: np.ndarray):
        self.u = as_matrix(u, "u")
        self.v = as_matrix(v, "v")
        for name, matrix in (("u", self.u), ("v", self.v)):
            if matrix.shape[0] != matrix.shape[1]:
                raise DimensionMismatchError(f"{name} must be square, got {matrix.shape}")
            _check_positive_semidefinite(matrix, name)

    def matrix_distance(self, x_i, x_j) -> float:
        x_i = as_matrix(x_i, "x_i")
        x_j = as_matrix(x_j, "x_j")
        if x_i.shape != x_j.shape:
            raise DimensionMismatchError(f"Patterns have shapes {x_i.shape} and {x_j.shape}")
        return self.delta_distance(x_i - x_j)

    def delta_distance(self, delta) -> float:
        delta = as_matrix(delta, "delta")
        n_rows, n_cols = delta.shape
        check_shape(self.u, (n_cols, n_cols), "u")
        check_shape(self.v, (n_rows, n_rows), "v")
        return max(float(np.trace(self.u @ delta.T @ self.v @ delta)), 0.0)

    def __call__(self, x_i, x_j) -> float:
        return self.matrix_distance(x_i, x_j)


@dataclass(frozen=True, eq=False)
class MultiViewMetric:
    """One vector view's metric matrix and weight."""
    mk: np.ndarray
    weight: float


@dataclass(frozen=True, eq=False)
class MultiViewMatrixMetric:
    """One matrix view's pair of metric matrices and weight."""
    uk: np.ndarray
    vk: np.ndarray
    weight: float


def combine_multiview_distance(
    terms: Iterable[Tuple[object, object, float]],
    distance: Callable[[object, object], float],
) -> float:
    """
    Weighted sum of per-view distances.

    Args:
        terms: ``(u_v, v_v, weight_v)`` per view
        distance: Per-view distance function applied to ``(u_v, v_v)``

    Returns:
        sum of ``weight_v * distance(u_v, v_v)``
    """
    total = 0.0
    for u, v, weight in terms:
        total += float(weight) * float(distance(u, v))
    return total


class MultiViewMetricDistance:
    """
    Distance over named views using one learned metric per view.

    ``metrics`` maps view name to MultiViewMetric (vector views) or
    MultiViewMatrixMetric (matrix views). Both subjects must carry every view
    named in ``metrics``.
    """

    def __init__(self, metrics: Mapping[str, object]):
        self._distances = {}
        self._weights = {}
        for view, metric in metrics.items():
            if isinstance(metric, MultiViewMetric):
                self._distances[view] = MetricDistance(metric.mk)
            elif isinstance(metric, MultiViewMatrixMetric):
                self._distances[view] = MatrixMetricDistance(metric.uk, metric.vk)
            else:
                raise TypeError(f"Unsupported metric for view '{view}': {type(metric).__name__}")
            self._weights[view] = float(metric.weight)

    @property
    def views(self):
        return list(self._distances)

    def multiview_distance(self, x_i: Mapping[str, np.ndarray], x_j: Mapping[str, np.ndarray]) -> float:
        missing = [v for v in self._distances if v not in x_i or v not in x_j]
        if missing:
            raise InputConsistencyError(f"Subjects lack view(s) {missing}")
        return sum(
            self._weights[view] * self._distances[view](x_i[view], x_j[view])
            for view in self._distances
        )

    def __call__(self, x_i, x_j) -> float:
        return self.multiview_distance(x_i, x_j)
