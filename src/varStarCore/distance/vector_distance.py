"""
Vector distance measures.

Every measure validates its inputs (finite, 1-D, equal length) and returns a
non-negative float.
"""

import numpy as np

from ..core.base import DistanceMeasure, VectorDistanceType
from ..core.exceptions import NumericalError
from ..utils.helpers import as_vector, check_same_length


def _pair(a, b):
    a = as_vector(a, "a")
    b = as_vector(b, "b")
    check_same_length(a, b)
    return a, b


class EuclideanDistance(DistanceMeasure):

    def compute(self, a: np.ndarray, b: np.ndarray) -> float:
        a, b = _pair(a, b)
        return float(np.linalg.norm(a - b))


class CityBlockDistance(DistanceMeasure):

    def compute(self, a: np.ndarray, b: np.ndarray) -> float:
        a, b = _pair(a, b)
        return float(np.sum(np.abs(a - b)))


class CanberraDistance(DistanceMeasure):
    """Sum of |a - b| / (|a| + |b|); terms with a zero denominator contribute 0."""

    def compute(self, a: np.ndarray, b: np.ndarray) -> float:
        a, b = _pair(a, b)
        numerator = np.abs(a - b)
        denominator = np.abs(a) + np.abs(b)
        nonzero = denominator > 0
        return float(np.sum(numerator[nonzero] / denominator[nonzero]))


class CorrelationDistance(DistanceMeasure):
    """
    One minus the Pearson correlation, in [0, 2].

    Zero-variance input has no defined correlation and raises NumericalError.
    """

    def compute(self, a: np.ndarray, b: np.ndarray) -> float:
        a, b = _pair(a, b)
        if a.shape[0] < 2:
            raise NumericalError("Correlation needs vectors of length >= 2")
        # Constant vectors are caught before centring leaves rounding residue
        if np.ptp(a) == 0.0 or np.ptp(b) == 0.0:
            raise NumericalError("Correlation distance is undefined for zero-variance input")
        da = a - a.mean()
        db = b - b.mean()
        norm_a = float(np.sqrt(da @ da))
        norm_b = float(np.sqrt(db @ db))
        if norm_a == 0.0 or norm_b == 0.0:
            raise NumericalError("Correlation distance is undefined for zero-variance input")
        r = float(da @ db) / (norm_a * norm_b)
        return float(np.clip(1.0 - r, 0.0, 2.0))


_DISTANCES = {
    VectorDistanceType.CITY_BLOCK: CityBlockDistance,
    VectorDistanceType.EUCLIDEAN_DISTANCE: EuclideanDistance,
    VectorDistanceType.PEARSON_DISTANCE: CorrelationDistance,
    VectorDistanceType.CANBERRA_DISTANCE: CanberraDistance,
}


def generate_distance(distance_type: VectorDistanceType) -> DistanceMeasure:
    """Create the distance measure named by ``distance_type``."""
    if isinstance(distance_type, str):
        distance_type = VectorDistanceType(distance_type)
    try:
        return _DISTANCES[distance_type]()
    except KeyError:
        raise ValueError(f"Distance type {distance_type} not available for pairwise distances") from None


def correlation_distance(a, b) -> float:
    """Functional form of CorrelationDistance."""
    return CorrelationDistance().compute(a, b)
