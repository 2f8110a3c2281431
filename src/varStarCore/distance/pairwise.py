"""
Pairwise distance matrices over a list of observations.

Rows of the upper triangle can be spread over joblib workers; distance
measures are stateless and shared between them.
"""

from typing import Sequence, Union
import numpy as np
from joblib import Parallel, delayed

from ..core.base import DistanceMeasure, VectorDistanceType
from ..core.exceptions import DimensionMismatchError
from ..utils.helpers import as_matrix
from ..utils.logger import get_logger
from .vector_distance import generate_distance


logger = get_logger(__name__)


def _upper_row(observations: np.ndarray, idx: int, measure: DistanceMeasure) -> np.ndarray:
    row = np.zeros(observations.shape[0])
    for j in range(idx + 1, observations.shape[0]):
        row[j] = measure.compute(observations[idx], observations[j])
    return row


class PairwiseDistances:
    """
    Symmetric distance matrix between observation vectors.

    Args:
        observations: Sequence of equal-length vectors (or a 2-D array, one row each)
    """

    def __init__(self, observations: Union[Sequence[np.ndarray], np.ndarray]):
        if len(observations) == 0:
            self.observations = np.empty((0, 0))
            return
        try:
            arr = np.asarray(observations, dtype=float)
        except ValueError as exc:
            raise DimensionMismatchError(f"Observations must be equal-length vectors: {exc}") from exc
        self.observations = as_matrix(arr, "observations")

    def generate(
        self,
        distance_type: Union[VectorDistanceType, DistanceMeasure] = VectorDistanceType.EUCLIDEAN_DISTANCE,
        n_jobs: int = 1,
    ) -> np.ndarray:
        """
        Compute the full distance matrix.

        Args:
            distance_type: A VectorDistanceType or any DistanceMeasure instance
            n_jobs: joblib worker count; 1 computes serially

        Returns:
            (n, n) symmetric matrix with a zero diagonal
        """
        measure = distance_type if isinstance(distance_type, DistanceMeasure) else generate_distance(distance_type)
        n = self.observations.shape[0]
        logger.debug(f"Computing {n}x{n} distances with {type(measure).__name__}, n_jobs={n_jobs}")

        if n_jobs == 1:
            rows = [_upper_row(self.observations, i, measure) for i in range(n)]
        else:
            rows = Parallel(n_jobs=n_jobs, prefer="threads")(
                delayed(_upper_row)(self.observations, i, measure) for i in range(n)
            )

        upper = np.vstack(rows) if rows else np.zeros((0, 0))
        return upper + upper.T
