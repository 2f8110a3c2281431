"""
Distance and kernel layer for varStarCore.

Stateless kernels and distances consumed by nearest-neighbour, metric-learning
and density-based classifiers.
"""

from .kernels import (
    GaussianKernel,
    CauchyKernel,
    EpanechnikovKernel,
    TriangleKernel,
    UniformKernel,
    MultivariateGaussianKernel,
    generate_univariate_kernel,
)
from .vector_distance import (
    EuclideanDistance,
    CityBlockDistance,
    CanberraDistance,
    CorrelationDistance,
    correlation_distance,
    generate_distance,
)
from .metric_distance import (
    MetricDistance,
    MatrixMetricDistance,
    MultiViewMetric,
    MultiViewMatrixMetric,
    MultiViewMetricDistance,
    combine_multiview_distance,
)
from .pairwise import PairwiseDistances

__all__ = [
    # Kernels
    "GaussianKernel",
    "CauchyKernel",
    "EpanechnikovKernel",
    "TriangleKernel",
    "UniformKernel",
    "MultivariateGaussianKernel",
    "generate_univariate_kernel",

    # Vector distances
    "EuclideanDistance",
    "CityBlockDistance",
    "CanberraDistance",
    "CorrelationDistance",
    "correlation_distance",
    "generate_distance",

    # Metric distances
    "MetricDistance",
    "MatrixMetricDistance",
    "MultiViewMetric",
    "MultiViewMatrixMetric",
    "MultiViewMetricDistance",
    "combine_multiview_distance",

    # Pairwise
    "PairwiseDistances",
]
