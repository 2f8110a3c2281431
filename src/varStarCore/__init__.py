"""
varStarCore v1.0

Stratified partitioning and distance/kernel primitives for reproducible
classification experiments on variable-star light-curve features.
"""

__version__ = "1.0.0"

# Core imports
from .core.base import (
    KernelType,
    VectorDistanceType,
    SplitConfig,
    DistanceConfig,
    ExperimentConfig,
)
from .core.exceptions import (
    VarStarCoreError,
    NotEnoughDataError,
    NumericalError,
    DimensionMismatchError,
    InputConsistencyError,
)
from .core.split_generator import (
    StratifiedSplitGenerator,
    TrainCrossGenerator,
    generate_round_robin_folds,
)

# Data handling
from .data.label_handling import (
    count_unique_classes,
    sort_into_classes,
    sort_into_maps,
)
from .data.records import LabeledDataset, MultiView, ClusterOutput, ClassificationResult
from .data.subsets import TrainData, TestData, TrainCrossData
from .data.validator import DataValidator

# Distance/kernel layer
from .distance.kernels import MultivariateGaussianKernel, generate_univariate_kernel
from .distance.vector_distance import CorrelationDistance, generate_distance
from .distance.metric_distance import (
    MetricDistance,
    MatrixMetricDistance,
    MultiViewMetric,
    MultiViewMatrixMetric,
    MultiViewMetricDistance,
    combine_multiview_distance,
)
from .distance.pairwise import PairwiseDistances

# Utilities
from .utils.config import ConfigManager
from .utils.logger import get_logger, setup_logging

__all__ = [
    # Core
    "KernelType",
    "VectorDistanceType",
    "SplitConfig",
    "DistanceConfig",
    "ExperimentConfig",
    "VarStarCoreError",
    "NotEnoughDataError",
    "NumericalError",
    "DimensionMismatchError",
    "InputConsistencyError",
    "StratifiedSplitGenerator",
    "TrainCrossGenerator",
    "generate_round_robin_folds",

    # Data
    "count_unique_classes",
    "sort_into_classes",
    "sort_into_maps",
    "LabeledDataset",
    "MultiView",
    "ClusterOutput",
    "ClassificationResult",
    "TrainData",
    "TestData",
    "TrainCrossData",
    "DataValidator",

    # Distance
    "MultivariateGaussianKernel",
    "generate_univariate_kernel",
    "CorrelationDistance",
    "generate_distance",
    "MetricDistance",
    "MatrixMetricDistance",
    "MultiViewMetric",
    "MultiViewMatrixMetric",
    "MultiViewMetricDistance",
    "combine_multiview_distance",
    "PairwiseDistances",

    # Utilities
    "ConfigManager",
    "get_logger",
    "setup_logging",
]
