"""
Core components of varStarCore.

Capability interfaces, configuration dataclasses, error types and the
stratified split generators.
"""

from .base import (
    KernelType,
    VectorDistanceType,
    SplitConfig,
    DistanceConfig,
    ExperimentConfig,
    UnivariateKernel,
    MultivariateKernel,
    DistanceMeasure,
)
from .exceptions import (
    VarStarCoreError,
    NotEnoughDataError,
    NumericalError,
    DimensionMismatchError,
    InputConsistencyError,
)
from .split_generator import (
    StratifiedSplitGenerator,
    TrainCrossGenerator,
    generate_round_robin_folds,
    stratified_folds,
    round_half_up,
)

__all__ = [
    "KernelType",
    "VectorDistanceType",
    "SplitConfig",
    "DistanceConfig",
    "ExperimentConfig",
    "UnivariateKernel",
    "MultivariateKernel",
    "DistanceMeasure",
    "VarStarCoreError",
    "NotEnoughDataError",
    "NumericalError",
    "DimensionMismatchError",
    "InputConsistencyError",
    "StratifiedSplitGenerator",
    "TrainCrossGenerator",
    "generate_round_robin_folds",
    "stratified_folds",
    "round_half_up",
]
