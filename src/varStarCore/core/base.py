"""
Base classes and interfaces for varStarCore.

This module defines the capability interfaces that kernels and distances
implement, the enumerations naming the known variants, and the configuration
dataclasses shared by the split generator and the distance layer.
"""

from abc import ABC, abstractmethod
from typing import Optional
import numpy as np
from dataclasses import dataclass, field
from enum import Enum


class KernelType(Enum):
    """Enumeration of supported univariate kernels."""
    CAUCHY = "cauchy"
    EPANECHNIKOV = "epanechnikov"
    GAUSSIAN = "gaussian"
    TRIANGLE = "triangle"
    UNIFORM = "uniform"


class VectorDistanceType(Enum):
    """Enumeration of supported vector distances."""
    CITY_BLOCK = "City Block"
    EUCLIDEAN_DISTANCE = "Euclidean"
    PEARSON_DISTANCE = "Pearson"
    CANBERRA_DISTANCE = "Canberra"

    @property
    def method_label(self) -> str:
        return self.value


@dataclass(frozen=True)
class SplitConfig:
    """Configuration for the stratified train/test/cross-validation split."""
    holdout_fraction: float = 0.25
    n_folds: int = 5
    random_state: int = 42


@dataclass(frozen=True)
class DistanceConfig:
    """Configuration for the distance/kernel layer."""
    distance_type: VectorDistanceType = VectorDistanceType.EUCLIDEAN_DISTANCE
    kernel_type: KernelType = KernelType.GAUSSIAN
    n_jobs: int = 1


@dataclass(frozen=True)
class ExperimentConfig:
    """Complete configuration for an experiment."""
    split: SplitConfig = field(default_factory=SplitConfig)
    distance: DistanceConfig = field(default_factory=DistanceConfig)
    description: str = ""
    verbose: bool = True


class UnivariateKernel(ABC):
    """Kernel evaluated on a scalar argument."""

    @abstractmethod
    def value(self, x: float) -> float:
        """Evaluate the kernel at ``x``."""
        pass

    def __call__(self, x: float) -> float:
        return self.value(x)


class MultivariateKernel(ABC):
    """Kernel density evaluated on a vector with a bandwidth matrix."""

    @abstractmethod
    def evaluate(self, x: np.ndarray, bandwidth: Optional[np.ndarray] = None) -> float:
        """Evaluate the density at ``x`` for bandwidth matrix ``bandwidth``."""
        pass

    def __call__(self, x: np.ndarray, bandwidth: Optional[np.ndarray] = None) -> float:
        return self.evaluate(x, bandwidth)


class DistanceMeasure(ABC):
    """Distance between two equal-length vectors."""

    @abstractmethod
    def compute(self, a: np.ndarray, b: np.ndarray) -> float:
        """Return a non-negative distance between ``a`` and ``b``."""
        pass

    def __call__(self, a: np.ndarray, b: np.ndarray) -> float:
        return self.compute(a, b)
