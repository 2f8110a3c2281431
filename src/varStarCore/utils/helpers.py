"""
Helper utilities for varStarCore.

Array coercion shared by the distance layer and random-source handling shared
by the split generators.
"""

import math
from typing import Optional, Union
import numpy as np
from sklearn.utils.validation import check_array

from ..core.exceptions import DimensionMismatchError


RandomSource = Union[int, np.random.Generator]


def resolve_rng(random_source: RandomSource) -> np.random.Generator:
    """
    Turn a seed or generator into a numpy Generator.

    A Generator is returned as is so the caller keeps ownership of its state;
    an int seeds a fresh one. ``None`` is rejected because it would pull
    entropy from the operating system and break reproducibility.
    """
    if isinstance(random_source, np.random.Generator):
        return random_source
    if random_source is None:
        raise ValueError("A seed or numpy Generator is required for reproducible splits")
    if isinstance(random_source, (bool, np.bool_)) or not isinstance(random_source, (int, np.integer)):
        raise TypeError(f"Expected int seed or numpy Generator, got {type(random_source).__name__}")
    return np.random.default_rng(int(random_source))


def as_vector(x, name: str = "x") -> np.ndarray:
    """Validate a 1-D finite real vector."""
    arr = check_array(np.asarray(x, dtype=float), ensure_2d=False, dtype=np.float64)
    if arr.ndim != 1:
        raise DimensionMismatchError(f"{name} must be a vector, got shape {arr.shape}")
    return arr


def as_matrix(x, name: str = "x") -> np.ndarray:
    """Validate a 2-D finite real matrix."""
    arr = np.asarray(x, dtype=float)
    if arr.ndim != 2:
        raise DimensionMismatchError(f"{name} must be a matrix, got shape {arr.shape}")
    return check_array(arr, dtype=np.float64)


def check_same_length(a: np.ndarray, b: np.ndarray) -> None:
    if a.shape != b.shape:
        raise DimensionMismatchError(
            f"Vectors must have equal length, got {a.shape[0]} and {b.shape[0]}"
        )


def check_shape(arr: np.ndarray, shape: tuple, name: str = "matrix") -> None:
    if arr.shape != shape:
        raise DimensionMismatchError(f"{name} has shape {arr.shape}, expected {shape}")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up."""
    return int(math.floor(value + 0.5))


def safe_divide(numerator: float, denominator: float, default: Optional[float] = 0.0) -> float:
    """Safely divide two numbers, returning default if denominator is zero."""
    if denominator == 0:
        return default
    return numerator / denominator
