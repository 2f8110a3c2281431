"""
Exception types raised by varStarCore.

None of them are retried; they propagate to the caller.
"""


class VarStarCoreError(Exception):
    """Base class for all varStarCore errors."""


class NotEnoughDataError(VarStarCoreError, ValueError):
    """A class cannot support the requested holdout fraction or fold count."""


class NumericalError(VarStarCoreError, ArithmeticError):
    """Singular or ill-conditioned matrix, or a degenerate (zero-variance) input."""


class DimensionMismatchError(VarStarCoreError, ValueError):
    """Vectors or matrices with incompatible shapes."""


class InputConsistencyError(VarStarCoreError, ValueError):
    """Class labels and patterns do not cover the same identifiers."""

    def __init__(self, message: str, identifiers=None):
        super().__init__(message)
        self.identifiers = sorted(identifiers) if identifiers else []
