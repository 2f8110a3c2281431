"""
Data validation utilities for varStarCore.

This module checks a labelled dataset record before it is split.
"""

from typing import Optional
import numpy as np

from .label_handling import count_unique_classes
from .records import LabeledDataset
from ..core.exceptions import DimensionMismatchError, NotEnoughDataError
from ..utils.helpers import round_half_up
from ..utils.logger import get_logger


class DataValidator:
    """Data validator for labelled variable-star feature datasets."""

    def __init__(self):
        self.logger = get_logger("DataValidator")

    def validate(
        self,
        dataset: LabeledDataset,
        n_folds: Optional[int] = None,
        holdout_fraction: Optional[float] = None,
    ) -> None:
        """
        Validate a dataset record.

        Args:
            dataset: Record to check
            n_folds: If given, every class must be able to fill this many folds
            holdout_fraction: If given, the folds are counted on what remains of
                each class after holding out ``round_half_up(f * n_c)`` members,
                which must itself be at least one

        Raises:
            NotEnoughDataError: Too few labels or classes
            DimensionMismatchError: Vectors of one view differ in length
            ValueError: Patterns contain infinite values
        """
        self.logger.info(f"Validating dataset '{dataset.description}'...")

        self._validate_labels(dataset, n_folds, holdout_fraction)

        if dataset.multi_view is not None:
            for view in dataset.multi_view.vector_view_names:
                self._validate_vector_view(dataset, view)
            for view in dataset.multi_view.matrix_view_names:
                self._validate_matrix_view(dataset, view)

        self.logger.info("Data validation passed")

    def _validate_labels(
        self,
        dataset: LabeledDataset,
        n_folds: Optional[int],
        holdout_fraction: Optional[float],
    ) -> None:
        if len(dataset.classes) == 0:
            raise NotEnoughDataError("No labels provided")

        counts = count_unique_classes(dataset.classes)
        if len(counts) < 2:
            raise NotEnoughDataError(f"Expected at least 2 classes, found {len(counts)}: {list(counts)}")

        training_counts = dict(counts)
        if holdout_fraction is not None:
            if not 0.0 < holdout_fraction < 1.0:
                raise NotEnoughDataError(f"holdout_fraction must lie in (0, 1), got {holdout_fraction}")
            held_out = {c: round_half_up(holdout_fraction * n) for c, n in counts.items()}
            untested = sorted(c for c, n_test in held_out.items() if n_test == 0)
            if untested:
                raise NotEnoughDataError(
                    f"Holdout fraction {holdout_fraction} leaves classes without testing data: {untested}"
                )
            training_counts = {c: counts[c] - held_out[c] for c in counts}

        if n_folds is not None:
            small = {c: n for c, n in training_counts.items() if n < n_folds}
            if small:
                raise NotEnoughDataError(
                    f"Classes with fewer than {n_folds} training members: {small}"
                )

    def _validate_vector_view(self, dataset: LabeledDataset, view: str) -> None:
        patterns = dataset.vector_view(view)
        lengths = {p.shape[0] for p in patterns.values()}
        if len(lengths) > 1:
            raise DimensionMismatchError(f"View '{view}' has vectors of lengths {sorted(lengths)}")
        self._check_values(view, np.vstack(list(patterns.values())))
        self._report_missing(dataset, view)

    def _validate_matrix_view(self, dataset: LabeledDataset, view: str) -> None:
        patterns = dataset.matrix_view(view)
        shapes = {p.shape for p in patterns.values()}
        if len(shapes) > 1:
            raise DimensionMismatchError(f"View '{view}' has matrices of shapes {sorted(shapes)}")
        self._check_values(view, np.stack(list(patterns.values())))
        self._report_missing(dataset, view)

    def _check_values(self, view: str, values: np.ndarray) -> None:
        if np.isinf(values).any():
            raise ValueError(f"View '{view}' contains infinite values")
        if np.isnan(values).any():
            self.logger.warning(f"View '{view}' contains NaN values")

    def _report_missing(self, dataset: LabeledDataset, view: str) -> None:
        missing = dataset.missing_identifiers(view)
        if missing:
            self.logger.warning(f"View '{view}' is missing for {len(missing)} labelled identifier(s)")
