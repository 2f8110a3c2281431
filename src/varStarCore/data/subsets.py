"""
Subset views over patterns and labels.

These turn the identifier sets of a split into the pattern/label mappings a
classifier trains and evaluates on. Patterns may be vectors, matrices, lists of
vectors or per-view mappings; they are passed through untouched.
"""

from typing import Dict, Generic, Iterable, List, Mapping, Sequence, TypeVar

from ..core.exceptions import InputConsistencyError


P = TypeVar("P")


def _select(patterns: Mapping[int, P], labels: Mapping[int, str], ids: Iterable[int]):
    ids = sorted(ids)
    missing = [i for i in ids if i not in patterns or i not in labels]
    if missing:
        raise InputConsistencyError(
            f"{len(missing)} identifier(s) lack a pattern or label: {missing[:10]}", missing
        )
    return {i: patterns[i] for i in ids}, {i: labels[i] for i in ids}


class TrainData(Generic[P]):
    """Patterns and labels of the training identifiers."""

    def __init__(self, patterns: Mapping[int, P], labels: Mapping[int, str], training_data: Iterable[int]):
        self.training_patterns, self.training_classes = _select(patterns, labels, training_data)


class TestData(Generic[P]):
    """Patterns and labels of the testing identifiers."""

    __test__ = False  # not a pytest test class

    def __init__(self, patterns: Mapping[int, P], labels: Mapping[int, str], testing_data: Iterable[int]):
        self.testing_patterns, self.testing_classes = _select(patterns, labels, testing_data)


class TrainCrossData(Generic[P]):
    """
    One cross-validation round: fold ``index`` is held out, the rest trains.

    Args:
        patterns: Identifier to pattern mapping
        labels: Identifier to class name mapping
        folds: Fold identifier sets (a sequence, or fold index -> identifiers)
        index: Fold held out as the cross-validation subset
    """

    def __init__(
        self,
        patterns: Mapping[int, P],
        labels: Mapping[int, str],
        folds,
        index: int,
    ):
        fold_map: Dict[int, Sequence[int]] = dict(folds) if isinstance(folds, Mapping) else dict(enumerate(folds))
        if index not in fold_map:
            raise IndexError(f"Fold index {index} out of range for {len(fold_map)} folds")

        training_ids: List[int] = []
        for fold_idx, ids in fold_map.items():
            if fold_idx != index:
                training_ids.extend(ids)

        self.index = index
        self.training_patterns, self.training_classes = _select(patterns, labels, training_ids)
        self.crossval_patterns, self.crossval_classes = _select(patterns, labels, fold_map[index])
