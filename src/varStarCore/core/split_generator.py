"""
Stratified train/test/cross-validation split generators for varStarCore.

The split is computed eagerly at construction from a caller-owned random
source; accessors only read the frozen result.

Rounding policy: the test count of a class with ``n_c`` members is
``floor(f * n_c + 0.5)`` (round half up). A class must receive at least one
test member and keep at least ``n_folds`` training members, otherwise
NotEnoughDataError is raised.
"""

from typing import Dict, FrozenSet, List, Mapping, Sequence, Tuple
import numpy as np

from .base import SplitConfig
from .exceptions import NotEnoughDataError
from ..data.label_handling import count_unique_classes, sort_ids_into_classes
from ..utils.helpers import RandomSource, resolve_rng, round_half_up
from ..utils.logger import get_logger


logger = get_logger(__name__)


def _ordered_class_members(labels: Mapping[int, str]) -> Dict[str, List[int]]:
    """Class members sorted by class name and identifier, independent of mapping order."""
    grouped = sort_ids_into_classes(labels)
    return {class_label: sorted(grouped[class_label]) for class_label in sorted(grouped)}


def _check_fold_count(n_folds: int) -> None:
    if isinstance(n_folds, bool) or not isinstance(n_folds, (int, np.integer)) or n_folds < 2:
        raise NotEnoughDataError(f"n_folds must be an integer >= 2, got {n_folds!r}")


def stratified_folds(
    class_members: Mapping[str, Sequence[int]],
    n_folds: int,
    rng: np.random.Generator,
) -> Tuple[FrozenSet[int], ...]:
    """
    Cut each class into ``n_folds`` near-equal groups and join them fold-wise.

    Each class is shuffled and split into contiguous groups whose sizes differ
    by at most one. The larger groups are handed out round-robin across
    classes, so the overall fold sizes also stay within one of each other
    whenever the class remainders allow it.

    Args:
        class_members: Class name to member identifiers (visited in the given order)
        n_folds: Number of folds
        rng: Random source used for the per-class shuffles

    Returns:
        Tuple of ``n_folds`` disjoint identifier sets
    """
    _check_fold_count(n_folds)
    folds: List[List[int]] = [[] for _ in range(n_folds)]
    offset = 0
    for class_label, members in class_members.items():
        if len(members) < n_folds:
            raise NotEnoughDataError(
                f"Class '{class_label}' has {len(members)} training member(s); "
                f"{n_folds} are needed for {n_folds}-fold cross-validation"
            )
        shuffled = rng.permutation(np.asarray(members, dtype=np.int64))
        base, remainder = divmod(len(shuffled), n_folds)
        sizes = [base] * n_folds
        for j in range(remainder):
            sizes[(offset + j) % n_folds] += 1
        offset = (offset + remainder) % n_folds

        start = 0
        for fold_idx, size in enumerate(sizes):
            folds[fold_idx].extend(int(i) for i in shuffled[start:start + size])
            start += size

        logger.debug(f"Class '{class_label}': fold sizes {sizes}")
    return tuple(frozenset(fold) for fold in folds)


def generate_round_robin_folds(labels: Mapping[int, str], segments: int) -> Dict[int, List[int]]:
    """
    Deterministic fold assignment: the n-th identifier goes to fold ``n % segments``.

    No randomness and no stratification; identifiers are taken in mapping
    traversal order.
    """
    _check_fold_count(segments)
    folds: Dict[int, List[int]] = {idx: [] for idx in range(segments)}
    for position, identifier in enumerate(labels):
        folds[position % segments].append(identifier)
    return folds


class _FoldAccess:
    """Read accessors shared by the split generators."""

    _class_members: Mapping[str, Tuple[int, ...]]
    _training: FrozenSet[int]
    _folds: Tuple[FrozenSet[int], ...]

    @property
    def class_members(self) -> Dict[str, Tuple[int, ...]]:
        """Class name to all member identifiers (sorted)."""
        return dict(self._class_members)

    @property
    def training_data(self) -> FrozenSet[int]:
        return self._training

    @property
    def crossval_folds(self) -> Tuple[FrozenSet[int], ...]:
        return self._folds

    @property
    def n_folds(self) -> int:
        return len(self._folds)

    def crossval_map(self) -> Dict[int, List[int]]:
        """Fold index to sorted identifiers."""
        return {idx: sorted(fold) for idx, fold in enumerate(self._folds)}

    def fold_partition(self, index: int) -> Tuple[FrozenSet[int], FrozenSet[int]]:
        """
        Training and validation identifiers for cross-validation round ``index``.

        Returns:
            (identifiers of all other folds, identifiers of fold ``index``)
        """
        if not 0 <= index < len(self._folds):
            raise IndexError(f"Fold index {index} out of range for {len(self._folds)} folds")
        validation = self._folds[index]
        return self._training - validation, validation


class StratifiedSplitGenerator(_FoldAccess):
    """
    Stratified holdout split plus stratified k-fold groups over the training part.

    Args:
        labels: Identifier to class name mapping
        holdout_fraction: Fraction ``f`` in (0, 1) of every class held out for testing
        rng: numpy Generator (or int seed) owned by the caller
        n_folds: Number of cross-validation folds over the training part

    Raises:
        NotEnoughDataError: If a class is too small for ``f`` or ``n_folds``
    """

    def __init__(
        self,
        labels: Mapping[int, str],
        holdout_fraction: float,
        rng: RandomSource,
        n_folds: int = 5,
    ):
        if not labels:
            raise NotEnoughDataError("No class labels supplied")
        if not 0.0 < holdout_fraction < 1.0:
            raise NotEnoughDataError(f"holdout_fraction must lie in (0, 1), got {holdout_fraction}")
        _check_fold_count(n_folds)

        self.holdout_fraction = float(holdout_fraction)
        rng = resolve_rng(rng)

        members = _ordered_class_members(labels)
        self._class_members = {c: tuple(ids) for c, ids in members.items()}
        logger.info(f"Splitting {len(labels)} subjects: {count_unique_classes(labels)}")

        # Validate every class before consuming any randomness
        test_counts: Dict[str, int] = {}
        for class_label, ids in members.items():
            n_test = round_half_up(self.holdout_fraction * len(ids))
            if n_test == 0:
                raise NotEnoughDataError(
                    f"Class '{class_label}' has {len(ids)} member(s); holdout fraction "
                    f"{self.holdout_fraction} leaves it without testing data"
                )
            if len(ids) - n_test < n_folds:
                raise NotEnoughDataError(
                    f"Class '{class_label}' has {len(ids)} member(s); after holding out "
                    f"{n_test} it cannot fill {n_folds} folds"
                )
            test_counts[class_label] = n_test

        testing: List[int] = []
        training_members: Dict[str, List[int]] = {}
        for class_label, ids in members.items():
            chosen = rng.choice(len(ids), size=test_counts[class_label], replace=False)
            chosen_set = {int(j) for j in chosen}
            testing.extend(ids[j] for j in sorted(chosen_set))
            training_members[class_label] = [ids[j] for j in range(len(ids)) if j not in chosen_set]

        self._testing = frozenset(testing)
        self._training = frozenset(i for ids in training_members.values() for i in ids)
        self._folds = stratified_folds(training_members, n_folds, rng)

        logger.info(
            f"Split complete: {len(self._training)} training, {len(self._testing)} testing, "
            f"fold sizes {[len(f) for f in self._folds]}"
        )

    @classmethod
    def from_config(cls, labels: Mapping[int, str], config: SplitConfig) -> "StratifiedSplitGenerator":
        """Build a generator seeded with ``config.random_state``."""
        return cls(
            labels,
            holdout_fraction=config.holdout_fraction,
            rng=np.random.default_rng(config.random_state),
            n_folds=config.n_folds,
        )

    @property
    def testing_data(self) -> FrozenSet[int]:
        return self._testing


class TrainCrossGenerator(_FoldAccess):
    """
    Stratified k-fold groups over all labelled identifiers (no holdout).

    Args:
        labels: Identifier to class name mapping
        rng: numpy Generator (or int seed) owned by the caller
        n_folds: Number of cross-validation folds
    """

    def __init__(self, labels: Mapping[int, str], rng: RandomSource, n_folds: int = 5):
        if not labels:
            raise NotEnoughDataError("No class labels supplied")
        members = _ordered_class_members(labels)
        self._class_members = {c: tuple(ids) for c, ids in members.items()}
        self._training = frozenset(labels)
        self._folds = stratified_folds(members, n_folds, resolve_rng(rng))
        logger.info(
            f"Cross-validation groups for {len(labels)} subjects: "
            f"fold sizes {[len(f) for f in self._folds]}"
        )
