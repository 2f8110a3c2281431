"""
Tests for the stratified split generators.
"""

import numpy as np
import pytest

from generate_test_data import make_balanced_labels, make_labels
from varStarCore.core.base import SplitConfig
from varStarCore.core.exceptions import NotEnoughDataError
from varStarCore.core.split_generator import (
    StratifiedSplitGenerator,
    TrainCrossGenerator,
    generate_round_robin_folds,
    round_half_up,
    stratified_folds,
)
from varStarCore.data.label_handling import count_unique_classes


def _class_counts(ids, labels):
    return count_unique_classes({i: labels[i] for i in ids})


# ------------------------------------------------------------------
# Partition properties
# ------------------------------------------------------------------


@pytest.mark.parametrize("fraction", [0.1, 0.25, 0.5, 0.75])
def test_training_and_testing_partition_full_set(balanced_labels, fraction):
    generator = StratifiedSplitGenerator(balanced_labels, fraction, np.random.default_rng(1))

    training, testing = generator.training_data, generator.testing_data
    assert training | testing == set(balanced_labels)
    assert training & testing == frozenset()
    assert len(testing) / len(balanced_labels) == pytest.approx(fraction, abs=0.2)


@pytest.mark.parametrize("n_folds", [2, 3, 5, 10])
def test_folds_partition_training(balanced_labels, n_folds):
    generator = StratifiedSplitGenerator(balanced_labels, 0.2, np.random.default_rng(3), n_folds=n_folds)
    folds = generator.crossval_folds

    assert len(folds) == n_folds
    union = frozenset().union(*folds)
    assert union == generator.training_data
    assert sum(len(f) for f in folds) == len(generator.training_data)
    for fold in folds:
        assert len(fold) / len(generator.training_data) == pytest.approx(1.0 / n_folds, abs=0.1)


def test_balanced_three_class_holdout_quarter(balanced_labels):
    """150 subjects, three classes of 50, f = 0.25, round half up."""
    generator = StratifiedSplitGenerator(balanced_labels, 0.25, np.random.default_rng(42))

    assert len(generator.training_data) == 111
    assert len(generator.testing_data) == 39
    assert sorted(len(f) for f in generator.crossval_folds) == [22, 22, 22, 22, 23]

    test_counts = _class_counts(generator.testing_data, balanced_labels)
    assert set(test_counts.values()) == {13}
    assert len(generator.training_data) == pytest.approx(112, abs=2)
    assert len(generator.testing_data) == pytest.approx(38, abs=2)


def test_folds_are_stratified(balanced_labels):
    generator = StratifiedSplitGenerator(balanced_labels, 0.25, np.random.default_rng(5))
    for fold in generator.crossval_folds:
        counts = _class_counts(fold, balanced_labels)
        assert set(counts) == set(balanced_labels.values())
        assert all(c in (7, 8) for c in counts.values())


def test_imbalanced_classes_keep_proportions():
    labels = make_labels({"RRab": 120, "RRc": 40, "EA": 15})
    generator = StratifiedSplitGenerator(labels, 0.3, np.random.default_rng(11))

    test_counts = _class_counts(generator.testing_data, labels)
    assert test_counts == {"RRab": 36, "RRc": 12, "EA": 5}  # 4.5 rounds up to 5

    for fold in generator.crossval_folds:
        counts = _class_counts(fold, labels)
        assert counts["EA"] == 2
        assert counts["RRab"] in (16, 17)


def test_round_half_up():
    assert round_half_up(12.5) == 13
    assert round_half_up(4.5) == 5
    assert round_half_up(4.49) == 4
    assert round_half_up(0.5) == 1
    assert round_half_up(0.4) == 0


# ------------------------------------------------------------------
# Reproducibility and idempotence
# ------------------------------------------------------------------


def test_same_seed_same_split(balanced_labels):
    a = StratifiedSplitGenerator(balanced_labels, 0.25, np.random.default_rng(2024))
    b = StratifiedSplitGenerator(balanced_labels, 0.25, np.random.default_rng(2024))

    assert a.training_data == b.training_data
    assert a.testing_data == b.testing_data
    assert a.crossval_folds == b.crossval_folds


def test_int_seed_matches_generator(balanced_labels):
    a = StratifiedSplitGenerator(balanced_labels, 0.25, 7)
    b = StratifiedSplitGenerator(balanced_labels, 0.25, np.random.default_rng(7))
    assert a.testing_data == b.testing_data
    assert a.crossval_folds == b.crossval_folds


def test_insertion_order_does_not_matter(balanced_labels):
    reversed_labels = dict(reversed(list(balanced_labels.items())))
    a = StratifiedSplitGenerator(balanced_labels, 0.25, np.random.default_rng(9))
    b = StratifiedSplitGenerator(reversed_labels, 0.25, np.random.default_rng(9))
    assert a.testing_data == b.testing_data
    assert a.crossval_folds == b.crossval_folds


def test_different_seeds_differ(balanced_labels):
    a = StratifiedSplitGenerator(balanced_labels, 0.25, np.random.default_rng(1))
    b = StratifiedSplitGenerator(balanced_labels, 0.25, np.random.default_rng(2))
    assert a.testing_data != b.testing_data


def test_accessors_do_not_consume_randomness(balanced_labels):
    rng = np.random.default_rng(123)
    generator = StratifiedSplitGenerator(balanced_labels, 0.25, rng)
    state = rng.bit_generator.state

    first = (generator.training_data, generator.testing_data, generator.crossval_folds)
    for _ in range(3):
        assert (generator.training_data, generator.testing_data, generator.crossval_folds) == first
        generator.crossval_map()
        generator.fold_partition(0)

    assert rng.bit_generator.state == state


def test_from_config(balanced_labels):
    config = SplitConfig(holdout_fraction=0.2, n_folds=4, random_state=17)
    a = StratifiedSplitGenerator.from_config(balanced_labels, config)
    b = StratifiedSplitGenerator(balanced_labels, 0.2, np.random.default_rng(17), n_folds=4)
    assert a.n_folds == 4
    assert a.testing_data == b.testing_data


def test_fold_partition(balanced_labels):
    generator = StratifiedSplitGenerator(balanced_labels, 0.25, np.random.default_rng(0))
    train, validation = generator.fold_partition(2)

    assert validation == generator.crossval_folds[2]
    assert train | validation == generator.training_data
    assert not train & validation
    with pytest.raises(IndexError):
        generator.fold_partition(5)


def test_class_members(balanced_labels):
    generator = StratifiedSplitGenerator(balanced_labels, 0.25, np.random.default_rng(0))
    members = generator.class_members
    assert list(members) == sorted(set(balanced_labels.values()))
    assert sum(len(ids) for ids in members.values()) == 150


# ------------------------------------------------------------------
# Insufficient data
# ------------------------------------------------------------------


def test_class_smaller_than_fold_count_fails():
    labels = make_labels({"RRab": 30, "rare": 5})
    with pytest.raises(NotEnoughDataError, match="rare"):
        StratifiedSplitGenerator(labels, 0.25, np.random.default_rng(0))


def test_fraction_leaving_class_without_test_members_fails():
    labels = make_labels({"RRab": 100, "rare": 6})
    # 0.05 * 6 = 0.3 rounds to 0
    with pytest.raises(NotEnoughDataError, match="without testing data"):
        StratifiedSplitGenerator(labels, 0.05, np.random.default_rng(0), n_folds=2)


@pytest.mark.parametrize("fraction", [0.0, 1.0, -0.1, 1.5])
def test_fraction_out_of_range_fails(balanced_labels, fraction):
    with pytest.raises(NotEnoughDataError):
        StratifiedSplitGenerator(balanced_labels, fraction, np.random.default_rng(0))


def test_too_few_folds_fails(balanced_labels):
    with pytest.raises(NotEnoughDataError):
        StratifiedSplitGenerator(balanced_labels, 0.25, np.random.default_rng(0), n_folds=1)


def test_empty_labels_fail():
    with pytest.raises(NotEnoughDataError):
        StratifiedSplitGenerator({}, 0.25, np.random.default_rng(0))


def test_missing_random_source_fails(balanced_labels):
    with pytest.raises(ValueError):
        StratifiedSplitGenerator(balanced_labels, 0.25, None)


def test_failed_validation_consumes_no_randomness():
    labels = make_labels({"RRab": 30, "rare": 5})
    rng = np.random.default_rng(0)
    state = rng.bit_generator.state
    with pytest.raises(NotEnoughDataError):
        StratifiedSplitGenerator(labels, 0.25, rng)
    assert rng.bit_generator.state == state


# ------------------------------------------------------------------
# TrainCrossGenerator and helpers
# ------------------------------------------------------------------


def test_train_cross_generator_uses_all_identifiers(balanced_labels):
    generator = TrainCrossGenerator(balanced_labels, np.random.default_rng(42))

    assert generator.training_data == frozenset(balanced_labels)
    assert len(generator.crossval_folds) == 5
    assert all(len(fold) == 30 for fold in generator.crossval_folds)
    assert frozenset().union(*generator.crossval_folds) == frozenset(balanced_labels)


def test_stratified_folds_rotates_remainders():
    members = {"a": list(range(6)), "b": list(range(10, 16)), "c": list(range(20, 26))}
    folds = stratified_folds(members, 4, np.random.default_rng(0))
    # each class has remainder 2; extras go to folds 0,1 then 2,3 then 0,1
    assert [len(f) for f in folds] == [5, 5, 4, 4]


def test_round_robin_folds():
    labels = make_balanced_labels(n_per_class=4)
    folds = generate_round_robin_folds(labels, 3)

    assert list(folds) == [0, 1, 2]
    assert folds[0] == [0, 3, 6, 9]
    assert sum(len(ids) for ids in folds.values()) == 12
