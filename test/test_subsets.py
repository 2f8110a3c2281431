"""
Tests for train/test/cross-validation subset views.
"""

import numpy as np
import pytest

from varStarCore.core.exceptions import InputConsistencyError
from varStarCore.core.split_generator import StratifiedSplitGenerator
from varStarCore.data.subsets import TestData, TrainCrossData, TrainData


def test_train_and_test_data_follow_split(balanced_labels, vector_patterns):
    generator = StratifiedSplitGenerator(balanced_labels, 0.25, np.random.default_rng(42))

    train = TrainData(vector_patterns, balanced_labels, generator.training_data)
    test = TestData(vector_patterns, balanced_labels, generator.testing_data)

    assert set(train.training_patterns) == generator.training_data
    assert set(test.testing_classes) == generator.testing_data
    assert all(train.training_classes[i] == balanced_labels[i] for i in train.training_classes)


def test_train_cross_data_rotates_folds(balanced_labels, matrix_patterns):
    generator = StratifiedSplitGenerator(balanced_labels, 0.25, np.random.default_rng(1))

    for index, fold in enumerate(generator.crossval_folds):
        data = TrainCrossData(matrix_patterns, balanced_labels, generator.crossval_folds, index)
        assert set(data.crossval_patterns) == fold
        assert set(data.training_patterns) == generator.training_data - fold
        assert data.crossval_patterns[next(iter(fold))].shape == (3, 2)


def test_train_cross_data_accepts_fold_map(multi_view_dataset):
    patterns = dict(multi_view_dataset.multi_view.vector_patterns)
    folds = {0: [0, 1], 1: [2, 3], 2: [4]}
    data = TrainCrossData(patterns, multi_view_dataset.classes, folds, 1)

    assert sorted(data.crossval_classes) == [2, 3]
    assert sorted(data.training_patterns) == [0, 1, 4]
    assert "colors" in data.training_patterns[0]


def test_missing_pattern_raises(balanced_labels, vector_patterns):
    patterns = dict(vector_patterns)
    del patterns[3]
    with pytest.raises(InputConsistencyError):
        TrainData(patterns, balanced_labels, [1, 2, 3])


def test_bad_fold_index(balanced_labels, vector_patterns):
    with pytest.raises(IndexError):
        TrainCrossData(vector_patterns, balanced_labels, [[0, 1], [2, 3]], 2)
