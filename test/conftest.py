"""
Pytest configuration and shared fixtures.
"""

import numpy as np
import pytest

from generate_test_data import (
    make_balanced_labels,
    make_matrix_patterns,
    make_vector_patterns,
)
from varStarCore.data.records import LabeledDataset, MultiView


@pytest.fixture
def balanced_labels():
    """150 identifiers in 3 classes of 50."""
    return make_balanced_labels()


@pytest.fixture
def vector_patterns(balanced_labels):
    return make_vector_patterns(balanced_labels)


@pytest.fixture
def matrix_patterns(balanced_labels):
    return make_matrix_patterns(balanced_labels)


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def multi_view_dataset(balanced_labels, vector_patterns, matrix_patterns):
    """Dataset with a complete 'colors' view, a partial 'period' view and a matrix 'ssmm' view."""
    vectors = {
        identifier: {"colors": pattern}
        for identifier, pattern in vector_patterns.items()
    }
    for identifier in list(balanced_labels)[::2]:
        vectors[identifier]["period"] = np.array([0.5 + identifier / 1000.0])
    matrices = {identifier: {"ssmm": m} for identifier, m in matrix_patterns.items()}
    return LabeledDataset(
        description="LINEAR test subset",
        classes=balanced_labels,
        multi_view=MultiView(vector_patterns=vectors, matrix_patterns=matrices),
    )
