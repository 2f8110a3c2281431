"""
Tests for label handling.
"""

import numpy as np
import pytest

from generate_test_data import make_labels
from varStarCore.core.exceptions import InputConsistencyError
from varStarCore.data.label_handling import (
    class_proportions,
    count_unique_classes,
    sort_ids_into_classes,
    sort_into_classes,
    sort_into_list_classes,
    sort_into_maps,
)


def test_count_unique_classes_sums_to_total(balanced_labels):
    counts = count_unique_classes(balanced_labels)
    assert counts == {"RR Lyr (ab)": 50, "Delta Scu": 50, "Algol": 50}
    assert sum(counts.values()) == len(balanced_labels)


def test_count_unique_classes_imbalanced():
    labels = make_labels({"RRab": 7, "EA": 2, "RRc": 1})
    assert count_unique_classes(labels) == {"RRab": 7, "EA": 2, "RRc": 1}
    assert count_unique_classes({}) == {}


def test_class_proportions():
    labels = make_labels({"RRab": 3, "EA": 1})
    assert class_proportions(labels) == {"RRab": 0.75, "EA": 0.25}


def test_sort_into_classes_keeps_traversal_order():
    labels = {5: "EA", 1: "RRab", 9: "EA"}
    patterns = {9: np.array([9.0]), 5: np.array([5.0]), 1: np.array([1.0])}

    grouped = sort_into_classes(patterns, labels)

    assert list(grouped) == ["EA", "RRab"]
    assert [p[0] for p in grouped["EA"]] == [9.0, 5.0]
    assert [p[0] for p in grouped["RRab"]] == [1.0]


def test_sort_into_classes_with_matrices(balanced_labels, matrix_patterns):
    grouped = sort_into_classes(matrix_patterns, balanced_labels)
    assert {k: len(v) for k, v in grouped.items()} == count_unique_classes(balanced_labels)
    assert grouped["Algol"][0].shape == (3, 2)


def test_sort_into_maps_keeps_identifiers(balanced_labels, vector_patterns):
    grouped = sort_into_maps(vector_patterns, balanced_labels)

    for class_name, members in grouped.items():
        for identifier, pattern in members.items():
            assert balanced_labels[identifier] == class_name
            assert pattern is vector_patterns[identifier]


def test_sort_into_list_classes():
    labels = {1: "EA", 2: "RRab"}
    patterns = {1: [np.zeros(2), np.ones(2)], 2: [np.ones(2)]}
    grouped = sort_into_list_classes(patterns, labels)
    assert len(grouped["EA"]) == 1
    assert len(grouped["EA"][0]) == 2


def test_sort_ids_into_classes():
    labels = {3: "EA", 1: "RRab", 2: "EA"}
    assert sort_ids_into_classes(labels) == {"EA": [3, 2], "RRab": [1]}


def test_label_without_pattern_fails():
    labels = {1: "EA", 2: "RRab", 3: "RRab"}
    patterns = {1: np.zeros(2), 2: np.zeros(2)}

    with pytest.raises(InputConsistencyError) as excinfo:
        sort_into_classes(patterns, labels)
    assert excinfo.value.identifiers == [3]

    with pytest.raises(InputConsistencyError):
        sort_into_maps(patterns, labels)


def test_pattern_without_label_fails():
    labels = {1: "EA"}
    patterns = {1: np.zeros(2), 4: np.zeros(2)}
    with pytest.raises(InputConsistencyError, match="no class label"):
        sort_into_classes(patterns, labels)
