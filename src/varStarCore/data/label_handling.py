"""
Label handling utilities for varStarCore.

Counting and grouping of subjects by class label. All functions are pure and
keep the traversal order of their input so that downstream random draws are
reproducible.
"""

from typing import Any, Dict, List, Mapping, TypeVar

from ..core.exceptions import InputConsistencyError
from ..utils.helpers import safe_divide


P = TypeVar("P")


def _check_consistency(patterns: Mapping[int, Any], labels: Mapping[int, str]) -> None:
    """Fail when labels and patterns do not cover the same identifiers."""
    missing_patterns = set(labels) - set(patterns)
    if missing_patterns:
        raise InputConsistencyError(
            f"{len(missing_patterns)} labelled identifier(s) have no pattern: "
            f"{sorted(missing_patterns)[:10]}",
            missing_patterns,
        )
    missing_labels = set(patterns) - set(labels)
    if missing_labels:
        raise InputConsistencyError(
            f"{len(missing_labels)} pattern(s) have no class label: "
            f"{sorted(missing_labels)[:10]}",
            missing_labels,
        )


def count_unique_classes(labels: Mapping[int, str]) -> Dict[str, int]:
    """
    Count the identifiers carrying each class label.

    Args:
        labels: Identifier to class name mapping

    Returns:
        Class name to member count; values sum to ``len(labels)``
    """
    counts: Dict[str, int] = {}
    for class_label in labels.values():
        counts[class_label] = counts.get(class_label, 0) + 1
    return counts


def class_proportions(labels: Mapping[int, str]) -> Dict[str, float]:
    """Relative frequency of each class."""
    total = len(labels)
    return {
        class_label: safe_divide(count, total)
        for class_label, count in count_unique_classes(labels).items()
    }


def sort_ids_into_classes(labels: Mapping[int, str]) -> Dict[str, List[int]]:
    """Group identifiers by class label, in label traversal order."""
    class_members: Dict[str, List[int]] = {}
    for identifier, class_label in labels.items():
        class_members.setdefault(class_label, []).append(identifier)
    return class_members


def sort_into_classes(
    patterns: Mapping[int, P],
    labels: Mapping[int, str]
) -> Dict[str, List[P]]:
    """
    Group patterns by class label.

    Args:
        patterns: Identifier to pattern (vector or matrix) mapping
        labels: Identifier to class name mapping

    Returns:
        Class name to patterns, ordered as ``patterns`` is traversed

    Raises:
        InputConsistencyError: If an identifier lacks a pattern or a label
    """
    _check_consistency(patterns, labels)
    class_members: Dict[str, List[P]] = {}
    for identifier, pattern in patterns.items():
        class_members.setdefault(labels[identifier], []).append(pattern)
    return class_members


def sort_into_list_classes(
    patterns: Mapping[int, List[P]],
    labels: Mapping[int, str]
) -> Dict[str, List[List[P]]]:
    """Group subjects that carry several patterns each (one list per subject)."""
    _check_consistency(patterns, labels)
    class_members: Dict[str, List[List[P]]] = {}
    for identifier, pattern_list in patterns.items():
        class_members.setdefault(labels[identifier], []).append(list(pattern_list))
    return class_members


def sort_into_maps(
    patterns: Mapping[int, P],
    labels: Mapping[int, str]
) -> Dict[str, Dict[int, P]]:
    """
    Group patterns by class label, keeping their identifiers.

    Raises:
        InputConsistencyError: If an identifier lacks a pattern or a label
    """
    _check_consistency(patterns, labels)
    class_members: Dict[str, Dict[int, P]] = {}
    for identifier, pattern in patterns.items():
        class_members.setdefault(labels[identifier], {})[identifier] = pattern
    return class_members
