"""
Data handling modules for varStarCore.

This module contains label handling, the record model, subset views and
dataset validation.
"""

from .label_handling import (
    count_unique_classes,
    class_proportions,
    sort_ids_into_classes,
    sort_into_classes,
    sort_into_list_classes,
    sort_into_maps,
)
from .records import LabeledDataset, MultiView, ClusterOutput, ClassificationResult
from .subsets import TrainData, TestData, TrainCrossData
from .validator import DataValidator

__all__ = [
    "count_unique_classes",
    "class_proportions",
    "sort_ids_into_classes",
    "sort_into_classes",
    "sort_into_list_classes",
    "sort_into_maps",
    "LabeledDataset",
    "MultiView",
    "ClusterOutput",
    "ClassificationResult",
    "TrainData",
    "TestData",
    "TrainCrossData",
    "DataValidator",
]
