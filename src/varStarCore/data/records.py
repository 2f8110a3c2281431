"""
Record model for varStarCore.

Immutable value types passed between the data-loading, splitting, classifier
and clustering collaborators. Constructors copy their inputs into read-only
mappings and read-only arrays; derived variants are new records.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple
import numpy as np
import pandas as pd

from ..core.exceptions import DimensionMismatchError, InputConsistencyError


def _frozen_array(pattern: Any) -> np.ndarray:
    arr = np.array(pattern, dtype=float, copy=True)
    arr.setflags(write=False)
    return arr


def _freeze_views(
    views: Optional[Mapping[int, Mapping[str, Any]]]
) -> Mapping[int, Mapping[str, np.ndarray]]:
    frozen = {
        identifier: MappingProxyType({name: _frozen_array(p) for name, p in per_view.items()})
        for identifier, per_view in (views or {}).items()
    }
    return MappingProxyType(frozen)


@dataclass(frozen=True, eq=False)
class MultiView:
    """
    Named parallel feature representations per subject.

    ``vector_patterns`` maps identifier -> view name -> 1-D pattern and
    ``matrix_patterns`` maps identifier -> view name -> 2-D pattern. A view may
    cover only part of the labelled identifiers.
    """

    vector_patterns: Mapping[int, Mapping[str, np.ndarray]] = field(default_factory=dict)
    matrix_patterns: Mapping[int, Mapping[str, np.ndarray]] = field(default_factory=dict)

    def __post_init__(self):
        vectors = _freeze_views(self.vector_patterns)
        matrices = _freeze_views(self.matrix_patterns)
        for identifier, per_view in vectors.items():
            for name, arr in per_view.items():
                if arr.ndim != 1:
                    raise DimensionMismatchError(
                        f"Vector view '{name}' of identifier {identifier} has shape {arr.shape}"
                    )
        for identifier, per_view in matrices.items():
            for name, arr in per_view.items():
                if arr.ndim != 2:
                    raise DimensionMismatchError(
                        f"Matrix view '{name}' of identifier {identifier} has shape {arr.shape}"
                    )
        object.__setattr__(self, "vector_patterns", vectors)
        object.__setattr__(self, "matrix_patterns", matrices)

    @property
    def vector_view_names(self) -> List[str]:
        return sorted({name for per_view in self.vector_patterns.values() for name in per_view})

    @property
    def matrix_view_names(self) -> List[str]:
        return sorted({name for per_view in self.matrix_patterns.values() for name in per_view})

    def vector_view(self, name: str) -> Dict[int, np.ndarray]:
        """Identifier -> pattern for one vector view (subjects lacking it are omitted)."""
        return {i: per_view[name] for i, per_view in self.vector_patterns.items() if name in per_view}

    def matrix_view(self, name: str) -> Dict[int, np.ndarray]:
        """Identifier -> pattern for one matrix view (subjects lacking it are omitted)."""
        return {i: per_view[name] for i, per_view in self.matrix_patterns.items() if name in per_view}

    def restrict(self, identifiers: Iterable[int]) -> "MultiView":
        keep = set(identifiers)
        return MultiView(
            vector_patterns={i: v for i, v in self.vector_patterns.items() if i in keep},
            matrix_patterns={i: v for i, v in self.matrix_patterns.items() if i in keep},
        )


@dataclass(frozen=True, eq=False)
class LabeledDataset:
    """
    A labelled dataset: subject description, class labels and optional views.

    The identifier set of ``classes`` is authoritative. Consumers ask for
    ``missing_identifiers(view)`` rather than assuming every view is complete.
    """

    description: str
    classes: Mapping[int, str]
    multi_view: Optional[MultiView] = None

    def __post_init__(self):
        classes = MappingProxyType({int(i): str(c) for i, c in self.classes.items()})
        object.__setattr__(self, "classes", classes)
        if self.multi_view is not None:
            unlabeled = (set(self.multi_view.vector_patterns) | set(self.multi_view.matrix_patterns)) - set(classes)
            if unlabeled:
                raise InputConsistencyError(
                    f"{len(unlabeled)} pattern identifier(s) have no class label", unlabeled
                )

    @property
    def identifiers(self) -> FrozenSet[int]:
        return frozenset(self.classes)

    @property
    def view_names(self) -> List[str]:
        if self.multi_view is None:
            return []
        return sorted(set(self.multi_view.vector_view_names) | set(self.multi_view.matrix_view_names))

    def _require_views(self) -> MultiView:
        if self.multi_view is None:
            raise InputConsistencyError(f"Dataset '{self.description}' carries no pattern views")
        return self.multi_view

    def vector_view(self, name: str) -> Dict[int, np.ndarray]:
        return self._require_views().vector_view(name)

    def matrix_view(self, name: str) -> Dict[int, np.ndarray]:
        return self._require_views().matrix_view(name)

    def missing_identifiers(self, name: str) -> FrozenSet[int]:
        """Labelled identifiers without a pattern in view ``name``."""
        views = self._require_views()
        present = set(views.vector_view(name)) | set(views.matrix_view(name))
        return frozenset(set(self.classes) - present)

    def restrict(self, identifiers: Iterable[int]) -> "LabeledDataset":
        """New record limited to ``identifiers``."""
        keep = set(identifiers)
        unknown = keep - set(self.classes)
        if unknown:
            raise InputConsistencyError(f"{len(unknown)} identifier(s) are not in the dataset", unknown)
        return LabeledDataset(
            description=self.description,
            classes={i: c for i, c in self.classes.items() if i in keep},
            multi_view=None if self.multi_view is None else self.multi_view.restrict(keep),
        )

    def labels_series(self) -> pd.Series:
        """Class labels as a Series indexed by identifier."""
        return pd.Series(dict(self.classes), name="class", dtype=object).sort_index()

    def to_frame(self, name: str, require_complete: bool = True) -> pd.DataFrame:
        """
        One vector view as a feature matrix indexed by identifier.

        Args:
            name: Vector view name
            require_complete: Fail when labelled identifiers lack the view

        Returns:
            DataFrame with columns ``<name>_0 .. <name>_{d-1}``
        """
        patterns = self.vector_view(name)
        if require_complete:
            missing = set(self.classes) - set(patterns)
            if missing:
                raise InputConsistencyError(
                    f"View '{name}' is missing for {len(missing)} identifier(s)", missing
                )
        lengths = {p.shape[0] for p in patterns.values()}
        if len(lengths) > 1:
            raise DimensionMismatchError(f"View '{name}' has patterns of lengths {sorted(lengths)}")
        ids = sorted(patterns)
        width = lengths.pop() if lengths else 0
        values = np.vstack([patterns[i] for i in ids]) if ids else np.empty((0, width))
        return pd.DataFrame(
            values,
            index=pd.Index(ids, name="identifier"),
            columns=[f"{name}_{j}" for j in range(width)],
        )


@dataclass(frozen=True, eq=False)
class ClusterOutput:
    """
    Result of one clustering invocation.

    For hard clustering producers ``cluster_members`` must partition the
    clustered identifiers; ``is_hard_partition`` checks that.
    """

    cluster_centers: Mapping[int, np.ndarray]
    cluster_members: Mapping[int, Tuple[int, ...]]

    def __post_init__(self):
        object.__setattr__(
            self, "cluster_centers",
            MappingProxyType({k: _frozen_array(v) for k, v in self.cluster_centers.items()}),
        )
        object.__setattr__(
            self, "cluster_members",
            MappingProxyType({k: tuple(v) for k, v in self.cluster_members.items()}),
        )

    @property
    def n_clusters(self) -> int:
        return len(self.cluster_centers)

    def member_of(self, identifier: int) -> List[int]:
        """Cluster ids listing ``identifier`` (exactly one for a hard clustering)."""
        return sorted(k for k, members in self.cluster_members.items() if identifier in members)

    def is_hard_partition(self, identifiers: Optional[Iterable[int]] = None) -> bool:
        all_members = [i for members in self.cluster_members.values() for i in members]
        if len(all_members) != len(set(all_members)):
            return False
        if identifiers is None:
            return True
        return set(all_members) == set(identifiers)


@dataclass(frozen=True, eq=False)
class ClassificationResult:
    """Label estimates and posterior probabilities produced by a classifier."""

    label_estimate: Mapping[int, str]
    label_and_post_prob: Mapping[int, Mapping[str, float]]
    training_data_count: Mapping[str, int]
    threshold: Optional[float] = None

    def __post_init__(self):
        object.__setattr__(self, "label_estimate", MappingProxyType(dict(self.label_estimate)))
        object.__setattr__(
            self, "label_and_post_prob",
            MappingProxyType({i: MappingProxyType(dict(p)) for i, p in self.label_and_post_prob.items()}),
        )
        object.__setattr__(self, "training_data_count", MappingProxyType(dict(self.training_data_count)))

    def with_threshold(self, threshold: float) -> "ClassificationResult":
        return replace(self, threshold=threshold)

    def accuracy(self, truth: Mapping[int, str]) -> float:
        """Fraction of estimates matching ``truth`` over the estimated identifiers."""
        if not self.label_estimate:
            raise InputConsistencyError("Classification result holds no estimates")
        missing = set(self.label_estimate) - set(truth)
        if missing:
            raise InputConsistencyError(f"{len(missing)} estimate(s) have no true label", missing)
        hits = sum(truth[i] == label for i, label in self.label_estimate.items())
        return hits / len(self.label_estimate)
