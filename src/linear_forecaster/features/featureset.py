"""Mapping of feature identities to observation vectors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Sequence

import numpy as np

from linear_forecaster.errors import DimensionMismatchError
from linear_forecaster.features.feature import Feature
from linear_forecaster.features.labels import FeatureLabels


@dataclass
class FeatureData:
    feature: Feature
    data: np.ndarray

    def __post_init__(self) -> None:
        self.data = np.asarray(self.data, dtype=float).reshape(-1)


class FeatureSet:
    """Feature data keyed by the canonical string of each feature.

    Column order for every matrix view is the ascending canonical string order
    returned by :meth:`labels`, never insertion order.
    """

    def __init__(self, entries: Iterable[FeatureData] | None = None) -> None:
        self._data: Dict[str, FeatureData] = {}
        for entry in entries or ():
            self._data[str(entry.feature)] = entry

    def set(self, feature: Feature, data: Sequence[float] | np.ndarray) -> None:
        self._data[str(feature)] = FeatureData(feature=feature, data=data)

    def get(self, feature: Feature | str) -> FeatureData | None:
        return self._data.get(str(feature))

    def __getitem__(self, feature: Feature | str) -> FeatureData:
        return self._data[str(feature)]

    def __contains__(self, feature: object) -> bool:
        return str(feature) in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[FeatureData]:
        return iter(self._data.values())

    def labels(self) -> FeatureLabels:
        """Return every tracked feature sorted by canonical string."""
        features = sorted((entry.feature for entry in self._data.values()), key=str)
        return FeatureLabels(features)

    def num_observations(self) -> int:
        """Common length of all member vectors (0 when empty)."""
        lengths = {len(entry.data) for entry in self._data.values()}
        if not lengths:
            return 0
        if len(lengths) > 1:
            detail = ", ".join(
                f"{key}={len(entry.data)}" for key, entry in sorted(self._data.items())
            )
            raise DimensionMismatchError(
                f"feature vectors have different lengths: {detail}"
            )
        return lengths.pop()

    def matrix(self, intercept: bool) -> np.ndarray | None:
        """Return an (observations, features) matrix, optionally with a leading
        column of ones. Returns None when there are no features."""
        columns = self.matrix_columns(intercept)
        if columns is None:
            return None
        return np.column_stack(columns)

    def matrix_columns(self, intercept: bool) -> List[np.ndarray] | None:
        """Return the matrix as a list of column vectors in label order.

        Feature columns are read-only views of the stored data.
        """
        labels = self.labels()
        if len(labels) == 0:
            return None

        m = self.num_observations()
        columns: List[np.ndarray] = []
        if intercept:
            columns.append(np.ones(m, dtype=float))
        for label in labels.labels():
            column = self._data[str(label)].data.view()
            column.flags.writeable = False
            columns.append(column)
        return columns

    def select(self, labels: FeatureLabels | Sequence[Feature]) -> FeatureSet:
        """Return a new set restricted to ``labels``; every label must exist."""
        wanted = labels.labels() if isinstance(labels, FeatureLabels) else list(labels)
        missing = [str(label) for label in wanted if str(label) not in self._data]
        if missing:
            raise DimensionMismatchError(
                f"feature set is missing {len(missing)} labels: {', '.join(missing)}"
            )
        return FeatureSet(self._data[str(label)] for label in wanted)


__all__ = ["FeatureData", "FeatureSet"]
