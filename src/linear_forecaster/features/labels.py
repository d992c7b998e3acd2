"""Stable integer positions for feature identities."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Tuple

from linear_forecaster.features.feature import Feature


class FeatureLabels:
    """Ordered feature labels with a lookup from label to column position.

    The list is kept exactly as given. When a label appears more than once the
    position of its last occurrence is the one recorded.
    """

    def __init__(self, labels: Iterable[Feature]) -> None:
        self._labels: List[Feature] = list(labels)
        self._idx: Dict[Feature, int] = {}
        for position, label in enumerate(self._labels):
            self._idx[label] = position

    def __len__(self) -> int:
        return len(self._idx)

    def __iter__(self) -> Iterator[Feature]:
        return iter(self.labels())

    def __repr__(self) -> str:
        names = ", ".join(str(label) for label in self._labels)
        return f"FeatureLabels([{names}])"

    def labels(self) -> List[Feature]:
        return list(self._labels)

    def index(self, label: Feature) -> Tuple[int, bool]:
        position = self._idx.get(label)
        if position is None:
            return -1, False
        return position, True
