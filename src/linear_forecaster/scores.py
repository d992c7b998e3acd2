"""Goodness-of-fit scores for in-sample predictions."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Sequence

import numpy as np
from sklearn.metrics import (
    mean_absolute_error,
    mean_absolute_percentage_error,
    mean_squared_error,
    r2_score,
)

from linear_forecaster.errors import DimensionMismatchError


@dataclass(frozen=True)
class Scores:
    mse: float = 0.0
    rmse: float = 0.0
    mae: float = 0.0
    mape: float = 0.0
    r2: float = 0.0

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


def compute_scores(
    predicted: Sequence[float] | np.ndarray,
    actual: Sequence[float] | np.ndarray,
) -> Scores:
    """Score ``predicted`` against ``actual``; both must have the same length."""
    predicted = np.asarray(predicted, dtype=float).reshape(-1)
    actual = np.asarray(actual, dtype=float).reshape(-1)
    if predicted.shape[0] != actual.shape[0]:
        raise DimensionMismatchError(
            f"predicted has {predicted.shape[0]} values and actual has {actual.shape[0]}"
        )
    if predicted.size == 0:
        raise DimensionMismatchError("cannot score empty vectors")

    mse = float(mean_squared_error(actual, predicted))
    r2 = float(r2_score(actual, predicted)) if actual.size > 1 else 0.0
    return Scores(
        mse=mse,
        rmse=float(np.sqrt(mse)),
        mae=float(mean_absolute_error(actual, predicted)),
        mape=float(mean_absolute_percentage_error(actual, predicted)),
        r2=r2,
    )


__all__ = ["Scores", "compute_scores"]
