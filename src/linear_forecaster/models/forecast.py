"""Seasonal linear forecast: features -> design matrix -> solver -> predictions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

import numpy as np
import pandas as pd

from linear_forecaster.config import ForecastOptions
from linear_forecaster.errors import (
    DimensionMismatchError,
    MissingInputError,
    UntrainedModelError,
)
from linear_forecaster.features.feature import Feature
from linear_forecaster.features.featureset import FeatureSet
from linear_forecaster.features.fourier import generate_fourier_features
from linear_forecaster.features.labels import FeatureLabels
from linear_forecaster.features.timefeatures import (
    generate_time_features,
    to_datetime_index,
)
from linear_forecaster.models.linear import LassoOptions, lasso_regression, ols
from linear_forecaster.scores import Scores, compute_scores

log = logging.getLogger(__name__)


@dataclass
class TimeDataset:
    """Observation values paired with their timestamps."""

    t: pd.DatetimeIndex
    y: np.ndarray

    def __post_init__(self) -> None:
        self.t = to_datetime_index(self.t)
        self.y = np.asarray(self.y, dtype=float).reshape(-1)
        if len(self.t) != self.y.shape[0]:
            raise DimensionMismatchError(
                f"input data has {self.y.shape[0]} values but {len(self.t)} timestamps"
            )

    @classmethod
    def from_series(cls, series: pd.Series) -> TimeDataset:
        return cls(t=pd.DatetimeIndex(series.index), y=series.to_numpy(dtype=float))

    def __len__(self) -> int:
        return self.y.shape[0]


@dataclass
class ForecastModel:
    """Trained model state; labels are frozen at fit time."""

    labels: FeatureLabels
    coef: np.ndarray
    intercept: float
    residuals: np.ndarray = field(default_factory=lambda: np.empty(0))
    scores: Scores = field(default_factory=Scores)

    def weights(self) -> np.ndarray:
        return np.concatenate(([self.intercept], self.coef))


def as_dataset(data: TimeDataset | pd.Series | None) -> TimeDataset:
    if data is None:
        raise MissingInputError("no training data")
    if isinstance(data, TimeDataset):
        return data
    if isinstance(data, pd.Series):
        return TimeDataset.from_series(data)
    raise TypeError(f"expected TimeDataset or pandas Series, got {type(data).__name__}")


class Forecast:
    """Linear regression over Fourier seasonality features."""

    def __init__(self, options: ForecastOptions | None = None) -> None:
        self.options = options or ForecastOptions()
        self.model: ForecastModel | None = None

    def generate_features(self, t: Iterable, prune: bool = True) -> FeatureSet:
        time_features = generate_time_features(t, self.options)
        return generate_fourier_features(time_features, self.options, prune=prune)

    def _design_matrix(self, features: FeatureSet, m: int) -> np.ndarray:
        obs = features.matrix(intercept=True)
        if obs is None:
            return np.ones((m, 1), dtype=float)
        return obs

    def _solve(self, features: FeatureSet, y: np.ndarray) -> tuple[float, np.ndarray]:
        if self.options.regularization > 0:
            columns = features.matrix_columns(intercept=True)
            if columns is None:
                columns = [np.ones(y.shape[0], dtype=float)]
            return lasso_regression(
                columns,
                y,
                LassoOptions(
                    lam=self.options.regularization,
                    iterations=self.options.iterations,
                    tolerance=self.options.tolerance,
                ),
            )
        return ols(self._design_matrix(features, y.shape[0]), y)

    def fit(self, data: TimeDataset | pd.Series | None) -> ForecastModel:
        """Fit the model and return it; a failure keeps any previous model."""
        dataset = as_dataset(data)
        if len(dataset) == 0:
            raise MissingInputError("no training data")

        features = self.generate_features(dataset.t)
        labels = features.labels()
        intercept, coef = self._solve(features, dataset.y)

        model = ForecastModel(labels=labels, coef=coef, intercept=intercept)
        predicted = self._predict_with(model, dataset.t)
        model.scores = compute_scores(predicted, dataset.y)
        model.residuals = predicted - dataset.y

        self.model = model
        log.info(
            "Fit forecast on %d points with %d features (rmse=%.4f)",
            len(dataset),
            len(labels),
            model.scores.rmse,
        )
        return model

    def _predict_with(self, model: ForecastModel, t: Iterable) -> np.ndarray:
        index = to_datetime_index(t)
        if len(model.labels) == 0:
            return np.full(len(index), model.intercept, dtype=float)

        # regenerate unpruned so every fit-time label is available
        features = self.generate_features(index, prune=False).select(model.labels)
        obs = features.matrix(intercept=True).T
        return model.weights() @ obs

    def predict(self, t: Iterable) -> np.ndarray:
        """Predict one value per timestamp, in input order."""
        return self._predict_with(self._require_model(), t)

    def _require_model(self) -> ForecastModel:
        if self.model is None:
            raise UntrainedModelError("no model coefficients from fit")
        return self.model

    def feature_labels(self) -> List[Feature]:
        if self.model is None:
            return []
        return self.model.labels.labels()

    def coefficients(self) -> Dict[Feature, float]:
        model = self._require_model()
        labels = model.labels.labels()
        if not labels or model.coef.size == 0:
            raise UntrainedModelError("no model coefficients from fit")
        return {label: float(value) for label, value in zip(labels, model.coef)}

    def intercept(self) -> float:
        if self.model is None:
            return 0.0
        return self.model.intercept

    def model_eq(self) -> str:
        coef = self.coefficients()
        eq = f"y ~ {self.intercept():.2f}"
        for label in self.feature_labels():
            eq += f"+{coef[label]:.2f}*{label}"
        return eq

    def scores(self) -> Scores:
        if self.model is None:
            return Scores()
        return self.model.scores

    def residuals(self) -> np.ndarray:
        if self.model is None:
            return np.empty(0, dtype=float)
        return self.model.residuals.copy()


__all__ = ["Forecast", "ForecastModel", "TimeDataset", "as_dataset"]
