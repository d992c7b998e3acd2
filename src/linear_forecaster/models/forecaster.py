"""Series forecast with a residual model providing uncertainty bands."""

from __future__ import annotations

import logging
from typing import Iterable

import numpy as np
import pandas as pd

from linear_forecaster.config import Options
from linear_forecaster.errors import UntrainedModelError
from linear_forecaster.features.timefeatures import to_datetime_index
from linear_forecaster.models.forecast import Forecast, TimeDataset, as_dataset
from linear_forecaster.outliers import remove_outliers

log = logging.getLogger(__name__)


def rolling_residual_std(residuals: np.ndarray, window: int) -> np.ndarray:
    """Trailing population standard deviation of the residuals."""
    series = pd.Series(np.asarray(residuals, dtype=float))
    std = series.rolling(window=int(window), min_periods=1).std(ddof=0)
    return std.fillna(0.0).to_numpy(dtype=float)


class Forecaster:
    """Fits a seasonal series model plus a model of its residual spread."""

    def __init__(self, options: Options | None = None) -> None:
        self.options = options or Options()
        self.series_model: Forecast | None = None
        self.residual_model: Forecast | None = None

    def fit(self, data: TimeDataset | pd.Series | None) -> None:
        dataset = as_dataset(data)
        cleaned = remove_outliers(
            dataset, self.options.series_options, self.options.outlier_options
        )

        series_model = Forecast(self.options.series_options)
        series_model.fit(cleaned)

        spread = rolling_residual_std(
            series_model.residuals(), self.options.residual_window
        )
        residual_model = Forecast(self.options.residual_options)
        residual_model.fit(TimeDataset(t=cleaned.t, y=spread))

        self.series_model = series_model
        self.residual_model = residual_model
        log.info(
            "Fit forecaster on %d of %d points", len(cleaned), len(dataset)
        )

    def predict(self, t: Iterable) -> pd.DataFrame:
        """Return ``forecast``, ``upper`` and ``lower`` columns indexed by ``t``."""
        if self.series_model is None or self.residual_model is None:
            raise UntrainedModelError("forecaster has not been fit")

        index = to_datetime_index(t)
        forecast = self.series_model.predict(index)
        spread = np.maximum(self.residual_model.predict(index), 0.0)
        band = self.options.residual_zscore * spread
        return pd.DataFrame(
            {
                "forecast": forecast,
                "upper": forecast + band,
                "lower": forecast - band,
            },
            index=index,
        )


__all__ = ["Forecaster", "rolling_residual_std"]
