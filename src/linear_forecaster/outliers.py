"""Iterative Tukey fence outlier removal on model residuals."""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from linear_forecaster.config import ForecastOptions, OutlierOptions
from linear_forecaster.models.forecast import Forecast, TimeDataset, as_dataset

log = logging.getLogger(__name__)


def tukey_fence(
    values: np.ndarray,
    lower_percentile: float,
    upper_percentile: float,
    tukey_factor: float,
) -> tuple[float, float]:
    """Return ``(lower, upper)`` bounds from the given quantiles."""
    values = np.asarray(values, dtype=float)
    q_lo = float(np.quantile(values, lower_percentile))
    q_hi = float(np.quantile(values, upper_percentile))
    spread = q_hi - q_lo
    return q_lo - tukey_factor * spread, q_hi + tukey_factor * spread


def remove_outliers(
    data: TimeDataset | pd.Series,
    forecast_options: ForecastOptions | None = None,
    outlier_options: OutlierOptions | None = None,
) -> TimeDataset:
    """Drop points whose fit residual falls outside the Tukey fence.

    Each pass refits a forecast on the surviving points; passes stop early once
    nothing is removed.
    """
    dataset = as_dataset(data)
    opt = outlier_options or OutlierOptions()

    for pass_num in range(opt.num_passes):
        forecast = Forecast(forecast_options)
        forecast.fit(dataset)
        residuals = forecast.residuals()

        lower, upper = tukey_fence(
            residuals, opt.lower_percentile, opt.upper_percentile, opt.tukey_factor
        )
        keep = (residuals >= lower) & (residuals <= upper)
        removed = int((~keep).sum())
        log.info(
            "Outlier pass %d removed %d of %d points (fence [%.4f, %.4f])",
            pass_num + 1,
            removed,
            len(dataset),
            lower,
            upper,
        )
        if removed == 0:
            break
        dataset = TimeDataset(t=dataset.t[keep], y=dataset.y[keep])

    return dataset


__all__ = ["remove_outliers", "tukey_fence"]
