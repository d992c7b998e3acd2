"""Calendar features derived from timestamps."""

from __future__ import annotations

from typing import Callable, Dict, Iterable

import numpy as np
import pandas as pd

from linear_forecaster.config import ForecastOptions
from linear_forecaster.errors import UnsupportedFeatureError
from linear_forecaster.features.feature import Feature
from linear_forecaster.features.featureset import FeatureSet


def _hour_of_day(t: pd.DatetimeIndex) -> np.ndarray:
    seconds = t.hour * 3600 + t.minute * 60 + t.second + t.microsecond / 1e6
    return np.asarray(seconds, dtype=float) / 3600.0


def _day_of_week(t: pd.DatetimeIndex) -> np.ndarray:
    return np.asarray(t.dayofweek, dtype=float) + _hour_of_day(t) / 24.0


def _day_of_year(t: pd.DatetimeIndex) -> np.ndarray:
    return np.asarray(t.dayofyear - 1, dtype=float) + _hour_of_day(t) / 24.0


TimeFeatureFn = Callable[[pd.DatetimeIndex], np.ndarray]

# name -> (generator, natural period in the generator's units)
TIME_FEATURES: Dict[str, tuple[TimeFeatureFn, float]] = {
    "hour_of_day": (_hour_of_day, 24.0),
    "day_of_week": (_day_of_week, 7.0),
    "day_of_year": (_day_of_year, 365.25),
}


def feature_period(name: str) -> float:
    try:
        return TIME_FEATURES[name][1]
    except KeyError:
        raise UnsupportedFeatureError(f"unknown time feature: {name}") from None


def to_datetime_index(t: Iterable) -> pd.DatetimeIndex:
    if isinstance(t, pd.DatetimeIndex):
        return t
    return pd.DatetimeIndex(pd.to_datetime(list(t)))


def generate_time_features(t: Iterable, options: ForecastOptions) -> FeatureSet:
    """Generate every time feature referenced by ``options.seasonality``."""
    index = to_datetime_index(t)
    features = FeatureSet()
    for name in sorted(options.seasonality):
        if name not in TIME_FEATURES:
            raise UnsupportedFeatureError(f"unknown time feature: {name}")
        generator, _ = TIME_FEATURES[name]
        features.set(Feature.time(name), generator(index))
    return features


__all__ = [
    "TIME_FEATURES",
    "feature_period",
    "generate_time_features",
    "to_datetime_index",
]
