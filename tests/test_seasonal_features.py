import numpy as np
import pandas as pd
import pytest

from linear_forecaster.config import ForecastOptions
from linear_forecaster.errors import UnsupportedFeatureError
from linear_forecaster.features import Feature
from linear_forecaster.features.fourier import generate_fourier_features
from linear_forecaster.features.timefeatures import generate_time_features


def test_time_features_are_fractional() -> None:
    t = pd.DatetimeIndex(["2024-01-01 06:30", "2024-01-03 18:00"])
    options = ForecastOptions(seasonality={"hour_of_day": 1, "day_of_week": 1})
    features = generate_time_features(t, options)

    np.testing.assert_allclose(features[Feature.time("hour_of_day")].data, [6.5, 18.0])
    # 2024-01-01 is a Monday
    np.testing.assert_allclose(
        features[Feature.time("day_of_week")].data, [6.5 / 24, 2.75]
    )


def test_unknown_time_feature_raises() -> None:
    t = pd.date_range("2024-01-01", periods=4, freq="h")
    options = ForecastOptions(seasonality={"minute_of_hour": 2})
    with pytest.raises(UnsupportedFeatureError):
        generate_time_features(t, options)


def test_fourier_features_unpruned_count() -> None:
    t = pd.date_range("2024-01-01", periods=24 * 14, freq="h")
    options = ForecastOptions(seasonality={"day_of_week": 2, "hour_of_day": 3})
    time_features = generate_time_features(t, options)
    features = generate_fourier_features(time_features, options, prune=False)

    assert len(features) == 2 * (2 + 3)
    assert Feature.seasonal("hour_of_day", "cos", 3) in features
    assert Feature.time("hour_of_day") not in features


def test_fourier_pruning_drops_aliased_harmonics() -> None:
    t = pd.date_range("2024-01-01", periods=24 * 7, freq="h")
    options = ForecastOptions(seasonality={"hour_of_day": 12})
    time_features = generate_time_features(t, options)
    features = generate_fourier_features(time_features, options)

    # sin of the Nyquist harmonic vanishes on integer hours
    assert Feature.seasonal("hour_of_day", "sin", 12) not in features
    assert Feature.seasonal("hour_of_day", "cos", 12) in features
    assert len(features) == 23

    obs = features.matrix(intercept=True)
    assert np.linalg.matrix_rank(obs) == obs.shape[1]


def test_fourier_pruning_drops_constant_components() -> None:
    t = pd.date_range("2024-01-01", periods=60, freq="D")
    options = ForecastOptions(seasonality={"hour_of_day": 2, "day_of_week": 1})
    time_features = generate_time_features(t, options)
    features = generate_fourier_features(time_features, options)

    assert [str(label) for label in features.labels().labels()] == [
        "day_of_week_cos_01",
        "day_of_week_sin_01",
    ]
