"""Configuration helpers for the linear_forecaster package."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml


@dataclass(frozen=True)
class ForecastOptions:
    """Options for a single seasonal linear model.

    ``seasonality`` maps a time feature name to the highest Fourier order
    generated for it. ``regularization`` of 0 selects the exact least-squares
    solver, anything larger selects coordinate-descent lasso.
    """

    seasonality: Dict[str, int] = field(
        default_factory=lambda: {"hour_of_day": 12, "day_of_week": 6}
    )
    regularization: float = 0.0
    iterations: int = 1000
    tolerance: float = 1e-4


@dataclass(frozen=True)
class OutlierOptions:
    """Tukey fence outlier removal; use 0.75/0.25/1.5 for the classic IQR rule."""

    num_passes: int = 3
    upper_percentile: float = 0.9
    lower_percentile: float = 0.1
    tukey_factor: float = 1.0


@dataclass(frozen=True)
class Options:
    series_options: ForecastOptions = field(default_factory=ForecastOptions)
    residual_options: ForecastOptions = field(default_factory=ForecastOptions)
    outlier_options: OutlierOptions = field(default_factory=OutlierOptions)
    residual_window: int = 100
    residual_zscore: float = 4.0


DEFAULT_CONFIG: Dict[str, Any] = {
    "series": {
        "seasonality": {"hour_of_day": 12, "day_of_week": 6},
        "regularization": 0.0,
        "iterations": 1000,
        "tolerance": 1e-4,
    },
    "residual": {
        "seasonality": {"hour_of_day": 12, "day_of_week": 6},
        "regularization": 0.0,
        "iterations": 1000,
        "tolerance": 1e-4,
    },
    "outlier": {
        "num_passes": 3,
        "upper_percentile": 0.9,
        "lower_percentile": 0.1,
        "tukey_factor": 1.0,
    },
    "residual_window": 100,
    "residual_zscore": 4.0,
}


def _merge(defaults: Mapping[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(dict(defaults))
    for key, value in overrides.items():
        # an empty YAML section parses to None and keeps its defaults
        if value is None and isinstance(merged.get(key), Mapping):
            continue
        # seasonality is replaced wholesale so a config can drop a component
        if key != "seasonality" and isinstance(value, Mapping) and isinstance(
            merged.get(key), Mapping
        ):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _forecast_options(cfg: Mapping[str, Any]) -> ForecastOptions:
    seasonality = {
        str(name): int(order) for name, order in (cfg.get("seasonality") or {}).items()
    }
    if any(order < 0 for order in seasonality.values()):
        raise ValueError("seasonality orders must be non-negative")
    regularization = float(cfg["regularization"])
    if regularization < 0:
        raise ValueError("regularization must be >= 0")
    iterations = int(cfg["iterations"])
    if iterations <= 0:
        raise ValueError("iterations must be positive")
    tolerance = float(cfg["tolerance"])
    if tolerance < 0:
        raise ValueError("tolerance must be >= 0")
    return ForecastOptions(
        seasonality=seasonality,
        regularization=regularization,
        iterations=iterations,
        tolerance=tolerance,
    )


def _outlier_options(cfg: Mapping[str, Any]) -> OutlierOptions:
    lower = float(cfg["lower_percentile"])
    upper = float(cfg["upper_percentile"])
    if not 0.0 <= lower < upper <= 1.0:
        raise ValueError(
            "outlier percentiles must satisfy 0 <= lower_percentile < upper_percentile <= 1"
        )
    num_passes = int(cfg["num_passes"])
    if num_passes < 0:
        raise ValueError("outlier.num_passes must be >= 0")
    tukey_factor = float(cfg["tukey_factor"])
    if tukey_factor < 0:
        raise ValueError("outlier.tukey_factor must be >= 0")
    return OutlierOptions(
        num_passes=num_passes,
        upper_percentile=upper,
        lower_percentile=lower,
        tukey_factor=tukey_factor,
    )


def options_from_dict(config_data: Mapping[str, Any] | None = None) -> Options:
    """Build :class:`Options` from a (possibly partial) config mapping."""
    config_data = _merge(DEFAULT_CONFIG, config_data or {})

    residual_window = int(config_data["residual_window"])
    if residual_window <= 0:
        raise ValueError("residual_window must be positive")
    residual_zscore = float(config_data["residual_zscore"])
    if residual_zscore < 0:
        raise ValueError("residual_zscore must be >= 0")
    for section in ("series", "residual", "outlier"):
        if not isinstance(config_data[section], Mapping):
            raise ValueError(f"config section '{section}' must be a mapping")

    return Options(
        series_options=_forecast_options(config_data["series"]),
        residual_options=_forecast_options(config_data["residual"]),
        outlier_options=_outlier_options(config_data["outlier"]),
        residual_window=residual_window,
        residual_zscore=residual_zscore,
    )


def load_config(path: str | Path | None = None) -> Options:
    """Load configuration from YAML or use defaults."""
    config_data: Dict[str, Any] = {}
    if path:
        with open(path, "r", encoding="utf-8") as handle:
            config_data = yaml.safe_load(handle) or {}
    return options_from_dict(config_data)
