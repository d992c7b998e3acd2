"""Exception types raised by the forecasting core."""

from __future__ import annotations


class ForecastError(Exception):
    """Base class for all forecasting failures."""


class MissingInputError(ForecastError, ValueError):
    """Raised when fit is called without training data."""


class DimensionMismatchError(ForecastError, ValueError):
    """Raised when paired vectors or matrices disagree in length."""


class UnsupportedFeatureError(ForecastError, ValueError):
    """Raised when options reference a time feature that is not implemented."""


class InvalidWarmStartError(ForecastError, ValueError):
    """Raised when warm start coefficients do not match the design matrix."""


class UntrainedModelError(ForecastError, RuntimeError):
    """Raised when model coefficients are requested before a successful fit."""


__all__ = [
    "ForecastError",
    "MissingInputError",
    "DimensionMismatchError",
    "UnsupportedFeatureError",
    "InvalidWarmStartError",
    "UntrainedModelError",
]
