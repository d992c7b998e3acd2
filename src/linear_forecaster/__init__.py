"""Seasonal linear forecasting with least-squares and lasso solvers.

The usual entry points are :class:`Forecast` for a single seasonal model and
:class:`Forecaster` for a model with upper/lower bands, both configured from
:func:`load_config`.
"""

from importlib import metadata

from linear_forecaster.config import ForecastOptions, Options, load_config
from linear_forecaster.errors import ForecastError
from linear_forecaster.models.forecast import Forecast, TimeDataset
from linear_forecaster.models.forecaster import Forecaster

__all__ = [
    "Forecast",
    "ForecastError",
    "ForecastOptions",
    "Forecaster",
    "Options",
    "TimeDataset",
    "load_config",
    "__version__",
]

_DISTRIBUTION = "linear-forecaster"


def __getattr__(name: str) -> str:
    # resolved lazily so an uninstalled source checkout still imports
    if name != "__version__":
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    try:
        return metadata.version(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return "0.0.0"
