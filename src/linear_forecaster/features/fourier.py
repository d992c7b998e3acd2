"""Fourier seasonality features built on top of calendar features."""

from __future__ import annotations

import logging

import numpy as np

from linear_forecaster.config import ForecastOptions
from linear_forecaster.errors import UnsupportedFeatureError
from linear_forecaster.features.feature import Feature
from linear_forecaster.features.featureset import FeatureSet
from linear_forecaster.features.timefeatures import feature_period

log = logging.getLogger(__name__)

FOURIER_FUNCTIONS = {"sin": np.sin, "cos": np.cos}


def generate_fourier_features(
    time_features: FeatureSet,
    options: ForecastOptions,
    prune: bool = True,
) -> FeatureSet:
    """Expand each configured time feature into sin/cos harmonics.

    With ``prune`` enabled the result, together with an intercept column, has
    full column rank.
    """
    features = FeatureSet()
    for source, max_order in sorted(options.seasonality.items()):
        source_data = time_features.get(Feature.time(source))
        if source_data is None:
            raise UnsupportedFeatureError(f"time feature {source} was not generated")
        period = feature_period(source)
        for order in range(1, int(max_order) + 1):
            phase = 2.0 * np.pi * order * source_data.data / period
            for fn_name, fn in FOURIER_FUNCTIONS.items():
                features.set(Feature.seasonal(source, fn_name, order), fn(phase))

    if prune:
        features = prune_dependent_features(features)
    return features


def prune_dependent_features(features: FeatureSet) -> FeatureSet:
    """Greedily drop columns that do not raise the rank of ``[1, kept...]``.

    Columns are visited in label order so the outcome is deterministic.
    """
    m = features.num_observations()
    if len(features) == 0 or m == 0:
        return features

    kept = FeatureSet()
    basis = [np.ones(m, dtype=float)]
    rank = 1
    for label in features.labels().labels():
        column = features[label].data
        candidate_rank = int(np.linalg.matrix_rank(np.column_stack(basis + [column])))
        if candidate_rank > rank:
            basis.append(column)
            rank = candidate_rank
            kept.set(label, column)
        else:
            log.debug("Pruned linearly dependent feature %s", label)

    if len(kept) < len(features):
        log.debug("Kept %d of %d seasonal features", len(kept), len(features))
    return kept


__all__ = ["generate_fourier_features", "prune_dependent_features"]
