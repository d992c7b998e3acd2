"""Feature identities, label indexes and feature sets."""

from linear_forecaster.features.feature import Feature
from linear_forecaster.features.featureset import FeatureData, FeatureSet
from linear_forecaster.features.labels import FeatureLabels

__all__ = ["Feature", "FeatureData", "FeatureLabels", "FeatureSet"]
