import numpy as np
import pytest

from linear_forecaster.errors import DimensionMismatchError
from linear_forecaster.features import Feature, FeatureSet


def build_feature_set() -> FeatureSet:
    features = FeatureSet()
    # inserted out of order on purpose
    features.set(Feature.time("c"), [7.0, 8.0, 9.0])
    features.set(Feature.time("a"), [1.0, 2.0, 3.0])
    features.set(Feature.time("b"), [4.0, 5.0, 6.0])
    return features


def test_labels_sorted_by_canonical_string() -> None:
    labels = build_feature_set().labels()
    assert [str(label) for label in labels.labels()] == ["a", "b", "c"]
    assert labels.index(Feature.time("c")) == (2, True)


def test_matrix_with_intercept() -> None:
    obs = build_feature_set().matrix(intercept=True)
    expected = np.array(
        [
            [1.0, 1.0, 4.0, 7.0],
            [1.0, 2.0, 5.0, 8.0],
            [1.0, 3.0, 6.0, 9.0],
        ]
    )
    np.testing.assert_array_equal(obs, expected)


def test_matrix_without_intercept() -> None:
    obs = build_feature_set().matrix(intercept=False)
    assert obs.shape == (3, 3)
    np.testing.assert_array_equal(obs[:, 0], [1.0, 2.0, 3.0])


def test_matrix_columns_match_matrix() -> None:
    features = build_feature_set()
    columns = features.matrix_columns(intercept=True)
    obs = features.matrix(intercept=True)
    assert len(columns) == 4
    for idx, column in enumerate(columns):
        np.testing.assert_array_equal(column, obs[:, idx])


def test_empty_feature_set_has_no_matrix() -> None:
    features = FeatureSet()
    assert len(features.labels()) == 0
    assert features.matrix(intercept=True) is None
    assert features.matrix_columns(intercept=True) is None


def test_same_feature_overwrites_previous_data() -> None:
    features = FeatureSet()
    features.set(Feature.time("a"), [1.0, 2.0])
    features.set(Feature.time("a"), [3.0, 4.0])
    assert len(features) == 1
    np.testing.assert_array_equal(features[Feature.time("a")].data, [3.0, 4.0])


def test_mismatched_lengths_raise() -> None:
    features = FeatureSet()
    features.set(Feature.time("a"), [1.0, 2.0, 3.0])
    features.set(Feature.time("b"), [1.0, 2.0])
    with pytest.raises(DimensionMismatchError):
        features.matrix(intercept=True)


def test_select_requires_every_label() -> None:
    features = build_feature_set()
    subset = features.select([Feature.time("b"), Feature.time("a")])
    assert [str(label) for label in subset.labels().labels()] == ["a", "b"]
    with pytest.raises(DimensionMismatchError):
        features.select([Feature.time("a"), Feature.time("missing")])


def test_matrix_columns_are_read_only_views() -> None:
    features = build_feature_set()
    columns = features.matrix_columns(intercept=False)
    with pytest.raises(ValueError):
        columns[0][0] = 100.0
    np.testing.assert_array_equal(features[Feature.time("a")].data, [1.0, 2.0, 3.0])
