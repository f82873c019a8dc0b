"""
Tests for Estimators/series.py

Tests weighted series construction from:
- Raw value lists
- Variational series (frequency tables)
- Invalid observations
"""

import pytest
import numpy as np


class TestWeightedObservation:
    """Tests for single observations."""

    def test_default_weight_is_one(self):
        """A bare value is a single raw observation."""
        from Estimators.series import WeightedObservation

        assert WeightedObservation(2.5).weight == 1.0

    @pytest.mark.parametrize("weight", [0, -1, float('nan'), float('inf')])
    def test_rejects_non_positive_weight(self, weight):
        """Weights must be strictly positive and finite."""
        from Estimators.series import WeightedObservation
        from Estimators.errors import MalformedInputError

        with pytest.raises(MalformedInputError):
            WeightedObservation(1.0, weight)

    def test_rejects_nan_value(self):
        """NaN values are malformed input."""
        from Estimators.series import WeightedObservation
        from Estimators.errors import MalformedInputError

        with pytest.raises(MalformedInputError):
            WeightedObservation(float('nan'), 1.0)


class TestFromValues:
    """Tests for raw value lists."""

    def test_each_value_has_weight_one(self, raw_values):
        """Raw values map to (value, 1.0)."""
        from Estimators.series import WeightedSeries

        series = WeightedSeries.from_values(raw_values)

        assert series.pairs() == [(float(v), 1.0) for v in raw_values]
        assert series.total_weight() == 8.0

    def test_preserves_order(self):
        """Observations keep their input order."""
        from Estimators.series import WeightedSeries

        series = WeightedSeries.from_values([3, 1, 2])

        assert [obs.value for obs in series] == [3.0, 1.0, 2.0]

    def test_empty_values(self):
        """An empty list gives an empty series (the accumulator rejects it)."""
        from Estimators.series import WeightedSeries

        series = WeightedSeries.from_values([])

        assert len(series) == 0
        assert series.total_weight() == 0.0

    @pytest.mark.parametrize("bad", ["abc", None, True])
    def test_non_numeric_value_is_malformed(self, bad):
        """Non-numeric entries are malformed input."""
        from Estimators.series import WeightedSeries
        from Estimators.errors import MalformedInputError

        with pytest.raises(MalformedInputError):
            WeightedSeries.from_values([1.0, bad])


class TestFromVariationalSeries:
    """Tests for frequency tables."""

    def test_keys_parsed_as_class_marks(self):
        """Keys are decimal strings, counts become weights."""
        from Estimators.series import WeightedSeries

        series = WeightedSeries.from_variational_series({"1.5": 3, "-2": 5, "1e1": 2})

        assert series.pairs() == [(1.5, 3.0), (-2.0, 5.0), (10.0, 2.0)]
        assert series.total_weight() == 10.0

    def test_unparseable_key_is_malformed(self):
        """A key that is not a number is a fatal input error."""
        from Estimators.series import WeightedSeries
        from Estimators.errors import MalformedInputError

        with pytest.raises(MalformedInputError, match="not a number"):
            WeightedSeries.from_variational_series({"1": 2, "two": 3})

    def test_zero_count_is_malformed(self):
        """Counts must be positive."""
        from Estimators.series import WeightedSeries
        from Estimators.errors import MalformedInputError

        with pytest.raises(MalformedInputError):
            WeightedSeries.from_variational_series({"1": 0})

    def test_malformed_input_is_value_error(self):
        """Callers catching ValueError still see malformed input."""
        from Estimators.series import WeightedSeries

        with pytest.raises(ValueError):
            WeightedSeries.from_variational_series({"x": 1})


class TestSeriesHelpers:
    """Tests for series accessors."""

    def test_to_arrays(self):
        """to_arrays returns aligned float arrays."""
        from Estimators.series import WeightedSeries

        values, weights = WeightedSeries.from_variational_series({"1": 3, "2": 5}).to_arrays()

        np.testing.assert_array_equal(values, [1.0, 2.0])
        np.testing.assert_array_equal(weights, [3.0, 5.0])

    def test_map_values_keeps_weights(self):
        """map_values transforms values only."""
        from Estimators.series import WeightedSeries

        series = WeightedSeries([(1.0, 2.0), (3.0, 4.0)]).map_values(lambda v: v * 10)

        assert series.pairs() == [(10.0, 2.0), (30.0, 4.0)]

    def test_equality(self):
        """Series compare by observations."""
        from Estimators.series import WeightedSeries

        assert WeightedSeries.from_values([1, 2]) == WeightedSeries([(1, 1), (2, 1)])
        assert WeightedSeries.from_values([1, 2]) != WeightedSeries.from_values([2, 1])
