"""
Tests for Estimators/distributions.py

Tests the quantile collaborator:
- Agreement with printed tables
- Parameter validation
- Failure signalling
"""

import pytest
from scipy import stats


class TestQuantileValues:
    """Quantiles should match reference tables."""

    @pytest.mark.parametrize("dist_name,df,p,expected", [
        ("normal", None, 0.975, 1.959964),
        ("normal", None, 0.995, 2.575829),
        ("t", 7, 0.975, 2.364624),
        ("t", 24, 0.975, 2.063899),
        ("chi2", 7, 0.975, 16.012764),
        ("chi2", 7, 0.025, 1.689869),
    ])
    def test_table_values(self, dist_name, df, p, expected):
        """Quantiles agree with tables to six decimals."""
        from Estimators.distributions import Normal, StudentsT, ChiSquared, quantile

        dist = {"normal": lambda: Normal(), "t": lambda: StudentsT(df), "chi2": lambda: ChiSquared(df)}[dist_name]()

        assert quantile(dist, p) == pytest.approx(expected, abs=1e-6)

    def test_returns_python_float(self):
        """Results are plain floats, not numpy scalars."""
        from Estimators.distributions import Normal, quantile

        assert type(quantile(Normal(), 0.9)) is float

    def test_symmetry_of_t(self):
        """t quantiles are symmetric around zero."""
        from Estimators.distributions import StudentsT, quantile

        assert quantile(StudentsT(5), 0.1) == pytest.approx(-quantile(StudentsT(5), 0.9))

    def test_non_integer_degrees_of_freedom(self):
        """Weighted samples can have fractional n, so df may be fractional."""
        from Estimators.distributions import ChiSquared, quantile

        assert quantile(ChiSquared(6.5), 0.5) == pytest.approx(stats.chi2.ppf(0.5, 6.5))


class TestQuantileValidation:
    """Invalid inputs are rejected with typed errors."""

    @pytest.mark.parametrize("p", [0.0, 1.0, -0.1, 1.5])
    def test_probability_outside_open_interval(self, p):
        """p must be strictly inside (0, 1)."""
        from Estimators.distributions import Normal, quantile
        from Estimators.errors import InvalidParameterError

        with pytest.raises(InvalidParameterError):
            quantile(Normal(), p)

    @pytest.mark.parametrize("df", [0, -3])
    def test_degrees_of_freedom_must_be_positive(self, df):
        """df <= 0 is an invalid parameter."""
        from Estimators.distributions import StudentsT, ChiSquared
        from Estimators.errors import InvalidParameterError

        with pytest.raises(InvalidParameterError):
            StudentsT(df)
        with pytest.raises(InvalidParameterError):
            ChiSquared(df)

    def test_unknown_distribution(self):
        """Anything but the three specs is a quantile failure."""
        from Estimators.distributions import quantile
        from Estimators.errors import QuantileError

        with pytest.raises(QuantileError):
            quantile(object(), 0.5)

    def test_str(self):
        """Specs have readable names for logs."""
        from Estimators.distributions import Normal, StudentsT, ChiSquared

        assert str(Normal()) == "N(0, 1)"
        assert str(StudentsT(7)) == "t(7)"
        assert str(ChiSquared(7.0)) == "chi2(7)"
