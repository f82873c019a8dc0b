"""
Confidence intervals for the population mean and variance.

This module provides the three classical interval estimators:
- Mean with known population variance (standard normal pivot)
- Mean with unknown variance (Student's t pivot, n - 1 degrees of freedom)
- Variance (chi-squared pivot, n - 1 degrees of freedom)

Each estimator is a pure function of its numeric inputs and a quantile
function (see `Estimators.distributions`). None of them touch a SampleRecord.

References:
- Chi-squared interval for the variance: (n-1)s^2/chi2_{(1+c)/2} <= sigma^2 <= (n-1)s^2/chi2_{(1-c)/2}
"""

import logging
import math
from dataclasses import dataclass
from typing import Literal, Optional, Tuple

from .distributions import ChiSquared, Normal, QuantileFunction, StudentsT, quantile as scipy_quantile
from .errors import DegenerateSampleError, InvalidParameterError, QuantileError
from .moments import SeriesLike, accumulate

logger = logging.getLogger(__name__)

IntervalKind = Literal['known_variance', 'unknown_variance', 'variance']


# =============================================================================
# DATA CLASSES FOR RESULTS
# =============================================================================

@dataclass(frozen=True)
class ConfidenceInterval:
    """Container for confidence interval results."""
    estimate: float
    lower: float
    upper: float
    confidence: float
    method: str
    n_samples: float

    def __repr__(self) -> str:
        return f"{self.estimate:.4f} [{self.lower:.4f}, {self.upper:.4f}] ({self.confidence*100:.0f}% CI, {self.method})"

    def contains(self, value: float) -> bool:
        """Check if a value falls within the CI."""
        return self.lower <= value <= self.upper

    @property
    def width(self) -> float:
        return self.upper - self.lower

    def as_tuple(self) -> Tuple[float, float]:
        return self.lower, self.upper


# =============================================================================
# VALIDATION
# =============================================================================

def _validate_confidence(confidence: float) -> None:
    if not 0 < confidence < 1:
        raise InvalidParameterError(f"confidence must be in (0, 1), got {confidence}")


def _validate_sample_size(sample_size: float, operation: str) -> None:
    if not sample_size > 1:
        raise DegenerateSampleError(sample_size, operation)


def _validate_variance(variance: Optional[float], name: str) -> float:
    if variance is None:
        raise InvalidParameterError(f"{name} is required")
    if variance < 0 or math.isnan(variance):
        raise InvalidParameterError(f"{name} must be >= 0, got {variance}")
    return variance


# =============================================================================
# MEAN INTERVALS
# =============================================================================

def mean_confidence_interval_with_known_variance(
    sample_size: float,
    mean: float,
    variance: float,
    confidence: float = 0.95,
    quantile: QuantileFunction = scipy_quantile
) -> ConfidenceInterval:
    """
    Interval for the mean when the population variance is known.

    epsilon = z_{(1+c)/2} * sqrt(variance / n)

    Args:
        sample_size: n (sum of weights), must be > 1
        mean: Sample mean
        variance: Known population variance (not estimated from the sample)
        confidence: Two-sided confidence level in (0, 1)
        quantile: Quantile function, scipy-backed by default

    Returns:
        ConfidenceInterval centred on `mean`
    """
    _validate_confidence(confidence)
    _validate_sample_size(sample_size, "mean confidence interval with known variance")
    variance = _validate_variance(variance, "known variance")

    z = quantile(Normal(), (confidence + 1) / 2)
    epsilon = z * math.sqrt(variance / sample_size)

    return ConfidenceInterval(
        estimate=mean,
        lower=mean - epsilon,
        upper=mean + epsilon,
        confidence=confidence,
        method='normal',
        n_samples=sample_size
    )


def mean_confidence_interval_with_unknown_variance(
    sample_size: float,
    mean: float,
    unbiased_variance: float,
    confidence: float = 0.95,
    quantile: QuantileFunction = scipy_quantile
) -> ConfidenceInterval:
    """
    Interval for the mean when the variance is estimated from the sample.

    epsilon = t_{(1+c)/2, n-1} * sqrt(s^2 / n), with s^2 the unbiased variance.

    Example:
        >>> ci = mean_confidence_interval_with_unknown_variance(8, 5.0, 32 / 7)
        >>> round(ci.upper - 5.0, 4)
        1.7875
    """
    _validate_confidence(confidence)
    _validate_sample_size(sample_size, "mean confidence interval with unknown variance")
    unbiased_variance = _validate_variance(unbiased_variance, "unbiased variance")

    t_crit = quantile(StudentsT(sample_size - 1), (confidence + 1) / 2)
    epsilon = t_crit * math.sqrt(unbiased_variance / sample_size)

    return ConfidenceInterval(
        estimate=mean,
        lower=mean - epsilon,
        upper=mean + epsilon,
        confidence=confidence,
        method='t',
        n_samples=sample_size
    )


# =============================================================================
# VARIANCE INTERVAL
# =============================================================================

def variance_confidence_interval(
    sample_size: float,
    unbiased_variance: float,
    confidence: float = 0.95,
    quantile: QuantileFunction = scipy_quantile
) -> ConfidenceInterval:
    """
    Interval for the population variance.

    The upper chi-squared quantile gives the lower bound and the lower
    quantile gives the upper bound:

        ((n-1) s^2 / chi2_{(1+c)/2}, (n-1) s^2 / chi2_{(1-c)/2})

    Args:
        sample_size: n, must be > 1
        unbiased_variance: Sample variance s^2 (divides by n - 1)
        confidence: Two-sided confidence level in (0, 1)
        quantile: Quantile function, scipy-backed by default

    Raises:
        QuantileError: If the lower chi-squared quantile is not positive or a
            bound overflows (tiny degrees of freedom from fractional weights)
    """
    _validate_confidence(confidence)
    _validate_sample_size(sample_size, "variance confidence interval")
    unbiased_variance = _validate_variance(unbiased_variance, "unbiased variance")

    df = sample_size - 1
    chi2_hi = quantile(ChiSquared(df), (1 + confidence) / 2)
    chi2_lo = quantile(ChiSquared(df), (1 - confidence) / 2)
    scaled = df * unbiased_variance

    logger.debug("chi2 quantiles for df=%s: lo=%r hi=%r", df, chi2_lo, chi2_hi)

    if not chi2_lo > 0:
        raise QuantileError(
            f"chi2({df:g}) quantile at p={(1 - confidence) / 2} is {chi2_lo}, cannot bound the variance"
        )
    lower = scaled / chi2_hi
    upper = scaled / chi2_lo
    if not (math.isfinite(lower) and math.isfinite(upper)):
        raise QuantileError(
            f"Variance interval is not finite for df={df:g}: ({lower}, {upper})"
        )

    return ConfidenceInterval(
        estimate=unbiased_variance,
        lower=lower,
        upper=upper,
        confidence=confidence,
        method='chi2',
        n_samples=sample_size
    )


# =============================================================================
# CONVENIENCE
# =============================================================================

def compute_confidence_interval(
    series: SeriesLike,
    confidence: float = 0.95,
    kind: IntervalKind = 'unknown_variance',
    known_variance: Optional[float] = None,
    quantile: QuantileFunction = scipy_quantile
) -> ConfidenceInterval:
    """
    Accumulate a series and compute one interval from it.

    Args:
        series: WeightedSeries or iterable of (value, weight)
        confidence: Confidence level (default 0.95 for 95% CI)
        kind: 'known_variance', 'unknown_variance' or 'variance'
        known_variance: Population variance, required for 'known_variance'
        quantile: Quantile function

    Example:
        >>> from Estimators.series import WeightedSeries
        >>> ci = compute_confidence_interval(WeightedSeries.from_values([2, 4, 4, 4, 5, 5, 7, 9]))
        >>> ci.contains(5.0)
        True
    """
    moments = accumulate(series)

    if kind == 'known_variance':
        return mean_confidence_interval_with_known_variance(
            moments.sample_size, moments.mean, known_variance, confidence, quantile
        )

    if moments.unbiased_variance is None:
        raise DegenerateSampleError(moments.sample_size, f"{kind} confidence interval")

    if kind == 'unknown_variance':
        return mean_confidence_interval_with_unknown_variance(
            moments.sample_size, moments.mean, moments.unbiased_variance, confidence, quantile
        )
    elif kind == 'variance':
        return variance_confidence_interval(
            moments.sample_size, moments.unbiased_variance, confidence, quantile
        )
    raise InvalidParameterError(f"Unknown interval kind: {kind}")
