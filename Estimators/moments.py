"""
Moment accumulation over weighted series.

Mean and variance are computed with the weighted incremental (Welford-style)
update

    count += weight
    mean  += weight * (value - mean) / count

instead of sum(value * weight) / sum(weight). The biased variance is the same
incremental mean applied to the squared deviations from the already computed
mean, which keeps the two-pass structure and avoids the cancellation of the
textbook E[x^2] - E[x]^2 formula when values are large relative to their
spread.

All functions are pure and take a WeightedSeries (or anything iterable over
(value, weight) pairs / WeightedObservation).
"""

import logging
import math
from dataclasses import dataclass, asdict
from typing import Dict, Iterable, Optional, Tuple, Union

from .errors import DegenerateSampleError, EmptySampleError
from .series import WeightedObservation, WeightedSeries

logger = logging.getLogger(__name__)

SeriesLike = Union[WeightedSeries, Iterable[Tuple[float, float]]]


def _pairs(series: SeriesLike):
    for item in series:
        if isinstance(item, WeightedObservation):
            yield item.value, item.weight
        else:
            value, weight = item
            yield value, weight


# =============================================================================
# SAMPLE SIZE AND MEAN
# =============================================================================

def sample_size(series: SeriesLike) -> float:
    """Sum of weights, accumulated in series order."""
    count = 0.0
    for _, weight in _pairs(series):
        count += weight
    return count


def sample_mean(series: SeriesLike) -> float:
    """
    Weighted mean via the incremental update.

    Raises:
        EmptySampleError: If the series has no observations
    """
    mean = 0.0
    count = 0.0
    for value, weight in _pairs(series):
        count += weight
        mean += weight * (value - mean) / count
    if count == 0:
        raise EmptySampleError("sample mean")
    return mean


# =============================================================================
# VARIANCE AND STANDARD DEVIATION
# =============================================================================

def biased_sample_variance(series: SeriesLike) -> float:
    """
    Weighted mean of squared deviations from the sample mean (divides by n).

    A single observation gives 0.
    """
    series = list(_pairs(series))
    mean = sample_mean(series)
    return sample_mean(((value - mean) ** 2, weight) for value, weight in series)


def unbiased_sample_variance(series: SeriesLike) -> float:
    """
    Bessel-corrected variance: biased * n / (n - 1).

    Raises:
        DegenerateSampleError: If n <= 1
    """
    series = list(_pairs(series))
    n = sample_size(series)
    if n <= 1:
        raise DegenerateSampleError(n, "unbiased sample variance")
    return biased_sample_variance(series) * n / (n - 1)


def biased_sample_standard_deviation(series: SeriesLike) -> float:
    return math.sqrt(biased_sample_variance(series))


def unbiased_sample_standard_deviation(series: SeriesLike) -> float:
    return math.sqrt(unbiased_sample_variance(series))


def unbias_variance(biased_variance: float, n: float) -> float:
    """Convert a biased variance to the unbiased one for sample size n."""
    if n <= 1:
        raise DegenerateSampleError(n, "unbiased variance conversion")
    return biased_variance * n / (n - 1)


def bias_variance(unbiased_variance: float, n: float) -> float:
    """Convert an unbiased variance back to the biased one for sample size n."""
    if n <= 1:
        raise DegenerateSampleError(n, "biased variance conversion")
    return unbiased_variance * (n - 1) / n


# =============================================================================
# FUSED SUMMARY
# =============================================================================

@dataclass(frozen=True)
class MomentSummary:
    """All moments of one series; unbiased fields are None when n <= 1."""
    sample_size: float
    mean: float
    biased_variance: float
    unbiased_variance: Optional[float]
    biased_standard_deviation: float
    unbiased_standard_deviation: Optional[float]

    def to_dict(self) -> Dict[str, Optional[float]]:
        return asdict(self)


def accumulate(series: SeriesLike) -> MomentSummary:
    """
    Compute every moment of the series in one call.

    Uses the same functions as the individual accessors so values agree
    bit for bit.

    Raises:
        EmptySampleError: If the series has no observations
    """
    series = list(_pairs(series))
    n = sample_size(series)
    mean = sample_mean(series)
    biased = biased_sample_variance(series)
    unbiased = unbias_variance(biased, n) if n > 1 else None

    logger.debug("Accumulated n=%s mean=%r biased_variance=%r", n, mean, biased)

    return MomentSummary(
        sample_size=n,
        mean=mean,
        biased_variance=biased,
        unbiased_variance=unbiased,
        biased_standard_deviation=math.sqrt(biased),
        unbiased_standard_deviation=math.sqrt(unbiased) if unbiased is not None else None,
    )
