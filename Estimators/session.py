"""
Statistics session: turn a partially populated record into a complete one.

Pipeline (strictly ordered, each step consumes the previous one's output):
    series -> moments -> reconciliation -> intervals

`reconcile` fills the gaps a record leaves (statistics from the data,
biased <-> unbiased variance conversion, standard deviations from
variances) and returns a new record. `compute_intervals` evaluates every
requested interval independently, so one failing interval does not discard
the others. `analyze_sample` runs both.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .distributions import QuantileFunction, quantile as scipy_quantile
from .errors import DegenerateSampleError, EstimationError, InvalidParameterError
from .moments import accumulate, bias_variance, unbias_variance
from .record import SampleRecord
from .statistics import (
    ConfidenceInterval,
    mean_confidence_interval_with_known_variance,
    mean_confidence_interval_with_unknown_variance,
    variance_confidence_interval,
)

logger = logging.getLogger(__name__)

INTERVAL_LABELS: Dict[str, str] = {
    'known_variance': "Mean confidence interval (with known variance)",
    'unknown_variance': "Mean confidence interval (with unknown variance)",
    'variance': "Variance confidence interval",
}


# =============================================================================
# RECONCILIATION
# =============================================================================

def _sqrt_or_none(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    if value < 0:
        raise InvalidParameterError(f"variance must be >= 0, got {value}")
    return math.sqrt(value)


def reconcile(record: SampleRecord) -> SampleRecord:
    """
    Derive every statistic the record allows and return the enriched copy.

    1. If the record carries data, accumulate it: statistics.mean and both
       variances come from the series and params.sampleSize is overwritten
       with the computed n.
    2. If only one of the variances is known, convert it to the other using
       n (skipped when n is unknown or n <= 1).
    3. Standard deviations are the square roots of the variances present.

    Applying it twice gives the same record as applying it once.

    Raises:
        MalformedInputError: If the data cannot be parsed
        EmptySampleError: If the data has no observations
    """
    series = record.series()
    if series is not None:
        moments = accumulate(series)
        logger.info(
            "Sample '%s': n=%g, mean=%r", record.name, moments.sample_size, moments.mean
        )
        record = record.with_params(sample_size=moments.sample_size)
        record = record.with_statistics(
            mean=moments.mean,
            biased_variance=moments.biased_variance,
            unbiased_variance=moments.unbiased_variance,
            biased_standard_deviation=moments.biased_standard_deviation,
            unbiased_standard_deviation=moments.unbiased_standard_deviation,
        )

    stats = record.statistics
    n = record.params.sample_size
    biased, unbiased = stats.biased_variance, stats.unbiased_variance

    if n is not None and n > 1:
        if biased is not None and unbiased is None:
            unbiased = unbias_variance(biased, n)
        elif unbiased is not None and biased is None:
            biased = bias_variance(unbiased, n)
    elif (biased is None) != (unbiased is None):
        logger.debug(
            "Sample '%s': cannot convert variance without a sample size > 1 (n=%s)",
            record.name, n
        )

    # Supplied deviations are kept when their variance is unknown
    record = record.with_statistics(biased_variance=biased, unbiased_variance=unbiased)
    if biased is not None:
        record = record.with_statistics(biased_standard_deviation=_sqrt_or_none(biased))
    if unbiased is not None:
        record = record.with_statistics(unbiased_standard_deviation=_sqrt_or_none(unbiased))

    params = record.params
    if params.variance is not None and params.standard_deviation is None:
        record = record.with_params(standard_deviation=_sqrt_or_none(params.variance))

    return record


# =============================================================================
# INTERVALS
# =============================================================================

def _require(value: Optional[float], name: str) -> float:
    if value is None:
        raise InvalidParameterError(f"{name} is required")
    return value


def _sample_size_for(record: SampleRecord, kind: str) -> float:
    n = _require(record.params.sample_size, "params.sampleSize")
    if not n > 1:
        raise DegenerateSampleError(n, INTERVAL_LABELS[kind])
    return n


def compute_interval(
    record: SampleRecord,
    kind: str,
    quantile: QuantileFunction = scipy_quantile
) -> ConfidenceInterval:
    """
    Compute a single interval from an already reconciled record.

    Args:
        record: Reconciled sample record
        kind: 'known_variance', 'unknown_variance' or 'variance'
        quantile: Quantile function

    Raises:
        DegenerateSampleError: If n <= 1
        InvalidParameterError: If confidence or a required value is missing
        QuantileError: If the quantile function fails
    """
    if kind not in INTERVAL_LABELS:
        raise InvalidParameterError(f"Unknown interval kind: {kind}")

    confidence = _require(record.confidence, "confidence")
    n = _sample_size_for(record, kind)

    if kind == 'known_variance':
        return mean_confidence_interval_with_known_variance(
            n,
            _require(record.statistics.mean, "statistics.mean"),
            _require(record.params.variance, "params.variance"),
            confidence,
            quantile
        )
    if kind == 'unknown_variance':
        return mean_confidence_interval_with_unknown_variance(
            n,
            _require(record.statistics.mean, "statistics.mean"),
            _require(record.statistics.unbiased_variance, "statistics.unbiasedVariance"),
            confidence,
            quantile
        )
    return variance_confidence_interval(
        n,
        _require(record.statistics.unbiased_variance, "statistics.unbiasedVariance"),
        confidence,
        quantile
    )


def compute_intervals(
    record: SampleRecord,
    quantile: QuantileFunction = scipy_quantile
) -> Tuple[Dict[str, ConfidenceInterval], Dict[str, EstimationError]]:
    """
    Compute every requested interval; failures are collected, not raised.

    Returns:
        (intervals, errors), both keyed by interval kind
    """
    intervals: Dict[str, ConfidenceInterval] = {}
    errors: Dict[str, EstimationError] = {}

    for kind in record.intervals.requested():
        try:
            intervals[kind] = compute_interval(record, kind, quantile)
        except EstimationError as e:
            logger.warning("Sample '%s': skipped %s: %s", record.name, INTERVAL_LABELS[kind], e)
            errors[kind] = e

    return intervals, errors


# =============================================================================
# PIPELINE
# =============================================================================

@dataclass
class AnalysisResult:
    """Enriched record together with its intervals and per-interval errors."""
    record: SampleRecord
    intervals: Dict[str, ConfidenceInterval] = field(default_factory=dict)
    errors: Dict[str, EstimationError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        """Output record shape: the enriched record plus interval pairs."""
        data = self.record.to_dict()
        data["intervals"] = {
            kind: [ci.lower, ci.upper] for kind, ci in self.intervals.items()
        }
        if self.errors:
            data["errors"] = {kind: str(e) for kind, e in self.errors.items()}
        return data


def analyze_sample(
    sample: Union[SampleRecord, Mapping[str, Any]],
    quantile: QuantileFunction = scipy_quantile,
    default_confidence: Optional[float] = None
) -> AnalysisResult:
    """
    Run the full pipeline on one sample.

    Args:
        sample: SampleRecord or raw input document
        quantile: Quantile function
        default_confidence: Used for raw documents without 'confidence'

    Returns:
        AnalysisResult with the reconciled record and requested intervals

    Raises:
        MalformedInputError: If the sample data is corrupt
        EmptySampleError: If the sample data has no observations
    """
    if not isinstance(sample, SampleRecord):
        sample = SampleRecord.from_dict(sample, default_confidence=default_confidence)

    record = reconcile(sample)
    intervals, errors = compute_intervals(record, quantile)

    logger.info(
        "Sample '%s': %d interval(s) computed, %d skipped",
        record.name, len(intervals), len(errors)
    )
    return AnalysisResult(record=record, intervals=intervals, errors=errors)
