"""
Sample Estimators

Descriptive statistics and confidence intervals for weighted samples.

Modules:
    series: Weighted series built from raw values or frequency tables
    moments: Numerically stable mean / variance accumulation
    distributions: Normal, Student's t and chi-squared quantiles
    statistics: Confidence intervals for the mean and the variance
    record: Sample record schema (params, statistics, interval flags)
    session: Reconciliation and the full analysis pipeline
    loader: Sample discovery, loading and interactive choice
    report: Console formatting and cross-sample summaries
    config: Configuration management

Example:
    >>> from Estimators import SampleRecord, analyze_sample
    >>> record = SampleRecord.from_dict({
    ...     "values": [2, 4, 4, 4, 5, 5, 7, 9],
    ...     "confidence": 0.95,
    ...     "meanConfidenceIntervalWithUnknownVariance": True,
    ... })
    >>> result = analyze_sample(record)
    >>> result.record.statistics.biased_variance
    4.0
    >>> ci = result.intervals["unknown_variance"]
"""

__version__ = "1.0.0"

# Errors
from .errors import (
    EstimationError,
    MalformedInputError,
    DegenerateSampleError,
    EmptySampleError,
    InvalidParameterError,
    QuantileError,
)

# Data and moments
from .series import WeightedObservation, WeightedSeries
from .moments import (
    sample_size,
    sample_mean,
    biased_sample_variance,
    unbiased_sample_variance,
    biased_sample_standard_deviation,
    unbiased_sample_standard_deviation,
    unbias_variance,
    bias_variance,
    accumulate,
    MomentSummary,
)

# Distributions and intervals
from .distributions import Normal, StudentsT, ChiSquared, quantile
from .statistics import (
    mean_confidence_interval_with_known_variance,
    mean_confidence_interval_with_unknown_variance,
    variance_confidence_interval,
    compute_confidence_interval,
    ConfidenceInterval,
)

# Records and pipeline
from .record import SampleRecord, Params, SampleStatistics, IntervalRequest
from .session import (
    reconcile,
    compute_interval,
    compute_intervals,
    analyze_sample,
    AnalysisResult,
)

# Loading, presentation, configuration
from .loader import list_samples, load_sample, save_sample, choose_sample
from .report import format_known_values, format_interval, format_report, create_summary_frame
from .config import (
    AnalysisConfig,
    EstimationConfig,
    ReportConfig,
    get_system_info,
    save_analysis_metadata,
    get_default_config,
)

__all__ = [
    # Version
    "__version__",

    # Errors
    "EstimationError",
    "MalformedInputError",
    "DegenerateSampleError",
    "EmptySampleError",
    "InvalidParameterError",
    "QuantileError",

    # Series and moments
    "WeightedObservation",
    "WeightedSeries",
    "sample_size",
    "sample_mean",
    "biased_sample_variance",
    "unbiased_sample_variance",
    "biased_sample_standard_deviation",
    "unbiased_sample_standard_deviation",
    "unbias_variance",
    "bias_variance",
    "accumulate",
    "MomentSummary",

    # Distributions and intervals
    "Normal",
    "StudentsT",
    "ChiSquared",
    "quantile",
    "mean_confidence_interval_with_known_variance",
    "mean_confidence_interval_with_unknown_variance",
    "variance_confidence_interval",
    "compute_confidence_interval",
    "ConfidenceInterval",

    # Records and pipeline
    "SampleRecord",
    "Params",
    "SampleStatistics",
    "IntervalRequest",
    "reconcile",
    "compute_interval",
    "compute_intervals",
    "analyze_sample",
    "AnalysisResult",

    # Loading and presentation
    "list_samples",
    "load_sample",
    "save_sample",
    "choose_sample",
    "format_known_values",
    "format_interval",
    "format_report",
    "create_summary_frame",

    # Configuration
    "AnalysisConfig",
    "EstimationConfig",
    "ReportConfig",
    "get_system_info",
    "save_analysis_metadata",
    "get_default_config",
]
