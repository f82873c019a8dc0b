"""
Console presentation of analysed samples.

Formats the known parameters and statistics of a record, the computed
intervals, and a cross-sample summary table. Nothing here computes
statistics; it only reads AnalysisResult objects.
"""

from typing import Dict, List, Optional, Sequence

import pandas as pd

from .record import SampleRecord
from .session import INTERVAL_LABELS, AnalysisResult
from .statistics import ConfidenceInterval


PARAM_NAMES = (
    ("sample_size", "Sample size"),
    ("mean", "Mean"),
    ("variance", "Variance"),
    ("standard_deviation", "Standard deviation"),
)

STATISTIC_NAMES = (
    ("mean", "Mean"),
    ("biased_variance", "Biased variance"),
    ("unbiased_variance", "Unbiased variance"),
    ("biased_standard_deviation", "Biased standard deviation"),
    ("unbiased_standard_deviation", "Unbiased standard deviation"),
)


def _format_block(title: str, obj, names, precision: int) -> List[str]:
    lines = [f"{title}:"]
    for attr, label in names:
        value = getattr(obj, attr)
        if value is not None:
            lines.append(f"{label}: {value:.{precision}f}")
    return lines


def format_known_values(record: SampleRecord, precision: int = 8) -> str:
    """
    List the parameters and statistics present on a record.

    Example:
        Known parameters:
        Sample size: 8.00000000

        Known statistics:
        Mean: 5.00000000
    """
    lines = _format_block("Known parameters", record.params, PARAM_NAMES, precision)
    lines.append("")
    lines += _format_block("Known statistics", record.statistics, STATISTIC_NAMES, precision)
    return "\n".join(lines)


def format_interval(
    kind: str,
    ci: ConfidenceInterval,
    precision: int = 8,
    confidence_precision: int = 2
) -> str:
    return (
        f"{INTERVAL_LABELS[kind]}: ({ci.lower:.{precision}f}, {ci.upper:.{precision}f}), "
        f"confidence = {ci.confidence:.{confidence_precision}f}"
    )


def format_report(
    result: AnalysisResult,
    precision: int = 8,
    confidence_precision: int = 2
) -> str:
    """Full text report for one analysed sample."""
    lines = [format_known_values(result.record, precision), ""]

    for kind, ci in result.intervals.items():
        lines.append(format_interval(kind, ci, precision, confidence_precision))
    for kind, error in result.errors.items():
        lines.append(f"{INTERVAL_LABELS[kind]}: not available ({error})")

    return "\n".join(lines).rstrip() + "\n"


def create_summary_frame(results: Sequence[AnalysisResult]) -> pd.DataFrame:
    """
    One row per analysed sample with its main statistics and interval bounds.

    Columns for intervals that were not requested (or failed) hold NaN.
    """
    rows: List[Dict[str, Optional[float]]] = []
    for result in results:
        record = result.record
        row = {
            'sample': record.name,
            'n': record.params.sample_size,
            'mean': record.statistics.mean,
            'unbiased_variance': record.statistics.unbiased_variance,
        }
        for kind in INTERVAL_LABELS:
            ci = result.intervals.get(kind)
            row[f'{kind}_lower'] = ci.lower if ci else None
            row[f'{kind}_upper'] = ci.upper if ci else None
        rows.append(row)

    columns = ['sample', 'n', 'mean', 'unbiased_variance'] + [
        f'{kind}_{bound}' for kind in INTERVAL_LABELS for bound in ('lower', 'upper')
    ]
    return pd.DataFrame(rows, columns=columns).set_index('sample')
