"""
Tests for Estimators/report.py

Tests console formatting and the cross-sample summary table.
"""

import math

import pytest


class TestFormatKnownValues:
    """Tests for the known parameters / statistics listing."""

    def test_lists_present_fields_only(self):
        """Absent fields are skipped; values use fixed precision."""
        from Estimators.record import SampleRecord
        from Estimators.report import format_known_values

        record = SampleRecord.from_dict({
            "params": {"sampleSize": 8},
            "statistics": {"mean": 5.0},
        })

        text = format_known_values(record, precision=3)

        assert text.splitlines() == [
            "Known parameters:",
            "Sample size: 8.000",
            "",
            "Known statistics:",
            "Mean: 5.000",
        ]

    def test_default_precision_is_eight(self, raw_document):
        """The default report shows eight decimals."""
        from Estimators.session import analyze_sample
        from Estimators.report import format_known_values

        text = format_known_values(analyze_sample(raw_document).record)

        assert "Biased variance: 4.00000000" in text
        assert "Standard deviation: 2.00000000" in text


class TestFormatInterval:
    """Tests for interval lines."""

    def test_interval_line(self):
        """Label, bounds and confidence are printed."""
        from Estimators.statistics import ConfidenceInterval
        from Estimators.report import format_interval

        ci = ConfidenceInterval(estimate=5.0, lower=3.25, upper=6.75, confidence=0.95, method='t', n_samples=8)

        assert format_interval('unknown_variance', ci, precision=2) == (
            "Mean confidence interval (with unknown variance): (3.25, 6.75), confidence = 0.95"
        )


class TestFormatReport:
    """Tests for the complete report."""

    def test_report_contains_intervals_and_errors(self, raw_values):
        """Computed intervals and skipped ones both appear."""
        from Estimators.session import analyze_sample
        from Estimators.report import format_report

        result = analyze_sample({
            "values": raw_values,
            "confidence": 0.95,
            "meanConfidenceIntervalWithKnownVariance": True,
            "varianceConfidenceInterval": True,
        })
        text = format_report(result)

        assert "Variance confidence interval: (" in text
        assert "Mean confidence interval (with known variance): not available" in text
        assert text.endswith("\n")


class TestSummaryFrame:
    """Tests for the cross-sample summary."""

    def test_one_row_per_sample(self, raw_document, grouped_document):
        """Rows are indexed by sample name; missing intervals are NaN."""
        from Estimators.record import SampleRecord
        from Estimators.session import analyze_sample
        from Estimators.report import create_summary_frame

        results = [
            analyze_sample(SampleRecord.from_dict(raw_document, name="raw")),
            analyze_sample(SampleRecord.from_dict(grouped_document, name="grouped")),
        ]

        frame = create_summary_frame(results)

        assert list(frame.index) == ["raw", "grouped"]
        assert frame.loc["raw", "n"] == 8.0
        assert frame.loc["grouped", "mean"] == pytest.approx(1.625)
        assert frame.loc["raw", "variance_lower"] < frame.loc["raw", "variance_upper"]
        assert math.isnan(frame.loc["grouped", "variance_lower"])

    def test_empty(self):
        """No results give an empty frame with the expected columns."""
        from Estimators.report import create_summary_frame

        frame = create_summary_frame([])

        assert frame.empty
        assert "unknown_variance_upper" in frame.columns
