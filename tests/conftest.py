"""
Pytest fixtures and configuration for Sample Estimators tests.

Provides:
- Reference sample documents (raw values, grouped data, summary-only)
- Reference quantile table for injecting into interval estimators
- Temporary sample directories
"""

import json
import pytest
import numpy as np
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


# =============================================================================
# SEED MANAGEMENT
# =============================================================================

@pytest.fixture
def rng():
    """Seeded random generator for reproducible random series."""
    return np.random.default_rng(42)


# =============================================================================
# SAMPLE DOCUMENT FIXTURES
# =============================================================================

@pytest.fixture
def raw_values():
    """Classic textbook sample: mean 5, biased variance 4."""
    return [2, 4, 4, 4, 5, 5, 7, 9]


@pytest.fixture
def raw_document(raw_values):
    """Input document with raw values and every interval requested."""
    return {
        "values": raw_values,
        "params": {"variance": 4.0},
        "confidence": 0.95,
        "meanConfidenceIntervalWithKnownVariance": True,
        "meanConfidenceIntervalWithUnknownVariance": True,
        "varianceConfidenceInterval": True,
    }


@pytest.fixture
def grouped_document():
    """Input document with a variational series (class mark -> count)."""
    return {
        "variationalSeries": {"1": 3, "2": 5},
        "confidence": 0.9,
        "meanConfidenceIntervalWithKnownVariance": False,
        "meanConfidenceIntervalWithUnknownVariance": True,
        "varianceConfidenceInterval": False,
    }


@pytest.fixture
def summary_document():
    """Input document without data, only pre-computed summaries."""
    return {
        "params": {"sampleSize": 25},
        "statistics": {"mean": 172.4, "unbiasedVariance": 36.0},
        "confidence": 0.95,
        "meanConfidenceIntervalWithUnknownVariance": True,
        "varianceConfidenceInterval": True,
    }


@pytest.fixture
def deviation_only_document():
    """Input document with a standard deviation but no variance."""
    return {
        "params": {"sampleSize": 10},
        "statistics": {"mean": 1.0, "unbiasedStandardDeviation": 2.0},
        "confidence": 0.95,
    }


@pytest.fixture
def single_observation_document():
    """Degenerate sample with one observation."""
    return {
        "values": [3.5],
        "params": {"variance": 1.0},
        "confidence": 0.95,
        "meanConfidenceIntervalWithKnownVariance": True,
        "meanConfidenceIntervalWithUnknownVariance": True,
        "varianceConfidenceInterval": True,
    }


# =============================================================================
# QUANTILE FIXTURES
# =============================================================================

# Printed-table values (df = 7 where applicable)
REFERENCE_QUANTILES = {
    ("normal", None, 0.975): 1.959964,
    ("t", 7.0, 0.975): 2.364624,
    ("chi2", 7.0, 0.975): 16.012764,
    ("chi2", 7.0, 0.025): 1.689869,
}


@pytest.fixture
def table_quantile():
    """Quantile function backed by a reference table instead of scipy."""
    from Estimators.distributions import Normal, StudentsT, ChiSquared

    def lookup(distribution, p):
        if isinstance(distribution, Normal):
            key = ("normal", None, round(p, 6))
        elif isinstance(distribution, StudentsT):
            key = ("t", float(distribution.degrees_of_freedom), round(p, 6))
        else:
            key = ("chi2", float(distribution.degrees_of_freedom), round(p, 6))
        return REFERENCE_QUANTILES[key]

    return lookup


# =============================================================================
# FILESYSTEM FIXTURES
# =============================================================================

@pytest.fixture
def samples_dir(tmp_path, raw_document, grouped_document):
    """Directory with two sample files and one unrelated file."""
    directory = tmp_path / "samples"
    directory.mkdir()
    (directory / "b_grouped.json").write_text(json.dumps(grouped_document))
    (directory / "a_raw.json").write_text(json.dumps(raw_document))
    (directory / "notes.txt").write_text("not a sample")
    return directory


# =============================================================================
# CONFIGURATION FIXTURES
# =============================================================================

@pytest.fixture
def default_config():
    """Get default analysis configuration."""
    from Estimators.config import AnalysisConfig
    return AnalysisConfig(name="test_analysis")
