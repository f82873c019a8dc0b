"""
Configuration management for sample analysis.

This module provides:
- Dataclass-based configuration with validation
- YAML loading/saving support
- Analysis metadata tracking

Usage:
    >>> config = AnalysisConfig.from_yaml("configs/default.yaml")
    >>> config.estimation.default_confidence
    0.95
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, Optional, Any
from pathlib import Path
import json
import hashlib
import logging
from datetime import datetime
import platform

import yaml
import numpy as np
import scipy


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# =============================================================================
# CONFIGURATION DATACLASSES
# =============================================================================

@dataclass
class EstimationConfig:
    """Interval estimation settings."""
    default_confidence: float = 0.95

    def __post_init__(self):
        if not 0 < self.default_confidence < 1:
            raise ValueError(f"default_confidence must be in (0, 1), got {self.default_confidence}")


@dataclass
class ReportConfig:
    """Console report settings."""
    precision: int = 8
    confidence_precision: int = 2

    def __post_init__(self):
        if self.precision < 0:
            raise ValueError(f"precision must be >= 0, got {self.precision}")
        if self.confidence_precision < 0:
            raise ValueError(f"confidence_precision must be >= 0, got {self.confidence_precision}")


@dataclass
class AnalysisConfig:
    """
    Master configuration for an analysis run.

    Example:
        >>> config = AnalysisConfig(samples_dir="data/samples")
        >>> config.save("configs/local.yaml")
        >>>
        >>> # Later...
        >>> config = AnalysisConfig.from_yaml("configs/local.yaml")
    """
    name: str = "sample_analysis"
    samples_dir: str = "samples"
    output_dir: str = "Results"
    log_level: str = "INFO"

    estimation: EstimationConfig = field(default_factory=EstimationConfig)
    report: ReportConfig = field(default_factory=ReportConfig)

    def __post_init__(self):
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Invalid log_level: {self.log_level}. Must be one of {LOG_LEVELS}")

        # Ensure sub-configs are proper types
        if isinstance(self.estimation, dict):
            self.estimation = EstimationConfig(**self.estimation)
        if isinstance(self.report, dict):
            self.report = ReportConfig(**self.report)

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to nested dictionary."""
        return {
            'name': self.name,
            'samples_dir': self.samples_dir,
            'output_dir': self.output_dir,
            'log_level': self.log_level,
            'estimation': asdict(self.estimation),
            'report': asdict(self.report),
        }

    def save(self, path: str) -> None:
        """Save configuration to YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    @classmethod
    def from_yaml(cls, path: str) -> 'AnalysisConfig':
        """Load configuration from YAML file."""
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return cls(**(data or {}))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AnalysisConfig':
        """Create from dictionary."""
        return cls(**data)

    def get_hash(self) -> str:
        """
        Compute deterministic hash of configuration.

        Useful for detecting configuration changes between runs.
        """
        config_str = json.dumps(self.to_dict(), sort_keys=True)
        return hashlib.sha256(config_str.encode()).hexdigest()[:16]

    def get_run_id(self) -> str:
        """Generate unique run ID based on config hash and timestamp."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        return f"{self.name}_{timestamp}_{self.get_hash()[:8]}"


# =============================================================================
# ANALYSIS METADATA
# =============================================================================

def get_system_info() -> Dict[str, Any]:
    """
    Get system information for reproducibility documentation.

    Returns:
        Dict with Python, NumPy and SciPy versions and the platform
    """
    return {
        'timestamp': datetime.now().isoformat(),
        'python_version': platform.python_version(),
        'platform': platform.platform(),
        'numpy_version': np.__version__,
        'scipy_version': scipy.__version__,
    }


def save_analysis_metadata(
    config: AnalysisConfig,
    output_dir: str,
    extra_info: Optional[Dict] = None
) -> str:
    """
    Save analysis metadata next to the results.

    Args:
        config: Analysis configuration
        output_dir: Directory to save metadata
        extra_info: Optional additional information

    Returns:
        Path to saved metadata file
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    metadata = {
        'config': config.to_dict(),
        'config_hash': config.get_hash(),
        'system': get_system_info(),
    }

    if extra_info:
        metadata['extra'] = extra_info

    path = output_dir / f"analysis_metadata_{config.get_run_id()}.json"

    with open(path, 'w') as f:
        json.dump(metadata, f, indent=2, default=str)

    return str(path)


def get_default_config() -> AnalysisConfig:
    """Get default analysis configuration."""
    return AnalysisConfig()
