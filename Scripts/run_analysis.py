#!/usr/bin/env python3
"""
Descriptive statistics and confidence intervals for stored samples.

Lists the JSON samples in the samples directory, lets the user choose one
(or takes it from the command line), computes its statistics and the
requested confidence intervals, and prints a report.

Usage:
    python Scripts/run_analysis.py
    python Scripts/run_analysis.py --sample exam_scores
    python Scripts/run_analysis.py --all --output Results
    python Scripts/run_analysis.py --config configs/default.yaml --verbose
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from Estimators.config import AnalysisConfig, get_default_config, save_analysis_metadata
from Estimators.errors import EstimationError
from Estimators.loader import choose_sample, list_samples, load_sample, save_sample
from Estimators.report import create_summary_frame, format_report
from Estimators.session import AnalysisResult, analyze_sample

logger = logging.getLogger("run_analysis")


# =============================================================================
# HELPERS
# =============================================================================

def resolve_sample(name: str, samples_dir: Path) -> Path:
    """Accept either a path to a file or a sample name inside samples_dir."""
    path = Path(name)
    if path.is_file():
        return path
    candidate = samples_dir / f"{name}.json"
    if candidate.is_file():
        return candidate
    raise FileNotFoundError(f"Sample not found: {name}")


def analyze_file(path: Path, config: AnalysisConfig) -> AnalysisResult:
    record = load_sample(path, default_confidence=config.estimation.default_confidence)
    return analyze_sample(record)


def print_result(result: AnalysisResult, config: AnalysisConfig) -> None:
    print(f"\n=== {result.record.name} ===")
    print(format_report(
        result,
        precision=config.report.precision,
        confidence_precision=config.report.confidence_precision
    ))


def write_outputs(results: List[AnalysisResult], config: AnalysisConfig, output_dir: str) -> None:
    output_dir = Path(output_dir)
    for result in results:
        path = save_sample(result.to_dict(), output_dir / f"{result.record.name}.json")
        logger.info("Saved %s", path)
    metadata_path = save_analysis_metadata(
        config, str(output_dir),
        extra_info={'samples': [r.record.name for r in results]}
    )
    logger.info("Saved metadata to %s", metadata_path)


# =============================================================================
# MAIN
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Compute sample statistics and confidence intervals"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML configuration file (default: built-in defaults)"
    )
    parser.add_argument(
        "--samples-dir",
        type=str,
        default=None,
        help="Directory with *.json samples (overrides config)"
    )
    parser.add_argument(
        "--sample",
        type=str,
        default=None,
        help="Sample name or path; prompts interactively when omitted"
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Analyze every sample and print a summary table"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write enriched samples as JSON to this directory"
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("--quiet", action="store_true", help="Only log errors")

    args = parser.parse_args(argv)

    config = AnalysisConfig.from_yaml(args.config) if args.config else get_default_config()
    if args.samples_dir:
        config.samples_dir = args.samples_dir

    level = config.logging_level
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format='%(asctime)s [%(levelname)s] %(name)s - %(message)s',
                        datefmt='%H:%M:%S')

    samples_dir = Path(config.samples_dir)

    try:
        if args.all:
            paths = list_samples(samples_dir)
        elif args.sample:
            paths = [resolve_sample(args.sample, samples_dir)]
        else:
            paths = [choose_sample(list_samples(samples_dir))]
    except FileNotFoundError as e:
        logger.error("%s", e)
        return 1

    results = []
    failed = 0
    for path in paths:
        try:
            result = analyze_file(path, config)
        except EstimationError as e:
            logger.error("Sample %s could not be analyzed: %s", path.stem, e)
            failed += 1
            continue
        results.append(result)
        print_result(result, config)

    if args.all and results:
        print("\nSummary:")
        print(create_summary_frame(results).round(config.report.precision).to_string())

    if args.output and results:
        write_outputs(results, config, args.output)

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
