"""
Sample discovery and loading.

Samples are JSON documents in a directory (default `samples/`). The CLI
lists them, lets the user pick one by number, and loads it into a
SampleRecord named after the file stem.
"""

import json
import logging
from pathlib import Path
from typing import Callable, List, Optional, Union

from .errors import MalformedInputError
from .record import SampleRecord

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def list_samples(samples_dir: PathLike) -> List[Path]:
    """
    List sample files (*.json) in a directory, sorted by name.

    Raises:
        FileNotFoundError: If the directory does not exist
    """
    samples_dir = Path(samples_dir)
    if not samples_dir.is_dir():
        raise FileNotFoundError(f"Samples directory not found: {samples_dir}")
    return sorted(p for p in samples_dir.glob("*.json") if p.is_file())


def load_sample(path: PathLike, default_confidence: Optional[float] = None) -> SampleRecord:
    """
    Load one sample document.

    Args:
        path: Path to a JSON sample file
        default_confidence: Used when the document has no 'confidence'

    Raises:
        MalformedInputError: If the file is not UTF-8 JSON or has the wrong shape
    """
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise MalformedInputError(f"{path.name} is not valid JSON: {e}") from e
        except UnicodeDecodeError as e:
            raise MalformedInputError(f"{path.name} is not UTF-8 text: {e}") from e

    logger.debug("Loaded sample %s", path)
    name = str(data.get("name", path.stem)) if isinstance(data, dict) else path.stem
    return SampleRecord.from_dict(data, name=name, default_confidence=default_confidence)


def save_sample(data: dict, path: PathLike) -> str:
    """Write an output document (e.g. AnalysisResult.to_dict()) as JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        json.dump(data, f, indent=2)

    return str(path)


def choose_sample(
    paths: List[Path],
    input_fn: Optional[Callable[[str], str]] = None,
    output_fn: Optional[Callable[[str], None]] = None
) -> Path:
    """
    Print the available samples and ask for one by its 1-based number.

    Invalid answers (not a number, out of range) prompt again.

    Raises:
        FileNotFoundError: If there is nothing to choose from
    """
    if not paths:
        raise FileNotFoundError("No samples available")
    input_fn = input_fn or input
    output_fn = output_fn or print

    output_fn("Available samples:")
    for index, path in enumerate(paths, start=1):
        output_fn(f"[{index}] {Path(path).stem}")

    while True:
        answer = input_fn("Choose sample: ").strip()
        try:
            index = int(answer) - 1
        except ValueError:
            continue
        if 0 <= index < len(paths):
            return Path(paths[index])
