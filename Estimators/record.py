"""
Sample record schema.

A SampleRecord is one dataset plus what is known about it:
- raw `values` OR a `variationalSeries` frequency table (or neither)
- `params`: population parameters, given (e.g. a known variance) or derived
- `statistics`: sample statistics derived from the data
- `confidence` and the three interval request flags

Records are immutable; the pipeline builds enriched copies with
`dataclasses.replace` instead of filling one shared document in place.
Field names on the wire (JSON) are camelCase, as produced by the loader.
"""

import math
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Mapping, Optional, Tuple

from .errors import MalformedInputError
from .series import WeightedSeries


# =============================================================================
# FIELD TABLES
# =============================================================================

# (python attribute, JSON key)
PARAM_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("sample_size", "sampleSize"),
    ("mean", "mean"),
    ("variance", "variance"),
    ("standard_deviation", "standardDeviation"),
)

STATISTIC_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("mean", "mean"),
    ("biased_variance", "biasedVariance"),
    ("unbiased_variance", "unbiasedVariance"),
    ("biased_standard_deviation", "biasedStandardDeviation"),
    ("unbiased_standard_deviation", "unbiasedStandardDeviation"),
)

INTERVAL_FLAGS: Tuple[Tuple[str, str], ...] = (
    ("known_variance", "meanConfidenceIntervalWithKnownVariance"),
    ("unknown_variance", "meanConfidenceIntervalWithUnknownVariance"),
    ("variance", "varianceConfidenceInterval"),
)

_RESERVED_KEYS = {
    "name", "values", "variationalSeries", "params", "statistics", "confidence",
    *(key for _, key in INTERVAL_FLAGS),
}


def _optional_float(section: str, key: str, value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise MalformedInputError(f"{section}.{key} must be a number, got {value!r}")
    try:
        value = float(value)
    except (TypeError, ValueError) as e:
        raise MalformedInputError(f"{section}.{key} must be a number, got {value!r}") from e
    if math.isnan(value):
        raise MalformedInputError(f"{section}.{key} must not be NaN")
    return value


def _optional_flag(key: str, value: Any) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise MalformedInputError(f"{key} must be true or false, got {value!r}")
    return value


def _section_from_dict(cls, section: str, table, data: Optional[Mapping[str, Any]]):
    if data is None:
        return cls()
    if not isinstance(data, Mapping):
        raise MalformedInputError(f"'{section}' must be an object, got {type(data).__name__}")
    return cls(**{attr: _optional_float(section, key, data.get(key)) for attr, key in table})


def _section_to_dict(obj, table) -> Dict[str, float]:
    return {key: getattr(obj, attr) for attr, key in table if getattr(obj, attr) is not None}


# =============================================================================
# PARAMS AND STATISTICS
# =============================================================================

@dataclass(frozen=True)
class Params:
    """Population parameters, given or derived."""
    sample_size: Optional[float] = None
    mean: Optional[float] = None
    variance: Optional[float] = None
    standard_deviation: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> 'Params':
        return _section_from_dict(cls, "params", PARAM_FIELDS, data)

    def to_dict(self) -> Dict[str, float]:
        return _section_to_dict(self, PARAM_FIELDS)


@dataclass(frozen=True)
class SampleStatistics:
    """Sample statistics derived from the data."""
    mean: Optional[float] = None
    biased_variance: Optional[float] = None
    unbiased_variance: Optional[float] = None
    biased_standard_deviation: Optional[float] = None
    unbiased_standard_deviation: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> 'SampleStatistics':
        return _section_from_dict(cls, "statistics", STATISTIC_FIELDS, data)

    def to_dict(self) -> Dict[str, float]:
        return _section_to_dict(self, STATISTIC_FIELDS)


@dataclass(frozen=True)
class IntervalRequest:
    """Which confidence intervals to report."""
    known_variance: bool = False
    unknown_variance: bool = False
    variance: bool = False

    def requested(self) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(self) if getattr(self, f.name))


# =============================================================================
# SAMPLE RECORD
# =============================================================================

@dataclass(frozen=True)
class SampleRecord:
    """
    One dataset with its known and derived values.

    Example:
        >>> record = SampleRecord.from_dict({"values": [2, 4, 4, 4, 5, 5, 7, 9], "confidence": 0.95})
        >>> record.series().total_weight()
        8.0
    """
    name: str = "sample"
    values: Optional[Tuple[float, ...]] = None
    variational_series: Optional[Tuple[Tuple[str, float], ...]] = None
    params: Params = field(default_factory=Params)
    statistics: SampleStatistics = field(default_factory=SampleStatistics)
    confidence: Optional[float] = None
    intervals: IntervalRequest = field(default_factory=IntervalRequest)
    extra: Tuple[Tuple[str, Any], ...] = ()

    def __post_init__(self):
        if self.values is not None and self.variational_series is not None:
            raise MalformedInputError(
                f"Sample '{self.name}' has both 'values' and 'variationalSeries'; expected exactly one"
            )
    @classmethod
    def from_dict(cls, data: Mapping[str, Any], name: Optional[str] = None,
                  default_confidence: Optional[float] = None) -> 'SampleRecord':
        """
        Validate a loaded JSON document and build a record from it.

        Args:
            data: Parsed input document
            name: Sample name (defaults to data['name'] or 'sample')
            default_confidence: Used when the document has no 'confidence'

        Raises:
            MalformedInputError: On wrong shapes or conflicting data
        """
        if not isinstance(data, Mapping):
            raise MalformedInputError(f"Sample must be an object, got {type(data).__name__}")

        values = data.get("values")
        if values is not None:
            if isinstance(values, (str, bytes, Mapping)) or not hasattr(values, "__iter__"):
                raise MalformedInputError(f"'values' must be a list of numbers, got {type(values).__name__}")
            values = tuple(values)

        table = data.get("variationalSeries")
        if table is not None:
            if not isinstance(table, Mapping):
                raise MalformedInputError(
                    f"'variationalSeries' must be an object, got {type(table).__name__}"
                )
            table = tuple((str(key), count) for key, count in table.items())

        confidence = _optional_float("sample", "confidence", data.get("confidence"))
        if confidence is None:
            confidence = default_confidence

        intervals = IntervalRequest(**{
            attr: _optional_flag(key, data.get(key)) for attr, key in INTERVAL_FLAGS
        })

        return cls(
            name=name if name is not None else str(data.get("name", "sample")),
            values=values,
            variational_series=table,
            params=Params.from_dict(data.get("params")),
            statistics=SampleStatistics.from_dict(data.get("statistics")),
            confidence=confidence,
            intervals=intervals,
            extra=tuple((k, v) for k, v in data.items() if k not in _RESERVED_KEYS),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to the JSON document shape, omitting absent fields."""
        data: Dict[str, Any] = {"name": self.name}
        data.update(dict(self.extra))
        if self.values is not None:
            data["values"] = list(self.values)
        if self.variational_series is not None:
            data["variationalSeries"] = dict(self.variational_series)
        params = self.params.to_dict()
        if params:
            data["params"] = params
        statistics = self.statistics.to_dict()
        if statistics:
            data["statistics"] = statistics
        if self.confidence is not None:
            data["confidence"] = self.confidence
        for attr, key in INTERVAL_FLAGS:
            data[key] = getattr(self.intervals, attr)
        return data

    def has_data(self) -> bool:
        return self.values is not None or self.variational_series is not None

    def series(self) -> Optional[WeightedSeries]:
        """
        Build the weighted series, or None when the record carries no data.

        Raises:
            MalformedInputError: If a value or series key is not a number
        """
        if self.values is not None:
            return WeightedSeries.from_values(self.values)
        if self.variational_series is not None:
            return WeightedSeries.from_variational_series(dict(self.variational_series))
        return None

    def with_params(self, **changes) -> 'SampleRecord':
        return replace(self, params=replace(self.params, **changes))

    def with_statistics(self, **changes) -> 'SampleRecord':
        return replace(self, statistics=replace(self.statistics, **changes))
