"""
Weighted series: the common representation of raw samples and grouped data.

A raw sample [x1, x2, ...] becomes [(x1, 1), (x2, 1), ...]; a variational
series {"1.5": 3, "2.5": 7} (class mark -> frequency) becomes
[(1.5, 3), (2.5, 7)]. Every accumulator in `moments` works on this shape.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Mapping, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from .errors import MalformedInputError


@dataclass(frozen=True)
class WeightedObservation:
    """A value together with its (strictly positive) weight."""
    value: float
    weight: float = 1.0

    def __post_init__(self):
        if not math.isfinite(self.value):
            raise MalformedInputError(f"Observation value must be finite, got {self.value}")
        if not self.weight > 0 or not math.isfinite(self.weight):
            raise MalformedInputError(f"Observation weight must be > 0, got {self.weight}")


class WeightedSeries:
    """
    Read-only ordered sequence of weighted observations.

    Example:
        >>> series = WeightedSeries.from_values([2, 4, 4, 4, 5, 5, 7, 9])
        >>> len(series)
        8
        >>> series = WeightedSeries.from_variational_series({"1": 3, "2": 5})
        >>> series.total_weight()
        8.0
    """

    __slots__ = ("_observations",)

    def __init__(self, observations: Iterable[Union[WeightedObservation, Tuple[float, float]]]):
        items = []
        for obs in observations:
            if not isinstance(obs, WeightedObservation):
                value, weight = obs
                obs = WeightedObservation(float(value), float(weight))
            items.append(obs)
        self._observations: Tuple[WeightedObservation, ...] = tuple(items)

    @classmethod
    def from_values(cls, values: Iterable[float]) -> 'WeightedSeries':
        """Build a series from raw values, each with weight 1."""
        observations = []
        for value in values:
            if isinstance(value, bool):
                raise MalformedInputError(f"Cannot interpret sample value {value!r} as a number")
            try:
                value = float(value)
            except (TypeError, ValueError) as e:
                raise MalformedInputError(f"Cannot interpret sample value {value!r} as a number") from e
            observations.append(WeightedObservation(value, 1.0))
        return cls(observations)

    @classmethod
    def from_variational_series(cls, table: Mapping[str, float]) -> 'WeightedSeries':
        """
        Build a series from a frequency table.

        Args:
            table: Mapping from class mark (decimal string) to its count

        Raises:
            MalformedInputError: If a key is not a number or a count is not positive
        """
        observations = []
        for key, count in table.items():
            try:
                value = float(key)
            except (TypeError, ValueError) as e:
                raise MalformedInputError(f"Series key {key!r} is not a number") from e
            try:
                weight = float(count)
            except (TypeError, ValueError) as e:
                raise MalformedInputError(f"Count for key {key!r} is not a number: {count!r}") from e
            observations.append(WeightedObservation(value, weight))
        return cls(observations)

    def __iter__(self) -> Iterator[WeightedObservation]:
        return iter(self._observations)

    def __len__(self) -> int:
        return len(self._observations)

    def __getitem__(self, index: int) -> WeightedObservation:
        return self._observations[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, WeightedSeries):
            return NotImplemented
        return self._observations == other._observations

    def __repr__(self) -> str:
        return f"WeightedSeries({len(self)} observations, total weight {self.total_weight():g})"

    def pairs(self) -> List[Tuple[float, float]]:
        return [(obs.value, obs.weight) for obs in self._observations]

    def total_weight(self) -> float:
        """Sum of weights in series order."""
        total = 0.0
        for obs in self._observations:
            total += obs.weight
        return total

    def map_values(self, func) -> 'WeightedSeries':
        """Return a new series with `func` applied to every value, weights kept."""
        return WeightedSeries(
            WeightedObservation(func(obs.value), obs.weight) for obs in self._observations
        )

    def to_arrays(self) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Return (values, weights) as float arrays."""
        values = np.array([obs.value for obs in self._observations], dtype=np.float64)
        weights = np.array([obs.weight for obs in self._observations], dtype=np.float64)
        return values, weights
