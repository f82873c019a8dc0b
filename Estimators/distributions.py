"""
Distribution specifications and their quantile function.

The interval estimators never call scipy directly: they describe the
distribution they need (Normal, StudentsT, ChiSquared) and ask a quantile
function for the value. `quantile` below is the scipy-backed default; any
callable with the same signature (e.g. a lookup into a printed table) can
be passed instead.
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable, Union

from scipy import stats

from .errors import InvalidParameterError, QuantileError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Normal:
    """Standard normal distribution."""

    def __str__(self) -> str:
        return "N(0, 1)"


@dataclass(frozen=True)
class StudentsT:
    """Student's t distribution."""
    degrees_of_freedom: float

    def __post_init__(self):
        if not self.degrees_of_freedom > 0:
            raise InvalidParameterError(
                f"degrees_of_freedom must be > 0, got {self.degrees_of_freedom}"
            )

    def __str__(self) -> str:
        return f"t({self.degrees_of_freedom:g})"


@dataclass(frozen=True)
class ChiSquared:
    """Chi-squared distribution."""
    degrees_of_freedom: float

    def __post_init__(self):
        if not self.degrees_of_freedom > 0:
            raise InvalidParameterError(
                f"degrees_of_freedom must be > 0, got {self.degrees_of_freedom}"
            )

    def __str__(self) -> str:
        return f"chi2({self.degrees_of_freedom:g})"


Distribution = Union[Normal, StudentsT, ChiSquared]
QuantileFunction = Callable[[Distribution, float], float]


def quantile(distribution: Distribution, p: float) -> float:
    """
    Inverse CDF of `distribution` at probability `p`.

    Args:
        distribution: Normal(), StudentsT(df) or ChiSquared(df)
        p: Probability strictly inside (0, 1)

    Returns:
        The quantile as a Python float

    Raises:
        InvalidParameterError: If p is outside (0, 1)
        QuantileError: If scipy cannot produce a finite value

    Example:
        >>> round(quantile(Normal(), 0.975), 6)
        1.959964
        >>> round(quantile(StudentsT(7), 0.975), 6)
        2.364624
    """
    if not 0 < p < 1:
        raise InvalidParameterError(f"p must be in (0, 1), got {p}")

    if isinstance(distribution, Normal):
        value = stats.norm.ppf(p)
    elif isinstance(distribution, StudentsT):
        value = stats.t.ppf(p, df=distribution.degrees_of_freedom)
    elif isinstance(distribution, ChiSquared):
        value = stats.chi2.ppf(p, df=distribution.degrees_of_freedom)
    else:
        raise QuantileError(f"Unknown distribution: {distribution!r}")

    value = float(value)
    if not math.isfinite(value):
        raise QuantileError(f"No finite quantile of {distribution} at p={p}")

    logger.debug("quantile(%s, %r) = %r", distribution, p, value)
    return value
