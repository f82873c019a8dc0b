"""
Error taxonomy for sample estimation.

Every error derives from ValueError so callers that only care about
"bad input" can keep catching ValueError, while the pipeline can tell
corrupt data apart from data that is valid but too small:

- MalformedInputError: unparseable series keys, conflicting or missing data
- DegenerateSampleError: n <= 1 where n > 1 is required
- InvalidParameterError: confidence outside (0, 1), missing known variance
- QuantileError: the distribution library could not produce a quantile
"""


class EstimationError(ValueError):
    """Base class for all estimation errors."""


class MalformedInputError(EstimationError):
    """The input record cannot be turned into a weighted series."""


class DegenerateSampleError(EstimationError):
    """The sample is valid but has too few observations for the operation."""

    def __init__(self, sample_size: float, operation: str):
        self.sample_size = sample_size
        self.operation = operation
        super().__init__(
            f"{operation} requires sample size > 1, got {sample_size}"
        )


class InvalidParameterError(EstimationError):
    """A parameter is missing or outside its valid range."""


class QuantileError(EstimationError):
    """A distribution quantile could not be computed."""


class EmptySampleError(DegenerateSampleError):
    """The sample has no observations at all."""

    def __init__(self, operation: str):
        super().__init__(0.0, operation)
        self.args = (f"{operation} is undefined for an empty sample",)
