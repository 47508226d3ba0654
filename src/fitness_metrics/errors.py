"""Errors raised by the aggregation engine."""


class MetricValidationError(ValueError):
    """Raised when a numeric input makes a derived metric meaningless.

    Covers negative calorie targets or macro percentages, non-positive
    heights and non-positive window sizes. Missing data is never an error.
    """
