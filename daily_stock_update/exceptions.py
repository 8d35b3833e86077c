"""Errors raised by the time series transforms."""


class TimeSeriesError(ValueError):
    """Base class for transform precondition failures."""


class InvalidInputError(TimeSeriesError):
    """Input series or parameters violate a transform precondition."""


class DivisionByZeroError(TimeSeriesError, ZeroDivisionError):
    """A return or average would divide by zero or take log of a non-positive."""


__all__ = ["TimeSeriesError", "InvalidInputError", "DivisionByZeroError"]
