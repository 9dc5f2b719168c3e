"""Exceptions raised while building period aggregation queries."""


class InvalidArgument(ValueError):
    """Raised when an aggregation request fails validation.

    Raised synchronously, before any query is constructed. Errors that only
    surface when the lazy query is collected (missing columns, unparseable
    dates, type mismatches) are not wrapped in this type.
    """
