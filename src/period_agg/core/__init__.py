"""Count-by-period query construction.

Builds lazy polars queries that count records per week, month or quarter,
optionally broken down by extra columns.
"""

from .aggregator import PeriodAggregator, build
from .errors import InvalidArgument
from .request_schema import AggregationRequest, DateRepresentation, Period, WeekStart
from .sql import render_sql

__all__ = [
    "build",
    "PeriodAggregator",
    "AggregationRequest",
    "Period",
    "WeekStart",
    "DateRepresentation",
    "InvalidArgument",
    "render_sql",
]
