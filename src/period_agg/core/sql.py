"""Render an aggregation request as BigQuery Standard SQL.

Only identifiers come from the caller, and they are always backtick-quoted.
Truncation keywords are looked up from the request enums.
"""

from __future__ import annotations

from .errors import InvalidArgument
from .request_schema import (
    NUM_RECORDS,
    PERIOD_START,
    AggregationRequest,
    DateRepresentation,
    Period,
    WeekStart,
)

_DATE_PARTS: dict[Period, str] = {
    Period.MONTH: "MONTH",
    Period.QUARTER: "QUARTER",
}

_WEEK_PARTS: dict[WeekStart, str] = {
    WeekStart.MONDAY: "WEEK(MONDAY)",
    WeekStart.SUNDAY: "WEEK(SUNDAY)",
}


def quote_identifier(name: str) -> str:
    """Quote a single identifier with backticks."""
    if not name:
        raise InvalidArgument("identifier must not be empty")
    escaped = name.replace("\\", "\\\\").replace("`", "\\`")
    return f"`{escaped}`"


def quote_table(table: str) -> str:
    """Quote a possibly dotted table reference, e.g. ``project.dataset.table``."""
    if not isinstance(table, str) or not table:
        raise InvalidArgument("`table` must be a non-empty string")
    return ".".join(quote_identifier(part) for part in table.split("."))


def date_part(request: AggregationRequest) -> str:
    """The TIMESTAMP_TRUNC date part for the request's period."""
    if request.period == Period.WEEK:
        return _WEEK_PARTS[request.week_start]
    return _DATE_PARTS[request.period]


def render_sql(request: AggregationRequest, table: str) -> str:
    """Render the count-by-period query for ``table``.

    Args:
        request: Validated aggregation request
        table: Table reference, dotted parts are quoted separately

    Returns:
        SQL text; nothing is executed
    """
    date_col = quote_identifier(request.date_column)
    groups = [quote_identifier(col) for col in request.group_columns]

    value = date_col
    if request.date_representation == DateRepresentation.STRING:
        value = f"CAST({date_col} AS TIMESTAMP)"
    trunc = f"TIMESTAMP_TRUNC({value}, {date_part(request)})"

    select_list = [f"{trunc} AS {PERIOD_START}", *groups, f"COUNT(*) AS {NUM_RECORDS}"]
    lines = [
        "SELECT",
        ",\n".join(f"  {item}" for item in select_list),
        f"FROM {quote_table(table)}",
        f"WHERE {date_col} IS NOT NULL",
        f"GROUP BY {', '.join([PERIOD_START, *groups])}",
        f"ORDER BY {PERIOD_START}",
    ]
    return "\n".join(lines)
