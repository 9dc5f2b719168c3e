"""Polars expressions for casting a date column and truncating it to a period."""

from __future__ import annotations

import polars as pl

from .request_schema import DateRepresentation, Period, WeekStart

# Calendar-aligned truncation intervals. Polars anchors "1w" on Monday.
TRUNCATE_EVERY: dict[Period, str] = {
    Period.WEEK: "1w",
    Period.MONTH: "1mo",
    Period.QUARTER: "1q",
}


def cast_expr(column: str, date_representation: DateRepresentation) -> pl.Expr:
    """Return the date column as a temporal expression.

    String columns are parsed into a naive UTC Datetime. Strings without an
    offset are read as UTC; ``Z`` and ``+HH[:MM]`` suffixes are converted to
    UTC. Parse failures are reported by polars when the query is collected.
    """
    expr = pl.col(column)
    if date_representation == DateRepresentation.STRING:
        return expr.str.to_datetime(time_zone="UTC", strict=True).dt.replace_time_zone(None)
    return expr


def truncate_expr(
    expr: pl.Expr, period: Period, week_start: WeekStart = WeekStart.MONDAY
) -> pl.Expr:
    """Truncate a temporal expression to the start of its containing period.

    Args:
        expr: Date or Datetime expression
        period: Bucket to truncate into
        week_start: First day of the week, only used for weekly buckets

    Returns:
        Expression evaluating to the first instant of the period
    """
    every = TRUNCATE_EVERY[period]
    if period == Period.WEEK and week_start == WeekStart.SUNDAY:
        # Shift Sunday onto Monday, truncate, then shift back
        return expr.dt.offset_by("1d").dt.truncate(every).dt.offset_by("-1d")
    return expr.dt.truncate(every)


def period_start_expr(
    column: str,
    period: Period,
    week_start: WeekStart = WeekStart.MONDAY,
    date_representation: DateRepresentation = DateRepresentation.STRING,
) -> pl.Expr:
    """Build the ``period_start`` expression for a date column."""
    return truncate_expr(cast_expr(column, date_representation), period, week_start)
