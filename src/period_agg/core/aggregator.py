"""Count records per calendar period over a lazy tabular source."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from typing import Any

import polars as pl

from ..utils.logging import get_logger, log_operation
from .errors import InvalidArgument
from .request_schema import (
    NUM_RECORDS,
    PERIOD_START,
    AggregationRequest,
    DateRepresentation,
    Period,
    WeekStart,
    create_request,
)
from .truncation import period_start_expr

logger = get_logger("aggregator")


def _as_lazy(source: Any) -> pl.LazyFrame:
    if isinstance(source, pl.LazyFrame):
        return source
    if isinstance(source, pl.DataFrame):
        return source.lazy()
    raise InvalidArgument(
        f"`source` must be a polars LazyFrame or DataFrame, got {type(source).__name__}"
    )


class PeriodAggregator:
    """Builds grouped count-by-period queries.

    The aggregator holds a validated request and can be applied to any number
    of sources. It never collects; callers own execution.

    Example:
        >>> agg = PeriodAggregator("created_at", period="month", group_columns=["site"])
        >>> counts = agg.build(pl.scan_parquet("events.parquet")).collect()
    """

    def __init__(
        self,
        date_column: str,
        period: Period | str = Period.WEEK,
        week_start: WeekStart | str = WeekStart.MONDAY,
        date_representation: DateRepresentation | str = DateRepresentation.STRING,
        group_columns: Sequence[str] | None = None,
    ):
        """Validate and store the request.

        Raises:
            InvalidArgument: If any argument fails validation.
        """
        self.request = create_request(
            date_column=date_column,
            period=period,
            week_start=week_start,
            date_representation=date_representation,
            group_columns=group_columns,
        )

    @classmethod
    def from_request(cls, request: AggregationRequest) -> PeriodAggregator:
        """Create an aggregator from an already validated request."""
        return cls(**request.model_dump())

    def build(self, source: pl.LazyFrame | pl.DataFrame) -> pl.LazyFrame:
        """Compose the aggregation pipeline on top of ``source``.

        Args:
            source: Tabular source holding the date column and group columns

        Returns:
            Unexecuted LazyFrame with columns period_start, group columns and
            num_records, sorted ascending by period_start
        """
        lf = _as_lazy(source)
        req = self.request
        t0 = time.perf_counter()

        keys = [PERIOD_START, *req.group_columns]
        out = (
            lf.filter(pl.col(req.date_column).is_not_null())
            .select([req.date_column, *req.group_columns])
            .with_columns(
                period_start_expr(
                    req.date_column,
                    req.period,
                    req.week_start,
                    req.date_representation,
                ).alias(PERIOD_START)
            )
            .group_by(keys)
            .agg(pl.len().alias(NUM_RECORDS))
            .sort(PERIOD_START)
        )

        if logger.isEnabledFor(logging.DEBUG):
            log_operation(
                logger,
                "build",
                duration_ms=(time.perf_counter() - t0) * 1000,
                level=logging.DEBUG,
                plan_hash=req.plan_hash(),
                date_column=req.date_column,
                period=req.period.value,
                group_columns=list(req.group_columns),
            )
        return out


def build(
    source: pl.LazyFrame | pl.DataFrame,
    date_column: str,
    period: Period | str = "week",
    week_start: WeekStart | str = "monday",
    date_representation: DateRepresentation | str = "string",
    group_columns: Sequence[str] | None = None,
) -> pl.LazyFrame:
    """Count records per period in ``source``, optionally per extra columns.

    Rows with a null date are dropped. String dates are parsed into
    timestamps; ``week_start`` only matters for weekly periods.

    Args:
        source: polars LazyFrame (or DataFrame) to aggregate
        date_column: Name of the date column
        period: "week", "month" or "quarter" (case-insensitive)
        week_start: "monday" or "sunday" (case-insensitive)
        date_representation: "string" or "timestamp" (case-insensitive)
        group_columns: Extra columns to group by, in order

    Returns:
        Lazy query; nothing is executed until the caller collects it

    Raises:
        InvalidArgument: If an argument fails validation. Raised before any
            query is constructed.
    """
    aggregator = PeriodAggregator(
        date_column,
        period=period,
        week_start=week_start,
        date_representation=date_representation,
        group_columns=group_columns,
    )
    return aggregator.build(source)
