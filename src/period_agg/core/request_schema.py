"""Request schema for period aggregation queries.

Enum-like arguments are normalized here, at the boundary, into closed enum
types before any query logic runs.
"""

from __future__ import annotations

import hashlib
from collections.abc import Sequence
from enum import Enum
from typing import Any

import orjson
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import InvalidArgument

PERIOD_START = "period_start"
NUM_RECORDS = "num_records"
RESERVED_COLUMNS = (PERIOD_START, NUM_RECORDS)


class Period(str, Enum):
    """Calendar bucket a timestamp is truncated into."""

    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"


class WeekStart(str, Enum):
    """First day of a week bucket."""

    MONDAY = "monday"
    SUNDAY = "sunday"


class DateRepresentation(str, Enum):
    """How the date column is stored in the source."""

    STRING = "string"
    TIMESTAMP = "timestamp"


def _normalize(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, str):
        return value.strip().lower()
    return value


class AggregationRequest(BaseModel):
    """A validated count-by-period request. Immutable."""

    model_config = ConfigDict(frozen=True)

    date_column: str = Field(min_length=1)
    period: Period = Period.WEEK
    week_start: WeekStart = WeekStart.MONDAY
    date_representation: DateRepresentation = DateRepresentation.STRING
    group_columns: tuple[str, ...] = ()

    @field_validator("date_column", mode="before")
    @classmethod
    def validate_date_column(cls, v: Any) -> Any:
        if not isinstance(v, str):
            raise ValueError("`date_column` must be a column name string")
        return v

    @field_validator("period", mode="before")
    @classmethod
    def normalize_period(cls, v: Any) -> Period:
        try:
            return Period(_normalize(v))
        except ValueError:
            raise ValueError("`period` must be one of 'week', 'month', or 'quarter'") from None

    @field_validator("week_start", mode="before")
    @classmethod
    def normalize_week_start(cls, v: Any, info: Any) -> WeekStart:
        # Only weekly buckets care about the week start
        period = info.data.get("period")
        if period is not None and period != Period.WEEK:
            return WeekStart.MONDAY
        try:
            return WeekStart(_normalize(v))
        except ValueError:
            raise ValueError("`week_start` must be either 'monday' or 'sunday'") from None

    @field_validator("date_representation", mode="before")
    @classmethod
    def normalize_date_representation(cls, v: Any) -> DateRepresentation:
        try:
            return DateRepresentation(_normalize(v))
        except ValueError:
            raise ValueError(
                "`date_representation` must be either 'string' or 'timestamp'"
            ) from None

    @field_validator("group_columns", mode="before")
    @classmethod
    def validate_group_columns(cls, v: Any) -> tuple[str, ...]:
        if v is None:
            return ()
        if isinstance(v, str):
            v = [v]
        if isinstance(v, bytes) or not isinstance(v, Sequence):
            raise ValueError("`group_columns` must be a sequence of column name strings")
        columns = tuple(v)
        for col in columns:
            if not isinstance(col, str) or not col:
                raise ValueError("`group_columns` must be a sequence of column name strings")
        if len(set(columns)) != len(columns):
            raise ValueError("`group_columns` must not contain duplicates")
        return columns

    @model_validator(mode="after")
    def check_collisions(self) -> AggregationRequest:
        """Reject group columns that would shadow the date or output columns."""
        for col in self.group_columns:
            if col == self.date_column:
                raise ValueError(f"group column {col!r} collides with the date column")
            if col in RESERVED_COLUMNS:
                raise ValueError(f"group column {col!r} collides with an output column")
        return self

    @property
    def output_columns(self) -> list[str]:
        return [PERIOD_START, *self.group_columns, NUM_RECORDS]

    def plan_hash(self) -> str:
        """Canonical hash of the request, stable across calls and processes."""
        canonical = orjson.dumps(self.model_dump(mode="json"), option=orjson.OPT_SORT_KEYS)
        return hashlib.sha256(canonical).hexdigest()[:16]


def create_request(**params: Any) -> AggregationRequest:
    """Validate parameters into an AggregationRequest.

    Raises:
        InvalidArgument: If any parameter fails validation.
    """
    try:
        return AggregationRequest(**params)
    except ValidationError as e:
        messages = []
        for err in e.errors():
            loc = ".".join(str(part) for part in err["loc"]) or "request"
            msg = err["msg"].removeprefix("Value error, ")
            messages.append(f"{loc}: {msg}")
        raise InvalidArgument("; ".join(messages)) from e
