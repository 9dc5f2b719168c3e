"""Tests for request validation and normalization."""

import pytest
from pydantic import ValidationError

from period_agg.core.errors import InvalidArgument
from period_agg.core.request_schema import (
    AggregationRequest,
    DateRepresentation,
    Period,
    WeekStart,
    create_request,
)


def test_defaults():
    """Test default request values."""
    req = create_request(date_column="d")

    assert req.period == Period.WEEK
    assert req.week_start == WeekStart.MONDAY
    assert req.date_representation == DateRepresentation.STRING
    assert req.group_columns == ()
    assert req.output_columns == ["period_start", "num_records"]


def test_normalization():
    """Test case and whitespace normalization."""
    req = create_request(
        date_column="d", period=" Quarter ", date_representation="TIMESTAMP", group_columns=None
    )

    assert req.period == Period.QUARTER
    assert req.date_representation == DateRepresentation.TIMESTAMP


def test_column_names_are_case_sensitive():
    """Test that column identifiers are kept verbatim."""
    req = create_request(date_column="Verified_At", group_columns=["Site", "site"])

    assert req.date_column == "Verified_At"
    assert req.group_columns == ("Site", "site")


def test_week_start_only_validated_for_weeks():
    """Test that week_start is ignored for month and quarter."""
    req = create_request(date_column="d", period="month", week_start="tuesday")

    assert req.week_start == WeekStart.MONDAY

    with pytest.raises(InvalidArgument, match="week_start"):
        create_request(date_column="d", period="week", week_start="tuesday")


@pytest.mark.parametrize(
    "params,field",
    [
        ({"period": "year"}, "period"),
        ({"period": None}, "period"),
        ({"date_representation": "epoch"}, "date_representation"),
        ({"group_columns": [""]}, "group_columns"),
        ({"group_columns": 42}, "group_columns"),
        ({"group_columns": ["site", None]}, "group_columns"),
        ({"group_columns": ["site", "site"]}, "duplicates"),
        ({"group_columns": ["d"]}, "date column"),
        ({"group_columns": ["num_records"]}, "output column"),
    ],
)
def test_invalid_params(params, field):
    """Test that invalid parameters raise InvalidArgument."""
    with pytest.raises(InvalidArgument) as exc_info:
        create_request(date_column="d", **params)

    assert isinstance(exc_info.value.__cause__, ValidationError)
    if field:
        assert field in str(exc_info.value)


def test_group_columns_order_preserved():
    """Test that group columns keep caller order."""
    req = create_request(date_column="d", group_columns=["z", "a", "m"])

    assert req.group_columns == ("z", "a", "m")
    assert req.output_columns == ["period_start", "z", "a", "m", "num_records"]


def test_request_is_frozen():
    """Test that requests cannot be mutated."""
    req = create_request(date_column="d")

    with pytest.raises(ValidationError):
        req.period = Period.MONTH


class TestPlanHash:
    """Test canonical request hashing."""

    def test_identical_requests_hash_equal(self):
        a = create_request(date_column="d", period="month", group_columns=["site"])
        b = create_request(date_column="d", period="MONTH", group_columns=("site",))

        assert a == b
        assert a.plan_hash() == b.plan_hash()

    def test_week_start_irrelevant_for_month(self):
        a = create_request(date_column="d", period="month", week_start="monday")
        b = create_request(date_column="d", period="month", week_start="sunday")

        assert a.plan_hash() == b.plan_hash()

    def test_different_requests_hash_differently(self):
        a = create_request(date_column="d", period="week", week_start="monday")
        b = create_request(date_column="d", period="week", week_start="sunday")
        c = create_request(date_column="d", period="week", group_columns=["site"])

        assert len({a.plan_hash(), b.plan_hash(), c.plan_hash()}) == 3

    def test_direct_construction(self):
        req = AggregationRequest(date_column="d", period="quarter")

        assert len(req.plan_hash()) == 16
