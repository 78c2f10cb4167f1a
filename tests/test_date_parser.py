"""Tests for date parsing utilities."""

from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from minibank.utils.date_parser import (
    as_utc,
    format_timestamp,
    parse_boundary,
    parse_timestamp,
    utc_day_bounds,
)


def test_bare_date_start_of_day():
    assert parse_boundary("2023-11-15") == datetime(2023, 11, 15, tzinfo=UTC)


def test_bare_date_end_of_day():
    assert parse_boundary("2023-11-15", end_of_day=True) == datetime(
        2023, 11, 15, 23, 59, 59, 999000, tzinfo=UTC
    )


@pytest.mark.parametrize("value", [None, ""])
def test_empty_boundary(value):
    assert parse_boundary(value) is None


def test_boundary_accepts_date_and_datetime():
    assert parse_boundary(date(2024, 1, 15), end_of_day=True).hour == 23

    naive = datetime(2024, 1, 15, 8, 0)
    assert parse_boundary(naive) == datetime(2024, 1, 15, 8, 0, tzinfo=UTC)


def test_timestamp_boundary_ignores_end_of_day():
    result = parse_boundary("2023-11-15T10:30:00Z", end_of_day=True)

    assert result == datetime(2023, 11, 15, 10, 30, tzinfo=UTC)


def test_parse_timestamp_converts_offsets():
    result = parse_timestamp("2023-11-15T12:00:00+02:00")

    assert result == datetime(2023, 11, 15, 10, 0, tzinfo=UTC)
    assert result.tzinfo == UTC


def test_parse_timestamp_naive_is_utc():
    assert parse_timestamp("2023-11-15 12:00") == datetime(2023, 11, 15, 12, 0, tzinfo=UTC)


def test_parse_timestamp_free_form():
    assert parse_timestamp("November 15, 2023 10:00 UTC") == datetime(
        2023, 11, 15, 10, 0, tzinfo=UTC
    )


@pytest.mark.parametrize("value", ["not-a-date", "2023-13-45", "2023-02-30"])
def test_invalid_values_raise(value):
    with pytest.raises(ValueError):
        parse_boundary(value)


def test_unsupported_type_raises():
    with pytest.raises(ValueError):
        parse_boundary(20231115)


def test_as_utc_converts_aware_values():
    eastern = timezone(timedelta(hours=-5))
    value = datetime(2023, 11, 15, 20, 0, tzinfo=eastern)

    assert as_utc(value) == datetime(2023, 11, 16, 1, 0, tzinfo=UTC)


def test_utc_day_bounds():
    start, end = utc_day_bounds(datetime(2023, 11, 15, 13, 45, tzinfo=UTC))

    assert start == datetime(2023, 11, 15, tzinfo=UTC)
    assert end == datetime(2023, 11, 15, 23, 59, 59, 999999, tzinfo=UTC)


def test_format_timestamp():
    value = datetime(2023, 11, 15, 10, 30, 5, 123456, tzinfo=UTC)

    assert format_timestamp(value) == "2023-11-15T10:30:05.123Z"
