"""Tests for calendar helpers."""

from datetime import date

import pytest

from meal_planner.domain.calendar import (
    parse_day_key,
    week_day_keys,
    week_start,
)
from meal_planner.domain.errors import InvalidInputError


def test_week_day_keys_spans_seven_consecutive_days() -> None:
    keys = week_day_keys(date(2026, 3, 2))

    assert keys == [
        "2026-03-02",
        "2026-03-03",
        "2026-03-04",
        "2026-03-05",
        "2026-03-06",
        "2026-03-07",
        "2026-03-08",
    ]


def test_week_day_keys_across_dst_transition() -> None:
    keys = week_day_keys(date(2026, 3, 8))

    assert len(set(keys)) == 7
    assert keys[0] == "2026-03-08"
    assert keys[-1] == "2026-03-14"


def test_week_day_keys_across_month_and_year_end() -> None:
    keys = week_day_keys(date(2026, 12, 28))

    assert keys[3] == "2026-12-31"
    assert keys[4] == "2027-01-01"


def test_week_start_returns_monday() -> None:
    assert week_start(date(2026, 10, 17)) == date(2026, 10, 12)
    assert week_start(date(2026, 10, 12)) == date(2026, 10, 12)
    assert week_start(date(2026, 10, 18)) == date(2026, 10, 12)


def test_parse_day_key_rejects_garbage() -> None:
    assert parse_day_key("2026-03-08") == date(2026, 3, 8)
    with pytest.raises(InvalidInputError):
        parse_day_key("next tuesday")
