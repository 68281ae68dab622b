# tests/test_dates.py

from __future__ import annotations

from datetime import date, datetime

import pytest

from daybook.tasks.dates import clock_time, format_date, is_after, normalize_date, parse_date, today_string


def test_format_has_no_leading_zeros() -> None:
    assert format_date(date(2024, 3, 2)) == "2/3/2024"
    assert today_string(datetime(2024, 12, 31, 23, 59)) == "31/12/2024"


@pytest.mark.parametrize(
    ("a", "b", "expected"),
    [
        ("2/3/2024", "1/3/2024", True),
        ("1/1/2025", "31/12/2024", True),
        ("1/1/2024", "1/1/2024", False),
        ("1/3/2024", "2/3/2024", False),
        ("10/2/2024", "9/12/2023", True),
    ],
)
def test_is_after(a: str, b: str, expected: bool) -> None:
    assert is_after(a, b) is expected


@pytest.mark.parametrize("bad", ["", "2024-01-01", "1/13/2024", "31/2/2024", "a/b/c", "1/1"])
def test_parse_date_rejects_garbage(bad: str) -> None:
    with pytest.raises(ValueError):
        parse_date(bad)


def test_normalize_accepts_iso_and_native() -> None:
    assert normalize_date("2024-06-03") == "3/6/2024"
    assert normalize_date(" 03/06/2024 ") == "3/6/2024"
    with pytest.raises(ValueError):
        normalize_date("2024-13-01")


def test_clock_time_is_twelve_hour() -> None:
    assert clock_time(datetime(2024, 6, 1, 21, 7)) == "09:07 PM"
