# src/daybook/tasks/dates.py

"""
Calendar helpers.

All stored dates use the D/M/YYYY shape without leading zeros, e.g. "1/6/2024".
The same string is the grouping key for task groups, so formatting must stay
byte-stable.
"""

from __future__ import annotations

from datetime import date, datetime


def format_date(d: date) -> str:
    return f"{d.day}/{d.month}/{d.year}"


def today_string(now: datetime | None = None) -> str:
    return format_date((now or datetime.now()).date())


def clock_time(now: datetime | None = None) -> str:
    """Creation time as shown next to a task: 12-hour clock, e.g. "09:05 PM"."""
    return (now or datetime.now()).strftime("%I:%M %p")


def parse_date(text: str) -> date:
    """
    Parse a D/M/YYYY string.

    Raises ValueError on anything else (wrong shape, impossible day).
    """
    parts = text.strip().split("/")
    if len(parts) != 3:
        raise ValueError(f"not a D/M/YYYY date: {text!r}")
    try:
        day, month, year = (int(p) for p in parts)
    except ValueError:
        raise ValueError(f"not a D/M/YYYY date: {text!r}") from None
    return date(year, month, day)


def is_after(a: str, b: str) -> bool:
    """True iff calendar date a is strictly later than b."""
    return parse_date(a) > parse_date(b)


def normalize_date(text: str) -> str:
    """
    Accept D/M/YYYY or ISO YYYY-MM-DD (what a browser date input yields)
    and return the canonical D/M/YYYY form.
    """
    raw = text.strip()
    if "-" in raw:
        try:
            return format_date(date.fromisoformat(raw))
        except ValueError:
            raise ValueError(f"not a date: {text!r}") from None
    return format_date(parse_date(raw))
