"""Date helpers for mastheads and prompts.

Uses stdlib only (no arrow/pendulum dependencies).
"""
from datetime import date, datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def press_date(day: Optional[date] = None) -> str:
    """Format a date the way the paper prints it: 'October 24, 2023'."""
    day = day or utc_now().date()
    return f"{day:%B} {day.day}, {day.year}"


def masthead_date(day: Optional[date] = None) -> str:
    """Long form for the masthead bar: 'Tuesday, October 24, 2023'."""
    day = day or utc_now().date()
    return f"{day:%A}, {press_date(day)}"
