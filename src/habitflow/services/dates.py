"""Date-key helpers shared by the reset policy, history writer and readers.

Every component derives keys through :func:`date_key` so a completion logged
late in the evening lands on the same local calendar day everywhere.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Callable

Clock = Callable[[], date]

WEEKDAYS: tuple[str, ...] = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def local_today() -> date:
    return date.today()


def date_key(day: date) -> str:
    """Canonical ``YYYY-MM-DD`` key."""

    return day.strftime("%Y-%m-%d")


def parse_date_key(key: str) -> date | None:
    """Parse a key produced by :func:`date_key`; None when malformed."""

    try:
        return datetime.strptime(key, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        return None


def weekday_index(day: date) -> int:
    """Sunday-first weekday index (Sun=0 .. Sat=6)."""

    return (day.weekday() + 1) % 7


def weekday_name(day: date) -> str:
    return WEEKDAYS[weekday_index(day)]


__all__ = [
    "Clock",
    "WEEKDAYS",
    "date_key",
    "local_today",
    "parse_date_key",
    "weekday_index",
    "weekday_name",
]
