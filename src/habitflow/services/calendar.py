"""Month grid for the history calendar."""

from __future__ import annotations

import calendar as _calendar
from dataclasses import dataclass, field
from datetime import MAXYEAR, MINYEAR, date
from typing import Mapping, Optional

from .dates import date_key, weekday_index

PERFECT = "perfect"
GOOD = "good"


@dataclass(slots=True)
class CalendarDay:
    day: int
    date: str
    count: int
    status: Optional[str]
    is_today: bool


@dataclass(slots=True)
class CalendarMonth:
    year: int
    month: int
    title: str
    leading_blanks: int
    days: list[CalendarDay] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month,
            "title": self.title,
            "leading_blanks": self.leading_blanks,
            "days": [
                {
                    "day": cell.day,
                    "date": cell.date,
                    "count": cell.count,
                    "status": cell.status,
                    "is_today": cell.is_today,
                }
                for cell in self.days
            ],
        }


def day_status(count: int, habit_count: int) -> Optional[str]:
    """``perfect`` when every current habit was done, ``good`` for partial days."""

    if count <= 0:
        return None
    if habit_count > 0 and count >= habit_count:
        return PERFECT
    return GOOD


def build_month(
    history: Mapping[str, int],
    habit_count: int,
    *,
    today: date,
    year: int | None = None,
    month: int | None = None,
) -> CalendarMonth:
    """Lay out one month, Sunday-first, defaulting to the month containing ``today``."""

    year = today.year if year is None else year
    month = today.month if month is None else month
    if not 1 <= month <= 12:
        raise ValueError(f"month must be 1-12, got {month}")
    if not MINYEAR <= year <= MAXYEAR:
        raise ValueError(f"year must be {MINYEAR}-{MAXYEAR}, got {year}")

    first = date(year, month, 1)
    _, days_in_month = _calendar.monthrange(year, month)
    grid = CalendarMonth(
        year=year,
        month=month,
        title=f"{_calendar.month_name[month]} {year}",
        leading_blanks=weekday_index(first),
    )
    for number in range(1, days_in_month + 1):
        current = date(year, month, number)
        key = date_key(current)
        count = history.get(key, 0)
        grid.days.append(
            CalendarDay(
                day=number,
                date=key,
                count=count,
                status=day_status(count, habit_count),
                is_today=current == today,
            )
        )
    return grid


__all__ = ["CalendarDay", "CalendarMonth", "GOOD", "PERFECT", "build_month", "day_status"]
