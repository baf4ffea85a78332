"""Analytics derived from the completion history.

Everything here is recomputed from scratch on each request. Ratios use the
*current* number of habits for every historical day, so adding or removing
habits shifts past consistency figures; this approximation is intentional.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable, Mapping

from ..models.snapshot import Habit, round_half_up
from .dates import WEEKDAYS, date_key, parse_date_key, weekday_index, weekday_name

TREND_DAYS = 7
NO_BEST_DAY = "N/A"


@dataclass(slots=True)
class TrendPoint:
    label: str
    date: str
    count: int


@dataclass(slots=True)
class AnalyticsSummary:
    trend: list[TrendPoint] = field(default_factory=list)
    consistency: int = 0
    total_completions: int = 0
    best_weekday: str = NO_BEST_DAY
    completed: int = 0
    missed: int = 0

    def to_dict(self) -> dict:
        return {
            "trend": [
                {"label": point.label, "date": point.date, "count": point.count}
                for point in self.trend
            ],
            "consistency": self.consistency,
            "total_completions": self.total_completions,
            "best_weekday": self.best_weekday,
            "distribution": {"completed": self.completed, "missed": self.missed},
        }


def weekly_trend(history: Mapping[str, int], *, today: date) -> list[TrendPoint]:
    """Counts for the last seven days ending ``today``, oldest first."""

    points: list[TrendPoint] = []
    for offset in range(TREND_DAYS - 1, -1, -1):
        day = today - timedelta(days=offset)
        key = date_key(day)
        points.append(TrendPoint(label=weekday_name(day), date=key, count=history.get(key, 0)))
    return points


def consistency_score(history: Mapping[str, int], habit_count: int) -> int:
    """Mean daily completion ratio over active days, as a rounded percent."""

    denominator = max(1, habit_count)
    ratios = [min(1.0, count / denominator) for count in history.values() if count > 0]
    if not ratios:
        return 0
    return round_half_up(sum(ratios) / len(ratios) * 100)


def best_weekday(history: Mapping[str, int]) -> str:
    """Weekday with the most completions; the earliest of Sun..Sat wins ties."""

    totals = [0] * len(WEEKDAYS)
    for key, count in history.items():
        day = parse_date_key(key)
        if day is None:
            continue
        totals[weekday_index(day)] += count

    best_index = 0
    for index, total in enumerate(totals):
        if total > totals[best_index]:
            best_index = index
    if totals[best_index] <= 0:
        return NO_BEST_DAY
    return WEEKDAYS[best_index]


def derive_analytics(
    history: Mapping[str, int], habits: Iterable[Habit], *, today: date
) -> AnalyticsSummary:
    habit_count = len(list(habits))
    total = sum(history.values())
    possible = habit_count * max(1, len(history))
    return AnalyticsSummary(
        trend=weekly_trend(history, today=today),
        consistency=consistency_score(history, habit_count),
        total_completions=total,
        best_weekday=best_weekday(history),
        completed=total,
        missed=max(0, possible - total),
    )


__all__ = [
    "AnalyticsSummary",
    "NO_BEST_DAY",
    "TrendPoint",
    "best_weekday",
    "consistency_score",
    "derive_analytics",
    "weekly_trend",
]
