"""Tests for analytics derived from the completion history."""

from __future__ import annotations

from habitflow.models.snapshot import Habit
from habitflow.services.analytics import (
    NO_BEST_DAY,
    best_weekday,
    consistency_score,
    derive_analytics,
    weekly_trend,
)

from tests.conftest import TODAY


def _habits(count: int) -> list[Habit]:
    return [Habit(id=n, title=f"Habit {n}") for n in range(1, count + 1)]


class TestWeeklyTrend:
    def test_seven_days_oldest_first_ending_today(self):
        history = {"2026-10-13": 2, "2026-10-19": 1, "2026-10-01": 9}

        trend = weekly_trend(history, today=TODAY)

        assert [p.label for p in trend] == ["Tue", "Wed", "Thu", "Fri", "Sat", "Sun", "Mon"]
        assert [p.date for p in trend][0] == "2026-10-13"
        assert [p.date for p in trend][-1] == "2026-10-19"
        assert [p.count for p in trend] == [2, 0, 0, 0, 0, 0, 1]


class TestConsistency:
    def test_averages_capped_ratios_over_active_days(self):
        history = {"2026-10-16": 1, "2026-10-17": 2, "2026-10-18": 5, "2026-10-19": 0}

        # ratios 0.5, 1.0, 1.0 over three active days
        assert consistency_score(history, habit_count=2) == 83

    def test_no_active_days(self):
        assert consistency_score({"2026-10-19": 0}, habit_count=3) == 0

    def test_no_habits_uses_one_as_denominator(self):
        assert consistency_score({"2026-10-19": 2}, habit_count=0) == 100


class TestBestWeekday:
    def test_tie_goes_to_earlier_weekday(self):
        # Monday and Tuesday both total 3
        assert best_weekday({"2026-10-19": 3, "2026-10-20": 3}) == "Mon"

    def test_sunday_wins_ties_with_saturday(self):
        assert best_weekday({"2026-10-24": 2, "2026-10-18": 2}) == "Sun"

    def test_sums_across_weeks(self):
        history = {"2026-10-19": 2, "2026-10-12": 2, "2026-10-21": 3}
        assert best_weekday(history) == "Mon"

    def test_all_zero_is_not_applicable(self):
        assert best_weekday({}) == NO_BEST_DAY
        assert best_weekday({"2026-10-19": 0}) == NO_BEST_DAY

    def test_malformed_keys_are_skipped(self):
        assert best_weekday({"yesterday": 5, "2026-10-21": 1}) == "Wed"


class TestDeriveAnalytics:
    def test_summary(self):
        history = {"2026-10-18": 3, "2026-10-19": 1}

        summary = derive_analytics(history, _habits(3), today=TODAY)

        assert summary.total_completions == 4
        assert summary.completed == 4
        assert summary.missed == 3 * 2 - 4
        assert summary.consistency == 67
        assert summary.best_weekday == "Sun"
        assert len(summary.trend) == 7

    def test_empty_history(self):
        summary = derive_analytics({}, _habits(2), today=TODAY)

        assert summary.total_completions == 0
        assert summary.consistency == 0
        assert summary.best_weekday == NO_BEST_DAY
        assert (summary.completed, summary.missed) == (0, 2)

    def test_missed_never_negative(self):
        summary = derive_analytics({"2026-10-19": 9}, _habits(1), today=TODAY)

        assert summary.missed == 0

    def test_to_dict_shape(self):
        payload = derive_analytics({"2026-10-19": 1}, _habits(1), today=TODAY).to_dict()

        assert set(payload) == {
            "trend",
            "consistency",
            "total_completions",
            "best_weekday",
            "distribution",
        }
        assert payload["distribution"] == {"completed": 1, "missed": 0}
        assert payload["trend"][-1] == {"label": "Mon", "date": "2026-10-19", "count": 1}
