"""Tests for the month grid."""

from __future__ import annotations

import pytest

from habitflow.services.calendar import GOOD, PERFECT, build_month, day_status

from tests.conftest import TODAY


def test_october_2026_layout():
    month = build_month({}, 2, today=TODAY)

    assert month.title == "October 2026"
    # 1 October 2026 is a Thursday
    assert month.leading_blanks == 4
    assert len(month.days) == 31
    assert [cell.day for cell in month.days if cell.is_today] == [19]


def test_cells_are_classified_against_current_habit_count():
    history = {"2026-10-01": 2, "2026-10-02": 1, "2026-10-03": 5, "2026-10-04": 0}

    month = build_month(history, 2, today=TODAY)
    statuses = {cell.date: cell.status for cell in month.days}

    assert statuses["2026-10-01"] == PERFECT
    assert statuses["2026-10-02"] == GOOD
    assert statuses["2026-10-03"] == PERFECT
    assert statuses["2026-10-04"] is None
    assert statuses["2026-10-05"] is None


def test_other_month_has_no_today_marker():
    month = build_month({"2024-02-29": 1}, 1, today=TODAY, year=2024, month=2)

    assert month.title == "February 2024"
    assert len(month.days) == 29
    assert not any(cell.is_today for cell in month.days)
    assert month.days[-1].status == PERFECT


def test_no_habits_means_partial_days_only():
    assert day_status(3, 0) == GOOD
    assert day_status(0, 0) is None


@pytest.mark.parametrize("month", [0, 13])
def test_invalid_month(month):
    with pytest.raises(ValueError):
        build_month({}, 1, today=TODAY, month=month)


@pytest.mark.parametrize("year", [0, 10000])
def test_invalid_year(year):
    with pytest.raises(ValueError, match="year must be"):
        build_month({}, 1, today=TODAY, year=year, month=1)
