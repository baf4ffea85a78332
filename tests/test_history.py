"""Tests for the per-day completion counter."""

from __future__ import annotations

from datetime import date

from habitflow.services.dates import date_key, parse_date_key, weekday_name
from habitflow.services.history import HistoryAggregator

from tests.conftest import TODAY


def test_record_and_revert():
    history: dict[str, int] = {}
    aggregator = HistoryAggregator(history)

    assert aggregator.record_completion(TODAY) == 1
    assert aggregator.record_completion(TODAY) == 2
    assert aggregator.revert_completion(TODAY) == 1
    assert aggregator.count_for(TODAY) == 1
    assert history == {"2026-10-19": 1}


def test_revert_is_floored_at_zero():
    history = {"2026-10-19": 0}
    aggregator = HistoryAggregator(history)

    assert aggregator.revert_completion(TODAY) == 0
    assert aggregator.revert_completion(date(2026, 10, 1)) == 0
    assert history == {"2026-10-19": 0}


def test_totals():
    aggregator = HistoryAggregator({"2026-10-17": 2, "2026-10-18": 0, "2026-10-19": 3})

    assert aggregator.total() == 5
    assert aggregator.distinct_days() == 3
    assert dict(aggregator.items()) == aggregator.as_dict()


def test_retention_prunes_old_entries_on_write():
    history = {"2026-01-01": 4, "2026-10-13": 1, "2026-10-12": 2, "garbage": 1}
    aggregator = HistoryAggregator(history, retention_days=7)

    aggregator.record_completion(TODAY)

    assert history == {"2026-10-13": 1, "2026-10-19": 1, "garbage": 1}


def test_unlimited_retention_keeps_everything():
    history = {"2001-01-01": 4}
    HistoryAggregator(history).record_completion(TODAY)

    assert "2001-01-01" in history


def test_date_key_helpers():
    assert date_key(date(2026, 3, 4)) == "2026-03-04"
    assert parse_date_key("2026-03-04") == date(2026, 3, 4)
    assert parse_date_key("Mon Oct 19 2026") is None
    assert weekday_name(TODAY) == "Mon"
    assert weekday_name(date(2026, 10, 18)) == "Sun"
