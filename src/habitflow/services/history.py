"""Sparse per-day completion counter."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterator, MutableMapping

from ..logging_config import get_logger
from .dates import date_key, parse_date_key

logger = get_logger(__name__)


class HistoryAggregator:
    """Wraps a snapshot's ``history`` mapping (date key -> completions).

    Counts only move through :meth:`record_completion` and
    :meth:`revert_completion`, both driven by habit toggles, and never go
    below zero. ``retention_days`` (0 = keep everything) prunes old keys on
    every write.
    """

    def __init__(self, history: MutableMapping[str, int], *, retention_days: int = 0):
        self._history = history
        self.retention_days = retention_days

    def count_for(self, day: date) -> int:
        return self._history.get(date_key(day), 0)

    def items(self) -> Iterator[tuple[str, int]]:
        return iter(list(self._history.items()))

    def total(self) -> int:
        return sum(self._history.values())

    def distinct_days(self) -> int:
        return len(self._history)

    def as_dict(self) -> dict[str, int]:
        return dict(self._history)

    def record_completion(self, day: date) -> int:
        key = date_key(day)
        self._history[key] = self._history.get(key, 0) + 1
        self._prune(day)
        return self._history[key]

    def revert_completion(self, day: date) -> int:
        key = date_key(day)
        current = self._history.get(key, 0)
        if current > 0:
            self._history[key] = current - 1
        return self._history.get(key, 0)

    def _prune(self, today: date) -> None:
        if not self.retention_days:
            return
        cutoff = today - timedelta(days=self.retention_days - 1)
        stale = [
            key
            for key in self._history
            if (parsed := parse_date_key(key)) is not None and parsed < cutoff
        ]
        for key in stale:
            del self._history[key]
        if stale:
            logger.debug("Pruned %d history entries older than %s", len(stale), cutoff)


__all__ = ["HistoryAggregator"]
