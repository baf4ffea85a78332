"""Habit ledger: creation, daily toggles and streak bookkeeping."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from ..logging_config import get_logger
from ..models.snapshot import DEFAULT_ICON, Habit, round_half_up
from .dates import Clock, local_today
from .errors import ValidationError
from .history import HistoryAggregator

logger = get_logger(__name__)

Celebration = Callable[[Habit], None]

TITLE_MAX_LENGTH = 100


def next_identifier(existing: Iterable[int]) -> int:
    """Millisecond timestamp id, bumped past any id already in use."""

    candidate = int(time.time() * 1000)
    highest = max(existing, default=0)
    return candidate if candidate > highest else highest + 1


@dataclass(slots=True)
class DashboardStats:
    total: int
    completion_rate: int
    best_streak: int


def dashboard_stats(habits: Iterable[Habit]) -> DashboardStats:
    """Header figures: habit count, percent done today and the longest live streak."""

    items = list(habits)
    if not items:
        return DashboardStats(total=0, completion_rate=0, best_streak=0)
    completed = sum(1 for habit in items if habit.completed_today)
    return DashboardStats(
        total=len(items),
        completion_rate=round_half_up(completed / len(items) * 100),
        best_streak=max(0, *(habit.streak for habit in items)),
    )


class HabitLedger:
    """Applies habit mutations to the active snapshot's habit list.

    The ledger only mutates state; persisting and notifying is the caller's job.
    """

    def __init__(
        self,
        habits: list[Habit],
        history: HistoryAggregator,
        *,
        clock: Clock = local_today,
        celebrate: Optional[Celebration] = None,
    ):
        self._habits = habits
        self._history = history
        self._clock = clock
        self._celebrate = celebrate

    @property
    def habits(self) -> list[Habit]:
        return self._habits

    def get(self, habit_id: int) -> Optional[Habit]:
        return next((habit for habit in self._habits if habit.id == habit_id), None)

    def add_habit(self, title: str, icon: str | None = None) -> Habit:
        clean_title = (title or "").strip()
        if not clean_title:
            raise ValidationError("Please provide a habit name.", field="title")
        if len(clean_title) > TITLE_MAX_LENGTH:
            raise ValidationError(
                f"Habit names are limited to {TITLE_MAX_LENGTH} characters.", field="title"
            )
        habit = Habit(
            id=next_identifier(h.id for h in self._habits),
            title=clean_title,
            icon=(icon or "").strip() or DEFAULT_ICON,
        )
        self._habits.append(habit)
        logger.info("Habit added", extra={"habit_id": habit.id})
        return habit

    def toggle_habit(self, habit_id: int) -> Optional[Habit]:
        """Flip today's completion; returns None for unknown ids."""

        habit = self.get(habit_id)
        if habit is None:
            logger.debug("Toggle ignored for unknown habit %s", habit_id)
            return None

        today = self._clock()
        habit.completed_today = not habit.completed_today
        if habit.completed_today:
            habit.streak += 1
            if habit.streak > habit.best:
                habit.best = habit.streak
            self._history.record_completion(today)
            self._notify_celebration(habit)
        else:
            habit.streak = max(0, habit.streak - 1)
            self._history.revert_completion(today)
        return habit

    def delete_habit(self, habit_id: int) -> bool:
        """Remove a habit; recorded history stays as it is."""

        before = len(self._habits)
        self._habits[:] = [habit for habit in self._habits if habit.id != habit_id]
        removed = len(self._habits) != before
        if removed:
            logger.info("Habit deleted", extra={"habit_id": habit_id})
        return removed

    def _notify_celebration(self, habit: Habit) -> None:
        if self._celebrate is None:
            return
        try:
            self._celebrate(habit)
        except Exception:
            logger.warning("Celebration hook failed for habit %s", habit.id, exc_info=True)


__all__ = [
    "Celebration",
    "DashboardStats",
    "HabitLedger",
    "dashboard_stats",
    "next_identifier",
]
