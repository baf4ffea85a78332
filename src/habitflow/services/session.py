"""Session controller owning the active user and snapshot.

All mutations go through :class:`AppSession`: it delegates to the ledgers,
persists the whole snapshot right away and then notifies subscribers so a
presentation layer can re-render. Destructive actions are two-phase: a
request returns a :class:`PendingConfirmation` that must be confirmed by
token before anything changes.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from ..logging_config import get_logger
from ..models.snapshot import Goal, Habit, Snapshot, Theme
from .analytics import AnalyticsSummary, derive_analytics
from .calendar import CalendarMonth, build_month
from .daily_reset import check_daily_reset
from .dates import Clock, local_today
from .errors import NotAuthenticatedError, ValidationError
from .goals import GoalLedger
from .habits import Celebration, DashboardStats, HabitLedger, dashboard_stats
from .history import HistoryAggregator
from .persistence import SnapshotStore

logger = get_logger(__name__)

DELETE_HABIT = "delete_habit"
DELETE_GOAL = "delete_goal"
LOGOUT = "logout"

_PROMPTS = {
    DELETE_HABIT: "Delete habit?",
    DELETE_GOAL: "Remove goal?",
    LOGOUT: "Log out of HabitFlow?",
}


@dataclass(frozen=True, slots=True)
class SnapshotChange:
    """Emitted after a mutation has been persisted."""

    topic: str
    user: Optional[str]


@dataclass(frozen=True, slots=True)
class PendingConfirmation:
    token: str
    action: str
    target_id: Optional[int]
    prompt: str

    def to_dict(self) -> dict:
        return {
            "token": self.token,
            "action": self.action,
            "target_id": self.target_id,
            "prompt": self.prompt,
        }


Listener = Callable[[SnapshotChange], None]


class AppSession:
    """Explicit session context for one store (one local profile)."""

    def __init__(
        self,
        store: SnapshotStore,
        *,
        clock: Clock = local_today,
        celebrate: Optional[Celebration] = None,
        history_retention_days: int = 0,
    ):
        self.store = store
        self.clock = clock
        self.celebrate = celebrate
        self.history_retention_days = history_retention_days
        self.user: Optional[str] = None
        self._listeners: list[Listener] = []
        self._pending: dict[str, PendingConfirmation] = {}
        self._reset_day: Optional[date] = None
        self._bind(Snapshot())

    # -- lifecycle ------------------------------------------------------------

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def resume(self) -> Optional[str]:
        """Re-activate whichever user the store remembers, if any."""

        user = self.store.current_user()
        if user:
            self._activate(user)
        return user

    def login(self, name: str) -> Snapshot:
        user = (name or "").strip()
        if not user:
            raise ValidationError("Please enter a name.", field="name")
        self.store.set_current_user(user)
        self._activate(user)
        logger.info("User logged in", extra={"user": user})
        return self.snapshot

    def request_logout(self) -> PendingConfirmation:
        self.require_user()
        return self._request(LOGOUT, None)

    def _logout(self) -> None:
        user = self.user
        self.store.clear_current_user()
        self.user = None
        self._reset_day = None
        self._pending.clear()
        self._bind(Snapshot())
        logger.info("User logged out", extra={"user": user})
        self._emit("session")

    def _activate(self, user: str) -> None:
        self.user = user
        self._pending.clear()
        self._bind(self.store.load(user))
        today = self.clock()
        check_daily_reset(self.store, user, self.snapshot, today=today)
        self._reset_day = today
        self._emit("session")

    def ensure_today(self) -> bool:
        """Apply the daily reset when the local date moved since the last check.

        Called before every read or mutation; returns True when a reset ran.
        """

        if self.user is None:
            return False
        today = self.clock()
        if today == self._reset_day:
            return False
        self._reset_day = today
        if not check_daily_reset(self.store, self.user, self.snapshot, today=today):
            return False
        self._emit("habits")
        return True

    def _bind(self, snapshot: Snapshot) -> None:
        self.snapshot = snapshot
        self.history = HistoryAggregator(
            snapshot.history, retention_days=self.history_retention_days
        )
        self.habit_ledger = HabitLedger(
            snapshot.habits, self.history, clock=self.clock, celebrate=self.celebrate
        )
        self.goal_ledger = GoalLedger(snapshot.goals)

    def require_user(self) -> str:
        if self.user is None:
            raise NotAuthenticatedError("No user is logged in")
        self.ensure_today()
        return self.user

    # -- subscribers ------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a callable that unsubscribes it."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, topic: str) -> None:
        change = SnapshotChange(topic=topic, user=self.user)
        for listener in list(self._listeners):
            listener(change)

    def _commit(self, topic: str) -> None:
        self.store.save(self.user, self.snapshot)
        self._emit(topic)

    # -- habits ----------------------------------------------------------------

    def add_habit(self, title: str, icon: str | None = None) -> Habit:
        self.require_user()
        habit = self.habit_ledger.add_habit(title, icon)
        self._commit("habits")
        return habit

    def toggle_habit(self, habit_id: int) -> Optional[Habit]:
        self.require_user()
        habit = self.habit_ledger.toggle_habit(habit_id)
        if habit is not None:
            self._commit("habits")
        return habit

    def request_delete_habit(self, habit_id: int) -> Optional[PendingConfirmation]:
        self.require_user()
        if self.habit_ledger.get(habit_id) is None:
            return None
        return self._request(DELETE_HABIT, habit_id)

    # -- goals -----------------------------------------------------------------

    def add_goal(self, title: str, target: object) -> Goal:
        self.require_user()
        goal = self.goal_ledger.add_goal(title, target)
        self._commit("goals")
        return goal

    def update_goal(self, goal_id: int, delta: int) -> Optional[Goal]:
        self.require_user()
        goal = self.goal_ledger.update_goal(goal_id, delta)
        if goal is not None:
            self._commit("goals")
        return goal

    def request_delete_goal(self, goal_id: int) -> Optional[PendingConfirmation]:
        self.require_user()
        if self.goal_ledger.get(goal_id) is None:
            return None
        return self._request(DELETE_GOAL, goal_id)

    # -- settings ----------------------------------------------------------------

    def toggle_theme(self) -> Theme:
        self.require_user()
        settings = self.snapshot.settings
        settings.theme = Theme.DARK if settings.theme is Theme.LIGHT else Theme.LIGHT
        self._commit("settings")
        return settings.theme

    # -- confirmations -------------------------------------------------------------

    def _request(self, action: str, target_id: Optional[int]) -> PendingConfirmation:
        pending = PendingConfirmation(
            token=secrets.token_urlsafe(12),
            action=action,
            target_id=target_id,
            prompt=_PROMPTS[action],
        )
        self._pending[pending.token] = pending
        return pending

    def pending(self, token: str) -> Optional[PendingConfirmation]:
        return self._pending.get(token)

    def cancel(self, token: str) -> bool:
        """Drop a pending request without changing any state."""

        return self._pending.pop(token, None) is not None

    def confirm(self, token: str) -> bool:
        """Carry out a pending request; unknown or stale tokens are ignored."""

        pending = self._pending.pop(token, None)
        if pending is None:
            return False
        if pending.action == LOGOUT:
            self._logout()
            return True
        if pending.action == DELETE_HABIT and pending.target_id is not None:
            if self.habit_ledger.delete_habit(pending.target_id):
                self._commit("habits")
                return True
        elif pending.action == DELETE_GOAL and pending.target_id is not None:
            if self.goal_ledger.delete_goal(pending.target_id):
                self._commit("goals")
                return True
        return False

    # -- read models ----------------------------------------------------------------

    def stats(self) -> DashboardStats:
        return dashboard_stats(self.snapshot.habits)

    def analytics(self) -> AnalyticsSummary:
        return derive_analytics(self.snapshot.history, self.snapshot.habits, today=self.clock())

    def calendar(self, year: int | None = None, month: int | None = None) -> CalendarMonth:
        return build_month(
            self.snapshot.history,
            len(self.snapshot.habits),
            today=self.clock(),
            year=year,
            month=month,
        )


__all__ = [
    "AppSession",
    "DELETE_GOAL",
    "DELETE_HABIT",
    "LOGOUT",
    "PendingConfirmation",
    "SnapshotChange",
]
