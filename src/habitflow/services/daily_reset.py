"""Day-rollover handling for a freshly activated session."""

from __future__ import annotations

from datetime import date

from ..logging_config import get_logger
from ..models.snapshot import Snapshot
from .dates import date_key
from .persistence import SnapshotStore

logger = get_logger(__name__)


def check_daily_reset(store: SnapshotStore, user: str, snapshot: Snapshot, *, today: date) -> bool:
    """Clear every ``completed_today`` flag when ``user`` last logged in on another day.

    Streaks, best streaks and history are left untouched; a skipped day does
    not decay a streak. Returns True when a reset was applied.
    """

    if not user:
        return False
    today_key = date_key(today)
    last_login = store.last_login(user)
    if last_login == today_key:
        return False

    for habit in snapshot.habits:
        habit.completed_today = False
    store.save(user, snapshot)
    store.set_last_login(user, today_key)
    logger.info(
        "Daily reset applied",
        extra={"user": user, "last_login": last_login, "today": today_key},
    )
    return True


__all__ = ["check_daily_reset"]
