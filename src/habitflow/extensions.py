"""Store and session wiring for the Flask application."""

from __future__ import annotations

from typing import Optional

from flask import Flask, current_app

from .config import BaseConfig
from .infra.database import bootstrap_database
from .infra.store import SQLModelKeyValueStore
from .logging_config import get_logger
from .models.snapshot import Habit
from .services.dates import Clock, local_today
from .services.persistence import SnapshotStore
from .services.session import AppSession, SnapshotChange

logger = get_logger(__name__)

EXTENSION_KEY = "habitflow"


def _log_celebration(habit: Habit) -> None:
    logger.info("Habit completed: %s %s", habit.icon, habit.title, extra={"streak": habit.streak})


def _log_change(change: SnapshotChange) -> None:
    logger.debug("Snapshot changed", extra={"topic": change.topic, "user": change.user})


def init_store(app: Flask, *, clock: Optional[Clock] = None) -> AppSession:
    """Create the engine, key/value store and the app-wide session controller."""

    config: BaseConfig = app.config["HABITFLOW_CONFIG"]
    engine, session_factory = bootstrap_database(config)
    snapshots = SnapshotStore(SQLModelKeyValueStore(session_factory), prefix=config.KEY_PREFIX)
    session = AppSession(
        snapshots,
        clock=clock or local_today,
        celebrate=_log_celebration,
        history_retention_days=config.HISTORY_RETENTION_DAYS,
    )
    session.subscribe(_log_change)
    resumed = session.resume()
    if resumed:
        logger.info("Resumed session", extra={"user": resumed})

    app.extensions[EXTENSION_KEY] = {
        "engine": engine,
        "session_factory": session_factory,
        "snapshots": snapshots,
        "session": session,
    }
    @app.before_request
    def _roll_over_day() -> None:
        if session.ensure_today():
            logger.info("Session rolled over to a new day", extra={"user": session.user})

    return session


def get_app_session() -> AppSession:
    """Return the session controller bound to the current app."""

    state = current_app.extensions.get(EXTENSION_KEY)
    if state is None:  # pragma: no cover - misconfigured app
        raise RuntimeError("HabitFlow store not initialized")
    return state["session"]


def get_snapshot_store() -> SnapshotStore:
    return current_app.extensions[EXTENSION_KEY]["snapshots"]


__all__ = ["EXTENSION_KEY", "get_app_session", "get_snapshot_store", "init_store"]
