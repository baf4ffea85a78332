"""Service module exports."""

from . import (
    analytics,
    calendar,
    daily_reset,
    dates,
    errors,
    goals,
    habits,
    history,
    persistence,
    session,
)

__all__ = [
    "analytics",
    "calendar",
    "daily_reset",
    "dates",
    "errors",
    "goals",
    "habits",
    "history",
    "persistence",
    "session",
]
