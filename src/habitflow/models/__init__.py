"""Model exports."""

from .snapshot import SCHEMA_VERSION, Goal, Habit, Settings, Snapshot, Theme
from .storage import StoredValue

__all__ = [
    "Goal",
    "Habit",
    "SCHEMA_VERSION",
    "Settings",
    "Snapshot",
    "StoredValue",
    "Theme",
]
