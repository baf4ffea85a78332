"""Typed per-user state: habits, goals, settings and the completion history."""

from __future__ import annotations

import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

SCHEMA_VERSION = 1
DEFAULT_ICON = "✨"


class Theme(str, Enum):
    """Supported colour schemes."""

    DARK = "dark"
    LIGHT = "light"


class Habit(BaseModel):
    """A daily habit with its streak counters."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    icon: str = DEFAULT_ICON
    streak: int = Field(default=0, ge=0)
    best: int = Field(default=0, ge=0)
    completed_today: bool = Field(default=False, alias="completedToday")

    @model_validator(mode="after")
    def keep_best_above_streak(self) -> "Habit":
        """``best`` is a high-water mark and can never trail ``streak``."""

        if self.best < self.streak:
            self.best = self.streak
        return self


class Goal(BaseModel):
    """A numeric goal tracked towards ``target``."""

    id: int
    title: str
    target: int
    current: int = 0

    @property
    def progress(self) -> int:
        """Completion percentage, capped at 100."""

        if self.target <= 0:
            return 0
        return min(100, round_half_up(self.current / self.target * 100))


class Settings(BaseModel):
    theme: Theme = Theme.DARK


class Snapshot(BaseModel):
    """Everything persisted for one user."""

    habits: list[Habit] = Field(default_factory=list)
    goals: list[Goal] = Field(default_factory=list)
    settings: Settings = Field(default_factory=Settings)
    history: dict[str, int] = Field(default_factory=dict)
    version: int = SCHEMA_VERSION

    def to_payload(self) -> dict:
        """JSON-ready representation using the stored field names."""

        return self.model_dump(mode="json", by_alias=True)


def round_half_up(value: float) -> int:
    """Round halves towards +inf, the way percentages are displayed."""

    return int(math.floor(value + 0.5))


__all__ = [
    "DEFAULT_ICON",
    "Goal",
    "Habit",
    "SCHEMA_VERSION",
    "Settings",
    "Snapshot",
    "Theme",
    "round_half_up",
]
