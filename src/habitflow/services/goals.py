"""Goal ledger: numeric targets and progress counters."""

from __future__ import annotations

from typing import Optional

from ..logging_config import get_logger
from ..models.snapshot import Goal
from .errors import ValidationError
from .habits import TITLE_MAX_LENGTH, next_identifier

logger = get_logger(__name__)


def parse_target(raw: object) -> int:
    """Coerce a submitted target into a positive integer or raise ValidationError."""

    if isinstance(raw, bool):
        raise ValidationError("Target must be a whole number.", field="target")
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, float) and raw.is_integer():
        value = int(raw)
    elif isinstance(raw, str):
        try:
            value = int(raw.strip())
        except ValueError:
            raise ValidationError("Target must be a whole number.", field="target") from None
    else:
        raise ValidationError("Target must be a whole number.", field="target")
    if value <= 0:
        raise ValidationError("Target must be greater than zero.", field="target")
    return value


class GoalLedger:
    """Applies goal mutations to the active snapshot's goal list."""

    def __init__(self, goals: list[Goal]):
        self._goals = goals

    @property
    def goals(self) -> list[Goal]:
        return self._goals

    def get(self, goal_id: int) -> Optional[Goal]:
        return next((goal for goal in self._goals if goal.id == goal_id), None)

    def add_goal(self, title: str, target: object) -> Goal:
        clean_title = (title or "").strip()
        if not clean_title:
            raise ValidationError("Please provide a goal title.", field="title")
        if len(clean_title) > TITLE_MAX_LENGTH:
            raise ValidationError(
                f"Goal titles are limited to {TITLE_MAX_LENGTH} characters.", field="title"
            )
        goal = Goal(
            id=next_identifier(g.id for g in self._goals),
            title=clean_title,
            target=parse_target(target),
        )
        self._goals.append(goal)
        logger.info("Goal added", extra={"goal_id": goal.id, "target": goal.target})
        return goal

    def update_goal(self, goal_id: int, delta: int) -> Optional[Goal]:
        """Add ``delta`` to the goal's progress; current may exceed the target."""

        goal = self.get(goal_id)
        if goal is None:
            logger.debug("Progress update ignored for unknown goal %s", goal_id)
            return None
        goal.current += delta
        return goal

    def delete_goal(self, goal_id: int) -> bool:
        before = len(self._goals)
        self._goals[:] = [goal for goal in self._goals if goal.id != goal_id]
        return len(self._goals) != before


def goal_progress(goal: Goal) -> int:
    """Completion percent, clamped to 100; 0 when the target is not positive."""

    return goal.progress


__all__ = ["GoalLedger", "goal_progress", "parse_target"]
