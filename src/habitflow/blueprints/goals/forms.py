"""Goal form definitions."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from ...services.habits import TITLE_MAX_LENGTH
from ..forms import FormModel


def _reject_bool(value: Any) -> Any:
    # JSON true/false would otherwise coerce to 1/0
    if isinstance(value, bool):
        raise ValueError("Must be a whole number.")
    return value


class GoalForm(FormModel):
    """Form model for creating a numeric goal."""

    title: str = Field(default="", max_length=TITLE_MAX_LENGTH)
    target: int = Field(gt=0, description="Amount of progress that completes the goal")

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        if not value:
            raise ValueError("Please provide a goal title.")
        return value

    @field_validator("target", mode="before")
    @classmethod
    def validate_target(cls, value: Any) -> Any:
        return _reject_bool(value)


class ProgressForm(FormModel):
    """Progress change for an existing goal; the UI sends +1 by default."""

    delta: int = 1

    @field_validator("delta", mode="before")
    @classmethod
    def validate_delta(cls, value: Any) -> Any:
        return _reject_bool(value)


__all__ = ["GoalForm", "ProgressForm"]
