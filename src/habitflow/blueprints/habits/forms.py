"""Habit form definitions."""

from __future__ import annotations

from pydantic import Field, field_validator

from ...models.snapshot import DEFAULT_ICON
from ...services.habits import TITLE_MAX_LENGTH
from ..forms import FormModel

ICON_CHOICES = ("💧", "📖", "🏃", "🧘", "🥗", "💤", "✍️", DEFAULT_ICON)


class HabitForm(FormModel):
    """Form model for creating a habit."""

    title: str = Field(default="", description="Short label for the habit", max_length=TITLE_MAX_LENGTH)
    icon: str = Field(default=DEFAULT_ICON, description="Glyph shown next to the habit", max_length=8)

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        """Ensure the habit name is present when validating submissions."""

        if not value:
            raise ValueError("Please provide a habit name.")
        return value

    @field_validator("icon")
    @classmethod
    def default_icon(cls, value: str) -> str:
        return value or DEFAULT_ICON


__all__ = ["HabitForm", "ICON_CHOICES"]
