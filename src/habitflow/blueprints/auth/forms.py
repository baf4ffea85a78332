"""Login form definition."""

from __future__ import annotations

from pydantic import Field, field_validator

from ..forms import FormModel


class LoginForm(FormModel):
    """Name-only sign in; there are no credentials to check."""

    name: str = Field(default="", max_length=64)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not value:
            raise ValueError("Please enter a name.")
        return value


__all__ = ["LoginForm"]
