"""Exceptions raised by HabitFlow services."""

from __future__ import annotations


class HabitFlowError(Exception):
    """Base class for service-level failures."""


class ValidationError(HabitFlowError):
    """Input was rejected before any state changed."""

    def __init__(self, message: str, *, field: str = "__root__"):
        super().__init__(message)
        self.field = field
        self.errors: dict[str, list[str]] = {field: [message]}


class NotAuthenticatedError(HabitFlowError):
    """A mutation was attempted without an active user."""


__all__ = ["HabitFlowError", "NotAuthenticatedError", "ValidationError"]
