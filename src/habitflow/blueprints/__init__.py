"""Blueprint exports."""

from . import auth, goals, habits, home, insights

__all__ = [
    "auth",
    "goals",
    "habits",
    "home",
    "insights",
]
