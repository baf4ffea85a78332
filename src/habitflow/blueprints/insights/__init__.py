"""Calendar and analytics blueprint package."""

from __future__ import annotations

from flask import Blueprint

bp = Blueprint("insights", __name__)

from . import routes  # noqa: E402,F401 - import routes for registration

__all__ = ["bp"]
