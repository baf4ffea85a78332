"""Overview, theme and confirmation routes."""

from __future__ import annotations

from flask import jsonify

from ...extensions import get_app_session
from . import bp


@bp.get("/")
def index():
    """Current user and the full snapshot the client renders from."""

    session = get_app_session()
    snapshot = session.snapshot.to_payload() if session.is_authenticated else None
    return jsonify({"user": session.user, "snapshot": snapshot})


@bp.post("/settings/theme")
def toggle_theme():
    theme = get_app_session().toggle_theme()
    return jsonify({"theme": theme.value})


@bp.post("/confirmations/<token>")
def confirm(token: str):
    session = get_app_session()
    pending = session.pending(token)
    if pending is None:
        return jsonify({"error": "confirmation_not_found"}), 404
    applied = session.confirm(token)
    return jsonify({"action": pending.action, "applied": applied, "user": session.user})


@bp.delete("/confirmations/<token>")
def cancel(token: str):
    if not get_app_session().cancel(token):
        return jsonify({"error": "confirmation_not_found"}), 404
    return "", 204
