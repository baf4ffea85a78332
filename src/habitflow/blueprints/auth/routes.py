"""Login and logout routes."""

from __future__ import annotations

from flask import jsonify

from ...extensions import get_app_session
from ..forms import request_payload
from . import bp
from .forms import LoginForm


@bp.get("/me")
def me():
    """Report which user, if any, is active."""

    session = get_app_session()
    return jsonify({"user": session.user, "authenticated": session.is_authenticated})


@bp.post("/login")
def login():
    form, errors = LoginForm.parse(request_payload())
    if form is None:
        return jsonify({"error": "validation_error", "errors": errors}), 400

    session = get_app_session()
    snapshot = session.login(form.name)
    return jsonify({"user": session.user, "snapshot": snapshot.to_payload()})


@bp.post("/logout")
def logout():
    """Start a logout; it only happens once the returned token is confirmed."""

    pending = get_app_session().request_logout()
    return jsonify({"confirmation": pending.to_dict()}), 202
