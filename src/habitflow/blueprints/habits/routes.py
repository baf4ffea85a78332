"""Habit routes."""

from __future__ import annotations

from dataclasses import asdict

from flask import jsonify

from ...extensions import get_app_session
from ..forms import request_payload
from . import bp
from .forms import ICON_CHOICES, HabitForm


def _habit_payload(habit) -> dict:
    return habit.model_dump(mode="json", by_alias=True)


def _not_found(habit_id: int):
    return jsonify({"error": "habit_not_found", "habit_id": habit_id}), 404


@bp.get("/")
def list_habits():
    """Dashboard data: habits in insertion order plus header stats."""

    session = get_app_session()
    session.require_user()
    return jsonify(
        {
            "habits": [_habit_payload(habit) for habit in session.snapshot.habits],
            "stats": asdict(session.stats()),
            "icons": list(ICON_CHOICES),
        }
    )


@bp.post("/")
def create_habit():
    session = get_app_session()
    session.require_user()
    form, errors = HabitForm.parse(request_payload())
    if form is None:
        return jsonify({"error": "validation_error", "errors": errors}), 400

    habit = session.add_habit(form.title, form.icon)
    return jsonify({"habit": _habit_payload(habit), "stats": asdict(session.stats())}), 201


@bp.post("/<int:habit_id>/toggle")
def toggle_habit(habit_id: int):
    """Toggle habit completion state for today."""

    session = get_app_session()
    habit = session.toggle_habit(habit_id)
    if habit is None:
        return _not_found(habit_id)
    return jsonify(
        {
            "habit": _habit_payload(habit),
            "celebrate": habit.completed_today,
            "completed_today_total": session.history.count_for(session.clock()),
            "stats": asdict(session.stats()),
        }
    )


@bp.post("/<int:habit_id>/delete")
def delete_habit(habit_id: int):
    """Ask for confirmation before a habit is removed."""

    pending = get_app_session().request_delete_habit(habit_id)
    if pending is None:
        return _not_found(habit_id)
    return jsonify({"confirmation": pending.to_dict()}), 202
