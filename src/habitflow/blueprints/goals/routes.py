"""Goal routes."""

from __future__ import annotations

from flask import jsonify

from ...extensions import get_app_session
from ...models.snapshot import Goal
from ...services.goals import goal_progress
from ..forms import request_payload
from . import bp
from .forms import GoalForm, ProgressForm


def _goal_payload(goal: Goal) -> dict:
    payload = goal.model_dump(mode="json")
    payload["progress"] = goal_progress(goal)
    return payload


def _not_found(goal_id: int):
    return jsonify({"error": "goal_not_found", "goal_id": goal_id}), 404


@bp.get("/")
def list_goals():
    session = get_app_session()
    session.require_user()
    return jsonify({"goals": [_goal_payload(goal) for goal in session.snapshot.goals]})


@bp.post("/")
def create_goal():
    session = get_app_session()
    session.require_user()
    form, errors = GoalForm.parse(request_payload())
    if form is None:
        return jsonify({"error": "validation_error", "errors": errors}), 400

    goal = session.add_goal(form.title, form.target)
    return jsonify({"goal": _goal_payload(goal)}), 201


@bp.post("/<int:goal_id>/progress")
def update_progress(goal_id: int):
    session = get_app_session()
    session.require_user()
    form, errors = ProgressForm.parse(request_payload())
    if form is None:
        return jsonify({"error": "validation_error", "errors": errors}), 400

    goal = session.update_goal(goal_id, form.delta)
    if goal is None:
        return _not_found(goal_id)
    return jsonify({"goal": _goal_payload(goal)})


@bp.post("/<int:goal_id>/delete")
def delete_goal(goal_id: int):
    """Ask for confirmation before a goal is removed."""

    pending = get_app_session().request_delete_goal(goal_id)
    if pending is None:
        return _not_found(goal_id)
    return jsonify({"confirmation": pending.to_dict()}), 202
