"""Tests for the session controller: login, persistence, confirmations."""

from __future__ import annotations

import pytest

from habitflow.models.snapshot import Theme
from habitflow.services.errors import NotAuthenticatedError, ValidationError
from habitflow.services.session import DELETE_GOAL, DELETE_HABIT, LOGOUT, AppSession


class TestLogin:
    def test_blank_name_rejected(self, app_session, snapshot_store):
        with pytest.raises(ValidationError):
            app_session.login("   ")

        assert snapshot_store.current_user() is None
        assert app_session.user is None

    def test_login_stores_trimmed_current_user(self, app_session, snapshot_store):
        app_session.login("  alice ")

        assert app_session.user == "alice"
        assert snapshot_store.current_user() == "alice"
        assert snapshot_store.last_login("alice") == "2026-10-19"

    def test_resume_picks_up_remembered_user(self, snapshot_store, clock):
        first = AppSession(snapshot_store, clock=clock)
        first.login("alice")
        first.add_habit("Read", "📖")

        second = AppSession(snapshot_store, clock=clock)
        assert second.resume() == "alice"
        assert [h.title for h in second.snapshot.habits] == ["Read"]

    def test_resume_without_user(self, app_session):
        assert app_session.resume() is None
        assert app_session.is_authenticated is False

    def test_mutations_require_a_user(self, app_session):
        with pytest.raises(NotAuthenticatedError):
            app_session.add_habit("Read")
        with pytest.raises(NotAuthenticatedError):
            app_session.toggle_theme()


class TestPersistence:
    def test_every_mutation_is_saved(self, logged_in, snapshot_store):
        habit = logged_in.add_habit("Read", "📖")
        logged_in.toggle_habit(habit.id)
        goal = logged_in.add_goal("Books", 12)
        logged_in.update_goal(goal.id, 2)

        stored = snapshot_store.load("alice")
        assert stored.habits[0].streak == 1
        assert stored.habits[0].completed_today is True
        assert stored.goals[0].current == 2
        assert stored.history == {"2026-10-19": 1}

    def test_end_to_end_toggle_round_trip(self, logged_in):
        habit = logged_in.add_habit("Read", "📖")

        logged_in.toggle_habit(habit.id)
        assert logged_in.history.count_for(logged_in.clock()) == 1
        assert (habit.streak, habit.best) == (1, 1)

        logged_in.toggle_habit(habit.id)
        assert logged_in.snapshot.history["2026-10-19"] == 0
        assert (habit.streak, habit.best) == (0, 1)

    def test_users_are_isolated(self, app_session, snapshot_store):
        app_session.login("alice")
        app_session.add_habit("Read")
        app_session.login("bob")

        assert app_session.snapshot.habits == []
        assert [h.title for h in snapshot_store.load("alice").habits] == ["Read"]

    def test_toggle_theme_persists(self, logged_in, snapshot_store):
        assert logged_in.toggle_theme() is Theme.LIGHT
        assert snapshot_store.load("alice").settings.theme is Theme.LIGHT
        assert logged_in.toggle_theme() is Theme.DARK


class TestConfirmations:
    def test_cancelled_delete_leaves_state_alone(self, logged_in, snapshot_store):
        habit = logged_in.add_habit("Read")

        pending = logged_in.request_delete_habit(habit.id)
        assert pending.action == DELETE_HABIT
        assert pending.prompt == "Delete habit?"
        assert logged_in.cancel(pending.token) is True

        assert [h.id for h in logged_in.snapshot.habits] == [habit.id]
        assert logged_in.confirm(pending.token) is False
        assert len(snapshot_store.load("alice").habits) == 1

    def test_confirmed_delete_is_persisted(self, logged_in, snapshot_store):
        habit = logged_in.add_habit("Read")
        logged_in.toggle_habit(habit.id)

        pending = logged_in.request_delete_habit(habit.id)
        assert logged_in.confirm(pending.token) is True

        stored = snapshot_store.load("alice")
        assert stored.habits == []
        assert stored.history == {"2026-10-19": 1}

    def test_goal_delete(self, logged_in):
        goal = logged_in.add_goal("Books", 12)

        pending = logged_in.request_delete_goal(goal.id)
        assert pending.action == DELETE_GOAL
        assert logged_in.confirm(pending.token) is True
        assert logged_in.snapshot.goals == []

    def test_unknown_targets_get_no_confirmation(self, logged_in):
        assert logged_in.request_delete_habit(123) is None
        assert logged_in.request_delete_goal(123) is None
        assert logged_in.confirm("nope") is False
        assert logged_in.cancel("nope") is False

    def test_stale_delete_is_a_noop(self, logged_in):
        habit = logged_in.add_habit("Read")
        first = logged_in.request_delete_habit(habit.id)
        second = logged_in.request_delete_habit(habit.id)

        assert logged_in.confirm(first.token) is True
        assert logged_in.confirm(second.token) is False

    def test_logout_requires_confirmation(self, logged_in, snapshot_store):
        logged_in.add_habit("Read")

        pending = logged_in.request_logout()
        assert pending.action == LOGOUT
        assert logged_in.user == "alice"

        assert logged_in.confirm(pending.token) is True
        assert logged_in.user is None
        assert logged_in.snapshot.habits == []
        assert snapshot_store.current_user() is None
        # stored data survives logout
        assert len(snapshot_store.load("alice").habits) == 1


class TestListeners:
    def test_changes_are_emitted_after_save(self, app_session, snapshot_store):
        seen: list[tuple[str, int]] = []

        def listener(change):
            stored = snapshot_store.load(change.user) if change.user else None
            seen.append((change.topic, len(stored.habits) if stored else -1))

        unsubscribe = app_session.subscribe(listener)
        app_session.login("alice")
        app_session.add_habit("Read")
        unsubscribe()
        app_session.add_habit("Walk")

        assert seen == [("session", 0), ("habits", 1)]

    def test_unknown_toggle_emits_nothing(self, logged_in):
        seen = []
        logged_in.subscribe(seen.append)

        assert logged_in.toggle_habit(999) is None
        assert seen == []


def test_read_models(logged_in):
    habit = logged_in.add_habit("Read")
    logged_in.add_habit("Walk")
    logged_in.toggle_habit(habit.id)

    assert logged_in.stats().completion_rate == 50
    assert logged_in.analytics().total_completions == 1
    today_cell = next(cell for cell in logged_in.calendar().days if cell.is_today)
    assert today_cell.count == 1
    assert today_cell.status == "good"
