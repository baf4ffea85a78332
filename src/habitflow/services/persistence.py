"""Per-user snapshot persistence over a key/value store.

Each snapshot field is stored under its own key (``habitflow_<user>_<field>``)
so a failed write for one user never clobbers another user's data. Reads are
forgiving: a missing or corrupt field falls back to its default and is logged.
"""

from __future__ import annotations

import json
from typing import Annotated, Any, Callable, Optional

from pydantic import Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..domain.store import KeyValueStore
from ..logging_config import get_logger
from ..models.snapshot import SCHEMA_VERSION, Goal, Habit, Settings, Snapshot, Theme

logger = get_logger(__name__)

SNAPSHOT_FIELDS = ("habits", "goals", "settings", "history")

_ADAPTERS: dict[str, TypeAdapter] = {
    "habits": TypeAdapter(list[Habit]),
    "goals": TypeAdapter(list[Goal]),
    "settings": TypeAdapter(Settings),
    "history": TypeAdapter(dict[str, Annotated[int, Field(ge=0)]]),
}

_HISTORY_COUNT = TypeAdapter(Annotated[int, Field(ge=0)])

_DEFAULTS: dict[str, Callable[[], Any]] = {
    "habits": list,
    "goals": list,
    "settings": Settings,
    "history": dict,
}


def _migrate_v0(raw: dict[str, Any]) -> dict[str, Any]:
    """Normalise data written before snapshots carried a version tag."""

    history = raw.get("history")
    if isinstance(history, dict):
        cleaned: dict[str, int] = {}
        for key, count in history.items():
            try:
                cleaned[str(key)] = max(0, int(count))
            except (TypeError, ValueError):
                continue
        raw["history"] = cleaned

    habits = raw.get("habits")
    if isinstance(habits, list):
        for item in habits:
            if not isinstance(item, dict):
                continue
            streak = max(0, _as_int(item.get("streak")))
            item["streak"] = streak
            item["best"] = max(streak, _as_int(item.get("best")))
            item.setdefault("completedToday", False)

    settings = raw.get("settings")
    if isinstance(settings, dict) and settings.get("theme") not in {t.value for t in Theme}:
        settings["theme"] = Theme.DARK.value

    return raw


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


MIGRATIONS: dict[int, Callable[[dict[str, Any]], dict[str, Any]]] = {
    0: _migrate_v0,
}


def migrate(raw: dict[str, Any], from_version: int) -> dict[str, Any]:
    """Apply every migration step from ``from_version`` up to the current schema."""

    for version in range(max(0, from_version), SCHEMA_VERSION):
        step = MIGRATIONS.get(version)
        if step is not None:
            raw = step(raw)
    return raw


class SnapshotStore:
    """Load and save user snapshots, plus the session bookkeeping keys."""

    def __init__(self, store: KeyValueStore, *, prefix: str = "habitflow"):
        self.store = store
        self.prefix = prefix

    # -- keys ---------------------------------------------------------------

    def user_key(self, user: str, field: str) -> str:
        return f"{self.prefix}_{user}_{field}"

    @property
    def current_user_key(self) -> str:
        return f"{self.prefix}_current_user"

    # -- snapshot -----------------------------------------------------------

    def load(self, user: str) -> Snapshot:
        """Return the stored snapshot for ``user``; defaults fill any gap."""

        version = self._stored_version(user)
        raw = {field: self._read_json(user, field) for field in SNAPSHOT_FIELDS}
        if version < SCHEMA_VERSION:
            raw = migrate(raw, version)
        elif version > SCHEMA_VERSION:
            logger.warning(
                "Snapshot written by a newer schema; reading best effort",
                extra={"user": user, "stored_version": version},
            )

        values = {field: self._validate(user, field, raw[field]) for field in SNAPSHOT_FIELDS}
        return Snapshot(**values, version=SCHEMA_VERSION)

    def save(self, user: Optional[str], snapshot: Snapshot) -> None:
        """Write all snapshot fields in a single store transaction."""

        if not user:
            logger.debug("Skipping save: no active user")
            return
        payload = snapshot.to_payload()
        items = {
            self.user_key(user, field): json.dumps(payload[field], ensure_ascii=False)
            for field in SNAPSHOT_FIELDS
        }
        items[self.user_key(user, "schema_version")] = str(SCHEMA_VERSION)
        self.store.set_many(items)

    # -- session bookkeeping --------------------------------------------------

    def current_user(self) -> Optional[str]:
        return self.store.get_item(self.current_user_key) or None

    def set_current_user(self, user: str) -> None:
        self.store.set_item(self.current_user_key, user)

    def clear_current_user(self) -> None:
        self.store.remove_item(self.current_user_key)

    def last_login(self, user: str) -> Optional[str]:
        return self.store.get_item(self.user_key(user, "last_login"))

    def set_last_login(self, user: str, day_key: str) -> None:
        self.store.set_item(self.user_key(user, "last_login"), day_key)

    def known_users(self) -> list[str]:
        """Users with a stored habit list, sorted by name."""

        head = f"{self.prefix}_"
        tail = "_habits"
        users = {
            key[len(head) : -len(tail)]
            for key in self.store.keys(head)
            if key.endswith(tail) and len(key) > len(head) + len(tail)
        }
        return sorted(users)

    # -- helpers --------------------------------------------------------------

    def _stored_version(self, user: str) -> int:
        raw = self.store.get_item(self.user_key(user, "schema_version"))
        if raw is None:
            return 0
        try:
            return int(raw)
        except ValueError:
            logger.warning("Ignoring malformed schema version", extra={"user": user, "raw": raw})
            return 0

    def _read_json(self, user: str, field: str) -> Any:
        raw = self.store.get_item(self.user_key(user, field))
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Discarding unreadable %s for %s", field, user)
            return None

    def _validate(self, user: str, field: str, value: Any) -> Any:
        if value is None:
            return _DEFAULTS[field]()
        if field == "history" and isinstance(value, dict):
            return self._validate_history(user, value)
        try:
            return _ADAPTERS[field].validate_python(value)
        except PydanticValidationError as exc:
            logger.warning(
                "Stored %s for %s failed validation; using defaults",
                field,
                user,
                extra={"errors": exc.error_count()},
            )
            return _DEFAULTS[field]()

    def _validate_history(self, user: str, raw: dict[str, Any]) -> dict[str, int]:
        """Keep every valid day count; a bad entry only drops itself."""

        history: dict[str, int] = {}
        dropped = 0
        for key, count in raw.items():
            try:
                history[str(key)] = _HISTORY_COUNT.validate_python(count)
            except PydanticValidationError:
                dropped += 1
        if dropped:
            logger.warning(
                "Dropped %d invalid history entries for %s", dropped, user, extra={"dropped": dropped}
            )
        return history


__all__ = ["MIGRATIONS", "SNAPSHOT_FIELDS", "SnapshotStore", "migrate"]
