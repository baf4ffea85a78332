"""SQLModel implementation of the key/value store."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Mapping, Optional

from sqlmodel import Session, select

from ..models.storage import StoredValue


class SQLModelKeyValueStore:
    """Key/value store over the ``stored_value`` table."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get_item(self, key: str) -> Optional[str]:
        with self.session_factory() as session:
            row = session.get(StoredValue, key)
            return row.value if row is not None else None

    def set_item(self, key: str, value: str) -> None:
        self.set_many({key: value})

    def set_many(self, items: Mapping[str, str]) -> None:
        if not items:
            return
        now = datetime.now(timezone.utc)
        with self.session_factory() as session:
            for key, value in items.items():
                row = session.get(StoredValue, key)
                if row is None:
                    row = StoredValue(key=key, value=value, updated_at=now)
                else:
                    row.value = value
                    row.updated_at = now
                session.add(row)

    def remove_item(self, key: str) -> None:
        with self.session_factory() as session:
            row = session.get(StoredValue, key)
            if row is not None:
                session.delete(row)

    def keys(self, prefix: str = "") -> list[str]:
        with self.session_factory() as session:
            statement = select(StoredValue.key).order_by(StoredValue.key)
            if prefix:
                statement = statement.where(StoredValue.key.startswith(prefix, autoescape=True))  # type: ignore[attr-defined]
            return list(session.exec(statement).all())


__all__ = ["SQLModelKeyValueStore"]
