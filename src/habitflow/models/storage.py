"""Durable key/value rows backing the per-user snapshots."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar

from sqlalchemy import Column, Text
from sqlmodel import Field, SQLModel


class StoredValue(SQLModel, table=True):
    """One text value addressed by a namespaced key (``habitflow_<user>_<field>``)."""

    __tablename__: ClassVar[str] = "stored_value"

    key: str = Field(primary_key=True, max_length=255)
    value: str = Field(sa_column=Column(Text, nullable=False))
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
