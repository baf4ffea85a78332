"""Key/value store protocol."""

from __future__ import annotations

from typing import Mapping, Optional, Protocol


class KeyValueStore(Protocol):
    """Durable string store addressed by namespaced keys."""

    def get_item(self, key: str) -> Optional[str]:
        """Return the stored value or None."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Insert or replace a value."""
        ...

    def set_many(self, items: Mapping[str, str]) -> None:
        """Write several values in one transaction."""
        ...

    def remove_item(self, key: str) -> None:
        """Delete a key; missing keys are ignored."""
        ...

    def keys(self, prefix: str = "") -> list[str]:
        """List stored keys starting with ``prefix``."""
        ...
