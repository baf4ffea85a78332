"""Storage protocols the services depend on."""

from .store import KeyValueStore

__all__ = ["KeyValueStore"]
