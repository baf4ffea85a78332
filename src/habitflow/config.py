"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int = 0) -> int:
    """Read an integer environment variable, ignoring malformed values."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default


class BaseConfig:
    """Base configuration shared across environments."""

    DB_FILENAME = "habitflow.db"
    KEY_PREFIX = "habitflow"
    TESTING = False

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("HABITFLOW_SECRET_KEY", "replace-me")
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("HABITFLOW_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("HABITFLOW_DATABASE_URL", self._build_sqlite_url())
        # 0 keeps every history entry
        self.HISTORY_RETENTION_DAYS = max(0, _env_int("HABITFLOW_HISTORY_RETENTION_DAYS"))
        self.LOG_TO_FILE = _env_bool("HABITFLOW_LOG_TO_FILE", default=True)
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("HABITFLOW_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory holding the store database and logs."""

        data_root = os.getenv("HABITFLOW_DATA_DIR", "instance")
        base_path = Path(data_root).expanduser()
        try:
            path = base_path.resolve()
            path.mkdir(parents=True, exist_ok=True)
            return path
        except PermissionError:
            # Read-only install locations fall back to the user's home directory.
            fallback_path = Path.home() / f".{self.KEY_PREFIX}"
            fallback_path.mkdir(parents=True, exist_ok=True)
            return fallback_path.resolve()

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True


class TestConfig(BaseConfig):
    """Configuration used by the test-suite; callers point DATA_DIR at a temp dir."""

    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.LOG_TO_FILE = False


__all__ = ["BaseConfig", "DevConfig", "TestConfig"]
