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


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "DairyLedger"
    DB_FILENAME = "dairyledger.db"
    DEBUG = False
    TESTING = False

    def __init__(self, data_dir: str | Path | None = None) -> None:
        self.SECRET_KEY = os.getenv("DAIRYLEDGER_SECRET_KEY", "replace-me")
        self.DEV_MODE = _env_bool("DAIRYLEDGER_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir(data_dir)
        self.DATABASE_URL = os.getenv("DAIRYLEDGER_DATABASE_URL", self._build_sqlite_url())
        self.HISTORY_MONTHS = _env_int("DAIRYLEDGER_HISTORY_MONTHS", 6)
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("DAIRYLEDGER_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self, data_dir: str | Path | None) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = data_dir or os.getenv("DAIRYLEDGER_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        """Construct the default SQLite URL inside the data directory."""

        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {"pool_pre_ping": True}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True


class TestingConfig(BaseConfig):
    """Configuration for the test-suite; always dev mode, explicit database URL."""

    TESTING = True

    def __init__(self, data_dir: str | Path, database_url: str | None = None) -> None:
        super().__init__(data_dir=data_dir)
        self.DEV_MODE = True
        if database_url is not None:
            self.DATABASE_URL = database_url
