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
    """Read an integer environment variable, rejecting garbage early."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "ClubDues"
    DB_FILENAME = "clubdues.db"
    SUPPORTED_LOCALES = ("fr", "en")

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("CLUBDUES_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("CLUBDUES_DATABASE_URL", self._build_sqlite_url())
        self.LOCALE = os.getenv("CLUBDUES_LOCALE", "fr").strip().lower() or "fr"
        self.CLUB_ID = _env_int("CLUBDUES_CLUB_ID", 1)
        self.ADVANCE_MAX_MONTHS = _env_int("CLUBDUES_ADVANCE_MAX_MONTHS", 12)
        if self.ADVANCE_MAX_MONTHS < 1:
            raise ValueError("CLUBDUES_ADVANCE_MAX_MONTHS must be at least 1.")
        if self.LOCALE not in self.SUPPORTED_LOCALES:
            raise ValueError(
                f"CLUBDUES_LOCALE must be one of {', '.join(self.SUPPORTED_LOCALES)}."
            )

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("CLUBDUES_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        """Construct the default SQLite URL inside the data directory."""

        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {}


class TestConfig(BaseConfig):
    """Configuration used by the test-suite; never falls back to the real data dir."""

    TESTING = True
    __test__ = False  # keep pytest from collecting it

    def __init__(self, data_dir: Path | None = None) -> None:
        self._data_dir_override = Path(data_dir) if data_dir is not None else None
        super().__init__()

    def _resolve_data_dir(self) -> Path:
        if self._data_dir_override is None:
            return super()._resolve_data_dir()
        self._data_dir_override.mkdir(parents=True, exist_ok=True)
        return self._data_dir_override.resolve()
