# src/daybook/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is required at import time; every value has a default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "DAYBOOK"
MEMORY_STORE = ":memory:"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


# Real environment variables win over .env entries.
load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Connector flags ----
    console_enabled: bool

    # ---- Board behavior ----
    prune_empty_lists: bool

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    store_db_path: Path

    @property
    def in_memory(self) -> bool:
        return str(self.store_db_path) == MEMORY_STORE

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "daybook") or "daybook"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)
        prune_empty_lists = _env_bool(_k("PRUNE_EMPTY"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/daybook"))
        store_db_path = _env_path(_k("STORE_DB_PATH"), data_dir / "daybook.sqlite3")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            prune_empty_lists=prune_empty_lists,
            data_dir=data_dir,
            store_db_path=store_db_path,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
