# src/assignment_tracker/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing required at import time; every field has a default.
- Tests build their own settings and pass them in explicitly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "TRACKER"

PRIORITY_VALUES = ("low", "medium", "high")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv
    except Exception:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


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

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    tasks_path: Path

    # ---- Refresh loop ----
    refresh_enabled: bool
    refresh_interval_seconds: float

    # ---- Form defaults ----
    default_priority: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "assignment-tracker").strip() or "assignment-tracker"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/assignment_tracker"))
        tasks_path = _env_path(_k("TASKS_PATH"), data_dir / "tasks_v3.json")

        refresh_enabled = _env_bool(_k("REFRESH_ENABLED"), True)
        refresh_interval_seconds = _env_float(_k("REFRESH_INTERVAL_SECONDS"), 60.0)
        if refresh_interval_seconds <= 0:
            refresh_interval_seconds = 60.0

        default_priority = _env(_k("DEFAULT_PRIORITY"), "medium").strip().lower()
        if default_priority not in PRIORITY_VALUES:
            default_priority = "medium"

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            tasks_path=tasks_path,
            refresh_enabled=refresh_enabled,
            refresh_interval_seconds=refresh_interval_seconds,
            default_priority=default_priority,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
