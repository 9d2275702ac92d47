# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from assignment_tracker.config import Settings

_VARS = (
    "TRACKER_APP_NAME",
    "TRACKER_LOG_LEVEL",
    "TRACKER_DATA_DIR",
    "TRACKER_TASKS_PATH",
    "TRACKER_REFRESH_ENABLED",
    "TRACKER_REFRESH_INTERVAL_SECONDS",
    "TRACKER_DEFAULT_PRIORITY",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    s = Settings.from_env()
    assert s.app_name == "assignment-tracker"
    assert s.log_level == "INFO"
    assert s.data_dir == Path(".local/assignment_tracker")
    assert s.tasks_path == Path(".local/assignment_tracker/tasks_v3.json")
    assert s.refresh_enabled is True
    assert s.refresh_interval_seconds == 60.0
    assert s.default_priority == "medium"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TRACKER_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TRACKER_REFRESH_ENABLED", "off")
    monkeypatch.setenv("TRACKER_REFRESH_INTERVAL_SECONDS", "15")
    monkeypatch.setenv("TRACKER_DEFAULT_PRIORITY", "HIGH")

    s = Settings.from_env()

    assert s.data_dir == tmp_path
    assert s.tasks_path == tmp_path / "tasks_v3.json"
    assert s.refresh_enabled is False
    assert s.refresh_interval_seconds == 15.0
    assert s.default_priority == "high"


def test_bad_values_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRACKER_REFRESH_INTERVAL_SECONDS", "soon")
    monkeypatch.setenv("TRACKER_DEFAULT_PRIORITY", "urgent")
    monkeypatch.setenv("TRACKER_APP_NAME", "   ")

    s = Settings.from_env()

    assert s.refresh_interval_seconds == 60.0
    assert s.default_priority == "medium"
    assert s.app_name == "assignment-tracker"


def test_negative_interval_uses_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRACKER_REFRESH_INTERVAL_SECONDS", "-5")
    assert Settings.from_env().refresh_interval_seconds == 60.0
