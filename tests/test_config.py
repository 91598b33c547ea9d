from __future__ import annotations

import logging
from pathlib import Path

import pytest

from engagement_dashboard.config import DEFAULT_LOG_PATH, get_settings


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DASHBOARD_DATA_FILE", "DASHBOARD_LOG_PATH", "DASHBOARD_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    s = get_settings()
    assert s.data_file is None
    assert s.log_path == Path(DEFAULT_LOG_PATH)
    assert s.log_level == logging.INFO


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DASHBOARD_DATA_FILE", "data/engagement.csv")
    monkeypatch.setenv("DASHBOARD_LOG_PATH", "")
    monkeypatch.setenv("DASHBOARD_LOG_LEVEL", "debug")
    s = get_settings()
    assert s.data_file == Path("data/engagement.csv")
    assert s.log_path is None
    assert s.log_level == logging.DEBUG


def test_settings_reject_unknown_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DASHBOARD_LOG_LEVEL", "LOUD")
    with pytest.raises(RuntimeError):
        get_settings()
