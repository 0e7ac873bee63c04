import datetime as dt

import pytest

from packages.core.reminders.config import DEFAULT_DB_PATH, EngineSettings, load_settings


def test_defaults_without_env(monkeypatch):
    for name in (
        "REMINDERS_DB_PATH",
        "REMINDERS_TIMEZONE",
        "REMINDERS_SNOOZE_MINUTES",
        "REMINDERS_SNOOZE_LIMIT",
        "REMINDERS_DEFAULT_CATEGORY",
        "REMINDERS_WORKERS",
        "REMINDERS_SCHEDULER_ENABLED",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert settings == EngineSettings()
    assert settings.db_path == DEFAULT_DB_PATH
    assert settings.snooze_minutes == 5
    assert settings.snooze_limit == 3
    assert settings.tzinfo() is dt.timezone.utc


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("REMINDERS_DB_PATH", str(tmp_path / "r.db"))
    monkeypatch.setenv("REMINDERS_TIMEZONE", "Europe/Berlin")
    monkeypatch.setenv("REMINDERS_SNOOZE_MINUTES", "10")
    monkeypatch.setenv("REMINDERS_SNOOZE_LIMIT", "2")
    monkeypatch.setenv("REMINDERS_DEFAULT_CATEGORY", "WORK")
    monkeypatch.setenv("REMINDERS_WORKERS", "1")
    monkeypatch.setenv("REMINDERS_SCHEDULER_ENABLED", "false")

    settings = load_settings()

    assert settings.db_path == str(tmp_path / "r.db")
    assert settings.snooze_minutes == 10
    assert settings.snooze_limit == 2
    assert settings.default_category == "WORK"
    assert settings.workers == 1
    assert settings.scheduler_enabled is False
    assert settings.tzinfo().key == "Europe/Berlin"


@pytest.mark.parametrize("raw", ["soon", "0", "-3"])
def test_invalid_integer_names_the_variable(monkeypatch, raw):
    monkeypatch.setenv("REMINDERS_SNOOZE_LIMIT", raw)
    with pytest.raises(ValueError, match="REMINDERS_SNOOZE_LIMIT"):
        load_settings()
