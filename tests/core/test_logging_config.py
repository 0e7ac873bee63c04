import pytest

from packages.core.logging_config import build_logging_config


def test_stdout_default(monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_DESTINATION", raising=False)
    monkeypatch.delenv("REMINDERS_LOG_LEVEL", raising=False)

    config = build_logging_config()

    assert config["handlers"]["default"]["class"] == "logging.StreamHandler"
    assert config["root"]["level"] == "INFO"
    assert config["loggers"]["apscheduler"]["level"] == "WARNING"
    assert "reminders" not in config["loggers"]


def test_reminders_level_override(monkeypatch):
    monkeypatch.setenv("REMINDERS_LOG_LEVEL", "debug")
    assert build_logging_config()["loggers"]["reminders"]["level"] == "DEBUG"


def test_file_destination_requires_path(monkeypatch, tmp_path):
    monkeypatch.setenv("LOG_DESTINATION", "file")
    monkeypatch.delenv("LOG_FILE", raising=False)
    with pytest.raises(RuntimeError):
        build_logging_config()

    monkeypatch.setenv("LOG_FILE", str(tmp_path / "reminders.log"))
    handler = build_logging_config()["handlers"]["default"]
    assert handler["class"] == "logging.FileHandler"
    assert handler["filename"] == str(tmp_path / "reminders.log")


def test_unknown_destination_fails(monkeypatch):
    monkeypatch.setenv("LOG_DESTINATION", "syslog")
    with pytest.raises(RuntimeError):
        build_logging_config()
