from __future__ import annotations

import logging.config
import os
import sys
from typing import Any, Dict, Optional


def _log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def _reminders_log_level() -> Optional[str]:
    level = os.getenv("REMINDERS_LOG_LEVEL")
    return level.upper() if level else None


def _log_destination() -> str:
    return os.getenv("LOG_DESTINATION", "stdout").lower()


def _log_file_path() -> Optional[str]:
    return os.getenv("LOG_FILE")


def _handler() -> Dict[str, Any]:
    destination = _log_destination()
    if destination == "file":
        log_file = _log_file_path()
        if not log_file:
            raise RuntimeError("LOG_FILE is required when LOG_DESTINATION=file")
        return {
            "class": "logging.FileHandler",
            "level": _log_level(),
            "filename": log_file,
            "formatter": "standard",
        }
    if destination not in ("stdout", "stderr"):
        raise RuntimeError(f"Unsupported LOG_DESTINATION: {destination}")
    return {
        "class": "logging.StreamHandler",
        "level": _log_level(),
        "stream": sys.stdout if destination == "stdout" else sys.stderr,
        "formatter": "standard",
    }


def build_logging_config() -> Dict[str, Any]:
    config: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s %(levelname)s %(name)s [%(threadName)s] %(message)s",
            }
        },
        "handlers": {"default": _handler()},
        "root": {"handlers": ["default"], "level": _log_level()},
        "loggers": {
            # APScheduler logs every job run at INFO; alarms are logged by us.
            "apscheduler": {"level": "WARNING"},
        },
    }
    reminders_level = _reminders_log_level()
    if reminders_level:
        config["loggers"]["reminders"] = {"level": reminders_level}
    return config


def configure_logging() -> None:
    logging.config.dictConfig(build_logging_config())
