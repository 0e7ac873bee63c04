from __future__ import annotations

import datetime as dt
import os
from dataclasses import dataclass
from zoneinfo import ZoneInfo

from .models import SNOOZE_LIMIT, SNOOZE_OFFSET_MINUTES, CategoryDefaults


DEFAULT_DB_PATH = os.path.join("apps", "api", "data", "reminders.db")


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


@dataclass(frozen=True)
class EngineSettings:
    db_path: str = DEFAULT_DB_PATH
    timezone: str = "UTC"
    snooze_minutes: int = SNOOZE_OFFSET_MINUTES
    snooze_limit: int = SNOOZE_LIMIT
    default_category: str = CategoryDefaults.PERSONAL
    workers: int = 4
    scheduler_enabled: bool = True

    def tzinfo(self) -> dt.tzinfo:
        if self.timezone.upper() == "UTC":
            return dt.timezone.utc
        return ZoneInfo(self.timezone)


def load_settings() -> EngineSettings:
    return EngineSettings(
        db_path=os.getenv("REMINDERS_DB_PATH", DEFAULT_DB_PATH),
        timezone=os.getenv("REMINDERS_TIMEZONE", "UTC"),
        snooze_minutes=_env_int("REMINDERS_SNOOZE_MINUTES", SNOOZE_OFFSET_MINUTES),
        snooze_limit=_env_int("REMINDERS_SNOOZE_LIMIT", SNOOZE_LIMIT),
        default_category=os.getenv("REMINDERS_DEFAULT_CATEGORY", CategoryDefaults.PERSONAL),
        workers=_env_int("REMINDERS_WORKERS", 4),
        scheduler_enabled=os.getenv("REMINDERS_SCHEDULER_ENABLED", "true").lower() == "true",
    )
