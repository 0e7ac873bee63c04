from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler

from packages.core.reminders.alarms import AlarmFiringHandler, SchedulerAlarmPort
from packages.core.reminders.categories import CategoryCascadeService
from packages.core.reminders.config import EngineSettings, load_settings
from packages.core.reminders.dispatch import ReminderWorkQueue
from packages.core.reminders.engine import ReminderLifecycleEngine
from packages.core.reminders.events import EventPublisher, LoggingObserver
from packages.core.reminders.templates import ReminderTemplateService
from packages.core.storage.sqlite import SQLiteReminderStore


logger = logging.getLogger("reminders.api")


@dataclass
class Runtime:
    settings: EngineSettings
    store: SQLiteReminderStore
    scheduler: BackgroundScheduler
    alarms: SchedulerAlarmPort
    publisher: EventPublisher
    engine: ReminderLifecycleEngine
    categories: CategoryCascadeService
    templates: ReminderTemplateService
    queue: ReminderWorkQueue


def build_runtime(
    settings: Optional[EngineSettings] = None,
    scheduler: Optional[BackgroundScheduler] = None,
) -> Runtime:
    settings = settings or load_settings()
    store = SQLiteReminderStore(db_path=settings.db_path)
    scheduler = scheduler or BackgroundScheduler(timezone=settings.tzinfo())
    publisher = EventPublisher([LoggingObserver()])
    firing = AlarmFiringHandler(store, publisher)
    alarms = SchedulerAlarmPort(scheduler, on_fire=firing.handle)
    engine = ReminderLifecycleEngine(store, alarms, publisher=publisher, settings=settings)
    categories = CategoryCascadeService(engine, store, store, templates=store)
    return Runtime(
        settings=settings,
        store=store,
        scheduler=scheduler,
        alarms=alarms,
        publisher=publisher,
        engine=engine,
        categories=categories,
        templates=ReminderTemplateService(engine, store),
        queue=ReminderWorkQueue(workers=settings.workers),
    )


_RUNTIME: Optional[Runtime] = None
_RUNTIME_LOCK = threading.Lock()


def get_runtime() -> Runtime:
    global _RUNTIME
    with _RUNTIME_LOCK:
        if _RUNTIME is None:
            _RUNTIME = build_runtime()
            logger.info("runtime_built db=%s", _RUNTIME.settings.db_path)
        return _RUNTIME
