import datetime as dt
from typing import Dict, List, Tuple

import pytest

from packages.core.reminders.categories import CategoryCascadeService
from packages.core.reminders.engine import ReminderLifecycleEngine
from packages.core.reminders.events import EventPublisher, ReminderEvent
from packages.core.reminders.recurrence import to_millis
from packages.core.reminders.templates import ReminderTemplateService
from packages.core.storage.sqlite import SQLiteReminderStore


def millis(year, month, day, hour=9, minute=0):
    return to_millis(dt.datetime(year, month, day, hour, minute, tzinfo=dt.timezone.utc))


class FakeClock:
    def __init__(self, now: int) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


class RecordingAlarms:
    def __init__(self) -> None:
        self.active: Dict[int, int] = {}
        self.calls: List[Tuple[str, int]] = []

    def schedule(self, reminder_id: int, due_time: int) -> None:
        self.calls.append(("schedule", reminder_id))
        self.active[reminder_id] = due_time

    def cancel(self, reminder_id: int) -> None:
        self.calls.append(("cancel", reminder_id))
        self.active.pop(reminder_id, None)


class RecordingObserver:
    def __init__(self) -> None:
        self.events: List[ReminderEvent] = []

    def on_event(self, event: ReminderEvent) -> None:
        self.events.append(event)

    def kinds(self) -> List[str]:
        return [event.kind for event in self.events]


@pytest.fixture
def clock():
    return FakeClock(millis(2026, 1, 10))


@pytest.fixture
def store(tmp_path):
    return SQLiteReminderStore(db_path=str(tmp_path / "reminders.db"))


@pytest.fixture
def alarms():
    return RecordingAlarms()


@pytest.fixture
def observer():
    return RecordingObserver()


@pytest.fixture
def engine(store, alarms, observer, clock):
    return ReminderLifecycleEngine(
        store, alarms, publisher=EventPublisher([observer]), clock=clock
    )


@pytest.fixture
def category_service(engine, store):
    return CategoryCascadeService(engine, store, store, templates=store)


@pytest.fixture
def template_service(engine, store):
    return ReminderTemplateService(engine, store)
