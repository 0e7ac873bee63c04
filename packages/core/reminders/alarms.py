from __future__ import annotations

import datetime as dt
import logging
import time
from typing import Callable, Optional, Protocol, runtime_checkable

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.date import DateTrigger

from ..storage.base import ReminderStore
from .events import EventPublisher, ReminderEvent, ReminderEventType
from .recurrence import from_millis, to_millis


logger = logging.getLogger("reminders.alarms")


@runtime_checkable
class AlarmPort(Protocol):
    def schedule(self, reminder_id: int, due_time: int) -> None:
        """Register (or replace) the alarm for a reminder at `due_time` epoch millis."""

    def cancel(self, reminder_id: int) -> None:
        """Drop the alarm for a reminder. Unknown ids are ignored."""


def alarm_job_id(reminder_id: int) -> str:
    return f"reminder-{reminder_id}"


class SchedulerAlarmPort(AlarmPort):
    """One APScheduler date job per reminder, keyed by reminder id.

    Jobs that come due while the process was busy (or after a late
    reconcile) still run; the firing handler re-checks the store anyway.
    """

    def __init__(self, scheduler: BaseScheduler, on_fire: Callable[[int], None]) -> None:
        self._scheduler = scheduler
        self._on_fire = on_fire

    def schedule(self, reminder_id: int, due_time: int) -> None:
        run_date = from_millis(due_time)
        self._scheduler.add_job(
            self._on_fire,
            trigger=DateTrigger(run_date=run_date, timezone=dt.timezone.utc),
            args=[reminder_id],
            id=alarm_job_id(reminder_id),
            name=f"alarm for reminder {reminder_id}",
            replace_existing=True,
            misfire_grace_time=None,
            coalesce=True,
        )
        logger.debug("alarm_scheduled id=%s due=%s", reminder_id, run_date.isoformat())

    def cancel(self, reminder_id: int) -> None:
        try:
            self._scheduler.remove_job(alarm_job_id(reminder_id))
        except JobLookupError:
            return
        logger.debug("alarm_cancelled id=%s", reminder_id)

    def scheduled_for(self, reminder_id: int) -> Optional[int]:
        job = self._scheduler.get_job(alarm_job_id(reminder_id))
        if job is None:
            return None
        return to_millis(job.trigger.run_date)


class AlarmFiringHandler:
    """Runs when an alarm fires and re-validates the reminder against the store.

    Alarms may be stale after a partial failure; the store decides whether
    the reminder is still due.
    """

    def __init__(
        self,
        store: ReminderStore,
        publisher: EventPublisher,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self._store = store
        self._publisher = publisher
        self._clock = clock or (lambda: int(time.time() * 1000))

    def handle(self, reminder_id: int) -> bool:
        reminder = self._store.get_reminder(reminder_id)
        if reminder is None or reminder.is_completed:
            logger.info("alarm_stale id=%s", reminder_id)
            return False
        logger.info("alarm_fired id=%s title=%s", reminder.id, reminder.title)
        self._publisher.publish(
            ReminderEvent(
                kind=ReminderEventType.ALARM_FIRED,
                occurred_at=self._clock(),
                reminder_id=reminder.id,
                group_id=reminder.recurring_group_id,
                detail=reminder.title,
            )
        )
        return True
