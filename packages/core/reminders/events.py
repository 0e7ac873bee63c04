from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol, runtime_checkable


logger = logging.getLogger("reminders.events")


class ReminderEventType:
    CREATED = "CREATED"
    UPDATED = "UPDATED"
    SNOOZED = "SNOOZED"
    COMPLETED = "COMPLETED"
    SPAWNED = "SPAWNED"
    DELETED = "DELETED"
    COMPLETED_CLEARED = "COMPLETED_CLEARED"
    ALARM_FIRED = "ALARM_FIRED"
    CATEGORY_DELETED = "CATEGORY_DELETED"


@dataclass(frozen=True)
class ReminderEvent:
    kind: str
    occurred_at: int
    reminder_id: Optional[int] = None
    group_id: Optional[str] = None
    detail: Optional[str] = None


@runtime_checkable
class ReminderObserver(Protocol):
    def on_event(self, event: ReminderEvent) -> None:
        """Receive a lifecycle event after the store mutation succeeded."""


class LoggingObserver:
    def on_event(self, event: ReminderEvent) -> None:
        logger.info(
            "reminder_event kind=%s id=%s group=%s detail=%s",
            event.kind,
            event.reminder_id,
            event.group_id,
            event.detail,
        )


class EventPublisher:
    def __init__(self, observers: Optional[Iterable[ReminderObserver]] = None) -> None:
        self._observers: List[ReminderObserver] = list(observers or [])

    def subscribe(self, observer: ReminderObserver) -> None:
        self._observers.append(observer)

    def publish(self, event: ReminderEvent) -> None:
        for observer in list(self._observers):
            try:
                observer.on_event(event)
            except Exception as exc:
                logger.exception(
                    "observer_failed kind=%s id=%s error=%s", event.kind, event.reminder_id, exc
                )
