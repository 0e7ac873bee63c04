from __future__ import annotations

import logging
import time
import uuid
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from ..storage.base import Reminder, ReminderStore
from .alarms import AlarmPort
from .config import EngineSettings
from .events import EventPublisher, ReminderEvent, ReminderEventType
from .locks import KeyedLocks
from .models import DismissalReason, RecurrenceType, is_recurring
from .recurrence import next_occurrence


logger = logging.getLogger("reminders.engine")


def _epoch_millis() -> int:
    return int(time.time() * 1000)


def _group_key(group_id: str) -> str:
    return f"group:{group_id}"


class ReminderLifecycleEngine:
    """The write surface for reminders.

    Every operation keeps the store and the alarm port in step: alarms are
    cancelled before a mutation and registered after it, so an interrupted
    operation leaves at most a stale alarm, never a missing one. Calls on the
    same reminder id are serialized, and changes that touch a recurring group
    are serialized on the group as well.
    """

    def __init__(
        self,
        store: ReminderStore,
        alarms: AlarmPort,
        publisher: Optional[EventPublisher] = None,
        settings: Optional[EngineSettings] = None,
        clock: Optional[Callable[[], int]] = None,
        locks: Optional[KeyedLocks] = None,
    ) -> None:
        self._store = store
        self._alarms = alarms
        self._publisher = publisher or EventPublisher()
        self._settings = settings or EngineSettings()
        self._clock = clock or _epoch_millis
        self._locks = locks or KeyedLocks()
        self._tz = self._settings.tzinfo()

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    def now(self) -> int:
        return self._clock()

    @contextmanager
    def _serialized(self, reminder_id: int) -> Iterator[None]:
        # Lock order is always group, then id. A group token never changes
        # once minted, so reading it before locking is safe.
        current = self._store.get_reminder(reminder_id)
        group_id = current.recurring_group_id if current is not None else None
        if group_id is None:
            with self._locks.hold(reminder_id):
                yield
            return
        with self._locks.hold(_group_key(group_id)):
            with self._locks.hold(reminder_id):
                yield

    def publish(self, kind: str, reminder: Optional[Reminder] = None, detail: Optional[str] = None) -> None:
        self._publisher.publish(
            ReminderEvent(
                kind=kind,
                occurred_at=self._clock(),
                reminder_id=reminder.id if reminder else None,
                group_id=reminder.recurring_group_id if reminder else None,
                detail=detail,
            )
        )

    def add(
        self,
        title: str,
        date_time: int,
        notes: str = "",
        recurrence_type: str = RecurrenceType.ONE_TIME,
        recurrence_interval: int = 1,
        recurrence_day_of_week: Optional[int] = None,
        recurrence_day_of_month: Optional[int] = None,
        main_category: Optional[str] = None,
        sub_category: Optional[str] = None,
        is_voice_enabled: bool = True,
    ) -> Reminder:
        if recurrence_type not in RecurrenceType.ALL:
            raise ValueError(f"Unknown recurrence type: {recurrence_type}")
        if recurrence_interval < 1:
            raise ValueError(f"Recurrence interval must be positive, got {recurrence_interval}")

        now = self._clock()
        group_id = None
        if recurrence_type != RecurrenceType.ONE_TIME:
            group_id = str(uuid.uuid4())

        reminder = Reminder(
            title=title.strip(),
            notes=notes.strip(),
            date_time=date_time,
            is_voice_enabled=is_voice_enabled,
            recurrence_type=recurrence_type,
            recurrence_interval=recurrence_interval,
            recurrence_day_of_week=recurrence_day_of_week,
            recurrence_day_of_month=recurrence_day_of_month,
            recurring_group_id=group_id,
            main_category=main_category or self._settings.default_category,
            sub_category=sub_category,
            created_at=now,
            updated_at=now,
        )
        reminder_id = self._store.insert_reminder(reminder)
        saved = Reminder(**{**reminder.__dict__, "id": reminder_id})
        self._alarms.schedule(saved.id, saved.date_time)
        logger.info(
            "reminder_added id=%s type=%s group=%s", saved.id, saved.recurrence_type, group_id
        )
        self.publish(ReminderEventType.CREATED, saved)
        return saved

    def update(
        self,
        reminder_id: int,
        title: str,
        notes: str,
        date_time: int,
        main_category: str,
        sub_category: Optional[str],
    ) -> Optional[Reminder]:
        with self._serialized(reminder_id):
            existing = self._store.get_reminder(reminder_id)
            if existing is None:
                logger.debug("reminder_update_missing id=%s", reminder_id)
                return None

            self._alarms.cancel(existing.id)

            title = title.strip()
            notes = notes.strip()
            now = self._clock()
            if existing.recurring_group_id is not None:
                touched = self._store.update_future_in_group(
                    existing.recurring_group_id,
                    now,
                    title=title,
                    notes=notes,
                    main_category=main_category,
                    sub_category=sub_category,
                    exclude_id=existing.id,
                )
                logger.info(
                    "group_future_updated group=%s count=%s", existing.recurring_group_id, touched
                )

            updated = Reminder(
                **{
                    **existing.__dict__,
                    "title": title,
                    "notes": notes,
                    "date_time": date_time,
                    "main_category": main_category,
                    "sub_category": sub_category,
                    "updated_at": now,
                }
            )
            self._store.update_reminder(updated)

            # Completed instances never hold an alarm.
            if not updated.is_completed:
                self._alarms.schedule(updated.id, updated.date_time)
            self.publish(ReminderEventType.UPDATED, updated)
            return updated

    def recategorize(
        self, reminder_id: int, main_category: str, clear_sub_category: bool = False
    ) -> Optional[Reminder]:
        """File a reminder under another main category. Due time and alarm are kept."""
        with self._serialized(reminder_id):
            existing = self._store.get_reminder(reminder_id)
            if existing is None:
                return None
            updated = Reminder(
                **{
                    **existing.__dict__,
                    "main_category": main_category,
                    "sub_category": None if clear_sub_category else existing.sub_category,
                    "updated_at": self._clock(),
                }
            )
            self._store.update_reminder(updated)
            return updated

    def delete(self, reminder: Reminder) -> None:
        with self._serialized(reminder.id):
            self._alarms.cancel(reminder.id)
            self._store.delete_reminder(reminder.id)
        logger.info("reminder_deleted id=%s", reminder.id)
        self.publish(ReminderEventType.DELETED, reminder)

    def delete_with_recurrence_check(self, reminder: Reminder, delete_all_future: bool) -> int:
        """Delete a reminder and, optionally, every later member of its group.

        Members go one at a time through `delete` while the group is held, so
        no successor can be spawned into the group mid-cascade. Returns the
        number of group members removed besides `reminder`.
        """
        group_id = reminder.recurring_group_id
        if not delete_all_future or group_id is None:
            self.delete(reminder)
            return 0

        removed = 0
        with self._locks.hold(_group_key(group_id)):
            for member in self._store.list_future_in_group(group_id, self._clock()):
                if member.id == reminder.id:
                    continue
                self.delete(member)
                removed += 1
            self.delete(reminder)
        logger.info("group_future_deleted group=%s count=%s", group_id, removed)
        return removed

    def mark_completed(
        self,
        reminder_id: int,
        is_completed: bool = True,
        reason: Optional[str] = DismissalReason.DISMISSED,
    ) -> Optional[Reminder]:
        """Complete (or reopen) a reminder.

        Completing a recurring reminder spawns its next occurrence. Completing
        an already-completed reminder does nothing, so a group never gets two
        successors for one occurrence. Reopening clears the dismissal reason.
        """
        with self._serialized(reminder_id):
            reminder = self._store.get_reminder(reminder_id)
            if reminder is None:
                logger.debug("reminder_complete_missing id=%s", reminder_id)
                return None
            if is_completed and reminder.is_completed:
                logger.debug("reminder_already_completed id=%s", reminder_id)
                return reminder

            self._alarms.cancel(reminder.id)

            now = self._clock()
            completed_at = now if is_completed else None
            reason = reason if is_completed else None
            self._store.mark_completed(reminder.id, is_completed, completed_at, reason)
            updated = Reminder(
                **{
                    **reminder.__dict__,
                    "is_completed": is_completed,
                    "completed_at": completed_at,
                    "dismissal_reason": reason,
                }
            )

            if not is_completed:
                self._alarms.schedule(updated.id, updated.date_time)
                logger.info("reminder_reopened id=%s", updated.id)
                self.publish(ReminderEventType.UPDATED, updated)
                return updated

            logger.info("reminder_completed id=%s reason=%s", updated.id, reason)
            self.publish(ReminderEventType.COMPLETED, updated, detail=reason)
            if is_recurring(reminder):
                self._spawn_next_occurrence(reminder)
            return updated

    def snooze(self, reminder_id: int) -> Optional[Reminder]:
        with self._serialized(reminder_id):
            reminder = self._store.get_reminder(reminder_id)
            if reminder is None:
                logger.debug("reminder_snooze_missing id=%s", reminder_id)
                return None
            if reminder.is_completed:
                logger.debug("reminder_snooze_completed id=%s", reminder_id)
                return reminder

            count = reminder.snooze_count + 1
            if count >= self._settings.snooze_limit:
                logger.info("reminder_snooze_exhausted id=%s", reminder_id)
                return self.mark_completed(reminder_id, True, DismissalReason.AUTO_SNOOZED)

            offset = self._settings.snooze_minutes * 60 * 1000
            updated = Reminder(
                **{
                    **reminder.__dict__,
                    "date_time": reminder.date_time + offset,
                    "snooze_count": count,
                    "updated_at": self._clock(),
                }
            )
            self._store.update_reminder(updated)
            self._alarms.schedule(updated.id, updated.date_time)
            logger.info("reminder_snoozed id=%s count=%s", updated.id, count)
            self.publish(ReminderEventType.SNOOZED, updated, detail=str(count))
            return updated

    def _spawn_next_occurrence(self, completed: Reminder) -> Reminder:
        # Anchored to the scheduled time, so late completion does not drift.
        next_date_time = next_occurrence(
            completed.date_time,
            completed.recurrence_type,
            completed.recurrence_interval,
            completed.recurrence_day_of_month,
            tz=self._tz,
        )
        now = self._clock()
        successor = Reminder(
            **{
                **completed.__dict__,
                "id": 0,
                "date_time": next_date_time,
                "is_completed": False,
                "completed_at": None,
                "dismissal_reason": None,
                "snooze_count": 0,
                "created_at": now,
                "updated_at": now,
            }
        )
        with self._locks.hold(_group_key(completed.recurring_group_id)):
            new_id = self._store.insert_reminder(successor)
            saved = Reminder(**{**successor.__dict__, "id": new_id})
            self._alarms.schedule(saved.id, saved.date_time)
        logger.info(
            "next_occurrence_spawned id=%s from=%s group=%s",
            saved.id,
            completed.id,
            saved.recurring_group_id,
        )
        self.publish(ReminderEventType.SPAWNED, saved)
        return saved

    def clear_all_completed(self) -> int:
        removed = self._store.clear_completed()
        logger.info("completed_cleared count=%s", removed)
        self.publish(ReminderEventType.COMPLETED_CLEARED, detail=str(removed))
        return removed

    def reconcile_alarms(self) -> int:
        """Re-register alarms for every active reminder still due in the future."""
        now = self._clock()
        scheduled = 0
        for listed in self._store.list_reminders(completed=False):
            if listed.date_time <= now:
                continue
            with self._serialized(listed.id):
                reminder = self._store.get_reminder(listed.id)
                if reminder is None or reminder.is_completed or reminder.date_time <= now:
                    continue
                self._alarms.schedule(reminder.id, reminder.date_time)
            scheduled += 1
        logger.info("alarms_reconciled count=%s", scheduled)
        return scheduled
