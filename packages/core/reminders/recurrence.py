from __future__ import annotations

import datetime as dt
from typing import Optional

from dateutil.relativedelta import relativedelta

from .models import RecurrenceType

_EPOCH = dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc)
_MILLISECOND = dt.timedelta(milliseconds=1)


def from_millis(value: int, tz: dt.tzinfo = dt.timezone.utc) -> dt.datetime:
    return (_EPOCH + dt.timedelta(milliseconds=value)).astimezone(tz)


def to_millis(value: dt.datetime) -> int:
    return (value - _EPOCH) // _MILLISECOND


def _calendar_step(
    recurrence_type: str, interval: int, day_of_month: Optional[int]
) -> relativedelta:
    if recurrence_type == RecurrenceType.DAILY:
        return relativedelta(days=interval)
    if recurrence_type == RecurrenceType.WEEKLY:
        return relativedelta(weeks=interval)
    if recurrence_type == RecurrenceType.MONTHLY:
        # relativedelta clamps `day` to the last day of the resulting month.
        return relativedelta(months=interval, day=day_of_month)
    return relativedelta(years=interval)


def next_occurrence(
    current_date_time: int,
    recurrence_type: str,
    interval: int = 1,
    day_of_month: Optional[int] = None,
    tz: dt.tzinfo = dt.timezone.utc,
) -> int:
    """Return the due time (epoch millis) following `current_date_time`.

    HOURLY adds elapsed hours. The other rules shift wall-clock fields in
    `tz`, so a daily 09:00 reminder stays at 09:00 across DST changes.
    MONTHLY clamps the day (or `day_of_month` when given) to the length of
    the resulting month; ANNUAL moves Feb 29 to Feb 28 in common years.

    Raises ValueError for ONE_TIME, unknown types and non-positive intervals.
    """
    if recurrence_type not in RecurrenceType.RECURRING:
        raise ValueError(f"Not a recurring type: {recurrence_type}")
    if interval < 1:
        raise ValueError(f"Recurrence interval must be positive, got {interval}")

    if recurrence_type == RecurrenceType.HOURLY:
        return current_date_time + interval * 60 * 60 * 1000

    local = from_millis(current_date_time, tz).replace(tzinfo=None)
    shifted = local + _calendar_step(recurrence_type, interval, day_of_month)
    return to_millis(shifted.replace(tzinfo=tz))
