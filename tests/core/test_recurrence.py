import datetime as dt
from zoneinfo import ZoneInfo

import pytest

from packages.core.reminders.recurrence import from_millis, next_occurrence, to_millis


def _ms(year, month, day, hour=9, minute=0, tz=dt.timezone.utc):
    return to_millis(dt.datetime(year, month, day, hour, minute, tzinfo=tz))


def test_hourly_adds_elapsed_hours():
    assert next_occurrence(_ms(2026, 3, 1, 23), "HOURLY", 2) == _ms(2026, 3, 2, 1)


def test_daily_crosses_month_and_year_boundaries():
    assert next_occurrence(_ms(2026, 1, 30), "DAILY", 3) == _ms(2026, 2, 2)
    assert next_occurrence(_ms(2026, 12, 30), "DAILY", 3) == _ms(2027, 1, 2)


def test_weekly_adds_whole_weeks():
    assert next_occurrence(_ms(2026, 2, 25), "WEEKLY", 2) == _ms(2026, 3, 11)


@pytest.mark.parametrize(
    "base, expected",
    [
        ((2026, 1, 31), (2026, 2, 28)),
        ((2028, 1, 31), (2028, 2, 29)),
        ((2026, 3, 31), (2026, 4, 30)),
        ((2026, 7, 31), (2026, 8, 31)),
    ],
)
def test_monthly_clamps_target_day_to_month_length(base, expected):
    assert next_occurrence(_ms(*base), "MONTHLY", 1, day_of_month=31) == _ms(*expected)


def test_monthly_target_day_recovers_after_short_month():
    february = next_occurrence(_ms(2026, 1, 31), "MONTHLY", 1, day_of_month=31)
    assert next_occurrence(february, "MONTHLY", 1, day_of_month=31) == _ms(2026, 3, 31)


def test_monthly_without_target_keeps_day_and_clamps():
    assert next_occurrence(_ms(2026, 1, 15), "MONTHLY", 1) == _ms(2026, 2, 15)
    assert next_occurrence(_ms(2026, 1, 31), "MONTHLY", 1) == _ms(2026, 2, 28)


def test_monthly_interval_crosses_year():
    assert next_occurrence(_ms(2026, 11, 10), "MONTHLY", 3, day_of_month=10) == _ms(2027, 2, 10)


def test_annual_moves_leap_day_to_feb_28():
    assert next_occurrence(_ms(2028, 2, 29), "ANNUAL", 1) == _ms(2029, 2, 28)
    assert next_occurrence(_ms(2026, 6, 1), "ANNUAL", 2) == _ms(2028, 6, 1)


def test_daily_keeps_wall_clock_time_across_dst():
    zone = ZoneInfo("America/New_York")
    before = _ms(2026, 3, 7, 9, tz=zone)
    after = next_occurrence(before, "DAILY", 1, tz=zone)
    assert from_millis(after, zone).hour == 9
    assert after - before == 23 * 60 * 60 * 1000


def test_preserves_milliseconds():
    base = _ms(2026, 1, 1) + 123
    assert next_occurrence(base, "DAILY", 1) == _ms(2026, 1, 2) + 123


@pytest.mark.parametrize("recurrence_type", ["ONE_TIME", "FORTNIGHTLY"])
def test_non_recurring_type_fails_fast(recurrence_type):
    with pytest.raises(ValueError):
        next_occurrence(_ms(2026, 1, 1), recurrence_type, 1)


def test_non_positive_interval_fails_fast():
    with pytest.raises(ValueError):
        next_occurrence(_ms(2026, 1, 1), "DAILY", 0)
