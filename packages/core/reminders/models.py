from __future__ import annotations

from typing import List

from ..storage.base import Category, Reminder


class RecurrenceType:
    ONE_TIME = "ONE_TIME"
    HOURLY = "HOURLY"
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    ANNUAL = "ANNUAL"

    ALL = (ONE_TIME, HOURLY, DAILY, WEEKLY, MONTHLY, ANNUAL)
    RECURRING = (HOURLY, DAILY, WEEKLY, MONTHLY, ANNUAL)


class CategoryDefaults:
    WORK = "WORK"
    PERSONAL = "PERSONAL"
    HEALTH = "HEALTH"
    FINANCE = "FINANCE"


class DismissalReason:
    DISMISSED = "DISMISSED"
    AUTO_SNOOZED = "AUTO_SNOOZED"


SNOOZE_OFFSET_MINUTES = 5
SNOOZE_LIMIT = 3


def is_recurring(reminder: Reminder) -> bool:
    return (
        reminder.recurrence_type != RecurrenceType.ONE_TIME
        and reminder.recurring_group_id is not None
    )


def _preset(
    category_id: int, name: str, color_hex: str, icon_name: str, parent_id: int = 0
) -> Category:
    return Category(
        id=category_id,
        name=name,
        is_main_category=parent_id == 0,
        parent_category_id=parent_id or None,
        is_preset=True,
        color_hex=color_hex,
        icon_name=icon_name,
    )


# Main presets are named by their reminder category key so deletion and
# renaming can match on `Reminder.main_category`.
PRESET_CATEGORIES: List[Category] = [
    _preset(1, CategoryDefaults.WORK, "#1976D2", "work"),
    _preset(2, CategoryDefaults.PERSONAL, "#4CAF50", "home"),
    _preset(3, CategoryDefaults.HEALTH, "#E91E63", "health"),
    _preset(4, CategoryDefaults.FINANCE, "#FF9800", "finance"),
    _preset(11, "Call", "#1976D2", "call", parent_id=1),
    _preset(12, "Meeting", "#1976D2", "meeting", parent_id=1),
    _preset(13, "Email", "#1976D2", "email", parent_id=1),
    _preset(14, "Deadline", "#1976D2", "deadline", parent_id=1),
    _preset(15, "Report", "#1976D2", "report", parent_id=1),
    _preset(16, "Task", "#1976D2", "task", parent_id=1),
    _preset(21, "Call", "#4CAF50", "call", parent_id=2),
    _preset(22, "Errand", "#4CAF50", "errand", parent_id=2),
    _preset(23, "Appointment", "#4CAF50", "appointment", parent_id=2),
    _preset(24, "Event", "#4CAF50", "event", parent_id=2),
    _preset(25, "Social", "#4CAF50", "social", parent_id=2),
    _preset(31, "Medication", "#E91E63", "medication", parent_id=3),
    _preset(32, "Exercise", "#E91E63", "exercise", parent_id=3),
    _preset(33, "Doctor", "#E91E63", "doctor", parent_id=3),
    _preset(34, "Checkup", "#E91E63", "checkup", parent_id=3),
    _preset(35, "Therapy", "#E91E63", "therapy", parent_id=3),
    _preset(41, "Bill", "#FF9800", "bill", parent_id=4),
    _preset(42, "Payment", "#FF9800", "payment", parent_id=4),
    _preset(43, "Tax", "#FF9800", "tax", parent_id=4),
    _preset(44, "Budget", "#FF9800", "budget", parent_id=4),
    _preset(45, "Investment", "#FF9800", "investment", parent_id=4),
]
