from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Protocol, runtime_checkable

from .live import LiveQuery


@dataclass(frozen=True)
class Reminder:
    title: str
    date_time: int
    id: int = 0
    notes: str = ""
    is_completed: bool = False
    completed_at: Optional[int] = None
    dismissal_reason: Optional[str] = None
    snooze_count: int = 0
    is_voice_enabled: bool = True
    recurrence_type: str = "ONE_TIME"
    recurrence_interval: int = 1
    recurrence_day_of_week: Optional[int] = None
    recurrence_day_of_month: Optional[int] = None
    recurring_group_id: Optional[str] = None
    main_category: str = "PERSONAL"
    sub_category: Optional[str] = None
    created_at: int = 0
    updated_at: int = 0


@dataclass(frozen=True)
class Category:
    name: str
    is_main_category: bool
    is_preset: bool
    id: int = 0
    parent_category_id: Optional[int] = None
    color_hex: str = "#6200EE"
    icon_name: str = "custom"


@dataclass(frozen=True)
class Template:
    name: str
    title: str
    main_category: str
    id: int = 0
    notes: str = ""
    sub_category: Optional[str] = None
    recurrence_type: str = "ONE_TIME"
    recurrence_interval: int = 1
    is_voice_enabled: bool = True
    usage_count: int = 0
    last_used_at: Optional[int] = None
    created_at: int = 0


@runtime_checkable
class ReminderStore(Protocol):
    def insert_reminder(self, reminder: Reminder) -> int:
        """Persist a new reminder. Returns the assigned id."""

    def update_reminder(self, reminder: Reminder) -> None:
        """Overwrite an existing reminder by id."""

    def delete_reminder(self, reminder_id: int) -> None:
        """Delete a reminder. Missing ids are ignored."""

    def get_reminder(self, reminder_id: int) -> Optional[Reminder]:
        """Return reminder by id."""

    def list_future_in_group(self, group_id: str, since: int) -> List[Reminder]:
        """Group members due at or after `since`, oldest first."""

    def update_future_in_group(
        self,
        group_id: str,
        since: int,
        title: str,
        notes: str,
        main_category: str,
        sub_category: Optional[str],
        exclude_id: Optional[int] = None,
    ) -> int:
        """Copy content fields onto future group members. Returns rows touched."""

    def delete_future_in_group(self, group_id: str, since: int, exclude_id: int) -> int:
        """Delete future group members except `exclude_id`. Returns rows deleted."""

    def set_snooze_count(self, reminder_id: int, count: int) -> None:
        """Set the snooze counter."""

    def mark_completed(
        self, reminder_id: int, completed: bool, completed_at: Optional[int], reason: Optional[str]
    ) -> None:
        """Stamp completion fields."""

    def clear_completed(self) -> int:
        """Delete every completed reminder. Returns rows deleted."""

    def list_reminders(
        self,
        completed: bool,
        main_category: Optional[str] = None,
        recurrence_type: Optional[str] = None,
    ) -> List[Reminder]:
        """Active reminders by due time, or completed ones by completion time."""

    def list_reminders_in_category(self, main_category: str) -> List[Reminder]:
        """Active and completed reminders with this main category."""

    def count_active_in_category(self, main_category: str) -> int:
        """Number of active reminders with this main category."""

    def count_active_in_group(self, group_id: str) -> int:
        """Number of active reminders carrying this group token."""

    def observe_reminders(
        self,
        completed: bool,
        main_category: Optional[str] = None,
        recurrence_type: Optional[str] = None,
    ) -> LiveQuery[Reminder]:
        """Live version of list_reminders, re-emitted after every write."""


@runtime_checkable
class CategoryStore(Protocol):
    def insert_category(self, category: Category) -> int:
        """Persist a category. Returns the id (kept when non-zero)."""

    def update_category(self, category: Category) -> None:
        """Overwrite a category by id."""

    def delete_category(self, category_id: int) -> None:
        """Delete a category."""

    def get_category(self, category_id: int) -> Optional[Category]:
        """Return category by id."""

    def get_category_by_name(self, name: str, is_main: bool) -> Optional[Category]:
        """Return category by name and main flag."""

    def list_categories(self) -> List[Category]:
        """Main categories first, then by name."""

    def list_main_categories(self) -> List[Category]:
        """Main categories by name."""

    def list_subcategories(self, parent_id: int) -> List[Category]:
        """Subcategories of a main category."""

    def list_custom_categories(self) -> List[Category]:
        """Non-preset categories."""

    def count_categories(self) -> int:
        """Total number of categories."""

    def observe_categories(self) -> LiveQuery[Category]:
        """Live version of list_categories."""


@runtime_checkable
class TemplateStore(Protocol):
    def insert_template(self, template: Template) -> int:
        """Persist a template. Returns the assigned id."""

    def update_template(self, template: Template) -> None:
        """Overwrite a template by id."""

    def delete_template(self, template_id: int) -> int:
        """Delete a template. Returns rows deleted."""

    def delete_all_templates(self) -> int:
        """Delete every template. Returns rows deleted."""

    def get_template(self, template_id: int) -> Optional[Template]:
        """Return template by id."""

    def list_templates(self, order_by: str = "usage") -> List[Template]:
        """All templates, most used first ("usage") or alphabetical ("name")."""

    def list_templates_in_category(self, main_category: str) -> List[Template]:
        """Templates with this main category, most used first."""

    def search_templates(self, query: str) -> List[Template]:
        """Templates whose name or title contains `query`, most used first."""

    def list_most_used_templates(self, limit: int = 5) -> List[Template]:
        """Top templates by usage count."""

    def list_recently_used_templates(self, limit: int = 5) -> List[Template]:
        """Templates used at least once, latest use first."""

    def count_templates(self) -> int:
        """Total number of templates."""

    def record_template_use(self, template_id: int, used_at: int) -> None:
        """Bump the usage counter and stamp the last use."""

    def recategorize_templates(
        self, old_category: str, new_category: str, clear_sub_category: bool = False
    ) -> int:
        """Move templates between main categories. Returns rows touched."""

    def delete_templates_in_category(self, main_category: str) -> int:
        """Delete templates with this main category. Returns rows deleted."""

    def observe_templates(self) -> LiveQuery[Template]:
        """Live version of list_templates."""
