from __future__ import annotations

import logging
from typing import List, Optional

from ..storage.base import Category, CategoryStore, Reminder, ReminderStore, TemplateStore
from .engine import ReminderLifecycleEngine
from .events import ReminderEventType
from .models import PRESET_CATEGORIES


logger = logging.getLogger("reminders.categories")


class CategoryCascadeService:
    """Category CRUD plus the cascade onto reminders and templates filed under it."""

    def __init__(
        self,
        engine: ReminderLifecycleEngine,
        reminders: ReminderStore,
        categories: CategoryStore,
        templates: Optional[TemplateStore] = None,
    ) -> None:
        self._engine = engine
        self._reminders = reminders
        self._categories = categories
        self._templates = templates

    def seed_presets(self) -> int:
        if self._categories.count_categories() > 0:
            return 0
        for category in PRESET_CATEGORIES:
            self._categories.insert_category(category)
        logger.info("preset_categories_seeded count=%s", len(PRESET_CATEGORIES))
        return len(PRESET_CATEGORIES)

    def add_category(
        self,
        name: str,
        is_main_category: bool,
        parent_category_id: Optional[int] = None,
        color_hex: str = "#6200EE",
        icon_name: str = "custom",
    ) -> Category:
        name = name.strip()
        if not name:
            raise ValueError("Category name is required")
        if not is_main_category:
            parent = (
                self._categories.get_category(parent_category_id)
                if parent_category_id is not None
                else None
            )
            if parent is None or not parent.is_main_category:
                raise ValueError(f"Parent category not found: {parent_category_id}")
        else:
            parent_category_id = None

        category = Category(
            name=name,
            is_main_category=is_main_category,
            parent_category_id=parent_category_id,
            is_preset=False,
            color_hex=color_hex,
            icon_name=icon_name,
        )
        category_id = self._categories.insert_category(category)
        logger.info("category_added id=%s name=%s", category_id, name)
        return Category(**{**category.__dict__, "id": category_id})

    def update_category(self, category: Category) -> Optional[Category]:
        """Save edits to a custom category.

        Renaming a main category moves every reminder and template filed
        under the old name to the new one. Presets are left untouched.
        """
        existing = self._categories.get_category(category.id)
        if existing is None or existing.is_preset:
            return None

        updated = Category(**{**category.__dict__, "is_preset": False})
        self._categories.update_category(updated)
        if existing.is_main_category and existing.name != updated.name:
            moved = 0
            for reminder in self._reminders.list_reminders_in_category(existing.name):
                if self._engine.recategorize(reminder.id, updated.name) is not None:
                    moved += 1
            if self._templates is not None:
                self._templates.recategorize_templates(existing.name, updated.name)
            logger.info(
                "category_renamed id=%s old=%s new=%s reminders=%s",
                updated.id,
                existing.name,
                updated.name,
                moved,
            )
        return updated

    def delete_category(self, category: Category, move_to_uncategorized: bool) -> bool:
        """Delete a custom category and cascade onto its reminders.

        With `move_to_uncategorized` the reminders and templates are re-filed
        under the default category. Otherwise the reminders are deleted
        through the engine so no alarm outlives its reminder, and the
        templates are dropped. Returns False for presets, which are never
        deleted.
        """
        if category.is_preset:
            logger.debug("category_delete_rejected_preset id=%s", category.id)
            return False

        affected: List[Reminder] = self._reminders.list_reminders_in_category(category.name)
        default_category = self._engine.settings.default_category
        for reminder in affected:
            if move_to_uncategorized:
                self._engine.recategorize(reminder.id, default_category, clear_sub_category=True)
            else:
                self._engine.delete(reminder)
        if self._templates is not None:
            if move_to_uncategorized:
                self._templates.recategorize_templates(
                    category.name, default_category, clear_sub_category=True
                )
            else:
                self._templates.delete_templates_in_category(category.name)

        self._categories.delete_category(category.id)
        logger.info(
            "category_deleted id=%s name=%s reminders=%s moved=%s",
            category.id,
            category.name,
            len(affected),
            move_to_uncategorized,
        )
        self._engine.publish(ReminderEventType.CATEGORY_DELETED, detail=category.name)
        return True

    def reminder_count(self, category_name: str) -> int:
        return self._reminders.count_active_in_category(category_name)
