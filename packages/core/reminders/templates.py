from __future__ import annotations

import logging
from typing import List, Optional

from ..storage.base import Reminder, Template, TemplateStore
from .engine import ReminderLifecycleEngine
from .models import RecurrenceType


logger = logging.getLogger("reminders.templates")


class ReminderTemplateService:
    """Saved reminder presets. Reminders made from a template go through the engine."""

    def __init__(self, engine: ReminderLifecycleEngine, templates: TemplateStore) -> None:
        self._engine = engine
        self._templates = templates

    def save_as_template(
        self,
        name: str,
        title: str,
        main_category: str,
        notes: str = "",
        sub_category: Optional[str] = None,
        recurrence_type: str = RecurrenceType.ONE_TIME,
        recurrence_interval: int = 1,
        is_voice_enabled: bool = True,
        created_at: Optional[int] = None,
    ) -> Template:
        name = name.strip()
        title = title.strip()
        if not name or not title:
            raise ValueError("Template name and title are required")
        if recurrence_type not in RecurrenceType.ALL:
            raise ValueError(f"Unknown recurrence type: {recurrence_type}")
        if recurrence_interval < 1:
            raise ValueError(f"Recurrence interval must be positive, got {recurrence_interval}")

        template = Template(
            name=name,
            title=title,
            notes=notes.strip(),
            main_category=main_category,
            sub_category=sub_category,
            recurrence_type=recurrence_type,
            recurrence_interval=recurrence_interval,
            is_voice_enabled=is_voice_enabled,
            created_at=created_at if created_at is not None else self._engine.now(),
        )
        template_id = self._templates.insert_template(template)
        logger.info("template_saved id=%s name=%s", template_id, name)
        return Template(**{**template.__dict__, "id": template_id})

    def create_reminder(self, template_id: int, date_time: int) -> Optional[Reminder]:
        template = self._templates.get_template(template_id)
        if template is None:
            logger.debug("template_missing id=%s", template_id)
            return None
        reminder = self._engine.add(
            title=template.title,
            date_time=date_time,
            notes=template.notes,
            recurrence_type=template.recurrence_type,
            recurrence_interval=template.recurrence_interval,
            main_category=template.main_category,
            sub_category=template.sub_category,
            is_voice_enabled=template.is_voice_enabled,
        )
        self._templates.record_template_use(template.id, self._engine.now())
        logger.info("template_used id=%s reminder=%s", template.id, reminder.id)
        return reminder

    def update_template(self, template: Template) -> Optional[Template]:
        if self._templates.get_template(template.id) is None:
            return None
        if template.recurrence_type not in RecurrenceType.ALL:
            raise ValueError(f"Unknown recurrence type: {template.recurrence_type}")
        updated = Template(
            **{**template.__dict__, "name": template.name.strip(), "title": template.title.strip()}
        )
        self._templates.update_template(updated)
        return self._templates.get_template(template.id)

    def delete_template(self, template_id: int) -> bool:
        return self._templates.delete_template(template_id) > 0

    def delete_all_templates(self) -> int:
        removed = self._templates.delete_all_templates()
        logger.info("templates_cleared count=%s", removed)
        return removed

    def search(self, query: str) -> List[Template]:
        query = query.strip()
        if not query:
            return self._templates.list_templates()
        return self._templates.search_templates(query)
