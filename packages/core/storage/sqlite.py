from __future__ import annotations

import os
import sqlite3
from typing import Any, List, Optional, Sequence, Tuple

from .base import Category, CategoryStore, Reminder, ReminderStore, Template, TemplateStore
from .live import LiveQuery, LiveQueryRegistry

_REMINDER_COLUMNS = (
    "id, title, notes, date_time, is_completed, completed_at, dismissal_reason, "
    "snooze_count, is_voice_enabled, recurrence_type, recurrence_interval, "
    "recurrence_day_of_week, recurrence_day_of_month, recurring_group_id, "
    "main_category, sub_category, created_at, updated_at"
)

_CATEGORY_COLUMNS = (
    "id, name, is_main_category, parent_category_id, is_preset, color_hex, icon_name"
)

_TEMPLATE_COLUMNS = (
    "id, name, title, notes, main_category, sub_category, recurrence_type, "
    "recurrence_interval, is_voice_enabled, usage_count, last_used_at, created_at"
)

_TEMPLATE_ORDER = {
    "usage": "usage_count DESC, name ASC",
    "name": "name ASC",
}


def _row_to_reminder(row: Sequence[Any]) -> Reminder:
    return Reminder(
        id=row[0],
        title=row[1],
        notes=row[2] or "",
        date_time=row[3],
        is_completed=bool(row[4]),
        completed_at=row[5],
        dismissal_reason=row[6],
        snooze_count=row[7],
        is_voice_enabled=bool(row[8]),
        recurrence_type=row[9],
        recurrence_interval=row[10],
        recurrence_day_of_week=row[11],
        recurrence_day_of_month=row[12],
        recurring_group_id=row[13],
        main_category=row[14],
        sub_category=row[15],
        created_at=row[16],
        updated_at=row[17],
    )


def _row_to_category(row: Sequence[Any]) -> Category:
    return Category(
        id=row[0],
        name=row[1],
        is_main_category=bool(row[2]),
        parent_category_id=row[3],
        is_preset=bool(row[4]),
        color_hex=row[5],
        icon_name=row[6],
    )


def _row_to_template(row: Sequence[Any]) -> Template:
    return Template(
        id=row[0],
        name=row[1],
        title=row[2],
        notes=row[3] or "",
        main_category=row[4],
        sub_category=row[5],
        recurrence_type=row[6],
        recurrence_interval=row[7],
        is_voice_enabled=bool(row[8]),
        usage_count=row[9],
        last_used_at=row[10],
        created_at=row[11],
    )


class SQLiteReminderStore(ReminderStore, CategoryStore, TemplateStore):
    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        directory = os.path.dirname(db_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self._live = LiveQueryRegistry()
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self._db_path)

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS reminders (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    notes TEXT NOT NULL DEFAULT '',
                    date_time INTEGER NOT NULL,
                    is_completed INTEGER NOT NULL DEFAULT 0,
                    completed_at INTEGER,
                    dismissal_reason TEXT,
                    snooze_count INTEGER NOT NULL DEFAULT 0,
                    is_voice_enabled INTEGER NOT NULL DEFAULT 1,
                    recurrence_type TEXT NOT NULL DEFAULT 'ONE_TIME',
                    recurrence_interval INTEGER NOT NULL DEFAULT 1,
                    recurrence_day_of_week INTEGER,
                    recurrence_day_of_month INTEGER,
                    recurring_group_id TEXT,
                    main_category TEXT NOT NULL DEFAULT 'PERSONAL',
                    sub_category TEXT,
                    created_at INTEGER NOT NULL DEFAULT 0,
                    updated_at INTEGER NOT NULL DEFAULT 0
                )
                """
            )
            conn.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_reminders_active
                ON reminders (is_completed, date_time)
                """
            )
            conn.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_reminders_group
                ON reminders (recurring_group_id, date_time)
                """
            )
            conn.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_reminders_category
                ON reminders (main_category)
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS categories (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    is_main_category INTEGER NOT NULL,
                    parent_category_id INTEGER,
                    is_preset INTEGER NOT NULL,
                    color_hex TEXT NOT NULL,
                    icon_name TEXT NOT NULL
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS templates (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    title TEXT NOT NULL,
                    notes TEXT NOT NULL DEFAULT '',
                    main_category TEXT NOT NULL,
                    sub_category TEXT,
                    recurrence_type TEXT NOT NULL DEFAULT 'ONE_TIME',
                    recurrence_interval INTEGER NOT NULL DEFAULT 1,
                    is_voice_enabled INTEGER NOT NULL DEFAULT 1,
                    usage_count INTEGER NOT NULL DEFAULT 0,
                    last_used_at INTEGER,
                    created_at INTEGER NOT NULL DEFAULT 0
                )
                """
            )

    def _write(self, sql: str, params: Tuple[Any, ...] = ()) -> int:
        with self._connect() as conn:
            cur = conn.execute(sql, params)
            rowcount = cur.rowcount
        self._live.notify()
        return rowcount

    def _select_reminders(self, where: str, params: Tuple[Any, ...], order_by: str) -> List[Reminder]:
        with self._connect() as conn:
            rows = conn.execute(
                f"SELECT {_REMINDER_COLUMNS} FROM reminders WHERE {where} ORDER BY {order_by}",
                params,
            ).fetchall()
        return [_row_to_reminder(row) for row in rows]

    def _select_categories(self, where: str, params: Tuple[Any, ...], order_by: str) -> List[Category]:
        with self._connect() as conn:
            rows = conn.execute(
                f"SELECT {_CATEGORY_COLUMNS} FROM categories WHERE {where} ORDER BY {order_by}",
                params,
            ).fetchall()
        return [_row_to_category(row) for row in rows]

    def _select_templates(self, where: str, params: Tuple[Any, ...], order_by: str) -> List[Template]:
        with self._connect() as conn:
            rows = conn.execute(
                f"SELECT {_TEMPLATE_COLUMNS} FROM templates WHERE {where} ORDER BY {order_by}",
                params,
            ).fetchall()
        return [_row_to_template(row) for row in rows]

    # Reminders

    def insert_reminder(self, reminder: Reminder) -> int:
        with self._connect() as conn:
            cur = conn.execute(
                """
                INSERT INTO reminders (
                    title, notes, date_time, is_completed, completed_at, dismissal_reason,
                    snooze_count, is_voice_enabled, recurrence_type, recurrence_interval,
                    recurrence_day_of_week, recurrence_day_of_month, recurring_group_id,
                    main_category, sub_category, created_at, updated_at
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    reminder.title,
                    reminder.notes,
                    reminder.date_time,
                    1 if reminder.is_completed else 0,
                    reminder.completed_at,
                    reminder.dismissal_reason,
                    reminder.snooze_count,
                    1 if reminder.is_voice_enabled else 0,
                    reminder.recurrence_type,
                    reminder.recurrence_interval,
                    reminder.recurrence_day_of_week,
                    reminder.recurrence_day_of_month,
                    reminder.recurring_group_id,
                    reminder.main_category,
                    reminder.sub_category,
                    reminder.created_at,
                    reminder.updated_at,
                ),
            )
            reminder_id = cur.lastrowid
        self._live.notify()
        return reminder_id

    def update_reminder(self, reminder: Reminder) -> None:
        self._write(
            """
            UPDATE reminders
            SET title = ?, notes = ?, date_time = ?, is_completed = ?, completed_at = ?,
                dismissal_reason = ?, snooze_count = ?, is_voice_enabled = ?,
                recurrence_type = ?, recurrence_interval = ?, recurrence_day_of_week = ?,
                recurrence_day_of_month = ?, recurring_group_id = ?, main_category = ?,
                sub_category = ?, updated_at = ?
            WHERE id = ?
            """,
            (
                reminder.title,
                reminder.notes,
                reminder.date_time,
                1 if reminder.is_completed else 0,
                reminder.completed_at,
                reminder.dismissal_reason,
                reminder.snooze_count,
                1 if reminder.is_voice_enabled else 0,
                reminder.recurrence_type,
                reminder.recurrence_interval,
                reminder.recurrence_day_of_week,
                reminder.recurrence_day_of_month,
                reminder.recurring_group_id,
                reminder.main_category,
                reminder.sub_category,
                reminder.updated_at,
                reminder.id,
            ),
        )

    def delete_reminder(self, reminder_id: int) -> None:
        self._write("DELETE FROM reminders WHERE id = ?", (reminder_id,))

    def get_reminder(self, reminder_id: int) -> Optional[Reminder]:
        with self._connect() as conn:
            row = conn.execute(
                f"SELECT {_REMINDER_COLUMNS} FROM reminders WHERE id = ?",
                (reminder_id,),
            ).fetchone()
        if row is None:
            return None
        return _row_to_reminder(row)

    def list_future_in_group(self, group_id: str, since: int) -> List[Reminder]:
        return self._select_reminders(
            "recurring_group_id = ? AND date_time >= ?",
            (group_id, since),
            "date_time ASC",
        )

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
        return self._write(
            """
            UPDATE reminders
            SET title = ?, notes = ?, main_category = ?, sub_category = ?
            WHERE recurring_group_id = ? AND date_time >= ? AND id != ?
            """,
            (
                title,
                notes,
                main_category,
                sub_category,
                group_id,
                since,
                exclude_id if exclude_id is not None else -1,
            ),
        )

    def delete_future_in_group(self, group_id: str, since: int, exclude_id: int) -> int:
        return self._write(
            """
            DELETE FROM reminders
            WHERE recurring_group_id = ? AND date_time >= ? AND id != ?
            """,
            (group_id, since, exclude_id),
        )

    def set_snooze_count(self, reminder_id: int, count: int) -> None:
        self._write(
            "UPDATE reminders SET snooze_count = ? WHERE id = ?",
            (count, reminder_id),
        )

    def mark_completed(
        self, reminder_id: int, completed: bool, completed_at: Optional[int], reason: Optional[str]
    ) -> None:
        self._write(
            """
            UPDATE reminders
            SET is_completed = ?, completed_at = ?, dismissal_reason = ?
            WHERE id = ?
            """,
            (1 if completed else 0, completed_at, reason, reminder_id),
        )

    def clear_completed(self) -> int:
        return self._write("DELETE FROM reminders WHERE is_completed = 1")

    def list_reminders(
        self,
        completed: bool,
        main_category: Optional[str] = None,
        recurrence_type: Optional[str] = None,
    ) -> List[Reminder]:
        clauses = ["is_completed = ?"]
        params: List[Any] = [1 if completed else 0]
        if main_category is not None:
            clauses.append("main_category = ?")
            params.append(main_category)
        if recurrence_type is not None:
            clauses.append("recurrence_type = ?")
            params.append(recurrence_type)
        order_by = "completed_at DESC" if completed else "date_time ASC"
        return self._select_reminders(" AND ".join(clauses), tuple(params), order_by)

    def list_reminders_in_category(self, main_category: str) -> List[Reminder]:
        return self._select_reminders("main_category = ?", (main_category,), "date_time ASC")

    def count_active_in_category(self, main_category: str) -> int:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT COUNT(*) FROM reminders WHERE main_category = ? AND is_completed = 0",
                (main_category,),
            ).fetchone()
        return row[0]

    def count_active_in_group(self, group_id: str) -> int:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT COUNT(*) FROM reminders WHERE recurring_group_id = ? AND is_completed = 0",
                (group_id,),
            ).fetchone()
        return row[0]

    def observe_reminders(
        self,
        completed: bool,
        main_category: Optional[str] = None,
        recurrence_type: Optional[str] = None,
    ) -> LiveQuery[Reminder]:
        return self._live.open(
            lambda: self.list_reminders(
                completed, main_category=main_category, recurrence_type=recurrence_type
            )
        )

    # Categories

    def insert_category(self, category: Category) -> int:
        with self._connect() as conn:
            if category.id:
                conn.execute(
                    f"INSERT OR REPLACE INTO categories ({_CATEGORY_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
                    (
                        category.id,
                        category.name,
                        1 if category.is_main_category else 0,
                        category.parent_category_id,
                        1 if category.is_preset else 0,
                        category.color_hex,
                        category.icon_name,
                    ),
                )
                category_id = category.id
            else:
                cur = conn.execute(
                    """
                    INSERT INTO categories (
                        name, is_main_category, parent_category_id, is_preset, color_hex, icon_name
                    )
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        category.name,
                        1 if category.is_main_category else 0,
                        category.parent_category_id,
                        1 if category.is_preset else 0,
                        category.color_hex,
                        category.icon_name,
                    ),
                )
                category_id = cur.lastrowid
        self._live.notify()
        return category_id

    def update_category(self, category: Category) -> None:
        self._write(
            """
            UPDATE categories
            SET name = ?, is_main_category = ?, parent_category_id = ?, is_preset = ?,
                color_hex = ?, icon_name = ?
            WHERE id = ?
            """,
            (
                category.name,
                1 if category.is_main_category else 0,
                category.parent_category_id,
                1 if category.is_preset else 0,
                category.color_hex,
                category.icon_name,
                category.id,
            ),
        )

    def delete_category(self, category_id: int) -> None:
        self._write("DELETE FROM categories WHERE id = ?", (category_id,))

    def get_category(self, category_id: int) -> Optional[Category]:
        rows = self._select_categories("id = ?", (category_id,), "id")
        return rows[0] if rows else None

    def get_category_by_name(self, name: str, is_main: bool) -> Optional[Category]:
        rows = self._select_categories(
            "name = ? AND is_main_category = ?", (name, 1 if is_main else 0), "id"
        )
        return rows[0] if rows else None

    def list_categories(self) -> List[Category]:
        return self._select_categories("1 = 1", (), "is_main_category DESC, name ASC")

    def list_main_categories(self) -> List[Category]:
        return self._select_categories("is_main_category = 1", (), "name ASC")

    def list_subcategories(self, parent_id: int) -> List[Category]:
        return self._select_categories("parent_category_id = ?", (parent_id,), "name ASC")

    def list_custom_categories(self) -> List[Category]:
        return self._select_categories("is_preset = 0", (), "name ASC")

    def count_categories(self) -> int:
        with self._connect() as conn:
            row = conn.execute("SELECT COUNT(*) FROM categories").fetchone()
        return row[0]

    def observe_categories(self) -> LiveQuery[Category]:
        return self._live.open(self.list_categories)

    # Templates

    def insert_template(self, template: Template) -> int:
        with self._connect() as conn:
            cur = conn.execute(
                """
                INSERT INTO templates (
                    name, title, notes, main_category, sub_category, recurrence_type,
                    recurrence_interval, is_voice_enabled, usage_count, last_used_at, created_at
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    template.name,
                    template.title,
                    template.notes,
                    template.main_category,
                    template.sub_category,
                    template.recurrence_type,
                    template.recurrence_interval,
                    1 if template.is_voice_enabled else 0,
                    template.usage_count,
                    template.last_used_at,
                    template.created_at,
                ),
            )
            template_id = cur.lastrowid
        self._live.notify()
        return template_id

    def update_template(self, template: Template) -> None:
        self._write(
            """
            UPDATE templates
            SET name = ?, title = ?, notes = ?, main_category = ?, sub_category = ?,
                recurrence_type = ?, recurrence_interval = ?, is_voice_enabled = ?
            WHERE id = ?
            """,
            (
                template.name,
                template.title,
                template.notes,
                template.main_category,
                template.sub_category,
                template.recurrence_type,
                template.recurrence_interval,
                1 if template.is_voice_enabled else 0,
                template.id,
            ),
        )

    def delete_template(self, template_id: int) -> int:
        return self._write("DELETE FROM templates WHERE id = ?", (template_id,))

    def delete_all_templates(self) -> int:
        return self._write("DELETE FROM templates")

    def get_template(self, template_id: int) -> Optional[Template]:
        rows = self._select_templates("id = ?", (template_id,), "id")
        return rows[0] if rows else None

    def list_templates(self, order_by: str = "usage") -> List[Template]:
        if order_by not in _TEMPLATE_ORDER:
            raise ValueError(f"Unsupported template order: {order_by}")
        return self._select_templates("1 = 1", (), _TEMPLATE_ORDER[order_by])

    def list_templates_in_category(self, main_category: str) -> List[Template]:
        return self._select_templates(
            "main_category = ?", (main_category,), _TEMPLATE_ORDER["usage"]
        )

    def search_templates(self, query: str) -> List[Template]:
        return self._select_templates(
            "name LIKE '%' || ? || '%' OR title LIKE '%' || ? || '%'",
            (query, query),
            _TEMPLATE_ORDER["usage"],
        )

    def list_most_used_templates(self, limit: int = 5) -> List[Template]:
        return self._select_templates(
            "1 = 1", (), f"{_TEMPLATE_ORDER['usage']} LIMIT {int(limit)}"
        )

    def list_recently_used_templates(self, limit: int = 5) -> List[Template]:
        return self._select_templates(
            "last_used_at IS NOT NULL", (), f"last_used_at DESC LIMIT {int(limit)}"
        )

    def count_templates(self) -> int:
        with self._connect() as conn:
            row = conn.execute("SELECT COUNT(*) FROM templates").fetchone()
        return row[0]

    def record_template_use(self, template_id: int, used_at: int) -> None:
        self._write(
            "UPDATE templates SET usage_count = usage_count + 1, last_used_at = ? WHERE id = ?",
            (used_at, template_id),
        )

    def recategorize_templates(
        self, old_category: str, new_category: str, clear_sub_category: bool = False
    ) -> int:
        if clear_sub_category:
            return self._write(
                "UPDATE templates SET main_category = ?, sub_category = NULL WHERE main_category = ?",
                (new_category, old_category),
            )
        return self._write(
            "UPDATE templates SET main_category = ? WHERE main_category = ?",
            (new_category, old_category),
        )

    def delete_templates_in_category(self, main_category: str) -> int:
        return self._write("DELETE FROM templates WHERE main_category = ?", (main_category,))

    def observe_templates(self) -> LiveQuery[Template]:
        return self._live.open(self.list_templates)
