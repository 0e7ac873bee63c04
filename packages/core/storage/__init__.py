from .base import Category, CategoryStore, Reminder, ReminderStore, Template, TemplateStore
from .live import LiveQuery
from .sqlite import SQLiteReminderStore

__all__ = [
    "Category",
    "CategoryStore",
    "LiveQuery",
    "Reminder",
    "ReminderStore",
    "SQLiteReminderStore",
    "Template",
    "TemplateStore",
]
