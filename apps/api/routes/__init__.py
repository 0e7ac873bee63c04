from .categories import router as categories_router
from .reminders import router as reminders_router
from .templates import router as templates_router

__all__ = [
    "categories_router",
    "reminders_router",
    "templates_router",
]
