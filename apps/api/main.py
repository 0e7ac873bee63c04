from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from apps.api.reminders_scheduler import start_scheduler, stop_scheduler
from apps.api.routes.categories import router as categories_router
from apps.api.routes.reminders import router as reminders_router
from apps.api.routes.templates import router as templates_router
from apps.api.runtime import get_runtime
from packages.core.logging_config import configure_logging


configure_logging()

app = FastAPI(title="Reminders API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(reminders_router)
app.include_router(categories_router)
app.include_router(templates_router)

_STARTED = False


@app.on_event("startup")
def _start_reminder_scheduler() -> None:
    global _STARTED
    runtime = get_runtime()
    if not runtime.settings.scheduler_enabled:
        logging.getLogger("reminders.api").info("alarm_scheduler_disabled")
        runtime.categories.seed_presets()
        return
    if _STARTED:
        return
    start_scheduler(runtime)
    _STARTED = True


@app.on_event("shutdown")
def _stop_reminder_scheduler() -> None:
    global _STARTED
    if not _STARTED:
        return
    stop_scheduler(get_runtime())
    _STARTED = False
