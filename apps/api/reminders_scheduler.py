from __future__ import annotations

import logging

from apps.api.runtime import Runtime


logger = logging.getLogger("reminders.scheduler")


def start_scheduler(runtime: Runtime) -> None:
    """Start alarm delivery and rebuild alarms from the store.

    The store is authoritative: any alarm lost while the process was down
    is re-derived from the active reminders.
    """
    runtime.categories.seed_presets()
    if not runtime.scheduler.running:
        runtime.scheduler.start()
    try:
        runtime.engine.reconcile_alarms()
    except Exception as exc:
        logger.exception("alarm_reconcile_failed error=%s", exc)


def stop_scheduler(runtime: Runtime) -> None:
    runtime.queue.shutdown(wait_for_pending=True)
    if runtime.scheduler.running:
        runtime.scheduler.shutdown(wait=False)
