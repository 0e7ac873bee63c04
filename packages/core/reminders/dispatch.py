from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Any, Callable, Set


logger = logging.getLogger("reminders.dispatch")


class ReminderWorkQueue:
    """Runs lifecycle operations as background units of work.

    Failures are logged when the unit finishes and re-raised by
    `Future.result()` for callers that wait.
    """

    def __init__(self, workers: int = 4) -> None:
        self._executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="reminders")
        self._lock = threading.Lock()
        self._pending: Set[Future] = set()

    def submit(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        future = self._executor.submit(func, *args, **kwargs)
        name = getattr(func, "__name__", repr(func))
        with self._lock:
            self._pending.add(future)

        def _done(done: Future) -> None:
            with self._lock:
                self._pending.discard(done)
            if done.cancelled():
                return
            exc = done.exception()
            if exc is not None:
                logger.error("work_failed op=%s error=%s", name, exc, exc_info=exc)

        future.add_done_callback(_done)
        return future

    def drain(self, timeout: float = 10.0) -> None:
        with self._lock:
            pending = list(self._pending)
        if pending:
            wait(pending, timeout=timeout)

    def shutdown(self, wait_for_pending: bool = True) -> None:
        self._executor.shutdown(wait=wait_for_pending)
