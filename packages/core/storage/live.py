from __future__ import annotations

import logging
import threading
from typing import Callable, Generic, List, TypeVar

T = TypeVar("T")

logger = logging.getLogger("reminders.storage")


class LiveQuery(Generic[T]):
    """A query result that re-emits to subscribers whenever the store changes.

    Subscribers receive the current result immediately on subscribe and the
    fresh result after every write the owning store performs. Reads only:
    nothing in the lifecycle engine consumes these.
    """

    def __init__(self, fetch: Callable[[], List[T]], on_close: Callable[["LiveQuery[T]"], None]) -> None:
        self._fetch = fetch
        self._on_close = on_close
        self._lock = threading.Lock()
        self._subscribers: List[Callable[[List[T]], None]] = []
        self._value: List[T] = fetch()
        self._closed = False

    def current(self) -> List[T]:
        with self._lock:
            return list(self._value)

    def subscribe(self, callback: Callable[[List[T]], None]) -> Callable[[], None]:
        with self._lock:
            self._subscribers.append(callback)
            value = list(self._value)
        callback(value)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def refresh(self) -> None:
        if self._closed:
            return
        value = self._fetch()
        with self._lock:
            self._value = value
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(list(value))
            except Exception:
                logger.exception("live_query_subscriber_failed")

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        with self._lock:
            self._subscribers.clear()
        self._on_close(self)


class LiveQueryRegistry:
    """Tracks open live queries so a store can refresh them after writes."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._queries: List[LiveQuery] = []

    def open(self, fetch: Callable[[], List[T]]) -> LiveQuery[T]:
        query: LiveQuery[T] = LiveQuery(fetch, self._discard)
        with self._lock:
            self._queries.append(query)
        return query

    def notify(self) -> None:
        with self._lock:
            queries = list(self._queries)
        for query in queries:
            query.refresh()

    def _discard(self, query: LiveQuery) -> None:
        with self._lock:
            if query in self._queries:
                self._queries.remove(query)
