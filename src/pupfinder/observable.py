"""Publish/subscribe value holder used to expose view state."""

from __future__ import annotations

import itertools
import logging
import threading
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Observable(Generic[T]):
    """A single value plus the callbacks interested in it.

    ``subscribe`` delivers the current value right away and every later
    change after that. Only a value that differs from the current one counts
    as a change. Writes and notifications share one re-entrant lock,
    so a subscriber never sees a value that is only partly published.
    """

    def __init__(self, initial: T, lock: threading.RLock | None = None):
        self._value = initial
        self._lock = lock or threading.RLock()
        self._subscribers: dict[int, Callable[[T], None]] = {}
        self._tokens = itertools.count(1)

    def get(self) -> T:
        with self._lock:
            return self._value

    def set(self, value: T) -> None:
        """Publish ``value``; setting an equal value notifies nobody."""
        with self._lock:
            if value == self._value:
                return
            self._value = value
            # Snapshot so callbacks may (un)subscribe while being notified
            for callback in list(self._subscribers.values()):
                self._notify(callback, value)

    def subscribe(self, callback: Callable[[T], None]) -> int:
        with self._lock:
            token = next(self._tokens)
            self._subscribers[token] = callback
            self._notify(callback, self._value)
            return token

    def unsubscribe(self, token: int) -> None:
        with self._lock:
            self._subscribers.pop(token, None)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    @staticmethod
    def _notify(callback: Callable[[T], None], value: T) -> None:
        try:
            callback(value)
        except Exception:
            logger.exception("Subscriber %r failed", callback)
