"""Synchronous in-process signal (single producer, many listeners)."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

E = TypeVar("E")

Listener = Callable[[E], None]


class Signal(Generic[E]):
    """
    Observer list with synchronous delivery.

    Notes:
        - Listeners run in connection order on the emitting thread.
        - No replay: a listener connected after an emit never sees it.
        - A failing listener is logged and skipped; the event is a fact and the
          remaining listeners still receive it.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._listeners: list[Listener[E]] = []
        self._lock = threading.Lock()

    def connect(self, listener: Listener[E]) -> bool:
        """Connect a listener. Returns False if it was already connected."""
        with self._lock:
            if listener in self._listeners:
                return False
            self._listeners.append(listener)
            return True

    def disconnect(self, listener: Listener[E]) -> bool:
        """Disconnect a listener. Returns False if it was not connected."""
        with self._lock:
            if listener not in self._listeners:
                return False
            self._listeners.remove(listener)
            return True

    def clear(self) -> None:
        with self._lock:
            self._listeners.clear()

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def emit(self, event: E) -> None:
        with self._lock:
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(event)
            except Exception:
                logger.exception("listener %r failed on signal %r", listener, self.name)
