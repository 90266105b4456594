"""Thread-safe first-in first-out queues."""

from __future__ import annotations

import threading
from collections import deque
from typing import Generic, TypeVar

T = TypeVar("T")


class MessageQueue(Generic[T]):
    """A locked FIFO queue whose ``pop`` returns ``None`` when empty."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items: deque[T] = deque()

    def push(self, item: T) -> None:
        with self._lock:
            self._items.append(item)

    def pop(self) -> T | None:
        with self._lock:
            if not self._items:
                return None
            return self._items.popleft()

    def empty(self) -> bool:
        with self._lock:
            return not self._items

    def __iter__(self):
        """Drain the queue, yielding items until it is empty."""
        while (item := self.pop()) is not None:
            yield item


class BlockingQueue(Generic[T]):
    """A FIFO queue whose ``pop`` waits for an item."""

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._items: deque[T] = deque()

    def push(self, item: T) -> None:
        with self._cond:
            self._items.append(item)
            self._cond.notify()

    def pop(self, timeout: float | None = None) -> T:
        """Wait for an item; raise TimeoutError if ``timeout`` elapses first."""
        with self._cond:
            if not self._cond.wait_for(lambda: bool(self._items), timeout):
                raise TimeoutError("no item arrived in time")
            return self._items.popleft()