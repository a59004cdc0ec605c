"""A thread-safe first-in, first-out queue."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any


class Queue:
    """A FIFO queue that may be shared between threads."""

    def __init__(self) -> None:
        self._items: deque[Any] = deque()
        self._lock = threading.Lock()

    def append(self, data: Any) -> None:
        """Add data to the end of the queue."""
        with self._lock:
            self._items.append(data)

    def next(self) -> Any:
        """Remove and return the item at the front; IndexError when the queue is empty."""
        with self._lock:
            if not self._items:
                raise IndexError("next from an empty queue")
            return self._items.popleft()

    def empty(self) -> bool:
        """Return True when the queue holds nothing."""
        with self._lock:
            return not self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)