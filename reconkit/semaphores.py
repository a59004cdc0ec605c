"""Counting semaphores, one of which hands counts back on a timer."""

from __future__ import annotations

import abc
import threading


class Semaphore(abc.ABC):
    """A counting semaphore."""

    @abc.abstractmethod
    def acquire(self, num: int) -> None:
        """Block until num counts have been obtained."""

    @abc.abstractmethod
    def try_acquire(self, num: int) -> bool:
        """Obtain num counts without blocking; True on success."""

    @abc.abstractmethod
    def release(self, num: int) -> None:
        """Give num counts back."""


class _CountingBase(Semaphore):
    def __init__(self, max_count: int) -> None:
        if max_count < 0:
            raise ValueError("max_count must not be negative")
        self._max = max_count
        self._available = max_count
        self._cond = threading.Condition()

    def _take(self, num: int) -> None:
        for _ in range(num):
            with self._cond:
                self._cond.wait_for(lambda: self._available > 0)
                self._available -= 1
                self._cond.notify_all()

    def _try_take(self, num: int) -> bool:
        with self._cond:
            if self._available < num:
                return False
            self._available -= max(num, 0)
            return True


class SimpleSemaphore(_CountingBase):
    """A counting semaphore holding up to max_count counts."""

    def acquire(self, num: int) -> None:
        """Block until num counts have been obtained."""
        self._take(num)

    def try_acquire(self, num: int) -> bool:
        """Obtain num counts without blocking; True on success."""
        return self._try_take(num)

    def release(self, num: int) -> None:
        """Give counts back, blocking while the semaphore is already full."""
        for _ in range(num):
            with self._cond:
                self._cond.wait_for(lambda: self._available < self._max)
                self._available += 1
                self._cond.notify_all()


class TimedSemaphore(_CountingBase):
    """A counting semaphore whose released counts return one per delay interval."""

    def __init__(self, max_count: int, delay: float) -> None:
        super().__init__(max_count)
        if delay <= 0:
            raise ValueError("delay must be positive")
        self._delay = delay
        self._pending = 0
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._process_releases, daemon=True)
        self._thread.start()

    def acquire(self, num: int) -> None:
        """Block until num counts have been obtained."""
        self._take(num)

    def try_acquire(self, num: int) -> bool:
        """Obtain num counts without blocking; True on success."""
        return self._try_take(num)

    def release(self, num: int) -> None:
        """Schedule num counts to be returned, one per delay interval."""
        with self._cond:
            self._pending += max(num, 0)

    def close(self) -> None:
        """Stop returning released counts."""
        self._stop.set()
        self._thread.join()

    def __enter__(self) -> TimedSemaphore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _process_releases(self) -> None:
        while not self._stop.wait(self._delay):
            with self._cond:
                if self._pending > 0 and self._available < self._max:
                    self._pending -= 1
                    self._available += 1
                    self._cond.notify_all()