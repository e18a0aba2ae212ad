"""
Per-showtime mutual exclusion (in-process keyed lock table)

- One anyio.Lock per showtime id, created on first use and dropped once
  nobody holds or waits for it
- Showtimes never share a lock, so work on different showtimes runs in parallel
- Acquisition is bounded by `timeout_seconds`; on expiry the caller gets a
  retry-able BusyError instead of waiting forever

Across processes the showtime row lock taken by
ShowtimeCommandRepoImpl.get_for_update provides the same serialization.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
import time
from typing import Dict

import anyio

from src.platform.exception.exceptions import BusyError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics
from src.service.cinema.app.interface.i_showtime_guard import IShowtimeGuard


class ShowtimeLockGuard(IShowtimeGuard):
    def __init__(self, *, timeout_seconds: float = 5.0) -> None:
        self.timeout_seconds = timeout_seconds
        self._locks: Dict[int, anyio.Lock] = {}
        self._users: Dict[int, int] = {}  # holders + waiters per showtime

    def _checkout(self, showtime_id: int) -> anyio.Lock:
        lock = self._locks.get(showtime_id)
        if lock is None:
            lock = self._locks[showtime_id] = anyio.Lock()
        self._users[showtime_id] = self._users.get(showtime_id, 0) + 1
        metrics.active_guards.set(len(self._locks))
        return lock

    def _checkin(self, showtime_id: int) -> None:
        remaining = self._users[showtime_id] - 1
        if remaining:
            self._users[showtime_id] = remaining
        else:
            del self._users[showtime_id]
            del self._locks[showtime_id]
        metrics.active_guards.set(len(self._locks))

    def is_held(self, showtime_id: int) -> bool:
        lock = self._locks.get(showtime_id)
        return lock is not None and lock.locked()

    @asynccontextmanager
    async def hold(self, showtime_id: int) -> AsyncIterator[None]:
        lock = self._checkout(showtime_id)
        try:
            wait_start = time.perf_counter()
            try:
                with anyio.fail_after(self.timeout_seconds):
                    await lock.acquire()
            except TimeoutError:
                metrics.guard_timeouts.inc()
                Logger.base.warning(
                    f'⏳ [GUARD] Showtime {showtime_id} still busy after {self.timeout_seconds}s'
                )
                raise BusyError(f'Showtime {showtime_id} is busy, please retry') from None

            metrics.guard_wait_duration.observe(time.perf_counter() - wait_start)
            try:
                yield
            finally:
                lock.release()
        finally:
            self._checkin(showtime_id)
