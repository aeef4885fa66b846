from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, Optional


logger = logging.getLogger(__name__)


class RefreshTicker:
    """Background task that fires *callback* once per interval.

    Time is tracked as simulated elapsed seconds: the asyncio loop sleeps one
    interval and then advances the clock by one interval, while tests can call
    :meth:`advance` directly without a running task.
    """

    def __init__(
        self,
        callback: Callable[[], Any],
        interval_seconds: float = 60.0,
        *,
        name: str = "moon-refresh",
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._callback = callback
        self._interval = float(interval_seconds)
        self._name = name
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._task: Optional[asyncio.Task] = None
        self._elapsed: float = 0.0
        self._since_tick: float = 0.0
        self._ticks: int = 0
        self._failures: int = 0
        self._last_tick: Optional[datetime] = None

    @property
    def ticks(self) -> int:
        return self._ticks

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        async with self._lock:
            if self._task is None or self._task.done():
                self._task = asyncio.create_task(self._run(), name=self._name)
                logger.info("[TICKER] %s started (every %.0fs)", self._name, self._interval)

    async def stop(self) -> None:
        async with self._lock:
            task = self._task
            if not task:
                return
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
            finally:
                self._task = None
                logger.info("[TICKER] %s stopped after %d ticks", self._name, self._ticks)

    async def _run(self) -> None:
        while True:
            await self._sleep(self._interval)
            self.advance(self._interval)

    def advance(self, seconds: float) -> int:
        """Move simulated time forward; returns how many ticks fired."""
        if seconds < 0:
            raise ValueError("cannot advance by a negative amount")
        self._elapsed += seconds
        self._since_tick += seconds
        fired = 0
        while self._since_tick >= self._interval:
            self._since_tick -= self._interval
            self._fire()
            fired += 1
        return fired

    def _fire(self) -> None:
        self._ticks += 1
        self._last_tick = datetime.now(timezone.utc)
        try:
            self._callback()
        except Exception:
            self._failures += 1
            logger.exception("[TICKER] %s callback failed", self._name)
        else:
            logger.debug("[TICKER] %s tick %d", self._name, self._ticks)

    def snapshot(self) -> Dict[str, Any]:
        return {
            "name": self._name,
            "running": self.running,
            "interval_seconds": self._interval,
            "ticks": self._ticks,
            "failures": self._failures,
            "elapsed_seconds": self._elapsed,
            "last_tick": self._last_tick.isoformat() if self._last_tick else None,
        }
