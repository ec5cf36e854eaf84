"""Pacing of quote calls against the provider's per-minute budget."""

import asyncio
import time
from collections import deque
from collections.abc import Awaitable, Callable
from typing import Protocol

from learnfolio.config.settings import Settings

Sleep = Callable[[float], Awaitable[None]]
Clock = Callable[[], float]

WINDOW_SECONDS = 60.0


class RateLimiter(Protocol):
    """Awaited before every quote call of a batch refresh."""

    async def acquire(self) -> None:
        ...


class FixedDelayRateLimiter:
    """
    Wait a fixed delay between consecutive calls.

    The first acquisition returns immediately; every later one sleeps for
    ``delay_seconds``. One instance paces one batch.
    """

    def __init__(self, delay_seconds: float, sleep: Sleep = asyncio.sleep):
        self._delay = delay_seconds
        self._sleep = sleep
        self._started = False

    async def acquire(self) -> None:
        if self._started and self._delay > 0:
            await self._sleep(self._delay)
        self._started = True


class SlidingWindowRateLimiter:
    """
    Allow at most ``calls_per_minute`` calls in any rolling 60 second window.

    Calls go through immediately while the window has room; otherwise the
    caller waits until the oldest call in the window expires.
    """

    def __init__(
        self,
        calls_per_minute: int,
        sleep: Sleep = asyncio.sleep,
        clock: Clock = time.monotonic,
    ):
        if calls_per_minute <= 0:
            raise ValueError("calls_per_minute must be positive")
        self._limit = calls_per_minute
        self._sleep = sleep
        self._clock = clock
        self._calls: deque[float] = deque()

    async def acquire(self) -> None:
        while True:
            now = self._clock()
            while self._calls and now - self._calls[0] >= WINDOW_SECONDS:
                self._calls.popleft()
            if len(self._calls) < self._limit:
                self._calls.append(now)
                return
            await self._sleep(self._calls[0] + WINDOW_SECONDS - now)


def build_rate_limiter_factory(settings: Settings) -> Callable[[], RateLimiter]:
    """
    Return a factory producing the limiter selected in settings.

    A fixed-delay limiter is created per batch; the sliding window is shared
    across batches because the provider's budget is.
    """
    if settings.refresh_limiter == "sliding_window":
        window = SlidingWindowRateLimiter(settings.quote_calls_per_minute)
        return lambda: window
    return lambda: FixedDelayRateLimiter(settings.refresh_delay_seconds)
