"""Throttled calls - shared in-flight result plus a minimum delay between runs."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from slotkit.duration import parse_duration
from slotkit.timing import sleep
from slotkit.types import Duration

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass
class Throttled(Generic[T]):
    """Zero-argument operation with call coalescing and pacing.

    Calls made while a run is in flight get that run's future. A new run first
    waits out the pacing delay started by the previous run, then starts its own
    delay before invoking the operation, so the delay also applies after
    failures.

    Every coalesced caller holds the same future, so cancelling it cancels
    the run for all of them. Callers that may give up early should await
    ``asyncio.shield(throttled())`` instead.
    """

    _fn: Callable[[], T | Awaitable[T]]
    _min_delay: float  # milliseconds
    _in_flight: asyncio.Future[T] | None = None
    _pacing: asyncio.Future[None] | None = None

    def __call__(self) -> asyncio.Future[T]:
        """Start a run, or return the future of the one already in flight.

        Must be called with a running event loop.
        """
        if self._in_flight is not None:
            return self._in_flight

        task = asyncio.get_running_loop().create_task(self._run())
        self._in_flight = task
        task.add_done_callback(self._settle)
        return task

    @property
    def pending(self) -> bool:
        """Whether a run is currently in flight."""
        return self._in_flight is not None

    def _settle(self, task: asyncio.Future[T]) -> None:
        # Also covers a run cancelled before it started, which skips _run
        if self._in_flight is task:
            self._in_flight = None

    async def _run(self) -> T:
        try:
            if self._pacing is not None and not self._pacing.done():
                logger.debug("Waiting out pacing delay for %r", self._fn)
                await self._pacing

            self._pacing = asyncio.ensure_future(sleep(self._min_delay))

            result = self._fn()
            if inspect.isawaitable(result):
                return await result
            return result
        finally:
            if self._in_flight is asyncio.current_task():
                self._in_flight = None


def make_throttled(
    fn: Callable[[], T | Awaitable[T]], *, min_delay: Duration
) -> Throttled[T]:
    """Wrap ``fn`` so runs are coalesced and spaced at least ``min_delay`` apart.

    Args:
        fn: Sync or async zero-argument function
        min_delay: Minimum time between the starts of consecutive runs

    Returns:
        Throttled callable; each call returns an awaitable future
    """
    if not callable(fn):
        raise TypeError("fn must be callable")

    return Throttled(_fn=fn, _min_delay=parse_duration(min_delay))


__all__ = ["Throttled", "make_throttled"]
