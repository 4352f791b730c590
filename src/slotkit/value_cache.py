"""Value caches - lazily produced, revalidated cache-of-one.

This module provides two explicit variants:
- ValueCache: synchronous producer, guarded by a thread lock
- AsyncValueCache: async producer, concurrent refreshes coalesced into one task

Both re-run the validity predicate on every get() and produce a fresh value
when the cached one is missing or no longer valid.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from slotkit.errors import InvalidFreshValueError
from slotkit.types import AsyncProducer, Producer, Validator

T = TypeVar("T")

logger = logging.getLogger(__name__)

_EMPTY: Any = object()


def _succeeded(future: asyncio.Future[Any]) -> bool:
    return future.done() and not future.cancelled() and future.exception() is None


@dataclass
class ValueCache(Generic[T]):
    """Synchronous cache-of-one."""

    _produce: Producer[T]
    _is_valid: Validator[T]
    _value: T = field(default=_EMPTY)
    _lock: threading.Lock = field(default_factory=threading.Lock)
    _owner: int | None = None  # thread running produce/is_valid under the lock

    def get(self) -> T:
        """Return the cached value, producing a fresh one if missing or invalid.

        A freshly produced value replaces the slot before it is validated, so
        an invalid fresh value is kept until the next call produces again.

        Raises:
            InvalidFreshValueError: The freshly produced value failed validation.
            RuntimeError: Called from inside this cache's own produce or
                is_valid callback.
        """
        if self._owner == threading.get_ident():
            raise RuntimeError("ValueCache.get() re-entered from its own callback")

        with self._lock:
            self._owner = threading.get_ident()
            try:
                return self._get_locked()
            finally:
                self._owner = None

    def _get_locked(self) -> T:
        if self._value is not _EMPTY and self._is_valid(self._value):
            return self._value

        logger.debug("Producing value for %r", self._produce)
        self._value = self._produce()

        if not self._is_valid(self._value):
            logger.debug("Fresh value from %r is invalid", self._produce)
            raise InvalidFreshValueError(self._value)

        return self._value

    def peek(self) -> T | None:
        """Return the committed value without producing or validating."""
        with self._lock:
            return None if self._value is _EMPTY else self._value

    def invalidate(self) -> None:
        """Drop the cached value so the next get() produces again."""
        with self._lock:
            self._value = _EMPTY


@dataclass
class AsyncValueCache(Generic[T]):
    """Async cache-of-one with refresh coalescing."""

    _produce: AsyncProducer[T]
    _is_valid: Validator[T]
    _current: asyncio.Future[T] | None = None
    _refresh: asyncio.Future[T] | None = None

    async def get(self) -> T:
        """Return the cached value, producing a fresh one if missing or invalid.

        Callers arriving while a production is in flight attach to it instead
        of starting another, and all of them receive the same value or error.
        A failed production stays in the slot until the next call retries.

        Raises:
            InvalidFreshValueError: The freshly produced value failed validation.
        """
        if self._refresh is None:
            current = self._current
            if current is not None and _succeeded(current):
                value = current.result()
                if self._is_valid(value):
                    return value

            logger.debug("Producing value for %r", self._produce)
            task = asyncio.get_running_loop().create_task(self._fetch())
            self._current = task
            self._refresh = task
        else:
            logger.debug("Joining in-flight production for %r", self._produce)

        # A cancelled caller must not cancel the shared production
        return await asyncio.shield(self._refresh)

    def peek(self) -> T | None:
        """Return the committed value without producing or validating."""
        current = self._current
        if current is None or not _succeeded(current):
            return None
        return current.result()

    def invalidate(self) -> None:
        """Drop the cached value so the next get() produces again.

        An in-flight production is not cancelled; callers already attached to
        it still receive its outcome.
        """
        self._current = None

    async def _fetch(self) -> T:
        try:
            value = await self._produce()
        finally:
            self._refresh = None

        if not self._is_valid(value):
            logger.debug("Fresh value from %r is invalid", self._produce)
            raise InvalidFreshValueError(value)

        return value


def create_value_cache(
    *, produce: Producer[T], is_valid: Validator[T]
) -> ValueCache[T]:
    """Create a synchronous value cache.

    Args:
        produce: Function returning a fresh value
        is_valid: Predicate deciding whether a cached value may be reused

    Returns:
        ValueCache whose get() returns the current valid value
    """
    if not callable(produce) or not callable(is_valid):
        raise TypeError("produce and is_valid must be callable")
    if inspect.iscoroutinefunction(produce):
        raise TypeError(
            "produce is a coroutine function; use create_async_value_cache"
        )

    return ValueCache(_produce=produce, _is_valid=is_valid)


def create_async_value_cache(
    *, produce: AsyncProducer[T], is_valid: Validator[T]
) -> AsyncValueCache[T]:
    """Create an async value cache.

    Args:
        produce: Async function returning a fresh value
        is_valid: Predicate deciding whether a cached value may be reused

    Returns:
        AsyncValueCache whose get() coalesces concurrent productions
    """
    if not callable(produce) or not callable(is_valid):
        raise TypeError("produce and is_valid must be callable")

    return AsyncValueCache(_produce=produce, _is_valid=is_valid)


__all__ = [
    "AsyncValueCache",
    "ValueCache",
    "create_async_value_cache",
    "create_value_cache",
]
