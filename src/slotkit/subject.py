"""Subjects - in-process publish/subscribe.

Handlers run sequentially in subscription order. Every handler runs even when
an earlier one fails; failures are reported after the last handler:
- one failure is re-raised as-is
- two or more are raised together as HandlerErrors("Some handlers failed")
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterable
from typing import Generic, Protocol, TypeVar, runtime_checkable

from slotkit.errors import HandlerErrors
from slotkit.types import Handler, Unsubscribe

T = TypeVar("T")
T_contra = TypeVar("T_contra", contravariant=True)

logger = logging.getLogger(__name__)


@runtime_checkable
class Subscribable(Protocol[T_contra]):
    """Anything a handler can be subscribed to."""

    def subscribe(self, handler: Handler[T_contra]) -> Unsubscribe:
        """Register a handler and return a function that removes it."""
        ...


class Subject(Generic[T]):
    """Ordered set of handlers that can be emitted to."""

    def __init__(self) -> None:
        # id(handler) -> handler: identity, not equality, tells handlers apart
        self._listeners: dict[int, Handler[T]] = {}

    def __len__(self) -> int:
        return len(self._listeners)

    def subscribe(self, handler: Handler[T]) -> Unsubscribe:
        """Add ``handler``; the returned function removes it (repeat calls no-op)."""
        key = id(handler)
        self._listeners.setdefault(key, handler)

        def unsubscribe() -> None:
            if self._listeners.get(key) is handler:
                del self._listeners[key]

        return unsubscribe

    async def emit(self, payload: T) -> None:
        """Call every handler with ``payload`` in subscription order.

        Handlers subscribed or removed while an emission is running take effect
        from the next emission.

        Raises:
            Exception: The error of the only failing handler.
            HandlerErrors: Two or more handlers failed.
        """
        errors: list[Exception] = []

        for handler in list(self._listeners.values()):
            try:
                result = handler(payload)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.debug("Handler %r failed: %r", handler, e)
                errors.append(e)

        if len(errors) == 1:
            raise errors[0]
        if errors:
            raise HandlerErrors("Some handlers failed", errors)

    def clear(self) -> None:
        """Remove all handlers."""
        self._listeners.clear()


class MergedSubject(Generic[T]):
    """Subscribe-only view over several subjects."""

    __slots__ = ("_subjects",)

    def __init__(self, subjects: Iterable[Subscribable[T]]) -> None:
        self._subjects = tuple(subjects)

    def subscribe(self, handler: Handler[T]) -> Unsubscribe:
        """Subscribe ``handler`` to every source; the result unsubscribes from all."""
        unsubscribes = [subject.subscribe(handler) for subject in self._subjects]

        def unsubscribe() -> None:
            for unsubscribe_one in unsubscribes:
                unsubscribe_one()

        return unsubscribe


def create_subject() -> Subject[T]:
    """Create an empty subject."""
    return Subject()


def merge_subjects(subjects: Iterable[Subscribable[T]]) -> MergedSubject[T]:
    """Merge subjects into one view that can be subscribed to but not emitted on."""
    return MergedSubject(subjects)


__all__ = [
    "MergedSubject",
    "Subject",
    "Subscribable",
    "create_subject",
    "merge_subjects",
]
