"""Errors raised by slotkit primitives.

Exceptions raised by caller-supplied callbacks (producers, throttled
operations, handlers) are never wrapped, with one exception: when several
subject handlers fail during a single emission they are bundled into
HandlerErrors.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class SlotkitError(Exception):
    """Base class for errors raised by slotkit itself."""


class InvalidFreshValueError(SlotkitError):
    """A value cache produced a value that failed its own validity check."""

    def __init__(self, value: Any) -> None:
        super().__init__("Fresh value is invalid")
        self.value = value


class HandlerErrors(ExceptionGroup):
    """Two or more subject handlers failed during one emission.

    The failures are available on ``exceptions`` in invocation order.
    """

    def derive(self, excs: Sequence[Exception]) -> HandlerErrors:
        return HandlerErrors(self.message, excs)


__all__ = ["HandlerErrors", "InvalidFreshValueError", "SlotkitError"]
