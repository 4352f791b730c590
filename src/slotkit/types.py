"""Core types for slotkit."""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

T = TypeVar("T")

# Duration type alias
Duration = str | int | float  # "250ms", "1s", "5m" or milliseconds

# Value cache callbacks
Producer = Callable[[], T]
AsyncProducer = Callable[[], Awaitable[T]]
Validator = Callable[[T], bool]

# Subject callbacks - handlers may be plain functions or coroutine functions
Handler = Callable[[T], Awaitable[Any] | None]
Unsubscribe = Callable[[], None]
