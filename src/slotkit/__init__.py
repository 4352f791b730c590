"""slotkit - single-slot coordination primitives for Python."""

# Dependency injection
from slotkit.container import (
    Dependencies,
    DependencyContainer,
    create_dependency_container,
)

# Duration parsing
from slotkit.duration import parse_duration, to_seconds

# Errors
from slotkit.errors import HandlerErrors, InvalidFreshValueError, SlotkitError

# Subjects
from slotkit.subject import (
    MergedSubject,
    Subject,
    Subscribable,
    create_subject,
    merge_subjects,
)

# Throttling
from slotkit.throttle import Throttled, make_throttled
from slotkit.timing import sleep

# Core types
from slotkit.types import Duration, Handler, Unsubscribe

# Value caches
from slotkit.value_cache import (
    AsyncValueCache,
    ValueCache,
    create_async_value_cache,
    create_value_cache,
)

__version__ = "0.1.0"

__all__ = [
    "AsyncValueCache",
    "Dependencies",
    "DependencyContainer",
    "Duration",
    "Handler",
    "HandlerErrors",
    "InvalidFreshValueError",
    "MergedSubject",
    "SlotkitError",
    "Subject",
    "Subscribable",
    "Throttled",
    "Unsubscribe",
    "ValueCache",
    "create_async_value_cache",
    "create_dependency_container",
    "create_subject",
    "create_value_cache",
    "make_throttled",
    "merge_subjects",
    "parse_duration",
    "sleep",
    "to_seconds",
]
