"""Dependency container built from two value caches.

Sync dependencies are produced once on first access; async dependencies are
produced once as well, with concurrent first callers sharing one production.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from slotkit.value_cache import create_async_value_cache, create_value_cache

Dependencies = dict[str, Any]


def _always_valid(_: Dependencies) -> bool:
    return True


async def _no_async_dependencies() -> Dependencies:
    return {}


class DependencyContainer:
    """Lazily built sync and async dependency records."""

    def __init__(
        self,
        create_dependencies: Callable[[], Dependencies] | None = None,
        create_async_dependencies: Callable[[], Awaitable[Dependencies]]
        | None = None,
    ) -> None:
        self._dependencies = create_value_cache(
            produce=create_dependencies or dict,
            is_valid=_always_valid,
        )
        self._async_dependencies = create_async_value_cache(
            produce=create_async_dependencies or _no_async_dependencies,
            is_valid=_always_valid,
        )

    def get_dependencies(self) -> Dependencies:
        """Return the sync dependencies, creating them on first call."""
        return self._dependencies.get()

    async def get_async_dependencies(self) -> Dependencies:
        """Return the async dependencies, creating them on first call."""
        return await self._async_dependencies.get()

    async def load_all_dependencies(self) -> Dependencies:
        """Return sync and async dependencies merged; async keys win."""
        dependencies = self.get_dependencies()
        async_dependencies = await self.get_async_dependencies()
        return {**dependencies, **async_dependencies}

    def extend(
        self,
        create_dependencies: Callable[[DependencyContainer], Dependencies]
        | None = None,
        create_async_dependencies: Callable[
            [DependencyContainer], Awaitable[Dependencies]
        ]
        | None = None,
    ) -> DependencyContainer:
        """Return a child container whose factories receive this container.

        The child's sync dependencies override this container's; for async
        dependencies this container's records take precedence.
        """
        parent = self

        def dependencies() -> Dependencies:
            inherited = parent.get_dependencies()
            extra = create_dependencies(parent) if create_dependencies else {}
            return {**inherited, **extra}

        async def async_dependencies() -> Dependencies:
            extra = (
                await create_async_dependencies(parent)
                if create_async_dependencies
                else {}
            )
            return {**extra, **(await parent.get_async_dependencies())}

        return DependencyContainer(dependencies, async_dependencies)


def create_dependency_container(
    *,
    create_dependencies: Callable[[], Dependencies] | None = None,
    create_async_dependencies: Callable[[], Awaitable[Dependencies]] | None = None,
) -> DependencyContainer:
    """Create a dependency container.

    Args:
        create_dependencies: Function building the sync dependency record
        create_async_dependencies: Async function building the async record

    Returns:
        DependencyContainer with no dependencies for any factory left out
    """
    return DependencyContainer(create_dependencies, create_async_dependencies)


__all__ = ["Dependencies", "DependencyContainer", "create_dependency_container"]
