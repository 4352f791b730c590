"""Delay primitive shared by the throttling wrapper."""

import asyncio

from slotkit.duration import to_seconds
from slotkit.types import Duration


async def sleep(duration: Duration) -> None:
    """Suspend the current task for ``duration`` ("100ms", "1s" or milliseconds)."""
    await asyncio.sleep(to_seconds(duration))
