"""
Throttled sequential iteration.

Used by the To Do client to space out per-list requests so Graph does not
start answering 429. The delay is fixed; there is no adaptive backoff.
"""

import asyncio
from typing import AsyncIterator, Awaitable, Callable, Iterable, TypeVar


T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


async def throttled(
    items: Iterable[T],
    delay: float,
    sleep: Sleep = asyncio.sleep,
) -> AsyncIterator[T]:
    """
    Yield items in order, awaiting sleep(delay) between consecutive items.

    Nothing is awaited before the first item or after the last one. The
    consumer's work for an item finishes before the next delay starts, so
    requests made inside the loop never overlap.

    Args:
        items: Items to hand out
        delay: Seconds between consecutive items (0 disables waiting)
        sleep: Awaitable sleep function, replaceable in tests

    Example:
        async for task_list in throttled(lists, 0.1):
            tasks = await fetch(task_list)
    """
    first = True
    for item in items:
        if not first and delay > 0:
            await sleep(delay)
        first = False
        yield item
