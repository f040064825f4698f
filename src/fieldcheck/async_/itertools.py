"""Order-preserving concurrent gathering of deferred Results.

All awaitables run to completion inside an anyio task group; outcomes are
stored by input position, so which Err is reported never depends on which
awaitable finished first.
"""

from __future__ import annotations

from collections.abc import Awaitable, Iterable

import aiologic
import anyio

from fieldcheck.result import Result

__all__ = ['async_gather_results']


async def async_gather_results[T, E](
    awaitables: Iterable[Awaitable[Result[T, E]]],
    *,
    limit: int | None = None,
) -> list[Result[T, E]]:
    """Await every Result concurrently and return them in input order.

    Nothing is cancelled when one of them is an Err.

    Args:
        awaitables: Awaitables producing Results. Materialized eagerly.
        limit: Maximum number of awaitables in flight, enforced with an
            aiologic.CapacityLimiter. None means unlimited.

    Returns:
        One Result per awaitable, positioned as in the input.
    """
    pending = list(awaitables)
    slots: dict[int, Result[T, E]] = {}
    limiter = aiologic.CapacityLimiter(limit) if limit is not None else None

    async def settle(index: int, awaitable: Awaitable[Result[T, E]]) -> None:
        if limiter is None:
            slots[index] = await awaitable
            return
        async with limiter:
            slots[index] = await awaitable

    async with anyio.create_task_group() as tg:
        for index, awaitable in enumerate(pending):
            tg.start_soon(settle, index, awaitable)

    return [slots[index] for index in range(len(pending))]
