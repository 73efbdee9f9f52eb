"""Bounded-concurrency map over a sequence of items.

``limit`` runner coroutines pull the next unclaimed index from a shared
counter, so fast responses take on more items than slow ones. Claiming an
index is a plain read-and-increment with no await in between, which is atomic
on a single event loop.
"""
from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Iterable, TypeVar

T = TypeVar("T")
R = TypeVar("R")

ProgressCallback = Callable[[int, int], Any]


async def map_limit(
    items: Iterable[T],
    limit: int,
    worker: Callable[[T, int], Awaitable[R]],
    on_progress: ProgressCallback | None = None,
) -> list[R]:
    """Run ``worker(item, index)`` over ``items`` with at most ``limit`` in flight.

    Results keep input order. ``on_progress(completed, total)`` fires once per
    item, after it finishes, whether the worker returned or raised. A worker
    exception aborts the batch: the remaining runners are cancelled and the
    exception is re-raised.
    """
    pending = list(items)
    total = len(pending)
    results: list[Any] = [None] * total
    next_index = 0
    completed = 0

    def report() -> None:
        nonlocal completed
        completed += 1
        if on_progress is not None:
            on_progress(completed, total)

    async def runner() -> None:
        nonlocal next_index
        while next_index < total:
            index = next_index
            next_index += 1
            try:
                results[index] = await worker(pending[index], index)
            except asyncio.CancelledError:
                raise
            except Exception:
                report()
                raise
            report()

    tasks = [asyncio.create_task(runner()) for _ in range(max(1, int(limit)))]
    try:
        await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
    return results
