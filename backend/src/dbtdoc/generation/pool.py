"""Semaphore-gated worker pool with fail-fast semantics."""

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

T = TypeVar("T")
R = TypeVar("R")


class WorkerPool:
    """Runs an async function over items with at most ``limit`` in flight.

    Results come back in input order once every task has finished. The first
    exception cancels all tasks still pending or running and is re-raised;
    nothing is retried and no partial result list is returned. Work already
    completed (including its side effects) is not undone.
    """

    def __init__(self, limit: int | None):
        """Initialize the pool.

        Args:
            limit: Maximum concurrent tasks, or None for no bound.
        """
        if limit is not None and limit < 1:
            raise ValueError(f"Pool limit must be at least 1, got {limit}")
        self.limit = limit

    async def map(self, fn: Callable[[T], Awaitable[R]], items: Iterable[T]) -> list[R]:
        semaphore = asyncio.Semaphore(self.limit) if self.limit is not None else None

        async def run(item: T) -> R:
            if semaphore is None:
                return await fn(item)
            async with semaphore:
                return await fn(item)

        tasks = [asyncio.create_task(run(item)) for item in items]
        if not tasks:
            return []

        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
