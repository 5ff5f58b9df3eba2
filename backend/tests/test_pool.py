"""Tests for the fail-fast worker pool."""

import asyncio

import pytest

from dbtdoc.generation.pool import WorkerPool


async def test_map_preserves_input_order():
    async def slow_square(n: int) -> int:
        await asyncio.sleep(0.001 * (5 - n))
        return n * n

    assert await WorkerPool(2).map(slow_square, range(5)) == [0, 1, 4, 9, 16]


async def test_map_respects_limit():
    running = 0
    peak = 0

    async def track(_: int) -> None:
        nonlocal running, peak
        running += 1
        peak = max(peak, running)
        await asyncio.sleep(0.01)
        running -= 1

    await WorkerPool(3).map(track, range(12))

    assert peak == 3


async def test_unbounded_pool_runs_everything_at_once():
    running = 0
    peak = 0

    async def track(_: int) -> None:
        nonlocal running, peak
        running += 1
        peak = max(peak, running)
        await asyncio.sleep(0.01)
        running -= 1

    await WorkerPool(None).map(track, range(7))

    assert peak == 7


async def test_first_failure_cancels_remaining_tasks():
    started: list[int] = []
    finished: list[int] = []

    async def work(n: int) -> int:
        started.append(n)
        if n == 0:
            raise RuntimeError("boom")
        await asyncio.sleep(0.05)
        finished.append(n)
        return n

    with pytest.raises(RuntimeError, match="boom"):
        await WorkerPool(2).map(work, range(6))

    assert finished == []
    assert len(started) < 6


async def test_empty_input_returns_empty_list():
    async def never(_: int) -> int:
        raise AssertionError("not called")

    assert await WorkerPool(4).map(never, []) == []


def test_limit_must_be_positive():
    with pytest.raises(ValueError):
        WorkerPool(0)
