from __future__ import annotations

import asyncio

import pytest

from restaurant_console.scheduler import AsyncioScheduler, ManualScheduler, rejected


def test_zero_scale_completes_in_call_order(run):
    order: list[str] = []
    scheduler = AsyncioScheduler(scale=0)

    async def scenario():
        first = scheduler.after(5.0, lambda: order.append("slow"))
        second = scheduler.after(0.1, lambda: order.append("fast"))
        await asyncio.gather(first, second)

    run(scenario)

    assert order == ["slow", "fast"]


def test_scaled_delays_let_shorter_tasks_overtake(run):
    order: list[str] = []
    scheduler = AsyncioScheduler(scale=0.01)

    async def scenario():
        first = scheduler.after(2.0, lambda: order.append("slow"))
        second = scheduler.after(0.5, lambda: order.append("fast"))
        await asyncio.gather(first, second)

    run(scenario)

    assert order == ["fast", "slow"]


def test_negative_scale_is_rejected():
    with pytest.raises(ValueError):
        AsyncioScheduler(scale=-1)


def test_manual_scheduler_fires_by_due_time_then_schedule_order(run):
    order: list[str] = []
    scheduler = ManualScheduler()

    async def scenario():
        scheduler.after(1.0, lambda: order.append("a"))
        scheduler.after(0.5, lambda: order.append("b"))
        scheduler.after(1.0, lambda: order.append("c"))

        assert scheduler.advance(0.4) == 0
        assert scheduler.advance(0.1) == 1
        assert order == ["b"]
        assert scheduler.run_all() == 2
        assert scheduler.pending == 0

    run(scenario)

    assert order == ["b", "a", "c"]


def test_effect_lands_even_when_caller_cancels(run):
    landed: list[str] = []
    scheduler = ManualScheduler()

    async def scenario():
        future = scheduler.after(1.0, lambda: landed.append("write"))
        future.cancel()
        scheduler.run_all()
        return future.cancelled()

    assert run(scenario) is True
    assert landed == ["write"]


def test_exceptions_reject_the_future(run):
    scheduler = AsyncioScheduler(scale=0)

    def boom():
        raise RuntimeError("backend down")

    with pytest.raises(RuntimeError, match="backend down"):
        run(lambda: scheduler.after(1.0, boom))


def test_rejected_future_is_already_failed(run):
    async def scenario():
        future = rejected(KeyError("missing"))
        assert future.done()
        return await future

    with pytest.raises(KeyError):
        run(scenario)
