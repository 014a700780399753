from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from restaurant_console.catalog import CatalogStore
from restaurant_console.navigation import Router
from restaurant_console.persistence import MemoryKeyValueStore
from restaurant_console.scheduler import AsyncioScheduler
from restaurant_console.session import SessionStore

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class TickingClock:
    """Returns NOW, NOW + 1 minute, NOW + 2 minutes, ... on successive calls."""

    def __init__(self, start: datetime = NOW) -> None:
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(minutes=1)
        return value


@pytest.fixture
def run():
    """Drive a zero-arg callable returning an awaitable to completion on a fresh loop."""

    def _run(make):
        async def runner():
            return await make()

        return asyncio.run(runner())

    return _run


@pytest.fixture
def storage() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def scheduler() -> AsyncioScheduler:
    return AsyncioScheduler(scale=0)


@pytest.fixture
def session(storage, scheduler) -> SessionStore:
    return SessionStore(storage, scheduler, clock=lambda: NOW)


@pytest.fixture
def catalog(scheduler) -> CatalogStore:
    return CatalogStore(scheduler, clock=lambda: NOW)


@pytest.fixture
def router(session, storage) -> Router:
    return Router(session, storage)
