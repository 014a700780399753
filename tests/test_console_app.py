from __future__ import annotations

import asyncio

from conftest import NOW
from restaurant_console import config
from restaurant_console.catalog import CatalogStore
from restaurant_console.console_app import RestaurantConsoleApp
from restaurant_console.login_modal import LoginModal
from restaurant_console.models import Role
from restaurant_console.navigation import Router
from restaurant_console.persistence import MemoryKeyValueStore
from restaurant_console.preferences import ThemePreference
from restaurant_console.scheduler import AsyncioScheduler
from restaurant_console.session import SessionStore


def _build_app(storage: MemoryKeyValueStore) -> RestaurantConsoleApp:
    scheduler = AsyncioScheduler(scale=0)
    session = SessionStore(storage, scheduler, clock=lambda: NOW)
    catalog = CatalogStore(scheduler, clock=lambda: NOW)
    return RestaurantConsoleApp(session, catalog, Router(session, storage), ThemePreference(storage))


def test_sign_in_then_browse_menu():
    storage = MemoryKeyValueStore()
    app = _build_app(storage)

    async def scenario():
        async with app.run_test() as pilot:
            await pilot.pause()
            assert isinstance(app.screen, LoginModal)

            modal = app.screen
            modal.values.update(email="admin@restaurant.com", password="password123")
            modal._submit()
            for _ in range(50):
                await pilot.pause(0.01)
                if not isinstance(app.screen, LoginModal):
                    break

            assert app.session.current_identity().role == Role.ADMIN
            assert app.router.current_path.get_snapshot() == config.DEFAULT_ROUTE

            await pilot.press("m")
            await pilot.pause()
            assert app.router.current_path.get_snapshot() == "/menu"
            for _ in range(50):
                await pilot.pause(0.01)
                if app.system_status:
                    break
            assert app.system_status == "Loaded 5 menu items"

            await pilot.press("o")
            assert app.criteria.sort_key == "price"

            await pilot.press("t")
            assert storage.get(config.THEME_KEY) == "dark"

    asyncio.run(scenario())


def test_restored_session_skips_login_and_logout_returns_to_it():
    storage = MemoryKeyValueStore()
    first = _build_app(storage)

    async def sign_in():
        await first.session.login("waiter@restaurant.com", "password123")

    asyncio.run(sign_in())
    app = _build_app(storage)

    async def scenario():
        async with app.run_test() as pilot:
            await pilot.pause()
            assert not isinstance(app.screen, LoginModal)
            assert app.session.current_identity().role == Role.WAITER

            await pilot.press("m")
            await pilot.pause()
            assert app.router.current_path.get_snapshot() == config.DEFAULT_ROUTE

            app.action_logout()
            await pilot.pause()
            assert isinstance(app.screen, LoginModal)
            assert storage.get(config.TOKEN_KEY) is None

    asyncio.run(scenario())
