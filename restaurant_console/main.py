"""Entry point for the restaurant console."""

from __future__ import annotations

from restaurant_console import config
from restaurant_console.catalog import CatalogStore
from restaurant_console.console_app import RestaurantConsoleApp
from restaurant_console.logger import init_log
from restaurant_console.navigation import Router
from restaurant_console.pipeline import use_system_collation
from restaurant_console.persistence import SqliteKeyValueStore
from restaurant_console.preferences import ThemePreference
from restaurant_console.scheduler import AsyncioScheduler
from restaurant_console.session import SessionStore


def build_app() -> RestaurantConsoleApp:
    """Wire the stores together around one session key-value store."""
    storage = SqliteKeyValueStore(config.SESSION_DB_PATH)
    scheduler = AsyncioScheduler(scale=config.LATENCY_SCALE)
    session = SessionStore(storage, scheduler)
    catalog = CatalogStore(scheduler)
    router = Router(session, storage)
    return RestaurantConsoleApp(session, catalog, router, ThemePreference(storage))


def main() -> None:
    logger = init_log()
    collation = use_system_collation()
    logger.info(
        "starting console session_db=%s latency_scale=%s collation=%s",
        config.SESSION_DB_PATH,
        config.LATENCY_SCALE,
        collation,
    )
    build_app().run()


if __name__ == "__main__":
    main()
