"""Persisted UI preferences."""

from __future__ import annotations

from restaurant_console import config
from restaurant_console.observable import Observable, ReadOnlyObservable
from restaurant_console.persistence import KeyValueStore

THEMES = ("light", "dark")


class ThemePreference:
    """Light/dark theme kept under the ``theme`` key; anything else reads as light."""

    def __init__(self, storage: KeyValueStore) -> None:
        self._storage = storage
        saved = storage.get(config.THEME_KEY)
        self._theme = Observable(saved if saved in THEMES else "light")

    @property
    def stream(self) -> ReadOnlyObservable[str]:
        return self._theme.read_only()

    def current(self) -> str:
        return self._theme.get_snapshot()

    def toggle(self) -> str:
        theme = "dark" if self.current() == "light" else "light"
        self._storage.set(config.THEME_KEY, theme)
        self._theme.set(theme)
        return theme
