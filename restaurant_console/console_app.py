"""Main Textual app class."""

from __future__ import annotations

import logging
from dataclasses import replace

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.widgets import Header, Static

from restaurant_console import config, pipeline
from restaurant_console.access import can_access, visible_entries
from restaurant_console.catalog import CatalogStore
from restaurant_console.data import DASHBOARD_ACTIONS, DELETE_ROLES, EDIT_ROLES, SIDEBAR
from restaurant_console.errors import ConsoleError
from restaurant_console.item_modal import ItemModal
from restaurant_console.login_modal import LoginModal
from restaurant_console.models import Identity, MenuItem
from restaurant_console.navigation import Router
from restaurant_console.observable import Unsubscribe
from restaurant_console.pipeline import ALL, STATUS_FILTERS, SORT_KEYS, FilterCriteria
from restaurant_console.preferences import ThemePreference
from restaurant_console.rendering import (
    format_criteria,
    format_identity,
    format_item_row,
    format_summary,
)
from restaurant_console.session import SessionStore

logger = logging.getLogger(__name__)


class RestaurantConsoleApp(App):
    """A Textual console for signing in and administering the menu catalog."""

    TITLE = "Restaurant Console"
    SUB_TITLE = "Menu Management"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #nav-pane {
        width: 1fr;
        border: round $primary;
        padding: 1;
    }

    #content-pane {
        width: 3fr;
        border: round $secondary;
        padding: 1;
    }

    #search-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 4;
    }

    #content {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    input_state = reactive("normal")
    selected_index = reactive(0)

    BINDINGS = [
        ("up", "move_selection(-1)", "Previous"),
        ("down", "move_selection(1)", "Next"),
        ("enter", "open_selected", "Details"),
        ("backspace", "backspace_search", "Delete search char"),
        ("escape", "cancel_search", "Exit search"),
        Binding("ctrl+l", "logout", "Log out", priority=True),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, session: SessionStore, catalog: CatalogStore, router: Router, theme: ThemePreference) -> None:
        super().__init__()
        self.session = session
        self.catalog = catalog
        self.router = router
        self.theme_preference = theme
        self.criteria = FilterCriteria()
        self.system_status = ""
        self._login_open = False
        self._unsubscribers: list[Unsubscribe] = []

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="nav-pane"):
                yield Static(id="identity", classes="pane-title")
                yield Static(id="nav-list")
            with Vertical(id="content-pane"):
                yield Static(id="search-bar")
                yield Static(id="content")

    def on_mount(self) -> None:
        self.router.navigate(config.DEFAULT_ROUTE)
        self._unsubscribers = [
            self.theme_preference.stream.subscribe(self._apply_theme),
            self.session.current_identity_stream.subscribe(self._on_identity),
            self.catalog.items.subscribe(lambda _items: self._refresh_content()),
            self.catalog.is_loading.subscribe(lambda _loading: self._refresh_search_bar()),
            self.router.current_path.subscribe(self._on_path),
        ]

    def on_unmount(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    @property
    def identity(self) -> Identity | None:
        return self.session.current_identity()

    @property
    def showing_menu(self) -> bool:
        return self.router.current_path.get_snapshot().startswith("/menu")

    def on_key(self, event: Key) -> None:
        if self._login_open or self.screen is not self.screen_stack[0]:
            return
        if not event.is_printable or not event.character:
            return

        if self.input_state == "search":
            self.criteria = replace(self.criteria, search_term=self.criteria.search_term + event.character)
            self.selected_index = 0
            self._refresh_all()
            event.stop()
            return

        handlers = {
            "h": lambda: self._go(config.DEFAULT_ROUTE),
            "m": lambda: self._go("/menu"),
            "t": self.theme_preference.toggle,
            "/": self._start_search,
            "j": lambda: self.action_move_selection(1),
            "k": lambda: self.action_move_selection(-1),
            "c": self._cycle_category,
            "s": self._cycle_status,
            "o": self._cycle_sort_key,
            "r": lambda: self._set_criteria(pipeline.next_sort(self.criteria, self.criteria.sort_key)),
            "x": lambda: self._set_criteria(FilterCriteria()),
            "a": self._toggle_selected,
            "d": self._delete_selected,
        }
        handler = handlers.get(event.character.lower())
        if handler is None:
            return
        handler()
        event.stop()

    def action_move_selection(self, delta: int) -> None:
        results = self._visible_items()
        if not results:
            self.selected_index = 0
        else:
            self.selected_index = (self.selected_index + delta) % len(results)
        self._refresh_content()

    def action_open_selected(self) -> None:
        item = self._selected_item()
        if item is None:
            return
        can_edit = can_access(self.identity, EDIT_ROLES)
        self.push_screen(ItemModal(self.catalog, item, can_edit, on_status=self._set_status))

    def action_backspace_search(self) -> None:
        if self.input_state != "search" or not self.criteria.search_term:
            return
        self._set_criteria(replace(self.criteria, search_term=self.criteria.search_term[:-1]))

    def action_cancel_search(self) -> None:
        if self.input_state != "search":
            return
        self.input_state = "normal"
        self._refresh_search_bar()

    def action_logout(self) -> None:
        self.session.logout()
        self.criteria = FilterCriteria()
        self.selected_index = 0
        self.router.redirect(config.LOGIN_ROUTE)

    def _go(self, path: str) -> None:
        if not self.router.navigate(path):
            self._set_status(f"Access to {path} denied")

    def _start_search(self) -> None:
        if not self.showing_menu:
            return
        self.input_state = "search"
        self._refresh_search_bar()

    def _set_criteria(self, criteria: FilterCriteria) -> None:
        self.criteria = criteria
        self.selected_index = 0
        self._refresh_all()

    def _cycle_category(self) -> None:
        options = [ALL] + [category.id for category in self.catalog.categories.get_snapshot()]
        current = options.index(self.criteria.category) if self.criteria.category in options else 0
        self._set_criteria(replace(self.criteria, category=options[(current + 1) % len(options)]))

    def _cycle_status(self) -> None:
        current = STATUS_FILTERS.index(self.criteria.status)
        self._set_criteria(replace(self.criteria, status=STATUS_FILTERS[(current + 1) % len(STATUS_FILTERS)]))

    def _cycle_sort_key(self) -> None:
        current = SORT_KEYS.index(self.criteria.sort_key)
        self._set_criteria(pipeline.next_sort(self.criteria, SORT_KEYS[(current + 1) % len(SORT_KEYS)]))

    def _toggle_selected(self) -> None:
        item = self._selected_item()
        if item is None:
            return
        if not can_access(self.identity, EDIT_ROLES):
            self._set_status("Your role cannot change availability")
            return
        self.run_worker(self._run_catalog_op("toggle", item), group="catalog")

    def _delete_selected(self) -> None:
        item = self._selected_item()
        if item is None:
            return
        if not can_access(self.identity, DELETE_ROLES):
            self._set_status("Your role cannot delete menu items")
            return
        self.run_worker(self._run_catalog_op("delete", item), group="catalog")

    async def _run_catalog_op(self, op: str, item: MenuItem) -> None:
        try:
            if op == "toggle":
                updated = await self.catalog.toggle_availability(item.id)
                self._set_status(f"{updated.name} is now {'available' if updated.is_available else 'unavailable'}")
            else:
                await self.catalog.delete_item(item.id)
                self._set_status(f"Deleted {item.name}")
        except ConsoleError as exc:
            logger.warning("%s failed for item id=%s: %s", op, item.id, exc)
            self._set_status(f"{op.title()} failed: {exc}")

    async def _refresh_catalog(self) -> None:
        items = await self.catalog.list_items()
        self._set_status(f"Loaded {len(items)} menu items")

    def _set_status(self, message: str) -> None:
        self.system_status = message
        self._refresh_search_bar()

    def _apply_theme(self, theme: str) -> None:
        self.theme = "textual-dark" if theme == "dark" else "textual-light"

    def _on_identity(self, identity: Identity | None) -> None:
        self.sub_title = identity.full_name if identity is not None else "Signed out"
        self._refresh_all()

    def _on_path(self, path: str) -> None:
        if path == config.LOGIN_ROUTE:
            if not self._login_open:
                self._login_open = True
                self.push_screen(LoginModal(self.session), callback=self._after_login)
            return
        if path.startswith("/menu"):
            self.run_worker(self._refresh_catalog(), group="catalog")
        self._refresh_all()

    def _after_login(self, identity: Identity | None) -> None:
        self._login_open = False
        destination = self.router.complete_login()
        logger.info("signed in id=%s landing=%s", identity.id if identity else None, destination)

    def _visible_items(self) -> list[MenuItem]:
        return pipeline.apply(self.catalog.items.get_snapshot(), self.criteria)

    def _selected_item(self) -> MenuItem | None:
        if not self.showing_menu:
            return None
        results = self._visible_items()
        if not (0 <= self.selected_index < len(results)):
            return None
        return results[self.selected_index]

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        return max(1, height)

    def _window_bounds(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        if selected is None:
            start = 0
        else:
            start = max(0, selected - rows // 2)
            start = min(start, total - rows)

        return (start, start + rows)

    def _refresh_all(self) -> None:
        self._refresh_nav()
        self._refresh_search_bar()
        self._refresh_content()

    def _refresh_nav(self) -> None:
        try:
            identity_widget = self.query_one("#identity", Static)
            nav_widget = self.query_one("#nav-list", Static)
        except NoMatches:
            return
        identity_widget.update(format_identity(self.identity))

        current = self.router.current_path.get_snapshot()
        lines = Text()
        for idx, entry in enumerate(visible_entries(self.identity, SIDEBAR)):
            if idx > 0:
                lines.append("\n")
            active = current.startswith(entry.route)
            lines.append(("➤ " if active else "  ") + entry.label, style="bold" if active else "")
        nav_widget.update(lines)

    def _refresh_search_bar(self) -> None:
        try:
            bar = self.query_one("#search-bar", Static)
        except NoMatches:
            return
        status = self.system_status or "Ready"
        if self.catalog.is_loading.get_snapshot():
            status = f"Loading... {status}"

        if not self.showing_menu:
            bar.update(f"H dashboard, M menu, T theme, Ctrl+L log out.\n{status}")
            return

        category = next(
            (c.name for c in self.catalog.categories.get_snapshot() if c.id == self.criteria.category),
            None,
        )
        text = Text()
        if self.input_state == "search":
            text.append(" SEARCH ", style="bold #ffffff on #2f6db5")
            text.append(f" {self.criteria.search_term}|\n")
        else:
            text.append("/ search, C category, S status, O sort, R reverse, X reset, A toggle, D delete\n")
        text.append(format_criteria(self.criteria, category), style="dim")
        text.append(f"\n{status}")
        bar.update(text)

    def _refresh_content(self) -> None:
        try:
            content = self.query_one("#content", Static)
        except NoMatches:
            return
        if self.identity is None:
            content.update("")
            return
        if not self.showing_menu:
            self._refresh_dashboard(content)
            return

        results = self._visible_items()
        if not results:
            content.update("No results")
            return
        if self.selected_index >= len(results):
            self.selected_index = 0

        start, end = self._window_bounds(len(results), self._visible_rows(content) - 1, self.selected_index)
        lines = Text()
        lines.append(format_summary(pipeline.summarize(results)), style="dim")
        if start > 0:
            lines.append("\n⋮", style="dim")
        for idx in range(start, end):
            lines.append("\n")
            lines.append("➤ " if idx == self.selected_index else "  ")
            lines.append_text(format_item_row(results[idx]))
        if end < len(results):
            lines.append("\n⋮", style="dim")
        content.update(lines)

    def _refresh_dashboard(self, content: Static) -> None:
        lines = Text()
        lines.append("Quick actions\n", style="bold")
        for entry in visible_entries(self.identity, DASHBOARD_ACTIONS):
            lines.append(f"  • {entry.label}  ({entry.route})\n")
        lines.append("\n")
        lines.append(format_summary(pipeline.summarize(self.catalog.items.get_snapshot())))
        content.update(lines)
