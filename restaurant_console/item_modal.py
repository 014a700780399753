"""Menu item detail modal screen."""

from __future__ import annotations

from typing import Callable

from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Static

from restaurant_console.catalog import CatalogStore
from restaurant_console.errors import ConsoleError
from restaurant_console.models import MenuItem
from restaurant_console.observable import Unsubscribe
from restaurant_console.rendering import format_item_detail


class ItemModal(ModalScreen[None]):
    """Centered modal showing one item, live while it stays open."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("a", "toggle_availability", "Toggle availability"),
    ]

    CSS = """
    ItemModal {
        align: center middle;
        background: $background 60%;
    }

    #item-dialog {
        width: 72;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #item-help {
        margin-top: 1;
        color: $text-muted;
    }
    """

    def __init__(self, catalog: CatalogStore, item: MenuItem, can_edit: bool, on_status: Callable[[str], None]) -> None:
        super().__init__()
        self.catalog = catalog
        self.item = item
        self.can_edit = can_edit
        self.on_status = on_status
        self._unsubscribe: Unsubscribe | None = None

    def compose(self) -> ComposeResult:
        with Container(id="item-dialog"):
            yield Static(id="item-body")
            yield Static(id="item-help")

    def on_mount(self) -> None:
        self._unsubscribe = self.catalog.items.subscribe(self._on_items)

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()

    def action_close(self) -> None:
        self.dismiss()

    def action_toggle_availability(self) -> None:
        if not self.can_edit:
            self.on_status("Your role cannot change availability")
            return
        self.run_worker(self._toggle(), group="catalog")

    async def _toggle(self) -> None:
        try:
            updated = await self.catalog.toggle_availability(self.item.id)
        except ConsoleError as exc:
            self.on_status(f"Toggle failed: {exc}")
            return
        self.on_status(f"{updated.name} is now {'available' if updated.is_available else 'unavailable'}")

    def _on_items(self, items: tuple[MenuItem, ...]) -> None:
        for item in items:
            if item.id == self.item.id:
                self.item = item
                break
        else:
            self.on_status(f"{self.item.name} was removed")
            self.dismiss()
            return
        self.query_one("#item-body", Static).update(format_item_detail(self.item))
        help_text = "A toggle availability, Esc/q close" if self.can_edit else "Esc/q close"
        self.query_one("#item-help", Static).update(help_text)
