"""Sign-in modal screen."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from restaurant_console.errors import ConsoleError
from restaurant_console.models import Identity
from restaurant_console.session import SessionStore


class LoginModal(ModalScreen[Identity]):
    """Collect email and password, then sign in through the session store."""

    CSS = """
    LoginModal {
        align: center middle;
        background: $background 60%;
    }

    #login-dialog {
        width: 60;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #login-title {
        text-style: bold;
        margin-bottom: 1;
    }

    #login-email, #login-password {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
    }

    #login-error {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #login-help {
        color: $text-muted;
    }
    """

    FIELDS = ("email", "password")

    def __init__(self, session: SessionStore) -> None:
        super().__init__()
        self.session = session
        self.values = {"email": "", "password": ""}
        self.active_field = "email"
        self.error = ""
        self.busy = False

    def compose(self) -> ComposeResult:
        with Container(id="login-dialog"):
            yield Static("Sign In", id="login-title")
            yield Static(id="login-email")
            yield Static(id="login-password")
            yield Static(id="login-error")
            yield Static("Tab/↑/↓ switch field. Enter sign in. Ctrl+Q quit.", id="login-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if self.busy:
            event.stop()
            return

        if event.key in {"tab", "up", "down"}:
            index = self.FIELDS.index(self.active_field)
            self.active_field = self.FIELDS[(index + 1) % len(self.FIELDS)]
            self._refresh_content()
            event.stop()
            return

        if event.key == "enter":
            self._submit()
            event.stop()
            return

        if event.key == "backspace":
            self.values[self.active_field] = self.values[self.active_field][:-1]
            self.error = ""
            self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character:
            self.values[self.active_field] += event.character
            self.error = ""
            self._refresh_content()
            event.stop()

    def _submit(self) -> None:
        email = self.values["email"].strip()
        if not email or not self.values["password"]:
            self.error = "Email and password are required."
            self._refresh_content()
            return

        self.busy = True
        self.error = "Signing in..."
        self._refresh_content()
        self.run_worker(self._login(email, self.values["password"]), exclusive=True)

    async def _login(self, email: str, password: str) -> None:
        try:
            result = await self.session.login(email, password)
        except ConsoleError as exc:
            self.busy = False
            self.error = str(exc)
            self.values["password"] = ""
            self.active_field = "password"
            self._refresh_content()
            return
        self.dismiss(result.identity)

    def _refresh_content(self) -> None:
        for field in self.FIELDS:
            pointer = "➤ " if field == self.active_field else "  "
            shown = self.values[field] if field == "email" else "•" * len(self.values[field])
            self.query_one(f"#login-{field}", Static).update(f"{pointer}{field.title()}: {shown}")
        self.query_one("#login-error", Static).update(self.error)
