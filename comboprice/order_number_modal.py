"""Order number entry modal shown before a kitchen ticket prints."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

MAX_ORDER_NUMBER = 9999


def parse_order_number(value: str) -> int:
    """Blank means an unnumbered ticket (0); otherwise 1..MAX_ORDER_NUMBER."""
    if not value.strip():
        return 0
    if not value.strip().isdigit():
        raise ValueError("Order number must contain digits only.")
    number = int(value)
    if not (1 <= number <= MAX_ORDER_NUMBER):
        raise ValueError(f"Order number must be between 1 and {MAX_ORDER_NUMBER}.")
    return number


class OrderNumberModal(ModalScreen[int | None]):
    """Ask for the ticket's order number; dismisses with None on cancel."""

    CSS = """
    OrderNumberModal {
        align: center middle;
        background: $background 60%;
    }

    #ticket-number-dialog {
        width: 52;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #ticket-number-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #ticket-number-value {
        border: heavy $secondary;
        padding: 0 1;
        color: white;
        margin-bottom: 1;
    }

    #ticket-number-error {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #ticket-number-help {
        color: #dddddd;
    }
    """

    def __init__(self) -> None:
        super().__init__()
        self.value = ""
        self.error = ""

    def compose(self) -> ComposeResult:
        with Container(id="ticket-number-dialog"):
            yield Static("Kitchen Ticket", id="ticket-number-title")
            yield Static(id="ticket-number-value")
            yield Static(id="ticket-number-error")
            yield Static("Digits, Enter print (blank = no number), Esc cancel", id="ticket-number-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key in {"escape", "q", "ctrl+c"}:
            self.dismiss(None)
        elif event.key == "enter":
            self._confirm()
        elif event.key == "backspace":
            self.value = self.value[:-1]
            self.error = ""
            self._refresh_content()
        elif event.is_printable and event.character and event.character.isdigit():
            if len(self.value) < len(str(MAX_ORDER_NUMBER)):
                self.value += event.character
            self.error = ""
            self._refresh_content()
        else:
            return
        event.stop()

    def _confirm(self) -> None:
        try:
            number = parse_order_number(self.value)
        except ValueError as exc:
            self.error = str(exc)
            self._refresh_content()
            return
        self.dismiss(number)

    def _refresh_content(self) -> None:
        self.query_one("#ticket-number-value", Static).update(f"Order #: {self.value}")
        self.query_one("#ticket-number-error", Static).update(self.error)
