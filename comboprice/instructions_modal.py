"""Instruction tiles modal screen."""

from __future__ import annotations

from typing import Iterable

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static

from comboprice.data import active_tiles
from comboprice.models import InstructionTile, PizzaSelection, WingSelection
from comboprice.rendering import format_step_label
from comboprice.session import ComboSession


class InstructionsModal(ModalScreen[None]):
    """Centered modal to toggle cooking instructions on the current pizza or wings."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("ctrl+c", "close", "Close"),
        ("j", "move_cursor(1)", "Next"),
        ("k", "move_cursor(-1)", "Previous"),
        ("up", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("enter", "toggle_current", "Toggle"),
        ("space", "toggle_current", "Toggle"),
    ]

    CSS = """
    InstructionsModal {
        align: center middle;
        background: $background 60%;
    }

    #instructions-dialog {
        width: 56;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #instructions-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #instructions-body {
        margin-bottom: 1;
        color: white;
    }

    #instructions-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    cursor_index = reactive(0)

    def __init__(self, session: ComboSession, tiles: Iterable[InstructionTile]) -> None:
        super().__init__()
        self.session = session
        self.tiles = active_tiles(tiles)

    def compose(self) -> ComposeResult:
        with Container(id="instructions-dialog"):
            yield Static("Instructions", id="instructions-title")
            yield Static(id="instructions-body")
            yield Static("J/K/↑/↓ move, Enter toggle, Esc/q/Ctrl+C close", id="instructions-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def action_close(self) -> None:
        self.dismiss()

    def action_move_cursor(self, delta: int) -> None:
        if not self.tiles:
            return
        self.cursor_index = (self.cursor_index + delta) % len(self.tiles)
        self._refresh_content()

    def action_toggle_current(self) -> None:
        if not self.tiles:
            return
        self.session.toggle_instruction(self.tiles[self.cursor_index].id)
        self._refresh_content()

    def _selected_ids(self) -> list[str]:
        current = self.session.selection
        if isinstance(current, (PizzaSelection, WingSelection)):
            return current.instructions
        return []

    def _refresh_content(self) -> None:
        body = self.query_one("#instructions-body", Static)

        content = Text(style="white")
        content.append_text(format_step_label(self.session.current_step, self.session.ordinal()))
        content.append("\n\n")
        if not self.tiles:
            content.append("No instructions available", style="dim")
            body.update(content)
            return

        selected = self._selected_ids()
        for idx, tile in enumerate(self.tiles):
            if idx > 0:
                content.append("\n")
            pointer = "➤ " if idx == self.cursor_index else "  "
            is_checked = tile.id in selected
            checked = "[x]" if is_checked else "[ ]"
            content.append(f"{pointer}{checked} {tile.label}", style="bold white" if is_checked else "white")
        body.update(content)
