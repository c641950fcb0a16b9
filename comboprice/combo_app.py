"""Textual front-end that drives one combo customization session."""

from __future__ import annotations

import logging

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.reactive import reactive
from textual.widgets import Header, Static

from comboprice.data import (
    ALL,
    DIETARY_FILTERS,
    PIZZA_INSTRUCTION_TILES,
    SPICE_FILTERS,
    WING_INSTRUCTION_TILES,
    categories,
    filter_by_category,
    filter_by_dietary,
    filter_by_spice,
)
from comboprice.instructions_modal import InstructionsModal
from comboprice.ledger import extra_ids
from comboprice.models import (
    ComboDefinition,
    ComboResult,
    DippingSelection,
    DrinkStep,
    InstructionTile,
    PizzaSelection,
    Placement,
    Sauce,
    SideStep,
    SizeSelection,
    Topping,
    WingSelection,
)
from comboprice.order_number_modal import OrderNumberModal
from comboprice.printer import check_printer_dependencies, kitchen_ticket_lines, print_kitchen_ticket
from comboprice.rendering import (
    format_charges_summary,
    format_frozen_summary,
    format_money,
    format_preview,
    format_step_label,
)
from comboprice.session import ComboSession

logger = logging.getLogger(__name__)

DIP_CATEGORY = "Dip"
_PLACEMENT_CYCLE = (Placement.WHOLE, Placement.LEFT, Placement.RIGHT)


class ComboApp(App):
    """Step through a combo, toggling toppings, sauces, dips and sizes."""

    TITLE = "Combo Builder"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #steps-pane {
        width: 2fr;
        border: round $primary;
        padding: 1;
    }

    #catalog-pane {
        width: 3fr;
        border: round $secondary;
        padding: 1;
    }

    #filter-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 3;
    }

    #catalog {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #selection {
        height: auto;
        border: tall $surface;
        padding: 0 1;
    }

    #status {
        height: 2;
        padding: 0 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    cursor_index = reactive(0)
    placement = reactive(Placement.WHOLE)
    category = reactive(ALL)
    dietary = reactive(ALL)

    BINDINGS = [
        ("j", "move_cursor(1)", "Next"),
        ("k", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("up", "move_cursor(-1)", "Previous"),
        ("enter", "toggle_current", "Toggle"),
        ("space", "toggle_current", "Toggle"),
        ("plus", "change_dipping(1)", "More"),
        ("minus", "change_dipping(-1)", "Less"),
        ("w", "set_placement('whole')", "Whole"),
        ("l", "set_placement('left')", "Left"),
        ("r", "set_placement('right')", "Right"),
        ("left", "shift_placement(-1)", "Placement left"),
        ("right", "shift_placement(1)", "Placement right"),
        ("c", "cycle_category", "Category"),
        ("d", "cycle_dietary", "Filter"),
        ("i", "open_instructions", "Instructions"),
        ("n", "complete_step", "Next step"),
        ("b", "go_back", "Back"),
        Binding("ctrl+s", "print_ticket", "Print", priority=True),
        ("escape", "cancel_session", "Cancel"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        definition: ComboDefinition,
        toppings: list[Topping],
        sauces: list[Sauce],
        pizza_tiles: list[InstructionTile] | None = None,
        wing_tiles: list[InstructionTile] | None = None,
    ) -> None:
        super().__init__()
        self.session = ComboSession(definition, toppings, sauces)
        self.toppings = list(toppings)
        self.sauces = list(sauces)
        self.pizza_tiles = PIZZA_INSTRUCTION_TILES if pizza_tiles is None else pizza_tiles
        self.wing_tiles = WING_INSTRUCTION_TILES if wing_tiles is None else wing_tiles
        self.result: ComboResult | None = None
        self.system_status = ""
        self.sub_title = definition.name

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="steps-pane"):
                yield Static("Steps", classes="pane-title")
                yield Static(id="steps-list")
                yield Static(id="charges")
            with Vertical(id="catalog-pane"):
                yield Static(id="filter-bar")
                yield Static(id="catalog")
                yield Static(id="selection")
        yield Static(id="status")

    def on_mount(self) -> None:
        _, msg = check_printer_dependencies()
        self.system_status = msg
        logger.debug("on_mount printer_status=%r", msg)
        self._refresh_all()

    def _modal_open(self) -> bool:
        return isinstance(self.screen, (InstructionsModal, OrderNumberModal))

    def _rows(self) -> list[tuple[str, str, str]]:
        """(entry id, label, price label) rows for the current step."""
        if not self.session.is_open:
            return []
        current = self.session.selection
        if isinstance(current, PizzaSelection):
            entries: list[Topping] | list[Sauce] = filter_by_dietary(
                filter_by_category(self.toppings, self.category), self.dietary
            )
        elif isinstance(current, WingSelection):
            entries = filter_by_spice([s for s in self.sauces if s.category != DIP_CATEGORY], self.dietary)
        elif isinstance(current, DippingSelection):
            entries = [s for s in self.sauces if s.category == DIP_CATEGORY] or list(self.sauces)
        else:
            step = self.session.current_step
            sizes = step.available_sizes if isinstance(step, (DrinkStep, SideStep)) else ()
            return [(size, size, "") for size in sizes]
        return [(entry.id, entry.name, format_money(entry.price)) for entry in entries]

    def action_move_cursor(self, delta: int) -> None:
        if self._modal_open():
            return
        rows = self._rows()
        if not rows:
            return
        self.cursor_index = (self.cursor_index + delta) % len(rows)
        self._refresh_catalog()

    def action_toggle_current(self) -> None:
        if self._modal_open():
            return
        rows = self._rows()
        if not rows:
            return
        entry_id = rows[min(self.cursor_index, len(rows) - 1)][0]
        current = self.session.selection
        if isinstance(current, PizzaSelection):
            self.session.toggle_topping(entry_id, self.placement)
        elif isinstance(current, WingSelection):
            self.session.toggle_sauce(entry_id)
        elif isinstance(current, DippingSelection):
            self.session.change_dipping(entry_id, 1)
        elif isinstance(current, SizeSelection):
            self.session.select_size(entry_id)
        logger.debug("toggle step=%d entry=%s", self.session.current_index, entry_id)
        self._refresh_all()

    def action_change_dipping(self, delta: int) -> None:
        if self._modal_open() or not isinstance(self.session.selection, DippingSelection):
            return
        rows = self._rows()
        if not rows:
            return
        self.session.change_dipping(rows[min(self.cursor_index, len(rows) - 1)][0], delta)
        self._refresh_all()

    def action_set_placement(self, value: str) -> None:
        if self._modal_open():
            return
        self.placement = Placement(value)
        self._refresh_filter_bar()

    def action_shift_placement(self, delta: int) -> None:
        if self._modal_open():
            return
        idx = _PLACEMENT_CYCLE.index(self.placement)
        self.placement = _PLACEMENT_CYCLE[max(0, min(len(_PLACEMENT_CYCLE) - 1, idx + delta))]
        self._refresh_filter_bar()

    def action_cycle_category(self) -> None:
        if self._modal_open() or not isinstance(self.session.selection, PizzaSelection):
            return
        options = categories(self.toppings)
        self.category = options[(options.index(self.category) + 1) % len(options)] if self.category in options else ALL
        self.cursor_index = 0
        self._refresh_all()

    def action_cycle_dietary(self) -> None:
        if self._modal_open():
            return
        if isinstance(self.session.selection, PizzaSelection):
            options = DIETARY_FILTERS
        elif isinstance(self.session.selection, WingSelection):
            options = SPICE_FILTERS
        else:
            return
        self.dietary = options[(options.index(self.dietary) + 1) % len(options)] if self.dietary in options else ALL
        self.cursor_index = 0
        self._refresh_all()

    def action_open_instructions(self) -> None:
        if self._modal_open() or not self.session.is_open:
            return
        current = self.session.selection
        if isinstance(current, PizzaSelection):
            tiles = self.pizza_tiles
        elif isinstance(current, WingSelection):
            tiles = self.wing_tiles
        else:
            return
        self.push_screen(InstructionsModal(self.session, tiles), callback=lambda _: self._refresh_all())

    def action_complete_step(self) -> None:
        if self._modal_open() or not self.session.is_open:
            return
        result = self.session.complete_step()
        self._reset_step_view()
        if result is not None:
            self.result = result
            self.system_status = f"Done: {result.name} extra {format_money(result.extra_charges)} (Ctrl+S print)"
        self._refresh_all()

    def action_go_back(self) -> None:
        if self._modal_open() or not self.session.is_open:
            return
        self.session.go_back()
        self._reset_step_view()
        self._refresh_all()

    def action_cancel_session(self) -> None:
        if self._modal_open() or not self.session.is_open:
            return
        self.session.cancel()
        self.system_status = "Customization cancelled"
        self._refresh_all()

    def action_print_ticket(self) -> None:
        if self._modal_open():
            return
        if self.result is None:
            self.system_status = "Finish every step before printing"
            self._refresh_status()
            return
        self.push_screen(OrderNumberModal(), callback=self._print_with_number)

    def _print_with_number(self, order_number: int | None) -> None:
        if order_number is None or self.result is None:
            return
        lines = kitchen_ticket_lines(
            self.result,
            order_number,
            sauces_by_id=self.session.sauces_by_id,
            pizza_tiles=self.pizza_tiles,
            wing_tiles=self.wing_tiles,
        )
        try:
            print_kitchen_ticket(lines)
        except Exception as exc:
            self.system_status = f"Print failed: {exc}"
            logger.warning("print failed order_number=%d error=%r", order_number, exc)
        else:
            self.system_status = f"Printed ticket #{order_number}" if order_number else "Printed ticket"
        self._refresh_status()

    def _reset_step_view(self) -> None:
        self.cursor_index = 0
        self.placement = Placement.WHOLE
        self.category = ALL
        self.dietary = ALL

    def _refresh_all(self) -> None:
        self._refresh_steps()
        self._refresh_filter_bar()
        self._refresh_catalog()
        self._refresh_selection()
        self._refresh_status()

    def _refresh_steps(self) -> None:
        try:
            steps_widget = self.query_one("#steps-list", Static)
            charges_widget = self.query_one("#charges", Static)
        except NoMatches:
            return

        lines = Text()
        for idx, step in enumerate(self.session.steps):
            if idx > 0:
                lines.append("\n")
            is_current = self.session.is_open and idx == self.session.current_index
            lines.append("➤ " if is_current else "  ")
            frozen = self.session.draft.slots[idx]
            if frozen is not None:
                lines.append_text(format_frozen_summary(frozen, self.session.ordinal(idx)))
            else:
                lines.append_text(format_step_label(step, self.session.ordinal(idx)))
        steps_widget.update(lines)
        charges_widget.update(format_charges_summary(self.session) if not self.session.cancelled else "")

    def _refresh_filter_bar(self) -> None:
        try:
            bar = self.query_one("#filter-bar", Static)
        except NoMatches:
            return
        if not self.session.is_open:
            bar.update("Session closed. Ctrl+Q to quit.")
            return

        current = self.session.selection
        text = Text()
        if isinstance(current, PizzaSelection):
            for placement in _PLACEMENT_CYCLE:
                style = "bold reverse" if placement is self.placement else "dim"
                text.append(f" {placement.value.title()} ", style=style)
            text.append(f"  [{self.category}] [{self.dietary}]")
        elif isinstance(current, WingSelection):
            text.append(f"Sauces  [{self.dietary}]")
        elif isinstance(current, DippingSelection):
            text.append("Dipping sauces  (+/- quantity)")
        else:
            text.append("Choose a size")
        bar.update(text)

    def _refresh_catalog(self) -> None:
        try:
            catalog_widget = self.query_one("#catalog", Static)
        except NoMatches:
            return
        rows = self._rows()
        if not rows:
            catalog_widget.update("" if not self.session.is_open else "No matches")
            return
        if self.cursor_index >= len(rows):
            self.cursor_index = 0

        marks = self._selection_marks()
        extras = extra_ids(self.session.preview().allocations)
        start, end = self._window_bounds(len(rows), self._visible_rows(catalog_widget), self.cursor_index)

        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")
        for idx in range(start, end):
            entry_id, label, price = rows[idx]
            if idx > start:
                lines.append("\n")
            pointer = "➤ " if idx == self.cursor_index else "  "
            mark = marks.get(entry_id, "")
            style = ""
            if mark:
                style = "bold red" if entry_id in extras else "bold green"
            lines.append(f"{pointer}[{mark or ' '}] {label}", style=style)
            if price:
                lines.append(f"  {price}", style="dim")
        if end < len(rows):
            lines.append("\n⋮", style="dim")
        catalog_widget.update(lines)

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        return max(1, height)

    def _window_bounds(self, total: int, rows: int, selected: int) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)
        rows = max(1, rows)
        if total <= rows:
            return (0, total)
        start = max(0, selected - rows // 2)
        start = min(start, total - rows)
        return (start, start + rows)

    def _selection_marks(self) -> dict[str, str]:
        current = self.session.selection
        if isinstance(current, PizzaSelection):
            marks = {tid: "W" for tid in current.ids(Placement.WHOLE)}
            marks.update({tid: "L" for tid in current.ids(Placement.LEFT)})
            marks.update({tid: "R" for tid in current.ids(Placement.RIGHT)})
            return marks
        if isinstance(current, WingSelection):
            return {sid: "x" for sid in current.ids()}
        if isinstance(current, DippingSelection):
            return {sid: str(qty) for sid, qty in current.quantities.items()}
        if isinstance(current, SizeSelection) and current.size:
            return {current.size: "x"}
        return {}

    def _refresh_selection(self) -> None:
        try:
            selection_widget = self.query_one("#selection", Static)
        except NoMatches:
            return
        if not self.session.is_open:
            selection_widget.update("")
            return
        selection_widget.update(format_preview(self.session.preview()))

    def _refresh_status(self) -> None:
        try:
            status = self.query_one("#status", Static)
        except NoMatches:
            return
        help_text = "Enter toggle, W/L/R side, I instructions, N next, B back, Esc cancel"
        status.update(f"{help_text}\n{self.system_status or 'Ready'}")
