"""Rich rendering helpers for live classification and charge summaries."""

from __future__ import annotations

from typing import Iterable

from rich.text import Text

from comboprice.ledger import Allocation
from comboprice.models import ComboStep, FrozenStep, Placement
from comboprice.session import ComboSession, StepPreview

INCLUDED_STYLE = "bold #0b1f0f on #5fbf72"
EXTRA_STYLE = "bold #ffffff on #b23a48"

_PLACEMENT_TAGS = {Placement.WHOLE: "W", Placement.LEFT: "L", Placement.RIGHT: "R"}


def kind_badge_style(kind: str) -> str:
    """Return a consistent badge style for step kinds."""
    if kind == "pizza":
        return "bold #ffffff on #b23a48"
    if kind == "wings":
        return "bold #ffffff on #c8702a"
    if kind == "dipping":
        return "bold #ffffff on #2f6db5"
    return "bold #0b1f0f on #5fbf72"


def format_money(amount: float) -> str:
    return f"${amount:.2f}"


def step_title(step: ComboStep, ordinal: int) -> str:
    """`Pizza 2`, `Wings 1`, or the configured item name for sizes and dips."""
    if step.kind in {"pizza", "wings"}:
        base = f"{step.kind.title()} {ordinal}"
        return f"{base} - {step.item_name}" if step.item_name else base
    return step.item_name or step.kind.title()


def format_step_label(step: ComboStep, ordinal: int) -> Text:
    text = Text()
    text.append(step.kind[0].upper(), style=kind_badge_style(step.kind))
    text.append(f" {step_title(step, ordinal)}")
    return text


def format_allocation(allocation: Allocation) -> Text:
    """One selected unit, green when the pool covers it, red when it is extra."""
    label = allocation.name
    if allocation.placement is not None:
        label = f"{_PLACEMENT_TAGS[allocation.placement]}:{label}"
    style = INCLUDED_STYLE if allocation.included else EXTRA_STYLE
    return Text(f" {label} ", style=style)


def format_allocations(allocations: Iterable[Allocation]) -> Text:
    text = Text()
    for idx, allocation in enumerate(allocations):
        if idx > 0:
            text.append(" ")
        text.append_text(format_allocation(allocation))
    return text


def format_preview(preview: StepPreview) -> Text:
    """Tags plus a `used/available` and extra-charge line."""
    text = Text()
    if preview.allocations:
        text.append_text(format_allocations(preview.allocations))
        text.append("\n")
    text.append(f"{preview.units}/{preview.available} included", style="bold")
    if preview.used_by_prior:
        text.append(f" ({preview.used_by_prior} used by earlier items)", style="dim")
    if preview.extra_charge > 0:
        text.append("  Extra ")
        text.append(f"+{format_money(preview.extra_charge)}", style="bold red")
    return text


def format_frozen_summary(frozen: FrozenStep, ordinal: int) -> Text:
    text = format_step_label(frozen.step, ordinal)
    if frozen.extra_charge > 0:
        text.append(f"  +{format_money(frozen.extra_charge)}", style="red")
    else:
        text.append("  ✓", style="green")
    return text


def format_charges_summary(session: ComboSession) -> Text:
    """Per-step frozen charges, the live step's charge and the running total."""
    text = Text()
    for idx, frozen in enumerate(session.draft.slots):
        if frozen is None or not frozen.extra_charge:
            continue
        text.append(f"{step_title(frozen.step, session.ordinal(idx))}: ")
        text.append(f"+{format_money(frozen.extra_charge)}\n", style="red")

    live = session.preview().extra_charge if session.is_open else 0.0
    if live > 0:
        text.append(f"{step_title(session.current_step, session.ordinal())} (current): ")
        text.append(f"+{format_money(live)}\n", style="red")

    text.append("Total Extra: ", style="bold")
    text.append(format_money(session.total_extra_charges + live), style="bold")
    return text
