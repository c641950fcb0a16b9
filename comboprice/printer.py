"""Kitchen ticket for a finalized combo, printable on a USB ESC/POS printer."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Mapping

from comboprice.config import (
    PRINTER_FONT_ENV,
    PRINTER_FONT_PATH,
    PRINTER_FONT_SIZE,
    PRINTER_LEFT_INDENT_PX,
    PRINTER_TAIL_SPACER_PX,
    PRINTER_USB_PRODUCT_ID,
    PRINTER_USB_VENDOR_ID,
    PRINTER_WIDTH_PX,
)
from comboprice.data import instruction_labels
from comboprice.models import (
    ComboResult,
    FrozenDipping,
    FrozenPizza,
    FrozenSized,
    FrozenStep,
    FrozenWings,
    InstructionTile,
    PizzaSelection,
    Sauce,
)

logger = logging.getLogger(__name__)

TICKET_RULE = "-" * 29
_LINE_EXTRA_PX = 12
_LINUX_FONT_FALLBACKS = (
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/noto/NotoSans-Regular.ttf",
    "/usr/share/fonts/liberation/LiberationSans-Regular.ttf",
)


def _topping_lines(selection: PizzaSelection, indent: str) -> list[str]:
    lines: list[str] = []
    for label, entries in (("Whole", selection.whole), ("Left", selection.left), ("Right", selection.right)):
        if entries:
            lines.append(f"{indent}{label}: {', '.join(e.topping.name for e in entries)}")
    return lines


def _step_lines(
    frozen: FrozenStep,
    pizza_number: int,
    sauces_by_id: Mapping[str, Sauce],
    pizza_tiles: Iterable[InstructionTile],
    wing_tiles: Iterable[InstructionTile],
) -> list[str]:
    step = frozen.step
    if isinstance(frozen, FrozenPizza):
        label = f"Pizza {pizza_number}"
    elif isinstance(frozen, FrozenDipping):
        label = "Dipping Sauce"
    else:
        label = step.kind.title()

    detail = frozen.selection.size if isinstance(frozen, FrozenSized) else step.item_name
    if detail:
        label += f" ({detail})"
    lines = [f"  - {label}"]

    if isinstance(frozen, FrozenPizza):
        if not frozen.selection.is_empty:
            lines.append("    Toppings:")
            lines.extend(_topping_lines(frozen.selection, "      "))
        if frozen.selection.is_half_and_half:
            lines.append("    Half & Half Pizza")
        labels = instruction_labels(frozen.selection.instructions, pizza_tiles)
    elif isinstance(frozen, FrozenWings):
        if frozen.selection.sauces:
            lines.append(f"    Sauces: {', '.join(e.sauce.name for e in frozen.selection.sauces)}")
        labels = instruction_labels(frozen.selection.instructions, wing_tiles)
    elif isinstance(frozen, FrozenDipping):
        for sauce_id, quantity in frozen.selection.quantities.items():
            sauce = sauces_by_id.get(sauce_id)
            lines.append(f"    {quantity}x {sauce.name if sauce else sauce_id}")
        labels = []
    else:
        labels = []

    if labels:
        lines.append(f"    Instructions: {', '.join(labels)}")
    return lines


def kitchen_ticket_lines(
    result: ComboResult,
    order_number: int = 0,
    sauces_by_id: Mapping[str, Sauce] | None = None,
    pizza_tiles: Iterable[InstructionTile] = (),
    wing_tiles: Iterable[InstructionTile] = (),
) -> list[str]:
    """Plain ticket lines for the kitchen; extra charges are never shown."""
    pizza_tiles = list(pizza_tiles)
    wing_tiles = list(wing_tiles)
    lines = ["*** KITCHEN COPY ***"]
    if order_number > 0:
        lines.append(f"Order #: {order_number}")
    lines.append(TICKET_RULE)
    lines.append(result.name)

    pizza_count = 0
    for frozen in result.items:
        if isinstance(frozen, FrozenPizza):
            pizza_count += 1
        lines.extend(_step_lines(frozen, pizza_count, sauces_by_id or {}, pizza_tiles, wing_tiles))
    lines.append(TICKET_RULE)
    return lines


def resolve_printer_font_path() -> str:
    """
    Resolve a printer font path.

    Resolution order:
    1. COMBOPRICE_PRINTER_FONT_PATH (if set)
    2. PRINTER_FONT_PATH
    3. Known Linux fallbacks
    """
    env_override = os.environ.get(PRINTER_FONT_ENV, "").strip()
    candidates: list[str] = []
    if env_override:
        candidates.append(env_override)
    candidates.append(PRINTER_FONT_PATH)
    candidates.extend(_LINUX_FONT_FALLBACKS)

    seen: set[str] = set()
    for candidate in candidates:
        if not candidate or candidate in seen:
            continue
        seen.add(candidate)
        if Path(candidate).is_file():
            return candidate

    raise RuntimeError(
        f"No usable printer font found. Set {PRINTER_FONT_ENV} to a valid .ttf/.otf file. "
        f"Tried: {', '.join(seen)}"
    )


def check_printer_dependencies() -> tuple[bool, str]:
    """Check whether printer dependencies are importable."""
    try:
        from escpos.printer import Usb  # noqa: F401
        from PIL import ImageFont

        ImageFont.truetype(resolve_printer_font_path(), PRINTER_FONT_SIZE)
    except Exception as exc:
        return (False, f"Printer unavailable: {exc}")
    return (True, "Printer ready")


def render_line(text: str, font: object) -> object:
    """Render one ticket line onto a 1-bit canvas the printer width."""
    from PIL import Image, ImageDraw

    canvas_height = PRINTER_FONT_SIZE + _LINE_EXTRA_PX
    img = Image.new("1", (PRINTER_WIDTH_PX, canvas_height), color=1)
    draw = ImageDraw.Draw(img)

    bbox = draw.textbbox((0, 0), text, font=font)
    text_height = bbox[3] - bbox[1]
    # Offset by bbox top so descenders are not clipped.
    y = (canvas_height - text_height) // 2 - bbox[1]
    draw.text((PRINTER_LEFT_INDENT_PX, y), text, font=font, fill=0)
    return img


def _render_spacer(height_px: int) -> object:
    from PIL import Image

    return Image.new("1", (PRINTER_WIDTH_PX, max(1, height_px)), color=1)


def print_kitchen_ticket(lines: list[str]) -> None:
    """Print ticket lines and cut the paper."""
    if not lines:
        return

    try:
        from escpos.printer import Usb
        from PIL import ImageFont
    except Exception as exc:
        raise RuntimeError(f"Printer dependencies unavailable: {exc}") from exc

    printer = Usb(PRINTER_USB_VENDOR_ID, PRINTER_USB_PRODUCT_ID)
    font = ImageFont.truetype(resolve_printer_font_path(), PRINTER_FONT_SIZE)
    for line in lines:
        printer.image(render_line(line, font))
    printer.image(_render_spacer(PRINTER_TAIL_SPACER_PX))
    printer.cut()
    logger.info("kitchen ticket printed lines=%d", len(lines))
