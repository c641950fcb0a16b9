"""Selection mutations for pizza, wing, dipping and size line items."""

from __future__ import annotations

import logging

from comboprice.models import (
    DippingSelection,
    PizzaSelection,
    PlacedSauce,
    PlacedTopping,
    Placement,
    Sauce,
    SizeSelection,
    Topping,
    WingSelection,
)

logger = logging.getLogger(__name__)

_OPPOSITE_HALF = {Placement.LEFT: Placement.RIGHT, Placement.RIGHT: Placement.LEFT}


def _remove(entries: list[PlacedTopping], topping_id: str) -> bool:
    for idx, entry in enumerate(entries):
        if entry.topping.id == topping_id:
            del entries[idx]
            return True
    return False


def toggle_topping(selection: PizzaSelection, topping: Topping, placement: Placement) -> None:
    """
    Add or remove a topping at a placement.

    A topping lives in at most one of whole/left/right. Adding it to one half
    while the opposite half already holds it promotes it to the whole pizza.
    """
    target = selection.side(placement)
    if _remove(target, topping.id):
        logger.debug("topping removed id=%s placement=%s", topping.id, placement.value)
        return

    if placement is Placement.WHOLE:
        _remove(selection.left, topping.id)
        _remove(selection.right, topping.id)
        target.append(PlacedTopping(topping, selection.next_order()))
        logger.debug("topping added id=%s placement=whole", topping.id)
        return

    _remove(selection.whole, topping.id)
    target.append(PlacedTopping(topping, selection.next_order()))

    opposite = selection.side(_OPPOSITE_HALF[placement])
    if _remove(opposite, topping.id):
        _remove(target, topping.id)
        selection.whole.append(PlacedTopping(topping, selection.next_order()))
        logger.debug("topping promoted to whole id=%s", topping.id)
        return

    logger.debug("topping added id=%s placement=%s", topping.id, placement.value)


def toggle_sauce(selection: WingSelection, sauce: Sauce) -> None:
    """Add a sauce at the end of the order, or remove it if already chosen."""
    for idx, entry in enumerate(selection.sauces):
        if entry.sauce.id == sauce.id:
            del selection.sauces[idx]
            logger.debug("sauce removed id=%s", sauce.id)
            return
    selection.sauces.append(PlacedSauce(sauce, selection.next_order()))
    logger.debug("sauce added id=%s", sauce.id)


def change_dipping_quantity(selection: DippingSelection, sauce_id: str, delta: int) -> int:
    """Adjust a dipping quantity, dropping the entry when it reaches zero."""
    quantity = max(0, selection.quantities.get(sauce_id, 0) + delta)
    if quantity == 0:
        selection.quantities.pop(sauce_id, None)
    else:
        selection.quantities[sauce_id] = quantity
    return quantity


def select_size(selection: SizeSelection, size: str | None) -> None:
    selection.size = size or None


def toggle_instruction(selection: PizzaSelection | WingSelection, tile_id: str) -> None:
    if tile_id in selection.instructions:
        selection.instructions.remove(tile_id)
    else:
        selection.instructions.append(tile_id)
