"""Shared-pool allocation: equivalent units and included/extra classification."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence

from comboprice.config import DEFAULT_MAX_DIPPING, DEFAULT_SAUCE_LIMIT, DEFAULT_TOPPING_LIMIT
from comboprice.models import (
    ComboStep,
    DippingSelection,
    DippingStep,
    FrozenPizza,
    FrozenStep,
    PizzaSelection,
    PizzaStep,
    PlacedTopping,
    Placement,
    PricingMode,
    Sauce,
    WingSelection,
    WingsStep,
)

logger = logging.getLogger(__name__)

# Capacity is tracked in half units so whole (2) and half-side (1) toppings stay integral.
_WHOLE_HALVES = 2
_HALF_HALVES = 1


@dataclass(frozen=True)
class Allocation:
    """One selected unit and whether the pool covers it."""

    entry_id: str
    name: str
    price: float
    placement: Placement | None
    order: int
    included: bool

    @property
    def is_half(self) -> bool:
        return self.placement in (Placement.LEFT, Placement.RIGHT)

    @property
    def weight(self) -> float:
        return 0.5 if self.is_half else 1.0


def topping_limit(step: PizzaStep) -> int:
    return DEFAULT_TOPPING_LIMIT if step.topping_limit is None else max(0, step.topping_limit)


def sauce_limit(step: WingsStep) -> int:
    return DEFAULT_SAUCE_LIMIT if step.sauce_limit is None else max(0, step.sauce_limit)


def dipping_limit(step: DippingStep) -> int:
    return DEFAULT_MAX_DIPPING if step.max_dipping is None else max(0, step.max_dipping)


def pizza_units(selection: PizzaSelection) -> int:
    """Whole toppings count one each; every two half-side toppings count one, rounded up."""
    half_count = len(selection.left) + len(selection.right)
    return len(selection.whole) + math.ceil(half_count / 2)


def sauce_units(selection: WingSelection) -> int:
    return len(selection.sauces)


def frozen_units(frozen: FrozenStep) -> int:
    """Topping pool units a frozen step consumed; only pizzas draw on the pool."""
    if isinstance(frozen, FrozenPizza):
        return pizza_units(frozen.selection)
    return 0


def pool_limit(steps: Iterable[ComboStep]) -> int:
    """Sum of the topping caps of every pizza step of a combo."""
    return sum(topping_limit(step) for step in steps if isinstance(step, PizzaStep))


def used_by_prior_steps(slots: Sequence[FrozenStep | None], index: int) -> int:
    """Topping units consumed by frozen pizza steps that come before `index`."""
    return sum(frozen_units(frozen) for frozen in slots[:index] if frozen is not None)


def available_units(limit: int, used: int) -> int:
    return max(0, limit - used)


def _ordered_toppings(selection: PizzaSelection) -> list[tuple[PlacedTopping, Placement]]:
    entries = [(entry, Placement.WHOLE) for entry in selection.whole]
    entries.extend((entry, Placement.LEFT) for entry in selection.left)
    entries.extend((entry, Placement.RIGHT) for entry in selection.right)
    entries.sort(key=lambda pair: pair[0].order)
    return entries


def _topping_allocation(entry: PlacedTopping, placement: Placement, included: bool) -> Allocation:
    return Allocation(
        entry_id=entry.topping.id,
        name=entry.topping.name,
        price=entry.topping.price,
        placement=placement,
        order=entry.order,
        included=included,
    )


def classify_pizza(
    selection: PizzaSelection,
    available: int,
    mode: PricingMode = PricingMode.INDIVIDUAL,
) -> list[Allocation]:
    """
    Mark every selected topping as included or extra, in insertion order.

    Individual pricing walks the toppings in the order they were added and
    keeps each one while the running total (whole = 1, half side = 0.5) fits
    `available`. Flat-rate pricing only counts units, so free capacity goes to
    whole toppings first and half-side toppings second; the half-side units
    left over are the ones charged, which is never dearer than charging
    whole units.
    """
    capacity = max(0, available) * _WHOLE_HALVES
    ordered = _ordered_toppings(selection)
    included_orders: set[int] = set()

    if mode is PricingMode.FLAT:
        by_class = [pair for pair in ordered if pair[1] is Placement.WHOLE]
        by_class.extend(pair for pair in ordered if pair[1] is not Placement.WHOLE)
    else:
        by_class = ordered

    running = 0
    for entry, placement in by_class:
        cost = _WHOLE_HALVES if placement is Placement.WHOLE else _HALF_HALVES
        if mode is PricingMode.FLAT:
            if running + cost <= capacity:
                running += cost
                included_orders.add(entry.order)
            continue
        running += cost
        if running <= capacity:
            included_orders.add(entry.order)

    allocations = [_topping_allocation(entry, placement, entry.order in included_orders) for entry, placement in ordered]
    logger.debug(
        "classified pizza mode=%s available=%d units=%d extra=%d",
        mode.value,
        available,
        pizza_units(selection),
        sum(1 for a in allocations if not a.included),
    )
    return allocations


def classify_sauces(selection: WingSelection, available: int) -> list[Allocation]:
    """The first `available` sauces by insertion order are included."""
    return [
        Allocation(
            entry_id=entry.sauce.id,
            name=entry.sauce.name,
            price=entry.sauce.price,
            placement=None,
            order=entry.order,
            included=idx < available,
        )
        for idx, entry in enumerate(sorted(selection.sauces, key=lambda e: e.order))
    ]


def classify_dipping(
    selection: DippingSelection,
    sauces_by_id: Mapping[str, Sauce],
    max_dipping: int,
) -> list[Allocation]:
    """Expand quantities into single units; units past `max_dipping` are extra."""
    allocations: list[Allocation] = []
    for sauce_id, quantity in selection.quantities.items():
        sauce = sauces_by_id.get(sauce_id)
        name = sauce.name if sauce is not None else sauce_id
        price = sauce.price if sauce is not None else 0.0
        for _ in range(quantity):
            unit = len(allocations)
            allocations.append(
                Allocation(
                    entry_id=sauce_id,
                    name=name,
                    price=price,
                    placement=None,
                    order=unit,
                    included=unit < max_dipping,
                )
            )
    return allocations


def live_flags(allocations: Iterable[Allocation]) -> list[dict[str, object]]:
    """The `{id, included}` pairs the UI uses for colour coding."""
    return [{"id": a.entry_id, "included": a.included} for a in allocations]


def extra_ids(allocations: Iterable[Allocation]) -> set[str]:
    return {a.entry_id for a in allocations if not a.included}
