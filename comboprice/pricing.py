"""Extra-charge resolution for classified selections."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from comboprice.config import CURRENCY_PLACES, DEFAULT_HALF_PIZZA_MULTIPLIER, HALF_SIDE_PRICE_FACTOR
from comboprice.ledger import Allocation
from comboprice.models import PizzaStep, PricingMode


def round_currency(amount: float) -> float:
    """Round half-up to cents."""
    quantum = Decimal(1).scaleb(-CURRENCY_PLACES)
    return float(Decimal(str(amount)).quantize(quantum, rounding=ROUND_HALF_UP))


def effective_pricing_mode(step: PizzaStep) -> PricingMode:
    """Flat pricing needs a positive flat rate; otherwise toppings are priced individually."""
    if step.pricing_mode is PricingMode.FLAT and step.flat_rate_price:
        return PricingMode.FLAT
    return PricingMode.INDIVIDUAL


def half_pizza_multiplier(step: PizzaStep) -> float:
    """A missing or zero multiplier falls back to the default."""
    return step.half_pizza_multiplier or DEFAULT_HALF_PIZZA_MULTIPLIER


def individual_charge(allocations: Iterable[Allocation]) -> float:
    """Full price for extra whole toppings, half price for extra half-side toppings."""
    charge = 0.0
    for allocation in allocations:
        if allocation.included:
            continue
        factor = HALF_SIDE_PRICE_FACTOR if allocation.is_half else 1.0
        charge += allocation.price * factor
    return charge


def flat_charge(allocations: Iterable[Allocation], flat_rate_price: float, multiplier: float) -> float:
    """A fixed price per extra unit; which toppings were chosen does not matter."""
    extra_whole = 0
    extra_half = 0
    for allocation in allocations:
        if allocation.included:
            continue
        if allocation.is_half:
            extra_half += 1
        else:
            extra_whole += 1
    return extra_whole * flat_rate_price + extra_half * flat_rate_price * multiplier


def pizza_charge(allocations: Iterable[Allocation], step: PizzaStep) -> float:
    if effective_pricing_mode(step) is PricingMode.FLAT:
        return flat_charge(allocations, float(step.flat_rate_price or 0.0), half_pizza_multiplier(step))
    return individual_charge(allocations)


def unit_charge(allocations: Iterable[Allocation]) -> float:
    """Wings and dipping: each extra unit costs its own price."""
    return sum(a.price for a in allocations if not a.included)
