import pytest
from conftest import LEFT, RIGHT, WHOLE, build_pizza, make_topping

from comboprice.ledger import classify_pizza
from comboprice.models import PizzaStep, PricingMode
from comboprice.pricing import (
    effective_pricing_mode,
    flat_charge,
    half_pizza_multiplier,
    individual_charge,
    pizza_charge,
    round_currency,
)


def _charge(selection, step, available):
    allocations = classify_pizza(selection, available, effective_pricing_mode(step))
    return round_currency(pizza_charge(allocations, step))


def test_round_currency_rounds_half_up():
    assert round_currency(0.125) == pytest.approx(0.13)
    assert round_currency(1.005) == pytest.approx(1.01)
    assert round_currency(2.0) == pytest.approx(2.0)


def test_fourth_whole_topping_charges_full_price():
    toppings = [make_topping(name, 1.0) for name in "abcd"]
    selection = build_pizza(*[(t, WHOLE) for t in toppings])

    assert _charge(selection, PizzaStep(topping_limit=3), 3) == pytest.approx(1.00)


def test_two_halves_each_side_within_cap_two_is_free():
    a, b, c, d = make_topping("a", 1.0), make_topping("b", 2.0), make_topping("c", 1.0), make_topping("d", 2.0)
    selection = build_pizza((a, LEFT), (b, LEFT), (c, RIGHT), (d, RIGHT))

    assert _charge(selection, PizzaStep(topping_limit=2), 2) == pytest.approx(0.0)


def test_third_left_topping_over_cap_one_charges_half_price():
    toppings = [make_topping(name, 1.0) for name in "abc"]
    selection = build_pizza(*[(t, LEFT) for t in toppings])

    assert _charge(selection, PizzaStep(topping_limit=1), 1) == pytest.approx(0.50)
    assert _charge(selection, PizzaStep(topping_limit=2), 2) == pytest.approx(0.0)


def test_flat_rate_charges_leftover_half():
    a, b, c, d = (make_topping(name, 3.0) for name in "abcd")
    selection = build_pizza((a, WHOLE), (b, LEFT), (c, RIGHT), (d, LEFT))
    step = PizzaStep(topping_limit=2, pricing_mode=PricingMode.FLAT, flat_rate_price=2.0, half_pizza_multiplier=0.5)

    assert _charge(selection, step, 2) == pytest.approx(1.00)


def test_flat_rate_is_never_dearer_than_whole_first_fill(flat_step):
    a, b, c = (make_topping(name) for name in "abc")
    selection = build_pizza((a, LEFT), (b, RIGHT), (c, WHOLE))

    # One whole fits, both halves are extra: 2 halves charged, not the whole.
    assert _charge(selection, flat_step, 1) == pytest.approx(2.0)


def test_flat_without_rate_falls_back_to_individual():
    toppings = [make_topping(name, 1.25) for name in "abcd"]
    selection = build_pizza(*[(t, WHOLE) for t in toppings])
    step = PizzaStep(topping_limit=3, pricing_mode=PricingMode.FLAT, flat_rate_price=0)

    assert effective_pricing_mode(step) is PricingMode.INDIVIDUAL
    assert _charge(selection, step, 3) == pytest.approx(1.25)


def test_half_pizza_multiplier_defaults():
    assert half_pizza_multiplier(PizzaStep()) == pytest.approx(0.5)
    assert half_pizza_multiplier(PizzaStep(half_pizza_multiplier=0.75)) == pytest.approx(0.75)
    assert half_pizza_multiplier(PizzaStep(half_pizza_multiplier=0)) == pytest.approx(0.5)


def test_charges_ignore_included_allocations():
    toppings = [make_topping(name, 2.0) for name in "ab"]
    allocations = classify_pizza(build_pizza((toppings[0], WHOLE), (toppings[1], LEFT)), 5)

    assert individual_charge(allocations) == 0.0
    assert flat_charge(allocations, 2.0, 0.5) == 0.0


def test_charge_is_non_negative_and_zero_when_within_pool():
    toppings = [make_topping(name, 1.5) for name in "abc"]
    selection = build_pizza(*[(t, WHOLE) for t in toppings])

    for available in range(0, 5):
        charge = _charge(selection, PizzaStep(topping_limit=available), available)
        assert charge >= 0
        if available >= 3:
            assert charge == 0
