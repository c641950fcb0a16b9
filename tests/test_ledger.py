import random

from conftest import LEFT, RIGHT, WHOLE, build_pizza, make_sauce, make_topping

from comboprice.ledger import (
    available_units,
    classify_dipping,
    classify_pizza,
    classify_sauces,
    extra_ids,
    live_flags,
    pizza_units,
    pool_limit,
    topping_limit,
    used_by_prior_steps,
)
from comboprice.models import (
    DippingSelection,
    DrinkStep,
    FrozenPizza,
    PizzaSelection,
    PizzaStep,
    PricingMode,
    WingSelection,
    WingsStep,
)
from comboprice.selection import toggle_sauce, toggle_topping


def test_pizza_units_round_half_sides_up():
    a, b, c = make_topping("a"), make_topping("b"), make_topping("c")
    assert pizza_units(build_pizza()) == 0
    assert pizza_units(build_pizza((a, LEFT))) == 1
    assert pizza_units(build_pizza((a, LEFT), (b, RIGHT))) == 1
    assert pizza_units(build_pizza((a, LEFT), (b, RIGHT), (c, LEFT))) == 2
    assert pizza_units(build_pizza((a, WHOLE), (b, LEFT))) == 2


def test_default_topping_limit_applies_when_unset():
    assert topping_limit(PizzaStep()) == 3
    assert topping_limit(PizzaStep(topping_limit=0)) == 0


def test_pool_limit_sums_pizza_caps_only():
    steps = [PizzaStep(topping_limit=3), PizzaStep(topping_limit=2), WingsStep(sauce_limit=1), DrinkStep()]
    assert pool_limit(steps) == 5
    assert pool_limit([WingsStep(sauce_limit=2), DrinkStep()]) == 0


def test_used_by_prior_steps_only_counts_earlier_frozen_steps():
    a, b = make_topping("a"), make_topping("b")
    step = PizzaStep(topping_limit=3)
    first = FrozenPizza(step, build_pizza((a, WHOLE), (b, WHOLE)), 0.0, 3)
    later = FrozenPizza(step, build_pizza((a, WHOLE)), 0.0, 3)
    slots = [first, None, later]

    assert used_by_prior_steps(slots, 0) == 0
    assert used_by_prior_steps(slots, 1) == 2


def test_adding_toppings_never_lowers_units():
    placements = [WHOLE, LEFT, RIGHT]
    for seed in range(25):
        rng = random.Random(seed)
        pool = [make_topping(f"t{n}") for n in range(10)]
        rng.shuffle(pool)
        selection = PizzaSelection()
        previous = 0
        for topping in pool:
            toggle_topping(selection, topping, rng.choice(placements))
            units = pizza_units(selection)
            assert units >= previous
            previous = units


def test_available_units_never_negative():
    assert available_units(3, 5) == 0
    assert available_units(6, 4) == 2


def test_fourth_whole_topping_is_extra():
    toppings = [make_topping(name) for name in ("a", "b", "c", "d")]
    selection = build_pizza(*[(t, WHOLE) for t in toppings])

    allocations = classify_pizza(selection, 3)
    assert [a.included for a in allocations] == [True, True, True, False]
    assert extra_ids(allocations) == {"d"}


def test_four_halves_fit_two_units():
    toppings = [make_topping(name) for name in ("a", "b", "c", "d")]
    selection = build_pizza((toppings[0], LEFT), (toppings[1], LEFT), (toppings[2], RIGHT), (toppings[3], RIGHT))

    assert all(a.included for a in classify_pizza(selection, 2))


def test_individual_classification_follows_insertion_order():
    a, b, c = make_topping("a"), make_topping("b"), make_topping("c")
    selection = build_pizza((a, LEFT), (b, WHOLE), (c, RIGHT))

    allocations = classify_pizza(selection, 1)
    assert [(x.entry_id, x.included) for x in allocations] == [("a", True), ("b", False), ("c", False)]


def test_individual_included_toppings_form_a_prefix():
    toppings = [make_topping(name) for name in "abcde"]
    selection = build_pizza(*zip(toppings, [LEFT, WHOLE, RIGHT, LEFT, WHOLE]))

    for available in range(0, 5):
        flags = [x.included for x in classify_pizza(selection, available)]
        assert flags == sorted(flags, reverse=True)


def test_included_toppings_are_never_more_than_available():
    toppings = [make_topping(name) for name in "abcdefg"]
    placements = [WHOLE, LEFT, RIGHT, WHOLE, LEFT, LEFT, RIGHT]
    selection = build_pizza(*zip(toppings, placements))

    for available in range(0, 6):
        for mode in PricingMode:
            allocations = classify_pizza(selection, available, mode)
            assert sum(x.weight for x in allocations if x.included) <= available


def test_flat_mode_fills_whole_toppings_first():
    a, b, c, d = (make_topping(name) for name in "abcd")
    selection = build_pizza((a, LEFT), (b, RIGHT), (c, LEFT), (d, WHOLE))

    allocations = classify_pizza(selection, 2, PricingMode.FLAT)
    flags = {x.entry_id: x.included for x in allocations}
    assert flags["d"] is True
    assert sum(1 for x in allocations if not x.included) == 1
    assert [x.entry_id for x in allocations] == ["a", "b", "c", "d"]


def test_classification_is_deterministic():
    a, b, c = make_topping("a"), make_topping("b"), make_topping("c")
    selection = build_pizza((a, WHOLE), (b, LEFT), (c, WHOLE))

    assert classify_pizza(selection, 1) == classify_pizza(selection, 1)


def test_sauce_classification_by_insertion_order():
    selection = WingSelection()
    toggle_sauce(selection, make_sauce("mild", 0.5))
    toggle_sauce(selection, make_sauce("bbq", 0.75))

    allocations = classify_sauces(selection, 1)
    assert live_flags(allocations) == [{"id": "mild", "included": True}, {"id": "bbq", "included": False}]


def test_dipping_units_past_the_allowance_are_extra():
    ranch = make_sauce("ranch", 0.99)
    selection = DippingSelection(quantities={"ranch": 3})

    allocations = classify_dipping(selection, {"ranch": ranch}, 1)
    assert [x.included for x in allocations] == [True, False, False]
    assert all(x.price == 0.99 for x in allocations)
