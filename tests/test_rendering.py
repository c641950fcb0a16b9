from comboprice.models import Placement, PizzaStep
from comboprice.rendering import (
    EXTRA_STYLE,
    INCLUDED_STYLE,
    format_charges_summary,
    format_money,
    format_preview,
    step_title,
)
from comboprice.session import ComboSession, single_pizza_session


def _styles(text):
    return {str(span.style) for span in text.spans}


def test_format_money():
    assert format_money(1) == "$1.00"
    assert format_money(12.5) == "$12.50"


def test_step_title_uses_ordinal_for_pizzas(two_pizza_combo):
    steps = two_pizza_combo.expand_steps()
    assert step_title(steps[1], 2) == "Pizza 2 - Large Pizza"
    assert step_title(steps[2], 1) == "Pop"


def test_preview_tags_placements(two_pizza_combo, toppings):
    session = ComboSession(two_pizza_combo, toppings)
    for topping_id in ("pepperoni", "mushrooms", "onions"):
        session.toggle_topping(topping_id, Placement.WHOLE)
    session.toggle_topping("bacon", Placement.LEFT)

    text = format_preview(session.preview())

    assert INCLUDED_STYLE in _styles(text)
    assert EXTRA_STYLE not in _styles(text)
    assert "W:Pepperoni" in text.plain
    assert "L:Bacon" in text.plain
    assert "4/6 included" in text.plain


def test_extra_toppings_use_extra_style(toppings):
    session = single_pizza_session(PizzaStep(topping_limit=1), 10.0, toppings)
    session.toggle_topping("pepperoni")
    session.toggle_topping("bacon")

    text = format_preview(session.preview())

    assert EXTRA_STYLE in _styles(text)
    assert "+$2.00" in text.plain


def test_charges_summary_lists_frozen_and_live_steps(toppings):
    session = ComboSession(
        single_pizza_session(PizzaStep(topping_limit=1), 10.0, toppings).definition,
        toppings,
    )
    session.toggle_topping("pepperoni")
    session.toggle_topping("bacon")

    summary = format_charges_summary(session).plain

    assert "(current): +$2.00" in summary
    assert "Total Extra: $2.00" in summary


def test_charges_summary_is_zero_within_pool(two_pizza_combo, toppings):
    session = ComboSession(two_pizza_combo, toppings)
    for topping_id in ("pepperoni", "mushrooms"):
        session.toggle_topping(topping_id)

    summary = format_charges_summary(session).plain
    assert "(current)" not in summary
    assert "Total Extra: $0.00" in summary
