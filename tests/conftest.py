import pytest

from comboprice.models import (
    ComboComponent,
    ComboDefinition,
    DippingStep,
    DrinkStep,
    PizzaSelection,
    PizzaStep,
    Placement,
    PricingMode,
    Sauce,
    Topping,
    WingsStep,
)
from comboprice.selection import toggle_topping


def make_topping(topping_id, price=1.0, **kwargs):
    return Topping(id=topping_id, name=topping_id.replace("_", " ").title(), price=price, **kwargs)


def make_sauce(sauce_id, price=0.5, **kwargs):
    return Sauce(id=sauce_id, name=sauce_id.replace("_", " ").title(), price=price, **kwargs)


def build_pizza(*placements):
    """Build a selection from (topping, placement) pairs in the given order."""
    selection = PizzaSelection()
    for topping, placement in placements:
        toggle_topping(selection, topping, placement)
    return selection


@pytest.fixture
def toppings():
    return [
        make_topping("pepperoni", 1.0),
        make_topping("mushrooms", 1.0),
        make_topping("onions", 1.0),
        make_topping("olives", 1.0),
        make_topping("bacon", 2.0),
        make_topping("feta", 2.0),
    ]


@pytest.fixture
def sauces():
    return [
        make_sauce("mild", 0.50),
        make_sauce("bbq", 0.75),
        make_sauce("hot", 0.50, is_spicy=True),
        make_sauce("ranch", 0.99, category="Dip"),
        make_sauce("blue_cheese", 0.99, category="Dip"),
    ]


@pytest.fixture
def two_pizza_combo():
    return ComboDefinition(
        combo_id="two_pizza",
        name="Two Pizza Deal",
        price=29.99,
        components=(
            ComboComponent(PizzaStep(topping_limit=3, item_name="Large Pizza"), quantity=2),
            ComboComponent(DrinkStep(available_sizes=("355ml", "2L"), default_size="2L", item_name="Pop")),
        ),
    )


@pytest.fixture
def wings_combo():
    return ComboDefinition(
        combo_id="wing_night",
        name="Wing Night",
        price=24.99,
        components=(
            ComboComponent(WingsStep(sauce_limit=1, item_name="1 lb Wings"), quantity=2),
            ComboComponent(DippingStep(max_dipping=1, item_name="Dip")),
        ),
    )


@pytest.fixture
def flat_step():
    return PizzaStep(
        topping_limit=2,
        pricing_mode=PricingMode.FLAT,
        flat_rate_price=2.0,
        half_pizza_multiplier=0.5,
    )


WHOLE = Placement.WHOLE
LEFT = Placement.LEFT
RIGHT = Placement.RIGHT
