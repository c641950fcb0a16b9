import pytest

from comboprice.data import (
    ALL,
    COMBO_DEFINITIONS,
    PIZZA_INSTRUCTION_TILES,
    SAUCE_CATALOG,
    TOPPING_CATALOG,
    active_tiles,
    categories,
    filter_by_category,
    filter_by_dietary,
    filter_by_spice,
    instruction_labels,
    parse_combo,
    parse_step,
    parse_topping,
)
from comboprice.models import DrinkStep, PizzaStep, PricingMode, WingsStep


def test_parse_pizza_step_accepts_legacy_cap_name():
    step = parse_step({"type": "pizza", "maxToppings": 4, "itemName": "XL"})

    assert isinstance(step, PizzaStep)
    assert step.topping_limit == 4
    assert step.pricing_mode is PricingMode.INDIVIDUAL
    assert step.item_name == "XL"


def test_parse_flat_pizza_step():
    step = parse_step({"type": "pizza", "pricingMode": "flat", "flatRatePrice": 2, "halfPizzaMultiplier": 0.5})

    assert step.pricing_mode is PricingMode.FLAT
    assert step.flat_rate_price == pytest.approx(2.0)
    assert step.topping_limit is None


def test_parse_wings_and_drink_steps():
    wings = parse_step({"type": "wings", "maxSauces": 2})
    drink = parse_step({"type": "drink", "availableSizes": ["Small", "Large"], "defaultSize": "Large"})

    assert isinstance(wings, WingsStep) and wings.sauce_limit == 2
    assert isinstance(drink, DrinkStep)
    assert drink.available_sizes == ("Small", "Large")
    assert drink.default_size == "Large"


@pytest.mark.parametrize(
    "raw",
    [
        {"type": "salad"},
        {"type": "pizza", "pricingMode": "bulk"},
        {"type": "pizza", "toppingLimit": -1},
        {"type": "pizza", "flatRatePrice": -2},
    ],
)
def test_parse_step_rejects_bad_documents(raw):
    with pytest.raises(ValueError):
        parse_step(raw)


def test_parse_combo_requires_items():
    with pytest.raises(ValueError):
        parse_combo({"id": "empty", "name": "Empty", "price": 5, "items": []})


def test_parse_combo_accepts_alternate_keys():
    combo = parse_combo(
        {"comboId": "solo", "name": "Solo", "basePrice": 9.999, "components": [{"type": "pizza", "quantity": 2}]}
    )

    assert combo.combo_id == "solo"
    assert combo.price == pytest.approx(10.0)
    assert len(combo.expand_steps()) == 2


def test_parse_topping_requires_id():
    with pytest.raises(ValueError):
        parse_topping({"name": "Nameless"})


def test_bundled_catalog_parses():
    assert "two_pizza_deal" in COMBO_DEFINITIONS
    assert "party_pack" in COMBO_DEFINITIONS
    party = COMBO_DEFINITIONS["party_pack"]
    assert [step.kind for step in party.expand_steps()] == ["pizza", "wings", "wings", "dipping", "side"]
    assert len(TOPPING_CATALOG) > 0 and len(SAUCE_CATALOG) > 0


def test_category_and_dietary_filters():
    assert categories(TOPPING_CATALOG)[0] == ALL
    meats = filter_by_category(TOPPING_CATALOG, "Meat")
    assert meats and all(t.category == "Meat" for t in meats)
    assert all(t.is_vegan for t in filter_by_dietary(TOPPING_CATALOG, "Vegan"))
    assert filter_by_dietary(TOPPING_CATALOG, ALL) == TOPPING_CATALOG


def test_spice_filter():
    spicy = filter_by_spice(SAUCE_CATALOG, "Spicy")
    mild = filter_by_spice(SAUCE_CATALOG, "Not Spicy")

    assert spicy and all(s.is_spicy for s in spicy)
    assert len(spicy) + len(mild) == len(SAUCE_CATALOG)


def test_inactive_tiles_are_hidden():
    tiles = active_tiles(PIZZA_INSTRUCTION_TILES)

    assert "no_cut" not in [tile.id for tile in tiles]
    assert [tile.sort_order for tile in tiles] == sorted(tile.sort_order for tile in tiles)
    assert instruction_labels(["well_done", "mystery"], PIZZA_INSTRUCTION_TILES) == ["Well Done", "mystery"]
