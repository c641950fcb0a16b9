"""Catalog parsing, catalog filters and the static demo catalog."""

from __future__ import annotations

from typing import Iterable, Mapping, TypeVar

from comboprice.constant import COMBOS, PIZZA_INSTRUCTIONS, SAUCES, TOPPINGS, WING_INSTRUCTIONS
from comboprice.models import (
    STEP_KINDS,
    ComboComponent,
    ComboDefinition,
    ComboStep,
    DippingStep,
    DrinkStep,
    InstructionTile,
    PizzaStep,
    PricingMode,
    Sauce,
    SideStep,
    Topping,
    WingsStep,
)

Entry = TypeVar("Entry", Topping, Sauce)

ALL = "All"
DIETARY_FILTERS: tuple[str, ...] = (ALL, "Vegetarian", "Vegan", "Gluten-Free", "Keto")
SPICE_FILTERS: tuple[str, ...] = (ALL, "Spicy", "Not Spicy")


def _required_text(raw: Mapping[str, object], *keys: str) -> str:
    for key in keys:
        value = raw.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    raise ValueError(f"Missing {keys[0]!r} in {dict(raw)!r}")


def _optional_text(raw: Mapping[str, object], key: str) -> str | None:
    value = raw.get(key)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _non_negative_float(raw: Mapping[str, object], key: str, default: float | None) -> float | None:
    value = raw.get(key)
    if value is None:
        return default
    number = float(value)  # type: ignore[arg-type]
    if number < 0:
        raise ValueError(f"{key} must not be negative (got {number})")
    return number


def _optional_cap(raw: Mapping[str, object], *keys: str) -> int | None:
    for key in keys:
        value = raw.get(key)
        if value is None:
            continue
        cap = int(value)  # type: ignore[call-overload]
        if cap < 0:
            raise ValueError(f"{key} must not be negative (got {cap})")
        return cap
    return None


def parse_topping(raw: Mapping[str, object]) -> Topping:
    """Build a topping from a catalog document."""
    return Topping(
        id=_required_text(raw, "id"),
        name=_required_text(raw, "name"),
        price=_non_negative_float(raw, "price", 0.0) or 0.0,
        category=_optional_text(raw, "category"),
        is_vegetarian=bool(raw.get("isVegetarian", False)),
        is_vegan=bool(raw.get("isVegan", False)),
        is_gluten_free=bool(raw.get("isGlutenFree", False)),
        is_keto=bool(raw.get("isKeto", False)),
    )


def parse_sauce(raw: Mapping[str, object]) -> Sauce:
    """Build a wing/dipping sauce from a catalog document."""
    return Sauce(
        id=_required_text(raw, "id"),
        name=_required_text(raw, "name"),
        price=_non_negative_float(raw, "price", 0.0) or 0.0,
        category=_optional_text(raw, "category"),
        is_vegetarian=bool(raw.get("isVegetarian", False)),
        is_vegan=bool(raw.get("isVegan", False)),
        is_gluten_free=bool(raw.get("isGlutenFree", False)),
        is_keto=bool(raw.get("isKeto", False)),
        is_spicy=bool(raw.get("isSpicy", False)),
    )


def parse_instruction_tile(raw: Mapping[str, object]) -> InstructionTile:
    return InstructionTile(
        id=_required_text(raw, "id"),
        label=_required_text(raw, "label", "id"),
        sort_order=int(raw.get("sortOrder", 0) or 0),  # type: ignore[call-overload]
        is_active=bool(raw.get("isActive", True)),
    )


def parse_step(raw: Mapping[str, object]) -> ComboStep:
    """Build the step variant named by the document's `type`."""
    kind = raw.get("type")
    if kind not in STEP_KINDS:
        raise ValueError(f"Unknown combo step type {kind!r}")

    item_id = _optional_text(raw, "itemId")
    item_name = _optional_text(raw, "itemName")

    if kind == "pizza":
        mode_value = raw.get("pricingMode") or PricingMode.INDIVIDUAL.value
        try:
            mode = PricingMode(mode_value)
        except ValueError:
            raise ValueError(f"Unknown pricing mode {mode_value!r}") from None
        return PizzaStep(
            topping_limit=_optional_cap(raw, "toppingLimit", "maxToppings"),
            pricing_mode=mode,
            flat_rate_price=_non_negative_float(raw, "flatRatePrice", None),
            half_pizza_multiplier=_non_negative_float(raw, "halfPizzaMultiplier", None),
            item_id=item_id,
            item_name=item_name,
        )
    if kind == "wings":
        return WingsStep(
            sauce_limit=_optional_cap(raw, "sauceLimit", "maxSauces"),
            item_id=item_id,
            item_name=item_name,
        )
    if kind == "dipping":
        return DippingStep(max_dipping=_optional_cap(raw, "maxDipping"), item_id=item_id, item_name=item_name)

    sizes = tuple(str(size) for size in raw.get("availableSizes") or ())  # type: ignore[union-attr]
    sized = DrinkStep if kind == "drink" else SideStep
    return sized(
        available_sizes=sizes,
        default_size=_optional_text(raw, "defaultSize"),
        item_id=item_id,
        item_name=item_name,
    )


def parse_component(raw: Mapping[str, object]) -> ComboComponent:
    quantity = int(raw.get("quantity", 1))  # type: ignore[call-overload]
    if quantity < 0:
        raise ValueError(f"quantity must not be negative (got {quantity})")
    return ComboComponent(step=parse_step(raw), quantity=quantity)


def parse_combo(raw: Mapping[str, object]) -> ComboDefinition:
    """Build a combo definition from a store combo document."""
    items = raw.get("items", raw.get("components"))
    if not items:
        raise ValueError(f"Combo {raw.get('id')!r} has no items")
    price = raw.get("price", raw.get("basePrice", 0.0))
    return ComboDefinition(
        combo_id=_required_text(raw, "id", "comboId"),
        name=_required_text(raw, "name"),
        price=round(float(price), 2),  # type: ignore[arg-type]
        components=tuple(parse_component(item) for item in items),  # type: ignore[union-attr]
    )


def categories(entries: Iterable[Topping | Sauce]) -> list[str]:
    """`All` followed by each category in first-seen order."""
    seen: list[str] = [ALL]
    for entry in entries:
        if entry.category and entry.category not in seen:
            seen.append(entry.category)
    return seen


def filter_by_category(entries: Iterable[Entry], category: str) -> list[Entry]:
    if category == ALL:
        return list(entries)
    return [entry for entry in entries if entry.category == category]


def filter_by_dietary(entries: Iterable[Entry], dietary: str) -> list[Entry]:
    if dietary == "Vegetarian":
        return [entry for entry in entries if entry.is_vegetarian]
    if dietary == "Vegan":
        return [entry for entry in entries if entry.is_vegan]
    if dietary == "Gluten-Free":
        return [entry for entry in entries if entry.is_gluten_free]
    if dietary == "Keto":
        return [entry for entry in entries if entry.is_keto]
    return list(entries)


def filter_by_spice(sauces: Iterable[Sauce], spice: str) -> list[Sauce]:
    if spice == "Spicy":
        return [sauce for sauce in sauces if sauce.is_spicy]
    if spice == "Not Spicy":
        return [sauce for sauce in sauces if not sauce.is_spicy]
    return list(sauces)


def active_tiles(tiles: Iterable[InstructionTile]) -> list[InstructionTile]:
    return sorted((tile for tile in tiles if tile.is_active), key=lambda tile: tile.sort_order)


def instruction_labels(tile_ids: Iterable[str], tiles: Iterable[InstructionTile]) -> list[str]:
    """Labels for the selected tile ids; unknown or inactive ids fall back to the raw id."""
    by_id = {tile.id: tile for tile in tiles if tile.is_active}
    return [by_id[tile_id].label if tile_id in by_id else tile_id for tile_id in tile_ids]


TOPPING_CATALOG: list[Topping] = [parse_topping(raw) for raw in TOPPINGS]
SAUCE_CATALOG: list[Sauce] = [parse_sauce(raw) for raw in SAUCES]
PIZZA_INSTRUCTION_TILES: list[InstructionTile] = [parse_instruction_tile(raw) for raw in PIZZA_INSTRUCTIONS]
WING_INSTRUCTION_TILES: list[InstructionTile] = [parse_instruction_tile(raw) for raw in WING_INSTRUCTIONS]
COMBO_DEFINITIONS: dict[str, ComboDefinition] = {combo.combo_id: combo for combo in map(parse_combo, COMBOS)}
