"""Domain models for combo customization and pricing."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from itertools import count
from typing import Iterator, Literal


class Placement(str, Enum):
    """Where a topping sits on a pizza."""

    WHOLE = "whole"
    LEFT = "left"
    RIGHT = "right"


class PricingMode(str, Enum):
    """How extra pizza toppings are charged."""

    INDIVIDUAL = "individual"
    FLAT = "flat"


@dataclass(frozen=True)
class Topping:
    """A pizza topping catalog entry."""

    id: str
    name: str
    price: float = 0.0
    category: str | None = None
    is_vegetarian: bool = False
    is_vegan: bool = False
    is_gluten_free: bool = False
    is_keto: bool = False


@dataclass(frozen=True)
class Sauce:
    """A wing or dipping sauce catalog entry."""

    id: str
    name: str
    price: float = 0.0
    category: str | None = None
    is_vegetarian: bool = False
    is_vegan: bool = False
    is_gluten_free: bool = False
    is_keto: bool = False
    is_spicy: bool = False


@dataclass(frozen=True)
class InstructionTile:
    """A preset cooking instruction (e.g. "Well Done")."""

    id: str
    label: str
    sort_order: int = 0
    is_active: bool = True


@dataclass(frozen=True)
class PlacedTopping:
    """A topping together with its insertion-order index."""

    topping: Topping
    order: int


@dataclass(frozen=True)
class PlacedSauce:
    """A sauce together with its insertion-order index."""

    sauce: Sauce
    order: int


@dataclass
class PizzaSelection:
    """Whole/left/right topping lists for one pizza line item."""

    whole: list[PlacedTopping] = field(default_factory=list)
    left: list[PlacedTopping] = field(default_factory=list)
    right: list[PlacedTopping] = field(default_factory=list)
    instructions: list[str] = field(default_factory=list)
    _sequence: Iterator[int] = field(default_factory=count, repr=False, compare=False)

    def next_order(self) -> int:
        return next(self._sequence)

    def side(self, placement: Placement) -> list[PlacedTopping]:
        if placement is Placement.WHOLE:
            return self.whole
        if placement is Placement.LEFT:
            return self.left
        return self.right

    def ids(self, placement: Placement) -> list[str]:
        return [entry.topping.id for entry in self.side(placement)]

    @property
    def is_half_and_half(self) -> bool:
        return bool(self.left or self.right)

    @property
    def is_empty(self) -> bool:
        return not (self.whole or self.left or self.right)

    def snapshot(self) -> PizzaSelection:
        """Copy the lists; the sequence stays with this line item."""
        return PizzaSelection(
            whole=list(self.whole),
            left=list(self.left),
            right=list(self.right),
            instructions=list(self.instructions),
            _sequence=self._sequence,
        )


@dataclass
class WingSelection:
    """Ordered sauces for one wing line item."""

    sauces: list[PlacedSauce] = field(default_factory=list)
    instructions: list[str] = field(default_factory=list)
    _sequence: Iterator[int] = field(default_factory=count, repr=False, compare=False)

    def next_order(self) -> int:
        return next(self._sequence)

    def ids(self) -> list[str]:
        return [entry.sauce.id for entry in self.sauces]

    def snapshot(self) -> WingSelection:
        return WingSelection(
            sauces=list(self.sauces),
            instructions=list(self.instructions),
            _sequence=self._sequence,
        )


@dataclass
class DippingSelection:
    """Dipping sauce quantities keyed by sauce id, in first-selection order."""

    quantities: dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.quantities.values())

    def snapshot(self) -> DippingSelection:
        return DippingSelection(quantities=dict(self.quantities))


@dataclass
class SizeSelection:
    """A chosen size for a drink or side."""

    size: str | None = None

    def snapshot(self) -> SizeSelection:
        return SizeSelection(size=self.size)


Selection = PizzaSelection | WingSelection | DippingSelection | SizeSelection


StepKind = Literal["pizza", "wings", "drink", "side", "dipping"]
STEP_KINDS: tuple[str, ...] = ("pizza", "wings", "drink", "side", "dipping")


@dataclass(frozen=True)
class PizzaStep:
    """A pizza line item inside a combo (or a standalone pizza)."""

    topping_limit: int | None = None
    pricing_mode: PricingMode = PricingMode.INDIVIDUAL
    flat_rate_price: float | None = None
    half_pizza_multiplier: float | None = None
    item_id: str | None = None
    item_name: str | None = None
    kind: Literal["pizza"] = "pizza"


@dataclass(frozen=True)
class WingsStep:
    """A wing order inside a combo (or standalone wings)."""

    sauce_limit: int | None = None
    item_id: str | None = None
    item_name: str | None = None
    kind: Literal["wings"] = "wings"


@dataclass(frozen=True)
class DrinkStep:
    """A drink with a size choice."""

    available_sizes: tuple[str, ...] = ()
    default_size: str | None = None
    item_id: str | None = None
    item_name: str | None = None
    kind: Literal["drink"] = "drink"


@dataclass(frozen=True)
class SideStep:
    """A side with a size choice."""

    available_sizes: tuple[str, ...] = ()
    default_size: str | None = None
    item_id: str | None = None
    item_name: str | None = None
    kind: Literal["side"] = "side"


@dataclass(frozen=True)
class DippingStep:
    """A dipping sauce allowance."""

    max_dipping: int | None = None
    item_id: str | None = None
    item_name: str | None = None
    kind: Literal["dipping"] = "dipping"


ComboStep = PizzaStep | WingsStep | DrinkStep | SideStep | DippingStep


def _placed_topping_dict(entry: PlacedTopping) -> dict[str, object]:
    return {
        "id": entry.topping.id,
        "name": entry.topping.name,
        "price": entry.topping.price,
        "addedOrder": entry.order,
    }


@dataclass(frozen=True)
class FrozenPizza:
    """A completed pizza step."""

    step: PizzaStep
    selection: PizzaSelection
    extra_charge: float
    topping_limit: int

    def to_dict(self) -> dict[str, object]:
        return {
            "type": "pizza",
            "itemName": self.step.item_name,
            "toppings": {
                "wholePizza": [_placed_topping_dict(e) for e in self.selection.whole],
                "leftSide": [_placed_topping_dict(e) for e in self.selection.left],
                "rightSide": [_placed_topping_dict(e) for e in self.selection.right],
            },
            "isHalfAndHalf": self.selection.is_half_and_half,
            "instructions": list(self.selection.instructions),
            "extraCharge": self.extra_charge,
            "toppingLimit": self.topping_limit,
        }


@dataclass(frozen=True)
class FrozenWings:
    """A completed wings step."""

    step: WingsStep
    selection: WingSelection
    extra_charge: float
    sauce_limit: int

    def to_dict(self) -> dict[str, object]:
        return {
            "type": "wings",
            "itemName": self.step.item_name,
            "sauces": [
                {"id": e.sauce.id, "name": e.sauce.name, "price": e.sauce.price, "addedOrder": e.order}
                for e in self.selection.sauces
            ],
            "instructions": list(self.selection.instructions),
            "extraCharge": self.extra_charge,
            "sauceLimit": self.sauce_limit,
        }


@dataclass(frozen=True)
class FrozenSized:
    """A completed drink or side step."""

    step: DrinkStep | SideStep
    selection: SizeSelection
    extra_charge: float = 0.0

    def to_dict(self) -> dict[str, object]:
        return {
            "type": self.step.kind,
            "itemName": self.step.item_name,
            "size": self.selection.size,
            "extraCharge": self.extra_charge,
        }


@dataclass(frozen=True)
class FrozenDipping:
    """A completed dipping sauce step."""

    step: DippingStep
    selection: DippingSelection
    extra_charge: float
    max_dipping: int

    def to_dict(self) -> dict[str, object]:
        return {
            "type": "dipping",
            "itemName": self.step.item_name,
            "selectedDippingSauces": dict(self.selection.quantities),
            "extraCharge": self.extra_charge,
            "maxDipping": self.max_dipping,
        }


FrozenStep = FrozenPizza | FrozenWings | FrozenSized | FrozenDipping


@dataclass(frozen=True)
class ComboComponent:
    """One line of a combo definition; `quantity` expands into that many steps."""

    step: ComboStep
    quantity: int = 1


@dataclass(frozen=True)
class ComboDefinition:
    """A combo as configured by the store."""

    combo_id: str
    name: str
    price: float
    components: tuple[ComboComponent, ...] = ()

    def expand_steps(self) -> list[ComboStep]:
        """Flatten components into one step per customizable line item."""
        steps: list[ComboStep] = []
        for component in self.components:
            steps.extend([component.step] * component.quantity)
        return steps


@dataclass
class Draft:
    """Frozen steps of an open customization session, indexed by step."""

    slots: list[FrozenStep | None]

    @classmethod
    def empty(cls, size: int) -> Draft:
        return cls(slots=[None] * size)

    def frozen(self) -> list[FrozenStep]:
        return [slot for slot in self.slots if slot is not None]

    def is_complete(self) -> bool:
        return all(slot is not None for slot in self.slots)


@dataclass(frozen=True)
class ComboResult:
    """The finalized combo handed to the cart."""

    combo_id: str
    name: str
    items: tuple[FrozenStep, ...]
    price: float
    extra_charges: float

    @property
    def total(self) -> float:
        return round(self.price + self.extra_charges, 2)

    def to_dict(self) -> dict[str, object]:
        return {
            "comboId": self.combo_id,
            "name": self.name,
            "items": [item.to_dict() for item in self.items],
            "price": self.price,
            "extraCharges": self.extra_charges,
        }
