"""Combo customization session: live selection, step freezing and the draft."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence

from comboprice import ledger, pricing, selection as selection_ops
from comboprice.ledger import Allocation
from comboprice.models import (
    ComboComponent,
    ComboDefinition,
    ComboResult,
    ComboStep,
    DippingSelection,
    DippingStep,
    Draft,
    DrinkStep,
    FrozenDipping,
    FrozenPizza,
    FrozenSized,
    FrozenStep,
    FrozenWings,
    PizzaSelection,
    PizzaStep,
    Placement,
    Sauce,
    Selection,
    SideStep,
    SizeSelection,
    Topping,
    WingSelection,
    WingsStep,
)

logger = logging.getLogger(__name__)


class SessionClosedError(RuntimeError):
    """Raised when a finished or cancelled session is asked to change."""


@dataclass(frozen=True)
class StepPreview:
    """Classification and charge for the live selection of one step."""

    allocations: tuple[Allocation, ...]
    extra_charge: float
    units: int
    limit: int
    available: int
    used_by_prior: int = 0

    @property
    def remaining(self) -> int:
        return max(0, self.available - self.units)

    @property
    def included_count(self) -> int:
        return sum(1 for a in self.allocations if a.included)


def new_selection(step: ComboStep) -> Selection:
    if isinstance(step, PizzaStep):
        return PizzaSelection()
    if isinstance(step, WingsStep):
        return WingSelection()
    if isinstance(step, DippingStep):
        return DippingSelection()
    return SizeSelection(size=step.default_size)


def evaluate_step(
    steps: Sequence[ComboStep],
    slots: Sequence[FrozenStep | None],
    index: int,
    current: Selection,
    sauces_by_id: Mapping[str, Sauce],
) -> StepPreview:
    """
    Classify and price the selection of step `index`.

    Used for both the live preview and the frozen result, so highlighting and
    the committed charge always agree.
    """
    step = steps[index]
    if isinstance(step, PizzaStep) and isinstance(current, PizzaSelection):
        limit = ledger.pool_limit(steps)
        used = ledger.used_by_prior_steps(slots, index)
        available = ledger.available_units(limit, used)
        allocations = ledger.classify_pizza(current, available, pricing.effective_pricing_mode(step))
        return StepPreview(
            allocations=tuple(allocations),
            extra_charge=pricing.round_currency(pricing.pizza_charge(allocations, step)),
            units=ledger.pizza_units(current),
            limit=limit,
            available=available,
            used_by_prior=used,
        )
    if isinstance(step, WingsStep) and isinstance(current, WingSelection):
        limit = ledger.sauce_limit(step)
        allocations = ledger.classify_sauces(current, limit)
        return StepPreview(
            allocations=tuple(allocations),
            extra_charge=pricing.round_currency(pricing.unit_charge(allocations)),
            units=ledger.sauce_units(current),
            limit=limit,
            available=limit,
        )
    if isinstance(step, DippingStep) and isinstance(current, DippingSelection):
        limit = ledger.dipping_limit(step)
        allocations = ledger.classify_dipping(current, sauces_by_id, limit)
        return StepPreview(
            allocations=tuple(allocations),
            extra_charge=pricing.round_currency(pricing.unit_charge(allocations)),
            units=current.total,
            limit=limit,
            available=limit,
        )
    return StepPreview(allocations=(), extra_charge=0.0, units=0, limit=0, available=0)


def freeze_step(step: ComboStep, current: Selection, preview: StepPreview) -> FrozenStep:
    if isinstance(step, PizzaStep) and isinstance(current, PizzaSelection):
        return FrozenPizza(step, current.snapshot(), preview.extra_charge, ledger.topping_limit(step))
    if isinstance(step, WingsStep) and isinstance(current, WingSelection):
        return FrozenWings(step, current.snapshot(), preview.extra_charge, ledger.sauce_limit(step))
    if isinstance(step, DippingStep) and isinstance(current, DippingSelection):
        return FrozenDipping(step, current.snapshot(), preview.extra_charge, ledger.dipping_limit(step))
    if isinstance(step, (DrinkStep, SideStep)) and isinstance(current, SizeSelection):
        return FrozenSized(step, current.snapshot())
    raise TypeError(f"Selection {type(current).__name__} does not match step {step.kind}")


class ComboSession:
    """One open customization of a combo (or a standalone item) for a cart line."""

    def __init__(
        self,
        definition: ComboDefinition,
        toppings: Iterable[Topping] = (),
        sauces: Iterable[Sauce] = (),
    ) -> None:
        self.definition = definition
        self.steps: list[ComboStep] = definition.expand_steps()
        if not self.steps:
            raise ValueError(f"Combo {definition.combo_id!r} has no steps")
        self.toppings_by_id: dict[str, Topping] = {t.id: t for t in toppings}
        self.sauces_by_id: dict[str, Sauce] = {s.id: s for s in sauces}
        self.draft = Draft.empty(len(self.steps))
        self.price = definition.price
        self.current_index = 0
        self.result: ComboResult | None = None
        self.cancelled = False
        self._stashed: dict[int, Selection] = {}
        self.selection: Selection = self._enter(0)

    @classmethod
    def resume(
        cls,
        definition: ComboDefinition,
        result: ComboResult,
        toppings: Iterable[Topping] = (),
        sauces: Iterable[Sauce] = (),
    ) -> ComboSession:
        """Re-open a finalized combo for editing, starting at the first step."""
        session = cls(definition, toppings, sauces)
        if len(result.items) != len(session.steps):
            raise ValueError("Result does not match the combo's steps")
        for step, item in zip(session.steps, result.items):
            if item.step.kind != step.kind:
                raise ValueError(f"Result item {item.step.kind} does not match step {step.kind}")
        session.draft = Draft(slots=list(result.items))
        session.price = result.price
        session.selection = session._enter(0)
        logger.info("session resumed combo=%s steps=%d", definition.combo_id, len(session.steps))
        return session

    @property
    def current_step(self) -> ComboStep:
        return self.steps[self.current_index]

    @property
    def is_open(self) -> bool:
        return self.result is None and not self.cancelled

    @property
    def is_last_step(self) -> bool:
        return self.current_index == len(self.steps) - 1

    @property
    def total_extra_charges(self) -> float:
        return pricing.round_currency(sum(frozen.extra_charge for frozen in self.draft.frozen()))

    def ordinal(self, index: int | None = None) -> int:
        """1-based position of the step among steps of the same kind ("Pizza 2")."""
        index = self.current_index if index is None else index
        kind = self.steps[index].kind
        return sum(1 for step in self.steps[: index + 1] if step.kind == kind)

    def preview(self) -> StepPreview:
        return evaluate_step(self.steps, self.draft.slots, self.current_index, self.selection, self.sauces_by_id)

    def toggle_topping(self, topping_id: str, placement: Placement = Placement.WHOLE) -> None:
        current = self._current(PizzaSelection)
        selection_ops.toggle_topping(current, self.toppings_by_id[topping_id], placement)

    def toggle_sauce(self, sauce_id: str) -> None:
        current = self._current(WingSelection)
        selection_ops.toggle_sauce(current, self.sauces_by_id[sauce_id])

    def change_dipping(self, sauce_id: str, delta: int) -> int:
        current = self._current(DippingSelection)
        if sauce_id not in self.sauces_by_id:
            raise KeyError(sauce_id)
        return selection_ops.change_dipping_quantity(current, sauce_id, delta)

    def select_size(self, size: str | None) -> None:
        current = self._current(SizeSelection)
        step = self.current_step
        sizes = getattr(step, "available_sizes", ())
        if size is not None and sizes and size not in sizes:
            raise ValueError(f"Size {size!r} is not offered for {step.item_name or step.kind}")
        selection_ops.select_size(current, size)

    def toggle_instruction(self, tile_id: str) -> None:
        self._require_open()
        if not isinstance(self.selection, (PizzaSelection, WingSelection)):
            raise TypeError(f"Step {self.current_step.kind} takes no instructions")
        selection_ops.toggle_instruction(self.selection, tile_id)

    def complete_step(self) -> ComboResult | None:
        """Freeze the current step; returns the result once the last step is done."""
        self._require_open()
        preview = self.preview()
        frozen = freeze_step(self.current_step, self.selection, preview)
        self.draft.slots[self.current_index] = frozen
        logger.debug(
            "step frozen index=%d kind=%s extra_charge=%.2f",
            self.current_index,
            self.current_step.kind,
            frozen.extra_charge,
        )
        if self.is_last_step:
            return self._finalize()
        self.current_index += 1
        self.selection = self._enter(self.current_index)
        return None

    def go_back(self) -> None:
        """Return to the previous step, un-freezing it as the live selection."""
        self._require_open()
        if self.current_index == 0:
            return
        self._stashed[self.current_index] = self.selection
        self.current_index -= 1
        self.selection = self._enter(self.current_index)

    def cancel(self) -> None:
        self._require_open()
        self.cancelled = True
        self.draft = Draft.empty(len(self.steps))
        self._stashed.clear()
        logger.info("session cancelled combo=%s", self.definition.combo_id)

    def _finalize(self) -> ComboResult:
        self.result = ComboResult(
            combo_id=self.definition.combo_id,
            name=self.definition.name,
            items=tuple(self.draft.frozen()),
            price=self.price,
            extra_charges=self.total_extra_charges,
        )
        logger.info(
            "session finalized combo=%s price=%.2f extra_charges=%.2f",
            self.result.combo_id,
            self.result.price,
            self.result.extra_charges,
        )
        return self.result

    def _enter(self, index: int) -> Selection:
        frozen = self.draft.slots[index]
        if frozen is not None:
            self.draft.slots[index] = None
            return frozen.selection.snapshot()
        stashed = self._stashed.pop(index, None)
        if stashed is not None:
            return stashed
        return new_selection(self.steps[index])

    def _require_open(self) -> None:
        if self.result is not None:
            raise SessionClosedError("Session already finalized")
        if self.cancelled:
            raise SessionClosedError("Session was cancelled")

    def _current(self, expected: type) -> Selection:
        self._require_open()
        if not isinstance(self.selection, expected):
            raise TypeError(f"Step {self.current_step.kind} does not accept this change")
        return self.selection


def single_pizza_session(
    step: PizzaStep,
    price: float,
    toppings: Iterable[Topping],
    combo_id: str | None = None,
) -> ComboSession:
    """A one-step session for a standalone customizable pizza."""
    definition = ComboDefinition(
        combo_id=combo_id or step.item_id or "pizza",
        name=step.item_name or "Pizza",
        price=price,
        components=(ComboComponent(step),),
    )
    return ComboSession(definition, toppings=toppings)


def single_wings_session(
    step: WingsStep,
    price: float,
    sauces: Iterable[Sauce],
    combo_id: str | None = None,
) -> ComboSession:
    """A one-step session for a standalone wing order."""
    definition = ComboDefinition(
        combo_id=combo_id or step.item_id or "wings",
        name=step.item_name or "Wings",
        price=price,
        components=(ComboComponent(step),),
    )
    return ComboSession(definition, sauces=sauces)
