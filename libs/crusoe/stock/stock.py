"""In-memory stock of an agent.

Tracks quantities of goods units (keyed by good and remaining lifetime) and
partially produced goods, and derives the next day's stock from an action.
"""

import logging
from dataclasses import dataclass, field, replace

from crusoe.models.actions import Action, ActionKind
from crusoe.models.catalogue import Good
from crusoe.models.units import GoodsUnit, PartialGoodsUnit
from crusoe.stock.errors import InsufficientStockError

logger = logging.getLogger(__name__)


@dataclass
class Stock:
    """Goods held by one agent.

    `units` maps each (good, remaining_lifetime) bucket to a positive
    quantity; `partials` holds at most one in-progress unit per good.
    """

    units: dict[GoodsUnit, int] = field(default_factory=dict)
    partials: list[PartialGoodsUnit] = field(default_factory=list)

    def copy(self) -> "Stock":
        """Independent copy for what-if simulation."""
        return Stock(units=dict(self.units), partials=list(self.partials))

    # --- Goods units ---

    def add(self, goods_unit: GoodsUnit, quantity: int) -> None:
        """Add units, merging into the bucket with the same good and lifetime."""
        if quantity <= 0:
            raise ValueError(f"Cannot add a non-positive quantity ({quantity}) of {goods_unit.good}")
        self.units[goods_unit] = self.units.get(goods_unit, 0) + quantity

    def remove(self, goods_unit: GoodsUnit, quantity: int) -> None:
        """Remove units from a bucket. The stock is unchanged if this fails."""
        if quantity <= 0:
            raise ValueError(f"Cannot remove a non-positive quantity ({quantity}) of {goods_unit.good}")
        current = self.units.get(goods_unit, 0)
        if current < quantity:
            raise InsufficientStockError(goods_unit.good, quantity, current)
        if current == quantity:
            del self.units[goods_unit]
        else:
            self.units[goods_unit] = current - quantity

    def remove_all(self, good: Good) -> None:
        """Remove every unit of the given good."""
        self.units = {unit: qty for unit, qty in self.units.items() if unit.good != good}

    def contains(self, good: Good) -> bool:
        """True if the stock holds any units of the given good."""
        return any(unit.good == good for unit in self.units)

    def units_of(self, good: Good) -> list[GoodsUnit]:
        return sorted((unit for unit in self.units if unit.good == good), key=GoodsUnit.sort_key)

    def count_units(self, good: Good) -> int:
        return sum(qty for unit, qty in self.units.items() if unit.good == good)

    def goods(self) -> list[Good]:
        """Goods held, in catalogue order."""
        return [good for good in Good if self.contains(good)]

    def nutritional_units(self) -> int:
        return sum(qty for unit, qty in self.units.items() if unit.good.is_consumer())

    def next_consumables(self) -> list[tuple[GoodsUnit, int]]:
        """Consumer goods buckets, soonest to expire first."""
        return sorted(
            ((unit, qty) for unit, qty in self.units.items() if unit.good.is_consumer()),
            key=lambda item: item[0].sort_key(),
        )

    def next_capital_goods_units(self, capital_good: Good) -> list[tuple[GoodsUnit, int]]:
        """Buckets of a capital good, least remaining lifetime first."""
        if capital_good.is_consumer():
            return []
        return [(unit, self.units[unit]) for unit in self.units_of(capital_good)]

    def count_material_units(self, material_good: Good) -> int:
        if not material_good.is_material():
            return 0
        return sum(qty for _, qty in self.next_capital_goods_units(material_good))

    # --- Partial goods units ---

    def add_partial(self, partial: PartialGoodsUnit) -> None:
        """Add a partially complete unit. Only one per good may exist."""
        if self.get_partial(partial.good) is not None:
            raise ValueError(f"Cannot add a second partial unit of {partial.good}")
        self.partials.append(partial)

    def get_partial(self, good: Good) -> PartialGoodsUnit | None:
        for partial in self.partials:
            if partial.good == good:
                return partial
        return None

    def remove_partial(self, good: Good) -> PartialGoodsUnit:
        """Remove and return the partial unit of the given good."""
        for i, partial in enumerate(self.partials):
            if partial.good == good:
                return self.partials.pop(i)
        raise ValueError(f"No partial unit of {good} in stock")

    # --- Production side effects ---

    def is_used(self, good: Good, action: Action) -> bool:
        """True if the given good is actually used by the action.

        Beyond appearing in the recipe, every required input must be held,
        and a productivity enabler counts only if it is the one that
        currently determines productivity.
        """
        if action.kind != ActionKind.PRODUCE_GOOD or action.good is None:
            return False
        produced = action.good
        if not produced.is_produced_using(good):
            return False
        if not all(self.contains(required) for required in produced.required_inputs()):
            return False
        if good in produced.spec.required_inputs:
            return True
        if good in produced.spec.enablers:
            return produced.active_enabler(self) == good
        return self.contains(good)

    def consume_material_inputs(self, action: Action) -> None:
        """Remove the single-use inputs of the action.

        One unit of each required material is taken from its soonest-expiring
        bucket. Conversions (output scaling with a held good) use up every
        unit of that good. Nothing is removed if a material is missing.
        """
        if action.kind != ActionKind.PRODUCE_GOOD or action.good is None:
            return
        produced = action.good
        feasible = all(self.contains(required) for required in produced.required_inputs())

        removals: list[GoodsUnit] = []
        for required in produced.required_inputs():
            if not required.is_material():
                continue
            next_units = self.next_capital_goods_units(required)
            if not next_units:
                raise InsufficientStockError(required, 1, 0)
            removals.append(next_units[0][0])

        for unit in removals:
            self.remove(unit, 1)
            logger.debug("Consumed 1 %s producing %s", unit.good, produced)
        if produced.spec.scales_with is not None and feasible:
            used = self.count_units(produced.spec.scales_with)
            self.remove_all(produced.spec.scales_with)
            logger.debug("Consumed %d %s producing %s", used, produced.spec.scales_with, produced)

    def degrade_capital_stock(self, action: Action) -> None:
        """Apply wear to the capital goods used by the action and consume materials."""
        if action.kind != ActionKind.PRODUCE_GOOD or action.good is None:
            return
        produced = action.good

        # Identify which durable units are used before touching the stock.
        worn: list[GoodsUnit] = []
        for capital_good in self.goods():
            if capital_good.is_consumer() or capital_good.is_material():
                continue
            if not self.is_used(capital_good, action):
                continue
            worn.append(self.next_capital_goods_units(capital_good)[0][0])

        for required in produced.required_inputs():
            if required.is_material() or required.is_consumer():
                continue
            if not self.contains(required):
                raise InsufficientStockError(required, 1, 0)

        # Materials must be consumed before the durable buckets are rewritten.
        self.consume_material_inputs(action)

        for unit in worn:
            self.remove(unit, 1)
            used = unit.aged()
            if used is not None:
                self.add(used, 1)

    # --- Time ---

    def step_forward(self, action: Action) -> "Stock":
        """Derive the next day's stock from this one and the action taken today.

        Consumer goods and materials spoil by one day (or are improved by a
        held good), durable capital goods are unchanged, and partial units
        not worked on today lose one step of progress.
        """
        new_stock = Stock()
        for unit, quantity in self.units.items():
            if unit.good.is_consumer() or unit.good.is_material():
                next_unit = self._overnight(unit)
            else:
                next_unit = unit
            if next_unit is not None:
                new_stock.add(next_unit, quantity)

        for partial in self.partials:
            next_partial = partial.step_forward(continued=action.produces(partial.good))
            if next_partial is not None:
                new_stock.partials.append(next_partial)
        return new_stock

    def _overnight(self, unit: GoodsUnit) -> GoodsUnit | None:
        good = unit.good
        increment = max(
            (
                good.lifetime_improvement_increment(improver)
                for improver in self.goods()
                if good.is_improved_using(improver)
            ),
            default=0,
        )
        lifetime = good.spec.lifetime
        # Improvement applies once, to units not already beyond their natural lifetime.
        if increment and unit.remaining_lifetime <= lifetime:
            return replace(
                unit,
                remaining_lifetime=min(unit.remaining_lifetime - 1 + increment, lifetime + increment),
            )
        return unit.aged()
