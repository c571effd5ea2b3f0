"""Catalogue data: goods, production rules, and helpers for the Crusoe economy."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from crusoe.models.productivity import Productivity

if TYPE_CHECKING:
    from crusoe.stock.stock import Stock


class Good(StrEnum):
    """A good in the abstract (as opposed to particular units of a good).

    Definition order is significant: it is the deterministic tie-break used
    wherever goods are ranked.
    """

    BERRIES = "berries"
    FISH = "fish"
    SMOKED_FISH = "smoked_fish"
    BASKET = "basket"
    SPEAR = "spear"
    SMOKER = "smoker"
    BOAT = "boat"
    TIMBER = "timber"
    AXE = "axe"

    @property
    def ordinal(self) -> int:
        return _ORDINALS[self]

    @property
    def spec(self) -> GoodSpec:
        return CATALOGUE[self]

    def is_consumer(self) -> bool:
        return self.spec.consumer

    def is_material(self) -> bool:
        """Materials are capital goods used up by a single use."""
        return self.spec.material

    def required_inputs(self) -> list[Good]:
        """Goods that must be held for production to take place at all."""
        return sorted(self.spec.required_inputs, key=lambda g: g.ordinal)

    def is_produced_using(self, good: Good) -> bool:
        """True if `good`, when held, enables or increases production of this good."""
        return good in self.spec.produced_using

    def produces(self) -> list[Good]:
        """Goods downstream of this one, in catalogue order."""
        return [g for g in Good if g.is_produced_using(self)]

    def is_improved_using(self, good: Good) -> bool:
        return good in self.spec.improved_using

    def lifetime_improvement_increment(self, improver: Good) -> int:
        return self.spec.improved_using.get(improver, 0)

    def multiple_timesteps_to_complete(self) -> int | None:
        """Steps needed to finish one unit, or None if production is immediate."""
        return self.spec.timesteps

    def active_enabler(self, stock: Stock) -> Good | None:
        """The held enabler that currently determines productivity, if any."""
        for enabler, _ in self.spec.ranked_enablers():
            if stock.contains(enabler):
                return enabler
        return None

    def default_productivity(self, stock: Stock) -> Productivity:
        """Productivity of this good given the goods currently held in `stock`."""
        spec = self.spec
        missing = [g for g in spec.required_inputs if not stock.contains(g)]
        if spec.timesteps is not None:
            # TODO: check that the quantity of each input lasts the whole production interval.
            if missing:
                return Productivity.none()
            return Productivity.delayed(spec.timesteps)
        if missing:
            return Productivity.none()

        if spec.scales_with is not None:
            quantity = stock.count_units(spec.scales_with)
        else:
            quantity = spec.base_output
            enabler = self.active_enabler(stock)
            if enabler is not None:
                quantity = spec.enablers[enabler]

        if quantity == 0:
            return Productivity.none()
        return Productivity.immediate(quantity)


class GoodSpec(BaseModel):
    """Static production rules for one good."""

    name: Good
    consumer: bool = False
    material: bool = False
    lifetime: int = Field(gt=0)  # days before spoiling, or uses for durable capital goods
    timesteps: int | None = Field(default=None, gt=1)
    base_output: int = Field(default=0, ge=0)
    enablers: dict[Good, int] = Field(default_factory=dict)  # enabler -> boosted output
    required_inputs: frozenset[Good] = frozenset()
    produced_using: frozenset[Good] = frozenset()
    scales_with: Good | None = None  # output equals (and consumes) the held quantity of this good
    improved_using: dict[Good, int] = Field(default_factory=dict)  # improver -> lifetime increment

    def ranked_enablers(self) -> list[tuple[Good, int]]:
        """Enablers in descending order of boost, ties by catalogue order."""
        return sorted(self.enablers.items(), key=lambda kv: (-kv[1], kv[0].ordinal))


_ORDINALS: dict[Good, int] = {good: i for i, good in enumerate(Good)}


# --- Good catalogue ---

CATALOGUE: dict[Good, GoodSpec] = {
    # Consumer goods
    Good.BERRIES: GoodSpec(
        name=Good.BERRIES,
        consumer=True,
        lifetime=10,
        base_output=4,
        enablers={Good.BASKET: 8},
        produced_using=frozenset({Good.BASKET}),
    ),
    Good.FISH: GoodSpec(
        name=Good.FISH,
        consumer=True,
        lifetime=2,
        base_output=2,
        enablers={Good.SPEAR: 10, Good.BOAT: 20},
        produced_using=frozenset({Good.SPEAR, Good.BOAT}),
        improved_using={Good.SMOKER: 20},
    ),
    Good.SMOKED_FISH: GoodSpec(
        name=Good.SMOKED_FISH,
        consumer=True,
        lifetime=20,
        required_inputs=frozenset({Good.SMOKER}),
        produced_using=frozenset({Good.SMOKER, Good.FISH}),
        scales_with=Good.FISH,
    ),
    # Capital goods
    Good.BASKET: GoodSpec(name=Good.BASKET, lifetime=10, base_output=1),
    Good.SPEAR: GoodSpec(name=Good.SPEAR, lifetime=5, base_output=1),
    Good.SMOKER: GoodSpec(
        name=Good.SMOKER,
        lifetime=5,
        timesteps=2,
        required_inputs=frozenset({Good.TIMBER}),
        produced_using=frozenset({Good.TIMBER}),
    ),
    Good.BOAT: GoodSpec(
        name=Good.BOAT,
        lifetime=20,
        timesteps=10,
        required_inputs=frozenset({Good.TIMBER}),
        produced_using=frozenset({Good.TIMBER}),
    ),
    Good.TIMBER: GoodSpec(
        name=Good.TIMBER,
        material=True,
        lifetime=1000,
        enablers={Good.AXE: 2},
        required_inputs=frozenset({Good.AXE}),
        produced_using=frozenset({Good.AXE}),
    ),
    Good.AXE: GoodSpec(name=Good.AXE, lifetime=5, timesteps=2),
}


def _validate_catalogue() -> None:
    """Fail fast on an incomplete catalogue or a cyclic production graph."""
    missing = [good for good in Good if good not in CATALOGUE]
    if missing:
        raise ValueError(f"Goods missing from catalogue: {missing}")

    for good, spec in CATALOGUE.items():
        if spec.name != good:
            raise ValueError(f"Catalogue key {good!r} holds spec for {spec.name!r}")
        if not spec.required_inputs <= spec.produced_using:
            raise ValueError(f"Required inputs of {good!r} must be production inputs")
        if not set(spec.enablers) <= spec.produced_using:
            raise ValueError(f"Enablers of {good!r} must be production inputs")

    # Depth-first search for back edges along produced_using.
    visiting: set[Good] = set()
    done: set[Good] = set()

    def visit(good: Good) -> None:
        if good in done:
            return
        if good in visiting:
            raise ValueError(f"Production graph has a cycle through {good!r}")
        visiting.add(good)
        for upstream in CATALOGUE[good].produced_using:
            visit(upstream)
        visiting.discard(good)
        done.add(good)

    for good in Good:
        visit(good)


_validate_catalogue()


def is_valid_good(name: str) -> bool:
    """Check if a good name exists in the catalogue."""
    return name in Good._value2member_map_


def consumer_goods() -> list[Good]:
    return [g for g in Good if g.is_consumer()]


def capital_goods() -> list[Good]:
    return [g for g in Good if not g.is_consumer()]
