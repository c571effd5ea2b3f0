"""Valuation engine: forward-looking marginal values computed on disposable agent clones.

Every function takes the agent whose stock is being valued and never mutates
it. What-if trajectories run on `agent.clone()`.

Consumer goods are valued in time: the marginal unit value of a consumer good
is the least time needed to produce the same extra survival by any route.
Capital goods are valued by their best downstream use, recursing along the
production graph until a consumer good is reached.
"""

import math

from crusoe.agent.base import Agent
from crusoe.models.actions import Action, ActionKind
from crusoe.models.catalogue import Good, consumer_goods
from crusoe.models.productivity import ProductivityKind
from crusoe.models.units import GoodsUnit



def _uses(unit: GoodsUnit) -> int:
    """Uses a fresh unit grants: one for a material, its lifetime otherwise."""
    if unit.good.is_material():
        return 1
    return unit.remaining_lifetime


def _immediate_quantity(agent: Agent, good: Good) -> int:
    productivity = agent.productivity(good)
    if productivity.kind == ProductivityKind.DELAYED:
        raise ValueError(f"Expected immediate productivity for {good!r}")
    return productivity.quantity()


# --- Survival ---


def count_timesteps_till_death(agent: Agent, additional_good: Good | None = None) -> int:
    """Steps the agent survives on its current stock by consumption alone.

    Optionally adds one fresh unit of `additional_good` first. Terminates
    because every successful step eats at least one unit.
    """
    dummy = agent.clone()
    if additional_good is not None:
        dummy.acquire(GoodsUnit.new(additional_good), 1)

    leisure = Action.leisure()
    count = 0
    while dummy.consume(agent.config.daily_nutrition):
        dummy.set_stock(dummy.stock.step_forward(leisure))
        count += 1
    return count


def additional_sustenance(agent: Agent, good: Good) -> int:
    """Extra steps of survival from one more unit of `good`."""
    return count_timesteps_till_death(agent, good) - count_timesteps_till_death(agent)


# --- Production time ---


def time_to_produce_units(agent: Agent, good: Good, quantity: int) -> float | None:
    """Fractional number of steps needed to produce `quantity` units of `good`.

    Production runs on a clone, so wear on tools and depletion of materials
    are taken into account. Returns None once production becomes infeasible.
    """
    if quantity == 0:
        return 0.0
    dummy = agent.clone()
    prior = dummy.stock.count_units(good)
    action = Action.produce(good)
    count = 0
    while True:
        per_unit_time = dummy.productivity(good).per_unit_time()
        if per_unit_time is None:
            return None
        dummy.act(action)
        count += 1
        produced = dummy.stock.count_units(good) - prior
        if produced >= quantity:
            # The last step only needs to produce what is still missing.
            excess = produced - quantity
            return (count - 1) + (per_unit_time - excess) / per_unit_time


def time_to_equiv_sustenance(
    agent: Agent,
    alt_good: Good,
    target_sustenance: int,
    max_time: float,
) -> float | None:
    """Time to produce enough `alt_good` to add `target_sustenance` steps of survival.

    Returns None if `alt_good` is not a consumer good, cannot be produced, or
    needs more than `max_time`. Also gives up once
    (survival + target) * daily_nutrition units have been added without
    reaching the target.

    Raises:
        ValueError: If `target_sustenance` is zero.
    """
    if target_sustenance <= 0:
        raise ValueError("Target sustenance must be greater than zero")
    if not alt_good.is_consumer():
        return None
    if agent.productivity(alt_good).is_none:
        return None

    survival = count_timesteps_till_death(agent)
    limit = (survival + target_sustenance) * agent.config.daily_nutrition
    dummy = agent.clone()
    count = 0
    while count < limit:
        dummy.acquire(GoodsUnit.new(alt_good), 1)
        count += 1
        extra = count_timesteps_till_death(dummy) - survival
        t = time_to_produce_units(agent, alt_good, count)
        if t is None:
            return None
        if extra >= target_sustenance:
            return t
        if t > max_time:
            return None
    return None


# --- Consumer goods ---


def marginal_unit_value_of_consumer_good(agent: Agent, good: Good) -> float:
    """Least time needed to produce the survival that one more unit of `good` adds.

    Zero if the extra unit adds no survival. Berries need no inputs, so the
    time to produce one unit of them bounds the search over alternatives.
    """
    if not good.is_consumer():
        raise ValueError(f"Expected a consumer good, got {good!r}")
    sustenance = additional_sustenance(agent, good)
    if sustenance == 0:
        return 0.0

    berries_rate = agent.productivity(Good.BERRIES).per_unit_time()
    min_equiv = 1.0 / berries_rate if berries_rate else math.inf
    for alt_good in consumer_goods():
        if alt_good == Good.BERRIES:
            continue
        t = time_to_equiv_sustenance(agent, alt_good, sustenance, min_equiv)
        if t is not None and t < min_equiv:
            min_equiv = t
    if math.isinf(min_equiv):
        return 0.0
    return min_equiv


def marginal_benefit_of_producing_consumer_goods(agent: Agent, good: Good) -> float:
    """Sum of marginal unit values over the units one production step yields.

    Units are added one at a time to a clone, so diminishing returns within
    a single step are captured. Goods a conversion uses up are removed first.
    """
    if not good.is_consumer():
        raise ValueError(f"Expected a consumer good, got {good!r}")
    quantity = _immediate_quantity(agent, good)
    if quantity == 0:
        return 0.0

    dummy = agent.clone()
    if good.spec.scales_with is not None:
        dummy.stock.remove_all(good.spec.scales_with)
    total = 0.0
    for _ in range(quantity):
        total += marginal_unit_value_of_consumer_good(dummy, good)
        dummy.acquire(GoodsUnit.new(good), 1)
    return total


# --- Capital goods ---


def value_of_first_order_productivity(
    agent: Agent,
    capital_good: Good,
    consumer_good: Good,
    factor: float = 1.0,
) -> float:
    """Value of the productivity jump one unit of `capital_good` gives `consumer_good`.

    The extra units one step yields are valued one at a time and the sum is
    multiplied by the uses the capital good grants and by `factor`. Zero if
    the capital good does not raise productivity (a spear when a boat is held).
    Goods a conversion uses up are removed before the extra units are valued.
    """
    if not consumer_good.is_produced_using(capital_good):
        raise ValueError(f"{consumer_good!r} is not produced using {capital_good!r}")
    unit = GoodsUnit.new(capital_good)
    dummy = agent.clone()

    sans = _immediate_quantity(dummy, consumer_good)
    dummy.acquire(unit, 1)
    with_capital = _immediate_quantity(dummy, consumer_good)
    dummy.stock.remove(unit, 1)

    if with_capital == 0 or with_capital <= sans:
        return 0.0
    if consumer_good.spec.scales_with is not None:
        dummy.stock.remove_all(consumer_good.spec.scales_with)

    total = 0.0
    for _ in range(with_capital - sans):
        total += marginal_unit_value_of_consumer_good(dummy, consumer_good)
        dummy.acquire(GoodsUnit.new(consumer_good), 1)
    return factor * _uses(unit) * total


def value_generated_by_first_order_capital_good(agent: Agent, capital_good: Good, consumer_good: Good) -> float:
    """Value a capital good generates directly in producing a consumer good.

    Held units of the capital good are removed from the clone and the result
    is scaled by the new unit's uses over the uses already held.
    """
    if capital_good.is_consumer() or not consumer_good.is_consumer():
        raise ValueError(f"Expected a capital and a consumer good, got {capital_good!r} and {consumer_good!r}")
    dummy = agent.clone()
    factor = 1.0
    held = agent.stock.next_capital_goods_units(capital_good)
    if held:
        usable = sum(qty * _uses(unit) for unit, qty in held)
        factor = _uses(GoodsUnit.new(capital_good)) / usable
        for unit, qty in held:
            dummy.stock.remove(unit, qty)
    return value_of_first_order_productivity(dummy, capital_good, consumer_good, factor)


def value_generated_by_higher_order_good(agent: Agent, higher_order_good: Good, lower_order_good: Good) -> float:
    """Value `higher_order_good` generates in producing `lower_order_good`."""
    if higher_order_good.is_consumer():
        raise ValueError(f"Expected a capital good, got {higher_order_good!r}")
    if not lower_order_good.is_produced_using(higher_order_good):
        raise ValueError(f"{lower_order_good!r} is not produced using {higher_order_good!r}")

    if lower_order_good.is_consumer():
        return value_generated_by_first_order_capital_good(agent, higher_order_good, lower_order_good)
    # Recursion follows the acyclic production graph.
    factor = _uses(GoodsUnit.new(higher_order_good))
    return factor * marginal_unit_value_of_capital_good(agent, lower_order_good)


def marginal_unit_value_of_capital_good(agent: Agent, good: Good) -> float:
    """Best (not summed) value over every good produced using `good`."""
    if good.is_consumer():
        raise ValueError(f"Expected a capital good, got {good!r}")
    return max(
        (value_generated_by_higher_order_good(agent, good, lower) for lower in good.produces()),
        default=0.0,
    )


def production_interval(agent: Agent, good: Good) -> int:
    """Whole steps one unit of `good` takes to produce."""
    steps = good.multiple_timesteps_to_complete()
    if steps is not None:
        return steps
    per_unit_time = agent.productivity(good).per_unit_time()
    if per_unit_time is None:
        return 1
    return int(1 / per_unit_time)


def is_producible(agent: Agent, good: Good) -> bool:
    """Can production of `good` be seen through on the current stock?

    Capital goods need enough food to survive the production interval and
    one unit of each required material per step of it.
    """
    if good.is_consumer():
        return True
    if agent.productivity(good).is_none:
        return False
    interval = production_interval(agent, good)
    if count_timesteps_till_death(agent) < interval:
        return False
    for required in good.required_inputs():
        if required.is_material() and agent.stock.count_material_units(required) < max(interval, 1):
            return False
    return True


def next_missing_input(agent: Agent, good: Good) -> Good | None:
    """The first required input that is short for producing `good`, if any."""
    interval = production_interval(agent, good)
    required_inputs = good.required_inputs()
    for required in required_inputs:
        if required.is_material() and agent.stock.count_material_units(required) < max(interval, 1):
            return required
    for required in required_inputs:
        if not agent.stock.contains(required):
            return required
    return None


def marginal_benefit_of_producing_capital_goods(agent: Agent, good: Good) -> float:
    """Capital value accrued per step spent producing `good`."""
    if good.is_consumer():
        raise ValueError(f"Expected a capital good, got {good!r}")
    per_unit_time = agent.productivity(good).per_unit_time()
    if per_unit_time is None or not is_producible(agent, good):
        return 0.0
    return per_unit_time * marginal_unit_value_of_capital_good(agent, good)


def marginal_benefit_of_action(agent: Agent, action: Action) -> float:
    if action.kind == ActionKind.LEISURE or action.good is None:
        return 0.0
    if action.good.is_consumer():
        return marginal_benefit_of_producing_consumer_goods(agent, action.good)
    return marginal_benefit_of_producing_capital_goods(agent, action.good)
