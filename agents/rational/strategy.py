"""Rational strategy: pure function over the agent's stock, no I/O.

A greedy, locally optimal heuristic rather than a planner. Priority order each step:
1. CONTINUE any partially produced good until it is complete
2. USE held capital goods: produce a valuable downstream capital good not yet
   held (while food lasts at least one more step), else the consumer good
   they make most productive
3. Otherwise PRODUCE the good with the highest marginal benefit
4. If the preferred good cannot be seen through, produce its missing input first
5. LEISURE once survival exceeds the leisure horizon
"""

from crusoe.agent.base import Agent
from crusoe.models.actions import Action
from crusoe.models.catalogue import Good

from agents.rational.valuation import (
    count_timesteps_till_death,
    is_producible,
    marginal_benefit_of_action,
    marginal_unit_value_of_capital_good,
    next_missing_input,
)


def best_good_by_benefit(agent: Agent) -> Good:
    """Good with the highest marginal benefit; Berries if nothing beats zero."""
    best_good = Good.BERRIES
    max_benefit = 0.0
    for good in Good:
        benefit = marginal_benefit_of_action(agent, Action.produce(good))
        if benefit > max_benefit:
            best_good = good
            max_benefit = benefit
    return best_good


def best_downstream_good(agent: Agent, survival: int) -> Good | None:
    """Preferred use of the capital goods already held, if any."""
    best_consumer: Good | None = None
    max_productivity = 0.0
    best_capital: Good | None = None
    max_value = 0.0

    for held in agent.stock.goods():
        if held.is_consumer():
            continue
        for downstream in held.produces():
            if downstream.is_consumer():
                # Consumer goods are assumed to give equal sustenance per unit.
                per_unit_time = agent.productivity(downstream).per_unit_time()
                if per_unit_time is not None and per_unit_time > max_productivity:
                    best_consumer = downstream
                    max_productivity = per_unit_time
            elif survival > 0 and not agent.stock.contains(downstream):
                value = marginal_unit_value_of_capital_good(agent, downstream)
                if value > max_value:
                    best_capital = downstream
                    max_value = value

    if best_capital is not None:
        return best_capital
    return best_consumer


def first_feasible_step(agent: Agent, good: Good) -> Good | None:
    """Walk up the missing inputs of `good` until one can be produced now."""
    target: Good | None = good
    seen: set[Good] = set()
    while target is not None and target not in seen:
        if is_producible(agent, target):
            return target
        seen.add(target)
        target = next_missing_input(agent, target)
    return None


def decide(agent: Agent) -> Action:
    """Rational decision logic: returns the action to take this step."""
    # 1. CONTINUE partial production
    if agent.stock.partials:
        return Action.produce(agent.stock.partials[0].good)

    survival = count_timesteps_till_death(agent)

    # 2-4. USE capital goods, else PRODUCE the best good
    good = best_good_by_benefit(agent)
    downstream = best_downstream_good(agent, survival)
    if downstream is not None:
        good = first_feasible_step(agent, downstream) or good

    # 5. LEISURE
    if survival > agent.config.leisure_horizon:
        return Action.leisure()
    return Action.produce(good)
