"""Naive agents: random choice over actions, for baselines and exploration."""

import random
from typing import Self

from crusoe.agent.base import Agent
from crusoe.config import CoreConfig
from crusoe.models.actions import Action
from crusoe.models.catalogue import Good
from crusoe.stock.stock import Stock


def _seeded_rng(config: CoreConfig, agent_id: int) -> random.Random:
    """Per-agent RNG: reproducible when the config carries a seed."""
    if config.seed is None:
        return random.Random()
    return random.Random(config.seed + agent_id)


class RandomAgent(Agent):
    AGENT_NAME = "Random"

    def __init__(
        self,
        agent_id: int,
        config: CoreConfig | None = None,
        stock: Stock | None = None,
    ) -> None:
        super().__init__(agent_id, config, stock)
        self.rng = _seeded_rng(self.config, agent_id)

    def clone(self) -> Self:
        """Clone with its own RNG, continuing from this agent's current state."""
        dummy = super().clone()
        dummy.rng = random.Random()
        dummy.rng.setstate(self.rng.getstate())
        return dummy

    def choose_action(self) -> Action:
        return self.rng.choice(Action.all())


class WeightedRandomAgent(RandomAgent):
    """Leisure with probability `leisure_weight`, else a uniform production action."""

    AGENT_NAME = "WeightedRandom"

    def __init__(
        self,
        agent_id: int,
        config: CoreConfig | None = None,
        stock: Stock | None = None,
        leisure_weight: float = 0.5,
    ) -> None:
        if not 0.0 <= leisure_weight <= 1.0:
            raise ValueError(f"leisure_weight must be within [0, 1], got {leisure_weight}")
        super().__init__(agent_id, config, stock)
        self.leisure_weight = leisure_weight

    def choose_action(self) -> Action:
        if self.rng.random() < self.leisure_weight:
            return Action.leisure()
        return Action.produce(self.rng.choice(list(Good)))
