"""Simulation: time-stepping driver for a population of agents."""

import logging
from collections.abc import Sequence

from crusoe.agent.base import Agent
from crusoe.config import CoreConfig
from crusoe.models.snapshot import AgentSnapshot

logger = logging.getLogger(__name__)


class Simulation:
    """Steps every living agent once per tick until time runs out or all are dead.

    Agents never interact: each owns its stock outright.
    """

    def __init__(self, config: CoreConfig, agents: Sequence[Agent]) -> None:
        if not agents:
            raise ValueError("A simulation needs at least one agent")
        self._config = config
        self._agents = list(agents)
        self.time = 0

    @property
    def agents(self) -> list[Agent]:
        return self._agents

    @property
    def config(self) -> CoreConfig:
        return self._config

    def living_agents(self) -> list[Agent]:
        return [agent for agent in self._agents if agent.is_alive]

    def step_forward(self) -> None:
        """Advance every living agent by one step, then advance time."""
        for agent in self.living_agents():
            agent.step_forward()
        self.time += 1

    def is_finished(self) -> bool:
        return self.time >= self._config.max_time or not self.living_agents()

    def run(self) -> list[AgentSnapshot]:
        """Run to completion and return the final state of every agent."""
        logger.info(
            "Simulation started (%d agents, max time %d)",
            len(self._agents),
            self._config.max_time,
        )
        while not self.is_finished():
            tick = self.time
            self.step_forward()
            living = self.living_agents()
            logger.debug(
                "[tick %d] %d/%d agents alive, %d nutritional units held",
                tick,
                len(living),
                len(self._agents),
                sum(agent.stock.nutritional_units() for agent in living),
            )
        logger.info(
            "Simulation stopped at tick %d (%d/%d agents alive)",
            self.time,
            len(self.living_agents()),
            len(self._agents),
        )
        return [AgentSnapshot.from_agent(agent) for agent in self._agents]
