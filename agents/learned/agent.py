"""PolicyAgent: delegates action choice to an externally trained policy."""

from collections.abc import Callable

from crusoe.agent.base import Agent
from crusoe.config import CoreConfig
from crusoe.models.actions import Action
from crusoe.stock.stock import Stock

Policy = Callable[[Stock], Action]


class PolicyAgent(Agent):
    AGENT_NAME = "Policy"

    def __init__(
        self,
        agent_id: int,
        policy: Policy,
        config: CoreConfig | None = None,
        stock: Stock | None = None,
    ) -> None:
        super().__init__(agent_id, config, stock)
        self.policy = policy

    def choose_action(self) -> Action:
        # The policy sees a copy so it cannot change the stock behind the agent's back.
        action = self.policy(self.stock.copy())
        if not isinstance(action, Action):
            raise TypeError(f"Policy returned {type(action).__name__}, expected Action")
        return action
