"""RationalAgent: chooses actions by the marginal value of what they produce."""

from crusoe.agent.base import Agent
from crusoe.models.actions import Action

from agents.rational.strategy import decide


class RationalAgent(Agent):
    AGENT_NAME = "Rational"

    def choose_action(self) -> Action:
        return decide(self)
