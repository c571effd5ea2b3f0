"""Agent shell: the shared state machine every strategy builds on."""

from crusoe.agent.base import Agent
from crusoe.models.actions import Action, ActionKind

__all__ = [
    "Action",
    "ActionKind",
    "Agent",
]
