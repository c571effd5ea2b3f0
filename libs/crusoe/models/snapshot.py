"""Snapshot models: plain records of stocks and agents for external consumers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from crusoe.models.catalogue import Good
from crusoe.models.units import GoodsUnit, PartialGoodsUnit
from crusoe.stock.stock import Stock

if TYPE_CHECKING:
    from crusoe.agent.base import Agent


class GoodsUnitRecord(BaseModel):
    """One bucket of a stock."""

    good: Good
    remaining_lifetime: int = Field(gt=0)
    quantity: int = Field(gt=0)


class PartialRecord(BaseModel):
    """One partially produced unit."""

    good: Good
    time_to_completion: int = Field(gt=0)


class StockSnapshot(BaseModel):
    units: list[GoodsUnitRecord] = Field(default_factory=list)
    partials: list[PartialRecord] = Field(default_factory=list)

    @classmethod
    def from_stock(cls, stock: Stock) -> StockSnapshot:
        """Record a stock, buckets ordered soonest-to-expire first."""
        ordered = sorted(stock.units.items(), key=lambda item: item[0].sort_key())
        return cls(
            units=[
                GoodsUnitRecord(good=unit.good, remaining_lifetime=unit.remaining_lifetime, quantity=qty)
                for unit, qty in ordered
                if qty > 0
            ],
            partials=[
                PartialRecord(good=p.good, time_to_completion=p.time_to_completion)
                for p in stock.partials
            ],
        )

    def to_stock(self) -> Stock:
        stock = Stock()
        for record in self.units:
            stock.add(GoodsUnit(good=record.good, remaining_lifetime=record.remaining_lifetime), record.quantity)
        for record in self.partials:
            stock.add_partial(PartialGoodsUnit(good=record.good, time_to_completion=record.time_to_completion))
        return stock


class AgentSnapshot(BaseModel):
    """State of one agent after a run."""

    agent_id: int
    name: str
    alive: bool
    stock: StockSnapshot
    actions: list[str] = Field(default_factory=list)
    rewards: list[int] = Field(default_factory=list)

    @classmethod
    def from_agent(cls, agent: Agent) -> AgentSnapshot:
        return cls(
            agent_id=agent.id,
            name=agent.AGENT_NAME,
            alive=agent.is_alive,
            stock=StockSnapshot.from_stock(agent.stock),
            actions=[str(action) for action in agent.action_history],
            rewards=list(agent.reward_history),
        )
