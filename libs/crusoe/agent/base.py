"""Agent: base class for all agents in the Crusoe economy."""

import copy
import logging
from abc import ABC, abstractmethod
from typing import Self

from crusoe.config import CoreConfig
from crusoe.models.actions import Action, ActionKind
from crusoe.models.catalogue import Good
from crusoe.models.productivity import ProductivityKind, Productivity
from crusoe.models.units import GoodsUnit, PartialGoodsUnit
from crusoe.stock.errors import InsufficientStockError
from crusoe.stock.stock import Stock

logger = logging.getLogger(__name__)


class Agent(ABC):
    """Base class for agents that produce, consume and age a stock of goods.

    Subclasses must set AGENT_NAME and implement choose_action() -> Action.
    """

    AGENT_NAME: str = ""

    def __init__(
        self,
        agent_id: int,
        config: CoreConfig | None = None,
        stock: Stock | None = None,
    ) -> None:
        self._id = agent_id
        self._config = config if config is not None else CoreConfig()
        self._stock = stock if stock is not None else Stock()
        self._alive = True
        self.action_history: list[Action] = []
        self.stock_history: list[Stock] = []
        self.reward_history: list[int] = []

    @property
    def id(self) -> int:
        return self._id

    @property
    def config(self) -> CoreConfig:
        return self._config

    @property
    def stock(self) -> Stock:
        """The live stock. Mutations through this reference change the agent."""
        return self._stock

    @property
    def is_alive(self) -> bool:
        return self._alive

    @property
    def time(self) -> int:
        """Number of steps this agent has taken."""
        return len(self.reward_history)

    def set_stock(self, stock: Stock) -> None:
        self._stock = stock

    def set_liveness(self, value: bool) -> None:
        self._alive = value

    @abstractmethod
    def choose_action(self) -> Action:
        """Policy: given the current stock, return the action for this step.

        This is the only method subclasses must implement.
        """

    # --- Stock access ---

    def productivity(self, good: Good) -> Productivity:
        return good.default_productivity(self._stock)

    def acquire(self, goods_unit: GoodsUnit, quantity: int) -> None:
        self._stock.add(goods_unit, quantity)

    def acquire_partial(self, partial: PartialGoodsUnit) -> None:
        self._stock.add_partial(partial)

    def get_partial(self, good: Good) -> PartialGoodsUnit | None:
        return self._stock.get_partial(good)

    def clone(self) -> Self:
        """Disposable copy for what-if simulation, with empty histories."""
        dummy = copy.copy(self)
        dummy._stock = self._stock.copy()
        dummy.action_history = []
        dummy.stock_history = []
        dummy.reward_history = []
        return dummy

    # --- Step ---

    def act(self, action: Action) -> int:
        """Apply the production effects of an action.

        Does not consume nutrition or advance time. Returns the number of
        finished units added to the stock.
        """
        if action.kind == ActionKind.LEISURE or action.good is None:
            return 0
        good = action.good
        productivity = self.productivity(good)
        if productivity.kind == ProductivityKind.NONE:
            return 0  # Wasted action.

        try:
            self._stock.degrade_capital_stock(action)
        except InsufficientStockError as e:
            logger.warning("[tick %d] %s-%d: cannot produce %s: %s", self.time, self.AGENT_NAME, self._id, good, e)
            return 0

        if productivity.kind == ProductivityKind.IMMEDIATE:
            self._stock.add(GoodsUnit.new(good), productivity.amount)
            return productivity.amount

        partial = self._stock.get_partial(good)
        if partial is None:
            partial = PartialGoodsUnit.new(good)
        else:
            self._stock.remove_partial(good)
        advanced = partial.increment_production()
        if advanced is None:
            self._stock.add(GoodsUnit.new(good), 1)
            return 1
        self._stock.add_partial(advanced)
        logger.debug(
            "[tick %d] %s-%d: %s in progress, %d steps to go",
            self.time,
            self.AGENT_NAME,
            self._id,
            good,
            advanced.time_to_completion,
        )
        return 0

    def consume(self, nutritional_units: int) -> bool:
        """Eat units of consumer goods, soonest to expire first.

        Returns False (the agent starves) if the stock holds too few units;
        whatever was available is still eaten.
        """
        outstanding = nutritional_units
        eaten: list[tuple[GoodsUnit, int]] = []
        for unit, qty in self._stock.next_consumables():
            if outstanding == 0:
                break
            take = min(qty, outstanding)
            eaten.append((unit, take))
            outstanding -= take
        for unit, qty in eaten:
            self._stock.remove(unit, qty)
        return outstanding == 0

    def reward(self, action: Action, alive: bool) -> int:
        if not alive:
            return self._config.negative_reward
        if action.kind == ActionKind.LEISURE:
            return self._config.positive_reward
        return 0

    def step_forward(self, action: Action | None = None) -> int | None:
        """Advance one time step: act, consume, record, then age the stock.

        Chooses an action if none is given. Returns the step's reward, or
        None if the agent is already dead.
        """
        if not self._alive:
            return None
        if action is None:
            action = self.choose_action()
        tick = self.time

        produced = self.act(action)
        alive = self.consume(self._config.daily_nutrition)

        self.action_history.append(action)
        self.stock_history.append(self._stock.copy())
        reward = self.reward(action, alive)
        self.reward_history.append(reward)
        self.set_stock(self._stock.step_forward(action))

        logger.debug("[tick %d] %s-%d: %s", tick, self.AGENT_NAME, self._id, action)
        if produced and action.good is not None and not action.good.is_consumer():
            logger.info("[tick %d] %s-%d: produced %d %s", tick, self.AGENT_NAME, self._id, produced, action.good)
        if not alive:
            self._alive = False
            logger.info("[tick %d] %s-%d: died", tick, self.AGENT_NAME, self._id)
        return reward
