"""Crusoe economy: shared production, stock and agent library."""

from crusoe.agent import Agent
from crusoe.config import CoreConfig, load_config
from crusoe.models.actions import Action, ActionKind
from crusoe.models.catalogue import (
    CATALOGUE,
    Good,
    GoodSpec,
    capital_goods,
    consumer_goods,
    is_valid_good,
)
from crusoe.models.productivity import Productivity, ProductivityKind
from crusoe.models.snapshot import AgentSnapshot, GoodsUnitRecord, PartialRecord, StockSnapshot
from crusoe.models.units import GoodsUnit, PartialGoodsUnit
from crusoe.stock import InsufficientStockError, Stock, StockError

__all__ = [
    # Agent shell
    "Action",
    "ActionKind",
    "Agent",
    # Config
    "CoreConfig",
    "load_config",
    # Models
    "AgentSnapshot",
    "CATALOGUE",
    "Good",
    "GoodSpec",
    "GoodsUnit",
    "GoodsUnitRecord",
    "PartialGoodsUnit",
    "PartialRecord",
    "Productivity",
    "ProductivityKind",
    "StockSnapshot",
    # Stock
    "InsufficientStockError",
    "Stock",
    "StockError",
    # Helpers
    "capital_goods",
    "consumer_goods",
    "is_valid_good",
]
