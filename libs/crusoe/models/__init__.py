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
from crusoe.models.units import GoodsUnit, PartialGoodsUnit

__all__ = [
    "Action",
    "ActionKind",
    "CATALOGUE",
    "Good",
    "GoodSpec",
    "GoodsUnit",
    "PartialGoodsUnit",
    "Productivity",
    "ProductivityKind",
    "capital_goods",
    "consumer_goods",
    "is_valid_good",
]
