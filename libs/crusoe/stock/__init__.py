from crusoe.stock.errors import InsufficientStockError, StockError
from crusoe.stock.stock import Stock

__all__ = [
    "InsufficientStockError",
    "Stock",
    "StockError",
]
