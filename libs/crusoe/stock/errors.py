"""Stock errors."""

from crusoe.models.catalogue import Good


class StockError(Exception):
    """Base class for recoverable stock failures."""


class InsufficientStockError(StockError):
    """An action or removal needs more units of a good than the stock holds."""

    def __init__(self, good: Good, requested: int, available: int) -> None:
        self.good = good
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock of {good}: requested {requested}, available {available}"
        )
