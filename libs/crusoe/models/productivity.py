"""Productivity: the yield of one production action."""

from dataclasses import dataclass
from enum import StrEnum


class ProductivityKind(StrEnum):
    IMMEDIATE = "immediate"  # `amount` units produced this step
    DELAYED = "delayed"  # one unit after `amount` consecutive steps
    NONE = "none"  # infeasible given the current stock


@dataclass(frozen=True)
class Productivity:
    """Tagged union of the three productivity outcomes."""

    kind: ProductivityKind
    amount: int = 0

    @classmethod
    def immediate(cls, quantity: int) -> "Productivity":
        if quantity <= 0:
            raise ValueError(f"Immediate productivity must be positive, got {quantity}")
        return cls(ProductivityKind.IMMEDIATE, quantity)

    @classmethod
    def delayed(cls, interval: int) -> "Productivity":
        if interval <= 1:
            raise ValueError(f"Delayed productivity needs an interval above 1, got {interval}")
        return cls(ProductivityKind.DELAYED, interval)

    @classmethod
    def none(cls) -> "Productivity":
        return cls(ProductivityKind.NONE)

    @property
    def is_none(self) -> bool:
        return self.kind == ProductivityKind.NONE

    def per_unit_time(self) -> float | None:
        """Units produced per time step, or None if production is infeasible."""
        if self.kind == ProductivityKind.IMMEDIATE:
            return float(self.amount)
        if self.kind == ProductivityKind.DELAYED:
            return 1.0 / self.amount
        return None

    def quantity(self) -> int:
        """Units produced this step (zero unless immediate)."""
        if self.kind == ProductivityKind.IMMEDIATE:
            return self.amount
        return 0
