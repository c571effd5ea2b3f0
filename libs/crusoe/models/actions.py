"""Action model: the single choice an agent makes each time step."""

from dataclasses import dataclass
from enum import StrEnum

from crusoe.models.catalogue import Good


class ActionKind(StrEnum):
    """All action types an agent can take."""

    PRODUCE_GOOD = "produce_good"
    LEISURE = "leisure"


@dataclass(frozen=True)
class Action:
    """Either production of one good or leisure.

    Chosen once per time step; the sole input to the stock transition.
    """

    kind: ActionKind
    good: Good | None = None

    def __post_init__(self) -> None:
        if self.kind == ActionKind.PRODUCE_GOOD and self.good is None:
            raise ValueError("PRODUCE_GOOD action requires a good")
        if self.kind == ActionKind.LEISURE and self.good is not None:
            raise ValueError("LEISURE action cannot carry a good")

    @classmethod
    def produce(cls, good: Good) -> "Action":
        return cls(kind=ActionKind.PRODUCE_GOOD, good=good)

    @classmethod
    def leisure(cls) -> "Action":
        return cls(kind=ActionKind.LEISURE)

    @classmethod
    def all(cls) -> list["Action"]:
        """Every possible action: one per good, then leisure."""
        return [cls.produce(good) for good in Good] + [cls.leisure()]

    def produces(self, good: Good) -> bool:
        return self.kind == ActionKind.PRODUCE_GOOD and self.good == good

    def __str__(self) -> str:
        if self.good is None:
            return str(self.kind)
        return f"{self.kind}({self.good})"
