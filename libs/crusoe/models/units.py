"""Concrete units of goods held in a stock."""

from dataclasses import dataclass, replace

from crusoe.models.catalogue import Good


@dataclass(frozen=True)
class GoodsUnit:
    """A batch key: units of one good sharing the same remaining lifetime.

    For consumer goods and materials `remaining_lifetime` counts days before
    expiry; for durable capital goods it counts remaining uses.
    """

    good: Good
    remaining_lifetime: int

    @classmethod
    def new(cls, good: Good) -> "GoodsUnit":
        """A newly produced unit of `good`."""
        return cls(good=good, remaining_lifetime=good.spec.lifetime)

    def sort_key(self) -> tuple[int, int]:
        """Soonest to expire first, ties by catalogue order."""
        return self.remaining_lifetime, self.good.ordinal

    def aged(self, steps: int = 1) -> "GoodsUnit | None":
        """This unit after `steps` days or uses, or None once it is used up."""
        remaining = self.remaining_lifetime - steps
        if remaining <= 0:
            return None
        return replace(self, remaining_lifetime=remaining)


@dataclass(frozen=True)
class PartialGoodsUnit:
    """A unit of a multi-step good that is still being produced."""

    good: Good
    time_to_completion: int

    @classmethod
    def new(cls, good: Good) -> "PartialGoodsUnit":
        duration = good.multiple_timesteps_to_complete()
        if duration is None:
            raise ValueError(f"{good!r} does not take multiple timesteps to complete")
        return cls(good=good, time_to_completion=duration)

    @property
    def duration(self) -> int:
        duration = self.good.multiple_timesteps_to_complete()
        if duration is None:
            raise ValueError(f"{self.good!r} does not take multiple timesteps to complete")
        return duration

    def increment_production(self) -> "PartialGoodsUnit | None":
        """Advance production by one step. Returns None once the unit is complete."""
        remaining = self.time_to_completion - 1
        if remaining <= 0:
            return None
        return replace(self, time_to_completion=remaining)

    def step_forward(self, continued: bool) -> "PartialGoodsUnit | None":
        """Penalise a step on which production was not continued.

        A continued unit is returned unchanged (progress was recorded when the
        agent acted). Otherwise one step is added to the time to completion,
        and the unit is abandoned once that reaches the full duration.
        """
        if continued:
            return self
        time_to_completion = self.time_to_completion + 1
        if time_to_completion >= self.duration:
            return None
        return replace(self, time_to_completion=time_to_completion)
