"""Core configuration, read from CRUSOE_* environment variables."""

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field

ENV_PREFIX = "CRUSOE_"


class CoreConfig(BaseModel):
    """Parameters shared by agents and the simulation driver."""

    daily_nutrition: int = Field(default=3, gt=0)  # consumer units eaten per step
    leisure_horizon: int = Field(default=12, ge=0)  # survival steps beyond which leisure is chosen
    positive_reward: int = 1
    negative_reward: int = Field(default=-10, lt=0)
    max_time: int = Field(default=100, gt=0)
    n_agents: int = Field(default=1, gt=0)
    seed: int | None = None


def load_config(environ: Mapping[str, str] | None = None) -> CoreConfig:
    """Build a CoreConfig from the environment; unset variables keep their defaults.

    Raises:
        ValidationError: If a variable holds an invalid value.
    """
    if environ is None:
        environ = os.environ
    values: dict[str, str] = {}
    for name in CoreConfig.model_fields:
        raw = environ.get(ENV_PREFIX + name.upper())
        if raw is not None and raw.strip():
            values[name] = raw.strip()
    return CoreConfig.model_validate(values)
