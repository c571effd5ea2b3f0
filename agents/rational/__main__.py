"""Entry point: python -m agents.rational"""

import logging

from crusoe.config import load_config
from crusoe.models.snapshot import AgentSnapshot

from agents.rational.agent import RationalAgent


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    config = load_config()
    agent = RationalAgent(1, config)
    log = logging.getLogger(__name__)
    log.info("Rational agent running for up to %d steps", config.max_time)

    for _ in range(config.max_time):
        if agent.step_forward() is None:
            break

    log.info("%s", AgentSnapshot.from_agent(agent).model_dump_json())


if __name__ == "__main__":
    main()
