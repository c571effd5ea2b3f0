"""Entry point: python -m services.simulation"""

import logging

from crusoe.config import load_config

from agents.rational.agent import RationalAgent
from services.simulation.simulation import Simulation


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    config = load_config()
    agents = [RationalAgent(agent_id, config) for agent_id in range(1, config.n_agents + 1)]
    snapshots = Simulation(config, agents).run()

    log = logging.getLogger(__name__)
    for snapshot in snapshots:
        log.info("%s", snapshot.model_dump_json())


if __name__ == "__main__":
    main()
