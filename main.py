"""
Headless entry point
 - Plays one session on an asyncio loop with a random player
 - Logs every game event, exits 0 on a win and 1 on a loss
 - Settings come from PAIRS_* environment variables / .env
"""
import asyncio
import logging
import random
import sys

from config.base import ConfigurationError
from config.desktop import DesktopConfiguration
from pairs.data_models import Outcome, SelectionState
from pairs.scheduling import AsyncioScheduler
from pairs.session import SessionController

logger = logging.getLogger("pairs.headless")

THINK_TIME = (0.05, 0.4)


async def play(config: DesktopConfiguration) -> Outcome:
    session = SessionController(config, AsyncioScheduler())
    session.add_listener(lambda event: logger.info("%s", event))
    session.start()

    while session.is_running:
        await asyncio.sleep(random.uniform(*THINK_TIME))
        if session.selection_state is SelectionState.RESOLVING:
            continue
        hidden = [i for i, card in enumerate(session.board) if not card.revealed]
        if hidden:
            session.select_index(random.choice(hidden))

    return session.outcome


def main() -> int:
    try:
        config = DesktopConfiguration.from_env()
    except ConfigurationError as e:
        print(f"Invalid configuration: {e}")
        return 2

    logging.basicConfig(
        level=config.log_level_value,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )
    outcome = asyncio.run(play(config))
    return 0 if outcome is Outcome.WON else 1


if __name__ == "__main__":
    sys.exit(main())
