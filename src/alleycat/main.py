"""
Main entry point for ALLEYCAT.

Launches the pygame window, or a headless seeded run when
ALLEYCAT_ENV=headless.
"""

import asyncio
import logging
import random
import sys

from dotenv import load_dotenv

from alleycat.config.settings import Settings, get_settings
from alleycat.core.clock import FrameDriver
from alleycat.core.events import EventBus
from alleycat.game.controls import Controls
from alleycat.game.session import GameSession
from alleycat.storage.highscore import HighScoreError, JsonHighScoreStore

logger = logging.getLogger(__name__)


def setup_logging(settings: Settings) -> None:
    """Configure console and file logging."""
    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )
    level = logging.DEBUG if settings.debug else logging.INFO

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    # Truncate on each run for fresh logs
    file_handler = logging.FileHandler(settings.log_path, mode='w', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    # Per-frame spawn logs are noisy
    logging.getLogger("alleycat.game.spawner").setLevel(logging.INFO)

    logging.info(f"Logging to file: {settings.log_path}")


def build_session(settings: Settings, event_bus: EventBus | None = None) -> GameSession:
    """Create a session wired to the on-disk best score."""
    store = JsonHighScoreStore(settings.highscore_path)
    return GameSession(
        settings=settings,
        store=store,
        rng=random.Random(settings.seed),
        event_bus=event_bus,
    )


async def run_simulator(settings: Settings) -> None:
    """Run the desktop window."""
    from alleycat.simulator.window import GameWindow

    event_bus = EventBus()
    session = build_session(settings, event_bus)
    window = GameWindow(settings, session, event_bus=event_bus)
    await window.run()


def run_headless(settings: Settings) -> int:
    """Play one unattended round and return its score."""
    session = build_session(settings)
    driver = FrameDriver(session, Controls())
    session.start()
    ticks = driver.run(settings.headless_frames)
    logger.info(
        f"Headless round finished after {ticks} frames: "
        f"score {session.score}, best {session.best_score}, phase {session.phase.name}"
    )
    return session.score


def main() -> None:
    """Main entry point."""
    load_dotenv()
    settings = get_settings()
    setup_logging(settings)

    logger.info("ALLEYCAT starting...")
    logger.info("Controls: SPACE/UP jump and start, DOWN crouch, D debug, S screenshot, Q quit")

    try:
        if settings.is_headless:
            logger.info("Running headless")
            run_headless(settings)
        else:
            logger.info("Running in simulator mode")
            asyncio.run(run_simulator(settings))

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except HighScoreError as e:
        logger.exception(f"Best score store unavailable: {e}")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("ALLEYCAT stopped")


if __name__ == "__main__":
    main()
