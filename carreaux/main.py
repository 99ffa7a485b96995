"""Bot lifecycle and local console entry point."""

import argparse
import asyncio
import logging
import sys
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Optional

from .bot import CommandHandler
from .config import Settings, settings as default_settings
from .game import SessionReaper, SessionStore

logger = logging.getLogger(__name__)

CONSOLE_CHAT_ID = "console"


@dataclass
class CarreauxBot:
    """Running components handed to the chat transport."""

    store: SessionStore
    reaper: SessionReaper
    handler: CommandHandler


@asynccontextmanager
async def lifespan(settings: Optional[Settings] = None) -> AsyncIterator[CarreauxBot]:
    """Create the session store, run the idle sweep, clear everything on exit."""
    settings = settings or default_settings

    # Startup
    store = SessionStore(config=settings.game_config())
    reaper = SessionReaper(store, interval_seconds=settings.sweep_interval_seconds)
    handler = CommandHandler(store, prefix=settings.command_prefix)
    reaper.start()
    logger.info(
        "Carreaux ready (%dx%d grid, %d points to win)",
        settings.grid_size,
        settings.grid_size,
        settings.win_score,
    )

    try:
        yield CarreauxBot(store=store, reaper=reaper, handler=handler)
    finally:
        # Shutdown
        await reaper.stop()
        await store.clear()
        logger.info("Carreaux stopped")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Play carreaux in the terminal")
    parser.add_argument("--grid-size", type=int, default=None,
                        help="Board dimension (default: 5)")
    parser.add_argument("--win-score", type=int, default=None,
                        help="Squares needed to win (default: 5)")
    parser.add_argument("--prefix", default=None,
                        help="Command prefix (default: '.')")
    return parser.parse_args(argv)


async def run_console(settings: Settings) -> None:
    """Read `.c ...` commands from stdin and print the replies."""
    async with lifespan(settings) as bot:
        command = bot.handler.command
        print(f"Type '{command} help' for the rules, Ctrl-D to quit.")
        while True:
            line = await asyncio.to_thread(sys.stdin.readline)
            if not line:
                break
            words = line.split()
            if not words or words[0] != command:
                continue
            reply = await bot.handler.handle(CONSOLE_CHAT_ID, words[1:])
            print(reply)


def main(argv=None) -> int:
    args = parse_args(argv)

    overrides = {}
    if args.grid_size is not None:
        overrides["grid_size"] = args.grid_size
    if args.win_score is not None:
        overrides["win_score"] = args.win_score
    if args.prefix is not None:
        overrides["command_prefix"] = args.prefix
    settings = Settings(**overrides)

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        asyncio.run(run_console(settings))
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
