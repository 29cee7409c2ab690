"""Entry point for running the Light Duel bot."""

import asyncio
import logging
import sys

from light_duel.bot.app import create_bot, create_dispatcher
from light_duel.config import get_settings
from light_duel.db.engine import init_models


async def main() -> None:
    """Start the bot."""
    settings = get_settings()

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    await init_models()

    bot = create_bot()
    dp = create_dispatcher()

    logging.info(f"Starting Light Duel bot with {settings.rules} rules...")

    try:
        await dp.start_polling(bot)
    finally:
        await bot.session.close()


def run() -> None:
    """Console script entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        sys.exit(0)


if __name__ == "__main__":
    run()
