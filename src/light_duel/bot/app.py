"""Bot application setup and dispatcher."""

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from light_duel.config import get_settings


def create_bot() -> Bot:
    """Create and configure the Telegram bot instance."""
    settings = get_settings()
    if not settings.bot_token:
        raise RuntimeError("BOT_TOKEN is not set")
    return Bot(
        token=settings.bot_token,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )


def create_dispatcher() -> Dispatcher:
    """Create and configure the dispatcher with routers."""
    from light_duel.bot.handlers import common_router, match_router

    dp = Dispatcher()
    dp.include_router(common_router)
    dp.include_router(match_router)
    return dp
