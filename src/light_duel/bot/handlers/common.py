"""Common bot handlers - /start, /help, /name commands."""

import html
import logging

from aiogram import Router
from aiogram.filters import Command, CommandObject
from aiogram.types import Message

from ...config import get_settings
from ...db.engine import async_session_factory
from ...engine.rules import get_rules
from ...services.players import PlayerService, normalize_display_name
from ..utils import get_display_name, log_command, safe_handler, validate_message_user

logger = logging.getLogger(__name__)

router = Router(name="common")


def format_rules_summary() -> str:
    """Describe the configured move catalog and regeneration values."""
    rules = get_rules(get_settings().rules)
    lines = ["<b>Moves</b>"]
    for move in rules.moves:
        lines.append(
            f" {html.escape(move.name)} - {move.kind.value}, "
            f"cost {move.cost}, roll {move.min_roll}-{move.max_roll}, damage {move.damage}"
        )
    lines.append("")
    lines.append(
        f"Both sides regain {rules.turn_regen} Light after each exchange. "
        f"Skipping a turn gives you {rules.skip_regen} Light, but the CPU hits you for free."
    )
    lines.append(f"Heals restore {rules.heal_amount} HP, up to {rules.max_health}.")
    if rules.stun_enabled:
        lines.append("A stunned fighter loses their next turn.")
    return "\n".join(lines)


@router.message(Command("start"))
@safe_handler
@log_command("/start")
async def cmd_start(message: Message) -> None:
    """Handle /start command."""
    name = html.escape(get_display_name(message.from_user))
    await message.answer(
        f"<b>Welcome to Light Duel, {name}!</b>\n\n"
        "Fight the CPU in a turn-based duel. Every move costs Light, "
        "and each exchange is decided by opposed dice rolls.\n\n"
        "<b>Quick Start:</b>\n"
        " /name &lt;name&gt; - choose the name shown in matches\n"
        " /fight - start a match\n\n"
        "Use /help for the full rules."
    )


@router.message(Command("help"))
@safe_handler
@log_command("/help")
async def cmd_help(message: Message) -> None:
    """Handle /help command."""
    help_text = (
        "<b>Light Duel Help</b>\n\n"
        "/start - Welcome message\n"
        "/help - Show this help message\n"
        "/name &lt;name&gt; - Set your display name\n"
        "/fight - Start a new match against the CPU\n\n"
        "The CPU picks its move before you act - watch it and choose wisely. "
        "Both sides roll within their move's range; the higher roll wins and "
        "only the winner's move takes effect. Ties are re-rolled.\n\n"
    )
    help_text += format_rules_summary()

    await message.answer(help_text)


@router.message(Command("name"))
@safe_handler
@log_command("/name")
async def cmd_name(message: Message, command: CommandObject) -> None:
    """Handle /name command - show or set the player's display name."""
    if not validate_message_user(message):
        await message.answer("Could not identify user. Please try again.")
        return

    settings = get_settings()

    async with async_session_factory() as session:
        player_service = PlayerService(session)

        name = normalize_display_name(command.args)
        if name is None:
            current = await player_service.get_display_name(
                message.from_user.id, default=settings.default_player_name
            )
            await message.answer(
                f"Your name is <b>{html.escape(current)}</b>.\n"
                "Use <code>/name &lt;name&gt;</code> to change it."
            )
            return

        player = await player_service.set_display_name(message.from_user.id, name)
        await session.commit()

        await message.answer(f"You will fight as <b>{html.escape(player.display_name)}</b>. Use /fight to begin!")
