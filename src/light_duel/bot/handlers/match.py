"""Match handlers - /fight, move buttons, skip, recover and restart."""

import html
import logging

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.types import CallbackQuery, InlineKeyboardButton, InlineKeyboardMarkup, Message

from ...config import get_settings
from ...db.engine import async_session_factory
from ...engine.match import MatchEngine
from ...engine.types import ActionError, ActionResult, Combatant, Move, MoveKind, Side, TurnResult
from ...services.matches import get_match_registry
from ...services.players import PlayerService
from ..utils import log_callback, log_command, safe_handler, validate_callback_message, validate_message_user

logger = logging.getLogger(__name__)

router = Router(name="match")


# Callback data: match:{owner_user_id}:{action}[:{move_index}]
MATCH_PREFIX = "match:"

KIND_ICONS = {
    MoveKind.ATTACK: "⚔️",
    MoveKind.PASSIVE: "🛡️",
    MoveKind.HEALING: "💚",
    MoveKind.STUN: "⚡",
}


def move_callback_data(owner_id: int, action: str, move_index: int | None = None) -> str:
    """Build callback data for a match button."""
    data = f"{MATCH_PREFIX}{owner_id}:{action}"
    if move_index is not None:
        data += f":{move_index}"
    return data


def parse_callback_data(data: str) -> tuple[int, str, int | None] | None:
    """Parse match callback data into (owner_id, action, move_index)."""
    if not data.startswith(MATCH_PREFIX):
        return None

    parts = data[len(MATCH_PREFIX):].split(":")
    if len(parts) not in (2, 3):
        return None

    try:
        owner_id = int(parts[0])
        move_index = int(parts[2]) if len(parts) == 3 else None
    except ValueError:
        return None

    return owner_id, parts[1], move_index


def get_match_keyboard(match: MatchEngine, owner_id: int) -> InlineKeyboardMarkup:
    """Create the keyboard for the current match state.

    Every move is shown, including ones the player cannot afford yet.
    """
    if match.is_locked():
        return InlineKeyboardMarkup(
            inline_keyboard=[
                [InlineKeyboardButton(text="🔄 Restart Game", callback_data=move_callback_data(owner_id, "restart"))]
            ]
        )

    if match.is_player_stunned():
        return InlineKeyboardMarkup(
            inline_keyboard=[
                [InlineKeyboardButton(text="💫 Recover", callback_data=move_callback_data(owner_id, "recover"))]
            ]
        )

    rows: list[list[InlineKeyboardButton]] = []
    for index, move in enumerate(match.list_moves()):
        icon = KIND_ICONS.get(move.kind, "")
        rows.append(
            [
                InlineKeyboardButton(
                    text=f"{icon} {move.name} ({move.cost}) {move.min_roll}-{move.max_roll}",
                    callback_data=move_callback_data(owner_id, "move", index),
                )
            ]
        )
    rows.append([InlineKeyboardButton(text="⏭️ Skip turn", callback_data=move_callback_data(owner_id, "skip"))])
    return InlineKeyboardMarkup(inline_keyboard=rows)


def get_mood(health: int) -> str:
    """Mood of the match, from the player's health."""
    if health >= 80:
        return "calm"
    if health >= 40:
        return "tense"
    return "desperate"


def format_combatant(combatant: Combatant) -> str:
    stunned = " 💫 stunned" if combatant.stunned else ""
    return (
        f"<b>{html.escape(combatant.name)}</b>\n"
        f"   ❤️ {combatant.health} HP | ✨ {combatant.light} Light{stunned}"
    )


def format_cpu_choice(move: Move | None, stunned: bool) -> str:
    if stunned:
        return "<b>CPU is stunned</b> and will lose its next turn!"
    if move is None:
        return "<b>CPU is choosing...</b>"
    return (
        f"<b>CPU chose:</b> {html.escape(move.name)}\n"
        f"   Cost: {move.cost} | Roll: {move.min_roll}-{move.max_roll} | Damage: {move.damage}"
    )


def format_animation(turn: TurnResult | None) -> str | None:
    """Flavour line for the animation of the move that took effect last turn."""
    animation = turn.winning_animation() if turn else None
    if not animation:
        return None
    return f"🎬 <i>Animation: {html.escape(animation)}</i>"


def format_match(match: MatchEngine, log_tail: int) -> str:
    """Format the whole match message: fighters, CPU choice and recent log."""
    lines = [
        f"<b>✨ Light Duel - Turn {match.turn_number}</b>",
        f"<i>Mood: {get_mood(match.player.health)}</i>",
        "",
        format_combatant(match.player),
        format_combatant(match.cpu),
        "",
    ]

    animation = format_animation(match.last_turn)
    if animation:
        lines.append(animation)
        lines.append("")

    if match.is_locked():
        winner = match.player if match.winner == Side.PLAYER else match.cpu
        lines.append(f"<b>🏆 {html.escape(winner.name)} wins! Game Over!</b>")
    else:
        lines.append(format_cpu_choice(match.get_cpu_choice(), match.is_cpu_stunned()))

    log_lines = match.log_lines()[-log_tail:]
    if log_lines:
        lines.append("")
        lines.append("<b>📜 Log</b>")
        lines.extend(f"• {html.escape(line)}" for line in log_lines)

    return "\n".join(lines)


def format_action_feedback(result: ActionResult) -> str:
    """Short text for the callback answer toast."""
    if not result.success:
        return result.message

    turn = result.turn_result
    if turn and turn.is_match_over:
        return "Game over!"
    if turn and turn.player_roll is not None and turn.cpu_roll is not None:
        return f"You rolled {turn.player_roll}, CPU rolled {turn.cpu_roll}"
    return result.message


@router.message(Command("fight"))
@safe_handler
@log_command("/fight")
async def cmd_fight(message: Message) -> None:
    """Handle /fight command - start a fresh match."""
    if not validate_message_user(message):
        await message.answer("Could not identify user. Please try again.")
        return

    settings = get_settings()
    user_id = message.from_user.id

    async with async_session_factory() as session:
        player_service = PlayerService(session)
        player_name = await player_service.get_display_name(user_id, default=settings.default_player_name)

    match = get_match_registry().start_match(message.chat.id, user_id, player_name)

    await message.answer(
        format_match(match, settings.log_tail),
        reply_markup=get_match_keyboard(match, user_id),
    )


@router.callback_query(F.data.startswith(MATCH_PREFIX))
@safe_handler
@log_callback("match_action")
async def callback_match_action(callback: CallbackQuery) -> None:
    """Handle every match button."""
    if not callback.data or not validate_callback_message(callback):
        return

    parsed = parse_callback_data(callback.data)
    if parsed is None:
        await callback.answer("Unknown action.", show_alert=True)
        return

    owner_id, action, move_index = parsed
    if callback.from_user.id != owner_id:
        await callback.answer("This is not your match! Use /fight to start your own.", show_alert=True)
        return

    chat_id = callback.message.chat.id
    registry = get_match_registry()
    match = registry.get_match(chat_id, owner_id)
    if match is None:
        await callback.answer("This match has expired. Use /fight to start a new one.", show_alert=True)
        await callback.message.edit_reply_markup(reply_markup=None)
        return

    if action == "restart":
        registry.restart_match(chat_id, owner_id)
        feedback = "New match started!"
    else:
        if action == "move" and move_index is not None:
            result = match.player_use_move(move_index)
        elif action == "skip":
            result = match.player_skip_turn()
        elif action == "recover":
            result = match.player_endure_stun()
        else:
            await callback.answer("Unknown action.", show_alert=True)
            return

        feedback = format_action_feedback(result)
        if result.error == ActionError.INSUFFICIENT_LIGHT:
            await callback.answer(feedback, show_alert=True)
            feedback = None

    settings = get_settings()
    await callback.message.edit_text(
        format_match(match, settings.log_tail),
        reply_markup=get_match_keyboard(match, owner_id),
    )
    if feedback:
        await callback.answer(feedback)
