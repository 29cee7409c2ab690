"""Bot utilities - handler decorators and update helpers."""

import functools
import logging
from typing import Any, Callable

from aiogram import types
from aiogram.exceptions import TelegramBadRequest
from aiogram.types import CallbackQuery, Message

logger = logging.getLogger("light_duel.bot")

Update = Message | CallbackQuery

ERROR_MESSAGE = "Something went wrong. Please try again later."

# Telegram errors raised by stale buttons or re-rendering an unchanged match
IGNORED_BAD_REQUESTS = ("query is too old", "message is not modified")


def find_update(args: tuple[Any, ...], kind: type | tuple[type, ...] = (Message, CallbackQuery)) -> Any:
    """Get the first positional handler argument of the given update type."""
    return next((arg for arg in args if isinstance(arg, kind)), None)


def describe_update(update: Update | None) -> tuple[int | None, str | None, int | None]:
    """Get (user_id, username, chat_id) of a message or callback query."""
    if update is None or update.from_user is None:
        user_id, username = None, None
    else:
        user_id, username = update.from_user.id, update.from_user.username

    if isinstance(update, Message):
        chat_id = update.chat.id
    elif isinstance(update, CallbackQuery) and update.message:
        chat_id = update.message.chat.id
    else:
        chat_id = None

    return user_id, username, chat_id


async def notify_error(update: Update | None) -> None:
    """Tell the user their action failed."""
    if isinstance(update, Message):
        await update.reply(ERROR_MESSAGE)
    elif isinstance(update, CallbackQuery):
        await update.answer(ERROR_MESSAGE, show_alert=True)


def safe_handler(func: Callable) -> Callable:
    """Decorator that keeps handler errors away from the dispatcher.

    Stale-button and unchanged-message errors are ignored. Anything else
    is logged with the user and chat, and the user gets a generic reply.
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        update = find_update(args)

        try:
            return await func(*args, **kwargs)
        except TelegramBadRequest as e:
            reason = str(e).lower()
            if any(ignored in reason for ignored in IGNORED_BAD_REQUESTS):
                logger.debug(f"Ignoring Telegram error in {func.__name__}: {e}")
            else:
                logger.exception(f"Telegram rejected request in {func.__name__}: {e}")
            return None
        except Exception as e:
            user_id, _, chat_id = describe_update(update)
            logger.exception(
                f"Handler error in {func.__name__}: {e}",
                extra={"user_id": user_id, "chat_id": chat_id, "handler": func.__name__},
            )

            try:
                await notify_error(update)
            except Exception:
                logger.exception("Failed to send error message to user")
            return None

    return wrapper


def _log_updates(kind: type, label: str) -> Callable:
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            update = find_update(args, kind)
            if update is not None:
                user_id, username, chat_id = describe_update(update)
                logger.info(f"{label} from user {user_id} (@{username}) in chat {chat_id}")
            return await func(*args, **kwargs)

        return wrapper

    return decorator


def log_command(command: str) -> Callable:
    """Decorator to log command usage, e.g. log_command("/fight")."""
    return _log_updates(Message, f"Command {command}")


def log_callback(action: str) -> Callable:
    """Decorator to log button presses, e.g. log_callback("match_action")."""
    return _log_updates(CallbackQuery, f"Callback {action}")


def validate_message_user(message: Message) -> bool:
    """Check if message has valid from_user."""
    return message.from_user is not None and message.from_user.id is not None


def validate_callback_message(callback: CallbackQuery) -> bool:
    """Check if callback query has a message to edit."""
    return callback.message is not None


def get_display_name(user: types.User | None) -> str:
    """Telegram name of a user: full name, then @username, then the id."""
    if user is None:
        return "Unknown"
    return user.full_name or (f"@{user.username}" if user.username else f"User {user.id}")
