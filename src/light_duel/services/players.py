"""Player service - stores and retrieves display names."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.models.players import DISPLAY_NAME_MAX_LENGTH, Player


def normalize_display_name(name: str | None) -> str | None:
    """Trim a display name. Returns None for blank names."""
    if name is None:
        return None
    name = name.strip()
    if not name:
        return None
    return name[:DISPLAY_NAME_MAX_LENGTH]


class PlayerService:
    """Service for player profile operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_player(self, telegram_user_id: int) -> Player | None:
        """Get a player profile by Telegram user ID."""
        stmt = select(Player).where(Player.telegram_user_id == telegram_user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_display_name(self, telegram_user_id: int, default: str = "Player") -> str:
        """Get the stored display name, or the default if none was set."""
        player = await self.get_player(telegram_user_id)
        if player is None:
            return default
        return player.display_name

    async def set_display_name(self, telegram_user_id: int, display_name: str) -> Player:
        """Store a display name, creating the profile if needed.

        Args:
            telegram_user_id: Telegram user ID
            display_name: Raw name as typed by the user

        Returns:
            Player instance with the trimmed name

        Raises:
            ValueError: If the name is blank
        """
        name = normalize_display_name(display_name)
        if name is None:
            raise ValueError("Display name cannot be blank")

        player = await self.get_player(telegram_user_id)
        if player:
            player.display_name = name
            return player

        player = Player(telegram_user_id=telegram_user_id, display_name=name)
        self.session.add(player)
        await self.session.flush()
        return player
