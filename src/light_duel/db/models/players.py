"""Player profile model."""

from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin

DISPLAY_NAME_MAX_LENGTH = 100


class Player(Base, TimestampMixin):
    """A Telegram user's profile.

    Only stores the display name shown in matches; match state itself is
    never persisted.
    """

    __tablename__ = "players"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    telegram_user_id: Mapped[int] = mapped_column(
        BigInteger, nullable=False, unique=True, index=True
    )
    display_name: Mapped[str] = mapped_column(String(DISPLAY_NAME_MAX_LENGTH), nullable=False)

    def __repr__(self) -> str:
        return f"<Player(id={self.id}, name={self.display_name})>"
