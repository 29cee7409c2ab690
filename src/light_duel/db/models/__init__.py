"""Database models."""

from .base import Base, TimestampMixin
from .players import DISPLAY_NAME_MAX_LENGTH, Player

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    # Players
    "Player",
    "DISPLAY_NAME_MAX_LENGTH",
]
