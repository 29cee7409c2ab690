"""Service layer for game logic."""

from .matches import MatchRegistry, get_match_registry
from .players import PlayerService, normalize_display_name

__all__ = [
    "PlayerService",
    "normalize_display_name",
    "MatchRegistry",
    "get_match_registry",
]
