"""Match registry - keeps one in-memory match per user per chat."""

import logging

from ..config import Settings, get_settings
from ..engine.dice import Dice
from ..engine.match import MatchEngine
from ..engine.rules import GameRules, get_rules

logger = logging.getLogger(__name__)

MatchKey = tuple[int, int]  # (chat_id, user_id)


class MatchRegistry:
    """Holds running matches in process memory.

    Matches are not persisted; a restart drops them.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self.rules: GameRules = get_rules(self.settings.rules)
        self._matches: dict[MatchKey, MatchEngine] = {}

    def __len__(self) -> int:
        return len(self._matches)

    def get_match(self, chat_id: int, user_id: int) -> MatchEngine | None:
        """Get the user's running match in this chat."""
        return self._matches.get((chat_id, user_id))

    def start_match(self, chat_id: int, user_id: int, player_name: str) -> MatchEngine:
        """Start a fresh match, replacing any previous one for this user."""
        match = MatchEngine(
            rules=self.rules,
            dice=Dice(self.settings.dice_seed),
            player_name=player_name,
        )
        self._matches[(chat_id, user_id)] = match
        logger.info(f"Started {self.rules.name} match for user {user_id} in chat {chat_id}")
        return match

    def restart_match(self, chat_id: int, user_id: int) -> MatchEngine | None:
        """Reset the user's match in place. Returns None if there is no match."""
        match = self.get_match(chat_id, user_id)
        if match is None:
            return None
        match.reset_match()
        logger.info(f"Restarted match for user {user_id} in chat {chat_id}")
        return match

    def end_match(self, chat_id: int, user_id: int) -> bool:
        """Forget the user's match. Returns True if one existed."""
        return self._matches.pop((chat_id, user_id), None) is not None


_registry: MatchRegistry | None = None


def get_match_registry() -> MatchRegistry:
    """Get the process-wide match registry."""
    global _registry
    if _registry is None:
        _registry = MatchRegistry()
    return _registry
