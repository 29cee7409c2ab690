"""Tests for the in-memory match registry."""

import pytest

from light_duel.config import Settings
from light_duel.engine.rules import CLASSIC_RULES, STUN_RULES, UnknownRulesError
from light_duel.services.matches import MatchRegistry


@pytest.fixture
def settings() -> Settings:
    return Settings(rules="classic", dice_seed=42, bot_token="test")


@pytest.fixture
def registry(settings: Settings) -> MatchRegistry:
    return MatchRegistry(settings=settings)


class TestMatchRegistry:
    """Tests for MatchRegistry."""

    def test_uses_configured_rules(self, registry: MatchRegistry):
        match = registry.start_match(chat_id=1, user_id=10, player_name="Aster")

        assert match.rules is CLASSIC_RULES
        assert match.player.name == "Aster"
        assert registry.get_match(1, 10) is match

    def test_default_rules(self):
        registry = MatchRegistry(settings=Settings(bot_token="test"))
        assert registry.rules is STUN_RULES

    def test_unknown_rules(self):
        settings = Settings.model_construct(rules="hardcore", dice_seed=None)

        with pytest.raises(UnknownRulesError):
            MatchRegistry(settings=settings)

    def test_matches_are_per_user_and_chat(self, registry: MatchRegistry):
        first = registry.start_match(1, 10, "Aster")
        second = registry.start_match(1, 20, "Nova")
        third = registry.start_match(2, 10, "Aster")

        assert len(registry) == 3
        assert first is not second
        assert registry.get_match(2, 10) is third
        assert registry.get_match(3, 10) is None

    def test_start_replaces_previous_match(self, registry: MatchRegistry):
        old = registry.start_match(1, 10, "Aster")
        new = registry.start_match(1, 10, "Aster")

        assert new is not old
        assert len(registry) == 1

    def test_seeded_matches_are_reproducible(self, registry: MatchRegistry):
        first = registry.start_match(1, 10, "Aster")
        first_result = first.player_use_move(1)
        second = registry.start_match(1, 20, "Nova")
        second_result = second.player_use_move(1)

        assert first_result.turn_result.player_roll == second_result.turn_result.player_roll
        assert first_result.turn_result.cpu_roll == second_result.turn_result.cpu_roll

    def test_restart_resets_in_place(self, registry: MatchRegistry):
        match = registry.start_match(1, 10, "Aster")
        match.player_skip_turn()

        restarted = registry.restart_match(1, 10)

        assert restarted is match
        assert match.player.light == 10
        assert match.turn_number == 1

    def test_restart_without_match(self, registry: MatchRegistry):
        assert registry.restart_match(1, 10) is None

    def test_end_match(self, registry: MatchRegistry):
        registry.start_match(1, 10, "Aster")

        assert registry.end_match(1, 10) is True
        assert registry.end_match(1, 10) is False
        assert registry.get_match(1, 10) is None
