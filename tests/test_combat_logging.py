"""Tests for the combat logging system."""

from light_duel.engine.logging import (
    CombatLog,
    CombatLogger,
    LogEntry,
    LogEventType,
    StateSnapshot,
)
from light_duel.engine.match import MatchEngine
from light_duel.engine.types import Combatant, Side


class TestStateSnapshot:
    """Tests for StateSnapshot data class."""

    def test_snapshot_to_dict(self):
        snapshot = StateSnapshot(side=Side.CPU, health=80, light=13, stunned=True)

        assert snapshot.to_dict() == {"side": "cpu", "health": 80, "light": 13, "stunned": True}

    def test_snapshot_from_combatant(self):
        combatant = Combatant(side=Side.PLAYER, name="Player", health=55, light=4)

        snapshot = CombatLogger.snapshot_state(combatant)

        assert snapshot.side == Side.PLAYER
        assert snapshot.health == 55
        assert snapshot.light == 4
        assert snapshot.stunned is False


class TestLogEntry:
    """Tests for LogEntry data class."""

    def test_to_dict_omits_empty_fields(self):
        entry = LogEntry(
            event_type=LogEventType.LIGHT_REGEN,
            turn_number=2,
            message="Both sides regenerate 3 Light.",
            timestamp_order=4,
            value=3,
        )

        result = entry.to_dict()

        assert result == {
            "event_type": "light_regen",
            "turn_number": 2,
            "timestamp_order": 4,
            "message": "Both sides regenerate 3 Light.",
            "value": 3,
        }

    def test_to_dict_with_winner(self):
        entry = LogEntry(
            event_type=LogEventType.WINNER_DETERMINED,
            turn_number=9,
            message="CPU Wins! Game Over!",
            winner=Side.CPU,
        )

        assert entry.to_dict()["winner"] == "cpu"


class TestCombatLogger:
    """Tests for CombatLogger."""

    def test_entries_are_ordered(self):
        logger = CombatLogger()
        logger.log_match_start(1, "stun")
        logger.log_cpu_move_chosen(1, "Heal")
        logger.log_roll(1, Side.PLAYER, "Player", "Blitz", 7)

        entries = logger.get_log().entries
        assert [e.timestamp_order for e in entries] == [1, 2, 3]
        assert list(logger.get_log().lines()) == [
            "A new match begins (stun rules).",
            "CPU chose: Heal",
            "Player used Blitz and rolled 7",
        ]

    def test_clear_resets_order(self):
        logger = CombatLogger()
        logger.log_match_start(1, "classic")
        logger.log_light_regen(1, 2)

        logger.clear()
        logger.log_skip(1, "Player", 4)

        entries = logger.get_log().entries
        assert len(entries) == 1
        assert entries[0].timestamp_order == 1
        assert entries[0].message == "Player skipped their turn and regenerated 4 Light!"

    def test_effect_applied_keeps_before_and_after(self):
        logger = CombatLogger()
        before = Combatant(side=Side.CPU, name="CPU", health=100, light=10)
        after = Combatant(side=Side.CPU, name="CPU", health=80, light=10)

        logger.log_effect_applied(1, Side.PLAYER, "Power Strike", 20, "Player wins and deals 20 damage!", before, after)

        entry = logger.get_log().entries[0]
        assert entry.event_type == LogEventType.EFFECT_APPLIED
        assert entry.state_before.health == 100
        assert entry.state_after.health == 80

    def test_get_entries_by_type_and_turn(self):
        logger = CombatLogger()
        logger.log_cpu_move_chosen(1, "Heal")
        logger.log_action_rejected(1, "Not enough Light!")
        logger.log_cpu_move_chosen(2, "Quick Slash")

        log = logger.get_log()
        assert len(log.get_entries_by_type(LogEventType.CPU_MOVE_CHOSEN)) == 2
        assert len(log.get_entries_for_turn(1)) == 2

    def test_format_readable_groups_turns(self):
        logger = CombatLogger()
        logger.log_cpu_move_chosen(1, "Heal")
        logger.log_winner(2, Side.PLAYER, "Player")

        text = logger.get_log().format_readable()

        assert text.splitlines() == [
            "=== Match Log ===",
            "--- Turn 1 ---",
            "  CPU chose: Heal",
            "--- Turn 2 ---",
            "  Player Wins! Game Over!",
        ]

    def test_to_dict(self):
        log = CombatLog()
        assert log.to_dict() == {"entries": []}


class TestEngineLogging:
    """Tests for log entries produced by the match engine."""

    def test_turn_produces_expected_events(self, make_dice):
        engine = MatchEngine(dice=make_dice(rolls=[5, 4]))

        engine.player_use_move(1)

        turn_entries = engine.logger.get_log().get_entries_for_turn(1)
        assert [e.event_type for e in turn_entries] == [
            LogEventType.MATCH_START,
            LogEventType.CPU_MOVE_CHOSEN,
            LogEventType.ROLL,
            LogEventType.ROLL,
            LogEventType.EFFECT_APPLIED,
            LogEventType.LIGHT_REGEN,
        ]
        effect = turn_entries[4]
        assert effect.state_before.health == 100
        assert effect.state_after.health == 90

    def test_rejection_is_logged(self, classic_match: MatchEngine):
        classic_match.player_use_move(4)

        rejected = classic_match.logger.get_log().get_entries_by_type(LogEventType.ACTION_REJECTED)
        assert len(rejected) == 1
        assert rejected[0].message == "Not enough Light!"

    def test_shared_logger_is_used(self):
        logger = CombatLogger()

        engine = MatchEngine(logger=logger)

        assert engine.logger is logger
        assert logger.get_log().entries[0].event_type == LogEventType.MATCH_START
