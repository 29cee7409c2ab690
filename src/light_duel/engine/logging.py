"""Combat logging system for the match log panel.

Provides structured logging of all match events including:
- CPU move choices and light regeneration
- Rolls and applied effects with before/after state
- Rejected actions
- Winner determination

Every entry carries a display message; the ordered messages form the
append-only log stream shown to the player.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .types import Combatant, Side


class LogEventType(str, Enum):
    """Types of log events."""

    MATCH_START = "match_start"

    # CPU selection
    CPU_MOVE_CHOSEN = "cpu_move_chosen"
    CPU_LIGHT_REGEN = "cpu_light_regen"

    # Turn resolution
    ROLL = "roll"
    EFFECT_APPLIED = "effect_applied"
    STUN_CONSUMED = "stun_consumed"
    SKIP = "skip"
    LIGHT_REGEN = "light_regen"

    # Driver errors
    ACTION_REJECTED = "action_rejected"

    WINNER_DETERMINED = "winner_determined"


@dataclass
class StateSnapshot:
    """Snapshot of a combatant at a point in time."""

    side: Side
    health: int
    light: int
    stunned: bool

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "side": self.side.value,
            "health": self.health,
            "light": self.light,
            "stunned": self.stunned,
        }


@dataclass
class LogEntry:
    """A single log entry representing a match event."""

    event_type: LogEventType
    turn_number: int
    message: str
    timestamp_order: int = 0  # Order within the match for deterministic sorting

    side: Side | None = None
    move_name: str | None = None
    value: int | None = None

    state_before: StateSnapshot | None = None
    state_after: StateSnapshot | None = None

    winner: Side | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        result: dict[str, Any] = {
            "event_type": self.event_type.value,
            "turn_number": self.turn_number,
            "timestamp_order": self.timestamp_order,
            "message": self.message,
        }

        if self.side is not None:
            result["side"] = self.side.value
        if self.move_name is not None:
            result["move_name"] = self.move_name
        if self.value is not None:
            result["value"] = self.value
        if self.state_before is not None:
            result["state_before"] = self.state_before.to_dict()
        if self.state_after is not None:
            result["state_after"] = self.state_after.to_dict()
        if self.winner is not None:
            result["winner"] = self.winner.value

        return result


@dataclass
class CombatLog:
    """Complete log of a match since the last reset."""

    entries: list[LogEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"entries": [entry.to_dict() for entry in self.entries]}

    def lines(self) -> Iterator[str]:
        """Yield display messages in order."""
        for entry in self.entries:
            yield entry.message

    def get_entries_by_type(self, event_type: LogEventType) -> list[LogEntry]:
        """Get all entries of a specific type."""
        return [e for e in self.entries if e.event_type == event_type]

    def get_entries_for_turn(self, turn_number: int) -> list[LogEntry]:
        """Get all entries for a specific turn."""
        return [e for e in self.entries if e.turn_number == turn_number]

    def format_readable(self) -> str:
        """Format the log grouped by turn."""
        lines: list[str] = ["=== Match Log ==="]

        current_turn = -1
        for entry in self.entries:
            if entry.turn_number != current_turn:
                current_turn = entry.turn_number
                lines.append(f"--- Turn {current_turn} ---")
            lines.append(f"  {entry.message}")

        return "\n".join(lines)


class CombatLogger:
    """Logger for tracking match events.

    Usage:
        logger = CombatLogger()
        logger.log_cpu_move_chosen(turn_number=1, move_name="Heal")
        logger.log_roll(turn_number=1, side=Side.PLAYER, move_name="Blitz", roll=7)

        for line in logger.get_log().lines():
            print(line)
    """

    def __init__(self) -> None:
        self._log = CombatLog()
        self._order_counter = 0

    def _next_order(self) -> int:
        self._order_counter += 1
        return self._order_counter

    def _append(self, entry: LogEntry) -> None:
        entry.timestamp_order = self._next_order()
        self._log.entries.append(entry)

    def get_log(self) -> CombatLog:
        """Get the complete match log."""
        return self._log

    def clear(self) -> None:
        """Clear all log entries."""
        self._log.entries.clear()
        self._order_counter = 0

    @staticmethod
    def snapshot_state(combatant: Combatant) -> StateSnapshot:
        """Create a snapshot from a Combatant."""
        return StateSnapshot(
            side=combatant.side,
            health=combatant.health,
            light=combatant.light,
            stunned=combatant.stunned,
        )

    def log_match_start(self, turn_number: int, rules_name: str) -> None:
        self._append(
            LogEntry(
                event_type=LogEventType.MATCH_START,
                turn_number=turn_number,
                message=f"A new match begins ({rules_name} rules).",
            )
        )

    def log_cpu_move_chosen(self, turn_number: int, move_name: str) -> None:
        self._append(
            LogEntry(
                event_type=LogEventType.CPU_MOVE_CHOSEN,
                turn_number=turn_number,
                message=f"CPU chose: {move_name}",
                side=Side.CPU,
                move_name=move_name,
            )
        )

    def log_cpu_light_regen(self, turn_number: int, amount: int, light: int) -> None:
        """Log the CPU regenerating because it could not afford any move."""
        self._append(
            LogEntry(
                event_type=LogEventType.CPU_LIGHT_REGEN,
                turn_number=turn_number,
                message=f"CPU is out of Light and regenerates {amount} (now {light}).",
                side=Side.CPU,
                value=amount,
            )
        )

    def log_roll(self, turn_number: int, side: Side, name: str, move_name: str, roll: int) -> None:
        self._append(
            LogEntry(
                event_type=LogEventType.ROLL,
                turn_number=turn_number,
                message=f"{name} used {move_name} and rolled {roll}",
                side=side,
                move_name=move_name,
                value=roll,
            )
        )

    def log_effect_applied(
        self,
        turn_number: int,
        side: Side,
        move_name: str,
        value: int,
        description: str,
        state_before: Combatant,
        state_after: Combatant,
    ) -> None:
        """Log an applied effect with the target's before/after state.

        state_before must be a detached copy taken before the effect applied.
        """
        self._append(
            LogEntry(
                event_type=LogEventType.EFFECT_APPLIED,
                turn_number=turn_number,
                message=description,
                side=side,
                move_name=move_name,
                value=value,
                state_before=self.snapshot_state(state_before),
                state_after=self.snapshot_state(state_after),
            )
        )

    def log_stun_consumed(self, turn_number: int, side: Side, name: str) -> None:
        self._append(
            LogEntry(
                event_type=LogEventType.STUN_CONSUMED,
                turn_number=turn_number,
                message=f"{name} is stunned and loses the turn!",
                side=side,
            )
        )

    def log_skip(self, turn_number: int, name: str, amount: int) -> None:
        self._append(
            LogEntry(
                event_type=LogEventType.SKIP,
                turn_number=turn_number,
                message=f"{name} skipped their turn and regenerated {amount} Light!",
                side=Side.PLAYER,
                value=amount,
            )
        )

    def log_free_action(self, turn_number: int, side: Side, name: str, move_name: str) -> None:
        """Log a move that is applied without a roll."""
        self._append(
            LogEntry(
                event_type=LogEventType.ROLL,
                turn_number=turn_number,
                message=f"{name} attacks with {move_name}!",
                side=side,
                move_name=move_name,
            )
        )

    def log_light_regen(self, turn_number: int, amount: int) -> None:
        self._append(
            LogEntry(
                event_type=LogEventType.LIGHT_REGEN,
                turn_number=turn_number,
                message=f"Both sides regenerate {amount} Light.",
                value=amount,
            )
        )

    def log_action_rejected(self, turn_number: int, message: str) -> None:
        self._append(
            LogEntry(
                event_type=LogEventType.ACTION_REJECTED,
                turn_number=turn_number,
                message=message,
                side=Side.PLAYER,
            )
        )

    def log_winner(self, turn_number: int, winner: Side, winner_name: str) -> None:
        self._append(
            LogEntry(
                event_type=LogEventType.WINNER_DETERMINED,
                turn_number=turn_number,
                message=f"{winner_name} Wins! Game Over!",
                winner=winner,
            )
        )
