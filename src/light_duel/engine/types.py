"""Type definitions for the match engine."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class MoveKind(str, Enum):
    """What a move does when it wins the roll."""

    ATTACK = "attack"  # Damage the target
    PASSIVE = "passive"  # Dodge - no change
    HEALING = "healing"  # Heal the user by a fixed amount
    STUN = "stun"  # Damage the target and skip its next turn


class Side(str, Enum):
    """The two sides of a match."""

    PLAYER = "player"
    CPU = "cpu"

    @property
    def opponent(self) -> "Side":
        return Side.CPU if self is Side.PLAYER else Side.PLAYER


class ActionError(str, Enum):
    """Recoverable reasons an action was rejected."""

    INSUFFICIENT_LIGHT = "insufficient_light"
    MATCH_OVER = "match_over"
    PLAYER_STUNNED = "player_stunned"
    NOT_STUNNED = "not_stunned"
    INVALID_MOVE = "invalid_move"


@dataclass(frozen=True)
class Move:
    """A static entry of the move catalog."""

    name: str
    cost: int
    min_roll: int
    max_roll: int
    damage: int
    kind: MoveKind
    player_animation: str | None = None
    cpu_animation: str | None = None

    @property
    def roll_range(self) -> tuple[int, int]:
        return self.min_roll, self.max_roll


@dataclass
class Combatant:
    """Mutable state of one side during a match."""

    side: Side
    name: str
    health: int
    light: int
    stunned: bool = False

    def is_alive(self) -> bool:
        """Check if the combatant still has health left."""
        return self.health > 0

    def can_afford(self, move: Move) -> bool:
        return self.light >= move.cost

    def spend_light(self, amount: int) -> None:
        """Deduct light. Callers check affordability first."""
        self.light -= amount

    def regenerate(self, amount: int) -> None:
        self.light += amount

    def consume_stun(self) -> bool:
        """Clear the stun flag. Returns True if the combatant was stunned."""
        was_stunned = self.stunned
        self.stunned = False
        return was_stunned

    def to_dict(self) -> dict[str, Any]:
        return {
            "side": self.side.value,
            "name": self.name,
            "health": self.health,
            "light": self.light,
            "stunned": self.stunned,
        }


@dataclass
class EffectResult:
    """Result of applying a single move effect."""

    move_name: str
    kind: MoveKind
    user: Side
    target: Side
    value: int
    description: str


@dataclass
class TurnResult:
    """Result of a resolved turn (move, skip, or lost turn)."""

    turn_number: int
    player_move: Move | None = None
    cpu_move: Move | None = None
    player_roll: int | None = None
    cpu_roll: int | None = None
    roll_winner: Side | None = None
    effect: EffectResult | None = None
    player: dict[str, Any] = field(default_factory=dict)
    cpu: dict[str, Any] = field(default_factory=dict)
    winner: Side | None = None
    is_match_over: bool = False

    def winning_animation(self) -> str | None:
        """Animation of the move that took effect, seen from the side that used it."""
        if self.roll_winner == Side.PLAYER and self.player_move is not None:
            return self.player_move.player_animation
        if self.roll_winner == Side.CPU and self.cpu_move is not None:
            return self.cpu_move.cpu_animation
        return None


@dataclass
class ActionResult:
    """Result of an engine operation requested by the driver."""

    success: bool
    message: str
    error: ActionError | None = None
    turn_result: TurnResult | None = None
