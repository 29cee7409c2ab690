"""Game rules - move catalogs and regeneration constants."""

from dataclasses import dataclass

from .types import Move, MoveKind


class UnknownRulesError(KeyError):
    """Raised when a rules catalog name is not registered."""


@dataclass(frozen=True)
class GameRules:
    """A complete, validated rule set for a match.

    Attributes:
        name: Catalog name used in configuration
        moves: Move catalog, in display order
        cpu_empty_regen: Light the CPU gains when it cannot afford any move
        turn_regen: Light both sides gain after a resolved turn
        skip_regen: Light the player gains for skipping a turn
        heal_amount: Health restored by a healing move (the move's damage field is ignored)
        max_health: Healing never raises health above this
        starting_health: Health of both sides at match start
        starting_light: Light of both sides at match start
        stun_enabled: Whether stun moves are allowed in the catalog
    """

    name: str
    moves: tuple[Move, ...]
    cpu_empty_regen: int = 6
    turn_regen: int = 3
    skip_regen: int = 6
    heal_amount: int = 20
    max_health: int = 100
    starting_health: int = 100
    starting_light: int = 10
    stun_enabled: bool = True

    def __post_init__(self) -> None:
        if not self.moves:
            raise ValueError(f"Rules '{self.name}' have an empty move catalog")

        for move in self.moves:
            # Positive costs guarantee CPU reselection terminates
            if move.cost <= 0:
                raise ValueError(f"Move '{move.name}' must have a positive cost, got {move.cost}")
            if move.min_roll > move.max_roll:
                raise ValueError(f"Move '{move.name}' has an inverted roll range {move.min_roll}-{move.max_roll}")
            if move.kind == MoveKind.STUN and not self.stun_enabled:
                raise ValueError(f"Move '{move.name}' is a stun but rules '{self.name}' disable stuns")

        for label, value in (
            ("cpu_empty_regen", self.cpu_empty_regen),
            ("turn_regen", self.turn_regen),
            ("skip_regen", self.skip_regen),
        ):
            if value <= 0:
                raise ValueError(f"{label} must be positive, got {value}")

        if self.starting_health > self.max_health:
            raise ValueError("starting_health cannot exceed max_health")

    @property
    def min_cost(self) -> int:
        return min(move.cost for move in self.moves)

    def get_move(self, index: int) -> Move:
        """Get a move by display index. Raises IndexError if out of range."""
        if index < 0 or index >= len(self.moves):
            raise IndexError(f"Move index {index} out of range")
        return self.moves[index]


POWER_STRIKE = Move(
    "Power Strike", 5, 3, 6, 20, MoveKind.ATTACK,
    player_animation="power-strike-animation.gif", cpu_animation="cpu-power-strike.gif",
)
QUICK_SLASH = Move(
    "Quick Slash", 3, 2, 8, 10, MoveKind.ATTACK,
    player_animation="quick-slash-animation.gif", cpu_animation="cpu-quick-slash-animation.gif",
)
DEFENSIVE_STANCE = Move(
    "Defensive Stance", 4, 3, 8, 0, MoveKind.PASSIVE,
    player_animation="defensive-stance-animation.gif", cpu_animation="cpu-dodge-animation.gif",
)
HEAL = Move(
    "Heal", 8, 4, 6, -20, MoveKind.HEALING,
    player_animation="player-heal-animation.gif", cpu_animation="cpu-heal-animation.gif",
)
BLITZ = Move(
    "Blitz", 15, 1, 10, 40, MoveKind.ATTACK,
    player_animation="blitz.gif", cpu_animation="cpu-blitz.gif",
)
PERFECT_DODGE = Move(
    "Perfect Dodge", 10, 7, 10, 0, MoveKind.PASSIVE,
    player_animation="defensive-stance-animation.gif", cpu_animation="cpu-dodge-animation.gif",
)
SOLAR_FLARE = Move("Solar Flare", 12, 2, 9, 10, MoveKind.STUN)


CLASSIC_RULES = GameRules(
    name="classic",
    moves=(POWER_STRIKE, QUICK_SLASH, DEFENSIVE_STANCE, HEAL, BLITZ, PERFECT_DODGE),
    cpu_empty_regen=6,
    turn_regen=2,
    skip_regen=4,
    stun_enabled=False,
)

STUN_RULES = GameRules(
    name="stun",
    moves=(POWER_STRIKE, QUICK_SLASH, DEFENSIVE_STANCE, HEAL, SOLAR_FLARE),
    cpu_empty_regen=6,
    turn_regen=3,
    skip_regen=6,
    stun_enabled=True,
)

RULES_REGISTRY: dict[str, GameRules] = {
    CLASSIC_RULES.name: CLASSIC_RULES,
    STUN_RULES.name: STUN_RULES,
}


def get_rules(name: str) -> GameRules:
    """Look up a built-in rule set by name (case-insensitive)."""
    try:
        return RULES_REGISTRY[name.strip().lower()]
    except KeyError:
        available = ", ".join(sorted(RULES_REGISTRY))
        raise UnknownRulesError(f"Unknown rules '{name}'. Available: {available}") from None
