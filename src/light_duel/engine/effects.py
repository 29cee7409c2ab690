"""Effect applier - applies a winning move from its user onto the target."""

from .rules import GameRules
from .types import Combatant, EffectResult, Move, MoveKind


class EffectApplier:
    """Applies move effects to combatants. Pure state mutation, no I/O."""

    def __init__(self, rules: GameRules) -> None:
        self.rules = rules

    def apply(self, move: Move, user: Combatant, target: Combatant) -> EffectResult:
        """Apply a move's effect.

        Args:
            move: The move that won the exchange
            user: Combatant who used the move
            target: Combatant on the receiving end

        Returns:
            EffectResult describing what happened
        """
        match move.kind:
            case MoveKind.ATTACK:
                return self._apply_attack(move, user, target)
            case MoveKind.HEALING:
                return self._apply_healing(move, user)
            case MoveKind.PASSIVE:
                return self._apply_passive(move, user)
            case MoveKind.STUN:
                return self._apply_stun(move, user, target)
            case _:
                raise ValueError(f"Unknown move kind: {move.kind}")

    def _apply_attack(self, move: Move, user: Combatant, target: Combatant) -> EffectResult:
        """Subtract the move's damage from the target. Health is not clamped at 0."""
        target.health -= move.damage
        return EffectResult(
            move_name=move.name,
            kind=move.kind,
            user=user.side,
            target=target.side,
            value=move.damage,
            description=f"{user.name} wins and deals {move.damage} damage!",
        )

    def _apply_healing(self, move: Move, user: Combatant) -> EffectResult:
        """Heal the user by the fixed heal amount, capped at max health.

        The catalog's damage field for healing moves is not used here.
        """
        before = user.health
        user.health = min(self.rules.max_health, user.health + self.rules.heal_amount)
        return EffectResult(
            move_name=move.name,
            kind=move.kind,
            user=user.side,
            target=user.side,
            value=user.health - before,
            description=f"{user.name} healed {self.rules.heal_amount} HP!",
        )

    def _apply_passive(self, move: Move, user: Combatant) -> EffectResult:
        return EffectResult(
            move_name=move.name,
            kind=move.kind,
            user=user.side,
            target=user.side,
            value=0,
            description=f"{user.name} successfully dodged!",
        )

    def _apply_stun(self, move: Move, user: Combatant, target: Combatant) -> EffectResult:
        """Damage the target and make it skip its next turn."""
        target.health -= move.damage
        target.stunned = True
        return EffectResult(
            move_name=move.name,
            kind=move.kind,
            user=user.side,
            target=target.side,
            value=move.damage,
            description=f"{user.name} wins, deals {move.damage} damage and stuns {target.name}!",
        )
