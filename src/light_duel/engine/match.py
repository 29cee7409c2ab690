"""Match engine - owns match state and resolves every turn."""

import logging
from dataclasses import replace
from typing import Any

from .dice import Dice
from .effects import EffectApplier
from .logging import CombatLogger
from .rules import STUN_RULES, GameRules
from .types import ActionError, ActionResult, Combatant, EffectResult, Move, Side, TurnResult

log = logging.getLogger(__name__)

DEFAULT_PLAYER_NAME = "Player"
CPU_NAME = "CPU"


class MatchEngine:
    """Turn resolution engine for a single player-vs-CPU match.

    The driver (a bot handler, a test) calls one operation per user action.
    Operations run to completion synchronously and never raise for
    recoverable conditions; they return an ActionResult instead.
    """

    def __init__(
        self,
        rules: GameRules | None = None,
        dice: Dice | None = None,
        player_name: str = DEFAULT_PLAYER_NAME,
        logger: CombatLogger | None = None,
    ) -> None:
        self.rules = rules or STUN_RULES
        self.dice = dice or Dice()
        self.player_name = player_name or DEFAULT_PLAYER_NAME
        self.logger = logger or CombatLogger()
        self.effects = EffectApplier(self.rules)

        self.player = self._new_combatant(Side.PLAYER)
        self.cpu = self._new_combatant(Side.CPU)
        self.cpu_chosen_move: Move | None = None
        self.locked = False
        self.winner: Side | None = None
        self.turn_number = 1
        self.last_turn: TurnResult | None = None

        self.logger.log_match_start(self.turn_number, self.rules.name)
        self.choose_cpu_move()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_moves(self) -> list[Move]:
        """Get the move catalog in display order."""
        return list(self.rules.moves)

    def get_cpu_choice(self) -> Move | None:
        """Get the move the CPU will use against the player's next action."""
        return self.cpu_chosen_move

    def is_locked(self) -> bool:
        return self.locked

    def is_player_stunned(self) -> bool:
        return self.player.stunned

    def is_cpu_stunned(self) -> bool:
        return self.cpu.stunned

    def log_lines(self) -> list[str]:
        """Get all log lines since the last reset, oldest first."""
        return list(self.logger.get_log().lines())

    def snapshot(self) -> dict[str, Any]:
        """Get the full match state for display or debugging."""
        return {
            "rules": self.rules.name,
            "turn_number": self.turn_number,
            "locked": self.locked,
            "winner": self.winner.value if self.winner else None,
            "player": self.player.to_dict(),
            "cpu": self.cpu.to_dict(),
            "cpu_chosen_move": self.cpu_chosen_move.name if self.cpu_chosen_move else None,
        }

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def choose_cpu_move(self) -> Move | None:
        """Pick the CPU's next move uniformly among the affordable ones.

        When nothing is affordable the CPU regenerates light and tries again.
        Does nothing while the match is locked or the CPU is stunned; the
        stunned CPU keeps its previous choice but will not get to use it.
        """
        if self.locked or self.cpu.stunned:
            return self.cpu_chosen_move

        self.cpu_chosen_move = None

        affordable = self._affordable_moves(self.cpu)
        while not affordable:
            self.cpu.regenerate(self.rules.cpu_empty_regen)
            self.logger.log_cpu_light_regen(self.turn_number, self.rules.cpu_empty_regen, self.cpu.light)
            affordable = self._affordable_moves(self.cpu)

        self.cpu_chosen_move = self.dice.choice(affordable)
        self.logger.log_cpu_move_chosen(self.turn_number, self.cpu_chosen_move.name)
        return self.cpu_chosen_move

    def player_use_move(self, move_index: int) -> ActionResult:
        """Resolve a turn in which the player uses a move from the catalog.

        Args:
            move_index: Display index of the move in the catalog

        Returns:
            ActionResult with the TurnResult on success
        """
        rejection = self._check_player_can_act()
        if rejection is not None:
            return rejection

        try:
            move = self.rules.get_move(move_index)
        except IndexError:
            return self._reject(ActionError.INVALID_MOVE, f"There is no move #{move_index}.")

        if not self.player.can_afford(move):
            return self._reject(ActionError.INSUFFICIENT_LIGHT, "Not enough Light!")

        self.player.spend_light(move.cost)
        turn = TurnResult(turn_number=self.turn_number, player_move=move)

        if self.cpu.consume_stun():
            # Stunned CPU loses the turn; the player's move lands unopposed
            self.logger.log_stun_consumed(self.turn_number, Side.CPU, self.cpu.name)
            self.logger.log_free_action(self.turn_number, Side.PLAYER, self.player.name, move.name)
            turn.roll_winner = Side.PLAYER
            turn.effect = self._apply(move, self.player, self.cpu)
        else:
            cpu_move = self.cpu_chosen_move
            if cpu_move is None:
                raise RuntimeError("CPU has no chosen move while the player can act")
            turn.cpu_move = cpu_move

            player_roll, cpu_roll = self._opposed_roll(move, cpu_move)
            turn.player_roll = player_roll
            turn.cpu_roll = cpu_roll
            self.logger.log_roll(self.turn_number, Side.PLAYER, self.player.name, move.name, player_roll)
            self.logger.log_roll(self.turn_number, Side.CPU, self.cpu.name, cpu_move.name, cpu_roll)

            if player_roll > cpu_roll:
                turn.roll_winner = Side.PLAYER
                turn.effect = self._apply(move, self.player, self.cpu)
            else:
                turn.roll_winner = Side.CPU
                turn.effect = self._apply(cpu_move, self.cpu, self.player)

        self._regenerate_both()
        return self._finish_turn(turn)

    def player_skip_turn(self) -> ActionResult:
        """Forgo the turn for extra light; the CPU's move applies without a roll."""
        rejection = self._check_player_can_act()
        if rejection is not None:
            return rejection

        self.player.regenerate(self.rules.skip_regen)
        self.logger.log_skip(self.turn_number, self.player.name, self.rules.skip_regen)

        turn = TurnResult(turn_number=self.turn_number)
        self._cpu_acts_freely(turn)
        return self._finish_turn(turn)

    def player_endure_stun(self) -> ActionResult:
        """Spend a stunned player's turn.

        Works like a skip without the skip bonus: the stun is cleared, the
        CPU's move applies without a roll and both sides regenerate as after
        a normal exchange.
        """
        if self.locked:
            return self._reject(ActionError.MATCH_OVER, "The match is over. Restart to play again.")

        if not self.player.consume_stun():
            return self._reject(ActionError.NOT_STUNNED, f"{self.player.name} is not stunned.")

        self.logger.log_stun_consumed(self.turn_number, Side.PLAYER, self.player.name)

        turn = TurnResult(turn_number=self.turn_number)
        self._cpu_acts_freely(turn)
        self._regenerate_both()
        return self._finish_turn(turn)

    def apply_effect(self, move: Move, user: Combatant, target: Combatant) -> EffectResult:
        """Apply a move from user onto target without logging or turn bookkeeping."""
        return self.effects.apply(move, user, target)

    def check_terminal(self) -> Side | None:
        """Check for a knockout and latch the match if one happened.

        The player's health is checked first, so a double knockout is a CPU win.

        Returns:
            The winning side, or None if the match continues
        """
        if self.locked:
            return self.winner

        if self.player.health <= 0:
            winner = Side.CPU
        elif self.cpu.health <= 0:
            winner = Side.PLAYER
        else:
            return None

        self.locked = True
        self.winner = winner
        winner_name = self.cpu.name if winner == Side.CPU else self.player.name
        self.logger.log_winner(self.turn_number, winner, winner_name)
        log.info(
            "Match over on turn %s: %s wins (player hp=%s, cpu hp=%s)",
            self.turn_number,
            winner.value,
            self.player.health,
            self.cpu.health,
        )
        return winner

    def reset_match(self) -> None:
        """Start over with fresh combatants, an empty log and a new CPU choice."""
        self.logger.clear()
        self.player = self._new_combatant(Side.PLAYER)
        self.cpu = self._new_combatant(Side.CPU)
        self.cpu_chosen_move = None
        self.locked = False
        self.winner = None
        self.turn_number = 1
        self.last_turn = None

        self.logger.log_match_start(self.turn_number, self.rules.name)
        self.choose_cpu_move()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _new_combatant(self, side: Side) -> Combatant:
        return Combatant(
            side=side,
            name=self.player_name if side == Side.PLAYER else CPU_NAME,
            health=self.rules.starting_health,
            light=self.rules.starting_light,
        )

    def _affordable_moves(self, combatant: Combatant) -> list[Move]:
        return [move for move in self.rules.moves if combatant.can_afford(move)]

    def _check_player_can_act(self) -> ActionResult | None:
        if self.locked:
            return self._reject(ActionError.MATCH_OVER, "The match is over. Restart to play again.")
        if self.player.stunned:
            return self._reject(ActionError.PLAYER_STUNNED, f"{self.player.name} is stunned and must recover first!")
        return None

    def _reject(self, error: ActionError, message: str) -> ActionResult:
        self.logger.log_action_rejected(self.turn_number, message)
        log.debug("Rejected action on turn %s: %s", self.turn_number, error.value)
        return ActionResult(success=False, message=message, error=error)

    def _opposed_roll(self, player_move: Move, cpu_move: Move) -> tuple[int, int]:
        """Roll both sides, re-rolling both together until they differ."""
        while True:
            player_roll = self.dice.roll(player_move.min_roll, player_move.max_roll)
            cpu_roll = self.dice.roll(cpu_move.min_roll, cpu_move.max_roll)
            if player_roll != cpu_roll:
                return player_roll, cpu_roll

    def _apply(self, move: Move, user: Combatant, target: Combatant) -> EffectResult:
        before = replace(target)
        result = self.effects.apply(move, user, target)
        self.logger.log_effect_applied(
            self.turn_number,
            user.side,
            move.name,
            result.value,
            result.description,
            state_before=before,
            state_after=target,
        )
        return result

    def _cpu_acts_freely(self, turn: TurnResult) -> None:
        """Apply the CPU's chosen move against the player without a roll."""
        if self.cpu.consume_stun():
            self.logger.log_stun_consumed(self.turn_number, Side.CPU, self.cpu.name)
            return

        cpu_move = self.cpu_chosen_move
        if cpu_move is None:
            raise RuntimeError("CPU has no chosen move while the player can act")

        self.logger.log_free_action(self.turn_number, Side.CPU, self.cpu.name, cpu_move.name)
        turn.cpu_move = cpu_move
        turn.roll_winner = Side.CPU
        turn.effect = self._apply(cpu_move, self.cpu, self.player)

    def _regenerate_both(self) -> None:
        self.player.regenerate(self.rules.turn_regen)
        self.cpu.regenerate(self.rules.turn_regen)
        self.logger.log_light_regen(self.turn_number, self.rules.turn_regen)

    def _finish_turn(self, turn: TurnResult) -> ActionResult:
        winner = self.check_terminal()

        turn.player = self.player.to_dict()
        turn.cpu = self.cpu.to_dict()
        turn.winner = winner
        turn.is_match_over = winner is not None
        self.last_turn = turn

        self.turn_number += 1
        if winner is None:
            self.choose_cpu_move()

        message = turn.effect.description if turn.effect else "Nothing happened."
        return ActionResult(success=True, message=message, turn_result=turn)
