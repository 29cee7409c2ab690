"""Match engine module - handles move resolution, rolls, stuns and game over."""

from .dice import Dice
from .effects import EffectApplier
from .logging import CombatLog, CombatLogger, LogEntry, LogEventType, StateSnapshot
from .match import MatchEngine
from .rules import CLASSIC_RULES, RULES_REGISTRY, STUN_RULES, GameRules, UnknownRulesError, get_rules
from .types import ActionError, ActionResult, Combatant, EffectResult, Move, MoveKind, Side, TurnResult

__all__ = [
    "Dice",
    "EffectApplier",
    "MatchEngine",
    "GameRules",
    "UnknownRulesError",
    "get_rules",
    "CLASSIC_RULES",
    "STUN_RULES",
    "RULES_REGISTRY",
    "ActionError",
    "ActionResult",
    "Combatant",
    "EffectResult",
    "Move",
    "MoveKind",
    "Side",
    "TurnResult",
    "CombatLogger",
    "CombatLog",
    "LogEntry",
    "LogEventType",
    "StateSnapshot",
]
