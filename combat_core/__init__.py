"""
Combat resolution core of a turn-based role-playing game.

This package decides who acts when, how randomness governs hits and critical
strikes, how temporary effects accumulate and expire, and how stats become
damage and healing.
"""

from .combat import ActionOutcome, ActionResolver, CombatEngine, TurnScheduler
from .combatants import Combatant
from .core import ActionKind, CombatantType, CombatConfig
from .effects import Effect, EffectEngine
from .rng import RandomProvider, get_default_provider, set_default_provider

__version__ = "0.1.0"

__all__ = [
    "ActionOutcome",
    "ActionResolver",
    "CombatEngine",
    "TurnScheduler",
    "Combatant",
    "ActionKind",
    "CombatantType",
    "CombatConfig",
    "Effect",
    "EffectEngine",
    "RandomProvider",
    "get_default_provider",
    "set_default_provider",
]
