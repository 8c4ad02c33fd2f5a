"""
Combat module for the combat core.

Handles the turn order, the resolution of actions with the damage pipeline,
and the engine driving the rounds of a battle.
"""

from .action_resolver import ActionResolver
from .combat_engine import CombatEngine
from .damage import compute_damage, mitigated_damage, outgoing_damage
from .outcome import ActionOutcome, DamageBreakdown, HitResult
from .turn_scheduler import TurnScheduler, combat_resolution

__all__ = [
    "ActionResolver",
    "CombatEngine",
    "compute_damage",
    "mitigated_damage",
    "outgoing_damage",
    "ActionOutcome",
    "DamageBreakdown",
    "HitResult",
    "TurnScheduler",
    "combat_resolution",
]
