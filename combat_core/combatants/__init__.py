"""
Combatants package for the combat core.

Contains the combatant model, its effects and abilities management modules
and its snapshots.
"""

from .combatant import Combatant
from .combatant_abilities import CombatantAbilities
from .combatant_effects import CombatantEffects
from .serialization import (
    AbilitySnapshot,
    CombatantSnapshot,
    load_snapshot,
    restore_combatant,
    save_snapshot,
    snapshot_combatant,
)

__all__ = [
    "Combatant",
    "CombatantAbilities",
    "CombatantEffects",
    "AbilitySnapshot",
    "CombatantSnapshot",
    "load_snapshot",
    "restore_combatant",
    "save_snapshot",
    "snapshot_combatant",
]
