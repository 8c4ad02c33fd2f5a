"""
Combatant effects module for the combat core.

Holds the active effects of a single combatant in insertion order, one
instance per effect name, and answers the questions the scheduler and the
action resolver ask about them.
"""

from collections.abc import Iterator
from typing import Any

from combat_core.core.constants import EffectKind, EffectStat
from combat_core.effects.base_effect import ActiveEffect


class CombatantEffects:
    """
    Container of the active effects of a combatant.

    Attributes:
        _owner (Any):
            The combatant that owns this effects module.
        active_effects (list[ActiveEffect]):
            Currently active effects, in the order they were applied.

    """

    _owner: Any
    active_effects: list[ActiveEffect]

    def __init__(self, owner: Any) -> None:
        self._owner = owner
        self.active_effects = []

    # === Effect Management ===

    def get(self, name: str) -> ActiveEffect | None:
        """
        Get the active instance of the named effect.

        Args:
            name (str):
                The effect name.

        Returns:
            ActiveEffect | None:
                The active instance, or None if the effect is not active.

        """
        for ae in self.active_effects:
            if ae.name == name:
                return ae
        return None

    def has(self, name: str) -> bool:
        return self.get(name) is not None

    def add(self, active: ActiveEffect) -> None:
        """
        Insert a new active effect.

        Raises:
            ValueError:
                If an effect with the same name is already active.

        """
        if self.has(active.name):
            raise ValueError(
                f"{active.name} is already active on {self._owner.name}."
            )
        self.active_effects.append(active)

    def remove(self, active: ActiveEffect) -> bool:
        if active in self.active_effects:
            self.active_effects.remove(active)
            return True
        return False

    def clear(self) -> None:
        self.active_effects.clear()

    # === Queries ===

    def modifier_total(self, stat: EffectStat) -> int:
        """
        Sum of a modifier over every active effect, stacks included.

        Args:
            stat (EffectStat):
                The modified combat value.

        Returns:
            int:
                The total, which can be negative.

        """
        return sum(ae.modifier(stat) for ae in self.active_effects)

    def is_incapacitated(self) -> bool:
        """True if an active effect prevents the owner from acting."""
        return any(ae.effect.prevents_action for ae in self.active_effects)

    @property
    def damage_over_time_effects(self) -> Iterator[ActiveEffect]:
        for ae in self.active_effects:
            if ae.kind == EffectKind.DAMAGE_OVER_TIME:
                yield ae

    @property
    def heal_over_time_effects(self) -> Iterator[ActiveEffect]:
        for ae in self.active_effects:
            if ae.kind == EffectKind.HEAL_OVER_TIME:
                yield ae

    @property
    def negative_effects(self) -> Iterator[ActiveEffect]:
        """
        Get the effects removed by a cleanse.

        Returns:
            Iterator[ActiveEffect]:
                Active debuffs, damage over time and crowd control effects.

        """
        for ae in self.active_effects:
            if ae.effect.is_negative:
                yield ae

    def __iter__(self) -> Iterator[ActiveEffect]:
        return iter(self.active_effects)

    def __len__(self) -> int:
        return len(self.active_effects)
