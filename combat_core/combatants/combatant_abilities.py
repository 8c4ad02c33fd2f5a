"""
Combatant abilities module for the combat core.

Holds the abilities a combatant owns and sums the passive bonuses they
contribute.
"""

from collections.abc import Iterator
from typing import Any

from combat_core.abilities.base_ability import Ability
from combat_core.core.constants import PassiveBonus, WeaponType
from combat_core.core.logging import log_debug


class CombatantAbilities:
    """
    Container of the abilities of a combatant, keyed by ability name.

    Attributes:
        _owner (Any):
            The combatant that owns this abilities module.
        abilities (dict[str, Ability]):
            The owned abilities.

    """

    _owner: Any
    abilities: dict[str, Ability]

    def __init__(self, owner: Any) -> None:
        self._owner = owner
        self.abilities = {}

    # === Ability Management ===

    def add(self, ability: Ability) -> bool:
        """
        Learn an ability.

        Args:
            ability (Ability):
                The ability to add.

        Returns:
            bool:
                False if an ability with the same name was already known.

        """
        if ability.name in self.abilities:
            return False
        self.abilities[ability.name] = ability
        log_debug(f"{self._owner.name} learned {ability.name}.")
        return True

    def remove(self, name: str) -> Ability | None:
        return self.abilities.pop(name, None)

    def get(self, name: str) -> Ability | None:
        return self.abilities.get(name)

    @property
    def actives(self) -> Iterator[Ability]:
        for ability in self.abilities.values():
            if not ability.is_passive:
                yield ability

    @property
    def passives(self) -> Iterator[Ability]:
        for ability in self.abilities.values():
            if ability.is_passive:
                yield ability

    def usable(self) -> list[Ability]:
        """Active abilities with no running cooldown."""
        return [ability for ability in self.actives if ability.can_use()]

    # === Passive bonuses ===

    def passive_total(self, bonus: PassiveBonus, key: str) -> float:
        """
        Sum a named value over every passive granting the bonus.

        Args:
            bonus (PassiveBonus):
                The bonus to look for.
            key (str):
                The value to read, e.g. 'chance' or 'accuracy'.

        Returns:
            float:
                The total, 0 if no passive grants the bonus.

        """
        return sum(
            ability.passive_value(key)
            for ability in self.passives
            if ability.definition.passive == bonus
        )

    def has_passive(self, bonus: PassiveBonus) -> bool:
        return any(ability.definition.passive == bonus for ability in self.passives)

    def mastery_bonus(self, weapon_type: WeaponType | None, key: str) -> float:
        """
        Sum a weapon mastery value for the wielded weapon family.

        Masteries of other families contribute nothing.
        """
        if weapon_type is None:
            return 0
        return sum(
            ability.passive_value(key)
            for ability in self.passives
            if ability.definition.passive == PassiveBonus.WEAPON_MASTERY
            and ability.definition.weapon_type == weapon_type
        )

    def crit_multiplier(self, default: float) -> float:
        """
        Critical multiplier of the owner.

        A critical passive replaces the default multiplier, the strongest one
        wins when several are owned.
        """
        multipliers = [
            ability.passive_value("crit_multiplier")
            for ability in self.passives
            if ability.definition.passive == PassiveBonus.CRITICAL
        ]
        if not multipliers:
            return default
        return max(multipliers)

    # === Round and combat lifecycle ===

    def reduce_cooldowns(self) -> None:
        for ability in self.actives:
            ability.reduce_cooldown()

    def reset_combat_usage(self) -> None:
        for ability in self.abilities.values():
            ability.reset_combat_usage()

    def __iter__(self) -> Iterator[Ability]:
        return iter(self.abilities.values())

    def __len__(self) -> int:
        return len(self.abilities)
