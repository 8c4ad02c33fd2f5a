"""
Combatant module for the combat core.

Defines the Combatant class shared by players, companions, enemies and
bosses: identity, vitals, speed, equipment, the record of the last action,
and the effects and abilities management modules.
"""

from combat_core.core.constants import ActionKind, CombatantType, WeaponType
from combat_core.core.logging import log_debug
from combat_core.items.armor import Armor
from combat_core.items.weapon import Weapon

from .combatant_abilities import CombatantAbilities
from .combatant_effects import CombatantEffects


class Combatant:
    """
    Represents a participant of a battle.

    Attributes:
        name (str):
            The name of the combatant.
        combatant_type (CombatantType):
            Whether the combatant is a player, companion, enemy or boss.
        level (int):
            The level, half of which is added to every damage roll.
        max_health (int):
            The maximum health.
        health (int):
            The current health, always within [0, max_health].
        base_speed (int):
            The speed before the transient modifier.
        speed_modifier (int):
            The transient modifier, recomputed at the start of every round.
        max_mana (int):
            The maximum mana.
        mana (int):
            The current mana, spent on ability costs.
        accuracy (int | None):
            Innate accuracy used when no weapon is equipped.
        crit_chance (int | None):
            Innate critical chance used when no weapon is equipped.
        damage_range (tuple[int, int] | None):
            Innate damage range used when no weapon is equipped.
        weapon (Weapon | None):
            The equipped weapon.
        armor (Armor | None):
            The equipped armor.
        last_action (ActionKind):
            The kind of the last resolved action.
        is_defending (bool):
            Set by the defend action, cleared when the combatant next acts.

    """

    # === Static properties ===

    name: str
    combatant_type: CombatantType
    level: int
    max_health: int
    base_speed: int
    max_mana: int
    accuracy: int | None
    crit_chance: int | None
    damage_range: tuple[int, int] | None

    # === Dynamic properties ===

    health: int
    mana: int
    speed_modifier: int
    weapon: Weapon | None
    armor: Armor | None
    last_action: ActionKind
    is_defending: bool

    # === Management Modules ===

    effects: CombatantEffects
    abilities: CombatantAbilities

    def __init__(
        self,
        name: str,
        combatant_type: CombatantType,
        max_health: int,
        base_speed: int,
        level: int = 1,
        health: int | None = None,
        max_mana: int = 0,
        mana: int | None = None,
        accuracy: int | None = None,
        crit_chance: int | None = None,
        damage_range: tuple[int, int] | None = None,
        weapon: Weapon | None = None,
        armor: Armor | None = None,
    ) -> None:
        if not name:
            raise ValueError("Combatant name must be a non-empty string.")
        if max_health <= 0:
            raise ValueError(f"{name}: max_health must be positive.")
        if level < 1:
            raise ValueError(f"{name}: level must be at least 1.")
        if damage_range is not None and damage_range[0] > damage_range[1]:
            raise ValueError(f"{name}: damage_range must be (min, max) with min <= max.")

        # Initialize static properties.
        self.name = name
        self.combatant_type = combatant_type
        self.level = level
        self.max_health = max_health
        self.base_speed = base_speed
        self.max_mana = max_mana
        self.accuracy = accuracy
        self.crit_chance = crit_chance
        self.damage_range = damage_range

        # Initialize dynamic properties.
        self.health = max(0, min(max_health, max_health if health is None else health))
        self.mana = max(0, min(max_mana, max_mana if mana is None else mana))
        self.speed_modifier = 0
        self.weapon = weapon
        self.armor = armor
        self.last_action = ActionKind.NONE
        self.is_defending = False

        # Initialize modules.
        self.effects = CombatantEffects(owner=self)
        self.abilities = CombatantAbilities(owner=self)

    @property
    def colored_name(self) -> str:
        """
        Returns the combatant's name with color coding based on its type.
        """
        return self.combatant_type.colorize(self.name)

    @property
    def is_party(self) -> bool:
        return self.combatant_type.is_party

    @property
    def weapon_type(self) -> WeaponType | None:
        return self.weapon.weapon_type if self.weapon else None

    @property
    def defense(self) -> int:
        """Flat damage reduction from the equipped armor."""
        return self.armor.defense if self.armor else 0

    # === Vitals ===

    def is_alive(self) -> bool:
        return self.health > 0

    def take_damage(self, amount: int) -> int:
        """
        Reduce health by the given amount, clamped at zero.

        Args:
            amount (int):
                The damage to apply.

        Returns:
            int:
                The health actually lost.

        """
        lost = min(self.health, max(0, amount))
        self.health -= lost
        log_debug(
            f"{self.name} takes {lost} damage.",
            {"requested": amount, "health": self.health},
        )
        return lost

    def heal(self, amount: int) -> int:
        """
        Increases health by the given amount, up to max_health.

        A defeated combatant cannot be healed, use revive instead.

        Returns:
            int:
                The amount actually healed.

        """
        if not self.is_alive():
            return 0
        healed = min(self.max_health - self.health, max(0, amount))
        self.health += healed
        return healed

    def revive(self, percent: int) -> int:
        """
        Bring a defeated combatant back with a share of its max health.

        Active effects are cleared.

        Args:
            percent (int):
                Percentage of max health restored, at least 1 health.

        Returns:
            int:
                The health restored, 0 if the combatant was alive.

        """
        if self.is_alive():
            return 0
        self.health = min(self.max_health, max(1, int(self.max_health * percent / 100)))
        self.effects.clear()
        self.is_defending = False
        log_debug(f"{self.name} revived with {self.health} health.")
        return self.health

    def spend_mana(self, amount: int) -> bool:
        """
        Reduces mana by the given amount, if the combatant has enough.

        Returns:
            bool:
                True if the mana was spent.

        """
        if self.mana < amount:
            return False
        self.mana -= amount
        return True

    def __str__(self) -> str:
        return self.colored_name

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(name={self.name!r}, "
            f"type={self.combatant_type}, health={self.health}/{self.max_health})"
        )
