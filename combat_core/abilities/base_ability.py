"""
Base ability module for the combat core.

Defines the read-only AbilityDefinition found in the catalog, and the live
Ability that a combatant owns: its level, experience, cooldown and usage
count within the current combat.
"""

import math
from typing import Any

from catchery import ensure_int_in_range, ensure_non_negative_int
from pydantic import BaseModel, Field

from combat_core.core.constants import (
    AbilityRarity,
    AbilityTarget,
    AbilityType,
    EffectStat,
    PassiveBonus,
    WeaponType,
)
from combat_core.core.logging import log_debug
from combat_core.effects.base_effect import Effect

from .scaling import Scaling

# Base experience granted by the first use of an ability in a combat.
BASE_COMBAT_XP = 10
# Growth of the experience granted by each further use in the same combat.
COMBAT_XP_GROWTH = 1.15


class AbilityDefinition(BaseModel):
    """
    Catalog record of an ability.

    Active abilities pay a cost and start a cooldown, then perform any
    combination of a weapon attack, scaled damage, scaled healing, a cleanse
    and a scaled effect. Passive abilities carry a bonus that the resolver
    and the scheduler read through the owner's ability container.
    """

    name: str = Field(
        description="Name of the ability.",
    )
    description: str = Field(
        default="No description.",
        description="Description of the ability.",
    )
    ability_type: AbilityType = Field(
        default=AbilityType.ACTIVE,
        description="Whether the ability is activated or always on.",
    )
    target: AbilityTarget = Field(
        default=AbilityTarget.SELF,
        description="Who the ability may be used on.",
    )
    rarity: AbilityRarity = Field(
        default=AbilityRarity.COMMON,
        description="How rare the ability is.",
    )
    cooldown: int = Field(
        default=0,
        ge=0,
        description="Base cooldown in rounds after use.",
    )
    reduces_cooldown_with_level: bool = Field(
        default=True,
        description="Whether levels 25 and 75 shorten the cooldown.",
    )
    cost: int = Field(
        default=0,
        ge=0,
        description="Mana paid on use.",
    )

    # === Active payload ===

    weapon_attack: bool = Field(
        default=False,
        description="Whether using the ability performs a weapon attack.",
    )
    damage: tuple[Scaling, Scaling] | None = Field(
        default=None,
        description="Scaled (min, max) damage range.",
    )
    healing: tuple[Scaling, Scaling] | None = Field(
        default=None,
        description="Scaled (min, max) healing range.",
    )
    effect: Effect | None = Field(
        default=None,
        description="Template of the effect applied on use.",
    )
    effect_scaling: dict[str, Scaling] = Field(
        default_factory=dict,
        description=(
            "Scaled overrides of the effect template: 'potency', 'duration', "
            "'damage_min', 'damage_max' or an EffectStat name."
        ),
    )
    effect_on_self: bool = Field(
        default=False,
        description="Whether the effect goes to the user instead of the target.",
    )
    cleanse: bool = Field(
        default=False,
        description="Whether negative effects are removed from the target.",
    )

    # === Passive payload ===

    passive: PassiveBonus = Field(
        default=PassiveBonus.NONE,
        description="Bonus contributed while the ability is owned.",
    )
    passive_values: dict[str, Scaling] = Field(
        default_factory=dict,
        description="Named scaled values of the passive bonus.",
    )
    weapon_type: WeaponType | None = Field(
        default=None,
        description="Weapon family a mastery applies to.",
    )

    @property
    def is_passive(self) -> bool:
        return self.ability_type == AbilityType.PASSIVE

    def model_post_init(self, _: Any) -> None:
        if self.is_passive:
            if self.passive == PassiveBonus.NONE:
                raise ValueError(f"Passive ability {self.name} must define a bonus.")
            if self.cooldown or self.cost:
                raise ValueError(f"Passive ability {self.name} cannot have a cooldown or cost.")
        elif self.passive != PassiveBonus.NONE:
            raise ValueError(f"Active ability {self.name} cannot define a passive bonus.")
        if self.passive == PassiveBonus.WEAPON_MASTERY and self.weapon_type is None:
            raise ValueError(f"Weapon mastery {self.name} must name a weapon type.")
        if self.effect_scaling and self.effect is None:
            raise ValueError(f"{self.name} scales an effect but defines none.")


class Ability(BaseModel):
    """
    An ability owned by a combatant, with its progression and cooldown.
    """

    definition: AbilityDefinition = Field(
        description="The catalog record of the ability.",
    )
    level: int = Field(
        default=1,
        description="Current level.",
    )
    max_level: int = Field(
        default=100,
        gt=1,
        description="Highest reachable level.",
    )
    experience: int = Field(
        default=0,
        description="Experience accumulated toward the next level.",
    )
    current_cooldown: int = Field(
        default=0,
        description="Rounds left before the ability can be used again.",
    )
    combat_usage_count: int = Field(
        default=0,
        description="Times used in the current combat.",
    )

    def model_post_init(self, _: Any) -> None:
        context = {"ability": self.definition.name}
        self.level = ensure_int_in_range(self.level, "level", 1, self.max_level, context=context)
        self.experience = ensure_non_negative_int(self.experience, "experience", context=context)
        self.current_cooldown = ensure_non_negative_int(
            self.current_cooldown, "current_cooldown", context=context
        )

    # === Identity ===

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def is_passive(self) -> bool:
        return self.definition.is_passive

    @property
    def cost(self) -> int:
        return self.definition.cost

    # === Scaling ===

    def scale(self, scaling: Any) -> Any:
        """Evaluate a scaling at the current level."""
        return scaling.value(self.level, self.max_level)

    def passive_value(self, key: str, default: float = 0) -> float:
        """
        Value of a named passive bonus at the current level.

        Args:
            key (str):
                Name of the value, e.g. 'chance' or 'accuracy'.
            default (float):
                Returned when the ability defines no such value.

        """
        scaling = self.definition.passive_values.get(key)
        if scaling is None:
            return default
        return self.scale(scaling)

    def scaled_range(self, pair: tuple[Any, Any]) -> tuple[int, int]:
        low = int(self.scale(pair[0]))
        high = int(self.scale(pair[1]))
        return low, max(low, high)

    def build_effect(self) -> Effect | None:
        """
        Build the effect applied on use, with its scaled values.

        Returns:
            Effect | None:
                The effect at the current level, or None if the ability
                applies no effect.

        """
        template = self.definition.effect
        if template is None:
            return None
        if not self.definition.effect_scaling:
            return template
        update: dict[str, Any] = {}
        modifiers = dict(template.modifiers)
        damage_range = list(template.damage_range or (0, 0))
        for key, scaling in self.definition.effect_scaling.items():
            value = int(self.scale(scaling))
            if key in ("potency", "duration"):
                update[key] = value
            elif key == "damage_min":
                damage_range[0] = value
            elif key == "damage_max":
                damage_range[1] = value
            else:
                modifiers[EffectStat[key]] = value
        update["modifiers"] = modifiers
        if template.damage_range is not None or "damage_min" in self.definition.effect_scaling:
            update["damage_range"] = (damage_range[0], max(damage_range))
        # Validate the scaled copy, model_copy alone would skip validation.
        return Effect(**{**template.model_dump(), **update})

    # === Cooldown ===

    @property
    def effective_cooldown(self) -> int:
        """
        Cooldown started on use, shortened by 1 at level 25 and by 2 at level
        75. Never below 1 for abilities with a cooldown.
        """
        base = self.definition.cooldown
        if base == 0:
            return 0
        if not self.definition.reduces_cooldown_with_level:
            return base
        reduction = 2 if self.level >= 75 else 1 if self.level >= 25 else 0
        return max(1, base - reduction)

    def can_use(self) -> bool:
        return not self.is_passive and self.current_cooldown == 0

    def start_cooldown(self) -> None:
        self.current_cooldown = self.effective_cooldown

    def reduce_cooldown(self) -> None:
        if self.current_cooldown > 0:
            self.current_cooldown -= 1

    # === Progression ===

    @property
    def experience_to_next_level(self) -> int:
        return 100 + self.level * 10

    def gain_experience(self, amount: int) -> int:
        """
        Add experience and level up while enough is accumulated.

        Experience resets to 0 on each level up.

        Returns:
            int:
                Number of levels gained.

        """
        if self.level >= self.max_level:
            return 0
        self.experience += amount
        gained = 0
        while self.level < self.max_level and self.experience >= self.experience_to_next_level:
            self.level += 1
            self.experience = 0
            gained += 1
        if gained:
            log_debug(f"{self.name} reached level {self.level}.", {"gained": gained})
        return gained

    def combat_scaled_experience(self) -> int:
        """Experience for the next use in this combat, 10 * 1.15^uses."""
        if self.combat_usage_count == 0:
            return BASE_COMBAT_XP
        return round(BASE_COMBAT_XP * math.pow(COMBAT_XP_GROWTH, self.combat_usage_count))

    def gain_combat_experience(self) -> int:
        """
        Grant the combat-scaled experience for one use.

        Returns:
            int:
                The experience granted.

        """
        amount = self.combat_scaled_experience()
        self.combat_usage_count += 1
        self.gain_experience(amount)
        return amount

    def reset_combat_usage(self) -> None:
        self.combat_usage_count = 0

    def __str__(self) -> str:
        cooldown = f", cooldown {self.current_cooldown}" if self.current_cooldown else ""
        return f"{self.name} (Lv.{self.level}/{self.max_level}{cooldown})"
