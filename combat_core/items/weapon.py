"""
Weapon module for the combat core.

Defines the Weapon record read by the action resolver: damage range,
accuracy, critical chance, weapon family and the effects applied on hit.
"""

from typing import Any

from pydantic import BaseModel, Field

from combat_core.core.constants import WeaponType
from combat_core.effects.base_effect import Effect


class Weapon(BaseModel):
    """
    Represents a weapon that can be wielded by combatants.

    The weapon type is what weapon mastery passives key on, and the on-hit
    effects are applied to the target of every hit that is not evaded.
    """

    name: str = Field(
        description="The name of the weapon.",
    )
    description: str = Field(
        "",
        description="A description of the weapon.",
    )
    weapon_type: WeaponType = Field(
        default=WeaponType.SWORD,
        description="The family of the weapon.",
    )
    min_damage: int = Field(
        ge=0,
        description="Lowest damage roll.",
    )
    max_damage: int = Field(
        ge=0,
        description="Highest damage roll.",
    )
    accuracy: int = Field(
        default=75,
        description="Percentage chance to hit before modifiers.",
    )
    crit_chance: int = Field(
        default=5,
        description="Percentage chance of a critical hit before modifiers.",
    )
    on_hit_effects: list[Effect] = Field(
        default_factory=list,
        description="Effects applied to the target on hit.",
    )

    @property
    def damage_range(self) -> tuple[int, int]:
        return self.min_damage, self.max_damage

    def model_post_init(self, _: Any) -> None:
        if self.min_damage > self.max_damage:
            raise ValueError(
                f"{self.name}: min_damage ({self.min_damage}) is greater "
                f"than max_damage ({self.max_damage})."
            )

    def __str__(self) -> str:
        return f"{self.name} ({self.min_damage}-{self.max_damage}, {self.weapon_type.display_name})"
