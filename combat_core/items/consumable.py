"""
Consumable module for the combat core.

Defines the Consumable record used by the item action. A consumable is a
bundle of optional outcomes: instant healing, thrown damage, effects,
a cleanse, or a revive.
"""

from typing import Any

from pydantic import BaseModel, Field

from combat_core.effects.base_effect import Effect


class Consumable(BaseModel):
    """
    Represents a single-use item usable in combat.
    """

    name: str = Field(
        description="The name of the consumable.",
    )
    description: str = Field(
        "",
        description="A brief description of the consumable.",
    )
    heal: int = Field(
        default=0,
        ge=0,
        description="Health restored to the target.",
    )
    damage: int = Field(
        default=0,
        ge=0,
        description="Damage dealt to the target, not subject to accuracy.",
    )
    effects: list[Effect] = Field(
        default_factory=list,
        description="Effects applied to the target.",
    )
    cleanse: bool = Field(
        default=False,
        description="Whether negative effects are removed from the target.",
    )
    revive_percent: int = Field(
        default=0,
        ge=0,
        le=100,
        description="Percentage of max health restored to a defeated target.",
    )

    @property
    def is_offensive(self) -> bool:
        """True if the consumable is thrown at enemies."""
        return self.damage > 0

    @property
    def is_revive(self) -> bool:
        return self.revive_percent > 0

    def model_post_init(self, _: Any) -> None:
        if self.is_offensive and (self.heal or self.is_revive or self.cleanse):
            raise ValueError(
                f"{self.name}: a damaging consumable cannot also heal, cleanse or revive."
            )
        if not (self.heal or self.damage or self.effects or self.cleanse or self.is_revive):
            raise ValueError(f"{self.name}: a consumable must have at least one outcome.")
