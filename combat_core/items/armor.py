"""
Armor module for the combat core.

Defines the Armor record: a complete armor set providing flat damage
reduction.
"""

from pydantic import BaseModel, Field

from combat_core.core.constants import ArmorType


class Armor(BaseModel):
    """
    Represents an armor set that can be equipped by combatants.

    Armor defense is subtracted from every incoming hit before percentage
    reductions are applied.
    """

    name: str = Field(
        description="The name of the armor set.",
    )
    description: str = Field(
        "",
        description="A brief description of the armor set.",
    )
    armor_type: ArmorType = Field(
        default=ArmorType.LEATHER,
        description="The material class of the armor.",
    )
    defense: int = Field(
        ge=0,
        description="Flat damage reduction provided by this armor.",
    )

    def __str__(self) -> str:
        return f"{self.name} (+{self.defense} defense)"
