"""
Outcome records for resolved actions.

The action resolver never prints. It returns an ActionOutcome carrying every
roll it made, the damage pipeline of each hit and the events it emitted, so
that a presentation layer can narrate the action.
"""

from pydantic import BaseModel, Field

from combat_core.core.constants import ActionKind
from combat_core.effects.event_system import CombatEvent


class DamageBreakdown(BaseModel):
    """
    Every step of the damage pipeline of one hit.

    Attacker side: base roll plus level bonus, times the critical multiplier,
    times the damage percentage, plus flat bonuses, truncated. Target side:
    armor, flat resistance, capped percentage reduction, defend multiplier,
    then the damage floor.
    """

    base_roll: int = Field(description="Roll within the damage range.")
    level_bonus: int = Field(default=0, description="Attacker level // divisor.")
    critical: bool = Field(default=False, description="Whether the hit was critical.")
    crit_multiplier: float = Field(default=1.0, description="Multiplier used on a critical.")
    damage_percent: float = Field(default=0, description="Summed outgoing percentage bonus.")
    flat_bonus: int = Field(default=0, description="Summed flat outgoing bonus.")
    outgoing: int = Field(default=0, description="Damage leaving the attacker.")
    evaded: bool = Field(default=False, description="Whether the target evaded.")
    armor: int = Field(default=0, description="Flat reduction from armor.")
    flat_resistance: int = Field(default=0, description="Flat reduction from effects.")
    reduction_percent: int = Field(default=0, description="Capped percentage reduction.")
    defending: bool = Field(default=False, description="Whether the target was defending.")
    final: int = Field(default=0, description="Damage after every reduction.")

    @property
    def raw(self) -> int:
        return self.base_roll + self.level_bonus


class HitResult(BaseModel):
    """Result of one attack against one target."""

    target: str = Field(description="Name of the target.")
    accuracy: int = Field(default=0, description="Accuracy the roll was checked against.")
    accuracy_roll: int | None = Field(default=None, description="The d100 accuracy roll.")
    hit: bool = Field(default=False, description="Whether the attack connected.")
    crit_chance: int = Field(default=0, description="Critical chance checked.")
    critical_roll: int | None = Field(default=None, description="The d100 critical roll.")
    evasion_roll: int | None = Field(default=None, description="The d100 evasion roll.")
    breakdown: DamageBreakdown | None = Field(default=None, description="Damage pipeline.")
    damage: int = Field(default=0, description="Health actually lost by the target.")

    @property
    def critical(self) -> bool:
        return self.breakdown is not None and self.breakdown.critical

    @property
    def evaded(self) -> bool:
        return self.breakdown is not None and self.breakdown.evaded


class ActionOutcome(BaseModel):
    """Structured result of a resolved action."""

    actor: str = Field(description="Name of the acting combatant.")
    kind: ActionKind = Field(description="The kind of action resolved.")
    ability: str | None = Field(default=None, description="Ability used, if any.")
    item: str | None = Field(default=None, description="Consumable used, if any.")
    incapacitated: bool = Field(
        default=False,
        description="Whether crowd control turned the action into a lost turn.",
    )
    hits: list[HitResult] = Field(default_factory=list, description="Attack results.")
    healing: dict[str, int] = Field(
        default_factory=dict,
        description="Health restored, by target name.",
    )
    flee_roll: int | None = Field(default=None, description="The d100 flee roll.")
    fled: bool = Field(default=False, description="Whether a flee attempt succeeded.")
    experience: int = Field(default=0, description="Experience granted to the ability.")
    events: list[CombatEvent] = Field(default_factory=list, description="Emitted events.")

    @property
    def damage(self) -> int:
        return sum(hit.damage for hit in self.hits)

    @property
    def hit(self) -> bool:
        return any(hit.hit for hit in self.hits)

    @property
    def total_healing(self) -> int:
        return sum(self.healing.values())
