"""
Base effect module for the combat core.

Defines the read-only Effect definition found in the catalog and the
ActiveEffect instance that lives on a combatant, carrying the remaining
duration and the stack count.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from combat_core.core.constants import EffectKind, EffectStat


class Effect(BaseModel):
    """
    Definition of a temporary effect that can be applied to a combatant.

    Effects are data: their kind decides how the engine processes them each
    round, and their modifiers are what the action resolver reads from
    them. The definition itself is never mutated once created, live state
    is held by ActiveEffect.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        description="The name of the effect, one live instance per name.",
    )
    description: str = Field(
        "",
        description="A brief description of the effect.",
    )
    kind: EffectKind = Field(
        description="The category of the effect, used for processing and cleansing.",
    )
    modifiers: dict[EffectStat, int] = Field(
        default_factory=dict,
        description="Per-stack modifiers to combat values while active.",
    )
    duration: int = Field(
        description="The duration of the effect in rounds.",
    )
    potency: int = Field(
        default=0,
        description="Per-stack damage or healing of a tick.",
    )
    stackable: bool = Field(
        default=False,
        description="Whether reapplication adds a stack instead of refreshing.",
    )
    max_stacks: int | None = Field(
        default=None,
        description="Upper bound on the stack count, None for uncapped.",
    )
    damage_range: tuple[int, int] | None = Field(
        default=None,
        description="Per-tick damage range rolled instead of using potency.",
    )
    prevents_action: bool = Field(
        default=False,
        description="Whether the afflicted combatant loses its actions.",
    )
    then_apply: "Effect | None" = Field(
        default=None,
        description="Effect applied to the same target when this one expires.",
    )

    @property
    def display_name(self) -> str:
        return self.name

    @property
    def color(self) -> str:
        """Returns the color string associated with this effect."""
        return self.kind.color

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this effect."""
        return self.kind.emoji

    @property
    def colored_name(self) -> str:
        """Returns the effect name with color formatting applied."""
        return self.colorize(self.display_name)

    def colorize(self, message: str) -> str:
        """Applies effect color formatting to a message."""
        return f"[{self.color}]{message}[/]"

    @property
    def is_negative(self) -> bool:
        """True if a cleanse removes this effect."""
        return self.kind.is_negative

    def model_post_init(self, _: Any) -> None:
        if not self.name:
            raise ValueError("Effect name must be a non-empty string.")
        if self.duration <= 0:
            raise ValueError(f"Duration of {self.name} must be a positive integer.")
        if self.max_stacks is not None:
            if self.max_stacks < 1:
                raise ValueError(f"max_stacks of {self.name} must be at least 1.")
            if not self.stackable and self.max_stacks != 1:
                raise ValueError(f"{self.name} is not stackable but has max_stacks.")
        if self.damage_range is not None:
            low, high = self.damage_range
            if low < 0 or low > high:
                raise ValueError(
                    f"damage_range of {self.name} must be (min, max) with 0 <= min <= max."
                )
            if self.kind != EffectKind.DAMAGE_OVER_TIME:
                raise ValueError(
                    f"damage_range is only valid for damage over time, not {self.kind}."
                )


class ActiveEffect(BaseModel):
    """
    Represents an effect applied to a combatant, with its remaining duration
    and stack count.
    """

    effect: Effect = Field(
        description="The definition being applied.",
    )
    remaining: int = Field(
        description="Remaining duration in rounds.",
    )
    stack_count: int = Field(
        default=1,
        description="Number of stacks, always 1 for non-stacking effects.",
    )
    source: str | None = Field(
        default=None,
        description="Name of the combatant that applied the effect.",
    )

    @property
    def name(self) -> str:
        return self.effect.name

    @property
    def kind(self) -> EffectKind:
        return self.effect.kind

    def modifier(self, stat: EffectStat) -> int:
        """Value of a modifier scaled by the number of stacks."""
        return self.effect.modifiers.get(stat, 0) * self.stack_count

    @property
    def magnitude(self) -> int:
        """Potency scaled by the number of stacks."""
        return self.effect.potency * self.stack_count

    @property
    def is_expired(self) -> bool:
        return self.remaining <= 0

    def add_stack(self) -> bool:
        """
        Add a stack if the effect allows it.

        Returns:
            bool:
                True if the stack count changed.

        """
        if not self.effect.stackable:
            return False
        if self.effect.max_stacks is not None and self.stack_count >= self.effect.max_stacks:
            return False
        self.stack_count += 1
        return True

    def refresh(self, duration: int) -> None:
        """Reset the remaining duration to the given value."""
        self.remaining = duration

    def __str__(self) -> str:
        stacks = f" x{self.stack_count}" if self.stack_count > 1 else ""
        return f"{self.name}{stacks} ({self.remaining} rounds)"

    def model_post_init(self, _: Any) -> None:
        if self.remaining < 0:
            raise ValueError("Remaining duration must be a non-negative integer.")
        if self.stack_count < 1:
            raise ValueError("Stack count must be at least 1.")
        if not self.effect.stackable and self.stack_count != 1:
            raise ValueError(f"{self.name} does not stack, stack count must be 1.")


Effect.model_rebuild()
