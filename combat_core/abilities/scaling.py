"""
Level scaling module for abilities.

Maps an ability level in [1, max_level] to a magnitude. Scalings are data,
selected by their ``scaling_type`` discriminator when loaded from JSON.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, Field


def scaled_value(level: int, low: float, high: float, max_level: int = 100) -> float:
    """
    Linear interpolation from low at level 1 to high at max_level.

    Args:
        level (int):
            The ability level.
        low (float):
            The value at level 1.
        high (float):
            The value at max_level.
        max_level (int):
            The highest level.

    Returns:
        float:
            The interpolated value.

    """
    progress = (level - 1) / (max_level - 1)
    return low + (high - low) * progress


def scaled_int(level: int, low: int, high: int, max_level: int = 100) -> int:
    """Like scaled_value, rounded half to even."""
    return round(scaled_value(level, low, high, max_level))


class LinearScaling(BaseModel):
    """Interpolates linearly between the level 1 and the max level values."""

    scaling_type: Literal["linear"] = "linear"

    low: float = Field(
        description="Value at level 1.",
    )
    high: float = Field(
        description="Value at the max level.",
    )
    rounding: Literal["round", "floor", "none"] = Field(
        default="round",
        description="How the result is turned into a number: rounded, truncated or kept.",
    )

    def value(self, level: int, max_level: int = 100) -> float | int:
        raw = scaled_value(level, self.low, self.high, max_level)
        if self.rounding == "round":
            return round(raw)
        if self.rounding == "floor":
            return int(raw)
        return raw


class StepScaling(BaseModel):
    """Grows by integer division: base + level * multiplier // divisor."""

    scaling_type: Literal["step"] = "step"

    base: int = Field(
        description="Value at level 0.",
    )
    multiplier: int = Field(
        default=1,
        description="Level multiplier applied before the division.",
    )
    divisor: int = Field(
        default=1,
        gt=0,
        description="Integer divisor.",
    )

    def value(self, level: int, max_level: int = 100) -> int:
        return self.base + level * self.multiplier // self.divisor


class TierScaling(BaseModel):
    """
    Unlocks a value at each level milestone.

    With no explicit values the result is the number of milestones reached.
    """

    scaling_type: Literal["tier"] = "tier"

    thresholds: list[int] = Field(
        description="Ascending level milestones.",
    )
    values: list[float] | None = Field(
        default=None,
        description="Value unlocked at each milestone, one more than thresholds.",
    )

    def model_post_init(self, _) -> None:
        if self.thresholds != sorted(self.thresholds):
            raise ValueError("Tier thresholds must be ascending.")
        if self.values is not None and len(self.values) != len(self.thresholds) + 1:
            raise ValueError("Tier values must have one entry more than thresholds.")

    def value(self, level: int, max_level: int = 100) -> float | int:
        tier = sum(1 for threshold in self.thresholds if level >= threshold)
        if self.values is None:
            return tier
        return self.values[tier]


Scaling = Annotated[
    LinearScaling | StepScaling | TierScaling,
    Field(discriminator="scaling_type"),
]
