"""
Configuration module for the combat core.

Holds the tunable constants of combat math in a single pydantic model that
can be loaded from and saved to JSON.
"""

import json
from pathlib import Path
from typing import Any

from catchery import log_warning
from pydantic import BaseModel, Field

from combat_core.core.constants import ActionKind


def _default_speed_modifiers() -> dict[ActionKind, int]:
    return {
        ActionKind.NONE: 0,
        ActionKind.ATTACK: -3,
        ActionKind.DEFEND: 3,
        ActionKind.ABILITY: 0,
        ActionKind.ITEM: 0,
        ActionKind.FLEE: 0,
    }


class CombatConfig(BaseModel):
    """
    Tunable constants used by the scheduler and the action resolver.
    """

    damage_floor: int = Field(
        default=1,
        ge=0,
        description="Minimum damage dealt by a hit that was not evaded.",
    )
    default_crit_multiplier: float = Field(
        default=1.5,
        ge=1.0,
        description="Critical multiplier used when no passive replaces it.",
    )
    level_damage_divisor: int = Field(
        default=2,
        gt=0,
        description="Base damage gains level // divisor.",
    )
    speed_modifiers: dict[ActionKind, int] = Field(
        default_factory=_default_speed_modifiers,
        description="Speed modifier applied next round, by last action kind.",
    )
    minimum_speed: int = Field(
        default=1,
        gt=0,
        description="Lower bound of the effective speed.",
    )
    unarmed_accuracy: int = Field(
        default=60,
        description="Accuracy used when no weapon is equipped.",
    )
    unarmed_crit_chance: int = Field(
        default=2,
        description="Critical chance used when no weapon is equipped.",
    )
    unarmed_damage: tuple[int, int] = Field(
        default=(1, 3),
        description="Damage range used when no weapon is equipped.",
    )
    defend_damage_multiplier: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Incoming damage multiplier while defending.",
    )
    max_damage_reduction_percent: int = Field(
        default=90,
        ge=0,
        le=100,
        description="Cap on the sum of percentage damage reductions.",
    )
    flee_chance: int = Field(
        default=30,
        ge=0,
        le=100,
        description="Percentage chance that a flee attempt succeeds.",
    )
    max_ability_level: int = Field(
        default=100,
        gt=1,
        description="Highest level an ability can reach.",
    )

    def model_post_init(self, _: Any) -> None:
        low, high = self.unarmed_damage
        if low > high:
            raise ValueError("unarmed_damage must be a (min, max) pair with min <= max.")
        # Fill in any action kind missing from a partial configuration.
        for kind, value in _default_speed_modifiers().items():
            self.speed_modifiers.setdefault(kind, value)

    def speed_modifier_for(self, kind: ActionKind) -> int:
        """Returns the speed modifier for a combatant whose last action was kind."""
        return self.speed_modifiers.get(kind, 0)


def load_config(path: Path) -> CombatConfig:
    """
    Load a combat configuration from a JSON file.

    Args:
        path (Path):
            The JSON file to read.

    Returns:
        CombatConfig:
            The loaded configuration, or the defaults if the file is missing.

    Raises:
        ValueError:
            If the file exists but is not valid JSON or fails validation.

    """
    if not path.exists():
        log_warning(
            f"Configuration file not found, using defaults: {path}",
            {"path": str(path)},
        )
        return CombatConfig()
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"File {path} raised an error: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Expected object in {path}, got {type(data).__name__}")
    return CombatConfig(**data)


def save_config(config: CombatConfig, path: Path) -> None:
    """Write a combat configuration to a JSON file."""
    with open(path, "w", encoding="utf-8") as f:
        f.write(config.model_dump_json(indent=2))
