"""
Abilities package for the combat core.

Contains the ability definitions, the live ability state with leveling and
cooldowns, level scaling and the catalog of built-in abilities.
"""

from .ability_factory import ABILITY_DEFINITIONS, create_ability
from .base_ability import Ability, AbilityDefinition
from .scaling import (
    LinearScaling,
    Scaling,
    StepScaling,
    TierScaling,
    scaled_int,
    scaled_value,
)

__all__ = [
    "ABILITY_DEFINITIONS",
    "create_ability",
    "Ability",
    "AbilityDefinition",
    "LinearScaling",
    "Scaling",
    "StepScaling",
    "TierScaling",
    "scaled_int",
    "scaled_value",
]
