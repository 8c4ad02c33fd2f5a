"""
Core module for the combat core.

Contains the constants, the configuration, the error taxonomy and the
logging setup shared by every other package. Content loading lives in
``combat_core.core.content``.
"""

from .config import CombatConfig, load_config, save_config
from .constants import (
    AbilityRarity,
    AbilityTarget,
    AbilityType,
    ActionKind,
    ArmorType,
    CombatantType,
    CombatResolution,
    EffectKind,
    EffectStat,
    PassiveBonus,
    WeaponType,
    is_opponent,
)
from .errors import (
    AbilityNotActivatable,
    AbilityOnCooldown,
    CombatError,
    EmptyActSequence,
    InsufficientResource,
    InvalidDistribution,
    InvalidRange,
    InvalidTarget,
    UnknownAlgorithm,
)
from .logging import get_logger, setup_logging

__all__ = [
    # Import from config.py
    "CombatConfig",
    "load_config",
    "save_config",
    # Import from constants.py
    "AbilityRarity",
    "AbilityTarget",
    "AbilityType",
    "ActionKind",
    "ArmorType",
    "CombatantType",
    "CombatResolution",
    "EffectKind",
    "EffectStat",
    "PassiveBonus",
    "WeaponType",
    "is_opponent",
    # Import from errors.py
    "AbilityNotActivatable",
    "AbilityOnCooldown",
    "CombatError",
    "EmptyActSequence",
    "InsufficientResource",
    "InvalidDistribution",
    "InvalidRange",
    "InvalidTarget",
    "UnknownAlgorithm",
    # Import from logging.py
    "get_logger",
    "setup_logging",
]
