"""
Effects package for the combat core.

Contains effect definitions, the live active effect instances, the engine
driving their lifecycle, the events they emit and their serialization.
"""

from .base_effect import ActiveEffect, Effect
from .effect_engine import EffectEngine
from .effect_factory import EffectFactory
from .effect_serializer import (
    EffectSnapshot,
    restore_effects,
    snapshot_effects,
)
from .event_system import (
    AttackEvent,
    CombatEvent,
    EffectEvent,
    EventDispatcher,
    EventType,
    HealthEvent,
    RoundEvent,
)

__all__ = [
    "ActiveEffect",
    "Effect",
    "EffectEngine",
    "EffectFactory",
    "EffectSnapshot",
    "restore_effects",
    "snapshot_effects",
    "AttackEvent",
    "CombatEvent",
    "EffectEvent",
    "EventDispatcher",
    "EventType",
    "HealthEvent",
    "RoundEvent",
]
