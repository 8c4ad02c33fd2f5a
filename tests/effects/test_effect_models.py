"""
Tests for effect definitions, the effect factory and effect snapshots.
"""

import pytest
from pydantic import ValidationError

from combat_core.core.constants import EffectKind, EffectStat
from combat_core.effects import effect_factory
from combat_core.effects.base_effect import ActiveEffect, Effect
from combat_core.effects.effect_factory import EffectFactory
from combat_core.effects.effect_serializer import (
    EffectSnapshot,
    restore_effects,
    snapshot_effects,
)


def test_effect_is_read_only():
    effect = effect_factory.haste(3, 2)
    with pytest.raises(ValidationError):
        effect.duration = 10


@pytest.mark.parametrize("duration", [0, -1])
def test_effect_requires_positive_duration(duration):
    with pytest.raises(ValueError):
        Effect(name="Broken", kind=EffectKind.BUFF, duration=duration)


def test_damage_range_only_for_damage_over_time():
    with pytest.raises(ValueError):
        Effect(name="Odd", kind=EffectKind.BUFF, duration=2, damage_range=(1, 2))


def test_non_stacking_effect_rejects_max_stacks():
    with pytest.raises(ValueError):
        Effect(name="Odd", kind=EffectKind.BUFF, duration=2, max_stacks=3)


def test_active_effect_modifier_scales_with_stacks():
    active = ActiveEffect(effect=effect_factory.bleed(2, 3), remaining=3, stack_count=3)
    assert active.magnitude == 6
    assert active.modifier(EffectStat.SPEED) == 0


def test_active_effect_non_stacking_count_must_be_one():
    with pytest.raises(ValueError):
        ActiveEffect(effect=effect_factory.haste(1, 1), remaining=1, stack_count=2)


def test_negative_kinds():
    assert effect_factory.bleed(1, 1).is_negative
    assert effect_factory.stun().is_negative
    assert effect_factory.weakness(5, 1).is_negative
    assert not effect_factory.regeneration(2, 2).is_negative
    assert not effect_factory.time_limit(3).is_negative


def test_poison_scales_with_level():
    """
    Test the poison range and duration at low and high enemy level.
    """
    low = effect_factory.poison(1)
    assert low.damage_range == (2, 4)
    assert low.duration == 3
    high = effect_factory.poison(100)
    assert high.damage_range == (12, 24)
    assert high.duration == 5
    assert high.stackable


def test_rage_modifies_two_stats():
    rage = effect_factory.rage(99)
    assert rage.modifiers[EffectStat.DAMAGE_PERCENT] == 80
    assert rage.modifiers[EffectStat.DAMAGE_REDUCTION_PERCENT] == -40


def test_factory_builds_known_type():
    effect = EffectFactory.from_dict({"type": "Burning", "potency": 5, "duration": 2})
    assert effect.name == "Burning"
    assert effect.damage_range == (3, 7)


def test_factory_builds_stun():
    effect = EffectFactory.from_dict({"type": "Stunned", "duration": 2})
    assert effect.prevents_action
    assert effect.duration == 2


def test_factory_full_definition():
    effect = EffectFactory.from_dict(
        {
            "name": "Iron Skin",
            "kind": "BUFF",
            "modifiers": {"DAMAGE_REDUCTION_FLAT": 3},
            "duration": 4,
        }
    )
    assert effect.modifiers == {EffectStat.DAMAGE_REDUCTION_FLAT: 3}


def test_factory_unknown_type():
    with pytest.raises(ValueError):
        EffectFactory.from_dict({"type": "Frozen", "potency": 1, "duration": 1})


def test_snapshot_round_trip():
    """
    Test that an effect list survives a snapshot, preserving type, remaining
    duration, stack count and order.
    """
    effects = [
        ActiveEffect(effect=effect_factory.bleed(3, 4), remaining=2, stack_count=3, source="Goblin"),
        ActiveEffect(effect=effect_factory.haste(2, 5), remaining=5),
        ActiveEffect(effect=effect_factory.time_limit(6), remaining=4),
    ]
    snapshots = snapshot_effects(effects)
    payload = [snapshot.model_dump_json() for snapshot in snapshots]
    restored = restore_effects(EffectSnapshot.model_validate_json(p) for p in payload)

    assert [(ae.name, ae.remaining, ae.stack_count) for ae in restored] == [
        ("Bleeding", 2, 3),
        ("Haste", 5, 1),
        ("Time Limit", 4, 1),
    ]
    assert restored[0].source == "Goblin"
    assert restored[2].effect.then_apply.name == "Enraged"


def test_snapshot_without_definition_uses_catalog():
    bleed = effect_factory.bleed(3, 4)
    snapshots = snapshot_effects(
        [ActiveEffect(effect=bleed, remaining=1)], include_definition=False
    )
    assert snapshots[0].definition is None
    restored = restore_effects(snapshots, {"Bleeding": bleed})
    assert restored[0].effect == bleed


def test_snapshot_without_definition_or_catalog_fails():
    snapshot = EffectSnapshot(effect_type="Mystery", remaining=1)
    with pytest.raises(ValueError):
        restore_effects([snapshot])
