"""
Tests for the action resolver.

Rolls are scripted in the order the resolver draws them: accuracy, damage,
critical, then evasion when the target can evade.
"""

import pytest

from combat_core.abilities import create_ability
from combat_core.abilities.base_ability import Ability, AbilityDefinition
from combat_core.combat.action_resolver import ActionResolver
from combat_core.core.constants import ActionKind, EffectStat
from combat_core.core.errors import (
    AbilityNotActivatable,
    AbilityOnCooldown,
    InsufficientResource,
    InvalidTarget,
)
from combat_core.effects import effect_factory
from combat_core.effects.event_system import EventType
from combat_core.items.consumable import Consumable
from combat_core.items.weapon import Weapon


@pytest.fixture
def resolver(provider, effect_engine, config):
    return ActionResolver(provider, effect_engine, config)


def event_types(outcome):
    return [event.event_type for event in outcome.events]


def push_sword_hit(scripted, accuracy=50, damage=12, critical=90):
    scripted.push_roll(accuracy)
    scripted.push_roll(damage, minimum=10)
    scripted.push_roll(critical)


# === Attacks ===


def test_attack_hits(scripted, resolver, hero, goblin):
    """
    Test a plain hit: 12 rolled + level 10 // 2 = 17 damage.
    """
    push_sword_hit(scripted)
    outcome = resolver.resolve(hero, ActionKind.ATTACK, goblin)

    assert outcome.hit
    assert outcome.damage == 17
    assert goblin.health == 23
    assert event_types(outcome) == [EventType.HIT, EventType.DAMAGE_TAKEN]
    hit = outcome.hits[0]
    assert hit.accuracy == 80
    assert hit.accuracy_roll == 50
    assert hit.breakdown.raw == 17


def test_attack_misses_above_accuracy(scripted, resolver, hero, goblin):
    scripted.push_roll(81)
    outcome = resolver.resolve(hero, ActionKind.ATTACK, goblin)
    assert not outcome.hit
    assert goblin.health == 40
    assert event_types(outcome) == [EventType.MISS]


def test_accuracy_roll_equal_to_accuracy_hits(scripted, resolver, hero, goblin):
    push_sword_hit(scripted, accuracy=80)
    assert resolver.resolve(hero, ActionKind.ATTACK, goblin).hit


def test_critical_hit(scripted, resolver, hero, goblin):
    push_sword_hit(scripted, accuracy=1, damage=14, critical=10)
    outcome = resolver.resolve(hero, ActionKind.ATTACK, goblin)
    assert outcome.hits[0].critical
    assert outcome.damage == 28
    assert goblin.health == 12
    assert EventType.CRITICAL_HIT in event_types(outcome)


def test_evaded_attack_still_counts_as_hit(scripted, resolver, hero, goblin):
    """
    Test that an evaded attack is a hit that deals no damage.
    """
    goblin.abilities.add(create_ability("Evasion", level=50))
    assert resolver.evasion_chance(goblin) == 30
    push_sword_hit(scripted)
    scripted.push_roll(30)
    outcome = resolver.resolve(hero, ActionKind.ATTACK, goblin)

    assert outcome.hit
    assert outcome.hits[0].evaded
    assert outcome.damage == 0
    assert goblin.health == 40
    assert event_types(outcome) == [EventType.HIT, EventType.EVADE]


def test_failed_evasion_takes_damage(scripted, resolver, hero, goblin):
    goblin.abilities.add(create_ability("Evasion", level=50))
    push_sword_hit(scripted)
    scripted.push_roll(31)
    outcome = resolver.resolve(hero, ActionKind.ATTACK, goblin)
    assert outcome.damage == 17


def test_defending_target_cannot_evade_and_takes_half(scripted, resolver, hero, goblin):
    goblin.abilities.add(create_ability("Evasion", level=100))
    goblin.is_defending = True
    push_sword_hit(scripted)
    outcome = resolver.resolve(hero, ActionKind.ATTACK, goblin)
    assert outcome.hits[0].evasion_roll is None
    assert outcome.damage == 8


def test_lethal_hit_emits_death(scripted, resolver, hero, goblin):
    goblin.health = 5
    push_sword_hit(scripted)
    outcome = resolver.resolve(hero, ActionKind.ATTACK, goblin)
    assert outcome.damage == 5
    assert not goblin.is_alive()
    assert event_types(outcome)[-1] == EventType.DEATH


def test_damage_buff_increases_damage(scripted, resolver, effect_engine, hero, goblin):
    effect_engine.add_effect(hero, effect_factory.attack_boost(70))
    push_sword_hit(scripted)
    outcome = resolver.resolve(hero, ActionKind.ATTACK, goblin)
    # 17 * 1.7 = 28.9
    assert outcome.damage == 28


def test_weapon_on_hit_effects(scripted, resolver, hero, goblin, sword):
    hero.weapon = sword.model_copy(update={"on_hit_effects": [effect_factory.bleed(2, 2)]})
    push_sword_hit(scripted)
    resolver.resolve(hero, ActionKind.ATTACK, goblin)
    assert goblin.effects.has("Bleeding")


def test_weapon_on_hit_effects_skipped_on_miss(scripted, resolver, hero, goblin, sword):
    hero.weapon = sword.model_copy(update={"on_hit_effects": [effect_factory.bleed(2, 2)]})
    scripted.push_roll(95)
    resolver.resolve(hero, ActionKind.ATTACK, goblin)
    assert not goblin.effects.has("Bleeding")


def test_attack_clears_defending(scripted, resolver, hero, goblin):
    hero.is_defending = True
    scripted.push_roll(99)
    resolver.resolve(hero, ActionKind.ATTACK, goblin)
    assert not hero.is_defending


# === Derived values ===


def test_unarmed_values(resolver, config, goblin):
    goblin.accuracy = None
    goblin.crit_chance = None
    goblin.damage_range = None
    assert resolver.accuracy(goblin) == config.unarmed_accuracy
    assert resolver.crit_chance(goblin) == config.unarmed_crit_chance
    assert resolver.damage_range(goblin) == config.unarmed_damage


def test_party_accuracy_passive(resolver, hero, companion, goblin):
    hero.abilities.add(create_ability("Precision Training", level=100))
    everyone = [hero, companion, goblin]
    assert resolver.accuracy(hero, everyone) == 110
    assert resolver.accuracy(companion, everyone) == 100
    assert resolver.accuracy(goblin, everyone) == 70


def test_rallying_cry_only_for_companions(resolver, hero, companion):
    hero.abilities.add(create_ability("Rallying Cry", level=1))
    party = [hero, companion]
    assert resolver.damage_percent(companion, party) == 5
    assert resolver.damage_percent(hero, party) == 0


def test_executioner_changes_crit(resolver, hero):
    hero.abilities.add(create_ability("Executioner", level=100))
    assert resolver.crit_chance(hero) == 20
    assert hero.abilities.crit_multiplier(1.5) == pytest.approx(3.0)


def test_weapon_mastery_matches_weapon_type(resolver, hero):
    hero.abilities.add(create_ability("Spear Mastery", level=100))
    assert resolver.accuracy(hero) == 80
    hero.weapon = Weapon(name="Spear", weapon_type="SPEAR", min_damage=8, max_damage=12, accuracy=80)
    assert resolver.accuracy(hero) == 120
    assert resolver.damage_percent(hero) == 70


def test_blind_lowers_accuracy(resolver, effect_engine, hero):
    effect_engine.add_effect(hero, effect_factory.blind(30, 2))
    assert resolver.accuracy(hero) == 50


# === Targeting and errors ===


def test_attack_ally_is_invalid(resolver, hero, companion):
    with pytest.raises(InvalidTarget):
        resolver.resolve(hero, ActionKind.ATTACK, companion)


def test_attack_without_target_is_invalid(resolver, hero):
    with pytest.raises(InvalidTarget):
        resolver.resolve(hero, ActionKind.ATTACK)


def test_attack_dead_target_is_invalid(resolver, hero, goblin):
    goblin.health = 0
    with pytest.raises(InvalidTarget):
        resolver.resolve(hero, ActionKind.ATTACK, goblin)


def test_dead_actor_cannot_act(resolver, hero, goblin):
    hero.health = 0
    with pytest.raises(InvalidTarget):
        resolver.resolve(hero, ActionKind.ATTACK, goblin)


def test_incapacitated_actor_loses_turn(resolver, effect_engine, hero, goblin):
    """
    Test that a stunned actor draws nothing and drops its stance.
    """
    effect_engine.add_effect(goblin, effect_factory.stun())
    goblin.is_defending = True
    outcome = resolver.resolve(goblin, ActionKind.ATTACK, hero)
    assert outcome.incapacitated
    assert outcome.hits == []
    assert not goblin.is_defending
    assert hero.health == 100


# === Abilities ===


def test_self_buff_ability(resolver, hero):
    hero.abilities.add(create_ability("Attack Boost", level=100))
    outcome = resolver.resolve(hero, ActionKind.ABILITY, ability="Attack Boost")
    assert outcome.ability == "Attack Boost"
    assert outcome.experience == 10
    assert hero.effects.modifier_total(EffectStat.DAMAGE_PERCENT) == 70
    assert hero.abilities.get("Attack Boost").current_cooldown == 3


def test_ability_on_cooldown(resolver, hero):
    hero.abilities.add(create_ability("Attack Boost"))
    resolver.resolve(hero, ActionKind.ABILITY, ability="Attack Boost")
    with pytest.raises(AbilityOnCooldown):
        resolver.resolve(hero, ActionKind.ABILITY, ability="Attack Boost")


def test_passive_is_not_activatable(resolver, hero):
    hero.abilities.add(create_ability("Evasion"))
    with pytest.raises(AbilityNotActivatable):
        resolver.resolve(hero, ActionKind.ABILITY, ability="Evasion")


def test_unknown_ability_name(resolver, hero):
    with pytest.raises(KeyError):
        resolver.resolve(hero, ActionKind.ABILITY, ability="Meteor")


def test_insufficient_mana_changes_nothing(resolver, hero):
    """
    Test that an unaffordable ability leaves mana, cooldown and effects
    untouched.
    """
    expensive = Ability(
        definition=AbilityDefinition(
            name="Mighty Focus",
            cost=60,
            cooldown=2,
            effect=effect_factory.critical_focus(20),
            effect_on_self=True,
        )
    )
    with pytest.raises(InsufficientResource):
        resolver.resolve(hero, ActionKind.ABILITY, ability=expensive)
    assert hero.mana == 50
    assert expensive.current_cooldown == 0
    assert len(hero.effects) == 0


def test_ability_cost_is_paid(resolver, hero):
    focus = Ability(
        definition=AbilityDefinition(
            name="Focus",
            cost=20,
            effect=effect_factory.critical_focus(20),
        )
    )
    resolver.resolve(hero, ActionKind.ABILITY, ability=focus)
    assert hero.mana == 30
    assert hero.effects.has("Critical Focus")


def test_self_ability_rejects_other_target(resolver, hero, goblin):
    hero.abilities.add(create_ability("Rage"))
    with pytest.raises(InvalidTarget):
        resolver.resolve(hero, ActionKind.ABILITY, goblin, ability="Rage")
    assert hero.abilities.get("Rage").current_cooldown == 0


def test_heal_ability(scripted, resolver, hero):
    hero.health = 50
    hero.abilities.add(create_ability("Heal"))
    scripted.push_roll(15, minimum=10)
    outcome = resolver.resolve(hero, ActionKind.ABILITY, ability="Heal")
    assert hero.health == 65
    assert outcome.total_healing == 15


def test_poison_attack_applies_poison_on_hit(scripted, resolver, hero, goblin):
    hero.abilities.add(create_ability("Poison Attack"))
    push_sword_hit(scripted)
    outcome = resolver.resolve(hero, ActionKind.ABILITY, goblin, ability="Poison Attack")
    assert outcome.damage == 17
    poison = goblin.effects.get("Poisoned")
    assert poison is not None
    assert poison.effect.damage_range == (2, 4)
    assert poison.remaining == 3


def test_poison_attack_miss_applies_nothing(scripted, resolver, hero, goblin):
    hero.abilities.add(create_ability("Poison Attack"))
    scripted.push_roll(100)
    resolver.resolve(hero, ActionKind.ABILITY, goblin, ability="Poison Attack")
    assert not goblin.effects.has("Poisoned")
    assert hero.abilities.get("Poison Attack").current_cooldown == 3


def test_poison_attack_needs_enemy(resolver, hero, companion):
    hero.abilities.add(create_ability("Poison Attack"))
    with pytest.raises(InvalidTarget):
        resolver.resolve(hero, ActionKind.ABILITY, companion, ability="Poison Attack")


def test_divine_light_heals_and_cleanses_ally(scripted, resolver, effect_engine, hero, companion):
    """
    Test that the ally heal rolls once and removes only negative effects.
    """
    companion.health = 20
    effect_engine.add_effect(companion, effect_factory.bleed(3, 3))
    effect_engine.add_effect(companion, effect_factory.haste(2, 3))
    hero.abilities.add(create_ability("Divine Light"))
    scripted.push_roll(30, minimum=22)

    outcome = resolver.resolve(hero, ActionKind.ABILITY, companion, ability="Divine Light")
    assert companion.health == 50
    assert outcome.healing == {"Lili": 30}
    assert [ae.name for ae in companion.effects] == ["Haste"]


def test_second_use_in_combat_gives_more_experience(resolver, hero):
    hero.abilities.add(create_ability("Attack Boost"))
    ability = hero.abilities.get("Attack Boost")
    resolver.resolve(hero, ActionKind.ABILITY, ability=ability)
    ability.current_cooldown = 0
    outcome = resolver.resolve(hero, ActionKind.ABILITY, ability=ability)
    assert outcome.experience == 12
    assert ability.experience == 22


# === Items ===


def test_healing_potion(resolver, hero):
    hero.health = 50
    outcome = resolver.resolve(hero, ActionKind.ITEM, item=Consumable(name="Potion", heal=30))
    assert hero.health == 80
    assert outcome.item == "Potion"
    assert outcome.healing == {"Bell": 30}


def test_bomb_skips_accuracy_and_mitigation(resolver, hero, goblin):
    goblin.is_defending = True
    bomb = Consumable(name="Bomb", damage=15)
    outcome = resolver.resolve(hero, ActionKind.ITEM, goblin, item=bomb)
    assert goblin.health == 25
    assert outcome.damage == 15


def test_bomb_on_ally_is_invalid(resolver, hero, companion):
    with pytest.raises(InvalidTarget):
        resolver.resolve(hero, ActionKind.ITEM, companion, item=Consumable(name="Bomb", damage=15))


def test_revive_item(resolver, hero, companion):
    companion.health = 0
    feather = Consumable(name="Phoenix Feather", revive_percent=50)
    outcome = resolver.resolve(hero, ActionKind.ITEM, companion, item=feather)
    assert companion.health == 30
    assert outcome.healing == {"Lili": 30}


def test_revive_living_target_is_invalid(resolver, hero, companion):
    feather = Consumable(name="Phoenix Feather", revive_percent=50)
    with pytest.raises(InvalidTarget):
        resolver.resolve(hero, ActionKind.ITEM, companion, item=feather)


def test_item_effects_and_cleanse(resolver, effect_engine, hero):
    effect_engine.add_effect(hero, effect_factory.weakness(20, 3))
    elixir = Consumable(name="Elixir", cleanse=True, effects=[effect_factory.strength_boost(5, 3)])
    resolver.resolve(hero, ActionKind.ITEM, item=elixir)
    assert [ae.name for ae in hero.effects] == ["Strength Boost"]


# === Defend and flee ===


def test_defend(resolver, hero):
    resolver.resolve(hero, ActionKind.DEFEND)
    assert hero.is_defending


@pytest.mark.parametrize("roll, fled", [(1, True), (30, True), (31, False), (100, False)])
def test_flee(scripted, resolver, hero, roll, fled):
    scripted.push_roll(roll)
    outcome = resolver.resolve(hero, ActionKind.FLEE)
    assert outcome.flee_roll == roll
    assert outcome.fled is fled
