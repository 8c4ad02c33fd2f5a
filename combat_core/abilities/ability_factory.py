"""
Factory module for the built-in abilities.

Every ability of the game is expressed as an AbilityDefinition. Use
``create_ability`` to obtain a live Ability at a given level.
"""

from typing import Any

from combat_core.core.constants import (
    AbilityRarity,
    AbilityTarget,
    AbilityType,
    PassiveBonus,
    WeaponType,
)
from combat_core.effects import effect_factory

from .base_ability import Ability, AbilityDefinition
from .scaling import LinearScaling, StepScaling, TierScaling


def _linear(low: float, high: float, rounding: str = "round") -> LinearScaling:
    return LinearScaling(low=low, high=high, rounding=rounding)


# === Active abilities ===

ATTACK_BOOST = AbilityDefinition(
    name="Attack Boost",
    description="Increase your attack damage for 3 turns.",
    rarity=AbilityRarity.COMMON,
    cooldown=5,
    effect=effect_factory.attack_boost(1),
    effect_scaling={"DAMAGE_PERCENT": _linear(1, 70, "floor")},
    effect_on_self=True,
)

DEFENSE_BOOST = AbilityDefinition(
    name="Defense Boost",
    description="Harden your defenses, reducing incoming damage for 3 turns.",
    rarity=AbilityRarity.COMMON,
    cooldown=5,
    effect=effect_factory.defense_boost(1),
    effect_scaling={"DAMAGE_REDUCTION_PERCENT": _linear(1, 60, "floor")},
    effect_on_self=True,
)

CRITICAL_STRIKE = AbilityDefinition(
    name="Critical Strike",
    description="Focus to raise your critical hit chance for 3 turns.",
    rarity=AbilityRarity.UNCOMMON,
    cooldown=4,
    reduces_cooldown_with_level=False,
    effect=effect_factory.critical_focus(1),
    effect_scaling={"CRIT_CHANCE": _linear(1, 50, "floor")},
    effect_on_self=True,
)

HEAL = AbilityDefinition(
    name="Heal",
    description="Restore your own health.",
    rarity=AbilityRarity.COMMON,
    cooldown=4,
    healing=(_linear(10, 100), _linear(20, 150)),
)

POISON_ATTACK = AbilityDefinition(
    name="Poison Attack",
    description="A venomous strike that poisons the target.",
    target=AbilityTarget.SINGLE_ENEMY,
    rarity=AbilityRarity.UNCOMMON,
    cooldown=3,
    reduces_cooldown_with_level=False,
    weapon_attack=True,
    effect=effect_factory.poison(1),
    effect_scaling={
        "damage_min": StepScaling(base=2, divisor=10),
        "damage_max": StepScaling(base=4, divisor=5),
        "potency": StepScaling(base=2, divisor=10),
        "duration": StepScaling(base=3, divisor=50),
    },
)

RAGE = AbilityDefinition(
    name="Rage",
    description="Enter a furious rage, trading defense for damage.",
    rarity=AbilityRarity.UNCOMMON,
    cooldown=5,
    reduces_cooldown_with_level=False,
    effect=effect_factory.rage(1),
    effect_scaling={
        "DAMAGE_PERCENT": StepScaling(base=20, multiplier=60, divisor=99),
        "DAMAGE_REDUCTION_PERCENT": StepScaling(base=-10, multiplier=-30, divisor=99),
        "duration": StepScaling(base=3, divisor=50),
    },
    effect_on_self=True,
)

DIVINE_LIGHT = AbilityDefinition(
    name="Divine Light",
    description="Heal an ally and cleanse their debuffs.",
    target=AbilityTarget.SINGLE_ALLY,
    rarity=AbilityRarity.RARE,
    cooldown=4,
    healing=(
        StepScaling(base=20, multiplier=2),
        StepScaling(base=35, multiplier=2),
    ),
    cleanse=True,
)

HEALING_AURA = AbilityDefinition(
    name="Healing Aura",
    description="Surround an ally with regenerating light.",
    target=AbilityTarget.SINGLE_ALLY,
    rarity=AbilityRarity.UNCOMMON,
    cooldown=3,
    effect=effect_factory.healing_aura(1),
    effect_scaling={"potency": StepScaling(base=5, divisor=5)},
)

# === Passive abilities ===

EVASION = AbilityDefinition(
    name="Evasion",
    description="Chance to completely avoid an attack, unless defending.",
    ability_type=AbilityType.PASSIVE,
    rarity=AbilityRarity.EPIC,
    passive=PassiveBonus.EVASION,
    passive_values={"chance": _linear(1, 60)},
)

PRECISION_TRAINING = AbilityDefinition(
    name="Precision Training",
    description="Raises the accuracy of the whole party.",
    ability_type=AbilityType.PASSIVE,
    target=AbilityTarget.ALL_ALLIES,
    rarity=AbilityRarity.EPIC,
    passive=PassiveBonus.PARTY_ACCURACY,
    passive_values={"accuracy": _linear(1, 30)},
)

RALLYING_CRY = AbilityDefinition(
    name="Rallying Cry",
    description="Companions deal more damage.",
    ability_type=AbilityType.PASSIVE,
    target=AbilityTarget.ALL_ALLIES,
    rarity=AbilityRarity.RARE,
    passive=PassiveBonus.COMPANION_DAMAGE,
    passive_values={"damage": _linear(5, 90)},
)

SWIFT_TACTICS = AbilityDefinition(
    name="Swift Tactics",
    description="Companions act faster.",
    ability_type=AbilityType.PASSIVE,
    target=AbilityTarget.ALL_ALLIES,
    rarity=AbilityRarity.EPIC,
    passive=PassiveBonus.COMPANION_SPEED,
    passive_values={"speed": _linear(2, 50)},
)

IRON_WILL = AbilityDefinition(
    name="Iron Will",
    description="Chance to shake off negative effects at the end of each round.",
    ability_type=AbilityType.PASSIVE,
    rarity=AbilityRarity.EPIC,
    passive=PassiveBonus.END_OF_ROUND_CLEANSE,
    passive_values={"chance": _linear(1, 25)},
)

LEADERSHIP = AbilityDefinition(
    name="Leadership",
    description="Unlocks a larger party at level milestones.",
    ability_type=AbilityType.PASSIVE,
    rarity=AbilityRarity.RARE,
    passive=PassiveBonus.LEADERSHIP,
    passive_values={"tier": TierScaling(thresholds=[25, 50, 75, 100])},
)

EXECUTIONER = AbilityDefinition(
    name="Executioner",
    description="Fewer but devastating critical hits at low level, both at high level.",
    ability_type=AbilityType.PASSIVE,
    rarity=AbilityRarity.LEGENDARY,
    passive=PassiveBonus.CRITICAL,
    passive_values={
        "crit_chance": _linear(-10, 10),
        "crit_multiplier": _linear(1.1, 3.0, "none"),
    },
)


def _mastery(name: str, weapon_type: WeaponType) -> AbilityDefinition:
    return AbilityDefinition(
        name=name,
        description=f"Accuracy, damage and critical chance with a {weapon_type.display_name.lower()}.",
        ability_type=AbilityType.PASSIVE,
        rarity=AbilityRarity.RARE,
        passive=PassiveBonus.WEAPON_MASTERY,
        weapon_type=weapon_type,
        passive_values={
            "accuracy": _linear(1, 40),
            "damage": _linear(1, 70),
            "crit_chance": _linear(1, 25),
        },
    )


SPEAR_MASTERY = _mastery("Spear Mastery", WeaponType.SPEAR)
AXE_MASTERY = _mastery("Axe Mastery", WeaponType.AXE)
CROSSBOW_MASTERY = _mastery("Crossbow Mastery", WeaponType.CROSSBOW)


ABILITY_DEFINITIONS: dict[str, AbilityDefinition] = {
    definition.name: definition
    for definition in (
        ATTACK_BOOST,
        DEFENSE_BOOST,
        CRITICAL_STRIKE,
        HEAL,
        POISON_ATTACK,
        RAGE,
        DIVINE_LIGHT,
        HEALING_AURA,
        EVASION,
        PRECISION_TRAINING,
        RALLYING_CRY,
        SWIFT_TACTICS,
        IRON_WILL,
        LEADERSHIP,
        EXECUTIONER,
        SPEAR_MASTERY,
        AXE_MASTERY,
        CROSSBOW_MASTERY,
    )
}


def create_ability(
    name: str,
    level: int = 1,
    definitions: dict[str, AbilityDefinition] | None = None,
    max_level: int | None = None,
    **kwargs: Any,
) -> Ability:
    """
    Create a live ability from its definition name.

    Args:
        name (str):
            Name of the ability.
        level (int):
            Starting level.
        definitions (dict[str, AbilityDefinition] | None):
            Catalog to look the name up in, the built-in one by default.
        max_level (int | None):
            Level cap, usually CombatConfig.max_ability_level. The Ability
            default applies when omitted.
        **kwargs:
            Extra Ability fields such as experience or current_cooldown.

    Returns:
        Ability:
            The new ability.

    Raises:
        KeyError:
            If no ability has the given name.

    """
    catalog = definitions if definitions is not None else ABILITY_DEFINITIONS
    if name not in catalog:
        raise KeyError(f"Unknown ability: {name}")
    if max_level is not None:
        kwargs["max_level"] = max_level
    return Ability(definition=catalog[name], level=level, **kwargs)
