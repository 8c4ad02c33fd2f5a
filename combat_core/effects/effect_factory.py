"""
Factory module for creating Effect definitions.

Builds the effects used by abilities, consumables and bosses. Level-scaled
effects take the level of the ability or enemy that produces them.
"""

from typing import Any

from combat_core.core.constants import EffectKind, EffectStat

from .base_effect import Effect


# === Consumable effects ===


def strength_boost(potency: int, duration: int) -> Effect:
    """Flat bonus added to outgoing damage."""
    return Effect(
        name="Strength Boost",
        description=f"+{potency} damage",
        kind=EffectKind.BUFF,
        modifiers={EffectStat.DAMAGE_FLAT: potency},
        duration=duration,
    )


def resistance(potency: int, duration: int) -> Effect:
    """Flat reduction of incoming damage."""
    return Effect(
        name="Resistance",
        description=f"-{potency} damage taken",
        kind=EffectKind.BUFF,
        modifiers={EffectStat.DAMAGE_REDUCTION_FLAT: potency},
        duration=duration,
    )


def regeneration(potency: int, duration: int) -> Effect:
    """Heals potency at the start of each turn."""
    return Effect(
        name="Regeneration",
        description=f"Regenerates {potency} HP each turn",
        kind=EffectKind.HEAL_OVER_TIME,
        potency=potency,
        duration=duration,
    )


def haste(potency: int, duration: int) -> Effect:
    """Speed bonus read by the turn scheduler."""
    return Effect(
        name="Haste",
        description=f"+{potency} speed",
        kind=EffectKind.BUFF,
        modifiers={EffectStat.SPEED: potency},
        duration=duration,
    )


def burn(potency: int, duration: int) -> Effect:
    """Stacking fire damage rolled around the potency each turn."""
    return Effect(
        name="Burning",
        description=f"Takes {max(1, potency - 2)}-{potency + 2} fire damage each turn",
        kind=EffectKind.DAMAGE_OVER_TIME,
        potency=potency,
        damage_range=(max(1, potency - 2), potency + 2),
        stackable=True,
        duration=duration,
    )


def bleed(potency: int, duration: int) -> Effect:
    """Stacking fixed damage each turn."""
    return Effect(
        name="Bleeding",
        description=f"Takes {potency} damage per stack each turn",
        kind=EffectKind.DAMAGE_OVER_TIME,
        potency=potency,
        stackable=True,
        duration=duration,
    )


def stun(duration: int = 1, accuracy_penalty: int = 0) -> Effect:
    """Crowd control preventing the afflicted combatant from acting."""
    modifiers = {EffectStat.ACCURACY: -accuracy_penalty} if accuracy_penalty else {}
    return Effect(
        name="Stunned",
        description="Cannot act",
        kind=EffectKind.CROWD_CONTROL,
        modifiers=modifiers,
        prevents_action=True,
        duration=duration,
    )


def weakness(potency: int, duration: int) -> Effect:
    """Percentage reduction of outgoing damage."""
    return Effect(
        name="Weakened",
        description=f"-{potency}% damage",
        kind=EffectKind.DEBUFF,
        modifiers={EffectStat.DAMAGE_PERCENT: -potency},
        duration=duration,
    )


def blind(potency: int, duration: int) -> Effect:
    """Accuracy penalty."""
    return Effect(
        name="Blinded",
        description=f"-{potency} accuracy",
        kind=EffectKind.CROWD_CONTROL,
        modifiers={EffectStat.ACCURACY: -potency},
        duration=duration,
    )


# === Ability effects ===


def attack_boost(percent: int, duration: int = 3) -> Effect:
    return Effect(
        name="Attack Boost",
        description=f"Attack damage increased by {percent}%",
        kind=EffectKind.BUFF,
        modifiers={EffectStat.DAMAGE_PERCENT: percent},
        duration=duration,
    )


def defense_boost(percent: int, duration: int = 3) -> Effect:
    return Effect(
        name="Defense Boost",
        description=f"Damage taken reduced by {percent}%",
        kind=EffectKind.BUFF,
        modifiers={EffectStat.DAMAGE_REDUCTION_PERCENT: percent},
        duration=duration,
    )


def critical_focus(percent: int, duration: int = 3) -> Effect:
    return Effect(
        name="Critical Focus",
        description=f"Critical hit chance increased by {percent}%",
        kind=EffectKind.BUFF,
        modifiers={EffectStat.CRIT_CHANCE: percent},
        duration=duration,
    )


def poison(level: int) -> Effect:
    """Stacking poison whose damage and duration grow with the enemy level."""
    low = 2 + level // 10
    high = 4 + level // 5
    return Effect(
        name="Poisoned",
        description=f"Taking {low}-{high} poison damage each turn",
        kind=EffectKind.DAMAGE_OVER_TIME,
        potency=low,
        damage_range=(low, high),
        stackable=True,
        duration=3 + level // 50,
    )


def rage(level: int) -> Effect:
    """Damage bonus paid for with lowered defenses."""
    damage_bonus = 20 + level * 60 // 99
    defense_loss = 10 + level * 30 // 99
    return Effect(
        name="Rage",
        description=f"+{damage_bonus}% damage, -{defense_loss}% defense",
        kind=EffectKind.BUFF,
        modifiers={
            EffectStat.DAMAGE_PERCENT: damage_bonus,
            EffectStat.DAMAGE_REDUCTION_PERCENT: -defense_loss,
        },
        duration=3 + level // 50,
    )


def healing_aura(level: int) -> Effect:
    """Regeneration granted by a healer companion."""
    potency = 5 + level // 5
    return Effect(
        name="Healing Aura",
        description=f"Regenerates {potency} HP each turn",
        kind=EffectKind.HEAL_OVER_TIME,
        potency=potency,
        duration=3,
    )


# === Boss mechanics ===


def enrage(percent: int = 50, duration: int = 99) -> Effect:
    return Effect(
        name="Enraged",
        description=f"+{percent}% damage",
        kind=EffectKind.BUFF,
        modifiers={EffectStat.DAMAGE_PERCENT: percent},
        duration=duration,
    )


def time_limit(rounds: int, then_apply: Effect | None = None) -> Effect:
    """
    Round counter installing an enrage when it runs out.

    Args:
        rounds (int):
            Number of rounds before the follow-up effect is applied.
        then_apply (Effect | None):
            The follow-up effect, an Enraged buff by default.

    """
    return Effect(
        name="Time Limit",
        description=f"Enrages after {rounds} rounds",
        kind=EffectKind.STAT_MODIFIER,
        duration=rounds,
        then_apply=then_apply or enrage(),
    )


_BUILDERS = {
    "Strength Boost": strength_boost,
    "Resistance": resistance,
    "Regeneration": regeneration,
    "Haste": haste,
    "Burning": burn,
    "Bleeding": bleed,
    "Weakened": weakness,
    "Blinded": blind,
}


class EffectFactory:
    """Factory class for creating Effect instances from dictionaries."""

    @staticmethod
    def from_dict(data: dict[str, Any]) -> Effect:
        """
        Creates an Effect from a dictionary.

        A dictionary with a ``type`` naming a known effect is built through
        its builder from ``potency`` and ``duration``. Anything else is
        validated as a full Effect definition.

        Args:
            data (dict[str, Any]):
                The dictionary representation of the effect.

        Returns:
            Effect:
                The effect definition.

        Raises:
            ValueError:
                If the effect type is unknown or the data is invalid.

        """
        assert data is not None, "Data must not be None."
        effect_type = data.get("type")
        if effect_type is None:
            return Effect(**data)
        if effect_type == "Stunned":
            return stun(data.get("duration", 1), data.get("accuracy_penalty", 0))
        builder = _BUILDERS.get(effect_type)
        if builder is None:
            raise ValueError(f"Unknown effect type: {effect_type}")
        return builder(data["potency"], data["duration"])
