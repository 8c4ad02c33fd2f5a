"""
Damage module for the combat core.

Pure helpers of the damage pipeline. They take the rolls already made by the
action resolver and return the resulting numbers, so every step can be
checked in isolation.
"""

from combat_core.core.config import CombatConfig

from .outcome import DamageBreakdown


def level_bonus(level: int, config: CombatConfig) -> int:
    """Bonus added to every damage roll, level // 2 by default."""
    return level // config.level_damage_divisor


def outgoing_damage(
    raw: int,
    critical: bool = False,
    crit_multiplier: float = 1.5,
    damage_percent: float = 0,
    flat_bonus: int = 0,
) -> int:
    """
    Apply the attacker side modifiers to a raw damage value.

    The order is fixed: critical multiplier, then percentage bonus, then flat
    bonus, then truncation.

    Args:
        raw (int):
            The damage roll plus the level bonus.
        critical (bool):
            Whether the critical check succeeded.
        crit_multiplier (float):
            The multiplier of a critical hit.
        damage_percent (float):
            Summed percentage bonus, negative values weaken the hit.
        flat_bonus (int):
            Summed flat bonus.

    Returns:
        int:
            The damage leaving the attacker, never negative.

    """
    value: float = raw
    if critical:
        value *= crit_multiplier
    value *= 1 + damage_percent / 100
    value += flat_bonus
    return max(0, int(value))


def capped_reduction(reduction_percent: int, config: CombatConfig) -> int:
    """Percentage reduction limited to the configured cap."""
    return min(reduction_percent, config.max_damage_reduction_percent)


def mitigated_damage(
    damage: int,
    config: CombatConfig,
    armor: int = 0,
    flat_resistance: int = 0,
    reduction_percent: int = 0,
    defending: bool = False,
) -> int:
    """
    Apply the target side reductions to an incoming hit that was not evaded.

    Armor and flat resistance are subtracted first, then the capped
    percentage reduction and the defend multiplier are applied. The result
    never drops below the damage floor.

    Returns:
        int:
            The damage to apply to the target.

    """
    value: float = damage - armor - flat_resistance
    value *= 1 - capped_reduction(reduction_percent, config) / 100
    if defending:
        value *= config.defend_damage_multiplier
    return max(config.damage_floor, int(value))


def compute_damage(
    config: CombatConfig,
    base_roll: int,
    level: int,
    critical: bool = False,
    crit_multiplier: float | None = None,
    damage_percent: float = 0,
    flat_bonus: int = 0,
    evaded: bool = False,
    armor: int = 0,
    flat_resistance: int = 0,
    reduction_percent: int = 0,
    defending: bool = False,
) -> DamageBreakdown:
    """
    Run the whole damage pipeline and record each step.

    An evaded hit deals no damage and skips the target reductions.

    Returns:
        DamageBreakdown:
            The breakdown, with the final damage in ``final``.

    """
    multiplier = config.default_crit_multiplier if crit_multiplier is None else crit_multiplier
    bonus = level_bonus(level, config)
    outgoing = outgoing_damage(
        base_roll + bonus,
        critical=critical,
        crit_multiplier=multiplier,
        damage_percent=damage_percent,
        flat_bonus=flat_bonus,
    )
    breakdown = DamageBreakdown(
        base_roll=base_roll,
        level_bonus=bonus,
        critical=critical,
        crit_multiplier=multiplier,
        damage_percent=damage_percent,
        flat_bonus=flat_bonus,
        outgoing=outgoing,
        evaded=evaded,
    )
    if evaded:
        return breakdown
    breakdown.armor = armor
    breakdown.flat_resistance = flat_resistance
    breakdown.reduction_percent = capped_reduction(reduction_percent, config)
    breakdown.defending = defending
    breakdown.final = mitigated_damage(
        outgoing,
        config,
        armor=armor,
        flat_resistance=flat_resistance,
        reduction_percent=reduction_percent,
        defending=defending,
    )
    return breakdown
