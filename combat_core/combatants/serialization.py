"""
Combatant serialization functions.

Provides snapshots of the persistent state of a combatant: vitals, the
active effect list and the level, experience and cooldown of each ability.
Equipment and definitions are content, looked up again on restore.
"""

import json
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, Field

from combat_core.abilities.ability_factory import ABILITY_DEFINITIONS, create_ability
from combat_core.abilities.base_ability import AbilityDefinition
from combat_core.core.config import CombatConfig
from combat_core.core.constants import ActionKind, CombatantType
from combat_core.core.logging import log_error
from combat_core.effects.base_effect import Effect
from combat_core.effects.effect_serializer import (
    EffectSnapshot,
    restore_effects,
    snapshot_effects,
)

from .combatant import Combatant


class AbilitySnapshot(BaseModel):
    """Persisted progression of one ability."""

    name: str = Field(
        description="Name of the ability definition.",
    )
    level: int = Field(
        default=1,
        description="Current level.",
    )
    experience: int = Field(
        default=0,
        description="Experience toward the next level.",
    )
    current_cooldown: int = Field(
        default=0,
        description="Rounds left before the ability can be used again.",
    )


class CombatantSnapshot(BaseModel):
    """Persisted state of a combatant."""

    name: str
    combatant_type: CombatantType
    level: int
    health: int
    max_health: int
    mana: int = 0
    max_mana: int = 0
    base_speed: int
    last_action: ActionKind = ActionKind.NONE
    effects: list[EffectSnapshot] = Field(default_factory=list)
    abilities: list[AbilitySnapshot] = Field(default_factory=list)


def snapshot_combatant(
    combatant: Combatant,
    include_definitions: bool = True,
) -> CombatantSnapshot:
    """
    Take a snapshot of the combatant.

    Args:
        combatant (Combatant):
            The combatant to snapshot.
        include_definitions (bool):
            Whether effect definitions are embedded in the snapshot.

    Returns:
        CombatantSnapshot:
            The snapshot.

    """
    return CombatantSnapshot(
        name=combatant.name,
        combatant_type=combatant.combatant_type,
        level=combatant.level,
        health=combatant.health,
        max_health=combatant.max_health,
        mana=combatant.mana,
        max_mana=combatant.max_mana,
        base_speed=combatant.base_speed,
        last_action=combatant.last_action,
        effects=snapshot_effects(combatant.effects, include_definitions),
        abilities=[
            AbilitySnapshot(
                name=ability.name,
                level=ability.level,
                experience=ability.experience,
                current_cooldown=ability.current_cooldown,
            )
            for ability in combatant.abilities
        ],
    )


def restore_combatant(
    snapshot: CombatantSnapshot,
    combatant: Combatant | None = None,
    effect_catalog: Mapping[str, Effect] | None = None,
    ability_catalog: Mapping[str, AbilityDefinition] | None = None,
    config: CombatConfig | None = None,
) -> Combatant:
    """
    Restore a combatant from its snapshot.

    When an existing combatant is given its vitals, effects and abilities are
    overwritten in place and its equipment is kept. Otherwise a new unarmed
    combatant is built.

    Args:
        snapshot (CombatantSnapshot):
            The snapshot to restore.
        combatant (Combatant | None):
            The combatant to restore into, if any.
        effect_catalog (Mapping[str, Effect] | None):
            Effect definitions for snapshots taken without them.
        ability_catalog (Mapping[str, AbilityDefinition] | None):
            Ability definitions, the built-in ones by default.
        config (CombatConfig | None):
            Supplies the ability level cap, the defaults when omitted.

    Returns:
        Combatant:
            The restored combatant.

    Raises:
        KeyError:
            If an ability is missing from the catalog.

    """
    if combatant is None:
        combatant = Combatant(
            name=snapshot.name,
            combatant_type=snapshot.combatant_type,
            max_health=snapshot.max_health,
            base_speed=snapshot.base_speed,
            level=snapshot.level,
            max_mana=snapshot.max_mana,
        )
    else:
        combatant.level = snapshot.level
        combatant.max_health = snapshot.max_health
        combatant.max_mana = snapshot.max_mana
        combatant.base_speed = snapshot.base_speed
    combatant.health = max(0, min(snapshot.max_health, snapshot.health))
    combatant.mana = max(0, min(snapshot.max_mana, snapshot.mana))
    combatant.last_action = snapshot.last_action

    combatant.effects.clear()
    for active in restore_effects(snapshot.effects, effect_catalog):
        combatant.effects.add(active)

    config = config or CombatConfig()
    catalog = dict(ability_catalog) if ability_catalog is not None else ABILITY_DEFINITIONS
    combatant.abilities.abilities.clear()
    for saved in snapshot.abilities:
        if saved.name not in catalog:
            log_error(
                f"Cannot restore unknown ability {saved.name!r}.",
                {"combatant": snapshot.name},
            )
        combatant.abilities.add(
            create_ability(
                saved.name,
                level=saved.level,
                definitions=catalog,
                max_level=config.max_ability_level,
                experience=saved.experience,
                current_cooldown=saved.current_cooldown,
            )
        )
    return combatant


def save_snapshot(snapshot: CombatantSnapshot, path: Path) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(snapshot.model_dump_json(indent=2))


def load_snapshot(path: Path) -> CombatantSnapshot:
    """
    Load a combatant snapshot from a JSON file.

    Raises:
        ValueError:
            If the file is not valid JSON or fails validation.

    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"File {path} raised an error: {e}") from e
    return CombatantSnapshot(**data)
