"""
Serialization of active effect lists.

An effect snapshot records the effect type, the remaining duration and the
stack count. The definition travels with the snapshot unless a catalog is
used on restore.
"""

from collections.abc import Iterable, Mapping

from catchery import log_error
from pydantic import BaseModel, Field

from .base_effect import ActiveEffect, Effect


class EffectSnapshot(BaseModel):
    """Persisted state of one active effect."""

    effect_type: str = Field(
        description="Name of the effect definition.",
    )
    remaining: int = Field(
        description="Remaining duration in rounds.",
    )
    stack_count: int = Field(
        default=1,
        description="Number of stacks.",
    )
    source: str | None = Field(
        default=None,
        description="Name of the combatant that applied the effect.",
    )
    definition: Effect | None = Field(
        default=None,
        description="Full definition, omitted when restoring from a catalog.",
    )


def snapshot_effect(active: ActiveEffect, include_definition: bool = True) -> EffectSnapshot:
    return EffectSnapshot(
        effect_type=active.name,
        remaining=active.remaining,
        stack_count=active.stack_count,
        source=active.source,
        definition=active.effect if include_definition else None,
    )


def snapshot_effects(
    effects: Iterable[ActiveEffect],
    include_definition: bool = True,
) -> list[EffectSnapshot]:
    """
    Snapshot a list of active effects, preserving their order.

    Args:
        effects (Iterable[ActiveEffect]):
            The active effects to snapshot.
        include_definition (bool):
            Whether to embed the effect definitions.

    Returns:
        list[EffectSnapshot]:
            One snapshot per effect.

    """
    return [snapshot_effect(active, include_definition) for active in effects]


def restore_effect(
    snapshot: EffectSnapshot,
    catalog: Mapping[str, Effect] | None = None,
) -> ActiveEffect:
    """
    Rebuild an active effect from its snapshot.

    Raises:
        ValueError:
            If the snapshot has no definition and the catalog lacks it.

    """
    definition = snapshot.definition
    if definition is None and catalog is not None:
        definition = catalog.get(snapshot.effect_type)
    if definition is None:
        error = ValueError(f"Unknown effect type: {snapshot.effect_type}")
        log_error(
            "Cannot restore effect without a definition.",
            {"effect_type": snapshot.effect_type},
            exception=error,
            raise_exception=True,
        )
    return ActiveEffect(
        effect=definition,
        remaining=snapshot.remaining,
        stack_count=snapshot.stack_count,
        source=snapshot.source,
    )


def restore_effects(
    snapshots: Iterable[EffectSnapshot],
    catalog: Mapping[str, Effect] | None = None,
) -> list[ActiveEffect]:
    return [restore_effect(snapshot, catalog) for snapshot in snapshots]
