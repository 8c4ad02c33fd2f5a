"""
Effect engine module for the combat core.

Owns the lifecycle of effects on combatants: application with refresh or
stacking, per-turn processing of damage and healing over time, end of round
duration ticks and cleansing. Every change is reported as an EffectEvent.
"""

from typing import Any

from combat_core.core.constants import EffectKind
from combat_core.core.logging import log_debug
from combat_core.effects.base_effect import ActiveEffect, Effect
from combat_core.effects.event_system import (
    CombatEvent,
    EffectEvent,
    EventDispatcher,
    EventType,
    HealthEvent,
)
from combat_core.rng.provider import RandomProvider, get_default_provider


class EffectEngine:
    """
    Applies, processes, ticks and removes effects.

    The engine works on any combatant exposing ``name``, ``is_alive()``,
    ``take_damage(amount)``, ``heal(amount)`` and an ``effects`` container.
    """

    def __init__(
        self,
        provider: RandomProvider | None = None,
        dispatcher: EventDispatcher | None = None,
    ) -> None:
        self._provider = provider
        self.dispatcher = dispatcher or EventDispatcher()

    @property
    def provider(self) -> RandomProvider:
        return self._provider or get_default_provider()

    def subscribe(self, listener: Any) -> None:
        self.dispatcher.subscribe(listener)

    def _emit(self, event: CombatEvent, events: list[CombatEvent]) -> None:
        events.append(self.dispatcher.dispatch(event))

    def _effect_event(
        self,
        event_type: EventType,
        target: Any,
        active: ActiveEffect,
        **kwargs: Any,
    ) -> EffectEvent:
        return EffectEvent(
            event_type=event_type,
            target=target,
            effect_name=active.name,
            remaining=active.remaining,
            stack_count=active.stack_count,
            **kwargs,
        )

    # === Application ===

    def add_effect(
        self,
        target: Any,
        effect: Effect,
        source: Any = None,
    ) -> list[CombatEvent]:
        """
        Apply an effect to the target.

        If an effect with the same name is already active, a stacking effect
        gains a stack and a non-stacking one has its duration refreshed to
        the reapplied duration. Otherwise a new instance is inserted.

        Args:
            target (Any):
                The combatant receiving the effect.
            effect (Effect):
                The effect definition.
            source (Any):
                The combatant applying the effect, if any.

        Returns:
            list[CombatEvent]:
                The events produced by the application.

        """
        events: list[CombatEvent] = []
        existing = target.effects.get(effect.name)
        if existing is not None:
            existing.refresh(effect.duration)
            if existing.add_stack():
                log_debug(
                    f"{effect.name} stacked on {target.name}.",
                    {"stacks": existing.stack_count},
                )
                self._emit(
                    self._effect_event(EventType.EFFECT_STACKED, target, existing),
                    events,
                )
            else:
                log_debug(
                    f"{effect.name} refreshed on {target.name}.",
                    {"remaining": existing.remaining},
                )
                self._emit(
                    self._effect_event(EventType.EFFECT_REFRESHED, target, existing),
                    events,
                )
            return events

        active = ActiveEffect(
            effect=effect,
            remaining=effect.duration,
            source=getattr(source, "name", source),
        )
        target.effects.add(active)
        log_debug(
            f"{effect.name} applied to {target.name}.",
            {"remaining": active.remaining, "kind": effect.kind},
        )
        self._emit(self._effect_event(EventType.EFFECT_APPLIED, target, active), events)
        return events

    # === Processing ===

    def _tick_amount(self, active: ActiveEffect) -> int:
        effect = active.effect
        if effect.kind == EffectKind.DAMAGE_OVER_TIME and effect.damage_range:
            low, high = effect.damage_range
            return self.provider.roll(low, high) * active.stack_count
        return active.magnitude

    def process_effects(self, target: Any) -> list[CombatEvent]:
        """
        Apply the per-turn logic of every active effect, in insertion order.

        Damage over time deals its potency times the stack count, healing
        over time restores its potency once whatever the stack count. Other
        kinds are passive and are read by the action resolver. Durations are
        not touched here.

        Args:
            target (Any):
                The combatant whose turn is starting.

        Returns:
            list[CombatEvent]:
                Tick, damage, heal and death events.

        """
        events: list[CombatEvent] = []
        for active in list(target.effects.active_effects):
            if not target.is_alive():
                break
            if active.kind == EffectKind.DAMAGE_OVER_TIME:
                dealt = target.take_damage(self._tick_amount(active))
                self._emit(
                    self._effect_event(
                        EventType.EFFECT_TICK, target, active, amount=dealt
                    ),
                    events,
                )
                self._emit(
                    HealthEvent(
                        event_type=EventType.DAMAGE_TAKEN,
                        target=target,
                        amount=dealt,
                        health=target.health,
                    ),
                    events,
                )
                if not target.is_alive():
                    self._emit(
                        HealthEvent(event_type=EventType.DEATH, target=target),
                        events,
                    )
            elif active.kind == EffectKind.HEAL_OVER_TIME:
                healed = target.heal(active.effect.potency)
                self._emit(
                    self._effect_event(
                        EventType.EFFECT_TICK, target, active, amount=healed
                    ),
                    events,
                )
                self._emit(
                    HealthEvent(
                        event_type=EventType.HEAL,
                        target=target,
                        amount=healed,
                        health=target.health,
                    ),
                    events,
                )
        return events

    def tick_durations(self, target: Any) -> list[CombatEvent]:
        """
        Decrement every active effect by one round and remove the expired
        ones. Called once per round, after every combatant has acted.

        Expired effects with a follow-up effect apply it to the same target.

        Args:
            target (Any):
                The combatant whose effects are ticking.

        Returns:
            list[CombatEvent]:
                Expiry events, followed by any follow-up application events.

        """
        events: list[CombatEvent] = []
        follow_ups: list[Effect] = []
        for active in list(target.effects.active_effects):
            active.remaining -= 1
            if active.is_expired:
                target.effects.remove(active)
                log_debug(f"{active.name} expired on {target.name}.")
                self._emit(
                    self._effect_event(
                        EventType.EFFECT_EXPIRED, target, active, reason="expired"
                    ),
                    events,
                )
                if active.effect.then_apply is not None:
                    follow_ups.append(active.effect.then_apply)
        for effect in follow_ups:
            events.extend(self.add_effect(target, effect))
        return events

    # === Removal ===

    def remove_effect(self, target: Any, name: str) -> list[CombatEvent]:
        """
        Remove the named effect, if present. Follow-up effects are not applied.
        """
        events: list[CombatEvent] = []
        active = target.effects.get(name)
        if active is None:
            return events
        target.effects.remove(active)
        self._emit(
            self._effect_event(EventType.EFFECT_EXPIRED, target, active, reason="removed"),
            events,
        )
        return events

    def remove_negative_effects(self, target: Any) -> list[CombatEvent]:
        """
        Cleanse every debuff, damage over time and crowd control effect.

        A target with no negative effects is left untouched.

        Args:
            target (Any):
                The combatant to cleanse.

        Returns:
            list[CombatEvent]:
                One expiry event per removed effect.

        """
        events: list[CombatEvent] = []
        for active in list(target.effects.negative_effects):
            target.effects.remove(active)
            log_debug(f"{active.name} cleansed from {target.name}.")
            self._emit(
                self._effect_event(
                    EventType.EFFECT_EXPIRED, target, active, reason="cleansed"
                ),
                events,
            )
        return events
