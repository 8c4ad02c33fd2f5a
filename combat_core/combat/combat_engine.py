"""
Combat engine module for the combat core.

Entry point of a battle. Wires one randomness provider, one event
dispatcher, the effect engine, the turn scheduler and the action resolver
together, and drives the round: start, per-actor turns, end.

A round reads::

    order = engine.start_round()
    for actor in order:
        engine.begin_turn(actor)
        if actor.is_alive():
            engine.resolve_action(actor, ActionKind.ATTACK, target)
    engine.end_round()
"""

from collections.abc import Iterable, Sequence

from combat_core.abilities.base_ability import Ability
from combat_core.combatants.combatant import Combatant
from combat_core.core.config import CombatConfig
from combat_core.core.constants import ActionKind, CombatResolution, PassiveBonus
from combat_core.core.logging import log_debug, log_info
from combat_core.effects.effect_engine import EffectEngine
from combat_core.effects.event_system import (
    CombatEvent,
    EventDispatcher,
    EventListener,
    EventType,
    RoundEvent,
)
from combat_core.items.consumable import Consumable
from combat_core.rng.provider import RandomProvider, get_default_provider

from .action_resolver import ActionResolver
from .outcome import ActionOutcome
from .turn_scheduler import TurnScheduler


class CombatEngine:
    """
    Drives the rounds of a battle between a party and its enemies.

    Attributes:
        combatants (list[Combatant]):
            Every participant, in registration order.
        config (CombatConfig):
            The combat constants.
        dispatcher (EventDispatcher):
            Delivers every event of the battle to the listeners.
        effect_engine (EffectEngine):
            Applies, processes and ticks effects.
        scheduler (TurnScheduler):
            Orders the combatants each round.
        resolver (ActionResolver):
            Resolves the chosen actions.

    """

    def __init__(
        self,
        combatants: Iterable[Combatant] = (),
        provider: RandomProvider | None = None,
        config: CombatConfig | None = None,
        dispatcher: EventDispatcher | None = None,
    ) -> None:
        self.config = config or CombatConfig()
        self._provider = provider
        self.dispatcher = dispatcher or EventDispatcher()
        self.effect_engine = EffectEngine(provider, self.dispatcher)
        self.scheduler = TurnScheduler(self.config)
        self.resolver = ActionResolver(provider, self.effect_engine, self.config)
        self.combatants: list[Combatant] = []
        for combatant in combatants:
            self.add_combatant(combatant)

    @property
    def provider(self) -> RandomProvider:
        return self._provider or get_default_provider()

    @property
    def round_number(self) -> int:
        return self.scheduler.round_number

    def subscribe(self, listener: EventListener) -> None:
        self.dispatcher.subscribe(listener)

    def add_combatant(self, combatant: Combatant) -> None:
        """Join the battle, after every combatant already registered."""
        if any(combatant is known for known in self.combatants):
            return
        self.combatants.append(combatant)
        self.scheduler.register([combatant])

    def _participants(self, combatants: Sequence[Combatant] | None) -> Sequence[Combatant]:
        if combatants is None:
            return self.combatants
        for combatant in combatants:
            self.add_combatant(combatant)
        return combatants

    # === Round ===

    def start_round(self, combatants: Sequence[Combatant] | None = None) -> list[Combatant]:
        """
        Start a new round and return its act sequence.

        Args:
            combatants (Sequence[Combatant] | None):
                The participants, every registered combatant by default.

        Returns:
            list[Combatant]:
                The living combatants, fastest first.

        Raises:
            EmptyActSequence:
                If nobody is left standing.

        """
        order = self.scheduler.start_round(self._participants(combatants))
        self.dispatcher.dispatch(
            RoundEvent(event_type=EventType.ROUND_START, round_number=self.round_number)
        )
        return order

    def begin_turn(self, actor: Combatant) -> list[CombatEvent]:
        """
        Apply the damage and healing over time due at the start of a turn.
        """
        return self.effect_engine.process_effects(actor)

    def resolve_action(
        self,
        actor: Combatant,
        kind: ActionKind,
        target: Combatant | None = None,
        ability: Ability | str | None = None,
        item: Consumable | None = None,
    ) -> ActionOutcome:
        """
        Resolve the action chosen for the actor.

        Errors raised by the resolver propagate unchanged, nothing is retried.
        """
        outcome = self.resolver.resolve(
            actor,
            kind,
            target=target,
            ability=ability,
            item=item,
            combatants=self.combatants,
        )
        self.scheduler.record_action(
            actor, ActionKind.NONE if outcome.incapacitated else outcome.kind
        )
        return outcome

    def end_round(self, combatants: Sequence[Combatant] | None = None) -> list[CombatEvent]:
        """
        Close the round once every combatant has acted.

        Ticks effect durations and ability cooldowns, then gives each owner of
        an end-of-round cleanse passive its chance to shake off negative
        effects.

        Returns:
            list[CombatEvent]:
                Expiry, follow-up, cleanse and round end events.

        """
        participants = self._participants(combatants)
        events: list[CombatEvent] = []
        for combatant in participants:
            if not combatant.is_alive():
                continue
            events.extend(self.effect_engine.tick_durations(combatant))
            combatant.abilities.reduce_cooldowns()
        for combatant in participants:
            events.extend(self._end_of_round_cleanse(combatant))
        events.append(
            self.dispatcher.dispatch(
                RoundEvent(event_type=EventType.ROUND_END, round_number=self.round_number)
            )
        )
        return events

    def _end_of_round_cleanse(self, combatant: Combatant) -> list[CombatEvent]:
        if not combatant.is_alive():
            return []
        if not combatant.abilities.has_passive(PassiveBonus.END_OF_ROUND_CLEANSE):
            return []
        if not any(True for _ in combatant.effects.negative_effects):
            return []
        chance = combatant.abilities.passive_total(PassiveBonus.END_OF_ROUND_CLEANSE, "chance")
        roll = self.provider.roll(1, 100)
        if roll > chance:
            return []
        log_debug(f"{combatant.name} shakes off negative effects.", {"roll": roll})
        return self.effect_engine.remove_negative_effects(combatant)

    # === Resolution ===

    def resolution(self) -> CombatResolution:
        return self.scheduler.resolution(self.combatants)

    def is_over(self) -> bool:
        return self.resolution() != CombatResolution.ONGOING

    def end_combat(self) -> CombatResolution:
        """
        Finish the battle, resetting the per-combat ability usage counters.
        """
        for combatant in self.combatants:
            combatant.abilities.reset_combat_usage()
        resolution = self.resolution()
        log_info(f"Combat ended after {self.round_number} rounds: {resolution}.")
        return resolution
