"""
Event system module for the combat core.

Defines the structured records emitted by the effect engine and the action
resolver, and a small dispatcher delivering them to subscribed listeners.
Combat math never prints, consumers render these events instead.
"""

from collections.abc import Callable
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from combat_core.core.logging import log_debug


class EventType(Enum):
    """Enumeration of available event types."""

    EFFECT_APPLIED = "effect_applied"  # A new effect was added
    EFFECT_REFRESHED = "effect_refreshed"  # A non-stacking effect was reapplied
    EFFECT_STACKED = "effect_stacked"  # A stacking effect gained a stack
    EFFECT_TICK = "effect_tick"  # A DoT or HoT applied its per-round value
    EFFECT_EXPIRED = "effect_expired"  # An effect ended, cleansed or ran out

    HIT = "hit"  # An attack connected
    MISS = "miss"  # An attack failed its accuracy roll
    CRITICAL_HIT = "critical_hit"  # An attack was a critical hit
    EVADE = "evade"  # The target evaded a hit

    DAMAGE_TAKEN = "damage_taken"  # A combatant lost health
    HEAL = "heal"  # A combatant regained health
    DEATH = "death"  # A combatant reached 0 health

    ROUND_START = "round_start"  # A round began
    ROUND_END = "round_end"  # A round ended


class CombatEvent(BaseModel):
    """Base class for all combat events."""

    event_type: EventType = Field(
        description="The type of event.",
    )
    target: Any = Field(
        default=None,
        description="The combatant the event happened to.",
    )
    message: str | None = Field(
        default=None,
        description="Optional human readable description.",
    )

    @property
    def target_name(self) -> str | None:
        return getattr(self.target, "name", None)

    def __str__(self) -> str:
        return f"{self.event_type.name}({self.target_name})"


class EffectEvent(CombatEvent):
    """Event data for effect lifecycle changes and ticks."""

    effect_name: str = Field(description="The name of the effect.")
    remaining: int = Field(default=0, description="Remaining duration in rounds.")
    stack_count: int = Field(default=1, description="Stack count after the change.")
    amount: int = Field(
        default=0,
        description="Damage dealt or health restored by a tick.",
    )
    reason: str | None = Field(
        default=None,
        description="Why an effect ended: expired, cleansed or removed.",
    )

    def __str__(self) -> str:
        details = f"remaining={self.remaining}, stacks={self.stack_count}"
        if self.event_type == EventType.EFFECT_TICK:
            details += f", amount={self.amount}"
        if self.reason:
            details += f", reason={self.reason}"
        return f"{self.event_type.name}({self.target_name}, {self.effect_name}, {details})"


class AttackEvent(CombatEvent):
    """Event data for hits, misses, critical hits and evasions."""

    actor: Any = Field(description="The combatant performing the attack.")
    roll: int | None = Field(
        default=None,
        description="The d100 roll that decided the outcome.",
    )
    amount: int = Field(default=0, description="Damage dealt by the attack.")

    def __str__(self) -> str:
        return (
            f"{self.event_type.name}({getattr(self.actor, 'name', None)} on "
            f"{self.target_name}, roll={self.roll}, amount={self.amount})"
        )


class HealthEvent(CombatEvent):
    """Event data for damage taken, healing and death."""

    amount: int = Field(default=0, description="Health lost or restored.")
    health: int = Field(default=0, description="Health after the change.")

    def __str__(self) -> str:
        return f"{self.event_type.name}({self.target_name}, amount={self.amount}, hp={self.health})"


class RoundEvent(CombatEvent):
    """Event data for round boundaries."""

    round_number: int = Field(description="The round number.")

    def __str__(self) -> str:
        return f"{self.event_type.name}(round={self.round_number})"


EventListener = Callable[[CombatEvent], None]


class EventDispatcher:
    """
    Delivers combat events to subscribed listeners, in subscription order.
    """

    def __init__(self) -> None:
        self._listeners: list[EventListener] = []

    def subscribe(self, listener: EventListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def dispatch(self, event: CombatEvent) -> CombatEvent:
        """
        Deliver an event to every listener.

        Returns:
            CombatEvent:
                The same event, so callers can collect it.

        """
        log_debug(str(event))
        for listener in list(self._listeners):
            listener(event)
        return event
