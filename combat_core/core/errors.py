"""
Error taxonomy for the combat core.

Programmer errors (bad ranges, bad weight tables) subclass ValueError as well
as CombatError so that callers treating them as plain value errors keep
working. Recoverable errors carry the objects involved so the caller can
pick a different action. Nothing in the package retries or swallows them.
"""

from typing import Any


class CombatError(Exception):
    """Base class for every error raised by the combat core."""


# === Programmer errors ===


class InvalidRange(CombatError, ValueError):
    """Raised when a random range has min > max, or a sample is too large."""

    def __init__(self, minimum: int, maximum: int, message: str | None = None):
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            message or f"Invalid range: min ({minimum}) is greater than max ({maximum})."
        )


class InvalidDistribution(CombatError, ValueError):
    """Raised when a weight table is empty, negative or sums to zero."""

    def __init__(self, weights: Any, message: str | None = None):
        self.weights = weights
        super().__init__(message or f"Invalid weight distribution: {weights!r}.")


class UnknownAlgorithm(CombatError, ValueError):
    """Raised when selecting a random algorithm that is not registered."""

    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        super().__init__(
            f"Unknown random algorithm '{name}', available: {', '.join(available)}."
        )


# === Recoverable errors ===


class AbilityOnCooldown(CombatError):
    """Raised when an active ability is used while its cooldown is running."""

    def __init__(self, ability: Any):
        self.ability = ability
        super().__init__(
            f"{ability.name} is on cooldown for {ability.current_cooldown} more turn(s)."
        )


class AbilityNotActivatable(CombatError):
    """Raised when a passive ability is used as an action."""

    def __init__(self, ability: Any):
        self.ability = ability
        super().__init__(f"{ability.name} is passive and cannot be activated.")


class InsufficientResource(CombatError):
    """Raised when an actor cannot pay the cost of an ability."""

    def __init__(self, actor: Any, ability: Any):
        self.actor = actor
        self.ability = ability
        super().__init__(
            f"{actor.name} needs {ability.cost} mana for {ability.name}, "
            f"has {actor.mana}."
        )


class InvalidTarget(CombatError):
    """Raised when an action targets someone it cannot affect."""

    def __init__(self, actor: Any, target: Any, reason: str):
        self.actor = actor
        self.target = target
        self.reason = reason
        target_name = getattr(target, "name", None)
        super().__init__(f"Invalid target {target_name!r} for {actor.name}: {reason}.")


# === Terminal transitions ===


class EmptyActSequence(CombatError):
    """Raised when no living combatant is left to act in a round."""

    def __init__(self, resolution: Any):
        self.resolution = resolution
        super().__init__(f"No combatant can act, combat resolved as {resolution}.")
