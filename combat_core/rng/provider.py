"""
Randomness provider for the combat core.

Every random outcome of a battle (hit rolls, damage rolls, critical checks,
evasion, weighted picks) is drawn through a RandomProvider. Seeding the
provider makes a whole combat reproducible, and swapping its algorithm by
name changes behaviour game-wide.
"""

from collections.abc import MutableSequence, Sequence
from typing import Any, TypeVar

from catchery import log_critical, log_debug

from combat_core.core.errors import InvalidDistribution, InvalidRange
from combat_core.rng.algorithms import (
    DEFAULT_ALGORITHM,
    RandomAlgorithm,
    available_algorithms,
    create_algorithm,
)

T = TypeVar("T")


def _reject(error: Exception, **context: Any) -> None:
    """Log a misuse of the provider through catchery and raise it."""
    log_critical(str(error), context, exception=error, raise_exception=True)


class RandomProvider:
    """
    Single source of randomness shared by every combat component.

    Attributes:
        track_statistics (bool):
            Whether public draws increment total_rolls.
        total_rolls (int):
            Number of public draws since creation or the last reset.

    """

    def __init__(
        self,
        algorithm: str = DEFAULT_ALGORITHM,
        seed: int | None = None,
        track_statistics: bool = False,
    ) -> None:
        """
        Initialize the provider.

        Args:
            algorithm (str):
                Name of the registered algorithm to draw from.
            seed (int | None):
                Seed for reproducible sequences, None for a random seed.
            track_statistics (bool):
                Whether to count draws from the start.

        """
        self._algorithm_name = algorithm.lower()
        self._algorithm: RandomAlgorithm = create_algorithm(algorithm, seed)
        self._seed = seed
        self.track_statistics = track_statistics
        self.total_rolls = 0

    # === Algorithm Management ===

    @property
    def current_algorithm(self) -> str:
        return self._algorithm_name

    @property
    def seed(self) -> int | None:
        return self._seed

    def available_algorithms(self) -> list[str]:
        return available_algorithms()

    def set_algorithm(self, name: str, seed: int | None = None) -> None:
        """
        Swap the underlying algorithm.

        Args:
            name (str):
                Name of a registered algorithm.
            seed (int | None):
                Seed for the new algorithm, None for a random seed.

        Raises:
            UnknownAlgorithm:
                If no algorithm is registered under the name.

        """
        self._algorithm = create_algorithm(name, seed)
        self._algorithm_name = name.lower()
        self._seed = seed
        log_debug(
            "Random algorithm changed.",
            {"algorithm": self._algorithm_name, "seed": seed},
        )

    def reseed(self, seed: int | None) -> None:
        """Restart the current algorithm from the given seed."""
        self._algorithm.seed(seed)
        self._seed = seed

    # === Statistics ===

    def set_statistics_tracking(self, enabled: bool) -> None:
        self.track_statistics = enabled

    def reset_statistics(self) -> None:
        self.total_rolls = 0

    def _count(self) -> None:
        if self.track_statistics:
            self.total_rolls += 1

    # === Basic Draws ===

    def roll(self, minimum: int, maximum: int) -> int:
        """
        Roll an integer in [minimum, maximum], both ends inclusive.

        Raises:
            InvalidRange:
                If minimum is greater than maximum.

        """
        if minimum > maximum:
            _reject(InvalidRange(minimum, maximum), minimum=minimum, maximum=maximum)
        self._count()
        return minimum + self._algorithm.randbelow(maximum - minimum + 1)

    def next_int(self, minimum: int, maximum: int) -> int:
        """
        Draw an integer in [minimum, maximum), upper end exclusive.

        Returns minimum when both ends are equal.
        """
        if minimum > maximum:
            _reject(InvalidRange(minimum, maximum), minimum=minimum, maximum=maximum)
        self._count()
        if minimum == maximum:
            return minimum
        return minimum + self._algorithm.randbelow(maximum - minimum)

    def random(self) -> float:
        """Draw a float uniformly distributed in [0, 1)."""
        self._count()
        return self._algorithm.random()

    def random_float(self, low: float, high: float) -> float:
        """Draw a float uniformly distributed in [low, high)."""
        if low > high:
            _reject(InvalidRange(low, high), low=low, high=high)
        self._count()
        return low + (high - low) * self._algorithm.random()

    def chance(self, probability: float = 0.5) -> bool:
        """Returns True with the given probability in [0, 1]."""
        self._count()
        return self._algorithm.random() < probability

    def roll_percentage(self, success_chance: int) -> bool:
        """Returns True if a d100 roll is at most success_chance."""
        return self.roll(1, 100) <= success_chance

    def roll_dice(self, count: int, sides: int) -> int:
        """
        Roll count dice with the given number of sides and sum them.

        Every die counts as one roll in the statistics.
        """
        if count < 0 or sides < 1:
            _reject(
                InvalidRange(count, sides, f"Cannot roll {count} dice with {sides} sides."),
                count=count,
                sides=sides,
            )
        return sum(self.roll(1, sides) for _ in range(count))

    def roll_d20(self) -> int:
        return self.roll(1, 20)

    def roll_d100(self) -> int:
        return self.roll(1, 100)

    # === Selection ===

    def weighted_index(self, weights: Sequence[int]) -> int:
        """
        Select an index with probability proportional to its weight.

        Args:
            weights (Sequence[int]):
                Non-negative integer weights.

        Returns:
            int:
                The selected index.

        Raises:
            InvalidDistribution:
                If the weights are missing, empty, negative or sum to zero.

        """
        if not weights or any(w < 0 for w in weights) or sum(weights) <= 0:
            _reject(InvalidDistribution(weights), weights=weights)
        self._count()
        pick = self._algorithm.randbelow(sum(weights))
        cumulative = 0
        for index, weight in enumerate(weights):
            cumulative += weight
            if pick < cumulative:
                return index
        # Unreachable, pick is always below the total.
        return len(weights) - 1

    def weighted_choice(self, items: Sequence[T], weights: Sequence[int]) -> T:
        """Select an item with probability proportional to its weight."""
        if len(items) != len(weights):
            _reject(
                InvalidDistribution(weights, "Items and weights must have the same length."),
                items=len(items),
                weights=weights,
            )
        return items[self.weighted_index(weights)]

    def choice(self, items: Sequence[T]) -> T:
        """Select a single item uniformly at random."""
        if not items:
            _reject(InvalidRange(0, -1, "Cannot choose from an empty sequence."), items=0)
        self._count()
        return items[self._algorithm.randbelow(len(items))]

    def shuffle(self, items: MutableSequence[Any]) -> None:
        """Shuffle items in place (Fisher-Yates)."""
        self._count()
        for i in range(len(items) - 1, 0, -1):
            j = self._algorithm.randbelow(i + 1)
            items[i], items[j] = items[j], items[i]

    def sample(self, items: Sequence[T], count: int) -> list[T]:
        """
        Select count distinct items without replacement.

        Raises:
            InvalidRange:
                If count is negative or larger than the population.

        """
        if count < 0 or count > len(items):
            _reject(
                InvalidRange(
                    count,
                    len(items),
                    f"Cannot select {count} unique items from {len(items)}.",
                ),
                count=count,
                population=len(items),
            )
        self._count()
        pool = list(items)
        # Partial Fisher-Yates, only the first count slots are needed.
        for i in range(count):
            j = i + self._algorithm.randbelow(len(pool) - i)
            pool[i], pool[j] = pool[j], pool[i]
        return pool[:count]

    # === Persistence ===

    def get_state(self) -> dict[str, Any]:
        """
        Returns a JSON compatible snapshot of the provider.

        Raises:
            ValueError:
                If the current algorithm does not expose its state.

        """
        if not self._algorithm.seedable:
            _reject(
                ValueError(f"Algorithm '{self._algorithm_name}' cannot be snapshotted."),
                algorithm=self._algorithm_name,
            )
        return {
            "algorithm": self._algorithm_name,
            "seed": self._seed,
            "state": self._algorithm.get_state(),
            "total_rolls": self.total_rolls,
            "track_statistics": self.track_statistics,
        }

    def set_state(self, snapshot: dict[str, Any]) -> None:
        """Restore a snapshot produced by get_state."""
        self.set_algorithm(snapshot["algorithm"], snapshot.get("seed"))
        self._algorithm.set_state(snapshot["state"])
        self.total_rolls = snapshot.get("total_rolls", 0)
        self.track_statistics = snapshot.get("track_statistics", False)

    def get_info(self) -> str:
        """Returns a human readable summary of the provider."""
        lines = [
            f"Algorithm: {self._algorithm.display_name} ({self._algorithm_name})",
            f"Seed: {self._seed if self._seed is not None else 'random'}",
            f"Statistics Tracking: {'enabled' if self.track_statistics else 'disabled'}",
            f"Total Rolls: {self.total_rolls}",
        ]
        return "\n".join(lines)


_default_provider: RandomProvider | None = None


def get_default_provider() -> RandomProvider:
    """
    Returns the process-wide provider, creating it on first use.
    """
    global _default_provider
    if _default_provider is None:
        _default_provider = RandomProvider()
    return _default_provider


def set_default_provider(provider: RandomProvider | None) -> None:
    """
    Replace the process-wide provider. Passing None makes the next call to
    get_default_provider create a fresh one.
    """
    global _default_provider
    _default_provider = provider
