"""
Random number algorithms for the combat core.

Each algorithm is a small strategy object exposing a uniform float draw and
an unbiased integer draw below a bound. Algorithms are registered by name so
the provider can swap them at runtime.
"""

import random
from collections.abc import Callable
from typing import Any

from combat_core.core.errors import UnknownAlgorithm

_MASK64 = (1 << 64) - 1


class RandomAlgorithm:
    """
    Base class for a named source of uniform randomness.

    Attributes:
        name (str):
            The registry name of the algorithm.
        display_name (str):
            The human readable name used in reports.
        seedable (bool):
            Whether the algorithm accepts a seed and exposes its state.

    """

    name: str = "base"
    display_name: str = "Base"
    seedable: bool = True

    def seed(self, seed: int | None) -> None:
        raise NotImplementedError("Subclasses must implement seed.")

    def random(self) -> float:
        """Returns a float uniformly distributed in [0, 1)."""
        raise NotImplementedError("Subclasses must implement random.")

    def randbelow(self, n: int) -> int:
        """Returns an integer uniformly distributed in [0, n)."""
        raise NotImplementedError("Subclasses must implement randbelow.")

    def get_state(self) -> Any:
        """Returns a JSON compatible snapshot of the internal state."""
        raise NotImplementedError(f"{self.name} does not expose its state.")

    def set_state(self, state: Any) -> None:
        """Restores a snapshot produced by get_state."""
        raise NotImplementedError(f"{self.name} does not expose its state.")


class MersenneTwister(RandomAlgorithm):
    """Mersenne Twister, backed by the interpreter's random.Random."""

    name = "mt19937"
    display_name = "Mersenne Twister (MT19937)"

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def seed(self, seed: int | None) -> None:
        self._rng.seed(seed)

    def random(self) -> float:
        return self._rng.random()

    def randbelow(self, n: int) -> int:
        return self._rng.randrange(n)

    def get_state(self) -> Any:
        version, internal, gauss_next = self._rng.getstate()
        return [version, list(internal), gauss_next]

    def set_state(self, state: Any) -> None:
        version, internal, gauss_next = state
        self._rng.setstate((version, tuple(internal), gauss_next))


class XorShift(RandomAlgorithm):
    """
    Xorshift64* generator.

    Small state, fast, and good enough for game rolls. The state is a single
    non-zero 64-bit integer, seeded through splitmix64 so that nearby seeds
    produce unrelated sequences.
    """

    name = "xorshift"
    display_name = "Xorshift64*"

    def __init__(self, seed: int | None = None) -> None:
        self._state = 1
        self.seed(seed)

    @staticmethod
    def _splitmix64(value: int) -> int:
        value = (value + 0x9E3779B97F4A7C15) & _MASK64
        value = ((value ^ (value >> 30)) * 0xBF58476D1CE4E5B9) & _MASK64
        value = ((value ^ (value >> 27)) * 0x94D049BB133111EB) & _MASK64
        return value ^ (value >> 31)

    def seed(self, seed: int | None) -> None:
        if seed is None:
            seed = random.SystemRandom().getrandbits(64)
        self._state = self._splitmix64(seed & _MASK64) or 1

    def _next(self) -> int:
        x = self._state
        x ^= x >> 12
        x ^= (x << 25) & _MASK64
        x ^= x >> 27
        self._state = x
        return (x * 0x2545F4914F6CDD1D) & _MASK64

    def random(self) -> float:
        return (self._next() >> 11) * (1.0 / (1 << 53))

    def randbelow(self, n: int) -> int:
        if n <= 0:
            raise ValueError("randbelow requires a positive bound.")
        bits = n.bit_length()
        # Rejection sampling on the top bits keeps the draw unbiased.
        while True:
            candidate = self._next() >> (64 - bits)
            if candidate < n:
                return candidate

    def get_state(self) -> Any:
        return self._state

    def set_state(self, state: Any) -> None:
        self._state = int(state) & _MASK64 or 1


class SystemEntropy(RandomAlgorithm):
    """Operating system entropy. Not reproducible, not seedable."""

    name = "system"
    display_name = "System Entropy"
    seedable = False

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.SystemRandom()

    def seed(self, seed: int | None) -> None:
        # SystemRandom ignores seeds.
        pass

    def random(self) -> float:
        return self._rng.random()

    def randbelow(self, n: int) -> int:
        return self._rng.randrange(n)


# === Registry ===

AlgorithmFactory = Callable[[int | None], RandomAlgorithm]

_ALGORITHMS: dict[str, AlgorithmFactory] = {
    MersenneTwister.name: MersenneTwister,
    XorShift.name: XorShift,
    SystemEntropy.name: SystemEntropy,
}

DEFAULT_ALGORITHM = MersenneTwister.name


def register_algorithm(name: str, factory: AlgorithmFactory) -> None:
    """
    Register a random algorithm under the given name.

    Args:
        name (str):
            The name used to select the algorithm.
        factory (AlgorithmFactory):
            Callable taking an optional seed and returning the algorithm.

    """
    _ALGORITHMS[name.lower()] = factory


def unregister_algorithm(name: str) -> None:
    """Remove a previously registered algorithm. Built-ins cannot be removed."""
    if name.lower() in (MersenneTwister.name, XorShift.name, SystemEntropy.name):
        raise ValueError(f"Cannot unregister built-in algorithm '{name}'.")
    _ALGORITHMS.pop(name.lower(), None)


def available_algorithms() -> list[str]:
    """Returns the names of every registered algorithm."""
    return sorted(_ALGORITHMS)


def create_algorithm(name: str, seed: int | None = None) -> RandomAlgorithm:
    """
    Instantiate a registered algorithm.

    Raises:
        UnknownAlgorithm:
            If no algorithm is registered under the name.

    """
    factory = _ALGORITHMS.get(name.lower())
    if factory is None:
        raise UnknownAlgorithm(name, available_algorithms())
    return factory(seed)
