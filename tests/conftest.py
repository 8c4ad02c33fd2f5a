"""
Shared fixtures for the combat core tests.

Randomness is controlled through a scripted algorithm registered in the
provider: tests queue the exact rolls they expect, in order.
"""

from collections import deque

import pytest

from combat_core.combatants.combatant import Combatant
from combat_core.core.config import CombatConfig
from combat_core.core.constants import CombatantType
from combat_core.effects.effect_engine import EffectEngine
from combat_core.items.weapon import Weapon
from combat_core.rng.algorithms import (
    RandomAlgorithm,
    register_algorithm,
    unregister_algorithm,
)
from combat_core.rng.provider import RandomProvider, set_default_provider


class ScriptedAlgorithm(RandomAlgorithm):
    """Replays queued draws, failing loudly when a draw was not expected."""

    name = "scripted"
    display_name = "Scripted"
    seedable = False

    def __init__(self, seed: int | None = None) -> None:
        self.queue: deque[int] = deque()
        self.floats: deque[float] = deque()

    def seed(self, seed: int | None) -> None:
        pass

    def push_roll(self, *values: int, minimum: int = 1) -> None:
        """Queue inclusive rolls, as returned by provider.roll(minimum, ...)."""
        for value in values:
            self.queue.append(value - minimum)

    def push_float(self, *values: float) -> None:
        self.floats.extend(values)

    def random(self) -> float:
        assert self.floats, "Unexpected float draw."
        return self.floats.popleft()

    def randbelow(self, n: int) -> int:
        assert self.queue, "Unexpected integer draw."
        value = self.queue.popleft()
        assert 0 <= value < n, f"Scripted draw {value} is outside [0, {n})."
        return value


@pytest.fixture(autouse=True)
def default_provider():
    """Every test starts from a seeded process-wide provider."""
    provider = RandomProvider(seed=1234)
    set_default_provider(provider)
    yield provider
    set_default_provider(None)


@pytest.fixture
def scripted():
    algorithm = ScriptedAlgorithm()
    register_algorithm(ScriptedAlgorithm.name, lambda seed: algorithm)
    yield algorithm
    unregister_algorithm(ScriptedAlgorithm.name)
    assert not algorithm.queue, f"Unused scripted draws: {list(algorithm.queue)}"


@pytest.fixture
def provider(scripted):
    return RandomProvider(algorithm=ScriptedAlgorithm.name)


@pytest.fixture
def config():
    return CombatConfig()


@pytest.fixture
def effect_engine(provider):
    return EffectEngine(provider)


@pytest.fixture
def sword():
    return Weapon(
        name="Iron Sword",
        min_damage=10,
        max_damage=14,
        accuracy=80,
        crit_chance=10,
    )


@pytest.fixture
def hero(sword):
    return Combatant(
        name="Bell",
        combatant_type=CombatantType.PLAYER,
        level=10,
        max_health=100,
        base_speed=20,
        max_mana=50,
        weapon=sword,
    )


@pytest.fixture
def companion():
    return Combatant(
        name="Lili",
        combatant_type=CombatantType.COMPANION,
        level=4,
        max_health=60,
        base_speed=10,
        accuracy=70,
        crit_chance=5,
        damage_range=(4, 6),
    )


@pytest.fixture
def goblin():
    return Combatant(
        name="Goblin",
        combatant_type=CombatantType.ENEMY,
        level=2,
        max_health=40,
        base_speed=18,
        accuracy=70,
        crit_chance=5,
        damage_range=(3, 5),
    )
