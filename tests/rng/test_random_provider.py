"""
Tests for the randomness provider.
"""

import pytest

from combat_core.core.errors import InvalidDistribution, InvalidRange, UnknownAlgorithm
from combat_core.rng import provider as provider_module
from combat_core.rng.algorithms import available_algorithms, create_algorithm
from combat_core.rng.provider import (
    RandomProvider,
    get_default_provider,
    set_default_provider,
)


@pytest.fixture
def seeded():
    return RandomProvider(seed=42)


def test_roll_is_inclusive(seeded):
    """
    Test that both ends of a roll can be drawn and nothing outside them.
    """
    results = {seeded.roll(1, 3) for _ in range(500)}
    assert results == {1, 2, 3}


def test_roll_single_value(seeded):
    assert seeded.roll(7, 7) == 7


def test_roll_invalid_range_raises(seeded):
    with pytest.raises(InvalidRange) as excinfo:
        seeded.roll(10, 5)
    assert excinfo.value.minimum == 10
    assert excinfo.value.maximum == 5


def test_invalid_range_is_a_value_error(seeded):
    with pytest.raises(ValueError):
        seeded.roll(2, 1)


def test_next_int_is_exclusive(seeded):
    results = {seeded.next_int(0, 3) for _ in range(500)}
    assert results == {0, 1, 2}
    assert seeded.next_int(4, 4) == 4


def test_random_in_unit_interval(seeded):
    for _ in range(200):
        value = seeded.random()
        assert 0.0 <= value < 1.0


def test_random_float_bounds(seeded):
    for _ in range(200):
        value = seeded.random_float(2.5, 3.5)
        assert 2.5 <= value < 3.5


def test_chance_extremes(seeded):
    assert not any(seeded.chance(0.0) for _ in range(100))
    assert all(seeded.chance(1.0) for _ in range(100))


def test_roll_percentage_uses_d100(scripted, provider):
    """
    Test that a percentage check succeeds when the d100 is at most the chance.
    """
    scripted.push_roll(30, 31)
    assert provider.roll_percentage(30)
    assert not provider.roll_percentage(30)


def test_roll_dice_sums_each_die(scripted, provider):
    scripted.push_roll(1, 6, 3)
    assert provider.roll_dice(3, 6) == 10


def test_same_seed_same_sequence():
    """
    Test that a fixed seed makes the whole sequence reproducible.
    """
    first = RandomProvider(seed=99)
    second = RandomProvider(seed=99)
    assert [first.roll(1, 100) for _ in range(50)] == [
        second.roll(1, 100) for _ in range(50)
    ]


@pytest.mark.parametrize("algorithm", ["mt19937", "xorshift"])
def test_seedable_algorithms_are_reproducible(algorithm):
    first = RandomProvider(algorithm=algorithm, seed=7)
    second = RandomProvider(algorithm=algorithm, seed=7)
    assert [first.roll(1, 20) for _ in range(30)] == [second.roll(1, 20) for _ in range(30)]


def test_xorshift_stays_in_range():
    provider = RandomProvider(algorithm="xorshift", seed=3)
    results = {provider.roll(1, 6) for _ in range(600)}
    assert results == {1, 2, 3, 4, 5, 6}


def test_available_algorithms():
    names = available_algorithms()
    assert {"mt19937", "xorshift", "system"} <= set(names)
    assert names == sorted(names)


def test_set_algorithm_changes_current(seeded):
    seeded.set_algorithm("xorshift", seed=5)
    assert seeded.current_algorithm == "xorshift"
    assert seeded.seed == 5


def test_unknown_algorithm_raises(seeded):
    with pytest.raises(UnknownAlgorithm):
        seeded.set_algorithm("dice-bag")
    with pytest.raises(ValueError):
        create_algorithm("dice-bag")


def test_weighted_index_follows_weights(scripted, provider):
    """
    Test that the weighted pick maps the draw onto the cumulative weights.
    """
    # Cumulative weights are 1, 4, 10: draws 0, 3 and 9 land in each bucket.
    scripted.push_roll(0, 3, 9, minimum=0)
    assert provider.weighted_index([1, 3, 6]) == 0
    assert provider.weighted_index([1, 3, 6]) == 1
    assert provider.weighted_index([1, 3, 6]) == 2


def test_weighted_index_never_picks_zero_weight(seeded):
    picks = {seeded.weighted_index([0, 5, 0, 5]) for _ in range(300)}
    assert picks == {1, 3}


@pytest.mark.parametrize("weights", [[], [0, 0, 0], [3, -1, 2]])
def test_weighted_index_invalid_distribution(seeded, weights):
    with pytest.raises(InvalidDistribution):
        seeded.weighted_index(weights)


def test_weighted_choice_length_mismatch(seeded):
    with pytest.raises(InvalidDistribution):
        seeded.weighted_choice(["a", "b"], [1])


def test_shuffle_is_a_permutation(seeded):
    items = list(range(20))
    seeded.shuffle(items)
    assert sorted(items) == list(range(20))


def test_sample_without_replacement(seeded):
    picked = seeded.sample(list(range(10)), 10)
    assert sorted(picked) == list(range(10))
    assert len(set(seeded.sample("abcdef", 3))) == 3


def test_sample_too_many_raises(seeded):
    with pytest.raises(InvalidRange):
        seeded.sample([1, 2, 3], 4)


@pytest.mark.parametrize(
    "misuse, error",
    [
        (lambda p: p.roll(6, 1), InvalidRange),
        (lambda p: p.next_int(6, 1), InvalidRange),
        (lambda p: p.random_float(2.0, 1.0), InvalidRange),
        (lambda p: p.roll_dice(2, 0), InvalidRange),
        (lambda p: p.choice([]), InvalidRange),
        (lambda p: p.sample([1, 2], 3), InvalidRange),
        (lambda p: p.weighted_index([0]), InvalidDistribution),
        (lambda p: p.weighted_choice(["a"], [1, 2]), InvalidDistribution),
    ],
)
def test_misuse_is_logged_before_raising(seeded, mocker, misuse, error):
    spy = mocker.spy(provider_module, "log_critical")
    with pytest.raises(error):
        misuse(seeded)
    spy.assert_called_once()
    assert isinstance(spy.call_args.kwargs["exception"], error)


def test_statistics_disabled_by_default(seeded):
    seeded.roll(1, 6)
    assert seeded.total_rolls == 0


def test_statistics_count_each_public_draw(seeded):
    """
    Test that every public draw counts once, and every die of a dice roll.
    """
    seeded.set_statistics_tracking(True)
    seeded.roll(1, 6)
    seeded.random()
    seeded.weighted_index([1, 2])
    seeded.shuffle([1, 2, 3])
    seeded.roll_dice(3, 6)
    assert seeded.total_rolls == 7
    seeded.reset_statistics()
    assert seeded.total_rolls == 0


def test_get_info_mentions_algorithm_and_rolls(seeded):
    seeded.set_statistics_tracking(True)
    seeded.roll(1, 4)
    info = seeded.get_info()
    assert "mt19937" in info
    assert "Total Rolls: 1" in info


@pytest.mark.parametrize("algorithm", ["mt19937", "xorshift"])
def test_state_round_trip(algorithm):
    """
    Test that a restored state replays the same draws.
    """
    provider = RandomProvider(algorithm=algorithm, seed=11)
    provider.roll(1, 100)
    state = provider.get_state()
    expected = [provider.roll(1, 100) for _ in range(10)]

    restored = RandomProvider()
    restored.set_state(state)
    assert [restored.roll(1, 100) for _ in range(10)] == expected


def test_system_entropy_has_no_state():
    provider = RandomProvider(algorithm="system")
    assert 1 <= provider.roll(1, 10) <= 10
    with pytest.raises(ValueError):
        provider.get_state()


def test_default_provider_is_shared():
    provider = RandomProvider(seed=1)
    set_default_provider(provider)
    assert get_default_provider() is provider
    set_default_provider(None)
    assert get_default_provider() is not provider
