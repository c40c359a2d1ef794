import pytest

from nnx import ArgumentError, RandomGenerator, get_random


def test_same_seed_reproduces_the_stream():
    a, b = get_random(123), get_random(123)
    assert [a.next_double() for _ in range(20)] == [b.next_double() for _ in range(20)]
    assert [a.next_int(7) for _ in range(20)] == [b.next_int(7) for _ in range(20)]


def test_different_seeds_diverge():
    a, b = RandomGenerator(1), RandomGenerator(2)
    assert [a.next_double() for _ in range(5)] != [b.next_double() for _ in range(5)]


def test_values_stay_in_range():
    rand = RandomGenerator(0)
    doubles = [rand.next_double() for _ in range(1000)]
    ints = [rand.next_int(3) for _ in range(1000)]
    assert all(0.0 <= value < 1.0 for value in doubles)
    assert set(ints) == {0, 1, 2}


def test_next_int_is_derived_from_next_double():
    doubles = RandomGenerator(99)
    ints = RandomGenerator(99)
    for _ in range(50):
        assert ints.next_int(10) == int(doubles.next_double() * 10)


def test_next_int_needs_a_positive_bound():
    with pytest.raises(ArgumentError):
        RandomGenerator(0).next_int(0)


def test_uniform_and_shuffle():
    rand = RandomGenerator(5)
    assert all(-2.0 <= rand.uniform(-2.0, 3.0) < 3.0 for _ in range(100))
    items = list(range(10))
    rand.shuffle(items)
    assert sorted(items) == list(range(10))

    first, second = list(range(10)), list(range(10))
    RandomGenerator(8).shuffle(first)
    RandomGenerator(8).shuffle(second)
    assert first == second
