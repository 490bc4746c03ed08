"""Tests for the seeded, domain-tagged LevelRNG."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from delve.core.enums import Domain
from delve.systems.rng import LevelRNG, random_seed


class TestLevelRNG:
    def test_same_seed_same_sequence(self):
        a, b = LevelRNG("seed"), LevelRNG("seed")
        assert [a.next_int(Domain.ROOMS, 0, 1000) for _ in range(20)] == \
               [b.next_int(Domain.ROOMS, 0, 1000) for _ in range(20)]

    def test_different_seeds_diverge(self):
        a, b = LevelRNG("one"), LevelRNG("two")
        assert [a.next_float(Domain.ROOMS) for _ in range(5)] != [b.next_float(Domain.ROOMS) for _ in range(5)]

    def test_domains_are_separated(self):
        a, b = LevelRNG("seed"), LevelRNG("seed")
        assert a.next_float(Domain.ROOMS) != b.next_float(Domain.DOORS)

    def test_next_int_inclusive_bounds(self):
        rng = LevelRNG("bounds")
        values = {rng.next_int(Domain.ROOMS, 3, 5) for _ in range(300)}
        assert values == {3, 4, 5}

    def test_single_value_range(self):
        assert LevelRNG("x").next_int(Domain.ROOMS, 7, 7) == 7

    def test_empty_range_rejected(self):
        with pytest.raises(ValueError):
            LevelRNG("x").next_int(Domain.ROOMS, 5, 4)

    def test_float_range(self):
        rng = LevelRNG("floats")
        assert all(0.0 <= rng.next_float(Domain.NPC) < 1.0 for _ in range(200))

    def test_choice_from_empty(self):
        with pytest.raises(IndexError):
            LevelRNG("x").choice(Domain.ROOMS, [])

    def test_sample_distinct(self):
        picked = LevelRNG("sample").sample(Domain.DOORS, range(10), 4)
        assert len(picked) == 4
        assert len(set(picked)) == 4

    def test_shuffle_is_permutation(self):
        items = list(range(20))
        LevelRNG("shuffle").shuffle(Domain.ROOMS, items)
        assert sorted(items) == list(range(20))

    def test_uuid_deterministic(self):
        assert LevelRNG("id").next_uuid(Domain.CONTAINERS) == LevelRNG("id").next_uuid(Domain.CONTAINERS)

    def test_seed_kept(self):
        assert LevelRNG("kept").seed == "kept"


def test_random_seed():
    seed = random_seed()
    assert len(seed) == 16
    int(seed, 16)
    assert random_seed() != seed
