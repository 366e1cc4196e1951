"""
Shuffle and randomness source tests
"""
import logging
import random
from collections import Counter
from itertools import permutations

import pytest

from pairs.random_source import RandomSource
from pairs.shuffle import build_deck, shuffle


def test_build_deck_has_every_symbol_twice():
    deck = build_deck(8)
    assert len(deck) == 16
    assert Counter(deck) == {symbol: 2 for symbol in range(1, 9)}


def test_build_deck_rejects_empty():
    with pytest.raises(ValueError):
        build_deck(0)


def test_shuffle_preserves_multiset():
    deck = build_deck(8)
    for seed in range(200):
        result = shuffle(deck, RandomSource(seed=seed))
        assert len(result) == 16
        assert Counter(result) == Counter(deck)


def test_shuffle_does_not_mutate_input():
    deck = build_deck(4)
    original = list(deck)
    shuffle(deck, RandomSource(seed=1))
    assert deck == original


def test_same_seed_same_permutation():
    deck = build_deck(8)
    assert shuffle(deck, RandomSource(seed=42)) == shuffle(deck, RandomSource(seed=42))


def test_every_value_reaches_every_position():
    deck = [0, 1, 2, 3]
    rng = RandomSource(seed=2024)
    placements = Counter()
    trials = 2000
    for _ in range(trials):
        for position, value in enumerate(shuffle(deck, rng)):
            placements[(value, position)] += 1

    for value in deck:
        for position in range(len(deck)):
            # expected 500 each
            assert 350 < placements[(value, position)] < 650


def test_permutations_are_uniform():
    deck = ["a", "b", "c"]
    rng = RandomSource(seed=7)
    seen = Counter(tuple(shuffle(deck, rng)) for _ in range(6000))
    assert set(seen) == set(permutations(deck))
    for count in seen.values():
        # expected 1000 each
        assert 850 < count < 1150


def test_consecutive_shuffles_differ():
    deck = build_deck(8)
    rng = RandomSource()
    previous = shuffle(deck, rng)
    repeats = 0
    for _ in range(100):
        current = shuffle(deck, rng)
        repeats += current == previous
        previous = current
    assert repeats == 0


def test_randbelow_bounds():
    rng = RandomSource(seed=3)
    values = {rng.randbelow(5) for _ in range(500)}
    assert values == {0, 1, 2, 3, 4}
    with pytest.raises(ValueError):
        rng.randbelow(0)


def test_unseeded_source_uses_system_randomness():
    rng = RandomSource()
    assert rng.seed is None
    assert not rng.is_fallback
    assert 0 <= rng.randbelow(16) < 16


def test_falls_back_when_strong_randomness_fails(monkeypatch, caplog):
    def unavailable(self, *args, **kwargs):
        raise NotImplementedError("no entropy source")

    monkeypatch.setattr(random.SystemRandom, "randrange", unavailable)
    rng = RandomSource()

    with caplog.at_level(logging.WARNING, logger="pairs.random_source"):
        value = rng.randbelow(10)

    assert 0 <= value < 10
    assert rng.is_fallback
    assert "fallback" in caplog.text

    # the deck still gets shuffled
    deck = build_deck(8)
    assert Counter(shuffle(deck, rng)) == Counter(deck)
