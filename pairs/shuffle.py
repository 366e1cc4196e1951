"""Deck construction and shuffling."""
from __future__ import annotations

from typing import List, Sequence, TypeVar

from .random_source import RandomSource

T = TypeVar("T")


def build_deck(symbol_count: int) -> List[int]:
    """Return ``[1, 1, 2, 2, ..., n, n]`` for ``n = symbol_count``."""
    if symbol_count <= 0:
        raise ValueError("symbol_count must be positive")
    deck: List[int] = []
    for symbol in range(1, symbol_count + 1):
        deck.extend((symbol, symbol))
    return deck


def shuffle(deck: Sequence[T], rng: RandomSource) -> List[T]:
    """
    Return a uniformly shuffled copy of ``deck``.

    Single Fisher-Yates pass: walk from the last index down to 1 and swap
    each slot with one drawn from ``[0, i]``. The input is left untouched.

    Args:
        deck: Values to permute
        rng: Source of swap indices

    Returns:
        New list holding the same multiset in random order
    """
    result = list(deck)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randbelow(i + 1)
        result[i], result[j] = result[j], result[i]
    return result
