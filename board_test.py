from collections import Counter

import pytest

from conftest import ScriptedRandom, ALTERNATING_2X2
from pairs.board import Board, BoardError
from pairs.random_source import RandomSource


def test_flip_and_match():
    b = Board(2, 2, 2)
    b.reset(ScriptedRandom(ALTERNATING_2X2))
    first, third = b.card_at(0, 0), b.card_at(1, 0)

    assert b.flip_up(first) == 1
    assert b.flip_up(third) == 1

    b.mark_matched(first, third)
    assert first.matched and first.revealed
    assert third.matched and third.revealed
    assert b.matched_count == 2
    assert not b.is_complete()


def test_cannot_flip_matched():
    b = Board(1, 2, 1)
    a, c = b.card_at(0, 0), b.card_at(0, 1)
    b.mark_matched(a, c)
    with pytest.raises(BoardError):
        b.flip_up(a)
    with pytest.raises(BoardError):
        b.flip_down(c)


def test_new_board_is_face_down_with_pairs():
    b = Board(4, 4, 8)
    assert b.size == 16
    assert b.matched_count == 0
    assert Counter(b.permutation) == {s: 2 for s in range(1, 9)}
    assert all(not card.revealed and not card.matched for card in b)


def test_board_shape_must_fit_symbols():
    with pytest.raises(ValueError):
        Board(3, 3, 4)
    with pytest.raises(ValueError):
        Board(0, 4, 0)


def test_reset_assigns_row_major_permutation():
    b = Board(2, 2, 2)
    deck = b.reset(ScriptedRandom(ALTERNATING_2X2))
    assert deck == [1, 2, 1, 2]
    assert b.permutation == [1, 2, 1, 2]
    assert [b.card_at_index(i).symbol for i in range(4)] == [1, 2, 1, 2]
    assert b.card_at(1, 1).symbol == 2


def test_reset_clears_flags_and_count():
    b = Board(2, 2, 2)
    b.reset(ScriptedRandom(ALTERNATING_2X2))
    b.mark_matched(b.card_at(0, 0), b.card_at(1, 0))
    b.flip_up(b.card_at(0, 1))

    corner = b.card_at(0, 0)
    b.reset(RandomSource(seed=5))
    assert b.card_at(0, 0) is corner
    assert b.matched_count == 0
    assert all(not card.revealed and not card.matched for card in b)
    assert Counter(b.permutation) == {1: 2, 2: 2}


def test_consecutive_resets_differ():
    b = Board(4, 4, 8)
    rng = RandomSource()
    previous = b.reset(rng)
    repeats = 0
    for _ in range(100):
        current = b.reset(rng)
        repeats += current == previous
        previous = current
    assert repeats == 0


def test_mark_matched_rejects_different_symbols():
    b = Board(2, 2, 2)
    b.reset(ScriptedRandom(ALTERNATING_2X2))
    with pytest.raises(BoardError):
        b.mark_matched(b.card_at(0, 0), b.card_at(0, 1))
    assert b.matched_count == 0


def test_mark_matched_rejects_same_card_and_rematch():
    b = Board(2, 2, 2)
    b.reset(ScriptedRandom(ALTERNATING_2X2))
    card = b.card_at(0, 0)
    with pytest.raises(BoardError):
        b.mark_matched(card, card)

    b.mark_matched(card, b.card_at(1, 0))
    with pytest.raises(BoardError):
        b.mark_matched(card, b.card_at(1, 0))
    assert b.matched_count == 2


def test_cards_from_another_board_are_rejected():
    b = Board(1, 2, 1)
    other = Board(1, 2, 1)
    assert not b.owns(other.card_at(0, 0))
    with pytest.raises(BoardError):
        b.flip_up(other.card_at(0, 0))


def test_complete_when_all_pairs_matched():
    b = Board(2, 2, 2)
    b.reset(ScriptedRandom(ALTERNATING_2X2))
    b.mark_matched(b.card_at(0, 0), b.card_at(1, 0))
    b.mark_matched(b.card_at(0, 1), b.card_at(1, 1))
    assert b.matched_count == 4
    assert b.is_complete()


def test_snapshot_hides_face_down_symbols():
    b = Board(2, 2, 2)
    b.reset(ScriptedRandom(ALTERNATING_2X2))
    b.flip_up(b.card_at(0, 1))

    views = b.snapshot()
    assert [v.symbol for v in views] == [None, 2, None, None]
    assert views[1].revealed and not views[1].matched
    assert (views[3].row, views[3].col) == (1, 1)


def test_lookup_bounds():
    b = Board(2, 2, 2)
    with pytest.raises(IndexError):
        b.card_at(2, 0)
    with pytest.raises(IndexError):
        b.card_at_index(4)
    assert b.index_of(b.card_at(1, 0)) == 2
