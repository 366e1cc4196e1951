"""
Board model for the pairs game.

Owns the grid of cards and the matched counter. Cards are only mutated
through the methods here, which the match state machine drives.
"""
from __future__ import annotations

import logging
from typing import Iterator, List

from .data_models import Card, CardView
from .random_source import RandomSource
from .shuffle import build_deck, shuffle

logger = logging.getLogger(__name__)


class BoardError(Exception):
    """Raised when a board operation would break a board invariant."""
    pass


class Board:
    """
    Mutable rows x cols grid of cards.

    Rep:
      - every symbol 1..symbol_count appears on exactly two cards
      - matched => revealed
      - matched_count == number of matched cards, always even
    """

    def __init__(self, rows: int, cols: int, symbol_count: int) -> None:
        if rows <= 0 or cols <= 0:
            raise ValueError("rows/cols must be positive")
        if rows * cols != symbol_count * 2:
            raise ValueError(
                f"a {rows}x{cols} board needs {rows * cols // 2} symbol pairs, got {symbol_count}"
            )

        self._rows = rows
        self._cols = cols
        self._symbol_count = symbol_count
        self._matched_count = 0
        values = iter(build_deck(symbol_count))
        self._grid: List[List[Card]] = [
            [Card(row=r, col=c, symbol=next(values)) for c in range(cols)]
            for r in range(rows)
        ]
        self._check_rep()

    def _check_rep(self) -> None:
        assert len(self._grid) == self._rows
        counts: dict[int, int] = {}
        matched = 0
        for row in self._grid:
            assert len(row) == self._cols
            for card in row:
                counts[card.symbol] = counts.get(card.symbol, 0) + 1
                if card.matched:
                    assert card.revealed
                    matched += 1
        assert sorted(counts) == list(range(1, self._symbol_count + 1))
        assert all(n == 2 for n in counts.values())
        assert matched == self._matched_count
        assert self._matched_count % 2 == 0

    # ------------------------------------------------------------------
    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def symbol_count(self) -> int:
        return self._symbol_count

    @property
    def size(self) -> int:
        return self._rows * self._cols

    @property
    def matched_count(self) -> int:
        return self._matched_count

    @property
    def permutation(self) -> List[int]:
        """Symbols in row-major order."""
        return [card.symbol for card in self]

    def __iter__(self) -> Iterator[Card]:
        for row in self._grid:
            yield from row

    def __len__(self) -> int:
        return self.size

    def card_at(self, row: int, col: int) -> Card:
        if not (0 <= row < self._rows and 0 <= col < self._cols):
            raise IndexError(f"invalid coordinate ({row}, {col})")
        return self._grid[row][col]

    def card_at_index(self, index: int) -> Card:
        if not 0 <= index < self.size:
            raise IndexError(f"invalid card index {index}")
        return self._grid[index // self._cols][index % self._cols]

    def index_of(self, card: Card) -> int:
        return card.row * self._cols + card.col

    def owns(self, card: Card) -> bool:
        """True if ``card`` is the live card at its position on this board."""
        if not (0 <= card.row < self._rows and 0 <= card.col < self._cols):
            return False
        return self._grid[card.row][card.col] is card

    def snapshot(self) -> List[CardView]:
        """Per-cell view for drawing; face-down symbols are hidden."""
        return [
            CardView(
                row=card.row,
                col=card.col,
                symbol=card.symbol if card.revealed else None,
                revealed=card.revealed,
                matched=card.matched,
            )
            for card in self
        ]

    # ------------------------------------------------------------------
    def reset(self, rng: RandomSource) -> List[int]:
        """
        Shuffle a fresh deck onto the board and clear all flags.

        Args:
            rng: Randomness source for the shuffle

        Returns:
            The deck permutation, in row-major order
        """
        deck = shuffle(build_deck(self._symbol_count), rng)
        for card, symbol in zip(self, deck):
            card.symbol = symbol
            card.revealed = False
            card.matched = False
        self._matched_count = 0
        self._check_rep()
        logger.debug("Board reset: %s", deck)
        return deck

    def flip_up(self, card: Card) -> int:
        """Turn a card face-up and return its symbol."""
        self._validate(card)
        if card.matched:
            raise BoardError("cannot flip a matched card")
        card.revealed = True
        return card.symbol

    def flip_down(self, card: Card) -> None:
        self._validate(card)
        if card.matched:
            raise BoardError("cannot flip down a matched card")
        card.revealed = False

    def mark_matched(self, a: Card, b: Card) -> None:
        """Lock two cards with the same symbol as a permanent match."""
        self._validate(a)
        self._validate(b)
        if a is b:
            raise BoardError("a card cannot match itself")
        if a.matched or b.matched:
            raise BoardError("card already matched")
        if a.symbol != b.symbol:
            raise BoardError(f"symbols do not match: {a.symbol} != {b.symbol}")

        a.matched = b.matched = True
        a.revealed = b.revealed = True
        self._matched_count += 2
        self._check_rep()

    def is_complete(self) -> bool:
        return self._matched_count == self.size

    def _validate(self, card: Card) -> None:
        if not self.owns(card):
            raise BoardError(f"card at ({card.row}, {card.col}) is not on this board")
