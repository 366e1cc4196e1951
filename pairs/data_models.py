"""Core data structures for the pairs game engine.

Contains the fundamental data models shared by the board, the match state
machine, the session controller and any UI implementation.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SessionState(Enum):
    """Lifecycle of a single play-through."""
    IDLE = "idle"
    RUNNING = "running"
    ENDED = "ended"


class Outcome(Enum):
    """Result of a session once it has ended."""
    NONE = "none"
    WON = "won"
    LOST = "lost"


class SelectionState(Enum):
    """States of the reveal/match state machine."""
    IDLE = "idle"
    ONE_SELECTED = "one_selected"
    RESOLVING = "resolving"


@dataclass(slots=True, eq=False)
class Card:
    """One cell of the board.

    Compared by identity: two cards with the same symbol are still different
    cards.
    """
    row: int
    col: int
    symbol: int
    revealed: bool = False
    matched: bool = False


@dataclass(frozen=True, slots=True)
class CardView:
    """Read-only view of a card for the rendering surface.

    ``symbol`` is None while the card is face-down.
    """
    row: int
    col: int
    symbol: Optional[int]
    revealed: bool
    matched: bool


@dataclass(slots=True)
class SelectionPair:
    """Up to two cards chosen and awaiting match resolution."""
    first: Optional[Card] = None
    second: Optional[Card] = None

    def clear(self) -> None:
        self.first = None
        self.second = None

    @property
    def is_empty(self) -> bool:
        return self.first is None and self.second is None


@dataclass(frozen=True, slots=True)
class SessionSummary:
    """Snapshot of a session for end-screen and countdown display."""
    state: SessionState
    outcome: Outcome
    time_remaining: int
    matched_count: int
    total_cards: int
