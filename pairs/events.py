"""Game events delivered to audio and UI collaborators."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Tuple

from .data_models import Card, Outcome, SessionState

logger = logging.getLogger(__name__)


class EventType(Enum):
    SESSION_STARTED = "session_started"
    CARD_REVEALED = "card_revealed"
    PAIR_MATCHED = "pair_matched"
    PAIR_MISMATCHED = "pair_mismatched"
    MISMATCH_RECOVERED = "mismatch_recovered"
    TIMER_TICK = "timer_tick"
    SESSION_ENDED = "session_ended"
    SESSION_RESET = "session_reset"


@dataclass(frozen=True)
class GameEvent:
    """Something a collaborator may want to react to (sound, redraw, chrome)."""
    type: EventType
    session_state: SessionState
    time_remaining: int
    outcome: Outcome = Outcome.NONE
    cards: Tuple[Card, ...] = ()

    def __str__(self) -> str:
        where = ", ".join(f"({c.row},{c.col})" for c in self.cards)
        return f"GameEvent({self.type.value}, t={self.time_remaining}, cards=[{where}])"


GameListener = Callable[[GameEvent], None]


class EventHub:
    """Fire-and-forget fan-out of game events to registered listeners."""

    def __init__(self) -> None:
        self._listeners: List[GameListener] = []

    def add_listener(self, callback: GameListener) -> None:
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback: GameListener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def notify(self, event: GameEvent) -> None:
        for callback in list(self._listeners):
            try:
                callback(event)
            except Exception as exc:
                # A broken listener must not break the game.
                logger.error("Listener error on %s: %s", event.type.value, exc)
