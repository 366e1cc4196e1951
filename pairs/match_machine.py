"""
Reveal/match state machine.

Governs which card selections are legal, detects matches, and flips a
mismatched pair back down after a fixed delay. While that delay runs the
machine is RESOLVING and drops every selection; the lockout lives here in
state so it holds whatever the input layer does.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple

from .board import Board
from .data_models import Card, SelectionPair, SelectionState
from .events import EventType
from .scheduling import ScheduledAction, Scheduler

logger = logging.getLogger(__name__)

EmitCallback = Callable[[EventType, Tuple[Card, ...]], None]
MatchCallback = Callable[[], None]


class MatchStateMachine:
    """
    Drives a Board through IDLE -> ONE_SELECTED -> RESOLVING -> IDLE.

    The machine borrows the board and scheduler; it creates neither. Pending
    mismatch recovery is keyed to a generation number so a callback from a
    superseded pair, or one that fires after teardown, changes nothing.
    """

    def __init__(
        self,
        board: Board,
        scheduler: Scheduler,
        recovery_delay_ms: int,
        *,
        on_match: Optional[MatchCallback] = None,
        emit: Optional[EmitCallback] = None,
    ) -> None:
        self.board = board
        self.scheduler = scheduler
        self.recovery_delay_ms = recovery_delay_ms
        self._on_match = on_match
        self._emit = emit

        self._state = SelectionState.IDLE
        self._pair = SelectionPair()
        self._generation = 0
        self._pending: Optional[ScheduledAction] = None
        self._torn_down = False

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def pair(self) -> SelectionPair:
        return self._pair

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_locked(self) -> bool:
        """True while a mismatched pair is waiting to be flipped back."""
        return self._state is SelectionState.RESOLVING

    def select(self, card: Card) -> bool:
        """
        Handle a "card was selected" signal from the input layer.

        Args:
            card: Card the player chose

        Returns:
            True if the selection was accepted and changed state
        """
        if self._torn_down or self._state is SelectionState.RESOLVING:
            logger.debug("Selection ignored: machine %s", "torn down" if self._torn_down else "locked")
            return False
        if not self.board.owns(card) or card.matched:
            return False

        if self._state is SelectionState.IDLE:
            if card.revealed:
                return False
            self.board.flip_up(card)
            self._pair.first = card
            self._state = SelectionState.ONE_SELECTED
            self._notify(EventType.CARD_REVEALED, card)
            return True

        # ONE_SELECTED
        first = self._pair.first
        assert first is not None
        if card is first:
            return False

        self.board.flip_up(card)
        self._pair.second = card
        self._state = SelectionState.RESOLVING
        self._notify(EventType.CARD_REVEALED, card)
        self._resolve(first, card)
        return True

    def _resolve(self, first: Card, second: Card) -> None:
        if first.symbol == second.symbol:
            self.board.mark_matched(first, second)
            self._pair.clear()
            self._state = SelectionState.IDLE
            logger.debug("Matched symbol %d, %d cards matched", first.symbol, self.board.matched_count)
            self._notify(EventType.PAIR_MATCHED, first, second)
            if self._on_match is not None:
                self._on_match()
            return

        self._generation += 1
        generation = self._generation
        logger.debug("Mismatch %d != %d, recovering in %dms", first.symbol, second.symbol, self.recovery_delay_ms)
        self._pending = self.scheduler.call_later(
            self.recovery_delay_ms, lambda: self._recover(generation)
        )
        # Listeners may tear the machine down, which must cancel the timer above.
        self._notify(EventType.PAIR_MISMATCHED, first, second)

    def _recover(self, generation: int) -> None:
        if self._torn_down or generation != self._generation:
            return
        first, second = self._pair.first, self._pair.second
        assert first is not None and second is not None
        self.board.flip_down(first)
        self.board.flip_down(second)
        self._pair.clear()
        self._pending = None
        self._state = SelectionState.IDLE
        self._notify(EventType.MISMATCH_RECOVERED, first, second)

    def teardown(self) -> None:
        """Cancel pending recovery and stop accepting selections."""
        self._generation += 1
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        self._torn_down = True

    def _notify(self, event_type: EventType, *cards: Card) -> None:
        if self._emit is not None:
            self._emit(event_type, cards)
