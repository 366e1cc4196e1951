"""
Session controller.

Owns one play-through: the board, the match state machine, the countdown and
the win/lose decision. The host owns the controller and the event loop that
drives its scheduler; UI chrome calls ``start``/``restart`` and the input
layer forwards card selections.
"""
from __future__ import annotations

import logging
from typing import Optional

from config.base import BaseConfiguration

from .board import Board
from .data_models import Card, Outcome, SelectionState, SessionState, SessionSummary
from .events import EventHub, EventType, GameEvent, GameListener
from .match_machine import MatchStateMachine
from .random_source import RandomSource
from .scheduling import ScheduledAction, Scheduler

logger = logging.getLogger(__name__)


class SessionError(Exception):
    """Raised when a session transition contradicts the game state."""
    pass


class SessionController:
    """Lifecycle IDLE -> RUNNING -> ENDED, back to IDLE only through restart."""

    def __init__(
        self,
        config: BaseConfiguration,
        scheduler: Scheduler,
        rng: Optional[RandomSource] = None,
    ) -> None:
        config.validate()
        self.config = config
        self.scheduler = scheduler
        self.rng = rng or RandomSource()

        self._events = EventHub()
        self._state = SessionState.IDLE
        self._outcome = Outcome.NONE
        self._time_remaining = config.time_budget_seconds
        self._timer: Optional[ScheduledAction] = None

        self._board = self._new_board()
        self._machine = self._new_machine(self._board)

    def _new_board(self) -> Board:
        return Board(self.config.rows, self.config.cols, self.config.symbol_count)

    def _new_machine(self, board: Board) -> MatchStateMachine:
        return MatchStateMachine(
            board,
            self.scheduler,
            self.config.mismatch_recovery_delay_ms,
            on_match=self.on_match_event,
            emit=self._emit,
        )

    # ------------------------------------------------------------------
    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def outcome(self) -> Outcome:
        return self._outcome

    @property
    def time_remaining(self) -> int:
        return self._time_remaining

    @property
    def board(self) -> Board:
        return self._board

    @property
    def selection_state(self) -> SelectionState:
        return self._machine.state

    @property
    def is_running(self) -> bool:
        return self._state is SessionState.RUNNING

    def summary(self) -> SessionSummary:
        return SessionSummary(
            state=self._state,
            outcome=self._outcome,
            time_remaining=self._time_remaining,
            matched_count=self._board.matched_count,
            total_cards=self._board.size,
        )

    def add_listener(self, callback: GameListener) -> None:
        self._events.add_listener(callback)

    def remove_listener(self, callback: GameListener) -> None:
        self._events.remove_listener(callback)

    # ------------------------------------------------------------------
    def start(self) -> bool:
        """Shuffle the board and start the countdown. No-op unless IDLE."""
        if self._state is not SessionState.IDLE:
            logger.debug("start() ignored in state %s", self._state.value)
            return False

        self._board.reset(self.rng)
        self._time_remaining = self.config.time_budget_seconds
        self._outcome = Outcome.NONE
        self._state = SessionState.RUNNING
        self._timer = self.scheduler.call_every(self.config.tick_interval_ms, self.tick)
        logger.info("Session started: %dx%d board, %ds budget",
                    self.config.rows, self.config.cols, self._time_remaining)
        self._emit(EventType.SESSION_STARTED)
        return True

    def tick(self) -> None:
        """One countdown step; ends the session as lost at zero."""
        if self._state is not SessionState.RUNNING:
            return
        self._time_remaining = max(0, self._time_remaining - 1)
        self._emit(EventType.TIMER_TICK)
        if self._time_remaining == 0:
            self.end(won=False)

    def on_match_event(self) -> None:
        if self._state is SessionState.RUNNING and self._board.is_complete():
            self.end(won=True)

    def end(self, won: bool) -> bool:
        """
        Finish the running session.

        Args:
            won: True when the board was completed, False when time ran out

        Returns:
            True if the session ended now, False if it was not running

        Raises:
            SessionError: If the outcome contradicts the board or the clock
        """
        if self._state is not SessionState.RUNNING:
            return False
        if won and not self._board.is_complete():
            raise SessionError("cannot win with an incomplete board")
        if not won and self._time_remaining > 0:
            raise SessionError("cannot lose with time remaining")

        self._stop_timers()
        self._outcome = Outcome.WON if won else Outcome.LOST
        self._state = SessionState.ENDED
        logger.info("Session ended: %s (%d/%d matched, %ds left)", self._outcome.value,
                    self._board.matched_count, self._board.size, self._time_remaining)
        self._emit(EventType.SESSION_ENDED)
        return True

    def restart(self) -> bool:
        """Discard the board and selection, back to IDLE. Aborts a running session."""
        if self._state is SessionState.IDLE:
            return False
        if self._state is SessionState.RUNNING:
            logger.info("Session aborted with %ds left", self._time_remaining)

        self._stop_timers()
        self._board = self._new_board()
        self._machine = self._new_machine(self._board)
        self._outcome = Outcome.NONE
        self._time_remaining = self.config.time_budget_seconds
        self._state = SessionState.IDLE
        self._emit(EventType.SESSION_RESET)
        return True

    def _stop_timers(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._machine.teardown()

    # ------------------------------------------------------------------
    def select(self, card: Card) -> bool:
        """Forward a selected card to the match state machine."""
        if self._state is not SessionState.RUNNING:
            return False
        return self._machine.select(card)

    def select_index(self, index: int) -> bool:
        if not 0 <= index < self._board.size:
            return False
        return self.select(self._board.card_at_index(index))

    def select_at(self, row: int, col: int) -> bool:
        if not (0 <= row < self._board.rows and 0 <= col < self._board.cols):
            return False
        return self.select(self._board.card_at(row, col))

    def _emit(self, event_type: EventType, cards: tuple = ()) -> None:
        self._events.notify(GameEvent(
            type=event_type,
            session_state=self._state,
            time_remaining=self._time_remaining,
            outcome=self._outcome,
            cards=tuple(cards),
        ))
