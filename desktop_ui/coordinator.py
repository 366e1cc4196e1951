"""
Qt bridge for the pairs engine.

Runs the session on the Qt event loop through QTimer, exposes session state
as Qt properties for QML chrome (countdown, end screen) and feeds a
BoardModel to the card surface. Drawing itself stays in QML.
"""
import logging
from typing import Callable, Optional

from PySide6.QtCore import QObject, Property, QTimer, Signal, Slot

from config.desktop import DesktopConfiguration
from pairs.data_models import Outcome, SessionState
from pairs.events import EventType, GameEvent
from pairs.random_source import RandomSource
from pairs.scheduling import ScheduledAction, Scheduler
from pairs.session import SessionController
from pairs.ui_logic.grid_layout import CardLayout, compute_layout
from .qt_models.board_model import BoardModel

logger = logging.getLogger(__name__)

LOW_TIME_WARNING_SECONDS = 10


def format_countdown(seconds: Optional[int]) -> str:
    if seconds is None or seconds < 0:
        return "00:00"
    m, s = divmod(int(seconds), 60)
    return f"{m:02}:{s:02}"


class _QtAction(ScheduledAction):
    def __init__(self, timer: QTimer) -> None:
        self._timer = timer
        self._active = True

    def cancel(self) -> None:
        if not self._active:
            return
        self._active = False
        self._timer.stop()
        self._timer.deleteLater()

    @property
    def active(self) -> bool:
        return self._active

    def finish(self) -> None:
        self._active = False
        self._timer.deleteLater()


class QtScheduler(Scheduler):
    """Scheduler backed by QTimer objects parented to a QObject."""

    def __init__(self, parent: QObject) -> None:
        self._parent = parent

    def _timer(self, interval_ms: int, single_shot: bool) -> QTimer:
        timer = QTimer(self._parent)
        timer.setSingleShot(single_shot)
        timer.setInterval(max(0, interval_ms))
        return timer

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledAction:
        timer = self._timer(delay_ms, True)
        action = _QtAction(timer)

        def fire() -> None:
            if action.active:
                action.finish()
                callback()

        timer.timeout.connect(fire)
        timer.start()
        return action

    def call_every(self, interval_ms: int, callback: Callable[[], None]) -> ScheduledAction:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        timer = self._timer(interval_ms, False)
        action = _QtAction(timer)

        def fire() -> None:
            if action.active:
                callback()

        timer.timeout.connect(fire)
        timer.start()
        return action


class GameCoordinator(QObject):
    """
    Owns one SessionController and mirrors it to QML.

    Chrome calls startGame/restartGame, the card surface forwards taps
    through selectCard or selectAt and re-reads geometry after resizeViewport.
    """

    sessionStateChanged = Signal()
    countdownChanged = Signal()
    layoutChanged = Signal()
    gameEnded = Signal(bool)  # won
    cardRevealed = Signal(int)  # card index, for the flip sound
    cardsHidden = Signal()
    matchedCountChanged = Signal()

    def __init__(self, config: Optional[DesktopConfiguration] = None, rng: Optional[RandomSource] = None) -> None:
        super().__init__()
        self.config = config or DesktopConfiguration()
        self.scheduler = QtScheduler(self)
        self.session = SessionController(self.config, self.scheduler, rng)
        self.session.add_listener(self._on_game_event)

        self._layout = compute_layout(
            self.config.window_width,
            self.config.window_height,
            self.config.rows,
            self.config.cols,
            self.config.device_class,
        )
        self.board_model = BoardModel(self.session.board, self._layout)
        logger.info("Game coordinator initialized (%s)", self.config.device_class.value)

    # ------------------------------------------------------------------
    def _on_game_event(self, event: GameEvent) -> None:
        board = self.session.board
        indices = [board.index_of(card) for card in event.cards if board.owns(card)]

        if event.type is EventType.SESSION_RESET:
            self.board_model.set_board(board)
            self.sessionStateChanged.emit()
            self.countdownChanged.emit()
            self.matchedCountChanged.emit()
        elif event.type is EventType.SESSION_STARTED:
            self.board_model.refresh()
            self.sessionStateChanged.emit()
            self.countdownChanged.emit()
        elif event.type is EventType.CARD_REVEALED:
            self.board_model.refresh(indices)
            for index in indices:
                self.cardRevealed.emit(index)
        elif event.type is EventType.PAIR_MATCHED:
            self.board_model.refresh(indices)
            self.matchedCountChanged.emit()
        elif event.type is EventType.PAIR_MISMATCHED:
            self.board_model.refresh(indices)
        elif event.type is EventType.MISMATCH_RECOVERED:
            self.board_model.refresh(indices)
            self.cardsHidden.emit()
        elif event.type is EventType.TIMER_TICK:
            self.countdownChanged.emit()
        elif event.type is EventType.SESSION_ENDED:
            logger.info("Game over: %s", event.outcome.value)
            self.sessionStateChanged.emit()
            self.countdownChanged.emit()
            self.gameEnded.emit(event.outcome is Outcome.WON)

    # Qt Properties for QML binding
    @Property(str, notify=sessionStateChanged)
    def sessionState(self) -> str:
        """idle, running or ended"""
        return self.session.state.value

    @Property(bool, notify=sessionStateChanged)
    def isRunning(self) -> bool:
        return self.session.state is SessionState.RUNNING

    @Property(str, notify=sessionStateChanged)
    def outcome(self) -> str:
        """none, won or lost"""
        return self.session.outcome.value

    @Property(int, notify=countdownChanged)
    def timeRemaining(self) -> int:
        return self.session.time_remaining

    @Property(str, notify=countdownChanged)
    def countdownText(self) -> str:
        return format_countdown(self.session.time_remaining)

    @Property(bool, notify=countdownChanged)
    def timeWarning(self) -> bool:
        """True when the countdown is low enough to flash."""
        return self.session.time_remaining <= LOW_TIME_WARNING_SECONDS

    @Property(int, notify=matchedCountChanged)
    def matchedCount(self) -> int:
        return self.session.board.matched_count

    @Property(str, notify=sessionStateChanged)
    def endTitle(self) -> str:
        if self.session.outcome is Outcome.WON:
            return "Congratulations!"
        if self.session.outcome is Outcome.LOST:
            return "Time's Up!"
        return ""

    @Property(str, notify=sessionStateChanged)
    def endMessage(self) -> str:
        summary = self.session.summary()
        if summary.outcome is Outcome.WON:
            return f"You won with {summary.time_remaining} seconds remaining!"
        if summary.outcome is Outcome.LOST:
            return f"You matched {summary.matched_count} out of {summary.total_cards} cards."
        return ""

    @Property(float, notify=layoutChanged)
    def cardSize(self) -> float:
        return self._layout.card_size

    @Property(float, notify=layoutChanged)
    def cardBackScale(self) -> float:
        return self._layout.card_back_scale

    @Property(float, notify=layoutChanged)
    def cardFrontScale(self) -> float:
        return self._layout.card_front_scale

    @property
    def card_layout(self) -> CardLayout:
        return self._layout

    # ------------------------------------------------------------------
    @Slot()
    def startGame(self) -> None:
        self.session.start()

    @Slot()
    def restartGame(self) -> None:
        self.session.restart()

    @Slot(int, result=bool)
    def selectCard(self, index: int) -> bool:
        """Forward a tap on the card at ``index`` (row-major)."""
        return self.session.select_index(index)

    @Slot(float, float, result=bool)
    def selectAt(self, x: float, y: float) -> bool:
        """Forward a tap at pixel coordinates."""
        hit = self._layout.card_at_point(x, y, self.config.rows, self.config.cols)
        if hit is None:
            return False
        return self.session.select_at(*hit)

    @Slot(float, float)
    def resizeViewport(self, width: float, height: float) -> None:
        if width <= 0 or height <= 0:
            logger.debug("Ignoring degenerate viewport %sx%s", width, height)
            return
        self._layout = compute_layout(width, height, self.config.rows, self.config.cols, self.config.device_class)
        self.board_model.set_layout(self._layout)
        self.layoutChanged.emit()

    def cleanup(self) -> None:
        """Cancel timers before shutdown."""
        logger.info("Cleaning up game coordinator")
        self.session.restart()
