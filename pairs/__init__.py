"""
Pairs game-session engine.

Board model, shuffle, reveal/match state machine, countdown session and
responsive layout. Rendering, audio and input capture live outside and talk
to the engine through listeners and ``select`` calls.
"""
from .board import Board, BoardError
from .data_models import Card, CardView, Outcome, SelectionState, SessionState, SessionSummary
from .events import EventType, GameEvent
from .match_machine import MatchStateMachine
from .random_source import RandomSource
from .scheduling import AsyncioScheduler, ManualScheduler, ScheduledAction, Scheduler
from .session import SessionController, SessionError

__all__ = [
    'Board',
    'BoardError',
    'Card',
    'CardView',
    'Outcome',
    'SelectionState',
    'SessionState',
    'SessionSummary',
    'EventType',
    'GameEvent',
    'MatchStateMachine',
    'RandomSource',
    'AsyncioScheduler',
    'ManualScheduler',
    'ScheduledAction',
    'Scheduler',
    'SessionController',
    'SessionError',
]
