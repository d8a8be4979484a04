"""Game domain services: board engine, matchmaking and session lifecycle.

This package contains pure(ish) domain logic that the socket handlers call
into, keeping transport concerns separated from core game mechanics.
"""
from .board import MoveResult, PlayerSlot, apply_move, starting_board, validate_move
from .errors import (
    AlreadyInSession,
    AlreadyQueued,
    GameError,
    InvalidMove,
    NotYourTurn,
    SessionIdCollision,
    UnknownSession,
)
from .manager import SessionManager
from .matchmaking import MatchmakingQueue
from .sessions import GameSession, SessionStore

__all__ = [
    'AlreadyInSession',
    'AlreadyQueued',
    'GameError',
    'GameSession',
    'InvalidMove',
    'MatchmakingQueue',
    'MoveResult',
    'NotYourTurn',
    'PlayerSlot',
    'SessionIdCollision',
    'SessionManager',
    'SessionStore',
    'UnknownSession',
    'apply_move',
    'starting_board',
    'validate_move',
]
