"""Server to client payloads.

Field names follow the Socket.IO protocol the web client speaks: sessions are
`gameId`, seats are `player`, pocket indices are `pocket`.
"""
from typing import Optional

from .board import PlayerSlot, score, winner
from .sessions import GameSession

WAITING = 'waiting'
MATCHED = 'matched'
GAME_STATE = 'gameState'
GAME_OVER = 'gameOver'
OPPONENT_DISCONNECTED = 'opponentDisconnected'
ERROR = 'error'


def waiting_payload() -> dict:
    return {'message': 'Waiting for an opponent...'}


def matched_payload(session: GameSession, seat: PlayerSlot) -> dict:
    return {'gameId': session.id, 'player': seat.value}


def describe_move(player: PlayerSlot, pocket: int, captured: int = 0, extra_turn: bool = False) -> str:
    text = f"Player {player.value} picked pocket {pocket}"
    if captured:
        text += f" and captured {captured} stones"
    if extra_turn:
        text += " and goes again"
    return text


def game_state_payload(session: GameSession, seat: Optional[PlayerSlot] = None) -> dict:
    payload = {
        'gameId': session.id,
        'board': list(session.board),
        'currentPlayer': session.current_player.value,
    }
    if seat is not None:
        payload['player'] = seat.value
    if session.last_move is not None:
        payload['lastMove'] = dict(session.last_move)
    return payload


def game_over_payload(session: GameSession) -> dict:
    p1, p2 = score(session.board)
    won = winner(session.board)
    if won is None:
        result = 'tie'
        message = f"It's a tie, {p1} to {p2}."
    else:
        result = won.value
        high, low = max(p1, p2), min(p1, p2)
        message = f"{won.label} wins, {high} to {low}."
    return {
        'gameId': session.id,
        'winner': result,
        'message': message,
        'board': list(session.board),
        'scores': {PlayerSlot.PLAYER1.value: p1, PlayerSlot.PLAYER2.value: p2},
    }


def opponent_disconnected_payload(session_id: str) -> dict:
    return {'gameId': session_id, 'message': 'Your opponent disconnected.'}
