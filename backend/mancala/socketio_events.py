from flask import current_app, request
from flask_socketio import emit
from mancala import socketio
from mancala.services.games import GameError, SessionIdCollision, SessionManager
from mancala.services.games import messages


def _manager() -> SessionManager:
    return current_app.extensions['mancala']

def _participant():
    # type: ignore: request.sid exists in Socket.IO context
    return _manager().broadcaster.participant(request.sid)  # type: ignore

def _reject(action: str, exc: GameError) -> None:
    current_app.logger.info(f"[reject] action={action} player={request.sid} code={exc.code} reason={exc.message}")  # type: ignore
    emit(messages.ERROR, exc.to_dict())


def handle_connect(auth=None):
    current_app.logger.info(f"[connect] player={request.sid}")  # type: ignore


def handle_disconnect(reason=None):
    current_app.logger.info(f"[disconnect] player={request.sid} reason={reason}")  # type: ignore
    _manager().disconnect(_participant())


def handle_join_game(data=None):
    try:
        _manager().join(_participant())
    except SessionIdCollision:
        raise
    except GameError as exc:
        _reject('joinGame', exc)


def handle_make_move(data):
    if not isinstance(data, dict):
        data = {}
    try:
        _manager().make_move(data.get('gameId'), data.get('player'), data.get('pocket'))
    except SessionIdCollision:
        raise
    except GameError as exc:
        _reject('makeMove', exc)


def handle_leave_game(data=None):
    # Clients send the bare game id; accept {'gameId': ...} as well
    game_id = data.get('gameId') if isinstance(data, dict) else data
    try:
        _manager().leave(_participant(), game_id)
    except GameError as exc:
        _reject('leaveGame', exc)


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on the configured namespace."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('joinGame', handle_join_game, namespace=namespace)
    socketio.on_event('makeMove', handle_make_move, namespace=namespace)
    socketio.on_event('leaveGame', handle_leave_game, namespace=namespace)
