"""Request-scoped errors raised by the game services.

All of these except SessionIdCollision are recovered by the socket layer:
the request is rejected, nothing is mutated and only the sender is told.
"""


class GameError(Exception):
    code = 'game_error'

    def __init__(self, message: str = ''):
        super().__init__(message or self.code)
        self.message = message or self.code

    def to_dict(self):
        return {'code': self.code, 'message': self.message}


class UnknownSession(GameError):
    code = 'unknown_session'


class NotYourTurn(GameError):
    code = 'not_your_turn'


class InvalidMove(GameError):
    code = 'invalid_move'


class AlreadyQueued(GameError):
    code = 'already_queued'


class AlreadyInSession(GameError):
    code = 'already_in_session'


class SessionIdCollision(GameError):
    """Two live sessions derived the same id. Not expected in normal operation."""
    code = 'session_id_collision'
