import logging

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(getattr(logging, flask_app.config.get('LOG_LEVEL', 'INFO'), logging.INFO))

    allowed_origins = flask_app.config.get('CORS_ALLOWED_ORIGINS') or '*'
    if allowed_origins == ['*']:
        allowed_origins = '*'
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from mancala.main import main
    flask_app.register_blueprint(main)

    # Matchmaking queue and session store live for the lifetime of the app
    from mancala.broadcaster import SocketIOBroadcaster
    from mancala.services.games import MatchmakingQueue, SessionManager, SessionStore
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    flask_app.extensions['mancala'] = SessionManager(
        MatchmakingQueue(),
        SessionStore(),
        SocketIOBroadcaster(socketio, namespace=namespace),
        logger=flask_app.logger,
        stones_per_pocket=int(flask_app.config.get('STONES_PER_POCKET', 4)),
    )

    from mancala.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=namespace)

    return flask_app
