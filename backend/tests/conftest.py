import logging
import os
import sys
import pytest

# Ensure the backend root (containing the `mancala` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from mancala import create_app, socketio
from mancala.broadcaster import Participant
from mancala.services.games import MatchmakingQueue, SessionManager, SessionStore


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ALLOWED_ORIGINS = ['*']
    SOCKETIO_NAMESPACE = '/'
    STONES_PER_POCKET = 4
    LOG_LEVEL = 'DEBUG'
    HOST = '127.0.0.1'
    PORT = 3999


class RecordingBroadcaster:
    """In-memory stand-in for the Socket.IO broadcaster."""

    def __init__(self):
        self.groups = {}
        self.group_messages = []
        self.inboxes = {}

    def participant(self, pid):
        inbox = self.inboxes.setdefault(pid, [])
        return Participant(id=pid, send=lambda event, payload: inbox.append((event, payload)))

    def join_group(self, participant, group):
        self.groups.setdefault(group, set()).add(participant.id)

    def leave_group(self, participant, group):
        members = self.groups.get(group, set())
        members.discard(participant.id)
        if not members:
            self.groups.pop(group, None)

    def to_group(self, group, event, payload):
        self.group_messages.append((group, event, payload))
        for pid in sorted(self.groups.get(group, ())):
            self.inboxes.setdefault(pid, []).append((event, payload))

    def events(self, pid):
        return [event for event, _ in self.inboxes.get(pid, [])]

    def last(self, pid, event):
        for name, payload in reversed(self.inboxes.get(pid, [])):
            if name == event:
                return payload
        return None


@pytest.fixture()
def broadcaster():
    return RecordingBroadcaster()


@pytest.fixture()
def manager(broadcaster):
    return SessionManager(
        MatchmakingQueue(),
        SessionStore(),
        broadcaster,
        logger=logging.getLogger('tests.mancala'),
    )


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application
    application.extensions['mancala'].shutdown()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_factory(flask_app):
    clients = []

    def _connect():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield _connect
    for test_client in clients:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass
