import os
import sys
import pytest

# Ensure the project root (containing the `netplay` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from netplay import create_app, socketio
from netplay.models import Player


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    LOG_LEVEL = 'DEBUG'
    PORT = 3000
    SOCKETIO_NAMESPACE = '/'
    ROOM_POOL_SIZE = 2
    MAX_ROOMS = 3
    PLAYERS_PER_ROOM = 2
    DEFAULT_FRAME_RATE = 50
    MIN_FRAME_RATE = 1
    MAX_FRAME_RATE = 100


class FakeConnection:
    """Records every text frame sent to it."""

    def __init__(self, name='conn'):
        self.name = name
        self.sent = []

    def send(self, text):
        self.sent.append(text)

    def take(self):
        out, self.sent = self.sent, []
        return out


class ManualClock:
    """Stand-in for FrameClock that only ticks when told to."""

    instances = []

    def __init__(self, interval, on_tick):
        self.interval = interval
        self.on_tick = on_tick
        self.started = False
        self.cancelled = False
        ManualClock.instances.append(self)

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def tick(self):
        self.on_tick(self)


@pytest.fixture()
def manual_clock():
    ManualClock.instances = []
    yield ManualClock
    ManualClock.instances = []


@pytest.fixture()
def make_player():
    def _make(player_id, ready=False):
        player = Player(player_id, FakeConnection(f"p{player_id}"))
        player.ready = ready
        return player
    return _make


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    """Factory for Socket.IO test clients, optionally requesting a room."""
    clients = []

    def _connect(room=None):
        query_string = f"room={room}" if room is not None else None
        test_client = socketio.test_client(flask_app, query_string=query_string)
        clients.append(test_client)
        return test_client

    yield _connect
    for test_client in clients:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass


def received_messages(test_client):
    """Raw text of every `message` event a test client got since last call."""
    return [pkt['args'] for pkt in test_client.get_received() if pkt['name'] == 'message']


@pytest.fixture()
def messages():
    return received_messages
