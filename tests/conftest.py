import os
import sys
import random
import pytest

# Ensure the project root (containing the `phrasebuzz` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from phrasebuzz import create_app, socketio
from phrasebuzz.services.game import GameDispatcher, GameStore


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    DEFAULT_PHRASE = 'CAT'
    SKIP_TURN_AFTER_GUESS = True
    BUZZER_REENABLE_DELAY_MS = 5000
    AUTO_REENABLE_BUZZERS = True
    BROADCAST_CHANNEL = 'game-channel'
    WINNER_PHOTO_DIR = None
    CORS_ORIGINS = ['http://localhost:3000']


class RecordingNotifier:
    def __init__(self):
        self.sent = []

    def broadcast(self, channel, event, payload):
        self.sent.append((channel, event, payload))

    def events(self, name):
        return [payload for _, event, payload in self.sent if event == name]


class FakeClock:
    def __init__(self, now_ms=1_000_000):
        self.now_ms = now_ms

    def __call__(self):
        return self.now_ms

    def advance(self, ms):
        self.now_ms += ms


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass


@pytest.fixture()
def notifier():
    return RecordingNotifier()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def dispatcher(notifier, clock):
    return GameDispatcher(
        store=GameStore('CAT'),
        notifier=notifier,
        clock=clock,
        rng=random.Random(7),
    )
