import os
import sys
import pytest

# Ensure the backend root (containing the `sabotage4` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from sabotage4 import create_app, socketio
from sabotage4.services.games.registry import GameRegistry


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CLIENT_URL = 'http://localhost:3000'
    HOST = '127.0.0.1'
    PORT = 3001
    SOCKETIO_NAMESPACE = '/'
    GAME_ID_BYTES = 4
    LOG_LEVEL = 'DEBUG'


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def registry(flask_app) -> GameRegistry:
    return flask_app.extensions['game_registry']


def _make_sio_client(flask_app):
    return socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
    )


@pytest.fixture()
def red_client(flask_app):
    test_client = _make_sio_client(flask_app)
    yield test_client
    if test_client.is_connected():
        test_client.disconnect()


@pytest.fixture()
def yellow_client(flask_app):
    test_client = _make_sio_client(flask_app)
    yield test_client
    if test_client.is_connected():
        test_client.disconnect()
