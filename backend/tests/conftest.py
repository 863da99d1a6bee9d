import os
import sys
import pytest

# Ensure the backend root (containing the `timetrack` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from timetrack import RPC_NAMESPACE, create_app, create_backend, db, socketio
from timetrack.services import Api
from timetrack.store.client import RemoteStore


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    BACKEND_USERNAME = None
    BACKEND_PASSWD = None
    BACKEND_RPC_TIMEOUT = 5
    BCRYPT_LOG_ROUNDS = 4
    CORS_ORIGINS = '*'


class SocketIOTestTransport:
    """Feeds ``RemoteStore`` calls through the Flask-SocketIO test client."""

    def __init__(self, test_client):
        self.test_client = test_client

    def call(self, event, data=None, namespace=None, timeout=None):
        return self.test_client.emit(event, data, namespace=namespace, callback=True)


@pytest.fixture()
def backend_app():
    application = create_backend(TestConfig)
    with application.app_context():
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def rpc_client(backend_app):
    test_client = socketio.test_client(backend_app, namespace=RPC_NAMESPACE)
    yield test_client
    try:
        test_client.disconnect(namespace=RPC_NAMESPACE)
    except RuntimeError:
        pass


@pytest.fixture()
def store(rpc_client):
    return RemoteStore(transport=SocketIOTestTransport(rpc_client), namespace=RPC_NAMESPACE)


@pytest.fixture()
def api(store):
    return Api(store)


@pytest.fixture()
def flask_app(api):
    return create_app(TestConfig, api=api)


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()
