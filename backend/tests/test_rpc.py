import logging

import pytest
from sqlalchemy.exc import SQLAlchemyError

from timetrack import RPC_NAMESPACE, create_backend, db, rpc_events, socketio
from timetrack.errors import NotFoundError, ValidationError
from timetrack.store.local import KeyValueStore

from conftest import TestConfig


class AuthConfig(TestConfig):
    BACKEND_USERNAME = 'timer'
    BACKEND_PASSWD = 'secret'


class UsernameOnlyConfig(TestConfig):
    BACKEND_USERNAME = 'timer'


class PasswordOnlyConfig(TestConfig):
    BACKEND_PASSWD = 'secret'


def make_backend(config_class):
    application = create_backend(config_class)
    with application.app_context():
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def auth_backend_app():
    yield from make_backend(AuthConfig)


@pytest.fixture()
def username_backend_app():
    yield from make_backend(UsernameOnlyConfig)


@pytest.fixture()
def password_backend_app():
    yield from make_backend(PasswordOnlyConfig)


def connects(application, auth=None):
    test_client = socketio.test_client(application, namespace=RPC_NAMESPACE, auth=auth)
    connected = test_client.is_connected(RPC_NAMESPACE)
    if connected:
        test_client.disconnect(namespace=RPC_NAMESPACE)
    return connected


def test_rpc_calls_are_acknowledged(rpc_client):
    assert rpc_client.is_connected(RPC_NAMESPACE)

    ack = rpc_client.emit('put', {'key': 'a', 'value': {'n': 1}}, namespace=RPC_NAMESPACE, callback=True)
    assert ack == {'result': None}

    ack = rpc_client.emit('get', {'key': 'a'}, namespace=RPC_NAMESPACE, callback=True)
    assert ack == {'result': {'n': 1}}

    ack = rpc_client.emit('read', {'prefix': 'a'}, namespace=RPC_NAMESPACE, callback=True)
    assert ack == {'result': [['a', {'n': 1}]]}


def test_rpc_errors_carry_their_type(rpc_client):
    ack = rpc_client.emit('get', {'key': 'missing'}, namespace=RPC_NAMESPACE, callback=True)
    assert ack['error']['type'] == 'NotFoundError'

    ack = rpc_client.emit('batch', {'ops': 'nope'}, namespace=RPC_NAMESPACE, callback=True)
    assert ack['error']['type'] == 'ValidationError'

    ack = rpc_client.emit('read', {'limit': 'many'}, namespace=RPC_NAMESPACE, callback=True)
    assert ack['error']['type'] == 'ValidationError'


def test_remote_store_round_trip(store):
    store.batch([
        {'type': 'put', 'key': 'b', 'value': 2},
        {'type': 'put', 'key': 'a', 'value': 1},
    ])
    assert store.get('a') == 1
    assert store.read() == [['a', 1], ['b', 2]]
    assert store.read(reverse=True, limit=1) == [['b', 2]]

    store.delete('a')
    with pytest.raises(NotFoundError) as excinfo:
        store.get('a')
    assert 'Key not found' in str(excinfo.value)

    with pytest.raises(ValidationError):
        store.put('', 1)


def test_connect_requires_credentials(auth_backend_app):
    refused = socketio.test_client(auth_backend_app, namespace=RPC_NAMESPACE)
    assert not refused.is_connected(RPC_NAMESPACE)

    wrong = socketio.test_client(
        auth_backend_app, namespace=RPC_NAMESPACE, auth={'name': 'timer', 'password': 'wrong'}
    )
    assert not wrong.is_connected(RPC_NAMESPACE)

    wrong_user = socketio.test_client(
        auth_backend_app, namespace=RPC_NAMESPACE, auth={'name': 'other', 'password': 'secret'}
    )
    assert not wrong_user.is_connected(RPC_NAMESPACE)

    ok = socketio.test_client(
        auth_backend_app, namespace=RPC_NAMESPACE, auth={'name': 'timer', 'password': 'secret'}
    )
    assert ok.is_connected(RPC_NAMESPACE)
    ack = ok.emit('put', {'key': 'a', 'value': 1}, namespace=RPC_NAMESPACE, callback=True)
    assert ack == {'result': None}
    ok.disconnect(namespace=RPC_NAMESPACE)


def test_connect_with_username_only(username_backend_app):
    assert connects(username_backend_app, auth={'name': 'timer'})
    assert not connects(username_backend_app, auth={'name': 'other'})
    assert not connects(username_backend_app)


def test_connect_with_password_only(password_backend_app):
    assert connects(password_backend_app, auth={'password': 'secret'})
    assert connects(password_backend_app, auth={'name': 'anyone', 'password': 'secret'})
    assert not connects(password_backend_app, auth={'password': 'wrong'})
    assert not connects(password_backend_app)


def test_calls_require_an_authenticated_socket(rpc_client, monkeypatch):
    monkeypatch.setattr(rpc_events, '_sid_to_user', {})
    ack = rpc_client.emit('get', {'key': 'a'}, namespace=RPC_NAMESPACE, callback=True)
    assert ack['error']['type'] == 'UnauthorizedError'


def test_database_failure_is_a_backend_error(rpc_client, monkeypatch, caplog):
    rollbacks = []
    session_class = type(db.session())
    rollback = session_class.rollback

    def tracking_rollback(self):
        rollbacks.append(True)
        rollback(self)

    def broken_get(self, key):
        raise SQLAlchemyError('database is locked')

    monkeypatch.setattr(session_class, 'rollback', tracking_rollback)
    monkeypatch.setattr(KeyValueStore, 'get', broken_get)

    with caplog.at_level(logging.ERROR):
        ack = rpc_client.emit('get', {'key': 'a'}, namespace=RPC_NAMESPACE, callback=True)
    assert ack['error']['type'] == 'BackendError'
    assert 'database is locked' in ack['error']['message']
    assert rollbacks
    assert '[rpc-error] call=handle_get' in caplog.text

    monkeypatch.undo()
    ack = rpc_client.emit('put', {'key': 'a', 'value': 1}, namespace=RPC_NAMESPACE, callback=True)
    assert ack == {'result': None}


def test_read_rejects_non_string_range_options(rpc_client):
    ack = rpc_client.emit('read', {'prefix': 5}, namespace=RPC_NAMESPACE, callback=True)
    assert ack['error']['type'] == 'ValidationError'

    ack = rpc_client.emit('read', {'gte': ['a']}, namespace=RPC_NAMESPACE, callback=True)
    assert ack['error']['type'] == 'ValidationError'


def test_store_reset_command(backend_app):
    store = KeyValueStore()
    store.put('a', 1)

    result = backend_app.test_cli_runner().invoke(args=['store-reset'])
    assert result.exit_code == 0
    assert 'Store has been reset!' in result.output
    with pytest.raises(NotFoundError):
        store.get('a')
