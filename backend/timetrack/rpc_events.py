from flask import current_app, request
from flask_socketio import ConnectionRefusedError
from sqlalchemy.exc import SQLAlchemyError
from typing import Dict, Any
import functools

from timetrack import RPC_NAMESPACE, bcrypt, db, socketio
from timetrack.errors import BackendError, TimetrackError, UnauthorizedError, ValidationError
from timetrack.store.local import KeyValueStore, RANGE_OPTIONS

# Authenticated user per socket
_sid_to_user: Dict[str, Dict[str, Any]] = {}


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _check_credentials(auth) -> Dict[str, Any]:
    """Single shared username/password check.

    Without configured credentials every client is accepted.
    """
    auth = auth if isinstance(auth, dict) else {}
    name = auth.get('name')
    username = current_app.config.get('BACKEND_USERNAME')
    password_hash = current_app.config.get('BACKEND_PASSWD_HASH')
    if username and name != username:
        raise UnauthorizedError('Unauthorized')
    if password_hash:
        password = auth.get('password')
        if not password or not bcrypt.check_password_hash(password_hash, password):
            raise UnauthorizedError('Unauthorized')
    return {'name': name}


def handle_connect(auth=None):
    try:
        user = _check_credentials(auth)
    except UnauthorizedError:
        current_app.logger.warning(f"[rpc-refused] sid={_get_sid()} addr={request.remote_addr}")
        raise ConnectionRefusedError('Unauthorized')
    _sid_to_user[_get_sid()] = user
    current_app.logger.info(f"[rpc-connect] sid={_get_sid()} user={user['name']} addr={request.remote_addr}")


def handle_disconnect(*args):
    user = _sid_to_user.pop(_get_sid(), None)
    current_app.logger.info(f"[rpc-disconnect] sid={_get_sid()} user={(user or {}).get('name')}")


def rpc_method(func):
    """Wrap a handler so its ack is ``{'result': ...}`` or ``{'error': ...}``."""
    @functools.wraps(func)
    def wrapper(data=None):
        if _get_sid() not in _sid_to_user:
            return {'error': UnauthorizedError('Unauthorized').to_dict()}
        if data is None:
            data = {}
        try:
            if not isinstance(data, dict):
                raise ValidationError('RPC payload must be an object')
            return {'result': func(KeyValueStore(), data)}
        except TimetrackError as exc:
            return {'error': exc.to_dict()}
        except SQLAlchemyError as exc:
            db.session.rollback()
            current_app.logger.error(f"[rpc-error] call={func.__name__} error={exc}")
            return {'error': BackendError(str(exc)).to_dict()}
    return wrapper


@rpc_method
def handle_get(store, data):
    return store.get(data.get('key'))


@rpc_method
def handle_put(store, data):
    store.put(data.get('key'), data.get('value'))
    return None


@rpc_method
def handle_del(store, data):
    store.delete(data.get('key'))
    return None


@rpc_method
def handle_batch(store, data):
    ops = data.get('ops') or []
    if not isinstance(ops, list):
        raise ValidationError('Batch ops must be a list')
    store.batch(ops)
    return len(ops)


@rpc_method
def handle_read(store, data):
    options = {k: data[k] for k in RANGE_OPTIONS + ('limit',) if data.get(k) is not None}
    return store.read(reverse=bool(data.get('reverse')), **options)


def register_rpc_handlers() -> None:
    """Register the storage RPC handlers on the '/rpc' namespace."""
    socketio.on_event('connect', handle_connect, namespace=RPC_NAMESPACE)
    socketio.on_event('disconnect', handle_disconnect, namespace=RPC_NAMESPACE)
    socketio.on_event('get', handle_get, namespace=RPC_NAMESPACE)
    socketio.on_event('put', handle_put, namespace=RPC_NAMESPACE)
    socketio.on_event('del', handle_del, namespace=RPC_NAMESPACE)
    socketio.on_event('batch', handle_batch, namespace=RPC_NAMESPACE)
    socketio.on_event('read', handle_read, namespace=RPC_NAMESPACE)
