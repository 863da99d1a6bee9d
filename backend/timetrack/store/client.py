import logging
import threading
from typing import Any, Iterable, List, Optional

import socketio
from socketio.exceptions import ConnectionError as SocketIOConnectionError, TimeoutError as SocketIOTimeoutError

from timetrack.errors import BackendError, error_from_dict

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = '/rpc'


class RemoteStore:
    """Client side of the storage backend.

    Same interface as ``KeyValueStore``; each call is a Socket.IO event
    acknowledged by the backend. ``transport`` is anything with
    ``call(event, data, namespace=..., timeout=...)``, by default a
    ``socketio.Client`` connected on first use.
    """

    def __init__(self, url: Optional[str] = None, username: Optional[str] = None,
                 password: Optional[str] = None, timeout: float = 10,
                 namespace: str = DEFAULT_NAMESPACE, transport=None):
        self.url = url
        self.username = username
        self.password = password
        self.timeout = timeout
        self.namespace = namespace
        self.transport = transport
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config) -> 'RemoteStore':
        return cls(
            url=f"http://{config.get('BACKEND_HOST', '127.0.0.1')}:{config.get('BACKEND_PORT', 4567)}",
            username=config.get('BACKEND_USERNAME'),
            password=config.get('BACKEND_PASSWD'),
            timeout=config.get('BACKEND_RPC_TIMEOUT', 10),
        )

    def connect(self):
        with self._lock:
            if self.transport is not None:
                return self.transport
            client = socketio.Client(reconnection=True)
            try:
                client.connect(
                    self.url,
                    namespaces=[self.namespace],
                    auth={'name': self.username, 'password': self.password},
                    wait_timeout=self.timeout,
                )
            except SocketIOConnectionError as exc:
                raise BackendError(f'Could not connect to backend at {self.url}: {exc}')
            logger.info(f"[backend-connect] url={self.url} namespace={self.namespace}")
            self.transport = client
            return client

    def close(self):
        with self._lock:
            transport, self.transport = self.transport, None
        if isinstance(transport, socketio.Client):
            transport.disconnect()

    def _call(self, event: str, data: dict) -> Any:
        transport = self.transport or self.connect()
        try:
            response = transport.call(event, data, namespace=self.namespace, timeout=self.timeout)
        except SocketIOTimeoutError:
            raise BackendError(f'Backend call timed out: {event}')
        if not isinstance(response, dict):
            raise BackendError(f'Malformed backend response to {event}: {response!r}')
        if response.get('error'):
            raise error_from_dict(response['error'])
        return response.get('result')

    def get(self, key: str) -> Any:
        return self._call('get', {'key': key})

    def put(self, key: str, value: Any) -> None:
        self._call('put', {'key': key, 'value': value})

    def delete(self, key: str) -> None:
        self._call('del', {'key': key})

    def batch(self, ops: Iterable[dict]) -> None:
        self._call('batch', {'ops': list(ops or [])})

    def read(self, gt: Optional[str] = None, gte: Optional[str] = None,
             lt: Optional[str] = None, lte: Optional[str] = None,
             prefix: Optional[str] = None, reverse: bool = False,
             limit: Optional[int] = None) -> List[list]:
        data = {'gt': gt, 'gte': gte, 'lt': lt, 'lte': lte, 'prefix': prefix,
                'reverse': reverse, 'limit': limit}
        return [list(pair) for pair in self._call('read', data) or []]
