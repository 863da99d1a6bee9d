"""Sorted key-value storage.

``KeyValueStore`` is the engine behind the backend server, ``RemoteStore``
talks to that server over Socket.IO, and ``Sublevel`` carves prefix-scoped
namespaces out of either one. The three share one interface: ``get``,
``put``, ``delete``, ``batch`` and ``read``.
"""

from .sublevel import Sublevel, SEPARATOR

__all__ = ['Sublevel', 'SEPARATOR']
