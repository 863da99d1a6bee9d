"""Time tracking domain services.

``Api`` builds and validates timer and group records and namespaces them in
the key-value store. It works the same over a local ``KeyValueStore`` or a
``RemoteStore``; transport and HTTP concerns stay outside this package.
"""

from timetrack.store import Sublevel
from .consolidation import build_filter, consolidate
from .groups import GroupService
from .timers import TimerService


class Api:
    def __init__(self, store):
        self.store = store
        self.db = Sublevel(store)
        self.groups = GroupService(self)
        self.timers = TimerService(self)


__all__ = ['Api', 'GroupService', 'TimerService', 'build_filter', 'consolidate']
