import logging
from typing import List, Optional

from timetrack.errors import ConflictError, NotFoundError
from .consolidation import Predicate
from .records import check_group_name, strip_readonly

logger = logging.getLogger(__name__)


class GroupService:
    """Groups live in the ``groups`` namespace keyed by name."""

    def __init__(self, api):
        self.api = api
        self.namespace = api.db.sublevel('groups')

    def _exists(self, name: str) -> bool:
        try:
            self.namespace.get(name)
        except NotFoundError:
            return False
        return True

    def create(self, name: str, data: Optional[dict] = None) -> dict:
        check_group_name(name)
        if self._exists(name):
            raise ConflictError(f'Group already exists: {name}')
        group = strip_readonly(data, readonly=('name',))
        group['name'] = name
        self.namespace.put(name, group)
        logger.info(f"[group-create] name={name}")
        return group

    def ensure(self, name: str) -> dict:
        """Return the group, creating it on first use."""
        try:
            return self.get(name)
        except NotFoundError:
            return self.create(name)

    def get(self, name: str) -> dict:
        return self.namespace.get(check_group_name(name))

    def update(self, name: str, data: Optional[dict] = None) -> dict:
        group = self.get(name)
        group.update(strip_readonly(data, readonly=('name',)))
        self.namespace.put(name, group)
        logger.info(f"[group-update] name={name}")
        return group

    def all(self) -> List[dict]:
        return self.namespace.values()

    def names(self) -> List[str]:
        return self.namespace.keys()

    def timers(self, name: str, predicate: Optional[Predicate] = None) -> List[dict]:
        return self.api.timers.filter(check_group_name(name), predicate)

    def running_timers(self, name: str, predicate: Optional[Predicate] = None) -> List[dict]:
        return self.api.timers.running(check_group_name(name), predicate)

    def consolidate(self, name: str, predicate: Optional[Predicate] = None) -> dict:
        return self.api.timers.consolidate(check_group_name(name), predicate)

    def remove(self, name: str) -> int:
        """Delete the group and its timers in one batch.

        Returns the number of timers removed.
        """
        self.get(name)
        timer_ops = self.api.timers.namespace.sublevel(name).clear_ops()
        ops = timer_ops + self.namespace.prepare([{'type': 'del', 'key': name}])
        self.api.db.store.batch(ops)
        logger.info(f"[group-remove] name={name} timers={len(timer_ops)}")
        return len(timer_ops)
