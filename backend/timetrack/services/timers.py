import logging
from typing import List, Optional

from timetrack.errors import ConflictError, ValidationError
from .consolidation import Predicate, both, consolidate, is_running, match_all
from .records import (
    check_group_name,
    check_id,
    dump_timer,
    generate_id,
    load_timer,
    sanitize_timer,
    strip_readonly,
    utcnow,
)

logger = logging.getLogger(__name__)


class TimerService:
    """Timers live in the ``timers`` namespace, one nested namespace per group."""

    def __init__(self, api):
        self.api = api
        self.namespace = api.db.sublevel('timers')

    def _group(self, group: str):
        return self.namespace.sublevel(check_group_name(group))

    def _scope(self, group: Optional[str]):
        return self.namespace if group is None else self._group(group)

    def _load_all(self, group: Optional[str] = None) -> List[dict]:
        # The whole namespace only holds group namespaces, hence deep
        return [load_timer(value) for value in self._scope(group).values(deep=group is None)]

    def create(self, group: str, data: Optional[dict] = None) -> dict:
        """Build a new timer record without storing it."""
        timer = strip_readonly(data)
        timer.update({
            'id': generate_id(),
            'group': check_group_name(group),
            'start': utcnow(),
            'end': None,
        })
        return sanitize_timer(timer)

    def start(self, group: str, data: Optional[dict] = None) -> dict:
        timer = self.create(group, data)
        self.api.groups.ensure(group)
        self._group(group).put(timer['id'], dump_timer(timer))
        logger.info(f"[timer-start] group={group} id={timer['id']}")
        return timer

    def get(self, group: str, id: str) -> dict:
        return load_timer(self._group(group).get(check_id(id)))

    def _save(self, timer: dict) -> dict:
        sanitize_timer(timer)
        self._group(timer['group']).put(timer['id'], dump_timer(timer))
        return timer

    def update(self, group: str, id: str, data: Optional[dict] = None) -> dict:
        changes = strip_readonly(data)
        timer = self.get(group, id)
        timer.update(changes)
        self._save(timer)
        logger.info(f"[timer-update] group={group} id={id} fields={sorted(changes)}")
        return timer

    def stop(self, group: str, id: str) -> dict:
        timer = self.get(group, id)
        if timer['end'] is not None:
            raise ConflictError(f'Timer already stopped: {id}')
        timer['end'] = max(utcnow(), timer['start'])
        self._save(timer)
        logger.info(f"[timer-stop] group={group} id={id}")
        return timer

    def remove(self, group: Optional[str] = None, id: Optional[str] = None) -> int:
        """Remove one timer, all timers of a group, or every timer.

        Returns the number of timers removed.
        """
        if group is None:
            if id is not None:
                raise ValidationError('Missing group')
            count = self.namespace.clear()
            logger.info(f"[timer-remove] all count={count}")
            return count
        if id is None:
            count = self._group(group).clear()
            logger.info(f"[timer-remove] group={group} count={count}")
            return count
        self._group(group).delete(check_id(id))
        logger.info(f"[timer-remove] group={group} id={id}")
        return 1

    def all(self, group: Optional[str] = None) -> List[dict]:
        return self._load_all(group)

    def filter(self, group: Optional[str] = None, predicate: Optional[Predicate] = None) -> List[dict]:
        predicate = predicate or match_all
        return [timer for timer in self._load_all(group) if predicate(timer)]

    def running(self, group: Optional[str] = None, predicate: Optional[Predicate] = None) -> List[dict]:
        return self.filter(group, both(is_running, predicate))

    def consolidate(self, group: Optional[str] = None, predicate: Optional[Predicate] = None) -> dict:
        return consolidate(self._load_all(group), predicate)
