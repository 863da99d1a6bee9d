from typing import Any, Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from timetrack import db
from timetrack.errors import BackendError, NotFoundError, ValidationError
from timetrack.models import Record

BATCH_TYPES = ('put', 'del')
RANGE_OPTIONS = ('gt', 'gte', 'lt', 'lte', 'prefix')


def _check_key(key) -> str:
    if not isinstance(key, str) or not key:
        raise ValidationError('Key must be a non-empty string')
    return key


def prefix_end(prefix: str) -> str:
    """Smallest string sorting after every key that starts with ``prefix``."""
    return prefix[:-1] + chr(ord(prefix[-1]) + 1)


class KeyValueStore:
    """Sorted map over the ``record`` table.

    Must be used inside an app context of the backend application. Every
    mutating call commits on its own; ``batch`` commits once for all its
    operations.
    """

    def __init__(self, session=None):
        self._session = session

    @property
    def session(self):
        return self._session if self._session is not None else db.session

    def get(self, key: str) -> Any:
        record = self.session.get(Record, _check_key(key), populate_existing=True)
        if record is None:
            raise NotFoundError(f'Key not found in database [{key}]')
        return record.get_value()

    def put(self, key: str, value: Any) -> None:
        self.batch([{'type': 'put', 'key': key, 'value': value}])

    def delete(self, key: str) -> None:
        self.batch([{'type': 'del', 'key': key}])

    def batch(self, ops: Iterable[dict]) -> None:
        ops = list(ops or [])
        for op in ops:
            if not isinstance(op, dict) or op.get('type') not in BATCH_TYPES:
                raise ValidationError(f'Invalid batch operation: {op!r}')
            _check_key(op.get('key'))
        try:
            for op in ops:
                record = self.session.get(Record, op['key'])
                if op['type'] == 'del':
                    if record is not None:
                        self.session.delete(record)
                else:
                    try:
                        if record is None:
                            self.session.add(Record(op['key'], op.get('value')))
                        else:
                            record.set_value(op.get('value'))
                    except (TypeError, ValueError) as exc:
                        raise ValidationError(f'Value for [{op["key"]}] is not JSON serializable: {exc}')
                # Later ops in the same batch must see earlier ones
                self.session.flush()
            self.session.commit()
        except ValidationError:
            self.session.rollback()
            raise
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise BackendError(f'Batch failed: {exc}')

    def read(self, gt: Optional[str] = None, gte: Optional[str] = None,
             lt: Optional[str] = None, lte: Optional[str] = None,
             prefix: Optional[str] = None, reverse: bool = False,
             limit: Optional[int] = None) -> List[list]:
        """Return ``[key, value]`` pairs in key order within the given range."""
        bounds = dict(gt=gt, gte=gte, lt=lt, lte=lte, prefix=prefix)
        for name in RANGE_OPTIONS:
            if bounds[name] is not None and not isinstance(bounds[name], str):
                raise ValidationError(f'Invalid {name}: {bounds[name]!r}')
        if limit is not None:
            try:
                limit = int(limit)
            except (TypeError, ValueError):
                raise ValidationError(f'Invalid limit: {limit!r}')

        query = self.session.query(Record).populate_existing()
        if gt is not None:
            query = query.filter(Record.key > gt)
        if gte is not None:
            query = query.filter(Record.key >= gte)
        if lt is not None:
            query = query.filter(Record.key < lt)
        if lte is not None:
            query = query.filter(Record.key <= lte)
        if prefix:
            # Range instead of LIKE, which ignores case in SQLite
            query = query.filter(Record.key >= prefix, Record.key < prefix_end(prefix))
        query = query.order_by(Record.key.desc() if reverse else Record.key.asc())
        if limit is not None and limit >= 0:
            query = query.limit(limit)
        return [record.to_pair() for record in query.all()]
