from typing import Any, Iterable, List, Optional, Tuple

from timetrack.errors import ValidationError

SEPARATOR = '!'


def check_name(name) -> str:
    if not isinstance(name, str) or not name:
        raise ValidationError('Namespace name must be a non-empty string')
    if SEPARATOR in name:
        raise ValidationError(f'Namespace name may not contain "{SEPARATOR}": {name}')
    return name


class Sublevel:
    """A prefix-scoped view of a sorted store.

    The path ``('timers', 'foo')`` maps key ``k`` to ``!timers!!foo!k``.
    Keys inside a namespace never start with the separator, so a shallow read
    can tell its own keys apart from those of nested namespaces.
    """

    def __init__(self, store, *path: str):
        self.store = store
        self.path: Tuple[str, ...] = tuple(check_name(name) for name in path)
        self.prefix = ''.join(f'{SEPARATOR}{name}{SEPARATOR}' for name in self.path)

    def __repr__(self):
        return f'<Sublevel {self.prefix or "(root)"}>'

    def sublevel(self, name: str) -> 'Sublevel':
        return Sublevel(self.store, *self.path, name)

    def _key(self, key) -> str:
        if not isinstance(key, str) or not key:
            raise ValidationError('Key must be a non-empty string')
        if key.startswith(SEPARATOR):
            raise ValidationError(f'Key may not start with "{SEPARATOR}": {key}')
        return self.prefix + key

    def get(self, key: str) -> Any:
        return self.store.get(self._key(key))

    def put(self, key: str, value: Any) -> None:
        self.store.put(self._key(key), value)

    def delete(self, key: str) -> None:
        self.store.delete(self._key(key))

    def batch(self, ops: Iterable[dict]) -> None:
        self.store.batch(self.prepare(ops))

    def prepare(self, ops: Iterable[dict]) -> List[dict]:
        """Prefix the keys of batch operations so they can be combined with
        operations from other namespaces into one atomic batch."""
        prepared = []
        for op in ops:
            op = dict(op)
            op['key'] = self._key(op.get('key'))
            prepared.append(op)
        return prepared

    def read(self, deep: bool = False, reverse: bool = False,
             limit: Optional[int] = None) -> List[list]:
        """Return ``[key, value]`` pairs with keys relative to this namespace.

        ``deep`` includes the keys of nested namespaces.
        """
        options = {'reverse': reverse}
        if self.prefix:
            options['prefix'] = self.prefix
        # Shallow reads filter after the fact, so the limit is applied here
        if deep and limit is not None:
            options['limit'] = limit
        pairs = self.store.read(**options)
        result = []
        for key, value in pairs:
            relative = key[len(self.prefix):]
            if not deep and relative.startswith(SEPARATOR):
                continue
            result.append([relative, value])
            if limit is not None and len(result) >= limit:
                break
        return result

    def keys(self, deep: bool = False) -> List[str]:
        return [key for key, _ in self.read(deep=deep)]

    def values(self, deep: bool = False) -> List[Any]:
        return [value for _, value in self.read(deep=deep)]

    def clear_ops(self) -> List[dict]:
        """Delete operations (absolute keys) for everything under this
        namespace, nested namespaces included."""
        return [{'type': 'del', 'key': self.prefix + key}
                for key in self.keys(deep=True)]

    def clear(self) -> int:
        ops = self.clear_ops()
        if ops:
            self.store.batch(ops)
        return len(ops)
