from datetime import datetime, timezone
import time
import uuid

from timetrack.errors import ValidationError
from timetrack.store import SEPARATOR

# Fields the client may not set on a timer
TIMER_READONLY = ('id', 'group', 'start', 'end')
# Group names that collide with route segments
RESERVED_GROUP_NAMES = frozenset(['running', 'consolidate', 'names'])


def utcnow() -> datetime:
    """Current UTC time truncated to milliseconds, the stored precision."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def generate_id() -> str:
    """Timer ids sort by creation time: ``<epoch ms>:<uuid4>``."""
    return f'{int(time.time() * 1000)}:{uuid.uuid4()}'


def parse_timestamp(value, field='timestamp'):
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            raise ValidationError(f'Invalid {field}: {value!r}')
    else:
        raise ValidationError(f'Invalid {field}: {value!r}')
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_timestamp(value):
    if value is None:
        return None
    return parse_timestamp(value).isoformat(timespec='milliseconds')


def check_group_name(name) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError('Missing group')
    if name in RESERVED_GROUP_NAMES:
        raise ValidationError(f'Group name is reserved: {name}')
    if SEPARATOR in name:
        raise ValidationError(f'Group name may not contain "{SEPARATOR}": {name}')
    return name


def check_id(id) -> str:
    if not isinstance(id, str) or not id:
        raise ValidationError('Missing id')
    return id


def strip_readonly(data, readonly=TIMER_READONLY) -> dict:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError('Data must be an object')
    return {k: v for k, v in data.items() if k not in readonly}


def sanitize_timer(timer: dict) -> dict:
    """Coerce a timer's known fields in place."""
    if timer.get('title') is None or timer.get('title') == '':
        raise ValidationError('Missing title')
    if not isinstance(timer['title'], str):
        timer['title'] = str(timer['title'])

    price = timer.get('hourlyPrice')
    try:
        timer['hourlyPrice'] = float(price) if price not in (None, '') else 0.0
    except (TypeError, ValueError):
        raise ValidationError(f'Invalid hourlyPrice: {price!r}')
    return timer


def dump_timer(timer: dict) -> dict:
    """Timer as stored: timestamps become ISO strings."""
    stored = dict(timer)
    stored['start'] = format_timestamp(timer.get('start'))
    stored['end'] = format_timestamp(timer.get('end'))
    return stored


def load_timer(stored: dict) -> dict:
    """Timer as returned to callers: timestamps become aware datetimes."""
    timer = dict(stored)
    timer['start'] = parse_timestamp(stored.get('start'), 'start')
    timer['end'] = parse_timestamp(stored.get('end'), 'end')
    return timer
