"""Filtering and aggregation over timer lists.

Filters are plain predicates over loaded timers (timestamps as datetimes).
``build_filter`` turns request query arguments into one.
"""

from datetime import datetime
from typing import Callable, Iterable, Mapping, Optional

from timetrack.errors import ValidationError

from .records import parse_timestamp

Predicate = Callable[[dict], bool]

MS_PER_HOUR = 1000 * 60 * 60


def match_all(timer: dict) -> bool:
    return True


def is_running(timer: dict) -> bool:
    return timer.get('end') is None


def field_matches(actual, expected) -> bool:
    """Compare a loaded timer field with a query argument.

    Numbers compare numerically and timestamps as instants, so the values a
    client sent or received match however they were spelled.
    """
    if isinstance(actual, datetime):
        try:
            return parse_timestamp(expected) == actual
        except ValidationError:
            return False
    if isinstance(actual, (int, float)) and not isinstance(actual, bool):
        try:
            return float(expected) == float(actual)
        except (TypeError, ValueError):
            return False
    if isinstance(actual, bool):
        return str(expected).lower() == str(actual).lower()
    if actual is None:
        return expected is None or str(expected).lower() in ('', 'null', 'none')
    return str(actual) == str(expected)


def build_filter(args: Optional[Mapping]) -> Predicate:
    """Predicate from query arguments.

    ``since``/``until`` bound the start time (inclusive/exclusive), ``title``
    is a case-insensitive substring match and any other argument must equal
    the timer field with that name (see ``field_matches``).
    """
    if not args:
        return match_all

    args = dict(args)
    since = parse_timestamp(args.pop('since', None), 'since')
    until = parse_timestamp(args.pop('until', None), 'until')
    title = args.pop('title', None)
    title = title.lower() if title else None

    def predicate(timer):
        start = timer.get('start')
        if since is not None and (start is None or start < since):
            return False
        if until is not None and (start is None or start >= until):
            return False
        if title is not None and title not in str(timer.get('title', '')).lower():
            return False
        for field, expected in args.items():
            if field not in timer or not field_matches(timer[field], expected):
                return False
        return True

    return predicate


def both(first: Optional[Predicate], second: Optional[Predicate]) -> Predicate:
    first = first or match_all
    second = second or match_all
    return lambda timer: first(timer) and second(timer)


def duration_ms(timer: dict) -> int:
    """Duration of a stopped timer in milliseconds; 0 while running."""
    if timer.get('end') is None or timer.get('start') is None:
        return 0
    return int(round((timer['end'] - timer['start']).total_seconds() * 1000))


def consolidate(timers: Iterable[dict], predicate: Optional[Predicate] = None) -> dict:
    """Aggregate stopped timers. Running timers do not count."""
    predicate = predicate or match_all
    data = {
        'duration': 0,
        'price': 0.0,
        'start': None,
        'end': None,
        'countTimers': 0,
    }

    for timer in timers:
        if timer.get('end') is None or not predicate(timer):
            continue
        duration = duration_ms(timer)
        data['duration'] += duration
        data['price'] += float(timer.get('hourlyPrice') or 0) * duration / MS_PER_HOUR
        data['countTimers'] += 1

        if data['start'] is None or data['start'] > timer['start']:
            data['start'] = timer['start']
        if data['end'] is None or data['end'] < timer['end']:
            data['end'] = timer['end']

    return data
