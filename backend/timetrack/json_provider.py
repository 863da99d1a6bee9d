from datetime import datetime

from flask.json.provider import DefaultJSONProvider


class IsoJSONProvider(DefaultJSONProvider):
    """Serializes datetimes as ISO-8601 instead of Flask's HTTP date format,
    which drops milliseconds."""

    @staticmethod
    def default(o):
        if isinstance(o, datetime):
            return o.isoformat(timespec='milliseconds')
        return DefaultJSONProvider.default(o)
