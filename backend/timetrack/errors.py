"""Exceptions shared by the store, the RPC transport and the HTTP layer.

Each error carries the HTTP status it renders as. The RPC transport sends
errors by class name, so every class here must be listed in ``ERRORS``.
"""


class TimetrackError(Exception):
    status_code = 500

    def __init__(self, message=None):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__

    def to_dict(self):
        return {'type': self.__class__.__name__, 'message': self.message}


class ValidationError(TimetrackError):
    status_code = 400


class UnauthorizedError(TimetrackError):
    status_code = 401


class NotFoundError(TimetrackError):
    status_code = 404


class ConflictError(TimetrackError):
    status_code = 409


class BackendError(TimetrackError):
    status_code = 502


ERRORS = {cls.__name__: cls for cls in (
    TimetrackError,
    ValidationError,
    UnauthorizedError,
    NotFoundError,
    ConflictError,
    BackendError,
)}


def error_from_dict(payload) -> TimetrackError:
    """Rebuild an exception from an RPC error payload."""
    payload = payload or {}
    cls = ERRORS.get(payload.get('type'), BackendError)
    return cls(payload.get('message'))
