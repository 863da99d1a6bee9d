from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from timetrack.docs import DOCS
from timetrack.errors import TimetrackError, ValidationError

main = Blueprint('main', __name__)


def get_api():
    return current_app.extensions['timetrack']


def get_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


@main.route('/')
def index():
    return jsonify(DOCS)


@main.app_errorhandler(TimetrackError)
def handle_timetrack_error(exc):
    if exc.status_code >= 500:
        current_app.logger.error(f"[error] {request.method} {request.path} {type(exc).__name__}: {exc.message}")
    return jsonify({'error': exc.message}), exc.status_code


@main.app_errorhandler(HTTPException)
def handle_http_error(exc):
    return jsonify({'error': exc.description}), exc.code
