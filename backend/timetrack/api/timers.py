from flask import Blueprint, jsonify, request

from timetrack.main import get_api, get_body
from timetrack.services import build_filter

timers = Blueprint('timers', __name__)


def _query_filter():
    return build_filter(request.args.to_dict())


@timers.route('', methods=['GET'])
def list_timers():
    return jsonify(get_api().timers.filter(None, _query_filter()))


@timers.route('', methods=['DELETE'])
def remove_all_timers():
    removed = get_api().timers.remove()
    return jsonify({'success': True, 'removed': removed})


@timers.route('/running', methods=['GET'])
def list_running_timers():
    return jsonify(get_api().timers.running(None, _query_filter()))


@timers.route('/consolidate', methods=['GET'])
def consolidate_timers():
    return jsonify(get_api().timers.consolidate(None, _query_filter()))


@timers.route('/<string:group>', methods=['GET'])
def list_group_timers(group):
    return jsonify(get_api().timers.filter(group, _query_filter()))


@timers.route('/<string:group>', methods=['DELETE'])
def remove_group_timers(group):
    removed = get_api().timers.remove(group)
    return jsonify({'success': True, 'removed': removed})


@timers.route('/<string:group>/running', methods=['GET'])
def list_group_running_timers(group):
    return jsonify(get_api().timers.running(group, _query_filter()))


@timers.route('/<string:group>/consolidate', methods=['GET'])
def consolidate_group_timers(group):
    return jsonify(get_api().timers.consolidate(group, _query_filter()))


@timers.route('/<string:group>/start', methods=['POST'])
def start_timer(group):
    timer = get_api().timers.start(group, get_body())
    return jsonify(timer), 201


@timers.route('/<string:group>/<string:id>', methods=['GET'])
def get_timer(group, id):
    return jsonify(get_api().timers.get(group, id))


@timers.route('/<string:group>/<string:id>', methods=['PUT'])
def update_timer(group, id):
    return jsonify(get_api().timers.update(group, id, get_body()))


@timers.route('/<string:group>/<string:id>/stop', methods=['POST'])
def stop_timer(group, id):
    return jsonify(get_api().timers.stop(group, id))


@timers.route('/<string:group>/<string:id>', methods=['DELETE'])
def remove_timer(group, id):
    get_api().timers.remove(group, id)
    return jsonify({'success': True})
