from flask import Blueprint, jsonify, request

from timetrack.main import get_api, get_body
from timetrack.services import build_filter

groups = Blueprint('groups', __name__)


@groups.route('', methods=['GET'])
def list_groups():
    return jsonify(get_api().groups.all())


@groups.route('/names', methods=['GET'])
def list_group_names():
    return jsonify(get_api().groups.names())


@groups.route('/<string:name>', methods=['POST'])
def create_group(name):
    group = get_api().groups.create(name, get_body())
    return jsonify(group), 201


@groups.route('/<string:name>', methods=['GET'])
def get_group(name):
    return jsonify(get_api().groups.get(name))


@groups.route('/<string:name>', methods=['PUT'])
def update_group(name):
    return jsonify(get_api().groups.update(name, get_body()))


@groups.route('/<string:name>', methods=['DELETE'])
def remove_group(name):
    removed = get_api().groups.remove(name)
    return jsonify({'success': True, 'removed': removed})


@groups.route('/<string:name>/timers', methods=['GET'])
def list_group_timers(name):
    return jsonify(get_api().groups.timers(name, build_filter(request.args.to_dict())))


@groups.route('/<string:name>/timers/running', methods=['GET'])
def list_group_running_timers(name):
    return jsonify(get_api().groups.running_timers(name, build_filter(request.args.to_dict())))


@groups.route('/<string:name>/consolidate', methods=['GET'])
def consolidate_group(name):
    return jsonify(get_api().groups.consolidate(name, build_filter(request.args.to_dict())))
