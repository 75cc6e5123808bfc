from flask import Blueprint, request, jsonify

from campusvote import get_services

directory_bp = Blueprint('directory', __name__)


@directory_bp.route('/students', methods=['GET'])
def students():
    """All candidates with their current tallies."""
    return jsonify(get_services().directory.list_candidates())


@directory_bp.route('/students/top', methods=['GET'])
def top_students():
    """Leaderboard. Optional ?limit=N, defaults to LEADERBOARD_LIMIT."""
    limit = request.args.get('limit')
    return jsonify(get_services().directory.top_candidates(limit))


# Route name kept for existing frontends
@directory_bp.route('/profecers', methods=['GET'])
def professors():
    return jsonify(get_services().directory.list_professors())


@directory_bp.route('/home/image', methods=['GET'])
def home_image():
    return jsonify(get_services().directory.get_home_image())
