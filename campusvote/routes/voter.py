from flask import Blueprint, request, jsonify

from campusvote import get_services

voter_bp = Blueprint('voter', __name__)


@voter_bp.route('/vote', methods=['POST'])
def vote():
    """Cast the caller's single vote.

    Body: {"email": ..., "enrollmentnum": <candidate enrollment number>}
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}

    message = get_services().votes.cast_vote(
        email=data.get('email'),
        enrollment_number=data.get('enrollmentnum')
    )
    return jsonify({'message': message})


@voter_bp.route('/vote/status/<path:email>', methods=['GET'])
def vote_status(email):
    """Whether a vote has been recorded for this email."""
    return jsonify({'hasVoted': get_services().votes.has_voted(email)})
