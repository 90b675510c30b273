from flask import Blueprint, current_app, jsonify

from sabotage4.services.games.errors import NotFound

games = Blueprint('games', __name__)


@games.route('/<string:game_id>/state', methods=['GET'])
def get_game_state(game_id):
    """
    Returns the full authoritative snapshot of a live game.
    """
    registry = current_app.extensions['game_registry']
    with registry.lock:
        try:
            session = registry.get(game_id.lower())
        except NotFound as exc:
            return jsonify({'error': str(exc)}), 404
        return jsonify(session.to_dict())
