from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)

RULES_TEXT = """You're probably familiar with the game connect 4. This game is that game, with a twist.

**Rules that are the same**
*   Red goes first, Yellow goes second placing tiles on the board.
*   They alternate in turns, and tiles fall to the bottom unfilled space of their column.
*   If either player makes 4 tiles in a row horizontally, vertically, or diagonally, that player wins.
*   If the board fills up completely with the above condition unfulfilled, the game is a draw.

**New Rules**
*   At the start of the game, each player selects a "Sabotage Space".
*   If a player places their tile on a space that is the other player's Sabotage Space, it becomes the other player's color.
*   If a player places a tile on their own Sabotage Space, they pick a new Sabotage Space at the start of their next turn.
*   If both players have the same Sabotage Space, the effect is cancelled out without either player knowing until either player places a tile there, and then both players pick new Sabotage Spaces.
"""

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Sabotage Connect 4 server!'})

@main.route('/health')
def health():
    registry = current_app.extensions['game_registry']
    return jsonify({'status': 'ok', 'games': len(registry)})

@main.route('/rules')
def rules():
    return jsonify({'rules': RULES_TEXT})
