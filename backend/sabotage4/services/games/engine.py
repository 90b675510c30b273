"""Turn, move and sabotage transitions for a single game session.

Every function validates first and mutates afterwards, so a raised
GameError always leaves the session exactly as it was.
"""

from sabotage4.models import (
    GAME_OVER,
    INIT_SELECT_RED,
    INIT_SELECT_YELLOW,
    OVERLAP,
    PLAYING,
    RED,
    SABOTAGE,
    SABOTAGE_SELECT_RED,
    SABOTAGE_SELECT_YELLOW,
    YELLOW,
    GameSession,
    Reselection,
    SabotageSpot,
    opponent_of,
    selection_phase,
)
from .errors import (
    ColumnFull,
    IllegalAction,
    InvalidColumn,
    InvalidCoordinates,
    NotYourTurn,
    UnknownParticipant,
    WrongPhase,
)
from .rules import COLS, check_draw, check_win, in_bounds, landing_row

# make_move outcomes
RESELECT_REDIRECT = 'reselect_redirect'
WIN = 'win'
DRAW = 'draw'
OVERLAP_TRIGGERED = 'overlap'
OPPONENT_SABOTAGE = 'opponent_sabotage'
OWN_SABOTAGE = 'own_sabotage'
NORMAL = 'normal'

_SELECTION_PHASES = {
    INIT_SELECT_RED: RED,
    INIT_SELECT_YELLOW: YELLOW,
    SABOTAGE_SELECT_RED: RED,
    SABOTAGE_SELECT_YELLOW: YELLOW,
}


def _require_color(session: GameSession, sid: str) -> str:
    color = session.color_of(sid)
    if color is None:
        raise UnknownParticipant()
    return color


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def select_sabotage(session: GameSession, sid: str, row, col) -> None:
    color = _require_color(session, sid)

    in_selection_window = _SELECTION_PHASES.get(session.phase) == color
    delayed_reselect = session.phase == PLAYING and session.pending_reselect[color]
    if session.current_player != color or not (in_selection_window or delayed_reselect):
        raise IllegalAction()

    if not (_is_int(row) and _is_int(col) and in_bounds(row, col)):
        raise InvalidCoordinates()

    session.sabotage[color] = SabotageSpot(row, col)
    session.pending_reselect[color] = False

    if session.phase == INIT_SELECT_RED:
        session.phase = INIT_SELECT_YELLOW
        session.current_player = YELLOW
        return
    if session.phase == INIT_SELECT_YELLOW:
        session.phase = PLAYING
        session.current_player = RED
        return

    opponent = opponent_of(color)
    if session.overlap_trigger == color:
        # The player who sprang the overlap chose first; now the other one picks
        session.phase = selection_phase(opponent)
        session.current_player = opponent
        return

    # Springing your own trap costs the turn; having it sprung does not
    session.current_player = opponent if session.sabotage_trigger_cause == color else color
    session.phase = PLAYING
    session.reselection = None


def make_move(session: GameSession, sid: str, col) -> str:
    """Drop a piece for ``sid`` into ``col`` and return the outcome name."""
    color = _require_color(session, sid)

    if session.phase == PLAYING and session.current_player == color and session.pending_reselect[color]:
        # Owed reselection is paid at the start of the player's next turn
        session.sabotage[color] = None
        session.pending_reselect[color] = False
        session.phase = selection_phase(color)
        session.current_player = color
        return RESELECT_REDIRECT

    if session.phase != PLAYING:
        raise WrongPhase("You can only make moves during the 'playing' phase.")
    if session.current_player != color:
        raise NotYourTurn()
    if not (_is_int(col) and 0 <= col < COLS):
        raise InvalidColumn()
    row = landing_row(session.board, col)
    if row is None:
        raise ColumnFull()

    opponent = opponent_of(color)
    target = SabotageSpot(row, col)
    own_spot = session.sabotage[color] == target
    opponent_spot = session.sabotage[opponent] == target
    is_overlap = own_spot and opponent_spot

    piece = opponent if opponent_spot and not is_overlap else color
    session.board[row][col] = piece

    if check_win(session.board, piece, row, col):
        session.winner = piece
        session.phase = GAME_OVER
        return WIN
    if check_draw(session.board):
        session.is_draw = True
        session.phase = GAME_OVER
        return DRAW

    if is_overlap:
        session.sabotage[RED] = None
        session.sabotage[YELLOW] = None
        session.pending_reselect[RED] = False
        session.pending_reselect[YELLOW] = False
        session.reselection = Reselection(OVERLAP, color)
        session.phase = selection_phase(color)
        session.current_player = color
        return OVERLAP_TRIGGERED

    if opponent_spot:
        session.sabotage[opponent] = None
        session.reselection = Reselection(SABOTAGE, color)
        session.phase = selection_phase(opponent)
        session.current_player = opponent
        return OPPONENT_SABOTAGE

    if own_spot:
        session.pending_reselect[color] = True
        session.reselection = Reselection(SABOTAGE, color)
        session.current_player = opponent
        return OWN_SABOTAGE

    session.reselection = None
    session.current_player = opponent
    return NORMAL


def request_rematch(session: GameSession, sid: str) -> bool:
    """Record a rematch request; return True when both players agreed and the game was reset."""
    if session.phase != GAME_OVER:
        raise WrongPhase('Can only request rematch when game is over.')
    color = _require_color(session, sid)

    session.rematch_requested[color] = True
    if not all(session.rematch_requested.values()):
        return False

    old_red = session.player_sockets[RED]
    old_yellow = session.player_sockets[YELLOW]
    session.clear_round()
    session.players = {old_yellow: RED, old_red: YELLOW}
    session.player_sockets = {RED: old_yellow, YELLOW: old_red}
    session.phase = INIT_SELECT_RED
    session.current_player = RED
    return True
