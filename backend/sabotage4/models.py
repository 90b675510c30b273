from typing import Dict, NamedTuple, Optional

from sabotage4.services.games.rules import Board, create_empty_board

RED = 'red'
YELLOW = 'yellow'
COLORS = (RED, YELLOW)

# Phases
WAITING_FOR_OPPONENT = 'waiting_for_opponent'
INIT_SELECT_RED = 'init_select_red'
INIT_SELECT_YELLOW = 'init_select_yellow'
PLAYING = 'playing'
SABOTAGE_SELECT_RED = 'sabotage_select_red'
SABOTAGE_SELECT_YELLOW = 'sabotage_select_yellow'
GAME_OVER = 'game_over'

# Reselection kinds
OVERLAP = 'overlap'
SABOTAGE = 'sabotage'


def opponent_of(color: str) -> str:
    return YELLOW if color == RED else RED


def selection_phase(color: str) -> str:
    return SABOTAGE_SELECT_RED if color == RED else SABOTAGE_SELECT_YELLOW


class SabotageSpot(NamedTuple):
    row: int
    col: int

    def to_dict(self):
        return {'row': self.row, 'col': self.col}


class Reselection(NamedTuple):
    """Why the game is waiting on (or owes) a sabotage reselection.

    ``kind`` is OVERLAP when both spots were sprung at once, SABOTAGE when a
    single spot was. ``cause`` is the color whose move sprang it.
    """
    kind: str
    cause: str


class GameSession:
    """Authoritative state of one match between two participants."""

    def __init__(self, game_id: str, red_sid: str):
        self.game_id = game_id
        self.board: Board = create_empty_board()
        self.players: Dict[str, str] = {red_sid: RED}
        self.player_sockets: Dict[str, Optional[str]] = {RED: red_sid, YELLOW: None}
        self.current_player: Optional[str] = None
        self.phase = WAITING_FOR_OPPONENT
        self.winner: Optional[str] = None
        self.is_draw = False
        self.sabotage: Dict[str, Optional[SabotageSpot]] = {RED: None, YELLOW: None}
        self.reselection: Optional[Reselection] = None
        self.rematch_requested = {RED: False, YELLOW: False}
        self.pending_reselect = {RED: False, YELLOW: False}

    def color_of(self, sid: str) -> Optional[str]:
        return self.players.get(sid)

    def opponent_sid(self, sid: str) -> Optional[str]:
        color = self.color_of(sid)
        if color is None:
            return None
        return self.player_sockets[opponent_of(color)]

    @property
    def is_full(self) -> bool:
        return self.player_sockets[YELLOW] is not None

    @property
    def overlap_trigger(self) -> Optional[str]:
        if self.reselection and self.reselection.kind == OVERLAP:
            return self.reselection.cause
        return None

    @property
    def sabotage_trigger_cause(self) -> Optional[str]:
        if self.reselection and self.reselection.kind == SABOTAGE:
            return self.reselection.cause
        return None

    def clear_round(self) -> None:
        """Reset everything that belongs to a single match, keeping the participants."""
        self.board = create_empty_board()
        self.winner = None
        self.is_draw = False
        self.sabotage = {RED: None, YELLOW: None}
        self.reselection = None
        self.rematch_requested = {RED: False, YELLOW: False}
        self.pending_reselect = {RED: False, YELLOW: False}

    def to_dict(self):
        red_spot = self.sabotage[RED]
        yellow_spot = self.sabotage[YELLOW]
        return {
            'gameId': self.game_id,
            'board': [list(row) for row in self.board],
            'players': dict(self.players),
            'playerSockets': dict(self.player_sockets),
            'currentPlayer': self.current_player,
            'winner': self.winner,
            'isDraw': self.is_draw,
            'gamePhase': self.phase,
            'redSabotage': red_spot.to_dict() if red_spot else None,
            'yellowSabotage': yellow_spot.to_dict() if yellow_spot else None,
            'overlapJustTriggered': self.overlap_trigger,
            'sabotageTriggeredBy': self.sabotage_trigger_cause,
            'rematchRequested': dict(self.rematch_requested),
            'pendingReselect': dict(self.pending_reselect),
        }
