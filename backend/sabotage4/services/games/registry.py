import secrets
import threading
from typing import Callable, Dict, Iterator, Optional, Tuple

from sabotage4.models import INIT_SELECT_RED, RED, YELLOW, GameSession
from .errors import GameFull, NotFound, SelfJoin


def generate_game_id(nbytes: int = 4) -> str:
    return secrets.token_hex(nbytes)


class GameRegistry:
    """Live game sessions keyed by game id.

    ``lock`` serializes whole actions (mutate + broadcast) across sessions;
    the registry methods themselves do not take it.
    """

    def __init__(self, id_factory: Optional[Callable[[], str]] = None, id_bytes: int = 4):
        self._games: Dict[str, GameSession] = {}
        self._id_factory = id_factory or (lambda: generate_game_id(id_bytes))
        self.lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._games)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._games))

    def __contains__(self, game_id) -> bool:
        return game_id in self._games

    def _new_id(self) -> str:
        while True:
            game_id = self._id_factory()
            if game_id not in self._games:
                return game_id

    def create(self, sid: str) -> Tuple[str, GameSession]:
        game_id = self._new_id()
        session = GameSession(game_id, sid)
        self._games[game_id] = session
        return game_id, session

    def get(self, game_id: str) -> GameSession:
        session = self._games.get(game_id)
        if session is None:
            raise NotFound(game_id)
        return session

    def join(self, game_id: str, sid: str) -> GameSession:
        session = self.get(game_id)
        if session.player_sockets[YELLOW] is not None:
            raise GameFull()
        if session.player_sockets[RED] == sid:
            raise SelfJoin()
        session.players[sid] = YELLOW
        session.player_sockets[YELLOW] = sid
        session.phase = INIT_SELECT_RED
        session.current_player = RED
        return session

    def remove(self, game_id: str) -> Optional[GameSession]:
        return self._games.pop(game_id, None)

    def find_by_participant(self, sid: str) -> Optional[str]:
        for game_id, session in self._games.items():
            if sid in session.player_sockets.values():
                return game_id
        return None
