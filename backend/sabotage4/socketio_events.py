from flask import current_app, request
from flask_socketio import close_room, emit, join_room

from sabotage4 import socketio
from sabotage4.models import RED, YELLOW
from sabotage4.services.games import engine
from sabotage4.services.games.errors import GameError, SelfJoin, UnknownParticipant
from sabotage4.services.games.registry import GameRegistry


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _registry() -> GameRegistry:
    return current_app.extensions['game_registry']


def _payload(data) -> dict:
    return data if isinstance(data, dict) else {}


def _game_id_from(data) -> str:
    """Accept either a bare game id string or a ``{'gameId': ...}`` payload."""
    if isinstance(data, str):
        return data.strip().lower()
    game_id = _payload(data).get('gameId')
    return str(game_id).strip().lower() if game_id else ''


def _broadcast(session) -> None:
    emit('game_update', session.to_dict(), to=session.game_id)


def _reject(event: str, tag: str, exc: GameError) -> None:
    current_app.logger.info(f"[{tag}] rejected sid={_get_sid()} error={exc.code}: {exc}")
    emit(event, {'message': str(exc)})


def handle_connect(auth=None):
    current_app.logger.info(f"[connect] sid={_get_sid()}")


def handle_disconnect(reason=None):
    sid = _get_sid()
    current_app.logger.info(f"[disconnect] sid={sid}")
    registry = _registry()
    with registry.lock:
        game_id = registry.find_by_participant(sid)
        while game_id:
            _end_game(game_id, sid)
            game_id = registry.find_by_participant(sid)


def handle_create_game(data=None):
    sid = _get_sid()
    registry = _registry()
    with registry.lock:
        game_id, session = registry.create(sid)
        join_room(game_id)
        current_app.logger.info(f"[create] game={game_id} sid={sid} color={RED}")
        emit('game_created', {'gameId': game_id, 'color': RED})
        _broadcast(session)


def handle_join_game(data):
    sid = _get_sid()
    game_id = _game_id_from(data)
    registry = _registry()
    with registry.lock:
        try:
            session = registry.join(game_id, sid)
        except SelfJoin:
            current_app.logger.info(f"[join] ignored self-join game={game_id} sid={sid}")
            return
        except GameError as exc:
            _reject('join_error', 'join', exc)
            return
        join_room(game_id)
        current_app.logger.info(f"[join] game={game_id} sid={sid} color={YELLOW}")
        emit('game_joined', {'gameId': game_id, 'color': YELLOW})
        _broadcast(session)


def handle_select_sabotage(data):
    sid = _get_sid()
    data = _payload(data)
    game_id = _game_id_from(data)
    registry = _registry()
    with registry.lock:
        try:
            session = registry.get(game_id)
            engine.select_sabotage(session, sid, data.get('row'), data.get('col'))
        except UnknownParticipant:
            current_app.logger.warning(f"[sabotage] unknown participant game={game_id} sid={sid}")
            return
        except GameError as exc:
            _reject('game_error', 'sabotage', exc)
            return
        current_app.logger.info(
            f"[sabotage] game={game_id} color={session.color_of(sid)} spot=({data.get('row')}, {data.get('col')}) "
            f"next_phase={session.phase} next_player={session.current_player}"
        )
        _broadcast(session)


def handle_make_move(data):
    sid = _get_sid()
    data = _payload(data)
    game_id = _game_id_from(data)
    registry = _registry()
    with registry.lock:
        try:
            session = registry.get(game_id)
            outcome = engine.make_move(session, sid, data.get('col'))
        except GameError as exc:
            _reject('game_error', 'move', exc)
            return
        current_app.logger.info(
            f"[move] game={game_id} color={session.color_of(sid)} col={data.get('col')} outcome={outcome} "
            f"next_phase={session.phase} next_player={session.current_player}"
        )
        _broadcast(session)


def handle_request_rematch(data):
    sid = _get_sid()
    game_id = _game_id_from(data)
    registry = _registry()
    with registry.lock:
        try:
            session = registry.get(game_id)
            color = session.color_of(sid)
            restarted = engine.request_rematch(session, sid)
        except GameError as exc:
            _reject('game_error', 'rematch', exc)
            return
        if restarted:
            current_app.logger.info(
                f"[rematch] game={game_id} restarted red={session.player_sockets[RED]} yellow={session.player_sockets[YELLOW]}"
            )
        else:
            current_app.logger.info(f"[rematch] game={game_id} requested by {color}")
        _broadcast(session)


def handle_request_state(data):
    sid = _get_sid()
    game_id = _game_id_from(data)
    registry = _registry()
    with registry.lock:
        try:
            session = registry.get(game_id)
            if session.color_of(sid) is None:
                raise UnknownParticipant()
        except GameError as exc:
            _reject('game_error', 'state', exc)
            return
        emit('game_update', session.to_dict())


def handle_leave_game(data=None):
    sid = _get_sid()
    game_id = _game_id_from(data)
    registry = _registry()
    with registry.lock:
        if game_id not in registry or registry.get(game_id).color_of(sid) is None:
            game_id = registry.find_by_participant(sid)
        if not game_id:
            current_app.logger.info(f"[leave] ignored sid={sid}: not in a game")
            return
        _end_game(game_id, sid)

# ---- Session teardown ----

def _end_game(game_id: str, leaving_sid: str) -> None:
    """Remove the game, tell the remaining player, and close the room."""
    session = _registry().remove(game_id)
    if session is None:
        return
    opponent_sid = session.opponent_sid(leaving_sid)
    current_app.logger.info(
        f"[leave] game={game_id} sid={leaving_sid} color={session.color_of(leaving_sid)} opponent={opponent_sid}"
    )
    if opponent_sid:
        emit('opponent_left', {'gameId': game_id}, to=opponent_sid)
    close_room(game_id)


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('create_game', handle_create_game, namespace=namespace)
    socketio.on_event('join_game', handle_join_game, namespace=namespace)
    socketio.on_event('select_sabotage', handle_select_sabotage, namespace=namespace)
    socketio.on_event('make_move', handle_make_move, namespace=namespace)
    socketio.on_event('request_rematch', handle_request_rematch, namespace=namespace)
    socketio.on_event('request_state', handle_request_state, namespace=namespace)
    socketio.on_event('leave_game', handle_leave_game, namespace=namespace)
