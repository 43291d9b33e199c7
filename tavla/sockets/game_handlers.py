# tavla/sockets/game_handlers.py

import logging
from flask import request, current_app
from flask_socketio import emit
from marshmallow import ValidationError
from ..extensions import socketio
from ..globals import log_event
from tavla.api.schemas import JoinRoomSchema, MoveSchema

logger = logging.getLogger(__name__)


def _dispatch(event_name, action, *args):
    """
    Вызывает метод GameService и рассылает уведомления.
    Непредвиденная ошибка не уходит в Socket.IO: лог + 'error' отправителю.
    """
    sid = request.sid
    try:
        notifications = action(sid, *args)
    except Exception as e:
        logger.error(f"[SocketHandler] Ошибка в '{event_name}' для {sid}: {e}", exc_info=True)
        log_event("CRITICAL_ERROR", f"Failed during '{event_name}'. Error: {e}", sid=sid)
        emit('error', {'message': 'Ошибка сервера.'})
        return

    for msg in notifications:
        emit(msg['event'], msg['payload'], room=msg['room'])


def _reject_payload(event_name, err):
    """Неверный формат сообщения: ошибка только отправителю, состояние не трогаем."""
    sid = request.sid
    first_field = next(iter(err.messages), None) if isinstance(err.messages, dict) else None
    if first_field is not None:
        detail = err.messages[first_field]
        detail = detail[0] if isinstance(detail, list) else detail
        message = f"Неверный формат '{event_name}': {first_field}: {detail}"
    else:
        message = f"Неверный формат '{event_name}'."

    log_event("INVALID_PAYLOAD", message, sid=sid, extra_data=err.messages)
    emit('error', {'message': message})


@socketio.on('create_room')
def handle_create_room(data=None):
    """Создатель комнаты всегда играет белыми."""
    game_service = current_app.game_service
    _dispatch('create_room', game_service.create_room)


@socketio.on('join_room')
def handle_join_room(data=None):
    game_service = current_app.game_service

    try:
        payload = JoinRoomSchema().load(data if data is not None else {})
    except ValidationError as err:
        _reject_payload('join_room', err)
        return

    _dispatch('join_room', game_service.join_room, payload['room_id'])


@socketio.on('roll')
def handle_roll(data=None):
    game_service = current_app.game_service
    _dispatch('roll', game_service.roll)


@socketio.on('move')
def handle_move(data=None):
    """Один шаг: {"from": int, "to": int, "step": int}."""
    game_service = current_app.game_service

    try:
        move = MoveSchema().load(data if data is not None else {})
    except ValidationError as err:
        _reject_payload('move', err)
        return

    _dispatch('move', game_service.move, move)
