# tavla/sockets/connection_handlers.py
import datetime
import threading
from flask import request, current_app
from flask_socketio import emit
from ..extensions import socketio
from ..globals import log_event

# sid -> время подключения (для длительности сессии в логе)
connect_times = {}
connect_times_lock = threading.Lock()


@socketio.on('connect')
def handle_connect(auth=None):
    sid = request.sid
    with connect_times_lock:
        connect_times[sid] = datetime.datetime.now()

    log_event("SESSION_START", "Client connected.", sid=sid)
    emit('info', {'message': 'Подключено. Отправьте create_room или join_room.'})


@socketio.on('disconnect')
def handle_disconnect(reason=None):
    game_service = current_app.game_service

    sid = request.sid
    duration_str = "N/A"

    with connect_times_lock:
        connect_time = connect_times.pop(sid, None)

    if connect_time:
        duration = datetime.datetime.now() - connect_time
        duration_str = str(datetime.timedelta(seconds=int(duration.total_seconds())))

    log_event("SESSION_END", f"Client disconnected. Session duration: {duration_str}", sid=sid)

    # Комната закрывается, оставшийся игрок получает 'room_closed'
    for msg in game_service.handle_disconnect(sid):
        emit(msg['event'], msg['payload'], room=msg['room'])
