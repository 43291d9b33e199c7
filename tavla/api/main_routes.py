# tavla/api/main_routes.py

from flask import (
    Blueprint,
    current_app,
    jsonify
)
from ..extensions import limiter

bp = Blueprint('main', __name__)


@bp.route('/health')
def health():
    return jsonify({"status": "ok", "rooms": current_app.game_service.room_count()})


@bp.route('/rooms/<room_id>/state')
@limiter.limit(lambda: current_app.config['STATE_RATE_LIMIT'])
def room_state(room_id):
    """
    Снимок партии в том же формате, что и событие 'state'.
    Только чтение: ходы делаются через сокет.
    """
    room = current_app.game_service.get_room_by_id(room_id)
    if room is None:
        current_app.logger.info(f"Запрос состояния несуществующей комнаты {room_id}")
        return jsonify({"error": "Room not found"}), 404

    payload = room.state_payload()
    if payload is None:
        return jsonify({"error": "Game has not started yet"}), 409

    return jsonify(payload)
