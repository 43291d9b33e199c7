# tavla/services/game_service.py

from typing import Any, Dict, List, Optional

from tavla.game_core import Move
from .game_room import GameRoom
from .room_registry import RoomRegistry
from .game_factory import GameFactory

Notification = Dict[str, Any]

NOT_IN_ROOM_MESSAGE = 'Вы не находитесь в комнате. Отправьте create_room или join_room.'


def _error(sid: str, message: str) -> Notification:
    return {'event': 'error', 'payload': {'message': message}, 'room': sid}


class GameService:
    """
    Фасад, координирующий действия с комнатами.
    Не владеет состоянием, а делегирует его реестру и комнатам.
    """

    def __init__(self, registry: RoomRegistry, factory: GameFactory, log_event=None):
        """
        Инициализируется через Внедрение Зависимостей (Dependency Injection).
        """
        self.registry = registry
        self.factory = factory
        self.log_event = log_event or (lambda *args, **kwargs: None)

    ### Публичный API (Прокси к Registry) ###

    def get_room_by_sid(self, sid: str) -> Optional[GameRoom]:
        return self.registry.get_by_sid(sid)

    def get_room_by_id(self, room_id: str) -> Optional[GameRoom]:
        return self.registry.get_by_room_id(room_id)

    def room_count(self) -> int:
        return self.registry.count()

    ### Комнаты ###

    def create_room(self, sid: str) -> List[Notification]:
        if self.registry.get_by_sid(sid):
            return [_error(sid, 'Вы уже в комнате.')]

        room = self.factory.create_room(sid)
        self.registry.add_room(room)

        return [{
            'event': 'room_created',
            'payload': {'roomId': room.id, 'player': room.get_player(sid).value},
            'room': sid
        }]

    def join_room(self, sid: str, room_id: str) -> List[Notification]:
        if self.registry.get_by_sid(sid):
            return [_error(sid, 'Вы уже в комнате.')]

        room = self.registry.get_by_room_id(room_id)
        if room is None:
            return [_error(sid, 'Комната не найдена.')]

        with room.lock:
            player = room.add_player(sid)
            if player is None:
                return [_error(sid, 'Комната заполнена.')]

            self.registry.associate_sid_to_room(sid, room.id)
            room.start_game()

            notifications = [{
                'event': 'room_joined',
                'payload': {'roomId': room.id, 'player': player.value},
                'room': sid
            }]
            notifications.extend(room.state_notifications())
            return notifications

    ### Ход ###

    def roll(self, sid: str) -> List[Notification]:
        room = self.registry.get_by_sid(sid)
        if room is None:
            return [_error(sid, NOT_IN_ROOM_MESSAGE)]
        return room.roll_dice_for_player(sid)

    def move(self, sid: str, move: Move) -> List[Notification]:
        room = self.registry.get_by_sid(sid)
        if room is None:
            return [_error(sid, NOT_IN_ROOM_MESSAGE)]
        return room.apply_player_step(sid, move)

    ### Управление подключением ###

    def handle_disconnect(self, sid: str) -> List[Notification]:
        """
        Уход любого игрока закрывает комнату целиком.
        Оставшийся игрок получает 'room_closed'.
        """
        room = self.registry.get_by_sid(sid)
        if room is None:
            return []

        opponent_sid = room.get_opponent_sid(sid)
        self.registry.remove_room_by_id(room.id)
        self.log_event("ROOM_CLOSED", f"Комната {room.id} закрыта: игрок отключился.", sid=sid, game_id=room.id)

        if opponent_sid:
            return [{'event': 'room_closed', 'payload': {'roomId': room.id}, 'room': opponent_sid}]
        return []
