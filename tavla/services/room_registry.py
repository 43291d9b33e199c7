# tavla/services/room_registry.py

import threading
from typing import Dict, Optional

from .game_room import GameRoom


class RoomRegistry:
    """
    Отвечает ИСКЛЮЧИТЕЛЬНО за хранение и поиск активных комнат.
    Потокобезопасен.
    """
    def __init__(self, log_event_func=None):
        self.rooms: Dict[str, GameRoom] = {}  # room_id -> GameRoom
        self.sid_to_room_id: Dict[str, str] = {}

        self.lock = threading.RLock()
        self.log_event = log_event_func or (lambda *args, **kwargs: None)

    def add_room(self, room: GameRoom):
        """
        Регистрирует новую комнату и все ее SID'ы.
        """
        room_id = room.id
        with self.lock:
            if room_id in self.rooms:
                self.log_event("REGISTRY_WARN", f"Комната {room_id} уже существует при добавлении.", game_id=room_id)
                return

            self.rooms[room_id] = room
            for sid in room.get_all_sids():
                self.sid_to_room_id[sid] = room_id

            self.log_event("REGISTRY_ADD", f"Комната {room_id} добавлена. Всего комнат: {len(self.rooms)}", game_id=room_id)

    def remove_room_by_id(self, room_id: str) -> Optional[GameRoom]:
        """
        Полностью удаляет комнату из всех реестров.
        """
        if not room_id:
            return None

        with self.lock:
            room = self.rooms.pop(room_id, None)
            if room is None:
                self.log_event("REGISTRY_WARN", f"Попытка удалить несуществующую комнату {room_id}", game_id=room_id)
                return None

            sids_to_remove = [sid for sid, rid in self.sid_to_room_id.items() if rid == room_id]
            for sid in sids_to_remove:
                del self.sid_to_room_id[sid]

            self.log_event("REGISTRY_REMOVE", f"Комната {room_id} удалена. Осталось комнат: {len(self.rooms)}", game_id=room_id)
            return room

    def get_by_room_id(self, room_id: str) -> Optional[GameRoom]:
        with self.lock:
            return self.rooms.get(room_id)

    def get_by_sid(self, sid: str) -> Optional[GameRoom]:
        """Получить комнату по SID'у игрока."""
        with self.lock:
            room_id = self.sid_to_room_id.get(sid)
            if not room_id:
                return None
            return self.rooms.get(room_id)

    def associate_sid_to_room(self, sid: str, room_id: str):
        """Связать SID с комнатой (после join)."""
        with self.lock:
            if room_id not in self.rooms:
                self.log_event("REGISTRY_WARN", f"Попытка привязать SID к несуществующей комнате {room_id}", game_id=room_id, sid=sid)
                return
            self.sid_to_room_id[sid] = room_id
            self.log_event("REGISTRY_ASSOC", f"SID {sid} привязан к комнате {room_id}", game_id=room_id, sid=sid)

    def count(self) -> int:
        with self.lock:
            return len(self.rooms)
