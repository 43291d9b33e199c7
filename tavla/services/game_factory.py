# tavla/services/game_factory.py

import random
import uuid
from typing import Any, Callable, Dict, Optional

from tavla.game_core import random_source
from tavla.game_core.dice import DiceSource
from .game_room import GameRoom
from .game_turn_manager import GameTurnManager


class GameFactory:
    """
    Собирает комнату со всеми зависимостями (логгеры, источник кубиков).
    """

    def __init__(
        self,
        config: Dict[str, Any],
        log_event: Callable,
        log_stats: Callable,
        dice_source_factory: Optional[Callable[[str], DiceSource]] = None
    ):
        self.config = config
        self.log_event = log_event
        self.log_stats = log_stats

        # --- Извлекаем нужные ключи из внедренного конфига ---
        try:
            self.room_id_length = int(config['ROOM_ID_LENGTH'])
            self.dice_seed = config['DICE_SEED']
        except KeyError as e:
            raise KeyError(f"GameFactory: отсутствует ключ конфига {e} при внедрении.")

        self.dice_source_factory = dice_source_factory or self._default_dice_source

    def _default_dice_source(self, room_id: str) -> DiceSource:
        if self.dice_seed is None:
            return random_source(random.Random())
        # Воспроизводимые броски: своя последовательность для каждой комнаты
        return random_source(random.Random(f"{self.dice_seed}:{room_id}"))

    def _new_room_id(self) -> str:
        return uuid.uuid4().hex[:self.room_id_length]

    def create_room(self, sid: str) -> GameRoom:
        """
        Создает комнату и сажает ее создателя за белых.
        """
        room_id = self._new_room_id()

        turn_manager = GameTurnManager(
            game_id=room_id,
            log_event=self.log_event,
            log_stats=self.log_stats
        )

        room = GameRoom(
            room_id=room_id,
            turn_manager=turn_manager,
            log_event=self.log_event,
            dice_source=self.dice_source_factory(room_id)
        )
        room.add_player(sid)

        self.log_event("ROOM_CREATED", f"Комната {room_id} создана игроком {sid}", game_id=room_id, sid=sid)
        return room
