# tavla/services/game_room.py

import threading
import time
from typing import Any, Callable, Dict, List, Optional

from tavla.api.schemas import StateSchema
from tavla.game_core import Dice, GameState, Player, snapshot
from tavla.game_core.dice import DiceSource

from .game_turn_manager import GameTurnManager

Notification = Dict[str, Any]


class GameRoom:
    """
    Представляет ОДНУ комнату: два места (WHITE/BLACK), партию и замок.
    Все изменения партии выполняются под self.lock, поэтому
    одновременно в комнате идет не больше одного броска/хода.
    """

    def __init__(
        self,
        room_id: str,
        turn_manager: GameTurnManager,
        log_event: Callable,
        dice_source: Optional[DiceSource] = None
    ):
        self.id = room_id
        self.log_event = log_event
        self.lock = threading.RLock()

        self.sid_white: Optional[str] = None
        self.sid_black: Optional[str] = None
        self.state: Optional[GameState] = None

        self._dice_source = dice_source

        self.turn_manager = turn_manager
        self.turn_manager.set_lock(self.lock)

        self.created_at = time.time()
        self.log_event("ROOM_INIT", f"Комната {self.id} создана.", game_id=self.id)

    # --- Места ---

    def is_full(self) -> bool:
        return self.sid_white is not None and self.sid_black is not None

    def has_started(self) -> bool:
        return self.state is not None

    def add_player(self, sid: str) -> Optional[Player]:
        """Сажает игрока на первое свободное место. None - мест нет."""
        with self.lock:
            if self.sid_white is None:
                self.sid_white = sid
                return Player.WHITE
            if self.sid_black is None:
                self.sid_black = sid
                return Player.BLACK
            return None

    def get_player(self, sid: str) -> Optional[Player]:
        if sid and sid == self.sid_white:
            return Player.WHITE
        if sid and sid == self.sid_black:
            return Player.BLACK
        return None

    def get_sid(self, player: Player) -> Optional[str]:
        return self.sid_white if player is Player.WHITE else self.sid_black

    def get_all_sids(self) -> List[str]:
        return [sid for sid in (self.sid_white, self.sid_black) if sid]

    def get_opponent_sid(self, sid: str) -> Optional[str]:
        player = self.get_player(sid)
        if player is None:
            return None
        return self.get_sid(player.opponent())

    # --- Жизненный цикл партии ---

    def start_game(self):
        with self.lock:
            if not self.is_full():
                raise RuntimeError(f"Комната {self.id}: партия не может начаться без второго игрока.")
            if self.state is not None:
                return
            self.state = GameState(dice=Dice(source=self._dice_source))
            self.log_event("GAME_START", "Оба места заняты, партия начата.", game_id=self.id)

    def state_payload(self) -> Optional[Dict[str, Any]]:
        """Сериализованный снимок партии (None, если партия не начата)."""
        with self.lock:
            if self.state is None:
                return None
            return StateSchema().dump(snapshot(self.state))

    def state_notifications(self) -> List[Notification]:
        """Рассылка текущего состояния обоим игрокам."""
        payload = self.state_payload()
        if payload is None:
            return []
        return [{'event': 'state', 'payload': payload, 'room': sid} for sid in self.get_all_sids()]

    # --- Логика хода (делегируем) ---

    def roll_dice_for_player(self, sid: str) -> List[Notification]:
        return self.turn_manager.roll_dice_for_player(self, sid)

    def apply_player_step(self, sid: str, move) -> List[Notification]:
        return self.turn_manager.apply_player_step(self, sid, move)
