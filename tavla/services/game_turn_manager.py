# tavla/services/game_turn_manager.py

import logging
import threading
from typing import TYPE_CHECKING, Any, Callable, Dict, List

from tavla.game_core import (
    GameRuleError,
    IllegalMoveError,
    Move,
    apply_move,
    has_legal_move,
    roll_dice,
    skip_turn,
)

if TYPE_CHECKING:
    from .game_room import GameRoom

logger = logging.getLogger(__name__)

Notification = Dict[str, Any]


def _error(sid: str, message: str) -> Notification:
    return {'event': 'error', 'payload': {'message': message}, 'room': sid}


class GameTurnManager:
    """
    Управляет логикой хода в одной комнате: бросок, применение шага,
    автоматический пропуск хода и фиксация победы.
    Сами правила живут в tavla.game_core, здесь только проверки-предохранители.
    """
    def __init__(
        self,
        game_id: str,

        # --- Зависимости, внедренные фабрикой ---
        log_event: Callable,
        log_stats: Callable
    ):
        self.game_id = game_id
        self.lock = threading.RLock()

        self.log_event = log_event
        self.log_stats = log_stats

    def set_lock(self, lock: threading.RLock):
        """Устанавливает внешний RLock из GameRoom."""
        self.lock = lock

    def roll_dice_for_player(self, room: 'GameRoom', sid: str) -> List[Notification]:
        """
        Обрабатывает бросок кубиков игроком.

        1. Проверяет, что действие легально (партия идет, ход этого игрока, кубики не брошены).
        2. Выполняет бросок.
        3. Если ходить нечем - сразу передает ход.
        4. Возвращает список уведомлений.
        """
        with self.lock:
            notifications = []

            # --- 1. Проверки-предохранители ---

            state = room.state
            if state is None:
                notifications.append(_error(sid, 'Игра не началась. Ожидается второй игрок.'))
                return notifications

            player = room.get_player(sid)
            if player is None:
                self.log_event("AUTH_ERROR", f"Player not found for sid {sid}", sid=sid, game_id=self.game_id)
                return notifications

            if state.game_over:
                notifications.append(_error(sid, 'Игра окончена.'))
                return notifications

            if state.current_player is not player:
                notifications.append(_error(sid, f'Сейчас не ваш ход. Ход: {state.current_player.value}.'))
                return notifications

            if state.dice.rolled:
                notifications.append(_error(sid, 'Кубики уже брошены.'))
                return notifications

            # --- 2. Бросок ---

            die1, die2 = roll_dice(state)
            self.log_event("DICE_ROLL", f"{player.value} rolled {die1}-{die2}", sid=sid, game_id=self.game_id)

            # --- 3. Нет ходов - авто-пропуск ---

            notifications.extend(self._skip_if_blocked(room))
            notifications.extend(room.state_notifications())
            return notifications

    def apply_player_step(self, room: 'GameRoom', sid: str, move: Move) -> List[Notification]:
        """
        Обрабатывает ОДИН шаг игрока (одно значение кубика).
        Ошибка правил не меняет состояние и возвращается только отправителю.
        """
        with self.lock:
            notifications = []

            state = room.state
            if state is None:
                notifications.append(_error(sid, 'Игра не началась. Ожидается второй игрок.'))
                return notifications

            player = room.get_player(sid)
            if player is None:
                self.log_event("AUTH_ERROR", f"Player not found for sid {sid}", sid=sid, game_id=self.game_id)
                return notifications

            if state.game_over:
                notifications.append(_error(sid, 'Игра окончена.'))
                return notifications

            if state.current_player is not player:
                notifications.append(_error(sid, f'Сейчас не ваш ход. Ход: {state.current_player.value}.'))
                return notifications

            # --- Применение (ядро само перепроверяет легальность) ---
            try:
                was_blot = apply_move(state, move)
            except IllegalMoveError as e:
                self.log_event("MOVE_REJECTED", str(e), sid=sid, game_id=self.game_id, extra_data=move.to_dict())
                notifications.append(_error(sid, str(e)))
                return notifications
            except GameRuleError as e:
                logger.error(f"[GameTurnManager {self.game_id}] Rule error on {move}: {e}", exc_info=True)
                self.log_event("CRITICAL_ERROR", f"Failed during 'apply_player_step'. Error: {e}", sid=sid, game_id=self.game_id)
                notifications.append(_error(sid, 'Ошибка сервера при обработке хода.'))
                return notifications

            self.log_event(
                "MOVE_APPLIED",
                f"{player.value} played {move.to_dict()}" + (" (hit)" if was_blot else ""),
                sid=sid,
                game_id=self.game_id
            )

            # --- Немедленная проверка победы ---
            if state.game_over:
                self._handle_victory(room)
            else:
                notifications.extend(self._skip_if_blocked(room))

            notifications.extend(room.state_notifications())
            return notifications

    def _skip_if_blocked(self, room: 'GameRoom') -> List[Notification]:
        """Если шаги остались, но ходить нечем - ход сгорает и переходит сопернику."""
        state = room.state
        if not state.dice.rolled or has_legal_move(state):
            return []

        player = state.current_player
        forfeited = skip_turn(state)
        self.log_event(
            "AUTO_TURN_FINISH",
            f"{player.value} has no moves with {list(forfeited)}. Turn passed.",
            game_id=self.game_id
        )
        payload = {'player': player.value, 'steps': list(forfeited)}
        return [{'event': 'turn_skipped', 'payload': payload, 'room': sid} for sid in room.get_all_sids()]

    def _handle_victory(self, room: 'GameRoom'):
        state = room.state
        winner = state.winner
        loser = winner.opponent()

        logger.info(f"[GameTurnManager {self.game_id}] Game over. Winner: {winner.value}")
        self.log_event("GAME_END_WIN", f"Winner: {winner.value}", game_id=self.game_id)

        self.log_stats({
            "game_id": self.game_id,
            "outcome": "WIN",
            "winner": winner.value,
            "winner_sid": room.get_sid(winner),
            "loser_sid": room.get_sid(loser),
            "loser_borne_off": state.board.borne_off_count(loser),
        })
