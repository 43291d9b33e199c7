# tavla/game_core/game_logic.py

import logging
from typing import List, Optional, Tuple

from . import constants as c
from .board import Board
from .errors import GameOverError, IllegalMoveError
from .game_state import GameState
from .move import Move
from .player import Player

logger = logging.getLogger(__name__)


# === Направление движения ===
# Оба игрока ходят навстречу друг другу. Вместо двух веток для белых
# и черных любая точка переводится в "сколько пипсов до выхода"
# и обратно, поэтому зеркальность правил гарантируется одной парой функций.

def pips_to_exit(player: Player, index: int) -> int:
    """WHITE: 0 -> 1, 5 -> 6, 23 -> 24. BLACK: 23 -> 1, 18 -> 6, 0 -> 24."""
    if player is Player.WHITE:
        return index + 1
    return c.BOARD_SIZE - index


def index_for_pips(player: Player, pips: int) -> int:
    """Обратная функция к pips_to_exit."""
    if player is Player.WHITE:
        return pips - 1
    return c.BOARD_SIZE - pips


def entry_point(player: Player, step: int) -> int:
    """Точка входа с бара: WHITE 1 -> 23, 6 -> 18; BLACK 1 -> 0, 6 -> 5."""
    return index_for_pips(player, c.BOARD_SIZE + 1 - step)


def target_index(player: Player, from_index: int, step: int) -> int:
    """Куда приходит шашка с from_index на step пипсов (может уйти за доску)."""
    return index_for_pips(player, pips_to_exit(player, from_index) - step)


def is_on_board(index: int) -> bool:
    return 0 <= index < c.BOARD_SIZE


def is_in_home(player: Player, index: int) -> bool:
    """Точка лежит в доме игрока (шесть точек у выхода)."""
    return is_on_board(index) and pips_to_exit(player, index) <= c.HOME_SIZE


def all_checkers_in_home(board: Board, player: Player) -> bool:
    # Шашка на баре - значит, не все дома
    if board.bar_count(player) > 0:
        return False
    return all(is_in_home(player, i) for i in board.occupied_points(player))


def has_checkers_further_from_exit(board: Board, player: Player, from_index: int) -> bool:
    """Есть ли в доме шашка игрока дальше от выхода, чем from_index."""
    distance = pips_to_exit(player, from_index)
    return any(
        is_in_home(player, i) and pips_to_exit(player, i) > distance
        for i in board.occupied_points(player)
    )


def can_land_on(state: GameState, index: int) -> bool:
    """
    Правило приземления:
    - пустая точка -> можно;
    - своя точка -> можно;
    - одна шашка соперника -> можно (бьем блот);
    - две и больше шашек соперника -> нельзя (блок).
    """
    point = state.board.point(index)
    if point.is_empty() or point.owner is state.current_player:
        return True
    return point.count == 1


# === Проверка легальности ===

def _illegal_reason(state: GameState, move: Move) -> Optional[str]:
    """
    Возвращает None, если ход легален, иначе причину отказа.
    Никогда не бросает исключений.
    """
    if state.game_over:
        return "игра уже окончена"

    dice = state.dice
    if not dice.rolled:
        return "кубики не брошены"

    step = move.step
    if not dice.has_step(step):
        return f"значения {step} нет среди оставшихся шагов"

    board = state.board
    current = state.current_player
    from_index, to_index = move.from_index, move.to_index

    # 1. Шашки на баре - сначала вход с бара
    if board.bar_count(current) > 0:
        if not move.is_bar_entry:
            return "сначала нужно ввести шашки с бара"
        expected = entry_point(current, step)
        if to_index != expected:
            return f"вход с бара на {step} ведет на точку {expected}"
        if not can_land_on(state, expected):
            return "точка входа заблокирована"
        return None

    # 2. Выброс (bear off)
    if move.is_bear_off:
        if not is_on_board(from_index):
            return "выброс возможен только с доски"
        if not board.point(from_index).is_owned_by(current):
            return f"на точке {from_index} нет ваших шашек"
        if not is_in_home(current, from_index):
            return f"точка {from_index} вне дома"
        if not all_checkers_in_home(board, current):
            return "не все шашки в доме"

        needed = pips_to_exit(current, from_index)
        if step < needed:
            return f"для выброса с точки {from_index} нужно {needed}"
        if step > needed and has_checkers_further_from_exit(board, current, from_index):
            # Перебор разрешен только с самой дальней занятой точки
            return "в доме есть шашки дальше от выхода"
        return None

    # 3. Обычный ход по доске
    if not is_on_board(from_index) or not is_on_board(to_index):
        return "точки хода вне доски"
    if not board.point(from_index).is_owned_by(current):
        return f"на точке {from_index} нет ваших шашек"
    if to_index != target_index(current, from_index, step):
        return f"с точки {from_index} на {step} нельзя попасть на точку {to_index}"
    if not can_land_on(state, to_index):
        return f"точка {to_index} заблокирована соперником"
    return None


def is_move_legal(state: GameState, move: Move) -> bool:
    """Чистый предикат: без побочных эффектов и без исключений."""
    return _illegal_reason(state, move) is None


# === Изменение состояния ===

def roll_dice(state: GameState) -> Tuple[int, int]:
    """Бросает кубики для текущего игрока."""
    if state.game_over:
        raise GameOverError("Игра окончена, бросать кубики нельзя.")
    return state.dice.roll()


def apply_move(state: GameState, move: Move) -> bool:
    """
    Применяет легальный ход. Возвращает True, если была сбита шашка соперника.
    Нелегальный ход -> IllegalMoveError, состояние не меняется.
    """
    reason = _illegal_reason(state, move)
    if reason is not None:
        raise IllegalMoveError(f"Недопустимый ход {move.to_dict()}: {reason}.", move=move)

    board = state.board
    current = state.current_player
    opponent = current.opponent()
    was_blot = False

    # 1. Бьем одиночную шашку соперника
    if not move.is_bear_off:
        target = board.point(move.to_index)
        if target.is_owned_by(opponent):
            board.remove_checker(move.to_index, opponent)
            board.move_to_bar(opponent)
            was_blot = True

    # 2. Снимаем свою шашку
    if move.is_bar_entry:
        board.remove_from_bar(current)
    else:
        board.remove_checker(move.from_index, current)

    # 3. Выбрасываем или ставим на точку
    if move.is_bear_off:
        board.bear_off(current)
    else:
        board.add_checker(move.to_index, current)

    # 4. Тратим шаг
    state.dice.use_step(move.step)

    logger.debug("%s played %s (hit=%s)", current.value, move.to_dict(), was_blot)

    if board.borne_off_count(current) >= c.CHECKERS_PER_PLAYER:
        state.end_game(current)
    elif not state.dice.rolled:
        state.switch_turn()

    return was_blot


# === Перебор ходов ===

def legal_moves(state: GameState) -> List[Move]:
    """
    Все легальные элементарные ходы прямо сейчас:
    по одному на пару (откуда, шаг), шаги по убыванию.
    """
    if state.game_over or not state.dice.rolled:
        return []

    board = state.board
    current = state.current_player
    moves: List[Move] = []

    for step in sorted(set(state.dice.remaining_steps), reverse=True):
        if board.bar_count(current) > 0:
            candidates = [Move(c.BAR, entry_point(current, step), step)]
        else:
            candidates = []
            for origin in board.occupied_points(current):
                if pips_to_exit(current, origin) - step >= 1:
                    candidates.append(Move(origin, target_index(current, origin, step), step))
                else:
                    candidates.append(Move(origin, c.BEAR_OFF, step))

        moves.extend(m for m in candidates if is_move_legal(state, m))

    return moves


def has_legal_move(state: GameState) -> bool:
    return bool(legal_moves(state))


def skip_turn(state: GameState) -> Tuple[int, ...]:
    """
    Передает ход, когда игроку нечем ходить.
    Возвращает сгоревшие шаги. Если ход есть - IllegalMoveError.
    """
    if state.game_over:
        raise GameOverError("Игра окончена.")
    if not state.dice.rolled:
        raise IllegalMoveError("Нельзя пропустить ход до броска кубиков.")
    if has_legal_move(state):
        raise IllegalMoveError("Пропуск хода невозможен: есть доступные ходы.")

    forfeited = state.dice.remaining_steps
    state.dice.clear()
    state.switch_turn()
    return forfeited
