# tavla/game_core/board.py

from typing import Dict, List, Optional

from . import constants as c
from .player import Player
from .point import Point
from .errors import InvariantViolationError

Layout = Dict[Player, Dict[int, int]]


class Board:
    """
    24 точки + бар и выброшенные шашки для каждого игрока.
    Доска не знает правил: она только следит за единственным
    владельцем точки и за счетчиками бара/выброса.
    """

    def __init__(self, layout: Optional[Layout] = None):
        self.points: List[Point] = [Point(i) for i in range(c.BOARD_SIZE)]
        self.bar: Dict[Player, int] = {Player.WHITE: 0, Player.BLACK: 0}
        self.borne_off: Dict[Player, int] = {Player.WHITE: 0, Player.BLACK: 0}

        if layout is None:
            layout = c.STANDARD_SETUP
        for player, stacks in layout.items():
            for index, count in stacks.items():
                for _ in range(count):
                    self.add_checker(index, player)

    # --- Конструкторы для тестов и разбора позиций ---

    @classmethod
    def empty(cls) -> 'Board':
        return cls(layout={})

    @classmethod
    def from_layout(
        cls,
        layout: Layout,
        bar: Optional[Dict[Player, int]] = None,
        borne_off: Optional[Dict[Player, int]] = None
    ) -> 'Board':
        """
        Создает произвольную позицию. Счетчики бара и выброса
        задаются отдельно, например {Player.WHITE: 14}.
        """
        board = cls(layout=layout)
        for player, count in (bar or {}).items():
            board.bar[player] = count
        for player, count in (borne_off or {}).items():
            board.borne_off[player] = count
        return board

    # --- Чтение ---

    def point(self, index: int) -> Point:
        return self.points[index]

    def bar_count(self, player: Player) -> int:
        return self.bar[player]

    def borne_off_count(self, player: Player) -> int:
        return self.borne_off[player]

    def occupied_points(self, player: Player) -> List[int]:
        """Индексы точек, на которых стоят шашки игрока (по возрастанию)."""
        return [p.index for p in self.points if p.is_owned_by(player)]

    def checkers_on_board(self, player: Player) -> int:
        return sum(p.count for p in self.points if p.is_owned_by(player))

    def total_checkers(self, player: Player) -> int:
        """Доска + бар + выброшенные. Для стандартной партии всегда 15."""
        return self.checkers_on_board(player) + self.bar[player] + self.borne_off[player]

    # --- Изменение ---

    def add_checker(self, index: int, player: Player):
        self.points[index].add_checker(player)

    def remove_checker(self, index: int, player: Player):
        self.points[index].remove_checker(player)

    def move_to_bar(self, player: Player):
        self.bar[player] += 1

    def remove_from_bar(self, player: Player):
        if self.bar[player] == 0:
            raise InvariantViolationError(f"Бар игрока {player.value} пуст.")
        self.bar[player] -= 1

    def bear_off(self, player: Player):
        self.borne_off[player] += 1

    def __str__(self) -> str:
        result = "Board State:\n"
        for point in self.points:
            if not point.is_empty():
                result += f"Point {point.index}: {point.owner.value} x{point.count}\n"
        result += f"Bar: W={self.bar[Player.WHITE]} B={self.bar[Player.BLACK]}\n"
        result += f"Borne off: W={self.borne_off[Player.WHITE]} B={self.borne_off[Player.BLACK]}\n"
        return result
