# tavla/game_core/point.py

from typing import Optional

from .player import Player
from .errors import InvariantViolationError


class Point:
    """
    Одна из 24 точек доски: владелец и количество шашек.
    Инвариант: count == 0 <=> owner is None.
    """

    def __init__(self, index: int):
        self.index = index
        self.owner: Optional[Player] = None
        self.count = 0

    def is_empty(self) -> bool:
        return self.count == 0

    def is_owned_by(self, player: Player) -> bool:
        return self.count > 0 and self.owner is player

    def add_checker(self, player: Player):
        if self.is_empty():
            self.owner = player
            self.count = 1
        elif self.owner is player:
            self.count += 1
        else:
            raise InvariantViolationError(
                f"Нельзя поставить шашку {player.value} на точку {self.index}: "
                f"она занята игроком {self.owner.value}."
            )

    def remove_checker(self, player: Player):
        if not self.is_owned_by(player):
            raise InvariantViolationError(
                f"Игрок {player.value} не может снять шашку с точки {self.index}."
            )
        self.count -= 1
        if self.count == 0:
            self.owner = None

    def __repr__(self):
        owner = self.owner.value if self.owner else None
        return f"Point(index={self.index}, owner={owner}, count={self.count})"
