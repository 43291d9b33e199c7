# tavla/game_core/move.py

from dataclasses import dataclass
from typing import Any, Dict

from . import constants as c


@dataclass(frozen=True)
class Move:
    """
    Один элементарный ход на одно значение кубика.
    from_index == BAR  -> вход с бара;
    to_index == BEAR_OFF -> выброс шашки.
    """
    from_index: int
    to_index: int
    step: int

    @property
    def is_bar_entry(self) -> bool:
        return self.from_index == c.BAR

    @property
    def is_bear_off(self) -> bool:
        return self.to_index == c.BEAR_OFF

    def to_dict(self) -> Dict[str, Any]:
        return {'from': self.from_index, 'to': self.to_index, 'step': self.step}


BAR = c.BAR
BEAR_OFF = c.BEAR_OFF
