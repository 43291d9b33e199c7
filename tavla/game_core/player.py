# tavla/game_core/player.py

from enum import Enum


class Player(Enum):
    """
    Два игрока. WHITE всегда начинает партию и идет от 23 к 0,
    BLACK идет от 0 к 23.
    """
    WHITE = "WHITE"
    BLACK = "BLACK"

    def opponent(self) -> 'Player':
        return Player.BLACK if self is Player.WHITE else Player.WHITE
