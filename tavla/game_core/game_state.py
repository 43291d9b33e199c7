# tavla/game_core/game_state.py

from typing import Optional

from .board import Board
from .dice import Dice
from .player import Player


class GameState:
    """
    Простой класс-хранилище для всего состояния одной партии:
    доска, кубики, чей ход и исход. Правил не содержит:
    меняется только через функции game_logic.
    """

    def __init__(
        self,
        board: Optional[Board] = None,
        dice: Optional[Dice] = None,
        current_player: Player = Player.WHITE
    ):
        self.board: Board = board if board is not None else Board()
        self.dice: Dice = dice if dice is not None else Dice()
        self.current_player: Player = current_player
        self.game_over: bool = False
        self.winner: Optional[Player] = None

    def switch_turn(self):
        self.current_player = self.current_player.opponent()

    def end_game(self, winner: Player):
        self.game_over = True
        self.winner = winner

    def __repr__(self):
        return (f"GameState(current_player={self.current_player.value}, "
                f"dice={self.dice!r}, game_over={self.game_over}, "
                f"winner={self.winner.value if self.winner else None})")
