# tavla/game_core/snapshot.py

from dataclasses import dataclass
from typing import Optional, Tuple

from .game_state import GameState
from .player import Player


@dataclass(frozen=True)
class PointView:
    index: int
    owner: Optional[Player]
    count: int


@dataclass(frozen=True)
class GameSnapshot:
    """
    Read-only снимок партии для отображения.
    Точки всегда идут в порядке 0 -> 23, у пустой точки owner = None.
    """
    points: Tuple[PointView, ...]
    white_bar: int
    black_bar: int
    white_borne_off: int
    black_borne_off: int
    die1: int
    die2: int
    remaining_steps: Tuple[int, ...]
    rolled: bool
    current_player: Player
    game_over: bool
    winner: Optional[Player]


def snapshot(state: GameState) -> GameSnapshot:
    board = state.board
    dice = state.dice
    points = tuple(
        PointView(index=p.index, owner=None if p.is_empty() else p.owner, count=p.count)
        for p in board.points
    )
    return GameSnapshot(
        points=points,
        white_bar=board.bar_count(Player.WHITE),
        black_bar=board.bar_count(Player.BLACK),
        white_borne_off=board.borne_off_count(Player.WHITE),
        black_borne_off=board.borne_off_count(Player.BLACK),
        die1=dice.die1,
        die2=dice.die2,
        remaining_steps=dice.remaining_steps,
        rolled=dice.rolled,
        current_player=state.current_player,
        game_over=state.game_over,
        winner=state.winner,
    )
