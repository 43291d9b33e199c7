# tavla/game_core/__init__.py

# Публичный API ядра правил
from .constants import (
    BAR, BEAR_OFF, BOARD_SIZE, CHECKERS_PER_PLAYER,
    STANDARD_WHITE_SETUP, STANDARD_BLACK_SETUP
)

from .player import Player
from .point import Point
from .board import Board
from .dice import Dice, fixed_source, random_source
from .move import Move
from .game_state import GameState

from .errors import (
    GameRuleError,
    InvariantViolationError,
    IllegalMoveError,
    UnknownStepError,
    GameOverError
)

from .game_logic import (
    roll_dice,
    is_move_legal,
    apply_move,
    can_land_on,
    legal_moves,
    has_legal_move,
    skip_turn
)

from .snapshot import (
    GameSnapshot,
    PointView,
    snapshot
)
