# tavla/game_core/constants.py

from .player import Player

# === Размеры доски ===
BOARD_SIZE = 24
HOME_SIZE = 6
CHECKERS_PER_PLAYER = 15

# === Кубики ===
DIE_MIN = 1
DIE_MAX = 6
DOUBLES_STEPS = 4

# === Специальные индексы хода ===
# Откуда: с бара. Куда: выброс (bear off).
BAR = -1
BEAR_OFF = 24

# === Начальная расстановка (индекс точки -> количество шашек) ===
STANDARD_WHITE_SETUP = {23: 2, 12: 5, 7: 3, 5: 5}
STANDARD_BLACK_SETUP = {0: 2, 11: 5, 16: 3, 18: 5}

STANDARD_SETUP = {
    Player.WHITE: STANDARD_WHITE_SETUP,
    Player.BLACK: STANDARD_BLACK_SETUP,
}
