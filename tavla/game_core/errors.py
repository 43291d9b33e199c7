# tavla/game_core/errors.py

# Все ошибки ядра - это ошибки вызывающего кода (протокола).
# В нормальной легальной игре они не возникают.


class GameRuleError(Exception):
    """Базовое исключение правил игры."""
    pass


class InvariantViolationError(GameRuleError):
    """Нарушен инвариант доски: чужая точка, пустая точка или пустой бар."""
    pass


class IllegalMoveError(GameRuleError):
    """Попытка применить ход, который не проходит проверку легальности."""

    def __init__(self, message, move=None):
        super().__init__(message)
        self.move = move


class UnknownStepError(GameRuleError):
    """Попытка использовать значение кубика, которого нет среди оставшихся."""
    pass


class GameOverError(GameRuleError):
    """Действие над уже завершенной партией."""
    pass
