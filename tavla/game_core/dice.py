# tavla/game_core/dice.py

import random
from typing import Callable, Iterable, List, Optional, Tuple

from . import constants as c
from .errors import UnknownStepError

DiceSource = Callable[[], Tuple[int, int]]


def _is_face(value: int) -> bool:
    return c.DIE_MIN <= value <= c.DIE_MAX


def random_source(rng: Optional[random.Random] = None) -> DiceSource:
    """Источник бросков на основе random.Random (можно передать seed)."""
    rng = rng or random.Random()

    def _roll() -> Tuple[int, int]:
        return rng.randint(c.DIE_MIN, c.DIE_MAX), rng.randint(c.DIE_MIN, c.DIE_MAX)

    return _roll


def fixed_source(rolls: Iterable[Tuple[int, int]]) -> DiceSource:
    """
    Источник с заранее заданной последовательностью бросков.
    Используется для детерминированных тестов и разбора партий.
    """
    iterator = iter(rolls)

    def _roll() -> Tuple[int, int]:
        return next(iterator)

    return _roll


class Dice:
    """
    Два кубика и мультимножество неиспользованных шагов текущего хода.

    Источник случайности внедряется через конструктор:
      - source: функция, возвращающая пару значений;
      - steps: уже "брошенные" шаги (например, [5] или [4, 4, 4, 4]).
    """

    def __init__(self, source: Optional[DiceSource] = None, steps: Optional[Iterable[int]] = None):
        self._source = source or random_source()
        self.die1 = 0
        self.die2 = 0
        self._remaining: List[int] = []
        self.rolled = False

        if steps is not None:
            steps = list(steps)
            bad = [s for s in steps if not _is_face(s)]
            if bad:
                raise ValueError(f"Недопустимые значения шагов: {bad}")
            self._remaining = steps
            self.rolled = bool(self._remaining)
            if self._remaining:
                self.die1 = self._remaining[0]
                self.die2 = self._remaining[1] if len(self._remaining) > 1 else 0

    @property
    def remaining_steps(self) -> Tuple[int, ...]:
        """Копия оставшихся шагов (порядок сохраняется)."""
        return tuple(self._remaining)

    @property
    def is_double(self) -> bool:
        return self.die1 != 0 and self.die1 == self.die2

    def has_step(self, step: int) -> bool:
        return step in self._remaining

    def roll(self) -> Tuple[int, int]:
        die1, die2 = self._source()
        if not (_is_face(die1) and _is_face(die2)):
            raise ValueError(f"Источник кубиков вернул недопустимые значения: {die1}, {die2}")

        self.die1, self.die2 = die1, die2
        if die1 == die2:
            # Дубль - четыре одинаковых шага
            self._remaining = [die1] * c.DOUBLES_STEPS
        else:
            self._remaining = [die1, die2]
        self.rolled = True
        return die1, die2

    def use_step(self, step: int):
        try:
            self._remaining.remove(step)
        except ValueError:
            raise UnknownStepError(
                f"Шага {step} нет среди оставшихся: {self._remaining}"
            ) from None

        # Все шаги использованы - ход исчерпан
        if not self._remaining:
            self.rolled = False

    def clear(self):
        """Сбрасывает оставшиеся шаги (ход пропущен)."""
        self._remaining = []
        self.rolled = False

    def __repr__(self):
        return (f"Dice(die1={self.die1}, die2={self.die2}, "
                f"remaining_steps={self._remaining}, rolled={self.rolled})")
