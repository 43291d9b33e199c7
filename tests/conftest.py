# tests/conftest.py

import pytest

from tavla import create_app
from tavla.game_core import (
    Board, Dice, GameState, Player, fixed_source
)
from tavla.services.game_factory import GameFactory
from tavla.services.game_service import GameService
from tavla.services.room_registry import RoomRegistry


def noop_log(*args, **kwargs):
    pass


def make_state(white=None, black=None, bar=None, borne_off=None,
               steps=None, current=Player.WHITE, rolls=None):
    """Позиция для теста: раскладка по игрокам + уже брошенные шаги или очередь бросков."""
    layout = {Player.WHITE: white or {}, Player.BLACK: black or {}}
    board = Board.from_layout(layout, bar=bar, borne_off=borne_off)
    source = fixed_source(rolls) if rolls is not None else None
    dice = Dice(source=source, steps=steps)
    return GameState(board=board, dice=dice, current_player=current)


@pytest.fixture
def stats():
    return []


@pytest.fixture
def service_factory(stats):
    """GameService без Flask: логи в никуда, статистика в список."""
    def _make(rolls=None, room_id_length=6):
        dice_source_factory = None
        if rolls is not None:
            dice_source_factory = lambda room_id: fixed_source(list(rolls))
        factory = GameFactory(
            config={'ROOM_ID_LENGTH': room_id_length, 'DICE_SEED': None},
            log_event=noop_log,
            log_stats=stats.append,
            dice_source_factory=dice_source_factory
        )
        return GameService(RoomRegistry(), factory, log_event=noop_log)
    return _make


@pytest.fixture
def make_app(tmp_path):
    def _make(rolls=None, **overrides):
        config = {
            'TESTING': True,
            'LOG_FILE': str(tmp_path / 'application.log'),
            'STATS_LOG_FILE': str(tmp_path / 'match_stats.log'),
            'RATELIMIT_ENABLED': False,
        }
        config.update(overrides)
        dice_source_factory = None
        if rolls is not None:
            dice_source_factory = lambda room_id: fixed_source(list(rolls))
        return create_app(test_config=config, dice_source_factory=dice_source_factory)
    return _make


@pytest.fixture
def position():
    return make_state
