# tests/test_board.py

import pytest

from tavla.game_core import Board, Player, InvariantViolationError
from tavla.game_core.point import Point


def test_standard_layout_has_fifteen_checkers_each():
    board = Board()
    assert board.total_checkers(Player.WHITE) == 15
    assert board.total_checkers(Player.BLACK) == 15


def test_standard_layout_points():
    expected = {i: (None, 0) for i in range(24)}
    expected.update({23: (Player.WHITE, 2), 12: (Player.WHITE, 5), 7: (Player.WHITE, 3), 5: (Player.WHITE, 5)})
    expected.update({0: (Player.BLACK, 2), 11: (Player.BLACK, 5), 16: (Player.BLACK, 3), 18: (Player.BLACK, 5)})

    board = Board()
    assert {i: (p.owner, p.count) for i, p in enumerate(board.points)} == expected
    assert board.bar_count(Player.WHITE) == board.bar_count(Player.BLACK) == 0
    assert board.borne_off_count(Player.WHITE) == board.borne_off_count(Player.BLACK) == 0


def test_empty_board():
    board = Board.empty()
    assert board.occupied_points(Player.WHITE) == []
    assert board.total_checkers(Player.BLACK) == 0


def test_point_rejects_second_owner():
    point = Point(4)
    point.add_checker(Player.WHITE)
    with pytest.raises(InvariantViolationError):
        point.add_checker(Player.BLACK)
    assert point.owner is Player.WHITE
    assert point.count == 1


def test_point_clears_owner_when_emptied():
    point = Point(4)
    point.add_checker(Player.BLACK)
    point.remove_checker(Player.BLACK)
    assert point.is_empty()
    assert point.owner is None


def test_point_remove_from_empty_fails():
    with pytest.raises(InvariantViolationError):
        Point(0).remove_checker(Player.WHITE)


def test_remove_from_empty_bar_fails():
    board = Board.empty()
    with pytest.raises(InvariantViolationError):
        board.remove_from_bar(Player.WHITE)


def test_from_layout_sets_counters():
    board = Board.from_layout(
        {Player.WHITE: {0: 1}},
        bar={Player.BLACK: 2},
        borne_off={Player.WHITE: 14}
    )
    assert board.bar_count(Player.BLACK) == 2
    assert board.borne_off_count(Player.WHITE) == 14
    assert board.total_checkers(Player.WHITE) == 15
