# tests/test_schemas.py

import pytest
from marshmallow import ValidationError

from tavla.api.schemas import JoinRoomSchema, MoveSchema, StateSchema
from tavla.game_core import BAR, BEAR_OFF, Dice, GameState, Move, Player, snapshot


def test_move_schema_builds_move():
    move = MoveSchema().load({"from": -1, "to": 23, "step": 2})
    assert move == Move(BAR, 23, 2)


def test_move_schema_ignores_unknown_fields():
    move = MoveSchema().load({"from": 5, "to": BEAR_OFF, "step": 6, "extra": "x"})
    assert move.is_bear_off


@pytest.mark.parametrize("payload", [
    {"from": 5, "to": 0, "step": 7},
    {"from": 5, "to": 0, "step": "5"},
    {"from": 5, "step": 5},
    {"from": -2, "to": 0, "step": 1},
    {"from": 3, "to": 25, "step": 1},
])
def test_move_schema_rejects(payload):
    with pytest.raises(ValidationError):
        MoveSchema().load(payload)


def test_join_room_strips_whitespace():
    assert JoinRoomSchema().load({"roomId": "  ab12cd "}) == {"room_id": "ab12cd"}


def test_join_room_requires_id():
    with pytest.raises(ValidationError) as exc:
        JoinRoomSchema().load({})
    assert "roomId" in exc.value.messages


def test_fresh_state_payload():
    payload = StateSchema().dump(snapshot(GameState()))

    assert payload["gameOver"] is False
    assert payload["currentPlayer"] == "WHITE"
    assert payload["winner"] is None
    assert payload["dice"] == {"rolled": False, "die1": 0, "die2": 0, "remainingSteps": []}

    board = payload["board"]
    assert board["whiteBar"] == 0 and board["blackBornOff"] == 0
    assert [p["index"] for p in board["points"]] == list(range(24))
    assert board["points"][0] == {"index": 0, "owner": "BLACK", "count": 2}
    assert board["points"][1] == {"index": 1, "owner": None, "count": 0}


def test_state_payload_after_roll():
    state = GameState(dice=Dice(steps=[4, 4, 4, 4]), current_player=Player.BLACK)
    payload = StateSchema().dump(snapshot(state))
    assert payload["currentPlayer"] == "BLACK"
    assert payload["dice"]["remainingSteps"] == [4, 4, 4, 4]
    assert payload["dice"]["rolled"] is True
