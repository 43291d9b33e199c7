# tavla/api/schemas.py

from marshmallow import Schema, fields, pre_load, post_load, EXCLUDE
from marshmallow.validate import Length, Range

from tavla.game_core import BAR, BEAR_OFF, BOARD_SIZE, Move, Player
from tavla.game_core.constants import DIE_MIN, DIE_MAX

# --- Входящие сообщения клиента ---

class BaseClientSchema(Schema):
    """Лишние поля в сообщениях клиента молча отбрасываются."""
    class Meta:
        unknown = EXCLUDE


class JoinRoomSchema(BaseClientSchema):
    room_id = fields.Str(
        required=True,
        data_key="roomId",
        validate=Length(min=1, max=64, error="roomId не может быть пустым."),
        error_messages={"required": "Необходимо указать roomId."}
    )

    @pre_load
    def strip_whitespace(self, data, **kwargs):
        if isinstance(data, dict) and isinstance(data.get('roomId'), str):
            data = dict(data)
            data['roomId'] = data['roomId'].strip()
        return data


class MoveSchema(BaseClientSchema):
    """
    {"from": int, "to": int, "step": int} -> Move.
    from = -1 (бар), to = 24 (выброс).
    """
    from_index = fields.Int(
        required=True,
        strict=True,
        data_key="from",
        validate=Range(min=BAR, max=BOARD_SIZE - 1),
        error_messages={"required": "Необходимо указать from."}
    )
    to_index = fields.Int(
        required=True,
        strict=True,
        data_key="to",
        validate=Range(min=0, max=BEAR_OFF),
        error_messages={"required": "Необходимо указать to."}
    )
    step = fields.Int(
        required=True,
        strict=True,
        validate=Range(min=DIE_MIN, max=DIE_MAX, error="step должен быть от 1 до 6."),
        error_messages={"required": "Необходимо указать step."}
    )

    @post_load
    def make_move(self, data, **kwargs):
        return Move(**data)


# --- Исходящий снимок состояния ---

class PointSchema(Schema):
    index = fields.Int()
    owner = fields.Enum(Player, by_value=True, allow_none=True)
    count = fields.Int()


class DiceSchema(Schema):
    rolled = fields.Bool()
    die1 = fields.Int()
    die2 = fields.Int()
    remaining_steps = fields.List(fields.Int(), data_key="remainingSteps")


class BoardSchema(Schema):
    white_bar = fields.Int(data_key="whiteBar")
    black_bar = fields.Int(data_key="blackBar")
    white_borne_off = fields.Int(data_key="whiteBornOff")
    black_borne_off = fields.Int(data_key="blackBornOff")
    points = fields.List(fields.Nested(PointSchema))


class StateSchema(Schema):
    """
    Сериализует GameSnapshot в формат сообщения 'state'.
    Вложенные dice/board собираются из плоского снимка.
    """
    game_over = fields.Bool(data_key="gameOver")
    current_player = fields.Enum(Player, by_value=True, data_key="currentPlayer")
    winner = fields.Enum(Player, by_value=True, allow_none=True)
    dice = fields.Method("dump_dice")
    board = fields.Method("dump_board")

    def dump_dice(self, snap):
        return DiceSchema().dump(snap)

    def dump_board(self, snap):
        return BoardSchema().dump(snap)
