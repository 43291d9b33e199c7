# tests/test_game_service.py

from tavla.game_core import BEAR_OFF, Move, Player
from tavla.services.game_service import NOT_IN_ROOM_MESSAGE


def events(notifications, name):
    return [n for n in notifications if n['event'] == name]


def open_room(service):
    created = service.create_room('w')
    room_id = created[0]['payload']['roomId']
    joined = service.join_room('b', room_id)
    return room_id, joined


def test_create_room_seats_white(service_factory):
    service = service_factory()
    result = service.create_room('w')

    assert len(result) == 1
    assert result[0]['event'] == 'room_created'
    assert result[0]['room'] == 'w'
    assert result[0]['payload']['player'] == 'WHITE'
    assert len(result[0]['payload']['roomId']) == 6
    assert service.room_count() == 1


def test_create_twice_rejected(service_factory):
    service = service_factory()
    service.create_room('w')
    result = service.create_room('w')
    assert events(result, 'error')
    assert service.room_count() == 1


def test_join_starts_game(service_factory):
    service = service_factory()
    room_id, joined = open_room(service)

    assert joined[0] == {
        'event': 'room_joined',
        'payload': {'roomId': room_id, 'player': 'BLACK'},
        'room': 'b'
    }
    states = events(joined, 'state')
    assert {n['room'] for n in states} == {'w', 'b'}
    assert states[0]['payload']['currentPlayer'] == 'WHITE'
    assert service.get_room_by_id(room_id).has_started()


def test_join_unknown_and_full(service_factory):
    service = service_factory()
    assert events(service.join_room('x', 'nope'), 'error')

    room_id, _ = open_room(service)
    result = service.join_room('third', room_id)
    assert result[0]['payload']['message'] == 'Комната заполнена.'
    assert service.get_room_by_sid('third') is None


def test_actions_outside_room(service_factory):
    service = service_factory()
    assert service.roll('ghost')[0]['payload']['message'] == NOT_IN_ROOM_MESSAGE
    assert service.move('ghost', Move(23, 17, 6))[0]['payload']['message'] == NOT_IN_ROOM_MESSAGE


def test_roll_before_game_starts(service_factory):
    service = service_factory()
    service.create_room('w')
    result = service.roll('w')
    assert events(result, 'error')


def test_only_current_player_rolls(service_factory):
    service = service_factory(rolls=[(6, 5)])
    open_room(service)

    assert events(service.roll('b'), 'error')

    result = service.roll('w')
    states = events(result, 'state')
    assert len(states) == 2
    assert states[0]['payload']['dice']['remainingSteps'] == [6, 5]


def test_second_roll_rejected_while_steps_remain(service_factory):
    service = service_factory(rolls=[(6, 5), (1, 2)])
    open_room(service)
    service.roll('w')

    result = service.roll('w')
    assert result[0]['payload']['message'] == 'Кубики уже брошены.'


def test_full_turn_passes_to_black(service_factory):
    service = service_factory(rolls=[(6, 5)])
    open_room(service)
    service.roll('w')

    service.move('w', Move(23, 17, 6))
    result = service.move('w', Move(12, 7, 5))

    payload = events(result, 'state')[0]['payload']
    assert payload['currentPlayer'] == 'BLACK'
    assert payload['dice']['rolled'] is False


def test_illegal_move_goes_to_sender_only(service_factory):
    service = service_factory(rolls=[(5, 3)])
    room_id, _ = open_room(service)
    service.roll('w')

    result = service.move('w', Move(23, 18, 5))

    assert len(result) == 1
    assert result[0]['event'] == 'error'
    assert result[0]['room'] == 'w'
    state = service.get_room_by_id(room_id).state
    assert state.dice.remaining_steps == (5, 3)


def test_move_out_of_turn(service_factory):
    service = service_factory(rolls=[(6, 5)])
    open_room(service)
    service.roll('w')
    assert events(service.move('b', Move(0, 6, 6)), 'error')


def test_blocked_player_is_skipped(service_factory, position):
    service = service_factory()
    room_id, _ = open_room(service)
    room = service.get_room_by_id(room_id)
    room.state = position(
        white={0: 14},
        black={i: 2 for i in range(18, 24)},
        bar={Player.WHITE: 1},
        rolls=[(3, 4)]
    )

    result = service.roll('w')

    skipped = events(result, 'turn_skipped')
    assert {n['room'] for n in skipped} == {'w', 'b'}
    assert skipped[0]['payload'] == {'player': 'WHITE', 'steps': [3, 4]}
    assert room.state.current_player is Player.BLACK
    assert events(result, 'state')[0]['payload']['currentPlayer'] == 'BLACK'


def test_win_records_stats(service_factory, position, stats):
    service = service_factory()
    room_id, _ = open_room(service)
    room = service.get_room_by_id(room_id)
    room.state = position(
        white={0: 1},
        black={23: 1},
        borne_off={Player.WHITE: 14, Player.BLACK: 14},
        rolls=[(1, 2)]
    )

    service.roll('w')
    result = service.move('w', Move(0, BEAR_OFF, 1))

    payload = events(result, 'state')[0]['payload']
    assert payload['gameOver'] is True
    assert payload['winner'] == 'WHITE'
    assert stats[0]['winner'] == 'WHITE'
    assert stats[0]['winner_sid'] == 'w'
    assert stats[0]['loser_sid'] == 'b'

    # После победы бросать нельзя
    assert service.roll('b')[0]['payload']['message'] == 'Игра окончена.'


def test_disconnect_closes_room(service_factory):
    service = service_factory()
    room_id, _ = open_room(service)

    result = service.handle_disconnect('w')

    assert result == [{'event': 'room_closed', 'payload': {'roomId': room_id}, 'room': 'b'}]
    assert service.room_count() == 0
    assert service.get_room_by_sid('b') is None


def test_disconnect_of_waiting_creator(service_factory):
    service = service_factory()
    service.create_room('w')
    assert service.handle_disconnect('w') == []
    assert service.room_count() == 0
    assert service.handle_disconnect('unknown') == []
