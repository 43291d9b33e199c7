# tests/test_routes.py


def test_health(make_app):
    app, _ = make_app()
    response = app.test_client().get('/health')
    assert response.status_code == 200
    assert response.get_json() == {'status': 'ok', 'rooms': 0}


def test_room_state_lifecycle(make_app):
    app, _ = make_app()
    client = app.test_client()
    service = app.game_service

    assert client.get('/rooms/missing/state').status_code == 404

    with app.app_context():
        room_id = service.create_room('w')[0]['payload']['roomId']
    assert client.get(f'/rooms/{room_id}/state').status_code == 409

    with app.app_context():
        service.join_room('b', room_id)
    response = client.get(f'/rooms/{room_id}/state')
    assert response.status_code == 200
    body = response.get_json()
    assert body['currentPlayer'] == 'WHITE'
    assert len(body['board']['points']) == 24
    assert client.get('/health').get_json()['rooms'] == 1


def test_state_rate_limited(make_app):
    app, _ = make_app(RATELIMIT_ENABLED=True, STATE_RATE_LIMIT='2 per minute')
    client = app.test_client()

    codes = [client.get('/rooms/abc/state').status_code for _ in range(3)]
    assert codes == [404, 404, 429]
