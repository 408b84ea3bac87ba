def _names(events):
    return [e['name'] for e in events]


def test_socket_connect_receives_state(sio_client):
    # Ensure we are connected to /ws
    if not sio_client.is_connected('/ws'):
        sio_client.connect(namespace='/ws')
    assert sio_client.is_connected('/ws')

    received = sio_client.get_received('/ws')
    assert 'connected' in _names(received)
    update = next(e for e in received if e['name'] == 'game-update')
    state = update['args'][0]
    assert state['maskedPhrase'] == '___'
    assert 'targetPhrase' not in state


def test_ping(sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('ping', {'n': 1}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert any(e['name'] == 'pong' and e['args'][0] == {'n': 1} for e in received)


def test_http_actions_are_broadcast(sio_client, client):
    sio_client.get_received('/ws')  # flush

    client.post('/api/game/action', json={'action': 'join', 'playerId': 'p1', 'playerName': 'Alice'})
    client.post('/api/game/action', json={'action': 'start'})
    client.post('/api/game/action', json={'action': 'buzz', 'playerId': 'p1'})
    # a repeat buzz is a no-op and must not announce again
    client.post('/api/game/action', json={'action': 'buzz', 'playerId': 'p1'})

    received = sio_client.get_received('/ws')
    buzzes = [e['args'][0] for e in received if e['name'] == 'buzz-event']
    assert buzzes == [{'playerId': 'p1', 'playerName': 'Alice'}]

    updates = [e['args'][0] for e in received if e['name'] == 'game-update']
    assert len(updates) == 3
    assert updates[-1]['buzzedPlayerId'] == 'p1'
    assert all('targetPhrase' not in u for u in updates)


def test_socket_action_round_trip(sio_client):
    sio_client.get_received('/ws')

    sio_client.emit('action', {'action': 'join', 'playerId': 'p9', 'playerName': 'Nine'}, namespace='/ws')
    received = sio_client.get_received('/ws')
    result = next(e['args'][0] for e in received if e['name'] == 'action_result')
    assert result['status'] == 200
    assert result['ok'] is True
    assert 'game-update' in _names(received)

    sio_client.emit('action', {'action': 'buzz', 'playerId': 'p9'}, namespace='/ws')
    received = sio_client.get_received('/ws')
    result = next(e['args'][0] for e in received if e['name'] == 'action_result')
    assert result == {'status': 400, 'error': 'Game not active'}
