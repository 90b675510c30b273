def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    assert 'message' in res.get_json()


def test_health_counts_games(client, registry):
    assert client.get('/health').get_json() == {'status': 'ok', 'games': 0}
    registry.create('sid-a')
    assert client.get('/health').get_json()['games'] == 1


def test_rules_text(client):
    res = client.get('/rules')
    assert res.status_code == 200
    assert 'Sabotage Space' in res.get_json()['rules']


def test_state_of_unknown_game(client):
    res = client.get('/api/games/deadbeef/state')
    assert res.status_code == 404
    assert 'error' in res.get_json()


def test_state_snapshot(client, registry):
    game_id, _ = registry.create('sid-a')
    registry.join(game_id, 'sid-b')
    res = client.get(f'/api/games/{game_id}/state')
    assert res.status_code == 200
    state = res.get_json()
    assert state['gameId'] == game_id
    assert state['gamePhase'] == 'init_select_red'
    assert state['currentPlayer'] == 'red'
    assert state['players'] == {'sid-a': 'red', 'sid-b': 'yellow'}
    assert state['playerSockets'] == {'red': 'sid-a', 'yellow': 'sid-b'}
    assert len(state['board']) == 6
    assert all(len(row) == 7 for row in state['board'])
    assert state['redSabotage'] is None
    assert state['rematchRequested'] == {'red': False, 'yellow': False}
    assert state['pendingReselect'] == {'red': False, 'yellow': False}
