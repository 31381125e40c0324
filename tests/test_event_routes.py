from fastapi.testclient import TestClient


def test_create_event_applies_defaults(client: TestClient, make_user) -> None:
    user = make_user('ada@example.edu')

    response = client.post('/api/event', json={'title': ' Exam ', 'date': '2026-05-01'}, headers=user['headers'])

    assert response.status_code == 201
    data = response.json()['data']
    assert data['title'] == 'Exam'
    assert data['date'] == '2026-05-01'
    assert data['time'] == '00:00'
    assert data['color'] == '#3b82f6'


def test_create_event_validates_fields(client: TestClient, make_user) -> None:
    user = make_user('ada@example.edu')

    bad_time = client.post('/api/event', json={'title': 'x', 'date': '2026-05-01', 'time': '25:00'}, headers=user['headers'])
    bad_color = client.post('/api/event', json={'title': 'x', 'date': '2026-05-01', 'color': 'blue'}, headers=user['headers'])
    bad_date = client.post('/api/event', json={'title': 'x', 'date': 'tomorrow'}, headers=user['headers'])
    blank_title = client.post('/api/event', json={'title': '  ', 'date': '2026-05-01'}, headers=user['headers'])

    assert bad_time.status_code == 400
    assert bad_color.status_code == 400
    assert bad_date.status_code == 400
    assert blank_title.status_code == 400


def test_events_are_private_and_sorted(client: TestClient, make_user) -> None:
    ada = make_user('ada@example.edu')
    bob = make_user('bob@example.edu')
    client.post('/api/event', json={'title': 'Late', 'date': '2026-05-02', 'time': '09:00'}, headers=ada['headers'])
    client.post('/api/event', json={'title': 'Afternoon', 'date': '2026-05-01', 'time': '15:30'}, headers=ada['headers'])
    client.post('/api/event', json={'title': 'Morning', 'date': '2026-05-01', 'time': '08:00'}, headers=ada['headers'])
    client.post('/api/event', json={'title': 'Bob only', 'date': '2026-04-01'}, headers=bob['headers'])

    events = client.get('/api/event', headers=ada['headers']).json()['data']

    assert [e['title'] for e in events] == ['Morning', 'Afternoon', 'Late']


def test_delete_event_checks_ownership(client: TestClient, make_user) -> None:
    ada = make_user('ada@example.edu')
    bob = make_user('bob@example.edu')
    event_id = client.post('/api/event', json={'title': 'Exam', 'date': '2026-05-01'}, headers=ada['headers']).json()['data']['id']

    by_bob = client.delete(f'/api/event/{event_id}', headers=bob['headers'])
    by_ada = client.delete(f'/api/event/{event_id}', headers=ada['headers'])
    again = client.delete(f'/api/event/{event_id}', headers=ada['headers'])

    assert by_bob.status_code == 403
    assert by_ada.status_code == 200
    assert again.status_code == 404
    assert client.get('/api/event', headers=ada['headers']).json()['data'] == []
