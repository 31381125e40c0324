import pytest
from fastapi.testclient import TestClient

from models.auth_session import AuthSessionModel


def test_register_normalizes_email_and_returns_created_user(client: TestClient) -> None:
    response = client.post(
        '/api/auth/register',
        json={'email': '  Ada@Example.EDU ', 'password': 'secret123', 'displayName': ' Ada '},
    )

    assert response.status_code == 201
    body = response.json()
    assert body['success'] is True
    assert body['data']['email'] == 'ada@example.edu'
    assert body['data']['id']
    assert body['data']['createdAt']


def test_register_rejects_duplicate_email(client: TestClient) -> None:
    client.post('/api/auth/register', json={'email': 'ada@example.edu', 'password': 'secret123'})

    response = client.post('/api/auth/register', json={'email': 'ADA@example.edu', 'password': 'other-pass'})

    assert response.status_code == 409
    assert response.json() == {'success': False, 'message': 'User with this email already exists'}


def test_register_rejects_invalid_email_and_short_password(client: TestClient) -> None:
    bad_email = client.post('/api/auth/register', json={'email': 'not-an-email', 'password': 'secret123'})
    short_password = client.post('/api/auth/register', json={'email': 'ada@example.edu', 'password': '123'})

    assert bad_email.status_code == 400
    assert bad_email.json()['success'] is False
    assert short_password.status_code == 400
    assert 'Password must be at least 6 characters' in short_password.json()['message']


def test_login_returns_session_and_user_without_password_hash(client: TestClient) -> None:
    client.post('/api/auth/register', json={'email': 'ada@example.edu', 'password': 'secret123'})

    response = client.post('/api/auth/login', json={'email': 'ADA@example.edu', 'password': 'secret123'})

    assert response.status_code == 200
    data = response.json()['data']
    assert len(data['sessionId']) == 64
    assert data['expiresAt']
    assert data['user']['email'] == 'ada@example.edu'
    assert 'passwordHash' not in data['user']


def test_login_rejects_wrong_password_and_unknown_email(client: TestClient) -> None:
    client.post('/api/auth/register', json={'email': 'ada@example.edu', 'password': 'secret123'})

    wrong_password = client.post('/api/auth/login', json={'email': 'ada@example.edu', 'password': 'nope-nope'})
    unknown = client.post('/api/auth/login', json={'email': 'ghost@example.edu', 'password': 'secret123'})

    assert wrong_password.status_code == 401
    assert wrong_password.json()['message'] == 'Invalid email or password'
    assert unknown.status_code == 401


def test_verify_accepts_bearer_and_session_header(client: TestClient, make_user) -> None:
    user = make_user('ada@example.edu')

    bearer = client.get('/api/auth/verify', headers=user['headers'])
    header = client.get('/api/auth/verify', headers={'X-Session-Id': user['token']})

    assert bearer.status_code == 200
    assert bearer.json()['data']['user']['id'] == user['id']
    assert header.status_code == 200
    assert header.json()['data']['user']['email'] == 'ada@example.edu'


def test_missing_and_unknown_tokens_are_unauthorized(client: TestClient) -> None:
    missing = client.get('/api/auth/verify')
    unknown = client.get('/api/auth/verify', headers={'Authorization': 'Bearer deadbeef'})

    assert missing.status_code == 401
    assert missing.json()['message'] == 'Unauthorized: No session ID provided'
    assert unknown.status_code == 401
    assert unknown.json()['message'] == 'Unauthorized: Invalid session'


def test_logout_invalidates_session(client: TestClient, make_user) -> None:
    user = make_user('ada@example.edu')

    logout = client.post('/api/auth/logout', headers=user['headers'])
    after = client.get('/api/auth/verify', headers=user['headers'])

    assert logout.status_code == 200
    assert after.status_code == 401
    assert after.json()['message'] == 'Unauthorized: Invalid session'


def test_expired_session_is_rejected_and_removed(client: TestClient, make_user, db) -> None:
    user = make_user('ada@example.edu')
    session = db.query(AuthSessionModel).filter_by(session_id=user['token']).first()
    session.expires_at = '2000-01-01T00:00:00.000000+00:00'
    db.commit()

    expired = client.get('/api/auth/verify', headers=user['headers'])
    again = client.get('/api/auth/verify', headers=user['headers'])

    assert expired.status_code == 401
    assert expired.json()['message'] == 'Unauthorized: Session expired'
    assert again.json()['message'] == 'Unauthorized: Invalid session'


def test_login_purges_expired_sessions(client: TestClient, make_user, db) -> None:
    user = make_user('ada@example.edu')
    session = db.query(AuthSessionModel).filter_by(session_id=user['token']).first()
    session.expires_at = '2000-01-01T00:00:00.000000+00:00'
    db.commit()

    client.post('/api/auth/login', json={'email': 'ada@example.edu', 'password': 'secret123'})

    db.expire_all()
    assert db.query(AuthSessionModel).filter_by(session_id=user['token']).first() is None


def test_health_endpoints_need_no_session(client: TestClient) -> None:
    assert client.get('/api/auth/health').json()['success'] is True
    assert client.get('/api/health').status_code == 200


@pytest.mark.parametrize('email', ['a@b..c', 'a@.b.c', 'a@b.c.', '"<x>"@y.z', 'no-at-sign.edu'])
def test_register_rejects_malformed_email(client: TestClient, email: str) -> None:
    response = client.post('/api/auth/register', json={'email': email, 'password': 'secret123'})

    assert response.status_code == 400
    assert response.json()['success'] is False
