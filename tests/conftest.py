import os
from typing import Optional

os.environ['DATABASE_URL'] = 'sqlite://'
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ.setdefault('APP_ENV', 'test')

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app import app  # noqa: E402
from core.database import SessionLocal, engine  # noqa: E402
from models.base import Base  # noqa: E402

DEFAULT_PASSWORD = 'secret123'


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def make_user(client: TestClient):
    def _make_user(email: str, display_name: Optional[str] = None) -> dict:
        payload = {'email': email, 'password': DEFAULT_PASSWORD}
        if display_name is not None:
            payload['displayName'] = display_name
        register = client.post('/api/auth/register', json=payload)
        assert register.status_code == 201, register.text

        login = client.post('/api/auth/login', json={'email': email, 'password': DEFAULT_PASSWORD})
        assert login.status_code == 200, login.text
        data = login.json()['data']
        return {
            'id': data['user']['id'],
            'email': data['user']['email'],
            'token': data['sessionId'],
            'headers': {'Authorization': f"Bearer {data['sessionId']}"},
        }

    return _make_user


@pytest.fixture
def instructor(make_user) -> dict:
    return make_user('instructor@example.edu', 'Ada Instructor')


@pytest.fixture
def student(make_user) -> dict:
    return make_user('student@example.edu', 'Sam Student')


@pytest.fixture
def outsider(make_user) -> dict:
    return make_user('outsider@example.edu', 'Olive Outsider')


@pytest.fixture
def classroom(client: TestClient, instructor: dict, student: dict) -> dict:
    created = client.post(
        '/api/class/create',
        json={'name': 'CS 1', 'description': 'Intro to programming'},
        headers=instructor['headers'],
    )
    assert created.status_code == 201, created.text
    class_data = created.json()['data']

    joined = client.post(
        '/api/class/join',
        json={'classCode': class_data['classCode']},
        headers=student['headers'],
    )
    assert joined.status_code == 200, joined.text
    return class_data
