import re

from fastapi.testclient import TestClient


def _create_class(client: TestClient, user: dict, name: str = 'CS 1') -> dict:
    response = client.post(
        '/api/class/create',
        json={'name': name, 'description': 'Intro to programming'},
        headers=user['headers'],
    )
    assert response.status_code == 201, response.text
    return response.json()['data']


def test_create_class_issues_six_character_code(client: TestClient, instructor: dict) -> None:
    data = _create_class(client, instructor)

    assert re.fullmatch(r'[A-Z0-9]{6}', data['classCode'])
    assert data['name'] == 'CS 1'
    assert data['creator'] == instructor['id']
    assert data['role'] == 'Instructor'


def test_create_class_requires_name_and_description(client: TestClient, instructor: dict) -> None:
    response = client.post(
        '/api/class/create',
        json={'name': '   ', 'description': 'x'},
        headers=instructor['headers'],
    )

    assert response.status_code == 400
    assert response.json()['success'] is False


def test_join_is_case_insensitive(client: TestClient, instructor: dict, student: dict) -> None:
    data = _create_class(client, instructor)

    response = client.post(
        '/api/class/join',
        json={'classCode': f"  {data['classCode'].lower()} "},
        headers=student['headers'],
    )

    assert response.status_code == 200
    assert response.json()['data']['id'] == data['id']
    assert response.json()['data']['role'] == 'Student'


def test_joining_twice_conflicts(client: TestClient, classroom: dict, student: dict) -> None:
    response = client.post(
        '/api/class/join',
        json={'classCode': classroom['classCode']},
        headers=student['headers'],
    )

    assert response.status_code == 409
    assert response.json()['message'] == 'You are already a member of this class'


def test_creator_cannot_join_own_class(client: TestClient, classroom: dict, instructor: dict) -> None:
    response = client.post(
        '/api/class/join',
        json={'classCode': classroom['classCode']},
        headers=instructor['headers'],
    )

    assert response.status_code == 400
    assert response.json()['message'] == 'You are the creator of this class'


def test_join_unknown_code_is_not_found(client: TestClient, student: dict) -> None:
    response = client.post('/api/class/join', json={'classCode': 'ZZZZZZ'}, headers=student['headers'])

    assert response.status_code == 404
    assert response.json()['message'] == 'Class not found'


def test_my_classes_lists_role_newest_first(client: TestClient, classroom: dict, instructor: dict, student: dict) -> None:
    second = _create_class(client, instructor, name='CS 2')

    instructor_classes = client.get('/api/class/my-classes', headers=instructor['headers']).json()['data']
    student_classes = client.get('/api/class/my-classes', headers=student['headers']).json()['data']

    assert [c['id'] for c in instructor_classes] == [second['id'], classroom['id']]
    assert {c['role'] for c in instructor_classes} == {'Instructor'}
    assert [(c['id'], c['role']) for c in student_classes] == [(classroom['id'], 'Student')]


def test_get_class_requires_access(client: TestClient, classroom: dict, student: dict, outsider: dict) -> None:
    allowed = client.get(f"/api/class/{classroom['id']}", headers=student['headers'])
    denied = client.get(f"/api/class/{classroom['id']}", headers=outsider['headers'])
    missing = client.get('/api/class/does-not-exist', headers=student['headers'])

    assert allowed.status_code == 200
    assert allowed.json()['data']['role'] == 'Student'
    assert denied.status_code == 403
    assert denied.json()['message'] == 'You do not have access to this class'
    assert missing.status_code == 404


def test_members_list_instructor_first_and_never_as_student(
    client: TestClient, classroom: dict, instructor: dict, student: dict
) -> None:
    response = client.get(f"/api/class/{classroom['id']}/members", headers=instructor['headers'])

    assert response.status_code == 200
    members = response.json()['data']
    assert [(m['id'], m['role']) for m in members] == [
        (instructor['id'], 'Instructor'),
        (student['id'], 'Student'),
    ]
    assert members[1]['displayName'] == 'Sam Student'


def test_members_hidden_from_outsiders(client: TestClient, classroom: dict, outsider: dict) -> None:
    response = client.get(f"/api/class/{classroom['id']}/members", headers=outsider['headers'])

    assert response.status_code == 403
