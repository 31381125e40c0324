import pytest

from models.chat import ChatModel
from utils.chat_manager import ChatManager
from utils.class_manager import ClassManager
from utils.user_manager import UserManager


@pytest.fixture
def setup(db) -> dict:
    users = UserManager(db)
    instructor_id = users.create_user('i@example.edu', 'secret123').user_id
    student_id = users.create_user('s@example.edu', 'secret123').user_id
    classes = ClassManager(db)
    class_model = classes.create_class('CS 1', 'Intro', instructor_id)
    classes.join_by_code(class_model.class_code, student_id)
    return {'instructor': instructor_id, 'student': student_id, 'class_id': class_model.class_id}


def test_losing_a_create_race_returns_the_existing_chat(db, setup: dict, monkeypatch) -> None:
    manager = ChatManager(db)
    first, first_is_new = manager.create_chat(setup['instructor'], setup['class_id'], [setup['student']])

    lookup = manager.find_chat_by_participants
    calls = []

    def miss_first_lookup(class_id, user_ids):
        calls.append(class_id)
        if len(calls) == 1:
            return None
        return lookup(class_id, user_ids)

    monkeypatch.setattr(manager, 'find_chat_by_participants', miss_first_lookup)
    second, second_is_new = manager.create_chat(setup['student'], setup['class_id'], [setup['instructor']])

    assert first_is_new is True
    assert second_is_new is False
    assert second.chat_id == first.chat_id
    assert db.query(ChatModel).count() == 1


def test_participant_key_is_stored_sorted(db, setup: dict) -> None:
    chat, _ = ChatManager(db).create_chat(setup['student'], setup['class_id'], [setup['instructor']])

    assert chat.participant_key == ','.join(sorted([setup['instructor'], setup['student']]))
