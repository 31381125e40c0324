import re

import pytest
from sqlalchemy.exc import IntegrityError

import config
from core.exceptions import AccessDeniedError, ClassNotFoundError, InstructorOnlyError
from utils.class_manager import ClassManager
from utils.user_manager import UserManager


@pytest.fixture
def people(db) -> dict:
    users = UserManager(db)
    return {
        'instructor': users.create_user('i@example.edu', 'secret123').user_id,
        'student': users.create_user('s@example.edu', 'secret123').user_id,
        'outsider': users.create_user('o@example.edu', 'secret123').user_id,
    }


def test_generate_class_code_uses_uppercase_alphanumerics() -> None:
    for _ in range(50):
        assert re.fullmatch(r'[A-Z0-9]{6}', ClassManager.generate_class_code())


def test_role_predicates_for_each_kind_of_user(db, people: dict) -> None:
    manager = ClassManager(db)
    class_model = manager.create_class('CS 1', 'Intro', people['instructor'])
    manager.join_by_code(class_model.class_code.lower(), people['student'])
    class_id = class_model.class_id

    assert manager.is_instructor(people['instructor'], class_id)
    assert not manager.is_member(people['instructor'], class_id)
    assert manager.has_class_access(people['instructor'], class_id)

    assert manager.is_member(people['student'], class_id)
    assert not manager.is_instructor(people['student'], class_id)
    assert manager.has_class_access(people['student'], class_id)

    assert manager.get_user_role(people['outsider'], class_id) is None
    assert not manager.has_class_access(people['outsider'], class_id)


def test_predicates_on_missing_class_are_false(db, people: dict) -> None:
    manager = ClassManager(db)

    assert manager.get_user_role(people['instructor'], 'missing') is None
    assert not manager.is_instructor(people['instructor'], 'missing')
    assert not manager.has_class_access(people['instructor'], 'missing')


def test_require_helpers_raise_distinct_errors(db, people: dict) -> None:
    manager = ClassManager(db)
    class_model = manager.create_class('CS 1', 'Intro', people['instructor'])
    manager.join_by_code(class_model.class_code, people['student'])

    with pytest.raises(ClassNotFoundError):
        manager.require_class_access(people['student'], 'missing')
    with pytest.raises(AccessDeniedError) as denied:
        manager.require_class_access(people['outsider'], class_model.class_id)
    with pytest.raises(InstructorOnlyError) as instructor_only:
        manager.require_instructor(people['student'], class_model.class_id, 'grade assignments')

    assert denied.value.message == 'You do not have access to this class'
    assert instructor_only.value.message == 'Only instructors can grade assignments'
    assert manager.require_instructor(people['instructor'], class_model.class_id, 'grade assignments') is None


def test_class_codes_are_unique_across_classes(db, people: dict) -> None:
    manager = ClassManager(db)

    codes = {manager.create_class(f'Class {n}', 'x', people['instructor']).class_code for n in range(20)}

    assert len(codes) == 20


def test_create_class_reraises_integrity_error_unrelated_to_code(db, people: dict, monkeypatch) -> None:
    manager = ClassManager(db)
    calls = []

    def failing_commit() -> None:
        calls.append(1)
        raise IntegrityError('INSERT INTO class_memberships', {}, Exception('FOREIGN KEY constraint failed'))

    monkeypatch.setattr(db, 'commit', failing_commit)

    with pytest.raises(IntegrityError):
        manager.create_class('CS 1', 'Intro', people['instructor'])

    assert len(calls) == 1


def test_class_code_length_ignores_environment(monkeypatch) -> None:
    monkeypatch.setenv('CLASS_CODE_LENGTH', '2')

    assert config.CLASS_CODE_LENGTH == 6
    assert len(ClassManager.generate_class_code()) == 6
