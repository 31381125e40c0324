import pytest
from pydantic import ValidationError

from schemas.class_schema import JoinClassRequest
from schemas.user import RegisterRequest, normalize_email
from utils.chat_manager import participant_key
from utils.timestamps import parse_iso, to_iso


def test_normalize_email_trims_and_lowercases() -> None:
    assert normalize_email('  Ada@Example.EDU ') == 'ada@example.edu'


def test_register_request_accepts_snake_and_camel_case() -> None:
    camel = RegisterRequest(email='a@b.co', password='secret123', displayName='Ada')
    snake = RegisterRequest(email='a@b.co', password='secret123', display_name='Ada')

    assert camel.display_name == snake.display_name == 'Ada'


def test_register_request_rejects_short_password() -> None:
    with pytest.raises(ValidationError):
        RegisterRequest(email='a@b.co', password='12345')


def test_join_request_normalizes_code() -> None:
    assert JoinClassRequest(classCode=' abc123 ').class_code == 'ABC123'


def test_participant_key_ignores_order_and_duplicates() -> None:
    assert participant_key(['u2', 'u1', 'u2']) == participant_key(['u1', 'u2']) == 'u1,u2'


def test_iso_timestamps_sort_chronologically() -> None:
    earlier = parse_iso('2026-01-01T10:00:00+00:00')
    later = parse_iso('2026-01-01T10:00:00.000001+00:00')

    assert to_iso(earlier) < to_iso(later)
    assert to_iso(earlier) == '2026-01-01T10:00:00.000000+00:00'
