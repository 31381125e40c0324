"""Conversion helpers from ORM models to response schemas."""

from typing import Optional

from models.assignment import AssignmentModel
from models.chat import ChatModel
from models.class_model import ClassModel
from models.event import EventModel
from models.grade import GradeModel
from models.message import MessageModel
from models.user import UserModel
from schemas.assignment import (
    AssignmentInfo,
    AssignmentRef,
    GradeInfo,
    StudentRef,
)
from schemas.chat import ChatInfo, MessageInfo, ParticipantInfo
from schemas.class_schema import ClassInfo
from schemas.event import EventInfo
from schemas.user import UserInfo


def user_to_info(model: UserModel) -> UserInfo:
    return UserInfo(
        id=model.user_id,
        email=model.email,
        display_name=model.display_name,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def user_to_participant(model: UserModel) -> ParticipantInfo:
    return ParticipantInfo(
        id=model.user_id,
        email=model.email,
        display_name=model.display_name,
    )


def user_to_student_ref(model: UserModel) -> StudentRef:
    return StudentRef(
        id=model.user_id,
        email=model.email,
        display_name=model.display_name or "",
    )


def class_to_info(model: ClassModel, role: Optional[str] = None) -> ClassInfo:
    return ClassInfo(
        id=model.class_id,
        name=model.name,
        description=model.description,
        class_code=model.class_code,
        creator=model.owner_id,
        created_at=model.created_at,
        role=role,
    )


def assignment_to_info(model: AssignmentModel) -> AssignmentInfo:
    return AssignmentInfo(
        id=model.assignment_id,
        class_id=model.class_id,
        title=model.title,
        description=model.description,
        due_date=model.due_date,
        points_possible=model.points_possible,
        created_at=model.created_at,
    )


def assignment_to_ref(model: AssignmentModel) -> AssignmentRef:
    return AssignmentRef(
        id=model.assignment_id,
        title=model.title,
        points_possible=model.points_possible,
        due_date=model.due_date,
    )


def grade_to_info(model: GradeModel) -> GradeInfo:
    return GradeInfo(
        id=model.id,
        assignment_id=model.assignment_id,
        student_id=model.student_id,
        score=model.score,
        feedback=model.feedback or "",
        graded_by=model.graded_by,
        graded_at=model.graded_at,
    )


def chat_to_info(model: ChatModel) -> ChatInfo:
    return ChatInfo(
        id=model.chat_id,
        class_id=model.class_id,
        class_name=model.class_.name if model.class_ else None,
        name=model.name or "",
        is_group_chat=model.is_group_chat,
        participants=[user_to_participant(p.user) for p in model.participants],
        created_at=model.created_at,
        updated_at=model.updated_at,
        last_message_at=model.last_message_at,
    )


def message_to_info(model: MessageModel) -> MessageInfo:
    return MessageInfo(
        id=model.id,
        chat_id=model.chat_id,
        sender=user_to_participant(model.sender),
        content=model.content,
        created_at=model.created_at,
    )


def event_to_info(model: EventModel) -> EventInfo:
    return EventInfo(
        id=model.event_id,
        title=model.title,
        date=model.date,
        time=model.time,
        color=model.color,
        created_at=model.created_at,
    )
