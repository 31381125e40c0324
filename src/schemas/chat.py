"""Chat and message schema definitions."""

from typing import List, Optional

from pydantic import field_validator

from schemas.common import CamelModel


class CreateChatRequest(CamelModel):
    class_id: str
    participant_ids: List[str]
    is_group_chat: bool = False
    name: Optional[str] = None


class AddMembersRequest(CamelModel):
    participant_ids: List[str]

    @field_validator("participant_ids")
    @classmethod
    def validate_participant_ids(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("participantIds must contain at least one user.")
        return value


class SendMessageRequest(CamelModel):
    content: str


class ParticipantInfo(CamelModel):
    id: str
    email: str
    display_name: Optional[str] = None


class ChatInfo(CamelModel):
    id: str
    class_id: str
    class_name: Optional[str] = None
    name: str
    is_group_chat: bool
    participants: List[ParticipantInfo]
    created_at: str
    updated_at: str
    last_message_at: str


class MessageInfo(CamelModel):
    id: int
    chat_id: str
    sender: ParticipantInfo
    content: str
    created_at: str
