"""Chat and message management utilities.

A chat belongs to one class and has a fixed participant set, identified by a
canonical key: the sorted participant ids joined with ``,``. The unique index
on (class_id, participant_key) guarantees at most one chat per participant set
within a class.
"""

import logging
import secrets
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from config import DEFAULT_GROUP_CHAT_NAME
from core.exceptions import (
    ChatNotFoundError,
    DuplicateChatError,
    NotParticipantError,
    ValidationError,
)
from models.chat import ChatModel, ChatParticipantModel
from models.message import MessageModel
from utils.class_manager import ClassManager
from utils.timestamps import utc_now_iso

logger = logging.getLogger(__name__)


def participant_key(user_ids: Iterable[str]) -> str:
    """Canonical key of a participant set, independent of input order."""
    return ",".join(sorted(set(user_ids)))


def _dedupe(user_ids: Iterable[str]) -> List[str]:
    seen = []
    for user_id in user_ids:
        if user_id not in seen:
            seen.append(user_id)
    return seen


class ChatManager:
    """Manages chats, their participants and their messages."""

    def __init__(self, db: Session):
        self.db = db
        self.class_manager = ClassManager(db)

    # --- Lookup ---

    def get_chat(self, chat_id: str) -> ChatModel:
        model = self.db.query(ChatModel).filter(ChatModel.chat_id == chat_id).first()
        if not model:
            raise ChatNotFoundError(chat_id)
        return model

    def find_chat_by_participants(
        self, class_id: str, user_ids: Iterable[str]
    ) -> Optional[ChatModel]:
        return (
            self.db.query(ChatModel)
            .filter(
                ChatModel.class_id == class_id,
                ChatModel.participant_key == participant_key(user_ids),
            )
            .first()
        )

    def is_participant(self, user_id: str, chat_id: str) -> bool:
        return (
            self.db.query(ChatParticipantModel.id)
            .filter(
                ChatParticipantModel.chat_id == chat_id,
                ChatParticipantModel.user_id == user_id,
            )
            .first()
            is not None
        )

    def get_chat_for_participant(self, user_id: str, chat_id: str) -> ChatModel:
        """Load a chat, requiring the caller to be one of its participants.

        Raises:
            ChatNotFoundError: If the chat does not exist.
            NotParticipantError: If the caller is not a participant.
        """
        chat = self.get_chat(chat_id)
        if not self.is_participant(user_id, chat_id):
            raise NotParticipantError()
        return chat

    def list_chats_for_user(
        self, user_id: str, class_id: Optional[str] = None
    ) -> List[ChatModel]:
        """Chats the user participates in, most recent activity first."""
        query = (
            self.db.query(ChatModel)
            .join(ChatParticipantModel, ChatParticipantModel.chat_id == ChatModel.chat_id)
            .filter(ChatParticipantModel.user_id == user_id)
        )
        if class_id:
            query = query.filter(ChatModel.class_id == class_id)
        return query.order_by(ChatModel.last_message_at.desc()).all()

    # --- Creation ---

    def _require_participants_have_access(self, class_id: str, user_ids: List[str]) -> None:
        roles = self.class_manager.get_roles(class_id)
        if any(user_id not in roles for user_id in user_ids):
            raise ValidationError("All participants must be members of the class")

    def create_chat(
        self,
        creator_id: str,
        class_id: str,
        participant_ids: List[str],
        is_group_chat: bool = False,
        name: Optional[str] = None,
    ) -> Tuple[ChatModel, bool]:
        """Create a chat, or return the existing chat with the same participants.

        Args:
            creator_id: Caller; always included in the participant set.
            class_id: Class the chat belongs to.
            participant_ids: Other participants; duplicates are ignored.
            is_group_chat: Requested group flag. More than two participants
                always make a group chat.
            name: Group chat name; defaults to DEFAULT_GROUP_CHAT_NAME.

        Returns:
            (chat, is_new). ``is_new`` is False when a chat with the same
            participant set already existed in the class.

        Raises:
            ClassNotFoundError: If the class does not exist.
            AccessDeniedError: If the caller has no role in the class.
            ValidationError: If a participant has no role in the class or
                fewer than two users remain.
        """
        self.class_manager.get_class(class_id)
        self.class_manager.require_class_access(creator_id, class_id)

        user_ids = _dedupe([creator_id] + list(participant_ids))
        self._require_participants_have_access(class_id, user_ids)
        if len(user_ids) < 2:
            raise ValidationError("A chat needs at least two participants")

        existing = self.find_chat_by_participants(class_id, user_ids)
        if existing:
            logger.info("Reusing chat %s for class %s", existing.chat_id, class_id)
            return existing, False

        is_group = bool(is_group_chat) or len(user_ids) > 2
        now = utc_now_iso()
        chat = ChatModel(
            chat_id=secrets.token_hex(8),
            class_id=class_id,
            name=((name or "").strip() or DEFAULT_GROUP_CHAT_NAME) if is_group else "",
            is_group_chat=is_group,
            participant_key=participant_key(user_ids),
            created_at=now,
            updated_at=now,
            last_message_at=now,
        )
        for user_id in user_ids:
            chat.participants.append(ChatParticipantModel(user_id=user_id, joined_at=now))
        self.db.add(chat)

        try:
            self.db.commit()
        except IntegrityError:
            # A concurrent request created the same participant set first
            self.db.rollback()
            existing = self.find_chat_by_participants(class_id, user_ids)
            if existing is None:
                raise
            return existing, False

        self.db.refresh(chat)
        logger.info(
            "Created %s chat %s in class %s with %d participants",
            "group" if is_group else "direct",
            chat.chat_id,
            class_id,
            len(user_ids),
        )
        return chat, True

    def add_members(self, user_id: str, chat_id: str, new_member_ids: List[str]) -> ChatModel:
        """Add users to an existing chat.

        Raises:
            ChatNotFoundError: If the chat does not exist.
            NotParticipantError: If the caller is not a participant.
            ValidationError: If a new member has no role in the class.
            DuplicateChatError: If the grown set equals another chat's set.
        """
        chat = self.get_chat_for_participant(user_id, chat_id)

        current_ids = [p.user_id for p in chat.participants]
        to_add = [uid for uid in _dedupe(new_member_ids) if uid not in current_ids]
        if not to_add:
            return chat
        self._require_participants_have_access(chat.class_id, to_add)

        all_ids = current_ids + to_add
        other = self.find_chat_by_participants(chat.class_id, all_ids)
        if other is not None and other.chat_id != chat.chat_id:
            raise DuplicateChatError(other.chat_id)

        now = utc_now_iso()
        for uid in to_add:
            chat.participants.append(ChatParticipantModel(user_id=uid, joined_at=now))
        chat.participant_key = participant_key(all_ids)
        if len(all_ids) > 2:
            chat.is_group_chat = True
        if chat.is_group_chat and not chat.name:
            chat.name = DEFAULT_GROUP_CHAT_NAME
        chat.updated_at = now

        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            other = self.find_chat_by_participants(chat.class_id, all_ids)
            if other is None:
                raise
            raise DuplicateChatError(other.chat_id) from e

        self.db.refresh(chat)
        logger.info("Added %d members to chat %s", len(to_add), chat_id)
        return chat

    # --- Messages ---

    def send_message(self, user_id: str, chat_id: str, content: str) -> MessageModel:
        """Append a message and bump the chat's last activity in one commit.

        Raises:
            ValidationError: If the content is empty after trimming.
            ChatNotFoundError: If the chat does not exist.
            NotParticipantError: If the sender is not a participant.
        """
        text = (content or "").strip()
        if not text:
            raise ValidationError("Message content is required")
        chat = self.get_chat_for_participant(user_id, chat_id)

        now = utc_now_iso()
        message = MessageModel(
            chat_id=chat.chat_id,
            sender_id=user_id,
            content=text,
            created_at=now,
        )
        self.db.add(message)
        chat.last_message_at = now
        self.db.commit()
        self.db.refresh(message)
        return message

    def get_messages(
        self, user_id: str, chat_id: str, offset: int = 0, limit: int = 50
    ) -> List[MessageModel]:
        """A page of messages, oldest first."""
        self.get_chat_for_participant(user_id, chat_id)
        return (
            self.db.query(MessageModel)
            .filter(MessageModel.chat_id == chat_id)
            .order_by(MessageModel.created_at.asc(), MessageModel.id.asc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    # --- Deletion ---

    def delete_chat(self, user_id: str, chat_id: str) -> None:
        """Remove a chat with its messages and participants in one commit."""
        chat = self.get_chat_for_participant(user_id, chat_id)
        deleted_messages = (
            self.db.query(MessageModel)
            .filter(MessageModel.chat_id == chat_id)
            .delete(synchronize_session=False)
        )
        self.db.query(ChatParticipantModel).filter(
            ChatParticipantModel.chat_id == chat_id
        ).delete(synchronize_session=False)
        self.db.delete(chat)
        self.db.commit()
        logger.info("Deleted chat %s and %d messages", chat_id, deleted_messages)
