"""Chat database models."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base


class ChatModel(Base):
    """A class-scoped conversation among a fixed participant set."""

    __tablename__ = "chats"
    # No two chats in a class may share a participant set
    __table_args__ = (
        UniqueConstraint("class_id", "participant_key", name="uq_chats_class_participants"),
    )

    chat_id = Column(String, primary_key=True, index=True)
    class_id = Column(String, ForeignKey("classes.class_id", ondelete="CASCADE"), index=True, nullable=False)
    name = Column(String, nullable=False, default="")
    is_group_chat = Column(Boolean, nullable=False, default=False)
    participant_key = Column(String, nullable=False)  # sorted user ids joined by ','
    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=False)
    last_message_at = Column(String, index=True, nullable=False)

    class_ = relationship("ClassModel")
    participants = relationship(
        "ChatParticipantModel",
        back_populates="chat",
        cascade="all, delete-orphan",
        order_by="ChatParticipantModel.id",
    )
    messages = relationship(
        "MessageModel",
        back_populates="chat",
        cascade="all, delete-orphan",
    )


class ChatParticipantModel(Base):
    __tablename__ = "chat_participants"
    __table_args__ = (
        UniqueConstraint("chat_id", "user_id", name="uq_chat_participants_chat_user"),
    )

    id = Column(Integer, primary_key=True, index=True)
    chat_id = Column(String, ForeignKey("chats.chat_id", ondelete="CASCADE"), index=True, nullable=False)
    user_id = Column(String, ForeignKey("users.user_id"), index=True, nullable=False)
    joined_at = Column(String, nullable=False)

    chat = relationship("ChatModel", back_populates="participants")
    user = relationship("UserModel")
