"""Chat message database model."""

from sqlalchemy import Column, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship
from .base import Base


class MessageModel(Base):
    """A message in a chat. Append-only; ``id`` increases with creation order."""

    __tablename__ = "messages"
    __table_args__ = (
        Index("idx_messages_chat_created", "chat_id", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    chat_id = Column(String, ForeignKey("chats.chat_id", ondelete="CASCADE"), index=True, nullable=False)
    sender_id = Column(String, ForeignKey("users.user_id"), nullable=False)
    content = Column(String, nullable=False)
    created_at = Column(String, nullable=False)

    chat = relationship("ChatModel", back_populates="messages")
    sender = relationship("UserModel")
