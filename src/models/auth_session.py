"""Login session database model."""

from sqlalchemy import Column, String, ForeignKey
from .base import Base


class AuthSessionModel(Base):
    """Opaque bearer token mapped to a user with an absolute expiry."""

    __tablename__ = "auth_sessions"

    session_id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.user_id", ondelete="CASCADE"), index=True, nullable=False)
    expires_at = Column(String, index=True, nullable=False)  # ISO format string, UTC
    created_at = Column(String, nullable=False)
