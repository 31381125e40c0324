"""Personal calendar event database model."""

from sqlalchemy import Column, ForeignKey, String
from .base import Base


class EventModel(Base):
    __tablename__ = "events"

    event_id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.user_id", ondelete="CASCADE"), index=True, nullable=False)
    title = Column(String, nullable=False)
    date = Column(String, nullable=False)  # ISO date, YYYY-MM-DD
    time = Column(String, nullable=False)  # HH:MM
    color = Column(String, nullable=False)
    created_at = Column(String, nullable=False)
