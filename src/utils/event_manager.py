"""Personal calendar event utilities."""

import logging
import secrets
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from config import DEFAULT_EVENT_COLOR, DEFAULT_EVENT_TIME
from core.exceptions import AccessDeniedError, EventNotFoundError
from models.event import EventModel
from utils.timestamps import utc_now_iso

logger = logging.getLogger(__name__)


class EventManager:
    """Manages the private calendar events of each user."""

    def __init__(self, db: Session):
        self.db = db

    def create_event(
        self,
        user_id: str,
        title: str,
        event_date: date,
        time: Optional[str] = None,
        color: Optional[str] = None,
    ) -> EventModel:
        model = EventModel(
            event_id=secrets.token_hex(8),
            user_id=user_id,
            title=title,
            date=event_date.isoformat(),
            time=time or DEFAULT_EVENT_TIME,
            color=color or DEFAULT_EVENT_COLOR,
            created_at=utc_now_iso(),
        )
        self.db.add(model)
        self.db.commit()
        self.db.refresh(model)
        logger.info("Created event %s for user %s", model.event_id, user_id)
        return model

    def list_events(self, user_id: str) -> List[EventModel]:
        """The user's own events ordered by date, then time."""
        return (
            self.db.query(EventModel)
            .filter(EventModel.user_id == user_id)
            .order_by(EventModel.date.asc(), EventModel.time.asc())
            .all()
        )

    def delete_event(self, user_id: str, event_id: str) -> None:
        """Delete an event owned by the caller.

        Raises:
            EventNotFoundError: If the event does not exist.
            AccessDeniedError: If the event belongs to another user.
        """
        model = self.db.query(EventModel).filter(EventModel.event_id == event_id).first()
        if not model:
            raise EventNotFoundError(event_id)
        if model.user_id != user_id:
            raise AccessDeniedError("You do not have access to this event")
        self.db.delete(model)
        self.db.commit()
        logger.info("Deleted event %s", event_id)
