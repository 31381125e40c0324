"""Login session management.

A session is an opaque random token mapped to a user with an absolute
expiry. Expired sessions are rejected at lookup time and deleted on sight;
``purge_expired_sessions`` sweeps the rest.
"""

import logging
import secrets
from datetime import timedelta

from sqlalchemy.orm import Session

from config import SESSION_TOKEN_BYTES, SESSION_TTL_HOURS
from core.exceptions import AuthenticationError
from models.auth_session import AuthSessionModel
from utils.timestamps import parse_iso, to_iso, utc_now, utc_now_iso

logger = logging.getLogger(__name__)


class AuthSessionManager:
    """Creates, resolves and deletes login sessions."""

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def generate_session_id() -> str:
        return secrets.token_hex(SESSION_TOKEN_BYTES)

    def create_session(
        self, user_id: str, ttl_hours: int = SESSION_TTL_HOURS
    ) -> AuthSessionModel:
        """Create a session for a user that has just logged in.

        Args:
            user_id: Owner of the new session.
            ttl_hours: Validity window in hours.

        Returns:
            The persisted AuthSessionModel.
        """
        now = utc_now()
        model = AuthSessionModel(
            session_id=self.generate_session_id(),
            user_id=user_id,
            expires_at=to_iso(now + timedelta(hours=ttl_hours)),
            created_at=to_iso(now),
        )
        self.db.add(model)
        self.db.commit()
        self.db.refresh(model)
        logger.info("Created session for user %s", user_id)
        return model

    def resolve_session(self, session_id: str) -> AuthSessionModel:
        """Look up a live session by its token.

        Args:
            session_id: Token presented by the client.

        Returns:
            The matching, unexpired AuthSessionModel.

        Raises:
            AuthenticationError: If the token is missing, unknown or expired.
        """
        if not session_id:
            raise AuthenticationError("Unauthorized: No session ID provided")

        model = (
            self.db.query(AuthSessionModel)
            .filter(AuthSessionModel.session_id == session_id)
            .first()
        )
        if model is None:
            raise AuthenticationError("Unauthorized: Invalid session")

        # The sweep may not have run yet, so compare explicitly
        if parse_iso(model.expires_at) <= utc_now():
            self.db.delete(model)
            self.db.commit()
            raise AuthenticationError("Unauthorized: Session expired")
        return model

    def delete_session(self, session_id: str) -> bool:
        """Delete a session, making its token unusable.

        Returns:
            True if a session was deleted.
        """
        deleted = (
            self.db.query(AuthSessionModel)
            .filter(AuthSessionModel.session_id == session_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        if deleted:
            logger.info("Deleted session")
        return bool(deleted)

    def purge_expired_sessions(self) -> int:
        """Delete every session whose expiry has passed."""
        deleted = (
            self.db.query(AuthSessionModel)
            .filter(AuthSessionModel.expires_at <= utc_now_iso())
            .delete(synchronize_session=False)
        )
        self.db.commit()
        if deleted:
            logger.info("Purged %d expired sessions", deleted)
        return deleted
