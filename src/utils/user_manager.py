"""User management utilities.

This module provides user management functionality including user storage,
password hashing, credential checks and profile updates.
"""

import logging
import uuid
from typing import Dict, Iterable, Optional

import bcrypt
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from config import BCRYPT_ROUNDS
from core.exceptions import UserAlreadyExistsError, UserNotFoundError
from models.user import UserModel
from utils.timestamps import utc_now_iso

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_PASSWORD_BYTES = 72


class UserManager:
    """Manages user data persistence and operations using SQLAlchemy."""

    def __init__(self, db: Session):
        """Initialize UserManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt with a per-password salt.

        Args:
            password: Plain text password.

        Returns:
            Hashed password (bcrypt hash string).
        """
        password_bytes = password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]
        salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
        return bcrypt.hashpw(password_bytes, salt).decode("utf-8")

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against a bcrypt hash.

        Args:
            plain_password: Plain text password to verify.
            hashed_password: Bcrypt hash string to verify against.

        Returns:
            True if password matches, False otherwise.
        """
        password_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]
        try:
            return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))
        except ValueError as e:
            logger.error("Password verification error: %s", e)
            return False

    def create_user(
        self,
        email: str,
        password: str,
        display_name: Optional[str] = None,
    ) -> UserModel:
        """Create a new user.

        Args:
            email: Normalized (lower-cased) email address.
            password: Plain text password.
            display_name: Optional display name.

        Returns:
            Created UserModel.

        Raises:
            UserAlreadyExistsError: If the email is already registered.
        """
        if self.get_user_by_email(email) is not None:
            raise UserAlreadyExistsError(email)

        now = utc_now_iso()
        model = UserModel(
            user_id=str(uuid.uuid4()),
            email=email,
            password_hash=self.hash_password(password),
            display_name=display_name,
            created_at=now,
            updated_at=now,
        )

        # Two concurrent registrations can both pass the check above;
        # the unique index on email decides the winner
        try:
            self.db.add(model)
            self.db.commit()
            self.db.refresh(model)
        except IntegrityError as e:
            self.db.rollback()
            raise UserAlreadyExistsError(email) from e

        logger.info("Created user: %s", email)
        return model

    def authenticate(self, email: str, password: str) -> Optional[UserModel]:
        """Return the user if the credentials match, None otherwise."""
        user = self.get_user_by_email(email)
        if user is None:
            return None
        if not self.verify_password(password, user.password_hash):
            return None
        return user

    def get_user_by_email(self, email: str) -> Optional[UserModel]:
        return (
            self.db.query(UserModel)
            .filter(UserModel.email == email.strip().lower())
            .first()
        )

    def get_user_by_id(self, user_id: str) -> UserModel:
        """Get a user by user ID.

        Raises:
            UserNotFoundError: If no such user exists.
        """
        model = self.db.query(UserModel).filter(UserModel.user_id == user_id).first()
        if model is None:
            raise UserNotFoundError(user_id)
        return model

    def get_users_by_ids(self, user_ids: Iterable[str]) -> Dict[str, UserModel]:
        ids = list(set(user_ids))
        if not ids:
            return {}
        models = self.db.query(UserModel).filter(UserModel.user_id.in_(ids)).all()
        return {m.user_id: m for m in models}

    def update_display_name(self, user_id: str, display_name: str) -> UserModel:
        model = self.get_user_by_id(user_id)
        model.display_name = display_name
        model.updated_at = utc_now_iso()
        self.db.commit()
        self.db.refresh(model)
        logger.info("Updated display name for user %s", user_id)
        return model
