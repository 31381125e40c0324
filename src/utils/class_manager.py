"""Class management utilities.

Besides class and membership bookkeeping, this module owns the authorization
predicates every class-scoped operation consults. A user's role in a class is
read from the single membership row keyed by (class, user): ``Instructor`` for
the creator, ``Student`` for everyone who joined with the class code.
"""

import logging
import secrets
from typing import Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from config import CLASS_CODE_ALPHABET, CLASS_CODE_LENGTH
from core.exceptions import (
    AccessDeniedError,
    AlreadyMemberError,
    ClassNotFoundError,
    InstructorOnlyError,
    ValidationError,
)
from models.class_model import ClassModel
from models.class_membership import (
    ROLE_INSTRUCTOR,
    ROLE_STUDENT,
    ClassMembershipModel,
)
from models.user import UserModel
from utils.timestamps import utc_now_iso

logger = logging.getLogger(__name__)


class ClassManager:
    """Manages class, membership, and join-code operations."""

    def __init__(self, db: Session):
        self.db = db

    # --- Join codes ---

    @staticmethod
    def generate_class_code() -> str:
        return "".join(
            secrets.choice(CLASS_CODE_ALPHABET) for _ in range(CLASS_CODE_LENGTH)
        )

    def _class_code_exists(self, code: str) -> bool:
        return (
            self.db.query(ClassModel.class_id)
            .filter(ClassModel.class_code == code)
            .first()
            is not None
        )

    def _generate_unique_class_code(self) -> str:
        code = self.generate_class_code()
        while self._class_code_exists(code):
            logger.info("Class code collision on %s, retrying", code)
            code = self.generate_class_code()
        return code

    # --- Classes ---

    def create_class(self, name: str, description: str, owner_id: str) -> ClassModel:
        """Create a new class with a fresh join code and the owner's Instructor row.

        Args:
            name: Class name.
            description: Class description.
            owner_id: Creating user; becomes the class Instructor.

        Returns:
            The persisted ClassModel.
        """
        while True:
            now = utc_now_iso()
            class_model = ClassModel(
                class_id=secrets.token_hex(8),
                name=name,
                description=description,
                owner_id=owner_id,
                class_code=self._generate_unique_class_code(),
                created_at=now,
                updated_at=now,
            )
            self.db.add(class_model)
            self.db.add(
                ClassMembershipModel(
                    class_id=class_model.class_id,
                    user_id=owner_id,
                    role_in_class=ROLE_INSTRUCTOR,
                    joined_at=now,
                )
            )
            try:
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                # Only a code taken between check and insert is retried
                if not self._class_code_exists(class_model.class_code):
                    raise
                logger.warning("Class code %s taken concurrently, retrying", class_model.class_code)
                continue
            self.db.refresh(class_model)
            logger.info(
                "Created class %s (%s) with code %s",
                class_model.class_id,
                name,
                class_model.class_code,
            )
            return class_model

    def get_class(self, class_id: str) -> ClassModel:
        model = (
            self.db.query(ClassModel)
            .filter(ClassModel.class_id == class_id)
            .first()
        )
        if not model:
            raise ClassNotFoundError(class_id)
        return model

    def get_class_by_code(self, code: str) -> ClassModel:
        """Find a class by join code, ignoring case and surrounding spaces."""
        normalized = code.strip().upper()
        model = (
            self.db.query(ClassModel)
            .filter(ClassModel.class_code == normalized)
            .first()
        )
        if not model:
            raise ClassNotFoundError(normalized)
        return model

    def list_classes_for_user(self, user_id: str) -> List[Tuple[ClassModel, str]]:
        """List every class the user teaches or attends, newest first.

        Returns:
            (class, role) pairs.
        """
        rows = (
            self.db.query(ClassModel, ClassMembershipModel.role_in_class)
            .join(
                ClassMembershipModel,
                ClassMembershipModel.class_id == ClassModel.class_id,
            )
            .filter(ClassMembershipModel.user_id == user_id)
            .order_by(ClassModel.created_at.desc())
            .all()
        )
        return [(model, role) for model, role in rows]

    def list_members(self, class_id: str) -> List[dict]:
        """List the Instructor and all Students of a class, Instructor first."""
        query = (
            self.db.query(ClassMembershipModel, UserModel)
            .join(UserModel, UserModel.user_id == ClassMembershipModel.user_id)
            .filter(ClassMembershipModel.class_id == class_id)
            .order_by(ClassMembershipModel.id)
        )
        results = []
        for membership, user in query.all():
            results.append(
                {
                    "id": user.user_id,
                    "email": user.email,
                    "display_name": user.display_name,
                    "role": membership.role_in_class,
                    "joined_at": membership.joined_at,
                }
            )
        results.sort(key=lambda m: m["role"] != ROLE_INSTRUCTOR)
        return results

    def list_students(self, class_id: str) -> List[UserModel]:
        return (
            self.db.query(UserModel)
            .join(
                ClassMembershipModel,
                ClassMembershipModel.user_id == UserModel.user_id,
            )
            .filter(
                ClassMembershipModel.class_id == class_id,
                ClassMembershipModel.role_in_class == ROLE_STUDENT,
            )
            .order_by(ClassMembershipModel.id)
            .all()
        )

    def get_roles(self, class_id: str) -> Dict[str, str]:
        """Map user_id -> role for everyone with access to the class."""
        rows = (
            self.db.query(ClassMembershipModel.user_id, ClassMembershipModel.role_in_class)
            .filter(ClassMembershipModel.class_id == class_id)
            .all()
        )
        return {user_id: role for user_id, role in rows}

    # --- Joining ---

    def join_by_code(self, code: str, user_id: str) -> ClassModel:
        """Join a class as a Student using its join code.

        Args:
            code: Join code, matched case-insensitively.
            user_id: User ID joining the class.

        Returns:
            The joined ClassModel.

        Raises:
            ClassNotFoundError: If no class has this code.
            ValidationError: If the user created the class.
            AlreadyMemberError: If the user already joined.
        """
        class_model = self.get_class_by_code(code)

        role = self.get_user_role(user_id, class_model.class_id)
        if role == ROLE_INSTRUCTOR:
            raise ValidationError("You are the creator of this class")
        if role == ROLE_STUDENT:
            raise AlreadyMemberError()

        membership = ClassMembershipModel(
            class_id=class_model.class_id,
            user_id=user_id,
            role_in_class=ROLE_STUDENT,
            joined_at=utc_now_iso(),
        )
        try:
            self.db.add(membership)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise AlreadyMemberError() from e

        self.db.refresh(class_model)
        logger.info("User %s joined class %s", user_id, class_model.class_id)
        return class_model

    # --- Authorization predicates ---

    def get_user_role(self, user_id: str, class_id: str) -> Optional[str]:
        """Return "Instructor", "Student" or None for a user in a class.

        A missing class yields None rather than an error.
        """
        row = (
            self.db.query(ClassMembershipModel.role_in_class)
            .filter(
                ClassMembershipModel.class_id == class_id,
                ClassMembershipModel.user_id == user_id,
            )
            .first()
        )
        return row[0] if row else None

    def is_instructor(self, user_id: str, class_id: str) -> bool:
        return self.get_user_role(user_id, class_id) == ROLE_INSTRUCTOR

    def is_member(self, user_id: str, class_id: str) -> bool:
        return self.get_user_role(user_id, class_id) == ROLE_STUDENT

    def has_class_access(self, user_id: str, class_id: str) -> bool:
        return self.get_user_role(user_id, class_id) is not None

    def require_class_access(self, user_id: str, class_id: str) -> str:
        """Return the caller's role, or raise if they have none.

        Raises:
            ClassNotFoundError: If the class does not exist.
            AccessDeniedError: If the caller is neither Instructor nor Student.
        """
        role = self.get_user_role(user_id, class_id)
        if role is None:
            self.get_class(class_id)
            raise AccessDeniedError()
        return role

    def require_instructor(self, user_id: str, class_id: str, action: str) -> None:
        """Ensure the caller is the class Instructor.

        Args:
            user_id: Caller.
            class_id: Target class.
            action: Verb phrase used in the error, e.g. "grade assignments".

        Raises:
            ClassNotFoundError: If the class does not exist.
            AccessDeniedError: If the caller has no role in the class.
            InstructorOnlyError: If the caller is a Student.
        """
        role = self.require_class_access(user_id, class_id)
        if role != ROLE_INSTRUCTOR:
            raise InstructorOnlyError(action)
