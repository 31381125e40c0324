"""Custom exception classes for the Classroom Portal.

This module defines application-specific exceptions following Google Python
Style Guide. Each exception carries the HTTP status it is reported with, so
the application edge can translate any of them into the response envelope.
"""

from typing import Any, Dict, Optional


class ClassroomError(Exception):
    """Base exception for all Classroom Portal errors."""

    status_code: int = 500

    def __init__(self, message: str, data: Optional[Dict[str, Any]] = None):
        """Initialize the exception.

        Args:
            message: Human readable message returned to the caller.
            data: Optional payload returned alongside the message.
        """
        self.message = message
        self.data = data
        super().__init__(message)


class AuthenticationError(ClassroomError):
    """Raised when the session token is missing, unknown or expired."""

    status_code = 401


class AccessDeniedError(ClassroomError):
    """Raised when the caller holds no role in the class."""

    status_code = 403

    def __init__(self, message: str = "You do not have access to this class"):
        super().__init__(message)


class InstructorOnlyError(AccessDeniedError):
    """Raised when a Student attempts an Instructor-only operation."""

    def __init__(self, action: str):
        """Initialize the exception.

        Args:
            action: Verb phrase for the refused operation, e.g.
                "create assignments".
        """
        self.action = action
        super().__init__(f"Only instructors can {action}")


class NotParticipantError(AccessDeniedError):
    """Raised when the caller is not a participant of a chat."""

    def __init__(self):
        super().__init__("You are not a participant in this chat")


class NotFoundError(ClassroomError):
    """Raised when a referenced resource does not exist."""

    status_code = 404


class UserNotFoundError(NotFoundError):
    """Raised when a requested user cannot be found."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__("User not found")


class ClassNotFoundError(NotFoundError):
    """Raised when a class (by id or join code) cannot be found."""

    def __init__(self, class_ref: str):
        self.class_ref = class_ref
        super().__init__("Class not found")


class AssignmentNotFoundError(NotFoundError):
    """Raised when a requested assignment cannot be found."""

    def __init__(self, assignment_id: str):
        self.assignment_id = assignment_id
        super().__init__("Assignment not found")


class ChatNotFoundError(NotFoundError):
    """Raised when a requested chat cannot be found."""

    def __init__(self, chat_id: str):
        self.chat_id = chat_id
        super().__init__("Chat not found")


class EventNotFoundError(NotFoundError):
    """Raised when a requested calendar event cannot be found."""

    def __init__(self, event_id: str):
        self.event_id = event_id
        super().__init__("Event not found")


class ValidationError(ClassroomError):
    """Raised when data validation fails."""

    status_code = 400


class ConflictError(ClassroomError):
    """Raised when a write would duplicate an existing resource."""

    status_code = 409


class UserAlreadyExistsError(ConflictError):
    """Raised when registering an email that is already taken."""

    def __init__(self, email: str):
        self.email = email
        super().__init__("User with this email already exists")


class AlreadyMemberError(ConflictError):
    """Raised when joining a class the caller already belongs to."""

    def __init__(self):
        super().__init__("You are already a member of this class")


class DuplicateChatError(ConflictError):
    """Raised when adding members would recreate another chat's participant set."""

    def __init__(self, existing_chat_id: str):
        self.existing_chat_id = existing_chat_id
        super().__init__(
            "A chat with these participants already exists",
            data={"existingChatId": existing_chat_id},
        )
