"""Dependency injection module for FastAPI.

Every manager is built per request around the request-scoped DB session.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from core.database import get_db
from utils import assignment_manager
from utils import auth_session_manager
from utils import chat_manager
from utils import class_manager
from utils import event_manager
from utils import user_manager


def get_user_manager(db: Session = Depends(get_db)) -> user_manager.UserManager:
    """Get UserManager instance with request-scoped DB session.

    Args:
        db: Database session.

    Returns:
        UserManager instance.
    """
    return user_manager.UserManager(db)


def get_auth_session_manager(
    db: Session = Depends(get_db),
) -> auth_session_manager.AuthSessionManager:
    """Get AuthSessionManager instance with request-scoped DB session."""
    return auth_session_manager.AuthSessionManager(db)


def get_class_manager(db: Session = Depends(get_db)) -> class_manager.ClassManager:
    """Get ClassManager instance with request-scoped DB session."""
    return class_manager.ClassManager(db)


def get_assignment_manager(
    db: Session = Depends(get_db),
) -> assignment_manager.AssignmentManager:
    return assignment_manager.AssignmentManager(db)


def get_chat_manager(db: Session = Depends(get_db)) -> chat_manager.ChatManager:
    return chat_manager.ChatManager(db)


def get_event_manager(db: Session = Depends(get_db)) -> event_manager.EventManager:
    return event_manager.EventManager(db)


UserManagerDep = Annotated[user_manager.UserManager, Depends(get_user_manager)]
AuthSessionManagerDep = Annotated[
    auth_session_manager.AuthSessionManager, Depends(get_auth_session_manager)
]
ClassManagerDep = Annotated[class_manager.ClassManager, Depends(get_class_manager)]
AssignmentManagerDep = Annotated[
    assignment_manager.AssignmentManager, Depends(get_assignment_manager)
]
ChatManagerDep = Annotated[chat_manager.ChatManager, Depends(get_chat_manager)]
EventManagerDep = Annotated[event_manager.EventManager, Depends(get_event_manager)]
