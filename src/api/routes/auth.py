"""Authentication routes.

This module handles HTTP endpoints for registration, login and logout, and
provides the ``get_current_user`` dependency used by every protected route.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.dependencies import AuthSessionManagerDep, UserManagerDep
from core.exceptions import AuthenticationError, UserNotFoundError
from models.auth_session import AuthSessionModel
from models.user import UserModel
from schemas.user import LoginRequest, LoginResponseData, RegisterRequest
from utils.converters import user_to_info

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])

# Missing credentials are reported by resolve_session, not by HTTPBearer
security = HTTPBearer(auto_error=False)


def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    x_session_id: Optional[str] = Header(default=None),
    session_manager: AuthSessionManagerDep = None,
) -> AuthSessionModel:
    """Resolve the caller's session from the Bearer token or X-Session-Id.

    Args:
        credentials: HTTP Bearer credentials, if any.
        x_session_id: Value of the ``X-Session-Id`` header, if any.
        session_manager: Injected AuthSessionManager instance.

    Returns:
        The live AuthSessionModel.

    Raises:
        AuthenticationError: If the token is missing, unknown or expired.
    """
    token = credentials.credentials if credentials else x_session_id
    return session_manager.resolve_session(token)


def get_current_user(
    session: AuthSessionModel = Depends(get_current_session),
    user_manager: UserManagerDep = None,
) -> UserModel:
    """Get current authenticated user.

    Raises:
        AuthenticationError: If the session's user no longer exists.
    """
    try:
        return user_manager.get_user_by_id(session.user_id)
    except UserNotFoundError as e:
        raise AuthenticationError("Unauthorized: Invalid session") from e


@router.post("/register", status_code=status.HTTP_201_CREATED, summary="Register")
def register(
    req: RegisterRequest,
    user_manager: UserManagerDep = None,
) -> dict:
    """Register a new account.

    Raises:
        UserAlreadyExistsError: If the email is already registered.
    """
    user = user_manager.create_user(req.email, req.password, req.display_name)
    return {
        "success": True,
        "message": "User registered successfully",
        "data": {"id": user.user_id, "email": user.email, "createdAt": user.created_at},
    }


@router.post("/login", summary="Log in")
def login(
    req: LoginRequest,
    user_manager: UserManagerDep = None,
    session_manager: AuthSessionManagerDep = None,
) -> dict:
    """Verify credentials and open a new session.

    Raises:
        AuthenticationError: If the email or password is wrong.
    """
    session_manager.purge_expired_sessions()

    user = user_manager.authenticate(req.email, req.password)
    if user is None:
        logger.info("Failed login for %s", req.email)
        raise AuthenticationError("Invalid email or password")

    session = session_manager.create_session(user.user_id)
    return {
        "success": True,
        "message": "Login successful",
        "data": LoginResponseData(
            session_id=session.session_id,
            expires_at=session.expires_at,
            user=user_to_info(user),
        ),
    }


@router.post("/logout", summary="Log out")
def logout(
    session: AuthSessionModel = Depends(get_current_session),
    session_manager: AuthSessionManagerDep = None,
) -> dict:
    session_manager.delete_session(session.session_id)
    return {"success": True, "message": "Logged out successfully"}


@router.get("/verify", summary="Verify session")
def verify(
    session: AuthSessionModel = Depends(get_current_session),
    current_user: UserModel = Depends(get_current_user),
) -> dict:
    return {
        "success": True,
        "data": {"user": user_to_info(current_user), "expiresAt": session.expires_at},
    }


@router.get("/health", summary="Auth service health")
def health() -> dict:
    return {"success": True, "message": "Auth service is running"}
