"""User and authentication schema definitions."""

from typing import Optional

from pydantic import EmailStr, field_validator

from config import MIN_PASSWORD_LENGTH
from schemas.common import CamelModel

MAX_DISPLAY_NAME_LENGTH = 100


def normalize_email(value: str) -> str:
    return value.strip().lower()


class RegisterRequest(CamelModel):
    email: EmailStr
    password: str
    display_name: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return normalize_email(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
            )
        return value

    @field_validator("display_name")
    @classmethod
    def validate_display_name(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        normalized = value.strip()
        return normalized[:MAX_DISPLAY_NAME_LENGTH] or None


class LoginRequest(CamelModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return normalize_email(value)


class UpdateDisplayNameRequest(CamelModel):
    display_name: str

    @field_validator("display_name")
    @classmethod
    def validate_display_name(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("Display name cannot be empty.")
        if len(normalized) > MAX_DISPLAY_NAME_LENGTH:
            raise ValueError(
                f"Display name must be {MAX_DISPLAY_NAME_LENGTH} characters or fewer."
            )
        return normalized


class UserInfo(CamelModel):
    """Public view of a user; never carries the password hash."""

    id: str
    email: str
    display_name: Optional[str] = None
    created_at: str
    updated_at: Optional[str] = None


class LoginResponseData(CamelModel):
    session_id: str
    expires_at: str
    user: UserInfo
