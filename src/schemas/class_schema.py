"""Class registry schema definitions."""

from typing import Optional

from pydantic import field_validator

from schemas.common import CamelModel


class CreateClassRequest(CamelModel):
    name: str
    description: str

    @field_validator("name", "description")
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("Name and description are required.")
        return normalized


class JoinClassRequest(CamelModel):
    class_code: str

    @field_validator("class_code")
    @classmethod
    def validate_class_code(cls, value: str) -> str:
        normalized = value.strip().upper()
        if not normalized:
            raise ValueError("Class code is required.")
        return normalized


class ClassInfo(CamelModel):
    id: str
    name: str
    description: str
    class_code: str
    creator: str
    created_at: str
    role: Optional[str] = None


class ClassMemberInfo(CamelModel):
    id: str
    email: str
    display_name: Optional[str] = None
    role: str
    joined_at: str
