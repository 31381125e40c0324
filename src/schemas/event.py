"""Calendar event schema definitions."""

import re
from datetime import date as date_type
from typing import Optional

from pydantic import field_validator

from schemas.common import CamelModel

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")


class CreateEventRequest(CamelModel):
    title: str
    date: date_type
    time: Optional[str] = None
    color: Optional[str] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("Event title is required.")
        return normalized

    @field_validator("time")
    @classmethod
    def validate_time(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        normalized = value.strip()
        if not TIME_PATTERN.match(normalized):
            raise ValueError("Time must use the HH:MM 24-hour format.")
        return normalized

    @field_validator("color")
    @classmethod
    def validate_color(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        normalized = value.strip()
        if not COLOR_PATTERN.match(normalized):
            raise ValueError("Color must be a hex value like #3b82f6.")
        return normalized.lower()


class EventInfo(CamelModel):
    id: str
    title: str
    date: str
    time: str
    color: str
    created_at: str
