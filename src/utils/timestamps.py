"""UTC timestamp helpers shared by the managers."""

from datetime import datetime

import pytz


def utc_now() -> datetime:
    return datetime.now(pytz.utc)


def to_iso(value: datetime) -> str:
    """Format a datetime as a UTC ISO-8601 string.

    Naive values are taken to be UTC. The fixed microsecond precision keeps
    stored strings in chronological order when compared lexicographically.
    """
    if value.tzinfo is None:
        value = pytz.utc.localize(value)
    return value.astimezone(pytz.utc).isoformat(timespec="microseconds")


def utc_now_iso() -> str:
    return to_iso(utc_now())


def parse_iso(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = pytz.utc.localize(parsed)
    return parsed
