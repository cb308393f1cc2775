"""Records stored in the database."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime


def format_time(moment: datetime) -> str:
    """Format a timestamp as RFC 3339 with trailing fraction zeros trimmed."""
    text = moment.strftime("%Y-%m-%dT%H:%M:%S")
    if moment.microsecond:
        text += "." + f"{moment.microsecond:06d}".rstrip("0")
    offset = moment.utcoffset()
    if offset is None or not offset:
        return text + "Z"
    seconds = int(offset.total_seconds())
    sign = "+" if seconds >= 0 else "-"
    hours, minutes = divmod(abs(seconds) // 60, 60)
    return f"{text}{sign}{hours:02d}:{minutes:02d}"


@dataclass(frozen=True)
class Chirp:
    """A short message posted by a user."""

    id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    body: str
    user_id: uuid.UUID

    def to_json(self) -> dict:
        """Return the chirp as a JSON-ready mapping."""
        return {
            "id": str(self.id),
            "created_at": format_time(self.created_at),
            "updated_at": format_time(self.updated_at),
            "body": self.body,
            "user_id": str(self.user_id),
        }


@dataclass(frozen=True)
class User:
    """A registered account."""

    id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    email: str
    hashed_password: str

    def to_json(self) -> dict:
        """Return the public fields of the user as a JSON-ready mapping."""
        return {
            "id": str(self.id),
            "created_at": format_time(self.created_at),
            "updated_at": format_time(self.updated_at),
            "email": self.email,
        }