"""Storage of users and chirps in an SQLite database."""

from __future__ import annotations

import sqlite3
import uuid
from datetime import datetime, timezone

from chirpy.models import Chirp, User

_SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    email TEXT NOT NULL UNIQUE,
    hashed_password TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS chirps (
    id TEXT PRIMARY KEY,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    body TEXT NOT NULL,
    user_id TEXT NOT NULL
);
"""

_CHIRP_COLUMNS = "id, created_at, updated_at, body, user_id"
_USER_COLUMNS = "id, created_at, updated_at, email, hashed_password"


class NotFoundError(LookupError):
    """Raised when a query that expects one row finds none."""


def connect(url: str) -> sqlite3.Connection:
    """Open a database from a URL such as ``sqlite:///path`` or a plain path."""
    if not url or url in ("sqlite://", "sqlite:///:memory:"):
        target = ":memory:"
    elif url.startswith("sqlite:///"):
        target = url[len("sqlite:///"):]
    elif "://" in url:
        raise ValueError(f"unsupported database URL: {url}")
    else:
        target = url
    return sqlite3.connect(target, check_same_thread=False)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _chirp_from_row(row) -> Chirp:
    return Chirp(
        id=uuid.UUID(row[0]),
        created_at=datetime.fromisoformat(row[1]),
        updated_at=datetime.fromisoformat(row[2]),
        body=row[3],
        user_id=uuid.UUID(row[4]),
    )


def _user_from_row(row) -> User:
    return User(
        id=uuid.UUID(row[0]),
        created_at=datetime.fromisoformat(row[1]),
        updated_at=datetime.fromisoformat(row[2]),
        email=row[3],
        hashed_password=row[4],
    )


class Queries:
    """The queries the service runs against its database."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def create_schema(self) -> None:
        """Create the tables if they do not exist yet."""
        with self.conn:
            self.conn.executescript(_SCHEMA)

    def create_chirp(self, body: str, user_id: uuid.UUID) -> Chirp:
        """Insert a chirp and return it."""
        now = _now()
        row = (str(uuid.uuid4()), now, now, body, str(user_id))
        with self.conn:
            self.conn.execute(
                f"INSERT INTO chirps ({_CHIRP_COLUMNS}) VALUES (?, ?, ?, ?, ?)", row
            )
        return _chirp_from_row(row)

    def get_all_chirps(self) -> list[Chirp]:
        """Return every chirp, oldest first."""
        cursor = self.conn.execute(
            f"SELECT {_CHIRP_COLUMNS} FROM chirps ORDER BY created_at, rowid"
        )
        return [_chirp_from_row(row) for row in cursor]

    def get_chirp_by_id(self, chirp_id: uuid.UUID) -> Chirp:
        """Return the chirp with the given id."""
        row = self.conn.execute(
            f"SELECT {_CHIRP_COLUMNS} FROM chirps WHERE id = ?", (str(chirp_id),)
        ).fetchone()
        if row is None:
            raise NotFoundError(f"no chirp with id {chirp_id}")
        return _chirp_from_row(row)

    def create_user(self, email: str, hashed_password: str) -> User:
        """Insert a user and return it."""
        now = _now()
        row = (str(uuid.uuid4()), now, now, email, hashed_password)
        with self.conn:
            self.conn.execute(
                f"INSERT INTO users ({_USER_COLUMNS}) VALUES (?, ?, ?, ?, ?)", row
            )
        return _user_from_row(row)

    def delete_all_users(self) -> None:
        """Remove every user."""
        with self.conn:
            self.conn.execute("DELETE FROM users")

    def get_user_by_email(self, email: str) -> User:
        """Return the user with the given e-mail address."""
        row = self.conn.execute(
            f"SELECT {_USER_COLUMNS} FROM users WHERE email = ?", (email,)
        ).fetchone()
        if row is None:
            raise NotFoundError(f"no user with email {email}")
        return _user_from_row(row)