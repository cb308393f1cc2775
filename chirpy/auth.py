"""Password hashing helpers."""

import bcrypt

# bcrypt's minimum work factor.
MIN_COST = 4
_MAX_PASSWORD_BYTES = 72


class PasswordMismatchError(Exception):
    """Raised when a password does not match a stored hash."""


def hash_password(password: str) -> str:
    """Hash a password with bcrypt at the minimum cost."""
    encoded = password.encode("utf-8")
    if len(encoded) > _MAX_PASSWORD_BYTES:
        raise ValueError("password length exceeds 72 bytes")
    return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=MIN_COST)).decode("ascii")


def check_password_hash(hashed: str, password: str) -> None:
    """Raise PasswordMismatchError unless the password matches the hash."""
    try:
        matches = bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError as exc:
        raise PasswordMismatchError(f"invalid hash: {exc}") from exc
    if not matches:
        raise PasswordMismatchError("hashed password does not match the given password")