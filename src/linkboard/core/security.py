"""Password hashing utilities built on bcrypt."""
from __future__ import annotations

import re

import bcrypt

from linkboard.core.errors import ValidationError

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_BYTES = 72
_PASSWORD_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"[A-Z]"), "Password must contain at least one uppercase letter"),
    (re.compile(r"[a-z]"), "Password must contain at least one lowercase letter"),
    (re.compile(r"[0-9]"), "Password must contain at least one number"),
    (
        re.compile(r"[!@#$%^&*()_+\-=\[\]{};':\"\\|,.<>/?]"),
        "Password must contain at least one special character",
    ),
)


def validate_password_strength(password: str) -> None:
    """Raise ValidationError unless the password meets the strength policy."""
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"
        )
    # bcrypt only looks at the first 72 bytes.
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValidationError(f"Password must not exceed {PASSWORD_MAX_BYTES} bytes")
    for pattern, message in _PASSWORD_RULES:
        if not pattern.search(password):
            raise ValidationError(message)


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password."""
    return bcrypt.hashpw(
        password.encode("utf-8"),
        bcrypt.gensalt(rounds=rounds),
    ).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"),
            hashed_password.encode("utf-8"),
        )
    except ValueError:
        # Stored hash is not a bcrypt hash.
        return False
