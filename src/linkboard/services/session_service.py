"""Registration, login and refresh-token rotation."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from linkboard.core.errors import AuthenticationError, ConflictError, ValidationError
from linkboard.core.security import hash_password, validate_password_strength, verify_password
from linkboard.db.time import utcnow
from linkboard.models.user import User
from linkboard.repositories.session_repo import SessionRepository
from linkboard.services.tokens import TokenCodec

logger = logging.getLogger(__name__)

_USERNAME_RE = re.compile(r"^[A-Za-z0-9_-]{3,20}$")
_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


@dataclass(frozen=True)
class TokenPair:
    """Access token plus the refresh token that replaces the one just used."""

    access_token: str
    refresh_token: str


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a successful registration or login."""

    user: User
    access_token: str
    refresh_token: str


def _normalize_email(email: str) -> str:
    normalized = email.strip().lower()
    if not _EMAIL_RE.match(normalized) or ".." in normalized:
        raise ValidationError("Invalid email format")
    return normalized


class SessionService:
    """Issues credentials and owns the refresh rotation protocol.

    Every refresh session moves ACTIVE -> CONSUMED exactly once. Consumption
    is a single conditional UPDATE in the session repository, so the service
    itself holds no locks: when several requests present the same refresh
    token, the database lets one of them match and the rest fail.
    """

    def __init__(self, db: Session, codec: TokenCodec, *, bcrypt_rounds: int = 12) -> None:
        self.db = db
        self.codec = codec
        self.sessions = SessionRepository(db)
        self._bcrypt_rounds = bcrypt_rounds

    def register(self, username: str, email: str, password: str) -> AuthResult:
        """Create an account and open its first session.

        Raises:
            ValidationError: Malformed username/email or weak password.
            ConflictError: Username or email already taken.
            ConfigurationError: A signing secret is missing.
        """
        username = username.strip()
        if not _USERNAME_RE.match(username):
            raise ValidationError(
                "Username must be 3-20 characters of letters, digits, '_' or '-'"
            )
        email = _normalize_email(email)
        validate_password_strength(password)

        taken = self.db.execute(
            select(User.username, User.email).where(
                (User.username == username) | (User.email == email)
            )
        ).first()
        if taken is not None:
            field = "username" if taken.username == username else "email"
            raise ConflictError(f"{field} already exists")

        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password, rounds=self._bcrypt_rounds),
        )
        self.db.add(user)
        try:
            self.db.flush()
        except IntegrityError as err:
            # Lost a race with a concurrent registration of the same name.
            self.db.rollback()
            raise ConflictError("username or email already exists") from err

        pair = self._open_session(user.id)
        self.db.commit()
        logger.info("Registered user %s", user.id)
        return AuthResult(user=user, access_token=pair.access_token, refresh_token=pair.refresh_token)

    def login(self, email: str, password: str) -> AuthResult:
        """Check credentials and open a new session.

        The same error is raised for an unknown email and a wrong password.
        """
        user = self.db.execute(
            select(User).where(User.email == email.strip().lower())
        ).scalars().first()
        if user is None or not verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid email or password")

        pair = self._open_session(user.id)
        self.db.commit()
        logger.info("User %s logged in", user.id)
        return AuthResult(user=user, access_token=pair.access_token, refresh_token=pair.refresh_token)

    def refresh(self, refresh_token: str) -> TokenPair:
        """Exchange a refresh token for a new access/refresh pair.

        The presented token is consumed whether or not anything after the
        consume succeeds, so it can never be exchanged again.

        Raises:
            AuthenticationError: Bad signature, expired, unknown, or already
                consumed token.
        """
        self.codec.verify_refresh(refresh_token)

        consumed = self.sessions.consume(refresh_token, now=utcnow(), require_unexpired=True)
        if consumed is None:
            self.db.rollback()
            logger.warning("Rejected refresh: session unknown, expired or already consumed")
            raise AuthenticationError("Invalid or expired refresh token")

        pair = self._open_session(consumed.subject_id)
        self.db.commit()
        logger.info("Rotated refresh session %s for user %s", consumed.id, consumed.subject_id)
        return pair

    def logout(self, refresh_token: str) -> None:
        """Consume a refresh token without issuing a replacement.

        Works on sessions at or past expiry; only unknown or already consumed
        tokens are rejected.
        """
        consumed = self.sessions.consume(refresh_token, now=utcnow(), require_unexpired=False)
        if consumed is None:
            self.db.rollback()
            logger.warning("Rejected logout: session unknown or already consumed")
            raise AuthenticationError("Invalid or already used refresh token")

        self.db.commit()
        logger.info("Closed refresh session %s for user %s", consumed.id, consumed.subject_id)

    def authenticate(self, access_token: str) -> User:
        """Resolve a bearer access token to its user."""
        subject_id = self.codec.verify_access(access_token)
        user = self.db.get(User, subject_id)
        if user is None:
            raise AuthenticationError("User not found")
        return user

    def _open_session(self, subject_id: int) -> TokenPair:
        access = self.codec.issue_access(subject_id)
        refresh = self.codec.issue_refresh(subject_id)
        self.sessions.create(
            subject_id=subject_id,
            token=refresh.token,
            expires_at=refresh.expires_at,
        )
        return TokenPair(access_token=access.token, refresh_token=refresh.token)
