"""Signed, expiring access and refresh credentials.

Both credential kinds are HS-signed JWTs carrying the subject id in ``sub``.
They are signed with different secrets and tagged with a ``type`` claim, so a
token of one kind never verifies as the other.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Final

from jose import ExpiredSignatureError, JWTError, jwt

from linkboard.core.errors import AuthenticationError, ConfigurationError
from linkboard.core.settings import Settings
from linkboard.db.time import utcnow

ACCESS: Final = "access"
REFRESH: Final = "refresh"

_SECRET_ENV_NAMES: Final[dict[str, str]] = {
    ACCESS: "ACCESS_TOKEN_SECRET",
    REFRESH: "REFRESH_TOKEN_SECRET",
}


@dataclass(frozen=True)
class IssuedToken:
    """An encoded token and the moment it stops being valid."""

    token: str
    expires_at: datetime


class TokenCodec:
    """Encode and verify access/refresh tokens for a subject id.

    The codec is stateless; it only reads the configuration it was built with.
    """

    def __init__(self, config: Settings) -> None:
        self._config = config

    @property
    def access_lifetime(self) -> timedelta:
        return timedelta(minutes=self._config.access_token_expire_minutes)

    @property
    def refresh_lifetime(self) -> timedelta:
        return timedelta(days=self._config.refresh_token_expire_days)

    def ensure_configured(self) -> None:
        """Raise ConfigurationError unless both signing secrets are present."""
        for kind in (ACCESS, REFRESH):
            self._secret(kind)

    def issue_access(self, subject_id: int) -> IssuedToken:
        return self._issue(ACCESS, subject_id, self.access_lifetime)

    def issue_refresh(self, subject_id: int) -> IssuedToken:
        return self._issue(REFRESH, subject_id, self.refresh_lifetime)

    def verify_access(self, token: str) -> int:
        """Return the subject id of a valid access token.

        Raises:
            AuthenticationError: On a bad signature, malformed token, wrong
                token type, or past expiry.
        """
        return self._verify(ACCESS, token)

    def verify_refresh(self, token: str) -> int:
        """Return the subject id of a valid refresh token."""
        return self._verify(REFRESH, token)

    def _secret(self, kind: str) -> str:
        secret = (
            self._config.access_token_secret
            if kind == ACCESS
            else self._config.refresh_token_secret
        )
        if not secret:
            raise ConfigurationError(f"{_SECRET_ENV_NAMES[kind]} is not configured")
        return secret

    def _issue(self, kind: str, subject_id: int, lifetime: timedelta) -> IssuedToken:
        secret = self._secret(kind)
        issued_at = utcnow()
        expires_at = issued_at + lifetime
        claims: dict[str, object] = {
            "sub": str(subject_id),
            "type": kind,
            # Random id keeps two tokens issued in the same second distinct.
            "jti": secrets.token_hex(16),
            "iat": issued_at,
            "exp": expires_at,
        }
        token: str = jwt.encode(claims, secret, algorithm=self._config.jwt_algorithm)
        return IssuedToken(token=token, expires_at=expires_at)

    def _verify(self, kind: str, token: str) -> int:
        secret = self._secret(kind)
        try:
            payload = jwt.decode(token, secret, algorithms=[self._config.jwt_algorithm])
        except ExpiredSignatureError as err:
            raise AuthenticationError(f"{kind.capitalize()} token has expired") from err
        except JWTError as err:
            raise AuthenticationError(f"Invalid {kind} token") from err

        if payload.get("type") != kind:
            raise AuthenticationError(f"Invalid {kind} token")

        subject = payload.get("sub")
        try:
            return int(subject)
        except (TypeError, ValueError) as err:
            raise AuthenticationError(f"Invalid {kind} token") from err
