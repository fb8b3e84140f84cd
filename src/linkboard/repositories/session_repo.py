"""Data access helpers for refresh sessions."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from linkboard.models.refresh_session import RefreshSession

__all__ = ["SessionRepository"]


class SessionRepository:
    """Persisted store of issued refresh tokens."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_token(self, token: str) -> RefreshSession | None:
        """Return the session row for a token, if any."""
        result = self.session.execute(
            select(RefreshSession)
            .where(RefreshSession.token == token)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    def create(self, *, subject_id: int, token: str, expires_at: datetime) -> RefreshSession:
        """Insert a new, unconsumed session and return it."""
        refresh_session = RefreshSession(
            subject_id=subject_id,
            token=token,
            expires_at=expires_at,
            consumed=False,
        )
        self.session.add(refresh_session)
        self.session.flush()
        return refresh_session

    def consume(
        self,
        token: str,
        *,
        now: datetime,
        require_unexpired: bool = True,
    ) -> RefreshSession | None:
        """Mark a session consumed if it is still usable.

        The precondition and the write are one UPDATE statement, so of several
        callers racing on the same token exactly one sees a matched row.

        Args:
            token: Refresh token being exchanged or revoked.
            now: Timestamp recorded as ``consumed_at`` and compared to expiry.
            require_unexpired: When true, sessions past ``expires_at`` do not match.

        Returns:
            The consumed session, or None when nothing matched (unknown token,
            already consumed, or expired).
        """
        conditions = [RefreshSession.token == token, RefreshSession.consumed.is_(False)]
        if require_unexpired:
            conditions.append(RefreshSession.expires_at > now)

        result = self.session.execute(
            update(RefreshSession)
            .where(*conditions)
            .values(consumed=True, consumed_at=now)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return None
        return self.get_by_token(token)

    def purge_expired(self, before: datetime) -> int:
        """Delete sessions that expired before ``before``; return the row count."""
        result = self.session.execute(
            delete(RefreshSession)
            .where(RefreshSession.expires_at < before)
            .execution_options(synchronize_session=False)
        )
        return int(result.rowcount or 0)
