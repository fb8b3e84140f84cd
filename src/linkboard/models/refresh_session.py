# src/linkboard/models/refresh_session.py
"""Persisted record of every issued refresh credential."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from linkboard.db.session import Base
from linkboard.db.time import utcnow


class RefreshSession(Base):
    """One issued refresh token and its consumption state.

    ``consumed`` flips from false to true exactly once, through a single
    conditional UPDATE. Rows are kept after consumption so a replayed token
    is still recognised; pruning is left to the session sweep script.
    """

    __tablename__ = "refresh_session"
    __table_args__ = (
        Index("ix_refresh_session_expires_at", "expires_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    subject_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    token: Mapped[str] = mapped_column(String(512), unique=True, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    consumed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    consumed_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
