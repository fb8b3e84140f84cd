# src/linkboard/models/vote.py
"""Models capturing voting interactions on posts and comments."""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from linkboard.db.session import Base
from linkboard.db.time import utcnow


class TargetKind(str, enum.Enum):
    """Kind of entity a vote points at."""

    POST = "post"
    COMMENT = "comment"


class VoteRecord(Base):
    """Current stance of one voter on one target.

    Absence of a row means no vote; the row's direction is the only source
    of truth for the voter's stance.
    """

    __tablename__ = "vote_record"
    __table_args__ = (
        CheckConstraint("direction IN (1, -1)", name="ck_vote_record_direction"),
        CheckConstraint("target_kind IN ('post', 'comment')", name="ck_vote_record_target_kind"),
        UniqueConstraint("voter_id", "target_kind", "target_id", name="uq_vote_record_voter_target"),
        Index("ix_vote_record_target", "target_kind", "target_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    voter_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
    )
    # Polymorphic reference, so no foreign key on target_id.
    target_id: Mapped[int] = mapped_column(Integer, nullable=False)
    target_kind: Mapped[str] = mapped_column(String(16), nullable=False)

    # 1 = upvote, -1 = downvote.
    direction: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
