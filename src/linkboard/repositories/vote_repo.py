"""Data access helpers for the vote ledger."""
from __future__ import annotations

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from linkboard.models.vote import TargetKind, VoteRecord

__all__ = ["VoteRepository"]


class VoteRepository:
    """One row per (voter, target) holding the voter's current direction."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, voter_id: int, kind: TargetKind, target_id: int) -> VoteRecord | None:
        """Return the voter's record on a target, or None when they have not voted."""
        result = self.session.execute(
            select(VoteRecord).where(
                VoteRecord.voter_id == voter_id,
                VoteRecord.target_kind == kind.value,
                VoteRecord.target_id == target_id,
            )
        )
        return result.scalars().first()

    def create(self, voter_id: int, kind: TargetKind, target_id: int, direction: int) -> VoteRecord:
        record = VoteRecord(
            voter_id=voter_id,
            target_kind=kind.value,
            target_id=target_id,
            direction=direction,
        )
        self.session.add(record)
        self.session.flush()
        return record

    def set_direction(self, record: VoteRecord, direction: int) -> VoteRecord:
        record.direction = direction
        self.session.flush()
        return record

    def delete(self, record: VoteRecord) -> None:
        self.session.delete(record)
        self.session.flush()

    def count_for_target(self, kind: TargetKind, target_id: int) -> int:
        """Return how many voters currently hold a stance on a target."""
        result = self.session.execute(
            select(func.count()).select_from(VoteRecord).where(
                VoteRecord.target_kind == kind.value,
                VoteRecord.target_id == target_id,
            )
        )
        return int(result.scalar_one())

    def sum_for_target(self, kind: TargetKind, target_id: int) -> int:
        """Return the sum of directions on a target."""
        result = self.session.execute(
            select(func.coalesce(func.sum(VoteRecord.direction), 0)).where(
                VoteRecord.target_kind == kind.value,
                VoteRecord.target_id == target_id,
            )
        )
        return int(result.scalar_one())

    def delete_for_target(self, kind: TargetKind, target_id: int) -> int:
        """Remove every vote on a target; return how many rows went."""
        result = self.session.execute(
            delete(VoteRecord)
            .where(
                VoteRecord.target_kind == kind.value,
                VoteRecord.target_id == target_id,
            )
            .execution_options(synchronize_session=False)
        )
        return int(result.rowcount or 0)
