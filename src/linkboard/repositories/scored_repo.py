"""Atomic point updates for posts and comments."""
from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from linkboard.models.comment import Comment
from linkboard.models.post import Post
from linkboard.models.vote import TargetKind

__all__ = ["ScoredEntityRepository"]

_MODELS: dict[TargetKind, type[Post] | type[Comment]] = {
    TargetKind.POST: Post,
    TargetKind.COMMENT: Comment,
}


class ScoredEntityRepository:
    """Applies point deltas to scored entities inside the database."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def increment_points(self, kind: TargetKind, target_id: int, delta: int) -> int | None:
        """Add ``delta`` to a target's points and return the new total.

        The addition is rendered as ``points = points + :delta`` so concurrent
        callers never overwrite each other. Returns None when no target with
        that id exists.
        """
        model = _MODELS[kind]
        result = self.session.execute(
            update(model)
            .where(model.id == target_id)
            .values(points=model.points + delta)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return None

        # The write lock from the UPDATE is still held, so this reads our own total.
        refreshed = self.session.execute(
            select(model).where(model.id == target_id).execution_options(populate_existing=True)
        )
        return int(refreshed.scalar_one().points)
