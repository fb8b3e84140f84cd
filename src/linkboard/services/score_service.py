"""Vote casting and the per-voter vote state machine.

A voter's stance on a target is NONE, UP or DOWN, encoded by the absence of a
vote record or its direction (+1/-1). Requests move between states as:

    old \\ requested   UP (+1)            DOWN (-1)
    NONE              UP,   delta +1     DOWN, delta -1
    UP                NONE, delta -1     DOWN, delta -2
    DOWN              UP,   delta +2     NONE, delta +1

The delta is applied to the target's ``points`` with an in-database
increment, so votes from different voters never lose each other's updates.
Two near-simultaneous votes by the *same* voter on the *same* target can both
read the old state; the unique constraint on the vote ledger turns the
double first-vote case into a ConflictError instead of a duplicate row.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from linkboard.core.errors import ConflictError, NotFoundError, ValidationError
from linkboard.models.vote import TargetKind
from linkboard.repositories.scored_repo import ScoredEntityRepository
from linkboard.repositories.vote_repo import VoteRepository

logger = logging.getLogger(__name__)

VOTE_UP = 1
VOTE_DOWN = -1
VOTE_NONE = 0


@dataclass(frozen=True)
class VoteOutcome:
    """Target points after the vote and the voter's resulting direction."""

    points: int
    direction: int


def plan_transition(current: int, requested: int) -> tuple[int, int]:
    """Return ``(new_direction, points_delta)`` for a vote request.

    Repeating the current direction toggles the vote off.
    """
    if current == requested:
        return VOTE_NONE, -requested
    return requested, requested - current


def coerce_target_kind(target_kind: TargetKind | str) -> TargetKind:
    """Return ``target_kind`` as a TargetKind, raising ValidationError if unknown."""
    try:
        return TargetKind(target_kind)
    except ValueError as err:
        raise ValidationError("Target kind must be either 'post' or 'comment'") from err


def _require_id(value: object, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(f"Invalid {label} ID")
    return value


class ScoreService:
    """Owns vote records and the point totals they drive."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.votes = VoteRepository(db)
        self.scores = ScoredEntityRepository(db)

    def cast_vote(
        self,
        voter_id: int,
        target_id: int,
        target_kind: TargetKind | str,
        direction: int,
    ) -> VoteOutcome:
        """Apply one vote request and return the updated totals.

        Raises:
            ValidationError: Malformed id, unknown kind, or direction not +1/-1.
            NotFoundError: No target with that id (the vote change is rolled back).
            ConflictError: A concurrent vote by the same voter won the race.
        """
        _require_id(voter_id, "voter")
        _require_id(target_id, "target")
        kind = coerce_target_kind(target_kind)
        if isinstance(direction, bool) or direction not in (VOTE_UP, VOTE_DOWN):
            raise ValidationError("Direction must be either 1 (upvote) or -1 (downvote)")

        try:
            existing = self.votes.get(voter_id, kind, target_id)
            current = existing.direction if existing is not None else VOTE_NONE
            new_direction, delta = plan_transition(current, direction)

            if existing is None:
                self.votes.create(voter_id, kind, target_id, new_direction)
            elif new_direction == VOTE_NONE:
                self.votes.delete(existing)
            else:
                self.votes.set_direction(existing, new_direction)
        except IntegrityError as err:
            self.db.rollback()
            raise ConflictError("Vote already in progress for this target") from err

        points = self.scores.increment_points(kind, target_id, delta)
        if points is None:
            self.db.rollback()
            raise NotFoundError(f"{kind.value.capitalize()} not found")

        self.db.commit()
        logger.info(
            "User %s vote on %s %s: %d -> %d (points now %d)",
            voter_id,
            kind.value,
            target_id,
            current,
            new_direction,
            points,
        )
        return VoteOutcome(points=points, direction=new_direction)

    def get_user_vote(self, voter_id: int, target_id: int, target_kind: TargetKind | str) -> int:
        """Return 1, -1, or 0 when the voter has no stance on the target."""
        kind = coerce_target_kind(target_kind)
        record = self.votes.get(voter_id, kind, target_id)
        return record.direction if record is not None else VOTE_NONE
