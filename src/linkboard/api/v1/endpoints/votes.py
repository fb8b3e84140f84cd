# src/linkboard/api/v1/endpoints/votes.py
"""Vote-related endpoints for the Linkboard API."""

from typing import Literal

from fastapi import APIRouter, status

from linkboard.api.v1.dependencies import CurrentUserDep, ScoreServiceDep
from linkboard.schemas.vote import MyVoteResponse, VoteCreate, VoteResponse

router = APIRouter(prefix="/votes", tags=["votes"])


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=VoteResponse)
def cast_vote(
    vote_data: VoteCreate,
    current_user: CurrentUserDep,
    scores: ScoreServiceDep,
) -> VoteResponse:
    """Cast, flip or toggle off a vote on a post or comment."""
    outcome = scores.cast_vote(
        current_user.id,
        vote_data.target_id,
        vote_data.target_kind,
        vote_data.direction,
    )
    return VoteResponse(points=outcome.points, direction=outcome.direction)


@router.get("/{target_kind}/{target_id}/my-vote", response_model=MyVoteResponse)
def get_my_vote(
    target_kind: Literal["post", "comment"],
    target_id: int,
    current_user: CurrentUserDep,
    scores: ScoreServiceDep,
) -> MyVoteResponse:
    """Get current user's vote on a specific target."""
    return MyVoteResponse(direction=scores.get_user_vote(current_user.id, target_id, target_kind))
