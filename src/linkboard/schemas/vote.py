"""Vote-related Pydantic schemas."""

from typing import Literal

from pydantic import BaseModel, Field


class VoteCreate(BaseModel):
    """Schema for casting a vote."""

    target_id: int = Field(..., gt=0)
    target_kind: Literal["post", "comment"] = Field("post", description="Entity being voted on")
    direction: Literal[-1, 1] = Field(..., description="1 for upvote, -1 for downvote")


class VoteResponse(BaseModel):
    """Target points after the vote and the caller's resulting direction."""

    points: int
    direction: int = Field(..., description="1, -1, or 0 when the vote was toggled off")


class MyVoteResponse(BaseModel):
    direction: int
