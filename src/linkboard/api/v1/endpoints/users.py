# src/linkboard/api/v1/endpoints/users.py
"""Public user profile endpoints."""

from fastapi import APIRouter, Query

from linkboard.api.v1.dependencies import SessionDep
from linkboard.schemas.user import UserProfileResponse
from linkboard.services import user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{username}", response_model=UserProfileResponse)
def get_user_profile(
    username: str,
    db: SessionDep,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
) -> UserProfileResponse:
    """Return a user's public details with their posts and live comments."""
    profile = user_service.get_profile(db, username, page=page, limit=limit)
    return UserProfileResponse.model_validate(profile, from_attributes=True)
