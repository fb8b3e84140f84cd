# src/linkboard/api/v1/endpoints/posts.py
"""Post-related endpoints for the Linkboard API."""

from typing import Literal

from fastapi import APIRouter, Query, status

from linkboard.api.v1.dependencies import CommentServiceDep, CurrentUserDep, SessionDep
from linkboard.models import Post
from linkboard.schemas.comment import CommentNodeResponse
from linkboard.schemas.post import PostCreate, PostPageResponse, PostResponse
from linkboard.services import post_service

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=PostResponse)
def create_post(payload: PostCreate, current_user: CurrentUserDep, db: SessionDep) -> Post:
    """Submit a link or text post."""
    return post_service.create_post(
        db,
        author_id=current_user.id,
        title=payload.title,
        url=payload.url,
        text=payload.text,
    )


@router.get("/", response_model=PostPageResponse)
def list_posts(
    db: SessionDep,
    sort: Literal["new", "top", "best"] = Query(
        "new", description="Sort by recency, points, or points decayed by age"
    ),
    page: int = Query(1, ge=1),
    limit: int = Query(25, ge=1, le=100, description="Maximum number of posts to return"),
    search: str | None = Query(None, max_length=300, description="Case-insensitive title filter"),
) -> PostPageResponse:
    """List posts, optionally filtered by a title search."""
    result = post_service.list_posts(db, sort=sort, page=page, limit=limit, search=search)
    return PostPageResponse.model_validate(result, from_attributes=True)


@router.get("/{post_id}", response_model=PostResponse)
def get_post(post_id: int, db: SessionDep) -> Post:
    return post_service.get_post(db, post_id)


@router.get("/{post_id}/comments", response_model=list[CommentNodeResponse])
def get_post_comments(post_id: int, comments: CommentServiceDep) -> list[CommentNodeResponse]:
    """Return the post's comments as a reply forest, tombstones included."""
    return [
        CommentNodeResponse.model_validate(node, from_attributes=True)
        for node in comments.get_thread(post_id)
    ]
