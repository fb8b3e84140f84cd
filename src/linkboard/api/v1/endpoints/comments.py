# src/linkboard/api/v1/endpoints/comments.py
"""Comment endpoints for the Linkboard API."""

from fastapi import APIRouter, Response, status

from linkboard.api.v1.dependencies import CommentServiceDep, CurrentUserDep
from linkboard.models import Comment
from linkboard.schemas.comment import CommentCreate, CommentResponse, CommentUpdate

router = APIRouter(prefix="/comments", tags=["comments"])


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=CommentResponse)
def create_comment(
    payload: CommentCreate,
    current_user: CurrentUserDep,
    comments: CommentServiceDep,
) -> Comment:
    """Comment on a post, or reply to a comment when ``parent_id`` is set."""
    return comments.create_comment(
        post_id=payload.post_id,
        author_id=current_user.id,
        content=payload.content,
        parent_id=payload.parent_id,
    )


@router.patch("/{comment_id}", response_model=CommentResponse)
def edit_comment(
    comment_id: int,
    payload: CommentUpdate,
    current_user: CurrentUserDep,
    comments: CommentServiceDep,
) -> Comment:
    return comments.edit_comment(comment_id, current_user.id, payload.content)


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(
    comment_id: int,
    current_user: CurrentUserDep,
    comments: CommentServiceDep,
) -> Response:
    comments.delete_comment(comment_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
