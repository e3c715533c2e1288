# src/kukey_core/api/v1/endpoints/comments.py
"""Comment endpoints."""

from fastapi import APIRouter, Query, status

from kukey_core.schemas.comment import (
    CommentCreate,
    CommentResponse,
    CommentUpdate,
    LikeCommentResponse,
)
from kukey_core.schemas.common import ERROR_RESPONSES
from kukey_core.services.comment_service import CommentService, CommentView

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/comment", tags=["comment"], responses=ERROR_RESPONSES)


def _to_response(view: CommentView, viewer_id: int) -> CommentResponse:
    comment = view.comment
    return CommentResponse(
        id=comment.id,
        post_id=comment.post_id,
        user_id=None if comment.is_anonymous else comment.user_id,
        parent_comment_id=comment.parent_comment_id,
        content=comment.content,
        is_anonymous=comment.is_anonymous,
        anonymous_number=view.anonymous_number,
        like_count=comment.like_count,
        is_mine=comment.user_id == viewer_id,
        created_at=comment.created_at,
    )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CommentResponse)
async def create_comment(
    body: CommentCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
    post_id: int = Query(...),
    parent_comment_id: int | None = Query(None),
) -> CommentResponse:
    """Create a comment; anonymous comments carry the author's per-post number."""
    view = CommentService(db).create_comment(
        current_user.id,
        post_id,
        body.content,
        body.is_anonymous,
        parent_comment_id,
    )
    return _to_response(view, current_user.id)


@router.patch("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: int,
    body: CommentUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> CommentResponse:
    view = CommentService(db).update_comment(
        current_user.id, comment_id, body.content, body.is_anonymous
    )
    return _to_response(view, current_user.id)


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> None:
    CommentService(db).delete_comment(current_user.id, comment_id)


@router.post("/like/{comment_id}", response_model=LikeCommentResponse)
async def like_comment(
    comment_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> LikeCommentResponse:
    """Toggle the caller's like; liking your own comment is forbidden."""
    is_liked = CommentService(db).toggle_like(current_user.id, comment_id)
    return LikeCommentResponse(is_liked=is_liked)
