"""Comment-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class CommentCreate(BaseModel):
    """Schema for creating a comment or reply."""

    content: str = Field(..., min_length=1, max_length=2000)
    is_anonymous: bool = False


class CommentUpdate(BaseModel):
    content: str = Field(..., min_length=1, max_length=2000)
    is_anonymous: bool = False


class CommentResponse(BaseModel):
    """Comment as seen by the requesting user.

    Anonymous comments hide the author id; `anonymous_number` is 0 for the
    post author and 1..N for other participants.
    """

    id: int
    post_id: int
    user_id: int | None
    parent_comment_id: int | None
    content: str
    is_anonymous: bool
    anonymous_number: int | None
    like_count: int
    is_mine: bool
    created_at: datetime


class LikeCommentResponse(BaseModel):
    is_liked: bool
