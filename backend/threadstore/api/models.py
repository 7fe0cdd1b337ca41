"""Pydantic models for API request/response schemas."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PostCreateRequest(BaseModel):
    """Request model for creating a post."""

    text: str = Field(
        ...,
        min_length=1,
        description="Post text"
    )
    author: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Opaque author identity"
    )
    commentable: bool = Field(
        default=True,
        description="Whether other users may comment on this post"
    )


class CommentCreateRequest(BaseModel):
    """Request model for creating a comment or a reply."""

    text: str = Field(
        ...,
        min_length=1,
        max_length=2000,
        description="Comment text"
    )
    item_id: str = Field(
        ...,
        min_length=1,
        description="ID of the post to comment on, or of the comment to reply to"
    )
    author: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Opaque author identity"
    )


class CommentResponse(BaseModel):
    """A comment with its (paginated) reply tree."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    text: str
    author: str
    post_id: str = Field(
        ...,
        description="Root post of the thread"
    )
    parent_comment_id: Optional[str] = Field(
        default=None,
        description="Direct parent comment, None for top-level comments"
    )
    replies: List["CommentResponse"] = Field(default_factory=list)


class PostResponse(BaseModel):
    """A post with its (paginated) comment tree."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    text: str
    author: str
    commentable: bool
    comments: List[CommentResponse] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Error response body."""

    error: str = Field(
        ...,
        description="Error type"
    )
    message: str = Field(
        ...,
        description="Human-readable error message"
    )
    request_id: Optional[str] = Field(
        default=None,
        description="Request ID for tracking"
    )


CommentResponse.model_rebuild()
