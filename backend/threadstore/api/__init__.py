"""FastAPI API endpoints for the threaded posts service."""

from .models import (
    PostCreateRequest,
    CommentCreateRequest,
    PostResponse,
    CommentResponse,
    ErrorResponse
)

__all__ = [
    "PostCreateRequest",
    "CommentCreateRequest",
    "PostResponse",
    "CommentResponse",
    "ErrorResponse"
]
