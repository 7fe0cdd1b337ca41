"""Comment-related API endpoints."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, status

from .dependencies import get_thread_service, run_cancellable
from .models import CommentCreateRequest, CommentResponse, ErrorResponse
from .serializers import TreeResponse, encode_comment, encode_comments
from ..services.thread_service import ThreadService

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/comments", tags=["comments"])


@router.post(
    "",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}
)
def create_comment(
    request: CommentCreateRequest,
    service: ThreadService = Depends(get_thread_service)
) -> CommentResponse:
    """
    Comment on a post or reply to a comment.

    Args:
        request: Comment creation request; item_id is a post or comment id
        service: Thread service

    Returns:
        Created comment
    """
    logger.info(f"Creating comment on {request.item_id} by {request.author}")

    comment = service.create_comment(request.text, request.item_id, request.author)
    return CommentResponse.model_validate(comment)


@router.get("", response_model=List[CommentResponse], response_class=TreeResponse)
async def list_comments(
    request: Request,
    limit: Optional[int] = Query(None, ge=0),
    offset: Optional[int] = Query(None, ge=0),
    service: ThreadService = Depends(get_thread_service)
) -> TreeResponse:
    """Get all comments, each with its reply tree."""
    comments = await run_cancellable(request, service.get_comments, limit, offset)
    return TreeResponse(encode_comments(comments))


@router.get(
    "/{comment_id}",
    response_model=CommentResponse,
    response_class=TreeResponse,
    responses={404: {"model": ErrorResponse}}
)
async def get_comment(
    request: Request,
    comment_id: str,
    limit: Optional[int] = Query(None, ge=0),
    offset: Optional[int] = Query(None, ge=0),
    service: ThreadService = Depends(get_thread_service)
) -> TreeResponse:
    """Get one comment with its reply tree."""
    comment = await run_cancellable(request, service.get_comment, comment_id, limit, offset)
    return TreeResponse(encode_comment(comment))
