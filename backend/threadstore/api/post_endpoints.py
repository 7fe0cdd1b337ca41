"""Post-related API endpoints."""

import logging
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, status

from .dependencies import get_thread_service, run_cancellable
from .models import ErrorResponse, PostCreateRequest, PostResponse
from .serializers import TreeResponse, encode_post, encode_posts
from ..services.thread_service import ThreadService

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/posts", tags=["posts"])


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}}
)
def create_post(
    request: PostCreateRequest,
    service: ThreadService = Depends(get_thread_service)
) -> PostResponse:
    """
    Create a new post.

    The post id is generated here; the storage engine only generates
    comment ids.
    """
    post_id = str(uuid.uuid4())
    logger.info(f"Creating post {post_id} by {request.author} (commentable={request.commentable})")

    post = service.create_post(post_id, request.text, request.commentable, request.author)
    return PostResponse.model_validate(post)


@router.get("", response_model=List[PostResponse], response_class=TreeResponse)
async def list_posts(
    request: Request,
    limit: Optional[int] = Query(None, ge=0, description="Page size, applies to every tree level"),
    offset: Optional[int] = Query(None, ge=0, description="Items to skip, applies to every tree level"),
    service: ThreadService = Depends(get_thread_service)
) -> TreeResponse:
    """
    Get posts with their comment trees.

    Pagination applies only when both limit and offset are given.
    """
    posts = await run_cancellable(request, service.get_posts, limit, offset)
    return TreeResponse(encode_posts(posts))


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    response_class=TreeResponse,
    responses={404: {"model": ErrorResponse}}
)
async def get_post(
    request: Request,
    post_id: str,
    limit: Optional[int] = Query(None, ge=0),
    offset: Optional[int] = Query(None, ge=0),
    service: ThreadService = Depends(get_thread_service)
) -> TreeResponse:
    """Get one post with its comment tree; stops early if the client disconnects."""
    post = await run_cancellable(request, service.get_post, post_id, limit, offset)
    return TreeResponse(encode_post(post))
