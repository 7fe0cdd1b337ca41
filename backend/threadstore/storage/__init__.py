"""Content stores: the backend-neutral contract and its implementations."""

from .entities import Comment, Post
from .errors import (
    StoreError,
    NotFoundError,
    ItemNotFoundError,
    CommentingDisabledError,
    DuplicateIDError,
    BackendUnavailableError,
    InvalidPaginationError,
    OperationCancelledError,
)
from .base import ContentStore, paginate
from .memory import MemoryStore

__all__ = [
    "Comment",
    "Post",
    "StoreError",
    "NotFoundError",
    "ItemNotFoundError",
    "CommentingDisabledError",
    "DuplicateIDError",
    "BackendUnavailableError",
    "InvalidPaginationError",
    "OperationCancelledError",
    "ContentStore",
    "paginate",
    "MemoryStore",
]
