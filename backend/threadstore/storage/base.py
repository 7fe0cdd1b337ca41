"""Content store contract shared by the volatile and relational backends."""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Tuple, TypeVar

from .entities import Comment, Post
from .errors import InvalidPaginationError

T = TypeVar("T")


def page_bounds(limit: Optional[int], offset: Optional[int]) -> Optional[Tuple[int, int]]:
    """
    Validate pagination bounds.

    Pagination only applies when both bounds are given; if either one is
    None the caller gets the whole result set.

    Args:
        limit: Maximum number of items, or None
        offset: Number of items to skip, or None

    Returns:
        (limit, offset) when pagination applies, None otherwise

    Raises:
        InvalidPaginationError: if a given bound is negative
    """
    if limit is not None and limit < 0:
        raise InvalidPaginationError(f"limit must be >= 0, got {limit}")
    if offset is not None and offset < 0:
        raise InvalidPaginationError(f"offset must be >= 0, got {offset}")
    if limit is None or offset is None:
        return None
    return limit, offset


def paginate(items: Sequence[T], limit: Optional[int], offset: Optional[int]) -> List[T]:
    """Slice ``items`` to ``[offset, offset + limit)``, clamped to its length."""
    bounds = page_bounds(limit, offset)
    if bounds is None:
        return list(items)
    limit, offset = bounds
    if offset >= len(items):
        return []
    return list(items[offset:min(offset + limit, len(items))])


class ContentStore(ABC):
    """
    Backend-neutral contract for persisting and querying posts and comments.

    Every list operation returns an empty list when nothing matches and is
    ordered by id. Returned entities are copies: attaching comments or
    replies to them never touches stored state.
    """

    name = "abstract"

    @abstractmethod
    def create_post(self, post_id: str, text: str, commentable: bool, author: str) -> Post:
        """
        Insert a new post under a caller-supplied id.

        Raises:
            DuplicateIDError: if the id is already taken
        """

    @abstractmethod
    def get_post_by_id(self, post_id: str) -> Post:
        """
        Raises:
            NotFoundError: if no post has this id
        """

    @abstractmethod
    def get_all_posts(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[Post]:
        """Return posts, paginated when both bounds are given."""

    @abstractmethod
    def create_comment(self, text: str, item_id: str, author: str) -> Comment:
        """
        Create a comment on a post or a reply to a comment.

        ``item_id`` is resolved as a post first, then as a comment. A reply
        inherits its parent's ``post_id``. The new comment gets a fresh id.

        Raises:
            CommentingDisabledError: if ``item_id`` is a non-commentable post
            ItemNotFoundError: if ``item_id`` is neither a post nor a comment
        """

    @abstractmethod
    def get_comment_by_id(self, comment_id: str) -> Comment:
        """
        Raises:
            NotFoundError: if no comment has this id
        """

    @abstractmethod
    def get_all_comments(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[Comment]:
        """Return every comment across all posts, replies included."""

    @abstractmethod
    def get_comments_by_post_id(
        self,
        post_id: str,
        limit: Optional[int] = None,
        offset: Optional[int] = None
    ) -> List[Comment]:
        """Return the top-level comments of a post (replies excluded)."""

    @abstractmethod
    def get_comments_by_parent_id(
        self,
        parent_id: str,
        limit: Optional[int] = None,
        offset: Optional[int] = None
    ) -> List[Comment]:
        """Return the direct replies to a comment."""

    @abstractmethod
    def stats(self) -> Dict[str, int]:
        """Number of stored posts and comments."""

    def close(self) -> None:
        """Release backend resources."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
