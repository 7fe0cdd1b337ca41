"""
Thread Service

Builds nested post/comment trees on read from flat rows in a content store.
"""

import logging
import threading
from typing import List, Optional

from ..storage.base import ContentStore
from ..storage.entities import Comment, Post
from ..storage.errors import OperationCancelledError

logger = logging.getLogger(__name__)


class ThreadService:
    """
    Entry points for reading and writing threaded content.

    Comments are stored flat with parent pointers; the nested tree is
    rebuilt on every read by expanding one level at a time, with one store
    call per node. The same limit/offset apply at every level, so a page of
    10 yields at most 10 top-level comments and at most 10 replies under
    each of them, all the way down.

    Any store error aborts the whole assembly and is raised unchanged.
    Read methods accept an optional ``threading.Event``; once it is set the
    next store call is skipped and ``OperationCancelledError`` is raised.
    """

    def __init__(self, store: ContentStore):
        self.store = store

    # Writes

    def create_post(self, post_id: str, text: str, commentable: bool, author: str) -> Post:
        """Create a post under a caller-generated id."""
        return self.store.create_post(post_id, text, commentable, author)

    def create_comment(self, text: str, item_id: str, author: str) -> Comment:
        """Comment on a post, or reply to a comment."""
        return self.store.create_comment(text, item_id, author)

    # Reads

    def get_post(
        self,
        post_id: str,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        cancel: Optional[threading.Event] = None
    ) -> Post:
        """Fetch one post with its comment tree."""
        _check_cancelled(cancel)
        post = self.store.get_post_by_id(post_id)
        self._attach_comments(post, limit, offset, cancel)
        return post

    def get_posts(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        cancel: Optional[threading.Event] = None
    ) -> List[Post]:
        """Fetch a page of posts, each with its comment tree."""
        _check_cancelled(cancel)
        posts = self.store.get_all_posts(limit, offset)
        for post in posts:
            self._attach_comments(post, limit, offset, cancel)
        logger.debug(f"Assembled {len(posts)} post trees (limit={limit}, offset={offset})")
        return posts

    def get_comment(
        self,
        comment_id: str,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        cancel: Optional[threading.Event] = None
    ) -> Comment:
        """Fetch one comment with its reply tree."""
        _check_cancelled(cancel)
        comment = self.store.get_comment_by_id(comment_id)
        self._expand_replies([comment], limit, offset, cancel)
        return comment

    def get_comments(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        cancel: Optional[threading.Event] = None
    ) -> List[Comment]:
        """Fetch a page of all comments, each with its reply tree."""
        _check_cancelled(cancel)
        comments = self.store.get_all_comments(limit, offset)
        self._expand_replies(comments, limit, offset, cancel)
        return comments

    # Assembly

    def _attach_comments(
        self,
        post: Post,
        limit: Optional[int],
        offset: Optional[int],
        cancel: Optional[threading.Event]
    ) -> None:
        _check_cancelled(cancel)
        post.comments = self.store.get_comments_by_post_id(post.id, limit, offset)
        self._expand_replies(post.comments, limit, offset, cancel)

    def _expand_replies(
        self,
        level: List[Comment],
        limit: Optional[int],
        offset: Optional[int],
        cancel: Optional[threading.Event]
    ) -> None:
        """Attach replies level by level until a level comes back empty."""
        depth = 0
        while level:
            next_level: List[Comment] = []
            for comment in level:
                _check_cancelled(cancel)
                comment.replies = self.store.get_comments_by_parent_id(comment.id, limit, offset)
                next_level.extend(comment.replies)
            level = next_level
            depth += 1
        if depth > 1:
            logger.debug(f"Expanded reply tree to depth {depth - 1}")


def _check_cancelled(cancel: Optional[threading.Event]) -> None:
    if cancel is not None and cancel.is_set():
        raise OperationCancelledError("Operation cancelled by caller")
