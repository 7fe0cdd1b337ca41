"""In-process content store for development and tests."""

import logging
import uuid
from typing import Callable, Dict, List, Optional

from .base import ContentStore, paginate
from .entities import Comment, Post
from .errors import (
    CommentingDisabledError,
    DuplicateIDError,
    ItemNotFoundError,
    NotFoundError,
)
from ..utils.rwlock import ReadWriteLock

logger = logging.getLogger(__name__)


class MemoryStore(ContentStore):
    """
    Volatile implementation of the content store.

    Posts and comments live in two dicts guarded by a single reader/writer
    lock. Reads share the lock, creates hold it exclusively, so readers never
    see a half-written entity. Filtering and pagination are linear scans,
    which is fine at development scale. Everything is lost on process exit.
    """

    name = "memory"

    def __init__(self):
        self._posts: Dict[str, Post] = {}
        self._comments: Dict[str, Comment] = {}
        self._lock = ReadWriteLock()

    # Posts

    def create_post(self, post_id: str, text: str, commentable: bool, author: str) -> Post:
        with self._lock.write_locked():
            if post_id in self._posts:
                raise DuplicateIDError(f"Post with ID {post_id} already exists", item_id=post_id)
            post = Post(id=post_id, text=text, author=author, commentable=commentable)
            self._posts[post_id] = post
        logger.info(f"Created post {post_id} by {author}")
        return post.detached()

    def get_post_by_id(self, post_id: str) -> Post:
        with self._lock.read_locked():
            post = self._posts.get(post_id)
            if post is None:
                raise NotFoundError(f"Post with ID {post_id} not found", item_id=post_id)
            return post.detached()

    def get_all_posts(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[Post]:
        with self._lock.read_locked():
            posts = sorted(self._posts.values(), key=lambda p: p.id)
            return [p.detached() for p in paginate(posts, limit, offset)]

    # Comments

    def create_comment(self, text: str, item_id: str, author: str) -> Comment:
        with self._lock.write_locked():
            post = self._posts.get(item_id)
            if post is not None:
                if not post.commentable:
                    raise CommentingDisabledError(
                        f"Author turned off comments under post {item_id}", item_id=item_id
                    )
                post_id, parent_comment_id = item_id, None
            elif item_id in self._comments:
                post_id, parent_comment_id = self._comments[item_id].post_id, item_id
            else:
                raise ItemNotFoundError(f"Item with ID {item_id} not found", item_id=item_id)

            comment = Comment(
                id=str(uuid.uuid4()),
                text=text,
                author=author,
                post_id=post_id,
                parent_comment_id=parent_comment_id,
            )
            self._comments[comment.id] = comment

        logger.info(f"Created comment {comment.id} on {item_id} (post {post_id}) by {author}")
        return comment.detached()

    def get_comment_by_id(self, comment_id: str) -> Comment:
        with self._lock.read_locked():
            comment = self._comments.get(comment_id)
            if comment is None:
                raise NotFoundError(f"Comment with ID {comment_id} not found", item_id=comment_id)
            return comment.detached()

    def get_all_comments(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[Comment]:
        return self._select_comments(lambda c: True, limit, offset)

    def get_comments_by_post_id(
        self,
        post_id: str,
        limit: Optional[int] = None,
        offset: Optional[int] = None
    ) -> List[Comment]:
        return self._select_comments(
            lambda c: c.post_id == post_id and not c.is_reply, limit, offset
        )

    def get_comments_by_parent_id(
        self,
        parent_id: str,
        limit: Optional[int] = None,
        offset: Optional[int] = None
    ) -> List[Comment]:
        return self._select_comments(lambda c: c.parent_comment_id == parent_id, limit, offset)

    def _select_comments(
        self,
        predicate: Callable[[Comment], bool],
        limit: Optional[int],
        offset: Optional[int]
    ) -> List[Comment]:
        """Scan comments under the read lock, then sort by id and paginate."""
        with self._lock.read_locked():
            matched = sorted(
                (c for c in self._comments.values() if predicate(c)),
                key=lambda c: c.id
            )
            return [c.detached() for c in paginate(matched, limit, offset)]

    # Introspection

    def stats(self) -> Dict[str, int]:
        with self._lock.read_locked():
            return {"posts": len(self._posts), "comments": len(self._comments)}
