"""SQLAlchemy-backed content store (PostgreSQL in production, SQLite locally)."""

import logging
import uuid
from contextlib import contextmanager
from typing import Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError, IntegrityError, InterfaceError, OperationalError

from .base import ContentStore, page_bounds
from .entities import Comment, Post
from .errors import (
    BackendUnavailableError,
    CommentingDisabledError,
    DuplicateIDError,
    ItemNotFoundError,
    NotFoundError,
)
from ..models.base import create_engine_for_url, create_session_factory
from ..models.comment import CommentRecord
from ..models.database import SQLITE_BEGIN_OPTION, init_db, install_sqlite_pragmas
from ..models.post import PostRecord

logger = logging.getLogger(__name__)

# SQLite takes the write lock at BEGIN so a read-then-insert transaction
# never has to upgrade a shared lock; other dialects ignore the option
WRITE_TRANSACTION = {SQLITE_BEGIN_OPTION: "IMMEDIATE"}


class RelationalStore(ContentStore):
    """
    Content store over the ``post`` and ``comment`` tables.

    Every operation is a single parameterised query in its own session.
    LIMIT/OFFSET are only added when both bounds are given, and rows are
    ordered by id so pages are stable. Concurrency control is left to the
    database; comment creation resolves its target and inserts inside one
    transaction (on SQLite an explicit BEGIN IMMEDIATE).
    """

    name = "relational"

    def __init__(self, engine: Engine, create_tables: bool = True, owns_engine: bool = False):
        """
        Args:
            engine: Ready database handle
            create_tables: Create missing tables on startup
            owns_engine: Dispose of the engine on close()
        """
        self.engine = engine
        self._owns_engine = owns_engine
        self._session_factory = create_session_factory(engine)
        install_sqlite_pragmas(engine)
        if create_tables:
            with self._translate_errors("init"):
                init_db(engine)

    @classmethod
    def from_url(cls, database_url: str = None) -> "RelationalStore":
        """Create a store with its own engine for ``database_url``."""
        return cls(create_engine_for_url(database_url), owns_engine=True)

    def close(self) -> None:
        if self._owns_engine:
            self.engine.dispose()
            logger.info("Relational store engine disposed")

    @contextmanager
    def _translate_errors(self, operation: str, duplicate_id: Optional[str] = None):
        """Map driver errors onto the store error taxonomy."""
        try:
            yield
        except IntegrityError as e:
            if duplicate_id is not None:
                raise DuplicateIDError(
                    f"Post with ID {duplicate_id} already exists", item_id=duplicate_id
                ) from e
            raise
        except (OperationalError, InterfaceError) as e:
            logger.error(f"Database unavailable during {operation}: {e}")
            raise BackendUnavailableError(f"Database unavailable during {operation}") from e
        except DBAPIError as e:
            if e.connection_invalidated:
                logger.error(f"Database connection lost during {operation}: {e}")
                raise BackendUnavailableError(f"Database connection lost during {operation}") from e
            raise

    def _paged(self, stmt, limit: Optional[int], offset: Optional[int]):
        bounds = page_bounds(limit, offset)
        if bounds is not None:
            stmt = stmt.limit(bounds[0]).offset(bounds[1])
        return stmt

    # Posts

    def create_post(self, post_id: str, text: str, commentable: bool, author: str) -> Post:
        with self._translate_errors("create_post", duplicate_id=post_id):
            with self._session_factory() as session, session.begin():
                session.add(PostRecord(id=post_id, text=text, author=author, commentable=commentable))
        logger.info(f"Created post {post_id} by {author}")
        return Post(id=post_id, text=text, author=author, commentable=commentable)

    def get_post_by_id(self, post_id: str) -> Post:
        with self._translate_errors("get_post_by_id"):
            with self._session_factory() as session:
                record = session.get(PostRecord, post_id)
                if record is None:
                    raise NotFoundError(f"Post with ID {post_id} not found", item_id=post_id)
                return record.to_entity()

    def get_all_posts(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[Post]:
        stmt = self._paged(select(PostRecord).order_by(PostRecord.id), limit, offset)
        with self._translate_errors("get_all_posts"):
            with self._session_factory() as session:
                return [record.to_entity() for record in session.scalars(stmt)]

    # Comments

    def create_comment(self, text: str, item_id: str, author: str) -> Comment:
        comment_id = str(uuid.uuid4())
        with self._translate_errors("create_comment"):
            with self._session_factory() as session, session.begin():
                session.connection(execution_options=WRITE_TRANSACTION)
                post_row = session.execute(
                    select(PostRecord.commentable).where(PostRecord.id == item_id)
                ).first()

                if post_row is not None:
                    if not post_row.commentable:
                        raise CommentingDisabledError(
                            f"Author turned off comments under post {item_id}", item_id=item_id
                        )
                    post_id, parent_comment_id = item_id, None
                else:
                    post_id = session.execute(
                        select(CommentRecord.post_id).where(CommentRecord.id == item_id)
                    ).scalar_one_or_none()
                    if post_id is None:
                        raise ItemNotFoundError(f"Item with ID {item_id} not found", item_id=item_id)
                    parent_comment_id = item_id

                session.add(CommentRecord(
                    id=comment_id,
                    text=text,
                    author=author,
                    post_id=post_id,
                    parent_comment_id=parent_comment_id,
                ))

        logger.info(f"Created comment {comment_id} on {item_id} (post {post_id}) by {author}")
        return Comment(
            id=comment_id,
            text=text,
            author=author,
            post_id=post_id,
            parent_comment_id=parent_comment_id,
        )

    def get_comment_by_id(self, comment_id: str) -> Comment:
        with self._translate_errors("get_comment_by_id"):
            with self._session_factory() as session:
                record = session.get(CommentRecord, comment_id)
                if record is None:
                    raise NotFoundError(f"Comment with ID {comment_id} not found", item_id=comment_id)
                return record.to_entity()

    def get_all_comments(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[Comment]:
        return self._select_comments(select(CommentRecord), "get_all_comments", limit, offset)

    def get_comments_by_post_id(
        self,
        post_id: str,
        limit: Optional[int] = None,
        offset: Optional[int] = None
    ) -> List[Comment]:
        stmt = select(CommentRecord).where(
            CommentRecord.post_id == post_id,
            CommentRecord.parent_comment_id.is_(None)
        )
        return self._select_comments(stmt, "get_comments_by_post_id", limit, offset)

    def get_comments_by_parent_id(
        self,
        parent_id: str,
        limit: Optional[int] = None,
        offset: Optional[int] = None
    ) -> List[Comment]:
        stmt = select(CommentRecord).where(CommentRecord.parent_comment_id == parent_id)
        return self._select_comments(stmt, "get_comments_by_parent_id", limit, offset)

    def _select_comments(self, stmt, operation: str, limit: Optional[int], offset: Optional[int]) -> List[Comment]:
        stmt = self._paged(stmt.order_by(CommentRecord.id), limit, offset)
        with self._translate_errors(operation):
            with self._session_factory() as session:
                comments = [record.to_entity() for record in session.scalars(stmt)]
        logger.debug(f"{operation}: {len(comments)} rows (limit={limit}, offset={offset})")
        return comments

    # Introspection

    def stats(self) -> Dict[str, int]:
        with self._translate_errors("stats"):
            with self._session_factory() as session:
                return {
                    "posts": session.scalar(select(func.count()).select_from(PostRecord)) or 0,
                    "comments": session.scalar(select(func.count()).select_from(CommentRecord)) or 0,
                }
