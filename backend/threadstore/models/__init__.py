"""SQLAlchemy models for the post and comment tables."""

from .base import Base, create_engine_for_url, create_session_factory
from .post import PostRecord
from .comment import CommentRecord

__all__ = ["Base", "create_engine_for_url", "create_session_factory", "PostRecord", "CommentRecord"]
