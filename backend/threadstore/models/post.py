"""Post table."""

from sqlalchemy import Boolean, Column, String, Text

from .base import Base
from ..storage.entities import Post


class PostRecord(Base):
    """Row of the ``post`` table."""

    __tablename__ = "post"

    # Primary key, supplied by the caller
    id = Column(String(255), primary_key=True)

    # Content
    text = Column(Text, nullable=False)

    # Author information
    author = Column(String(255), nullable=False)

    # Set once at creation
    commentable = Column(Boolean, nullable=False, default=True)

    def to_entity(self) -> Post:
        return Post(id=self.id, text=self.text, author=self.author, commentable=bool(self.commentable))

    def __repr__(self):
        return f"<PostRecord(id={self.id}, author={self.author}, commentable={self.commentable})>"
